"""
Plugin-specific command path handlers for cmdsig.

Each handler module exports:
- COMMANDS: list[str] - root command words this handler owns
- classify(ctx: HandlerContext) -> CommandPath - command words to report
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional, Protocol

from cmdsig.core.flags import EMPTY, FlagLookup, FlagRegistry, ScopedFlags
from cmdsig.core import parser  # qualified: cli.scan is a handler module
from cmdsig.core.parser import Scan
from cmdsig.core.vocabulary import DEFAULT, Vocabulary


@dataclass(frozen=True)
class HandlerContext:
    """Context passed to handlers."""

    command: str
    """The root command word, e.g. "login"."""

    tokens: tuple[str, ...]
    """Unscanned tokens after the root command word."""

    flags: FlagLookup
    vocabulary: Vocabulary = field(default=DEFAULT)

    def scan(self, local: FlagRegistry = EMPTY) -> Scan:
        """Scan the remaining tokens with the handler's local flags in scope."""
        return parser.scan(self.tokens, ScopedFlags(self.flags, local))


@dataclass(frozen=True)
class CommandPath:
    """Command words to report, and why the path ended where it did."""

    words: tuple[str, ...] = ()
    reason: str | None = None

    @property
    def signature(self) -> str:
        return " ".join(self.words)

    def __bool__(self) -> bool:
        return bool(self.words)


class CLIHandler(Protocol):
    """Protocol for handler modules."""

    def classify(self, ctx: HandlerContext) -> CommandPath:
        ...


def stopped(words: tuple[str, ...], result: Scan) -> CommandPath:
    """Path for a scan that ran out of trusted positionals."""
    if not result.trusted:
        return CommandPath(words, f"unknown flag {result.flag}")
    return CommandPath(words)


def management_path(ctx: HandlerContext, local: FlagRegistry = EMPTY) -> CommandPath:
    """Management noun plus its action when the next positional is a known one."""
    noun = ctx.command
    result = parser.scan(ctx.tokens, ScopedFlags(ctx.flags, local), limit=1)
    if result.positionals and result.positionals[0] in ctx.vocabulary.actions(noun):
        return CommandPath((noun, result.positionals[0]))
    return stopped((noun,), result)


def _discover_handlers() -> dict[str, str]:
    """Discover handler modules and build command -> module mapping."""
    handlers = {}
    cli_dir = Path(__file__).parent
    for file in cli_dir.glob("*.py"):
        if file.name.startswith("_"):
            continue
        module_name = file.stem
        module = importlib.import_module(f".{module_name}", package="cmdsig.cli")
        for cmd in getattr(module, "COMMANDS", []):
            handlers[cmd] = module_name
    return handlers


# Build handler mapping at import time
KNOWN_HANDLERS = _discover_handlers()


def get_handler(command_name: str) -> Optional[CLIHandler]:
    """
    Get the handler module for a root command.

    Returns None if no handler exists for the command.
    """
    module_name = KNOWN_HANDLERS.get(command_name)
    if not module_name:
        return None

    return _load_handler(module_name)


@lru_cache(maxsize=32)
def _load_handler(module_name: str) -> CLIHandler:
    """Load a handler module by name (cached within process)."""
    return importlib.import_module(f".{module_name}", package="cmdsig.cli")

"""
Argument vector scanning for cmdsig.

Separates flags (and the values they consume) from positional tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from cmdsig.core.flags import FlagLookup

TERMINATOR = "--"

TokenKind = Literal["terminator", "long-flag", "short-flag", "positional"]
StopReason = Literal["end", "terminator", "unknown-flag", "limit"]


def token_kind(token: str) -> TokenKind:
    """Classify a single argv token by its shape."""
    if token == TERMINATOR:
        return "terminator"
    if token.startswith("--"):
        return "long-flag"
    # -5 and -1.5 are values, a lone - is stdin
    if len(token) >= 2 and token[0] == "-" and token[1].isalpha():
        return "short-flag"
    return "positional"


@dataclass(frozen=True)
class Scan:
    """Result of scanning an argument vector."""

    positionals: tuple[str, ...]
    stop: StopReason = "end"
    flag: str | None = None  # offending token when stop == "unknown-flag"
    rest: tuple[str, ...] = ()  # unscanned tokens when stop == "limit"

    @property
    def trusted(self) -> bool:
        """False when an unknown flag cut the scan short."""
        return self.stop != "unknown-flag"


def flag_width(token: str, flags: FlagLookup) -> int | None:
    """Number of tokens a flag occupies (1 or 2). None if the flag is unknown."""
    if token_kind(token) == "long-flag":
        if not flags.is_known(token):
            return None
        if flags.takes_value(token) and "=" not in token:
            return 2
        return 1

    # -x, -xVALUE, -x=VALUE and grouped booleans like -qa
    for i in range(1, len(token)):
        if i > 1 and token[i] == "=":
            return 1
        spelling = "-" + token[i]
        if not flags.is_known(spelling):
            return None
        if flags.takes_value(spelling):
            return 2 if i == len(token) - 1 else 1
    return 1


def scan(
    tokens: list[str] | tuple[str, ...], flags: FlagLookup, limit: int | None = None
) -> Scan:
    """Collect positional tokens, skipping known flags and their values.

    Stops at "--", at the first unknown flag, or after `limit` positionals
    (the remaining tokens are returned unscanned in Scan.rest).
    """
    positionals: list[str] = []
    i = 0
    while i < len(tokens):
        if limit is not None and len(positionals) >= limit:
            return Scan(tuple(positionals), "limit", rest=tuple(tokens[i:]))

        token = tokens[i]
        kind = token_kind(token)

        if kind == "terminator":
            return Scan(tuple(positionals), "terminator")

        if kind == "positional":
            positionals.append(token)
            i += 1
            continue

        width = flag_width(token, flags)
        if width is None:
            return Scan(tuple(positionals), "unknown-flag", flag=token)
        i += width

    return Scan(tuple(positionals))


def first_flag(tokens: list[str] | tuple[str, ...]) -> str | None:
    """Return the first flag-shaped token before any "--"."""
    for token in tokens:
        kind = token_kind(token)
        if kind == "terminator":
            return None
        if kind != "positional":
            return token
    return None

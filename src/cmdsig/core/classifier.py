"""
Command classifier for cmdsig.

Turns an argument vector into the command words that are safe to report.
Never raises. Anything that cannot be classified with confidence reports
as the empty path.
"""

from __future__ import annotations

from cmdsig.cli import CommandPath, HandlerContext, get_handler, management_path
from cmdsig.core.flags import FlagLookup
from cmdsig.core.parser import scan
from cmdsig.core.vocabulary import DEFAULT, Vocabulary


def analyze(
    args: list[str] | tuple[str, ...],
    flags: FlagLookup,
    vocabulary: Vocabulary = DEFAULT,
) -> CommandPath:
    """
    Classify an argument vector (program name excluded).

    Host flags are skipped up to the root command word. The word picks a
    handler from cmdsig.cli; without one, the management rule or the plain
    command rule applies.
    """
    head = scan(args, flags, limit=1)
    if not head.positionals:
        if head.stop == "unknown-flag":
            return CommandPath(reason=f"unknown flag {head.flag}")
        if head.stop == "terminator":
            return CommandPath(reason="terminator before command")
        return CommandPath(reason="no command")

    command = head.positionals[0]
    ctx = HandlerContext(command, head.rest, flags, vocabulary)

    handler = get_handler(command)
    if handler is not None:
        return handler.classify(ctx)

    if command in vocabulary.management:
        return management_path(ctx)
    if command in vocabulary.commands:
        return CommandPath((command,))
    return CommandPath(reason="unknown command")

"""
Handler for the bare create command.

Everything after "create" is a container name or an image reference, so the
path never grows past the command itself.
"""

from __future__ import annotations

from cmdsig.cli import CommandPath, HandlerContext

COMMANDS = ["create"]


def classify(ctx: HandlerContext) -> CommandPath:
    """Classify create command."""
    return CommandPath(("create",))

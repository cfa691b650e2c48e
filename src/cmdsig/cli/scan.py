"""
Handler for the scan plugin.

The scanned image and --file target are user data, so "scan" never grows
from positionals. The only extensions are the --auth and --version modes.

A bare "auth" or "version" right after scan is reported as the mode even
when it names an image, so "scan version" reads back as itself. Both words
come from MODES, never from user input, so nothing leaks.
"""

from __future__ import annotations

from cmdsig.cli import CommandPath, HandlerContext
from cmdsig.core.parser import first_flag

COMMANDS = ["scan"]

# Flag markers that switch scan into another mode
MODES = {
    "--auth": "auth",
    "--version": "version",
}


def classify(ctx: HandlerContext) -> CommandPath:
    """Classify scan command."""
    # "scan auth" is how a reported signature reads back
    if ctx.tokens and ctx.tokens[0] in MODES.values():
        return CommandPath(("scan", ctx.tokens[0]))

    flag = first_flag(ctx.tokens)
    if flag in MODES:
        return CommandPath(("scan", MODES[flag]))
    return CommandPath(("scan",))

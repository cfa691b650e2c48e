"""
Handler for the ECS plugin.

Reports "ecs setup" and "ecs compose <action>". Compose flags may sit on
either side of the action, so the action is the first positional that is
a known compose action rather than the first positional.
"""

from __future__ import annotations

from cmdsig.cli import CommandPath, HandlerContext, stopped
from cmdsig.core.flags import Flag, FlagRegistry, ScopedFlags
from cmdsig.core.parser import scan

COMMANDS = ["ecs"]

SUBCOMMANDS = frozenset({"compose", "setup"})

COMPOSE_ACTIONS = frozenset({"convert", "down", "logs", "ps", "up"})

ECS_FLAGS = FlagRegistry.of(
    Flag("profile", takes_value=True),
    Flag("region", takes_value=True),
    Flag("cluster", takes_value=True),
)

COMPOSE_FLAGS = ECS_FLAGS.merged(
    FlagRegistry.of(
        Flag("file", "f", takes_value=True),
        Flag("project-name", "n", takes_value=True),
        Flag("project-directory", takes_value=True),
        Flag("workdir", "w", takes_value=True),
        Flag("env-file", takes_value=True),
        Flag("env", "e", takes_value=True),
    )
)


def classify(ctx: HandlerContext) -> CommandPath:
    """Classify ecs command."""
    head = scan(ctx.tokens, ScopedFlags(ctx.flags, ECS_FLAGS), limit=1)
    if not head.positionals:
        return stopped(("ecs",), head)

    sub = head.positionals[0]
    if sub not in SUBCOMMANDS:
        return CommandPath(("ecs",), "unknown ecs command")
    if sub == "setup":
        return CommandPath(("ecs", "setup"))

    result = scan(head.rest, ScopedFlags(ctx.flags, COMPOSE_FLAGS))
    for word in result.positionals:
        if word in COMPOSE_ACTIONS:
            return CommandPath(("ecs", "compose", word))
    return stopped(("ecs", "compose"), result)

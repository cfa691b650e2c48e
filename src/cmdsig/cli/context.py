"""
Handler for context commands.

Context names are chosen by the user. "context create" may only be followed
by a backend type from a fixed list; any other name is dropped.
"""

from __future__ import annotations

from cmdsig.cli import CommandPath, HandlerContext, management_path, stopped
from cmdsig.core.flags import Flag, FlagRegistry

COMMANDS = ["context"]

# Backends that "context create <backend>" may report
BACKENDS = frozenset({"aci", "ecs", "local"})

LOCAL_FLAGS = FlagRegistry.of(
    Flag("from", takes_value=True),
    Flag("description", takes_value=True),
    Flag("docker", takes_value=True),
    Flag("kubernetes", takes_value=True),
    Flag("default-stack-orchestrator", takes_value=True),
    # aci
    Flag("subscription-id", takes_value=True),
    Flag("resource-group", takes_value=True),
    Flag("location", takes_value=True),
    # ecs
    Flag("profile", takes_value=True),
    Flag("from-env"),
    Flag("local-simulation"),
)


def classify(ctx: HandlerContext) -> CommandPath:
    """Classify context command."""
    path = management_path(ctx, LOCAL_FLAGS)
    if path.words != ("context", "create"):
        return path

    head = ctx.scan(LOCAL_FLAGS)
    # positionals[0] is "create"
    if len(head.positionals) > 1 and head.positionals[1] in BACKENDS:
        return CommandPath(("context", "create", head.positionals[1]))
    return stopped(path.words, head)

"""
Handler for login.

"login azure" is a provider login and safe to report. Anything else after
login is a registry host, so it is dropped: "login registry.example.com"
reports as "login".
"""

from __future__ import annotations

from cmdsig.cli import CommandPath, HandlerContext, stopped
from cmdsig.core.flags import Flag, FlagRegistry

COMMANDS = ["login"]

# Provider literals that may follow login
PROVIDERS = frozenset({"azure"})

LOCAL_FLAGS = FlagRegistry.of(
    Flag("username", "u", takes_value=True),
    Flag("password", "p", takes_value=True),
    Flag("password-stdin"),
    # login azure
    Flag("tenant-id", takes_value=True),
    Flag("client-id", takes_value=True),
    Flag("client-secret", takes_value=True),
    Flag("cloud-name", takes_value=True),
)


def classify(ctx: HandlerContext) -> CommandPath:
    """Classify login command."""
    result = ctx.scan(LOCAL_FLAGS)
    if result.positionals:
        provider = result.positionals[0]
        if provider in PROVIDERS:
            return CommandPath(("login", provider))
        return CommandPath(("login",), "registry login")
    return stopped(("login",), result)

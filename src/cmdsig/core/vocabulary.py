"""
Command vocabulary for cmdsig - the only words a signature may contain.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

# === Top-Level Commands ===
# Single-word commands. Any positional after them is user data.

COMMANDS = frozenset(
    {
        # === Containers ===
        "attach",
        "commit",
        "cp",
        "create",
        "diff",
        "exec",
        "export",
        "kill",
        "logs",
        "pause",
        "port",
        "ps",
        "rename",
        "restart",
        "rm",
        "run",
        "start",
        "stats",
        "stop",
        "top",
        "unpause",
        "update",
        "wait",
        # === Images ===
        "build",
        "history",
        "images",
        "import",
        "load",
        "pull",
        "push",
        "rmi",
        "save",
        "search",
        "tag",
        # === Registry ===
        "login",
        "logout",
        # === System ===
        "events",
        "help",
        "info",
        "inspect",
        "version",
        # === Plugins ===
        "ecs",
        "scan",
        "serve",  # gRPC API server
    }
)


# === Management Commands ===
# Two-level "<noun> <action>" commands.

_LIST = frozenset({"inspect", "ls", "list", "rm", "prune"})

MANAGEMENT = {
    "builder": frozenset({"build", "prune"}),
    "buildx": frozenset({"bake", "build", "create", "du", "inspect", "ls", "prune", "rm", "stop", "use", "version"}),
    "checkpoint": frozenset({"create", "ls", "rm"}),
    "compose": frozenset(
        {
            "build", "config", "convert", "cp", "create", "down", "events", "exec",
            "images", "kill", "logs", "ls", "pause", "port", "ps", "pull", "push",
            "restart", "rm", "run", "start", "stop", "top", "unpause", "up", "version",
        }
    ),
    "config": _LIST | {"create"},
    "container": frozenset(
        {
            "attach", "commit", "cp", "create", "diff", "exec", "export", "inspect",
            "kill", "logs", "ls", "list", "pause", "port", "prune", "rename",
            "restart", "rm", "run", "start", "stats", "stop", "top", "unpause",
            "update", "wait",
        }
    ),
    "context": frozenset({"create", "export", "import", "inspect", "list", "ls", "rm", "show", "update", "use"}),
    "image": _LIST | {"build", "history", "import", "load", "pull", "push", "save", "tag"},
    "manifest": frozenset({"annotate", "create", "inspect", "push", "rm"}),
    "network": _LIST | {"connect", "create", "disconnect"},
    "node": frozenset({"demote", "inspect", "ls", "list", "promote", "ps", "rm", "update"}),
    "plugin": _LIST | {"create", "disable", "enable", "install", "push", "set", "upgrade"},
    "secret": _LIST | {"create"},
    "service": frozenset({"create", "inspect", "logs", "ls", "list", "ps", "rm", "rollback", "scale", "update"}),
    "stack": frozenset({"deploy", "ls", "list", "ps", "rm", "services"}),
    "swarm": frozenset({"ca", "init", "join", "join-token", "leave", "unlock", "unlock-key", "update"}),
    "system": frozenset({"df", "events", "info", "prune"}),
    "trust": frozenset({"inspect", "key", "revoke", "sign", "signer"}),
    "volume": _LIST | {"create"},
}


@dataclass(frozen=True)
class Vocabulary:
    """Known command words. Immutable; extend() returns a copy."""

    commands: frozenset[str] = COMMANDS
    management: Mapping[str, frozenset[str]] = field(default_factory=lambda: dict(MANAGEMENT))

    def actions(self, noun: str) -> frozenset[str]:
        return self.management.get(noun, frozenset())

    def extend(
        self,
        commands: Iterable[str] = (),
        management: Mapping[str, Iterable[str]] | None = None,
    ) -> Vocabulary:
        merged = dict(self.management)
        for noun, actions in (management or {}).items():
            merged[noun] = merged.get(noun, frozenset()) | frozenset(actions)
        return Vocabulary(self.commands | frozenset(commands), merged)


DEFAULT = Vocabulary()

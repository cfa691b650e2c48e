"""
Flag registry for cmdsig.

The host program owns its flags. cmdsig only needs to know, for a flag token,
whether it exists and whether it consumes a value.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class Flag:
    """A registered flag. Short and long spellings alias the same flag."""

    name: str
    shorthand: str | None = None
    takes_value: bool = False


class FlagLookup(Protocol):
    """Read-only flag lookup supplied by the host."""

    def is_known(self, token: str) -> bool:
        ...

    def takes_value(self, token: str) -> bool:
        ...


def _spelling(token: str) -> str:
    """Strip an attached value: --str=x -> --str."""
    if token.startswith("--"):
        return token.split("=", 1)[0]
    return token


@dataclass(frozen=True)
class FlagRegistry:
    """Flags keyed by every spelling (-d, --debug)."""

    _index: dict[str, Flag] = field(default_factory=dict)

    @classmethod
    def of(cls, *flags: Flag) -> FlagRegistry:
        index: dict[str, Flag] = {}
        for flag in flags:
            index[f"--{flag.name}"] = flag
            if flag.shorthand:
                index[f"-{flag.shorthand}"] = flag
        return cls(index)

    @classmethod
    def from_sets(
        cls, boolean: Iterable[str] = (), value: Iterable[str] = ()
    ) -> FlagRegistry:
        """Build a registry from spelled-out sets, e.g. {"-d", "--debug"}.

        Each spelling becomes its own entry; aliasing is implicit since
        both spellings land in the same set.
        """
        index: dict[str, Flag] = {}
        for spelling in boolean:
            index[spelling] = Flag(spelling.lstrip("-"))
        for spelling in value:
            index[spelling] = Flag(spelling.lstrip("-"), takes_value=True)
        return cls(index)

    def lookup(self, token: str) -> Flag | None:
        return self._index.get(_spelling(token))

    def is_known(self, token: str) -> bool:
        return self.lookup(token) is not None

    def takes_value(self, token: str) -> bool:
        flag = self.lookup(token)
        return flag is not None and flag.takes_value

    def merged(self, other: FlagRegistry) -> FlagRegistry:
        """Return a registry with other's spellings layered on top."""
        return FlagRegistry({**self._index, **other._index})


EMPTY = FlagRegistry()


@dataclass(frozen=True)
class ScopedFlags:
    """Host flags with a command's local flags layered on top.

    The host registry may be any FlagLookup, so layering cannot just merge
    dicts.
    """

    host: FlagLookup
    local: FlagRegistry = EMPTY

    def is_known(self, token: str) -> bool:
        return self.local.is_known(token) or self.host.is_known(token)

    def takes_value(self, token: str) -> bool:
        if self.local.is_known(token):
            return self.local.takes_value(token)
        return self.host.takes_value(token)

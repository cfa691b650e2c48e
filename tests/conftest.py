"""
Shared test fixtures for cmdsig tests.
"""

import pytest

from cmdsig.core.classifier import analyze
from cmdsig.core.config import Config, configure_logging
from cmdsig.core.flags import Flag, FlagRegistry


@pytest.fixture
def root_flags():
    """Host flags: a boolean --debug/-d and a value-taking --str."""
    return FlagRegistry.of(
        Flag("debug", "d"),
        Flag("str", takes_value=True),
    )


@pytest.fixture
def classify(root_flags):
    """Return an analyze wrapper that returns the signature string."""

    def _classify(args: list[str], flags=None, config: Config | None = None) -> str:
        if flags is None:
            flags = root_flags
        if config is None:
            config = Config()
        return analyze(args, flags, config.vocabulary()).signature

    return _classify


@pytest.fixture(autouse=True)
def reset_logging():
    """Tests that configure logging must not leak it into other tests."""
    yield
    configure_logging(Config())

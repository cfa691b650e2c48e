"""cmdsig configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import IO

import structlog

from cmdsig.core.vocabulary import DEFAULT, Vocabulary

USER_CONFIG = Path.home() / ".cmdsig" / "config"
PROJECT_CONFIG_NAME = ".cmdsig"
ENV_CONFIG = "CMDSIG_CONFIG"


@dataclass
class Config:
    """Parsed configuration."""

    commands: list[str] = field(default_factory=list)
    """Extra top-level command words, in load order."""

    management: dict[str, list[str]] = field(default_factory=dict)
    """Extra management nouns and their actions."""

    log: Path | None = None  # None = no logging
    log_full: bool = False  # log the raw argument vector (requires log path)
    disabled: bool = False

    def vocabulary(self) -> Vocabulary:
        """Default vocabulary extended with configured words."""
        if not self.commands and not self.management:
            return DEFAULT
        return DEFAULT.extend(self.commands, self.management)


# === Config Loading ===


def _find_project_config(cwd: Path) -> Path | None:
    """Walk up from cwd to find .cmdsig file."""
    current = cwd.resolve()
    while True:
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:  # reached root
            return None
        current = parent


def _merge_configs(base: Config, overlay: Config) -> Config:
    """Merge overlay config into base. Words accumulate, settings override."""
    management = {noun: list(actions) for noun, actions in base.management.items()}
    for noun, actions in overlay.management.items():
        management.setdefault(noun, []).extend(actions)
    return replace(
        base,
        commands=base.commands + overlay.commands,
        management=management,
        log=overlay.log if overlay.log is not None else base.log,
        log_full=overlay.log_full if overlay.log_full else base.log_full,
        disabled=overlay.disabled if overlay.disabled else base.disabled,
    )


def load_config(cwd: Path) -> Config:
    """Load config from ~/.cmdsig/config, .cmdsig, and $CMDSIG_CONFIG. Last wins."""
    config = Config()

    # 1. User config (lowest priority)
    if USER_CONFIG.is_file():
        config = _merge_configs(config, parse_config(USER_CONFIG.read_text()))

    # 2. Project config (walk up from cwd)
    project_path = _find_project_config(cwd)
    if project_path is not None:
        config = _merge_configs(config, parse_config(project_path.read_text()))

    # 3. Env override (highest priority)
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        env_config_path = Path(env_path).expanduser()
        if env_config_path.is_file():
            config = _merge_configs(config, parse_config(env_config_path.read_text()))

    return config


def parse_config(text: str) -> Config:
    """Parse config text into Config object. Raises ValueError on syntax errors."""
    commands: list[str] = []
    management: dict[str, list[str]] = {}
    settings: dict[str, bool | Path] = {}

    for lineno, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split()
        directive = parts[0].lower()
        words = parts[1:]

        try:
            if directive == "command":
                if not words:
                    raise ValueError("requires at least one word")
                commands.extend(_check_word(w) for w in words)

            elif directive == "management":
                if len(words) < 2:
                    raise ValueError("requires a noun and at least one action")
                noun = _check_word(words[0])
                management.setdefault(noun, []).extend(_check_word(w) for w in words[1:])

            elif directive == "set":
                _apply_setting(settings, words)

            else:
                raise ValueError(f"unknown directive '{directive}'")

        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from None

    return Config(
        commands=commands,
        management=management,
        log=settings.get("log"),
        log_full=settings.get("log_full", False),
        disabled=settings.get("disabled", False),
    )


def _check_word(word: str) -> str:
    """Command words are plain words, never flags."""
    if word.startswith("-") or "=" in word:
        raise ValueError(f"'{word}' is not a command word")
    return word


def _apply_setting(settings: dict[str, bool | Path], words: list[str]) -> None:
    """Parse and apply a 'set' directive. Raises ValueError on invalid setting."""
    if not words:
        raise ValueError("'set' requires a setting name")

    key = words[0].lower()
    value = " ".join(words[1:]) or None
    key_normalized = key.replace("-", "_")

    # Boolean settings (no value required)
    if key_normalized in ("log_full", "disabled"):
        if value is not None:
            raise ValueError(f"'{key}' takes no value")
        settings[key_normalized] = True

    # Path settings
    elif key_normalized == "log":
        if value is None:
            raise ValueError("'log' requires a path")
        settings[key_normalized] = Path(value).expanduser()

    else:
        raise ValueError(f"unknown setting '{key}'")


# === Logging ===

_logger: structlog.BoundLogger | None = None
_log_file: IO[str] | None = None
_log_full = False


def configure_logging(config: Config) -> None:
    """Configure logging based on config settings. Call once at startup."""
    global _logger, _log_file, _log_full
    if _log_file is not None:
        _log_file.close()
        _log_file = None

    if config.log is None:
        _logger = None
        return

    # Ensure log directory exists
    config.log.parent.mkdir(parents=True, exist_ok=True)
    _log_file = open(config.log, "a")
    _log_full = config.log_full

    # JSON lines, one per classified invocation
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        logger_factory=structlog.WriteLoggerFactory(file=_log_file),
        cache_logger_on_first_use=False,
    )
    _logger = structlog.get_logger()


def log_signature(
    command: str,
    reason: str | None = None,
    args: list[str] | None = None,
) -> None:
    """Log a classification. No-op if logging not configured."""
    if _logger is None:
        return

    entry: dict[str, str | list[str]] = {"command": command}
    if reason is not None:
        entry["reason"] = reason
    if _log_full and args is not None:
        entry["args"] = list(args)
    _logger.info("classified", **entry)


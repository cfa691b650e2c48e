"""Command signature hook for anonymized usage telemetry.

The host CLI pipes its argument vector and flag registry to cmdsig and gets
back the command words that are safe to report. User data (container names,
image references, registry hosts, usernames) never appears in the output.

Input (stdin, one JSON object):

    {"args": ["--debug", "image", "ls", "-q"],
     "flags": {"boolean": ["-d", "--debug"], "value": ["--str"]}}

Output (stdout):

    {"command": "image ls"}

Telemetry must never break the host: malformed input reports an empty
command and the exit code is always 0.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from cmdsig.core.classifier import analyze
from cmdsig.core.config import Config, configure_logging, load_config, log_signature
from cmdsig.core.flags import FlagLookup, FlagRegistry


def get_command(args: list[str], flags: FlagLookup, config: Config | None = None) -> str:
    """Signature for an argument vector, or "" when nothing is reportable."""
    if config is None:
        config = Config()
    if config.disabled:
        return ""

    path = analyze(args, flags, config.vocabulary())
    log_signature(path.signature, reason=path.reason, args=args)
    return path.signature


def parse_input(raw: str) -> tuple[list[str], FlagRegistry] | None:
    """Decode hook input. Returns None if it is not what the host sends."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    args = data.get("args", [])
    flags = data.get("flags", {})
    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        return None
    if not isinstance(flags, dict):
        return None
    for key in ("boolean", "value"):
        spellings = flags.get(key, [])
        if not isinstance(spellings, list) or not all(isinstance(s, str) for s in spellings):
            return None

    registry = FlagRegistry.from_sets(
        boolean=flags.get("boolean", []), value=flags.get("value", [])
    )
    return args, registry


def _respond(command: str) -> None:
    print(json.dumps({"command": command}))
    sys.exit(0)


def main() -> None:
    try:
        config = load_config(Path.cwd())
    except (OSError, ValueError) as e:
        print(f"Warning: Failed to load cmdsig config: {e}", file=sys.stderr)
        config = Config()
    try:
        configure_logging(config)
    except OSError as e:
        print(f"Warning: Failed to open cmdsig log: {e}", file=sys.stderr)
        configure_logging(Config())

    parsed = parse_input(sys.stdin.read())
    if parsed is None:
        log_signature("", reason="malformed input")
        _respond("")

    args, registry = parsed
    _respond(get_command(args, registry, config))


if __name__ == "__main__":
    main()

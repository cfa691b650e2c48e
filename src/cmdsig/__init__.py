"""
cmdsig - Privacy-safe command signatures for CLI usage telemetry.

Reports which command ran ("image ls", "login azure") without the names,
paths and IDs the user passed to it.
"""

from __future__ import annotations

__version__ = "0.1.0"

from cmdsig.cmdsig import get_command
from cmdsig.core.flags import Flag, FlagRegistry

__all__ = ["Flag", "FlagRegistry", "get_command", "__version__"]

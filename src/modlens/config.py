"""
Global Configuration and Defaults.

This module centralizes the constants shared by the scanner, the decoders
and the renderers. CLI options override these per invocation.
"""

import os
from typing import Set

# --- Archive Layout ---

# Manifest file every Fabric mod carries at the archive root
MANIFEST_FILE = "fabric.mod.json"

# Files picked up by the directory scan
ARCHIVE_SUFFIXES: Set[str] = {".jar"}

# Separator between an outer archive and a path inside it (a.jar!/b.jar)
NESTED_SEPARATOR = "!/"

# --- Concurrency ---

FALLBACK_WORKERS = 4


def env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to ``default``."""
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value >= 1 else default


# Top-level archives are read in parallel, results are re-sorted afterwards
DEFAULT_WORKERS = env_int("MODLENS_WORKERS", FALLBACK_WORKERS)

# --- Rendering ---

# One indentation unit per tree depth level
INDENT_UNIT = "    "

CYCLE_MARKER = "cycle detected"
UNRESOLVED_MARKER = "unresolved"
NOT_A_MOD_MARKER = "(Not a mod)"

# stylish_mapped/utils/settings.py

"""
Default settings and constants for stylish-mapped.

This module centralizes:
  - Source map directive and data-URL constants
  - Severity values used by ESLint-style diagnostics
  - Config file names searched in the working directory
  - Environment variable names for overriding behavior
"""

from typing import List

# -----------------------------------------------------------------------------
# Source maps
# -----------------------------------------------------------------------------
DATA_URL_PREFIX = "data:application/json;base64,"

# Last `//# sourceMappingURL=...` (or legacy `//@`) comment in a generated file.
SOURCE_MAPPING_URL_PATTERN = r"//[#@]\s*sourceMappingURL=(.*?)\s*$"

# -----------------------------------------------------------------------------
# Diagnostics
# -----------------------------------------------------------------------------
SEVERITY_WARNING = 1
SEVERITY_ERROR = 2

SUMMARY_GLYPH = "✖"

# -----------------------------------------------------------------------------
# Configuration discovery, in search order
# -----------------------------------------------------------------------------
CONFIG_SECTION = "stylish_mapped"
CONFIG_FILES: List[str] = [
    ".stylish-mapped.toml",
    "stylish-mapped.toml",
    ".stylish-mapped.yaml", ".stylish-mapped.yml",
    "stylish-mapped.yaml", "stylish-mapped.yml",
    "pyproject.toml",
    "setup.cfg",
]

COLOR_MODES = ("auto", "always", "never")

# -----------------------------------------------------------------------------
# Environment variable names for overriding behavior
# -----------------------------------------------------------------------------
ENV_LOG_LEVEL = "STYLISH_MAPPED_LOG"   # e.g., set to "DEBUG", "INFO", etc.
ENV_DISABLE_COLORS = ("NO_COLOR", "STYLISH_MAPPED_NO_COLOR")

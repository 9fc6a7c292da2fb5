"""Configuration constants.

Values here are part of the command-line contract and are NOT user-configurable.
For configurable values, see models.py.
"""

PROGRAM_NAME = "identscan"
"""Fallback program name for diagnostics when argv[0] is unavailable."""

EXIT_USAGE = 2
"""Exit code for usage errors, including an explicit -h."""

EXIT_FATAL = 1
"""Exit code for configuration or grammar setup failures."""

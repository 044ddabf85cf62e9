"""Version information for diagout.

This file is the canonical source for the version number; ``pyproject.toml``
reads it at build time.
"""

__version__ = "0.3.0"
__app_name__ = "diagout"

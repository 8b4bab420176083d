"""
CLI command modules.
"""

# Configuration commands
from repoman.cli.commands.config import config

# Tracked file listing
from repoman.cli.commands.files import files

# Diagram rendering
from repoman.cli.commands.render import render

__all__ = [
    "config",
    "files",
    "render",
]

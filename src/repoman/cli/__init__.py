"""
repo-man command line interface.

Commands live in ``repoman.cli.commands``; shared decorators in
``repoman.cli.base`` and output formatting in ``repoman.cli.output``.
"""

from repoman.cli.base import common_options, diagram_options, format_option, handle_errors, spinner
from repoman.cli.output import OutputFormatter

__all__ = [
    "common_options",
    "diagram_options",
    "format_option",
    "handle_errors",
    "spinner",
    "OutputFormatter",
]

"""Persisting rendered diagrams."""

from repoman.output.svg_writer import SvgFileWriter

__all__ = ["SvgFileWriter"]

"""
File radius calculation.

Radius is always driven by byte size and always relative to the smallest
file in the whole diagram, so a file three folders deep and a top-level file
of the same size get the same circle.
"""

from typing import Dict, Iterable, Optional

from .calculators import UnboundedCalculator
from .tree import GitFile

__all__ = ["FileRadiusCalculator"]


class FileRadiusCalculator:
    """Maps file sizes to circle radii with one unbounded batch per diagram."""

    def __init__(self, calculator: Optional[UnboundedCalculator] = None):
        self.calculator = calculator or UnboundedCalculator()

    def radii(self, files: Iterable[GitFile]) -> Dict[str, int]:
        """Radius of every file, keyed by path. Call once per layout pass."""
        return self.calculator.calculate((f.path, f.size) for f in files)

    def radius_for(self, file: GitFile, all_files: Iterable[GitFile]) -> int:
        """Radius of a single file relative to every file in the diagram."""
        return self.radii(all_files)[file.path]

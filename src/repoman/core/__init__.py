"""
Diagram generation core.

Pure, synchronous transform from a FileTree to SVG markup plus canvas size.
No I/O happens in this package.
"""

from .calculators import BASE_UNIT, BOUNDED_CEILING, BOUNDED_FLOOR, BoundedCalculator, UnboundedCalculator
from .chart import ChartData, SvgChartWriter
from .colors import DEFAULT_COLOR, DEFAULT_COLOR_MAPPINGS, ColorMode, FileColorMapper
from .layout import (
    Circle,
    FlatLayout,
    FolderLayout,
    Geometry,
    LayoutPolicy,
    Point,
    Rectangle,
    Size,
)
from .radius import FileRadiusCalculator
from .serializer import SvgSerializer
from .tree import Commit, FileTree, Folder, GitFile, file_key

__all__ = [
    # Tree
    "Commit",
    "GitFile",
    "Folder",
    "FileTree",
    "file_key",
    # Calculators
    "BASE_UNIT",
    "BOUNDED_FLOOR",
    "BOUNDED_CEILING",
    "UnboundedCalculator",
    "BoundedCalculator",
    "FileRadiusCalculator",
    # Color
    "ColorMode",
    "FileColorMapper",
    "DEFAULT_COLOR",
    "DEFAULT_COLOR_MAPPINGS",
    # Layout
    "Point",
    "Size",
    "Circle",
    "Rectangle",
    "Geometry",
    "LayoutPolicy",
    "FolderLayout",
    "FlatLayout",
    # Output
    "SvgSerializer",
    "ChartData",
    "SvgChartWriter",
]

"""
Layout / packing engine.

Turns a FileTree into absolute geometry: one circle per file, one rectangle
per folder, plus the size of the whole canvas.

Packing rules (every number is in diagram units):

    Row packing     Files sorted by descending radius (stable). The first
                    circle sits ``inset`` from the row origin; each next one
                    sits ITEM_MARGIN to the right of the previous circle.
                    Every circle is vertically anchored on its own radius.
    Folder box      Circles inset by FILE_PADDING. Nested folders stacked
                    below the file row, inset by FOLDER_PADDING, with
                    FOLDER_PADDING between them and after the last one.
    Canvas          Top-level row inset by OUTER_MARGIN, top-level folders
                    stacked below it OUTER_MARGIN apart.

Two policies share these rules:
- FolderLayout: groups files into folder rectangles
- FlatLayout: packs every file into a single top-level row

Rows never wrap; the canvas grows to the right as needed.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from .calculators import BoundedCalculator
from .colors import ColorMode, FileColorMapper
from .radius import FileRadiusCalculator
from .tree import FileTree, Folder, GitFile

__all__ = [
    "OUTER_MARGIN",
    "ITEM_MARGIN",
    "FILE_PADDING",
    "FOLDER_PADDING",
    "Point",
    "Size",
    "Circle",
    "Rectangle",
    "Shape",
    "Geometry",
    "LayoutPolicy",
    "FolderLayout",
    "FlatLayout",
    "tooltip_for",
]

logger = logging.getLogger(__name__)

# --- SPACING ---
OUTER_MARGIN = 10    # Canvas edge to top-level shapes, and between stacked top-level items
ITEM_MARGIN = 5      # Between circles in a row, and trailing canvas edge
FILE_PADDING = 5     # Folder edge to its own circles
FOLDER_PADDING = 10  # Folder edge to nested folders


class Point(NamedTuple):
    x: int
    y: int


class Size(NamedTuple):
    width: int
    height: int


@dataclass(frozen=True)
class Circle:
    """A placed file."""
    center: Point
    radius: int
    color: str
    label: str
    tooltip: str
    path: str = ""

    @property
    def left(self) -> int:
        return self.center.x - self.radius

    @property
    def top(self) -> int:
        return self.center.y - self.radius

    @property
    def right(self) -> int:
        return self.center.x + self.radius

    @property
    def bottom(self) -> int:
        return self.center.y + self.radius


@dataclass(frozen=True)
class Rectangle:
    """A placed folder. ``origin`` is the top-left corner."""
    origin: Point
    width: int
    height: int
    label: str
    path: str = ""

    @property
    def right(self) -> int:
        return self.origin.x + self.width

    @property
    def bottom(self) -> int:
        return self.origin.y + self.height

    def encloses(self, shape: "Shape", padding: int = 0) -> bool:
        """True if ``shape`` lies inside this box with at least ``padding`` to spare."""
        if isinstance(shape, Circle):
            left, top, right, bottom = shape.left, shape.top, shape.right, shape.bottom
        else:
            left, top = shape.origin
            right, bottom = shape.right, shape.bottom
        return (
            left - padding >= self.origin.x
            and top - padding >= self.origin.y
            and right + padding <= self.right
            and bottom + padding <= self.bottom
        )


Shape = Union[Circle, Rectangle]


@dataclass(frozen=True)
class Geometry:
    """Placed shapes in emission order plus the canvas size."""
    shapes: Tuple[Shape, ...]
    size: Size

    @property
    def circles(self) -> List[Circle]:
        return [s for s in self.shapes if isinstance(s, Circle)]

    @property
    def rectangles(self) -> List[Rectangle]:
        return [s for s in self.shapes if isinstance(s, Rectangle)]


EMPTY_GEOMETRY = Geometry(shapes=(), size=Size(0, 0))


def tooltip_for(git_file: GitFile) -> str:
    """Hover text for a file circle: full path, byte size and commit count."""
    return (
        f"{git_file.path}\r\n\r\n"
        f"File size (bytes): {git_file.size}\r\n"
        f"# of commits: {git_file.commit_count}"
    )


@dataclass(frozen=True)
class _Row:
    circles: Tuple[Circle, ...]
    width: int    # inset + sum(diameter + ITEM_MARGIN)
    depth: int    # largest diameter


class LayoutPolicy(ABC):
    """
    Base class for packing policies.

    Subclasses implement _place(); this class handles the per-pass batches
    (radius, intensity, color) and the empty-tree case.
    """

    def __init__(
        self,
        radius_calculator: Optional[FileRadiusCalculator] = None,
        color_mapper: Optional[FileColorMapper] = None,
        mode: ColorMode = ColorMode.SIZE,
        intensity_calculator: Optional[BoundedCalculator] = None,
    ):
        self.radius_calculator = radius_calculator or FileRadiusCalculator()
        self.color_mapper = color_mapper or FileColorMapper()
        self.mode = ColorMode.from_value(mode)
        self.intensity_calculator = intensity_calculator or BoundedCalculator()

    def layout(self, tree: FileTree) -> Geometry:
        """Compute geometry for the whole tree. Never mutates the tree."""
        if tree.is_empty:
            logger.info("File tree is empty, nothing to lay out")
            return EMPTY_GEOMETRY

        files = tree.files
        radii = self.radius_calculator.radii(files)
        colors = self._colors(files)
        return self._place(tree, radii, colors)

    def _colors(self, files: Sequence[GitFile]) -> Dict[str, str]:
        if self.mode is ColorMode.RISK:
            intensities = self.intensity_calculator.calculate(
                (f.path, f.risk_index) for f in files
            )
            return {f.path: self.color_mapper.map(f.key, intensities[f.path]) for f in files}
        return {f.path: self.color_mapper.map(f.key) for f in files}

    @abstractmethod
    def _place(
        self,
        tree: FileTree,
        radii: Dict[str, int],
        colors: Dict[str, str],
    ) -> Geometry:
        """Place every file (and folder) of a non-empty tree."""

    @staticmethod
    def _pack_row(
        files: Sequence[GitFile],
        origin: Point,
        inset: int,
        radii: Dict[str, int],
        colors: Dict[str, str],
    ) -> _Row:
        ordered = sorted(files, key=lambda f: radii[f.path], reverse=True)

        circles: List[Circle] = []
        cursor = origin.x + inset
        depth = 0
        for git_file in ordered:
            radius = radii[git_file.path]
            logger.info(git_file.name)
            circles.append(Circle(
                center=Point(cursor + radius, origin.y + inset + radius),
                radius=radius,
                color=colors[git_file.path],
                label=git_file.name,
                tooltip=tooltip_for(git_file),
                path=git_file.path,
            ))
            cursor += 2 * radius + ITEM_MARGIN
            depth = max(depth, 2 * radius)

        return _Row(circles=tuple(circles), width=cursor - origin.x, depth=depth)


class FolderLayout(LayoutPolicy):
    """Top-level files in a row, then folders as nested rectangles stacked below."""

    def _place(self, tree, radii, colors):
        shapes: List[Shape] = []
        width = 0
        height = 0

        top_level = tree.top_level_files()
        logger.info("Writing top-level files")
        if top_level:
            row = self._pack_row(top_level, Point(0, 0), OUTER_MARGIN, radii, colors)
            shapes.extend(row.circles)
            width = row.width
            height = OUTER_MARGIN + row.depth + OUTER_MARGIN

        folders = tree.foldered()
        logger.info("Writing foldered files")
        y = height if top_level else OUTER_MARGIN
        for folder in folders.values():
            folder_shapes, box = self._pack_folder(folder, Point(OUTER_MARGIN, y), radii, colors)
            shapes.extend(folder_shapes)
            width = max(width, box.right + ITEM_MARGIN)
            height = box.bottom
            y = box.bottom + OUTER_MARGIN

        return Geometry(shapes=tuple(shapes), size=Size(width, height))

    def _pack_folder(
        self,
        folder: Folder,
        origin: Point,
        radii: Dict[str, int],
        colors: Dict[str, str],
    ) -> Tuple[List[Shape], Rectangle]:
        logger.info(f"{folder.name}/")
        shapes: List[Shape] = []
        width = 0
        height = 0

        if folder.files:
            row = self._pack_row(folder.files, origin, FILE_PADDING, radii, colors)
            shapes.extend(row.circles)
            width = row.width
            height = FILE_PADDING + row.depth + FILE_PADDING

        if folder.folders:
            y = origin.y + (height - FILE_PADDING + FOLDER_PADDING if folder.files else FOLDER_PADDING)
            for child in folder.folders.values():
                child_shapes, box = self._pack_folder(
                    child, Point(origin.x + FOLDER_PADDING, y), radii, colors
                )
                shapes.extend(child_shapes)
                width = max(width, FOLDER_PADDING + box.width + FOLDER_PADDING)
                y = box.bottom + FOLDER_PADDING
            height = y - origin.y

        box = Rectangle(origin=origin, width=width, height=height, label=folder.name, path=folder.path)
        shapes.append(box)
        return shapes, box


class FlatLayout(LayoutPolicy):
    """Every file in one top-level row, no folder rectangles."""

    def _place(self, tree, radii, colors):
        logger.info("Writing top-level files")
        row = self._pack_row(tree.files, Point(0, 0), OUTER_MARGIN, radii, colors)
        return Geometry(
            shapes=row.circles,
            size=Size(row.width, OUTER_MARGIN + row.depth + OUTER_MARGIN),
        )

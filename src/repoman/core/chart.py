"""
Chart writer: layout plus serialization in one call.

Usage:
    writer = SvgChartWriter(FolderLayout(color_mapper=FileColorMapper(colors)))
    chart = writer.write_chart_data(tree)
    chart.markup   # SVG fragment
    chart.size     # Size(width, height) of the canvas
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .layout import FolderLayout, LayoutPolicy, Size
from .serializer import SvgSerializer
from .tree import FileTree

__all__ = ["ChartData", "SvgChartWriter"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartData:
    """Rendered markup and the canvas size it needs."""
    markup: str
    size: Size


class SvgChartWriter:
    """Lay out a file tree and serialize it to SVG markup."""

    def __init__(
        self,
        layout: Optional[LayoutPolicy] = None,
        serializer: Optional[SvgSerializer] = None,
    ):
        self.layout = layout or FolderLayout()
        self.serializer = serializer or SvgSerializer()

    def write_chart_data(self, tree: FileTree) -> ChartData:
        geometry = self.layout.layout(tree)
        markup = self.serializer.render(geometry)
        logger.debug(
            f"Rendered {len(geometry.shapes)} shapes on a "
            f"{geometry.size.width}x{geometry.size.height} canvas"
        )
        return ChartData(markup=markup, size=geometry.size)

"""
Repository visualizer: one diagram run end to end.

    crawl -> (risk analysis) -> layout + serialize -> write

Usage:
    settings = get_settings()
    visualizer = RepositoryVisualizer(
        crawler=GitRepoCrawler(repo_path),
        chart_writer=build_chart_writer(settings),
        file_writer=SvgFileWriter(),
        analyst=ChurnRiskAnalyst(),
    )
    chart = visualizer.generate("repo.svg")
"""

import logging
from pathlib import Path
from typing import Optional, Union

from repoman.adapters.git_crawler import GitRepoCrawler
from repoman.analysis.risk import CodeQualityAnalyst
from repoman.config import Settings
from repoman.core.chart import ChartData, SvgChartWriter
from repoman.core.colors import ColorMode, FileColorMapper
from repoman.core.layout import FlatLayout, FolderLayout, LayoutPolicy
from repoman.logging_config import correlation_id
from repoman.output.svg_writer import SvgFileWriter

__all__ = ["RepositoryVisualizer", "build_chart_writer", "LAYOUTS"]

logger = logging.getLogger(__name__)

LAYOUTS = {
    "folder": FolderLayout,
    "flat": FlatLayout,
}


def build_chart_writer(
    settings: Settings,
    mode: Optional[str] = None,
    layout: Optional[str] = None,
) -> SvgChartWriter:
    """
    Wire a chart writer from settings.

    ``mode`` and ``layout`` override the configured diagram type and layout.
    The color mode is handed to the layout policy explicitly; nothing below
    this function reads configuration.
    """
    color_mode = ColorMode.from_value(mode or settings.diagram.type)
    layout_name = layout or settings.diagram.layout
    if layout_name not in LAYOUTS:
        raise ValueError(
            f"Unknown layout {layout_name!r}. Must be one of: {', '.join(LAYOUTS)}"
        )

    mapper = FileColorMapper(settings.colors, default_color=settings.diagram.default_color)
    policy: LayoutPolicy = LAYOUTS[layout_name](color_mapper=mapper, mode=color_mode)
    return SvgChartWriter(layout=policy)


class RepositoryVisualizer:
    """Crawl a repository and write its diagram."""

    def __init__(
        self,
        crawler: GitRepoCrawler,
        chart_writer: SvgChartWriter,
        file_writer: SvgFileWriter,
        analyst: Optional[CodeQualityAnalyst] = None,
    ):
        self.crawler = crawler
        self.chart_writer = chart_writer
        self.file_writer = file_writer
        self.analyst = analyst

    def generate(self, output_path: Union[str, Path]) -> ChartData:
        """
        Produce and persist one diagram.

        Raises:
            CrawlError: If the repository cannot be read
            OutputError: If the SVG cannot be written
        """
        with correlation_id() as cid:
            logger.info(f"Generating diagram for {self.crawler.repo_path} (run {cid})")

            tree = self.crawler.crawl()
            if self.analyst is not None:
                logger.info("Evaluating code quality")
                self.analyst.evaluate(tree)

            chart = self.chart_writer.write_chart_data(tree)
            self.file_writer.write(chart, output_path, title=Path(self.crawler.repo_path).resolve().name)

            logger.info(
                f"Diagram complete: {len(tree)} files, "
                f"{chart.size.width}x{chart.size.height}"
            )
            return chart

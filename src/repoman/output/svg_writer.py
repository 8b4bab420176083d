"""
SVG document writer.

Wraps chart markup in a standalone ``<svg>`` document (Jinja2 template) and
persists it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from repoman.core.chart import ChartData
from repoman.exceptions import OutputError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
DOCUMENT_TEMPLATE = "document.svg.j2"


class SvgFileWriter:
    """Render chart data as an SVG document and write it to disk.

    Parameters
    ----------
    template_dir:
        Override the default template directory (for testing).
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        self._template_dir = template_dir or TEMPLATE_DIR
        self._env = Environment(
            loader=FileSystemLoader(str(self._template_dir)),
            autoescape=select_autoescape(["svg.j2"]),
        )

    def render(self, chart: ChartData, title: str | None = None) -> str:
        """Render a complete SVG document.

        Args:
            chart: Markup and canvas size from the chart writer.
            title: Optional document title (escaped).

        Returns:
            SVG document as a string.
        """
        template = self._env.get_template(DOCUMENT_TEMPLATE)
        return template.render(
            width=chart.size.width,
            height=chart.size.height,
            title=title,
            markup=Markup(chart.markup),
        )

    def write(self, chart: ChartData, output_path: str | Path, title: str | None = None) -> Path:
        """Render and write the document as UTF-8, creating parent directories.

        Raises:
            OutputError: If the file cannot be written.
        """
        path = Path(output_path)
        document = self.render(chart, title=title)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(document, encoding="utf-8")
        except OSError as e:
            raise OutputError(f"Could not write diagram: {e}", output_path=str(path)) from e

        logger.info(f"Wrote {len(document)} characters to {path}")
        return path

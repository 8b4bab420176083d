"""
Diagram rendering command.
"""

from pathlib import Path
from typing import Optional

import click

from repoman.adapters.git_crawler import GitRepoCrawler
from repoman.analysis.risk import ChurnRiskAnalyst
from repoman.cli.base import common_options, diagram_options, handle_errors, spinner
from repoman.cli.output import OutputFormatter
from repoman.config import Settings
from repoman.output.svg_writer import SvgFileWriter
from repoman.visualizer import RepositoryVisualizer, build_chart_writer


@click.command()
@click.argument("repo_path", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--output", "-o", "output_path", type=click.Path(dir_okay=False), default=None,
              help="SVG file to write (default: output.path from config)")
@diagram_options
@common_options
@click.pass_obj
@handle_errors
def render(
    obj: dict,
    repo_path: str,
    output_path: Optional[str],
    diagram_type: Optional[str],
    layout: Optional[str],
    quiet: bool,
):
    """
    Render REPO_PATH as an SVG bubble diagram.

    Every tracked file becomes a circle sized by its byte size relative to
    the smallest file and colored by extension. With --type risk the color is
    shaded by each file's commit-churn risk.

    Examples:
        repoman render . -o repo.svg
        repoman render ~/src/project --type risk --layout flat
    """
    settings: Settings = obj["settings"]
    mode = diagram_type or settings.diagram.type
    target = Path(output_path or settings.output.path)

    visualizer = RepositoryVisualizer(
        crawler=GitRepoCrawler(repo_path, timeout=settings.crawler.git_timeout),
        chart_writer=build_chart_writer(settings, mode=mode, layout=layout),
        file_writer=SvgFileWriter(),
        analyst=ChurnRiskAnalyst() if mode == "risk" else None,
    )

    with spinner(f"Rendering {repo_path}", quiet=quiet):
        chart = visualizer.generate(target)

    fmt = OutputFormatter(quiet=quiet)
    fmt.print_success(f"Wrote {target} ({chart.size.width}x{chart.size.height})")

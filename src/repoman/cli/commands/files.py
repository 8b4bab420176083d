"""
Tracked file listing command.
"""

import click

from repoman.adapters.git_crawler import GitRepoCrawler
from repoman.analysis.risk import ChurnRiskAnalyst
from repoman.cli.base import common_options, format_option, handle_errors, spinner
from repoman.cli.output import OutputFormatter
from repoman.config import Settings


@click.command()
@click.argument("repo_path", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--risk", is_flag=True, help="Include the churn risk index column")
@format_option()
@common_options
@click.pass_obj
@handle_errors
def files(obj: dict, repo_path: str, risk: bool, output_format: str, quiet: bool):
    """
    List the files repo-man would draw for REPO_PATH.

    Examples:
        repoman files .
        repoman files . --risk -f json
    """
    settings: Settings = obj["settings"]
    crawler = GitRepoCrawler(repo_path, timeout=settings.crawler.git_timeout)

    with spinner(f"Crawling {repo_path}", quiet=quiet or output_format != "table"):
        tree = crawler.crawl()
        if risk:
            ChurnRiskAnalyst().evaluate(tree)

    columns = ["path", "key", "size", "commits"]
    if risk:
        columns.append("risk")

    rows = [
        {
            "path": git_file.path,
            "key": git_file.key,
            "size": git_file.size,
            "commits": git_file.commit_count,
            "risk": git_file.risk_index,
        }
        for git_file in tree
    ]

    fmt = OutputFormatter(output_format, quiet)
    fmt.print_table(rows, columns=columns)
    if output_format == "table":
        fmt.print_message(f"{len(rows)} files")

"""Tests for repoman.visualizer - wiring a diagram run."""

from unittest.mock import MagicMock

import pytest

from repoman.config import Settings
from repoman.core.chart import SvgChartWriter
from repoman.core.colors import ColorMode
from repoman.core.layout import FlatLayout, FolderLayout
from repoman.logging_config import get_correlation_id
from repoman.output.svg_writer import SvgFileWriter
from repoman.visualizer import RepositoryVisualizer, build_chart_writer


class TestBuildChartWriter:
    def test_defaults_from_settings(self):
        writer = build_chart_writer(Settings())
        assert isinstance(writer, SvgChartWriter)
        assert isinstance(writer.layout, FolderLayout)
        assert writer.layout.mode is ColorMode.SIZE

    def test_overrides(self):
        writer = build_chart_writer(Settings(), mode="risk", layout="flat")
        assert isinstance(writer.layout, FlatLayout)
        assert writer.layout.mode is ColorMode.RISK

    def test_settings_colors_reach_mapper(self):
        settings = Settings(colors={".zz": "#abcdef"}, diagram={"default_color": "pink"})
        mapper = build_chart_writer(settings).layout.color_mapper
        assert mapper.map(".zz") == "#abcdef"
        assert mapper.map(".unknown") == "pink"

    def test_unknown_layout_rejected(self):
        with pytest.raises(ValueError, match="Unknown layout"):
            build_chart_writer(Settings(), layout="spiral")


class TestRepositoryVisualizer:
    @pytest.fixture
    def crawler(self, make_tree, tmp_path):
        crawler = MagicMock()
        crawler.repo_path = tmp_path / "myrepo"
        crawler.crawl.return_value = make_tree(("README.md", 10), ("src/a.cs", 20))
        return crawler

    def test_generate_writes_document(self, crawler, tmp_path):
        visualizer = RepositoryVisualizer(
            crawler=crawler,
            chart_writer=SvgChartWriter(),
            file_writer=SvgFileWriter(),
        )
        output = tmp_path / "repo.svg"
        chart = visualizer.generate(output)

        content = output.read_text(encoding="utf-8")
        assert chart.markup in content
        assert "<title>myrepo</title>" in content

    def test_analyst_runs_before_layout(self, crawler, tmp_path):
        calls = []
        analyst = MagicMock()
        analyst.evaluate.side_effect = lambda tree: calls.append("evaluate")
        chart_writer = MagicMock()
        chart_writer.write_chart_data.side_effect = lambda tree: calls.append("layout") or MagicMock()

        RepositoryVisualizer(crawler, chart_writer, MagicMock(), analyst=analyst).generate(tmp_path / "x.svg")

        assert calls == ["evaluate", "layout"]
        analyst.evaluate.assert_called_once_with(crawler.crawl.return_value)

    def test_no_analyst_in_size_mode(self, crawler, tmp_path):
        file_writer = MagicMock()
        RepositoryVisualizer(crawler, SvgChartWriter(), file_writer).generate(tmp_path / "x.svg")
        file_writer.write.assert_called_once()

    def test_run_has_correlation_id(self, crawler, tmp_path):
        seen = []
        tree = crawler.crawl.return_value

        def crawl():
            seen.append(get_correlation_id())
            return tree

        crawler.crawl.side_effect = crawl
        RepositoryVisualizer(crawler, SvgChartWriter(), MagicMock()).generate(tmp_path / "x.svg")

        assert seen[0] is not None
        assert get_correlation_id() is None

    def test_crawl_errors_propagate(self, crawler, tmp_path):
        from repoman.exceptions import CrawlError

        crawler.crawl.side_effect = CrawlError("boom")
        file_writer = MagicMock()
        with pytest.raises(CrawlError):
            RepositoryVisualizer(crawler, SvgChartWriter(), file_writer).generate(tmp_path / "x.svg")
        file_writer.write.assert_not_called()

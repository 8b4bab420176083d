"""Tests for repoman.exceptions."""

import pytest

from repoman.exceptions import (
    ConfigurationError,
    CrawlError,
    EmptyBatchError,
    InvalidAttributeError,
    OutputError,
    RepomanError,
)


class TestRepomanError:
    def test_message_only(self):
        assert str(RepomanError("Something failed")) == "Something failed"

    def test_context_and_details(self):
        error = RepomanError("Failed", context="while crawling", details={"path": "a.py"})
        assert str(error) == "Failed. Context: while crawling. Details: path='a.py'"


class TestSubclasses:
    @pytest.mark.parametrize("error", [
        InvalidAttributeError("bad"),
        EmptyBatchError(),
        CrawlError("bad"),
        OutputError("bad"),
        ConfigurationError("bad"),
    ])
    def test_all_are_repoman_errors(self, error):
        assert isinstance(error, RepomanError)

    def test_invalid_attribute_is_value_error(self):
        error = InvalidAttributeError("Negative size", attribute="size", value=-1, path="a.py")
        assert isinstance(error, ValueError)
        assert error.details == {"attribute": "size", "value": -1, "path": "a.py"}

    def test_empty_batch_message(self):
        error = EmptyBatchError(calculator="BoundedCalculator")
        assert error.message == "Cannot scale an empty batch"
        assert error.details["calculator"] == "BoundedCalculator"

    def test_crawl_error_details(self):
        error = CrawlError("git failed", repo_path="/repo", command="git log")
        assert error.repo_path == "/repo"
        assert "command='git log'" in str(error)

    def test_output_and_config_paths(self):
        assert OutputError("x", output_path="a.svg").details == {"output_path": "a.svg"}
        assert ConfigurationError("x", config_path="c.yaml").config_path == "c.yaml"

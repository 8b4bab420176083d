"""
Unified exception hierarchy for repo-man.

All exception classes live here. No per-module exception files.

Hierarchy:
    RepomanError (base)
    ├── InvalidAttributeError
    ├── EmptyBatchError
    ├── CrawlError
    ├── OutputError
    └── ConfigurationError

Usage:
    from repoman.exceptions import InvalidAttributeError, CrawlError
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# ROOT
# =============================================================================


class RepomanError(Exception):
    """
    Base exception for all repo-man errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about what was being done
        details: Technical details (paths, values, commands, etc.)
    """

    def __init__(
        self,
        message: str,
        context: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.context = context
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.context:
            parts.append(f"Context: {self.context}")
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            parts.append(f"Details: {detail_str}")
        return ". ".join(parts)


# =============================================================================
# DIAGRAM CORE
# =============================================================================


class InvalidAttributeError(RepomanError, ValueError):
    """Raised when a file attribute (size, risk, path) is out of range."""

    def __init__(
        self,
        message: str,
        attribute: str | None = None,
        value: Any = None,
        path: str | None = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", {})
        if attribute:
            details["attribute"] = attribute
        if value is not None:
            details["value"] = value
        if path:
            details["path"] = path
        super().__init__(message, details=details, **kwargs)
        self.attribute = attribute
        self.value = value
        self.path = path


class EmptyBatchError(RepomanError):
    """Raised when a scalar calculator is invoked with no items."""

    def __init__(self, calculator: str | None = None, **kwargs: Any):
        details = kwargs.pop("details", {})
        if calculator:
            details["calculator"] = calculator
        super().__init__("Cannot scale an empty batch", details=details, **kwargs)
        self.calculator = calculator


# =============================================================================
# COLLABORATORS
# =============================================================================


class CrawlError(RepomanError):
    """Raised when the git repository cannot be read."""

    def __init__(
        self,
        message: str,
        repo_path: str | None = None,
        command: str | None = None,
        **kwargs: Any,
    ):
        details = kwargs.pop("details", {})
        if repo_path:
            details["repo_path"] = repo_path
        if command:
            details["command"] = command
        super().__init__(message, details=details, **kwargs)
        self.repo_path = repo_path
        self.command = command


class OutputError(RepomanError):
    """Raised when the rendered diagram cannot be persisted."""

    def __init__(self, message: str, output_path: str | None = None, **kwargs: Any):
        details = kwargs.pop("details", {})
        if output_path:
            details["output_path"] = output_path
        super().__init__(message, details=details, **kwargs)
        self.output_path = output_path


class ConfigurationError(RepomanError):
    """Raised when configuration cannot be loaded or validated."""

    def __init__(self, message: str, config_path: str | None = None, **kwargs: Any):
        details = kwargs.pop("details", {})
        if config_path:
            details["config_path"] = config_path
        super().__init__(message, details=details, **kwargs)
        self.config_path = config_path


__all__ = [
    "RepomanError",
    "InvalidAttributeError",
    "EmptyBatchError",
    "CrawlError",
    "OutputError",
    "ConfigurationError",
]

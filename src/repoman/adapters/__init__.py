"""
Adapters that feed the diagram core from outside sources.

Currently provides the git repository crawler.
"""

from repoman.adapters.git_crawler import GitRepoCrawler

__all__ = ["GitRepoCrawler"]

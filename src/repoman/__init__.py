"""
repo-man - Repository file tree diagrams

This package provides:
- Core: file tree model, scalar calculators, color mapping, packing layout
  and SVG serialization
- Adapters: git repository crawler
- Analysis: commit-history risk scoring
- CLI: Command-line rendering and configuration tools
"""

__version__ = "1.0.0"

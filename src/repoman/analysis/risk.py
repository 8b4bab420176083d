"""
Commit-history risk scoring.

Computes a churn-based risk index per file and annotates the tree with it.

Formula:
    risk = commit_count × (1 + ln(distinct_authors))

Files touched often, by many people, score highest. Files with no history
score 0. Scores are relative; the diagram only ever compares them against
each other, so there is no upper bound or tiering here.
"""

import logging
import math
from typing import Dict, Protocol

from repoman.core.tree import FileTree, GitFile

__all__ = ["CodeQualityAnalyst", "ChurnRiskAnalyst", "churn_risk"]

logger = logging.getLogger(__name__)

# Decimal places kept in the stored risk index
RISK_PRECISION = 2


class CodeQualityAnalyst(Protocol):
    """Anything that scores a tree's files and annotates their risk index."""

    def evaluate(self, tree: FileTree) -> Dict[str, float]:
        ...


def churn_risk(git_file: GitFile) -> float:
    """Risk index of a single file from its commit history."""
    if not git_file.commits:
        return 0.0
    authors = {commit.author for commit in git_file.commits}
    score = git_file.commit_count * (1 + math.log(len(authors)))
    return round(score, RISK_PRECISION)


class ChurnRiskAnalyst:
    """Annotate every file in a tree with its churn risk."""

    def evaluate(self, tree: FileTree) -> Dict[str, float]:
        scores: Dict[str, float] = {}
        for git_file in tree:
            risk = churn_risk(git_file)
            tree.set_risk_index(git_file.path, risk)
            scores[git_file.path] = risk

        if scores:
            riskiest = max(scores, key=lambda p: scores[p])
            logger.info(
                f"Scored {len(scores)} files, highest risk {scores[riskiest]} ({riskiest})"
            )
        return scores

"""Risk analysis of repository files."""

from repoman.analysis.risk import ChurnRiskAnalyst, CodeQualityAnalyst, churn_risk

__all__ = ["ChurnRiskAnalyst", "CodeQualityAnalyst", "churn_risk"]

"""
Claim analysis pipeline components.
The orchestrator lives in claimsense.pipeline.orchestrator.
"""

from .models import (
    PolicyExcerpt,
    RankedExcerpt,
    HistoricalCase,
    IssueCount,
    MemorySummary,
    RiskFactor,
    RiskAssessment,
    RiskThresholds,
    PipelineMetrics,
    AnalysisResult,
)

__all__ = [
    "PolicyExcerpt",
    "RankedExcerpt",
    "HistoricalCase",
    "IssueCount",
    "MemorySummary",
    "RiskFactor",
    "RiskAssessment",
    "RiskThresholds",
    "PipelineMetrics",
    "AnalysisResult",
]

"""
Pipeline steps for claim analysis.
Each step is a self-contained module that performs a specific task.
"""

from .knowledge_retrieval import KnowledgeRetrievalStep
from .memory_analysis import MemoryAnalysisStep
from .risk_scoring import RiskScoringStep, risk_tier

__all__ = [
    "KnowledgeRetrievalStep",
    "MemoryAnalysisStep",
    "RiskScoringStep",
    "risk_tier",
]

"""
API layer for the claim decision support system.
"""

from .routes import router
from .schemas import AnalyzeRequest, AnalyzeResponse, HealthResponse

__all__ = [
    "router",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "HealthResponse",
]

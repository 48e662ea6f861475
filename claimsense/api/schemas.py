"""
Pydantic schemas for API request/response validation.
"""

from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, Field, field_validator

from claimsense.pipeline.models import (
    HistoricalCase,
    MemorySummary,
    PolicyExcerpt,
    RankedExcerpt,
    RiskAssessment,
)


class AnalyzeRequest(BaseModel):
    """Request body for analyzing a claim."""
    claim_type: str = Field(..., description="Claim type", examples=["Flood"])
    jurisdiction: str = Field(..., description="Jurisdiction (state)", examples=["Florida"])
    amount: Union[float, str] = Field(..., description="Claim amount in dollars", examples=[280000])
    clock_hour: Optional[int] = Field(
        default=None,
        ge=0,
        le=23,
        description="Local hour of the decision; the server clock is used if omitted"
    )

    @field_validator("claim_type", "jurisdiction", "amount")
    @classmethod
    def not_blank(cls, value):
        if isinstance(value, str) and not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def not_boolean(cls, value):
        if isinstance(value, bool):
            raise ValueError("must be a number or text")
        return value


class AnalyzeResponse(BaseModel):
    """Knowledge, decision memory and regret risk for one claim."""
    success: bool
    claim_type: str
    jurisdiction: str
    amount: Union[float, str]
    clock_hour: int
    knowledge: List[RankedExcerpt] = Field(default_factory=list)
    memory: MemorySummary
    risk: RiskAssessment
    processing_time_seconds: Optional[float] = None

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "claim_type": "Flood",
                "jurisdiction": "Florida",
                "amount": 280000,
                "clock_hour": 10,
                "knowledge": [
                    {
                        "id": 1,
                        "source_document": "Florida_Flood_Policy_2024.pdf",
                        "page": 12,
                        "paragraph": 3,
                        "content": "All flood damage claims exceeding $200,000 in Florida require "
                                   "mandatory secondary inspection...",
                        "keywords": ["flood", "florida", "secondary inspection", "200000"],
                        "category": "policy",
                        "citation": "Florida_Flood_Policy_2024.pdf, Page 12, ¶3",
                        "match_score": 2
                    }
                ],
                "memory": {
                    "total_cases": 4,
                    "failed_cases": 2,
                    "failure_rate": 50,
                    "avg_resolution_time": 5.0,
                    "issue_frequency": [
                        {"issue": "Missing secondary inspection report", "count": 1}
                    ]
                },
                "risk": {
                    "score": 65,
                    "tier": "HIGH",
                    "factors": [
                        {"description": "Amount exceeds company maximum ($250K)", "impact": "High", "probability": 85},
                        {"description": "Requires secondary inspection per policy", "impact": "High", "probability": 90}
                    ],
                    "recommended_actions": ["Request secondary inspection before approval"]
                },
                "processing_time_seconds": 0.002
            }
        }


class KnowledgeListResponse(BaseModel):
    """Policy excerpts in the knowledge store."""
    excerpts: List[PolicyExcerpt] = Field(default_factory=list)
    count: int


class HistoryListResponse(BaseModel):
    """Page of historical claim decisions."""
    cases: List[HistoricalCase] = Field(default_factory=list)
    count: int
    total: int
    skip: int
    limit: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(default="healthy")
    version: str
    knowledge_excerpts: int
    historical_cases: int
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None

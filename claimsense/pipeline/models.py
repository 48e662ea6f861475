"""
Pydantic models for the claim analysis pipeline.
These models define the static table records and the results passed between steps.
"""

from datetime import date
from typing import List, Optional, Dict, Literal, Union
from pydantic import BaseModel, Field, computed_field, field_validator


ExcerptCategory = Literal["policy", "sop", "regulation", "compliance"]
Impact = Literal["Low", "Medium", "High"]
RiskTier = Literal["MODERATE", "HIGH", "CRITICAL"]


class PolicyExcerpt(BaseModel):
    """A citation-bearing fragment of policy or regulatory text."""
    id: int = Field(description="Unique excerpt identifier")
    source_document: str = Field(description="Source document name")
    page: int = Field(gt=0, description="Page number in the source document")
    paragraph: int = Field(gt=0, description="Paragraph number on the page")
    content: str = Field(min_length=1, description="The excerpt text")
    keywords: List[str] = Field(min_length=1, description="Lowercase retrieval keywords")
    category: ExcerptCategory = Field(description="policy, sop, regulation or compliance")

    class Config:
        frozen = True

    @field_validator("keywords")
    @classmethod
    def lowercase_keywords(cls, value: List[str]) -> List[str]:
        return [keyword.lower() for keyword in value]

    @computed_field
    @property
    def citation(self) -> str:
        """Human-readable locator, e.g. 'Policy.pdf, Page 12, ¶3'."""
        return f"{self.source_document}, Page {self.page}, ¶{self.paragraph}"


class RankedExcerpt(PolicyExcerpt):
    """Policy excerpt scored against a case query."""
    match_score: int = Field(ge=0, description="Number of query tokens matching a keyword")


class HistoricalCase(BaseModel):
    """A past claim decision and its eventual outcome."""
    case_type: str = Field(description="Claim type, e.g. Flood")
    jurisdiction: str = Field(description="Jurisdiction, e.g. Florida")
    claim_amount: float = Field(ge=0, description="Claimed amount in dollars")
    decision_made: str = Field(description="What the reviewer decided")
    outcome: str = Field(description="Approved, Rejected by manager, Audit failure, ...")
    days_to_resolve: int = Field(ge=0, description="Days until the case was resolved")
    issue: Optional[str] = Field(default=None, description="Reason the case failed, if it did")
    recorded_at: date = Field(description="Date the decision was recorded")

    class Config:
        frozen = True


class IssueCount(BaseModel):
    """Occurrences of one issue among similar cases."""
    issue: str
    count: int = Field(ge=1)


class MemorySummary(BaseModel):
    """Aggregate statistics over historical cases similar to the current one."""
    total_cases: int = Field(default=0, ge=0)
    failed_cases: int = Field(default=0, ge=0)
    failure_rate: int = Field(default=0, ge=0, le=100, description="Percentage of similar cases that failed")
    avg_resolution_time: float = Field(default=0.0, ge=0, description="Mean days to resolve, one decimal")
    issue_frequency: List[IssueCount] = Field(default_factory=list, description="Issues by count, descending")


class RiskFactor(BaseModel):
    """Individual risk factor that contributed to the regret score."""
    description: str
    impact: Impact
    probability: int = Field(ge=0, le=100)


class RiskAssessment(BaseModel):
    """Regret-aware risk assessment for the claim decision."""
    score: int = Field(ge=0, le=100, description="Regret score 0-100")
    tier: RiskTier
    factors: List[RiskFactor] = Field(default_factory=list, description="Factors in the order the rules fired")
    recommended_actions: List[str] = Field(default_factory=list)


class RiskThresholds(BaseModel):
    """Domain constants used by the risk scorer."""
    company_max_amount: float = 250000
    company_max_weight: int = 35
    company_max_probability: int = 85
    secondary_inspection_amount: float = 200000
    secondary_inspection_weight: int = 30
    secondary_inspection_probability: int = 90
    failure_rate_threshold: int = 50
    failure_rate_weight: int = 25
    end_of_day_hour: int = Field(default=16, ge=0, le=23)
    end_of_day_weight: int = 10
    end_of_day_probability: int = 45
    critical_above: int = 70
    high_above: int = 40
    recommended_actions_above: int = 50


class PipelineMetrics(BaseModel):
    """Metrics about the pipeline execution."""
    total_duration_seconds: float
    step_durations: Dict[str, float] = Field(default_factory=dict)
    excerpts_retrieved: int = Field(default=0)
    similar_cases: int = Field(default=0)


class AnalysisResult(BaseModel):
    """Complete result of analyzing one claim."""
    success: bool
    claim_type: str
    jurisdiction: str
    amount: Union[float, str, None] = None
    clock_hour: Optional[int] = Field(default=None, ge=0, le=23)

    knowledge: List[RankedExcerpt] = Field(default_factory=list)
    memory: Optional[MemorySummary] = Field(default=None)
    risk: Optional[RiskAssessment] = Field(default=None)

    metrics: Optional[PipelineMetrics] = Field(default=None)
    errors: List[str] = Field(default_factory=list)

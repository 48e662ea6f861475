"""
Step 3: Regret-Aware Risk Scoring
Estimates how likely an approval is to be overturned or flagged later.
"""

import logging
from typing import List, Optional

from claimsense.pipeline.models import (
    MemorySummary,
    RiskAssessment,
    RiskFactor,
    RiskThresholds,
)
from claimsense.pipeline.steps.memory_analysis import MemoryAnalysisStep
from claimsense.utils.amounts import Amount, parse_amount


logger = logging.getLogger(__name__)


def risk_tier(score: int, thresholds: Optional[RiskThresholds] = None) -> str:
    """Map a regret score to its tier. Boundaries belong to the lower tier."""
    thresholds = thresholds or RiskThresholds()
    if score > thresholds.critical_above:
        return "CRITICAL"
    if score > thresholds.high_above:
        return "HIGH"
    return "MODERATE"


def _thousands_label(amount: float) -> str:
    return f"${amount / 1000:,.0f}K"


class RiskScoringStep:
    """
    Combines policy amount thresholds, decision memory and the time of day
    into a bounded regret score, a tier and the factors that produced it.

    Rules are evaluated in a fixed order; each one that fires appends a
    factor and adds its weight. Only the total is capped at 100.
    """

    def __init__(
        self,
        memory_analyzer: MemoryAnalysisStep,
        thresholds: Optional[RiskThresholds] = None
    ):
        """Initialize with the memory analyzer used for the failure-rate rule."""
        self.memory_analyzer = memory_analyzer
        self.thresholds = thresholds or RiskThresholds()

    def execute(
        self,
        claim_type: str,
        jurisdiction: str,
        amount: Amount,
        clock_hour: int,
        memory: Optional[MemorySummary] = None
    ) -> RiskAssessment:
        """
        Score the regret risk of approving a claim.

        Args:
            claim_type: Claim type, e.g. "Flood"
            jurisdiction: Jurisdiction, e.g. "Florida"
            amount: Claimed amount as number or text
            clock_hour: Local hour (0-23) at which the decision is being made
            memory: Memory summary for the same inputs, computed if not given

        Returns:
            RiskAssessment with score, tier and factors in firing order
        """
        t = self.thresholds
        amount_value = parse_amount(amount)
        factors: List[RiskFactor] = []
        score = 0

        # NaN fails both comparisons
        if amount_value > t.company_max_amount:
            factors.append(RiskFactor(
                description=f"Amount exceeds company maximum ({_thousands_label(t.company_max_amount)})",
                impact="High",
                probability=t.company_max_probability,
            ))
            score += t.company_max_weight

        if amount_value > t.secondary_inspection_amount:
            factors.append(RiskFactor(
                description="Requires secondary inspection per policy",
                impact="High",
                probability=t.secondary_inspection_probability,
            ))
            score += t.secondary_inspection_weight

        if memory is None:
            memory = self.memory_analyzer.execute(claim_type, jurisdiction, amount)
        if memory.failure_rate > t.failure_rate_threshold:
            factors.append(RiskFactor(
                description=f"{memory.failure_rate}% of similar cases failed review",
                impact="High",
                probability=memory.failure_rate,
            ))
            score += t.failure_rate_weight

        if clock_hour >= t.end_of_day_hour:
            factors.append(RiskFactor(
                description="Decision made near end of business day",
                impact="Medium",
                probability=t.end_of_day_probability,
            ))
            score += t.end_of_day_weight

        score = min(score, 100)
        assessment = RiskAssessment(
            score=score,
            tier=risk_tier(score, t),
            factors=factors,
            recommended_actions=self._recommended_actions(score),
        )
        logger.debug(
            f"Regret score {assessment.score} ({assessment.tier}) from {len(factors)} factors"
        )
        return assessment

    def _recommended_actions(self, score: int) -> List[str]:
        """Follow-up actions shown to the reviewer for high regret scores."""
        if score <= self.thresholds.recommended_actions_above:
            return []
        return [
            "Request secondary inspection before approval",
            f"Reduce claim amount to company maximum ({_thousands_label(self.thresholds.company_max_amount)})",
            "Escalate to regional manager for review",
        ]

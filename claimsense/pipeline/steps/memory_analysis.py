"""
Step 2: Decision Memory Analysis
Summarizes how historical claims similar to the current one were judged.
"""

import logging
import math
from collections import Counter
from typing import Iterable, List

from claimsense.pipeline.models import HistoricalCase, IssueCount, MemorySummary
from claimsense.utils.amounts import Amount, parse_amount, round_half_up


logger = logging.getLogger(__name__)


class MemoryAnalysisStep:
    """
    Filters the decision history for similar cases and computes failure
    statistics, resolution time and the most common failure issues.

    A case is similar when claim type and jurisdiction match case-insensitively
    and the claimed amounts differ by less than the amount window.
    """

    DEFAULT_AMOUNT_WINDOW = 50000

    # Exact, case-sensitive outcome labels counted as failures
    FAILURE_OUTCOMES = frozenset({"Rejected by manager", "Audit failure"})

    def __init__(
        self,
        cases: Iterable[HistoricalCase],
        amount_window: float = DEFAULT_AMOUNT_WINDOW
    ):
        """Initialize with the decision history to analyze."""
        self.cases = tuple(cases)
        self.amount_window = amount_window

    def execute(
        self,
        claim_type: str,
        jurisdiction: str,
        amount: Amount
    ) -> MemorySummary:
        """
        Analyze decision memory for a claim.

        Args:
            claim_type: Claim type, e.g. "Flood"
            jurisdiction: Jurisdiction, e.g. "Florida"
            amount: Claimed amount as number or text; unparseable text matches nothing

        Returns:
            MemorySummary; all zeros when no similar case exists
        """
        similar = self.find_similar_cases(claim_type, jurisdiction, amount)
        total = len(similar)

        if total == 0:
            logger.debug(f"No similar cases for {claim_type}/{jurisdiction}/{amount}")
            return MemorySummary()

        failed = sum(1 for case in similar if self.is_failure(case))
        avg_days = sum(case.days_to_resolve for case in similar) / total

        summary = MemorySummary(
            total_cases=total,
            failed_cases=failed,
            failure_rate=int(round_half_up(100 * failed / total)),
            avg_resolution_time=round_half_up(avg_days, 1),
            issue_frequency=self._issue_frequency(similar),
        )
        logger.debug(
            f"Memory for {claim_type}/{jurisdiction}/{amount}: "
            f"{failed}/{total} failed ({summary.failure_rate}%)"
        )
        return summary

    def find_similar_cases(
        self,
        claim_type: str,
        jurisdiction: str,
        amount: Amount
    ) -> List[HistoricalCase]:
        """Historical cases similar to the given claim, in store order."""
        amount_value = parse_amount(amount)
        if math.isnan(amount_value):
            return []

        claim_type_key = (claim_type or "").lower()
        jurisdiction_key = (jurisdiction or "").lower()

        return [
            case for case in self.cases
            if case.case_type.lower() == claim_type_key
            and case.jurisdiction.lower() == jurisdiction_key
            and abs(case.claim_amount - amount_value) < self.amount_window
        ]

    def is_failure(self, case: HistoricalCase) -> bool:
        return case.outcome in self.FAILURE_OUTCOMES

    @staticmethod
    def _issue_frequency(cases: List[HistoricalCase]) -> List[IssueCount]:
        # Counter preserves first-encounter order; sorted() is stable
        counts = Counter(case.issue for case in cases if case.issue)
        ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [IssueCount(issue=issue, count=count) for issue, count in ordered]

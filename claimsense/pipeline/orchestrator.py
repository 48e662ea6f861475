"""
Pipeline Orchestrator
Coordinates knowledge retrieval, decision memory analysis and risk scoring.
"""

import time
import logging
from typing import Optional, Callable
from datetime import datetime

from claimsense.config import Settings, get_settings
from claimsense.core.knowledge_store import KnowledgeStore, get_knowledge_store
from claimsense.core.history_store import DecisionHistoryStore, get_history_store
from claimsense.pipeline.models import AnalysisResult, PipelineMetrics
from claimsense.pipeline.steps import (
    KnowledgeRetrievalStep,
    MemoryAnalysisStep,
    RiskScoringStep,
)
from claimsense.utils.amounts import Amount


logger = logging.getLogger(__name__)


class ClaimAnalysisPipeline:
    """
    Runs the three analysis steps for one claim.
    Holds only read-only tables and configuration, so one instance can
    serve any number of independent calls.
    """

    def __init__(
        self,
        knowledge_store: Optional[KnowledgeStore] = None,
        history_store: Optional[DecisionHistoryStore] = None,
        settings: Optional[Settings] = None,
        progress_callback: Optional[Callable[[int, str, str], None]] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the pipeline with its data tables.

        Args:
            knowledge_store: Policy excerpt catalog (configured default if not provided)
            history_store: Decision history (configured default if not provided)
            settings: Settings for thresholds (cached settings if not provided)
            progress_callback: Optional callback for progress updates
                             (step_number, step_name, status)
            clock: Returns the current local time when no clock hour is passed
        """
        self.settings = settings or get_settings()
        self.knowledge_store = knowledge_store if knowledge_store is not None else get_knowledge_store()
        self.history_store = history_store if history_store is not None else get_history_store()
        self.progress_callback = progress_callback
        self.clock = clock or datetime.now

        memory_analyzer = MemoryAnalysisStep(
            self.history_store,
            amount_window=self.settings.similarity_amount_window,
        )
        self.steps = {
            "knowledge_retrieval": KnowledgeRetrievalStep(
                self.knowledge_store,
                top_k=self.settings.retrieval_top_k,
            ),
            "memory_analysis": memory_analyzer,
            "risk_scoring": RiskScoringStep(
                memory_analyzer,
                thresholds=self.settings.risk_thresholds(),
            ),
        }

    def _report_progress(self, step: int, name: str, status: str):
        """Report progress if callback is set."""
        if self.progress_callback:
            self.progress_callback(step, name, status)

    def process(
        self,
        claim_type: str,
        jurisdiction: str,
        amount: Amount,
        clock_hour: Optional[int] = None
    ) -> AnalysisResult:
        """
        Analyze a claim.

        Args:
            claim_type: Claim type, e.g. "Flood"
            jurisdiction: Jurisdiction, e.g. "Florida"
            amount: Claimed amount as number or text
            clock_hour: Hour of the decision (0-23); read from the clock if omitted

        Returns:
            AnalysisResult with knowledge, memory and risk
        """
        start_time = time.time()
        step_durations = {}
        errors = []

        claim_type = claim_type or ""
        jurisdiction = jurisdiction or ""

        result = AnalysisResult(
            success=False,
            claim_type=claim_type,
            jurisdiction=jurisdiction,
            amount=amount,
        )

        try:
            if clock_hour is None:
                clock_hour = self.clock().hour
            if not 0 <= clock_hour <= 23:
                raise ValueError(f"clock_hour must be between 0 and 23, got {clock_hour}")
            result.clock_hour = clock_hour

            # Step 1: Knowledge Retrieval
            self._report_progress(1, "Knowledge Retrieval", "running")
            step_start = time.time()
            knowledge = self.steps["knowledge_retrieval"].execute(claim_type, jurisdiction, amount)
            step_durations["knowledge_retrieval"] = time.time() - step_start
            result.knowledge = knowledge
            self._report_progress(1, "Knowledge Retrieval", "complete")
            logger.info(f"Step 1 complete: {len(knowledge)} relevant policy excerpts")

            # Step 2: Decision Memory
            self._report_progress(2, "Decision Memory", "running")
            step_start = time.time()
            memory = self.steps["memory_analysis"].execute(claim_type, jurisdiction, amount)
            step_durations["memory_analysis"] = time.time() - step_start
            result.memory = memory
            self._report_progress(2, "Decision Memory", "complete")
            logger.info(
                f"Step 2 complete: {memory.total_cases} similar cases, "
                f"{memory.failure_rate}% failure rate"
            )

            # Step 3: Risk Scoring
            self._report_progress(3, "Risk Scoring", "running")
            step_start = time.time()
            risk = self.steps["risk_scoring"].execute(
                claim_type, jurisdiction, amount, clock_hour, memory=memory
            )
            step_durations["risk_scoring"] = time.time() - step_start
            result.risk = risk
            self._report_progress(3, "Risk Scoring", "complete")
            logger.info(f"Step 3 complete: Regret score {risk.score} ({risk.tier})")

            result.success = True

        except Exception as e:
            logger.exception(f"Pipeline error: {e}")
            errors.append(str(e))
            result.success = False

        # Record metrics
        total_duration = time.time() - start_time
        result.metrics = PipelineMetrics(
            total_duration_seconds=round(total_duration, 4),
            step_durations={k: round(v, 4) for k, v in step_durations.items()},
            excerpts_retrieved=len(result.knowledge),
            similar_cases=result.memory.total_cases if result.memory else 0,
        )
        result.errors = errors

        return result

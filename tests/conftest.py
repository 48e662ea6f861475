"""
Pytest configuration and fixtures.
"""

import pytest
from datetime import date

from claimsense.config import PACKAGE_DATA_DIR, Settings
from claimsense.core.knowledge_store import load_knowledge_store
from claimsense.core.history_store import DecisionHistoryStore, load_history_store
from claimsense.pipeline.models import HistoricalCase, PolicyExcerpt
from claimsense.pipeline.steps import (
    KnowledgeRetrievalStep,
    MemoryAnalysisStep,
    RiskScoringStep,
)


@pytest.fixture
def seed_knowledge_store():
    """The packaged five-excerpt policy catalog."""
    return load_knowledge_store(PACKAGE_DATA_DIR / "knowledge_base.json")


@pytest.fixture
def seed_history_store():
    """The packaged five-case Florida flood decision history."""
    return load_history_store(PACKAGE_DATA_DIR / "decision_history.json")


@pytest.fixture
def make_excerpt():
    """Factory for policy excerpts with sensible defaults."""
    def _make(excerpt_id: int, keywords, category: str = "policy", **overrides):
        data = {
            "id": excerpt_id,
            "source_document": f"Doc_{excerpt_id}.pdf",
            "page": 1,
            "paragraph": 1,
            "content": f"Excerpt {excerpt_id} content",
            "keywords": list(keywords),
            "category": category,
        }
        data.update(overrides)
        return PolicyExcerpt(**data)
    return _make


@pytest.fixture
def make_case():
    """Factory for historical cases with sensible defaults."""
    def _make(
        claim_amount: float = 280000,
        outcome: str = "Approved",
        issue=None,
        days_to_resolve: int = 2,
        case_type: str = "Flood",
        jurisdiction: str = "Florida",
    ):
        return HistoricalCase(
            case_type=case_type,
            jurisdiction=jurisdiction,
            claim_amount=claim_amount,
            decision_made="Approved with inspection",
            outcome=outcome,
            days_to_resolve=days_to_resolve,
            issue=issue,
            recorded_at=date(2024, 3, 1),
        )
    return _make


@pytest.fixture
def seed_retriever(seed_knowledge_store):
    return KnowledgeRetrievalStep(seed_knowledge_store)


@pytest.fixture
def seed_memory(seed_history_store):
    return MemoryAnalysisStep(seed_history_store)


@pytest.fixture
def seed_scorer(seed_memory):
    return RiskScoringStep(seed_memory)


@pytest.fixture
def high_failure_history(make_case):
    """Three similar Flood/Florida cases, two of which failed review."""
    return DecisionHistoryStore([
        make_case(280000, "Rejected by manager", "Missing secondary inspection report", 6),
        make_case(270000, "Audit failure", "Missing secondary inspection report", 9),
        make_case(290000, "Approved", None, 3),
    ])


@pytest.fixture
def default_settings():
    """Settings with default thresholds, independent of the environment cache."""
    return Settings()

"""
Decision History Store: the read-only log of past claim decisions and outcomes.
A deployment can substitute a case-management system as long as it yields HistoricalCase records.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Union

from pydantic import ValidationError

from claimsense.config import get_settings
from claimsense.exceptions import StoreLoadError
from claimsense.pipeline.models import HistoricalCase
from claimsense.utils.json_utils import load_json_records


logger = logging.getLogger(__name__)


class DecisionHistoryStore:
    """Ordered, immutable sequence of historical claim decisions."""

    def __init__(self, cases: Iterable[HistoricalCase]):
        self._cases = tuple(cases)

    def __iter__(self) -> Iterator[HistoricalCase]:
        return iter(self._cases)

    def __len__(self) -> int:
        return len(self._cases)

    @property
    def cases(self) -> tuple:
        return self._cases


def load_history_store(path: Union[str, Path]) -> DecisionHistoryStore:
    """
    Load and validate the decision history from a JSON file.

    Args:
        path: JSON file with a "cases" list

    Returns:
        DecisionHistoryStore in file order
    """
    records = load_json_records(path, "cases")

    cases = []
    for index, record in enumerate(records):
        try:
            cases.append(HistoricalCase.model_validate(record))
        except ValidationError as e:
            raise StoreLoadError(f"Invalid historical case at index {index}: {e}", Path(path)) from e

    logger.info(f"Decision history loaded: {len(cases)} cases from {path}")
    return DecisionHistoryStore(cases)


@lru_cache()
def get_history_store() -> DecisionHistoryStore:
    """Get the cached decision history configured in settings."""
    settings = get_settings()
    return load_history_store(settings.decision_history_path)

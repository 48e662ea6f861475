"""
Knowledge Store: the read-only catalog of policy excerpts used for retrieval.
A deployment can substitute a document repository as long as it yields PolicyExcerpt records.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from pydantic import ValidationError

from claimsense.config import get_settings
from claimsense.exceptions import StoreLoadError
from claimsense.pipeline.models import PolicyExcerpt
from claimsense.utils.json_utils import load_json_records


logger = logging.getLogger(__name__)


class KnowledgeStore:
    """
    Ordered, immutable sequence of policy excerpts.
    Store order is the tie-break order for equally scored retrieval results.
    """

    def __init__(self, excerpts: Iterable[PolicyExcerpt]):
        self._excerpts = tuple(excerpts)

    def __iter__(self) -> Iterator[PolicyExcerpt]:
        return iter(self._excerpts)

    def __len__(self) -> int:
        return len(self._excerpts)

    @property
    def excerpts(self) -> tuple:
        return self._excerpts

    def get(self, excerpt_id: int) -> Optional[PolicyExcerpt]:
        """Look up an excerpt by id."""
        for excerpt in self._excerpts:
            if excerpt.id == excerpt_id:
                return excerpt
        return None

    def by_category(self, category: str) -> List[PolicyExcerpt]:
        """Excerpts of one category, in store order."""
        return [e for e in self._excerpts if e.category == category]


def load_knowledge_store(path: Union[str, Path]) -> KnowledgeStore:
    """
    Load and validate a knowledge store from a JSON file.

    Args:
        path: JSON file with an "excerpts" list

    Returns:
        KnowledgeStore in file order

    Raises:
        StoreLoadError: if the file is unreadable, a record is invalid,
            or two excerpts share an id
    """
    records = load_json_records(path, "excerpts")

    excerpts = []
    seen_ids = set()
    for index, record in enumerate(records):
        try:
            excerpt = PolicyExcerpt.model_validate(record)
        except ValidationError as e:
            raise StoreLoadError(f"Invalid policy excerpt at index {index}: {e}", Path(path)) from e
        if excerpt.id in seen_ids:
            raise StoreLoadError(f"Duplicate policy excerpt id {excerpt.id}", Path(path))
        seen_ids.add(excerpt.id)
        excerpts.append(excerpt)

    logger.info(f"Knowledge store loaded: {len(excerpts)} excerpts from {path}")
    return KnowledgeStore(excerpts)


@lru_cache()
def get_knowledge_store() -> KnowledgeStore:
    """Get the cached knowledge store configured in settings."""
    settings = get_settings()
    return load_knowledge_store(settings.knowledge_base_path)

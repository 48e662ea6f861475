"""
Step 1: Knowledge Retrieval
Ranks policy excerpts by keyword overlap with the case details.
"""

import logging
from typing import Iterable, List, Sequence

from claimsense.pipeline.models import PolicyExcerpt, RankedExcerpt
from claimsense.utils.amounts import Amount, amount_text


logger = logging.getLogger(__name__)


class KnowledgeRetrievalStep:
    """
    Scores every excerpt in the knowledge store against a query built from
    claim type, jurisdiction and amount, and returns the best matches.

    A query token matches an excerpt when any of its keywords contains the
    token as a substring; the match score is the number of matching tokens.
    """

    DEFAULT_TOP_K = 5

    def __init__(self, excerpts: Iterable[PolicyExcerpt], top_k: int = DEFAULT_TOP_K):
        """Initialize with the excerpt catalog to search."""
        self.excerpts = tuple(excerpts)
        self.top_k = top_k

    def execute(
        self,
        claim_type: str,
        jurisdiction: str,
        amount: Amount
    ) -> List[RankedExcerpt]:
        """
        Retrieve the excerpts most relevant to a claim.

        Args:
            claim_type: Claim type, e.g. "Flood"
            jurisdiction: Jurisdiction, e.g. "Florida"
            amount: Claimed amount as number or text

        Returns:
            Up to top_k RankedExcerpt, highest match score first; excerpts with
            equal scores keep their store order
        """
        tokens = self.build_query_tokens(claim_type, jurisdiction, amount)

        ranked = []
        for excerpt in self.excerpts:
            score = self.match_score(tokens, excerpt.keywords)
            if score > 0:
                ranked.append(RankedExcerpt(
                    **excerpt.model_dump(exclude={"citation"}),
                    match_score=score,
                ))

        # list.sort is stable, so ties stay in store order
        ranked.sort(key=lambda item: item.match_score, reverse=True)
        results = ranked[:self.top_k]

        logger.debug(
            f"Retrieved {len(results)} of {len(ranked)} matching excerpts for tokens {tokens}"
        )
        return results

    @staticmethod
    def build_query_tokens(claim_type: str, jurisdiction: str, amount: Amount) -> List[str]:
        """Lower-cased whitespace tokens of '<claim_type> <jurisdiction> <amount>'."""
        query = f"{claim_type or ''} {jurisdiction or ''} {amount_text(amount)}".lower()
        return query.split()

    @staticmethod
    def match_score(tokens: Sequence[str], keywords: Sequence[str]) -> int:
        """Count the tokens contained in at least one keyword."""
        return sum(
            1 for token in tokens
            if token and any(token in keyword for keyword in keywords)
        )

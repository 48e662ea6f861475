"""
API routes for the claim decision support system.
"""

import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from claimsense import __version__
from claimsense.core.knowledge_store import get_knowledge_store
from claimsense.core.history_store import get_history_store
from claimsense.exceptions import StoreLoadError
from claimsense.pipeline.orchestrator import ClaimAnalysisPipeline
from claimsense.api.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    HealthResponse,
    HistoryListResponse,
    KnowledgeListResponse,
)


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Check the health status of the API and its data tables.
    """
    knowledge_excerpts = 0
    historical_cases = 0
    healthy = True
    try:
        knowledge_excerpts = len(get_knowledge_store())
        historical_cases = len(get_history_store())
    except StoreLoadError as e:
        logger.warning(f"Data table check failed: {e}")
        healthy = False

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=__version__,
        knowledge_excerpts=knowledge_excerpts,
        historical_cases=historical_cases,
        timestamp=datetime.utcnow(),
    )


@router.post(
    "/api/claims/analyze",
    response_model=AnalyzeResponse,
    responses={503: {"model": ErrorResponse}},
    tags=["Claims"],
    summary="Analyze a claim",
    description="Retrieve relevant policy rules, summarize similar past decisions and score regret risk"
)
async def analyze_claim(request: AnalyzeRequest):
    """
    Analyze a claim before a reviewer approves it.
    """
    pipeline = ClaimAnalysisPipeline()
    result = pipeline.process(
        request.claim_type,
        request.jurisdiction,
        request.amount,
        clock_hour=request.clock_hour,
    )

    if not result.success:
        raise HTTPException(status_code=500, detail="; ".join(result.errors) or "Analysis failed")

    return AnalyzeResponse(
        success=True,
        claim_type=result.claim_type,
        jurisdiction=result.jurisdiction,
        amount=request.amount,
        clock_hour=result.clock_hour,
        knowledge=result.knowledge,
        memory=result.memory,
        risk=result.risk,
        processing_time_seconds=result.metrics.total_duration_seconds if result.metrics else None,
    )


@router.get(
    "/api/knowledge",
    response_model=KnowledgeListResponse,
    responses={503: {"model": ErrorResponse}},
    tags=["Knowledge"],
    summary="List policy excerpts"
)
async def list_knowledge(category: Optional[str] = None):
    """
    List the policy excerpts in the knowledge store, optionally by category.
    """
    store = get_knowledge_store()
    excerpts = store.by_category(category) if category else list(store)
    return KnowledgeListResponse(excerpts=excerpts, count=len(excerpts))


@router.get(
    "/api/knowledge/{excerpt_id}",
    tags=["Knowledge"],
    summary="Get a policy excerpt"
)
async def get_knowledge_excerpt(excerpt_id: int):
    """
    Retrieve a single policy excerpt by id.
    """
    excerpt = get_knowledge_store().get(excerpt_id)
    if excerpt is None:
        raise HTTPException(status_code=404, detail=f"Excerpt {excerpt_id} not found")
    return excerpt


@router.get(
    "/api/history",
    response_model=HistoryListResponse,
    responses={503: {"model": ErrorResponse}},
    tags=["History"],
    summary="List historical decisions"
)
async def list_history(
    limit: int = Query(default=20, ge=1, le=500),
    skip: int = Query(default=0, ge=0)
):
    """
    List past claim decisions with pagination, in recorded order.
    """
    cases = get_history_store().cases
    page = list(cases[skip:skip + limit])
    return HistoryListResponse(
        cases=page,
        count=len(page),
        total=len(cases),
        skip=skip,
        limit=limit,
    )

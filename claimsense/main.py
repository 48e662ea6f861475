"""
FastAPI application entry point.
Claim Decision Support System
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from claimsense import __version__
from claimsense.config import get_settings
from claimsense.api.routes import router
from claimsense.api.schemas import ErrorResponse
from claimsense.core.knowledge_store import get_knowledge_store
from claimsense.core.history_store import get_history_store
from claimsense.exceptions import StoreLoadError


# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Loads the static tables at startup so configuration errors surface early.
    """
    # Startup
    logger.info("Starting Claim Decision Support API...")
    logger.info(f"API Version: {__version__}")

    try:
        knowledge = get_knowledge_store()
        history = get_history_store()
        logger.info(f"Loaded {len(knowledge)} policy excerpts and {len(history)} historical cases")
    except StoreLoadError as e:
        logger.warning(f"Data tables failed to load: {e}")
        logger.warning("API will start but analysis requests will fail")

    yield

    # Shutdown
    logger.info("Shutting down Claim Decision Support API...")


# Create FastAPI application
app = FastAPI(
    title="Claim Decision Support API",
    description="""
    Just-in-time knowledge for claim reviewers

    For a claim type, jurisdiction and amount this API returns:
    - **Relevant policy rules** ranked by keyword overlap, with citations
    - **Decision memory**: how similar past claims were judged
    - **Regret-aware risk**: a 0-100 score, tier and contributing factors

    ## Quick Start

    1. POST case details to `/api/claims/analyze`
    2. Review the policy rules, memory insights and risk factors
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routes
app.include_router(router)


@app.exception_handler(StoreLoadError)
async def store_load_error_handler(request: Request, exc: StoreLoadError):
    """Report unavailable data tables as 503."""
    logger.error(f"Data tables unavailable for {request.url.path}: {exc}")
    error = ErrorResponse(error="Data tables unavailable", detail=str(exc))
    return JSONResponse(status_code=503, content=error.model_dump())


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Claim Decision Support API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "claimsense.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )

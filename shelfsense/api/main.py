"""
HTTP API for grocery item classification and auto-complete.
"""

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from .schemas import (
    CategoryRequest,
    CategoryResponse,
    SuggestRequest,
    SuggestResponse,
    SuggestionModel,
    EmbedRequest,
    EmbedResponse,
    HealthResponse
)
from ..core.category_service import CategoryService, build_category_service
from ..core.config import VERSION, debug_enabled, get_cors_origins, get_suggest_limit
from ..core.errors import DimensionMismatch, EncoderUnavailable
from ..util.logging import logger

# Initialize the FastAPI application
app = FastAPI(
    title="ShelfSense API",
    version=VERSION,
    description="Embedding-based grocery item classification and auto-complete",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)

# Allow the UI dev server to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_category_service = None


def get_category_service() -> CategoryService:
    """Lazy initialization of the category service (catalog + encoder)."""
    global _category_service
    if _category_service is None:
        _category_service = build_category_service()
    return _category_service


@app.get("/api/health", response_model=HealthResponse)
def health_check_endpoint(service: CategoryService = Depends(get_category_service)):
    """Report catalog and model status."""
    health = service.health()
    return HealthResponse(
        status="ok" if health["catalog_size"] > 0 else "degraded",
        version=VERSION,
        **health
    )


@app.post("/api/category", response_model=CategoryResponse)
def classify_endpoint(request: CategoryRequest, service: CategoryService = Depends(get_category_service)):
    """Classify an item name into a grocery category."""
    try:
        result = service.classify_text(request.text)
    except DimensionMismatch as e:
        logger.log_operation("classify", "failed", {"text": request.text[:50], "error": str(e)})
        raise HTTPException(status_code=500, detail=f"Encoder and catalog are incompatible: {e}")

    return CategoryResponse.from_result(result)


@app.post("/api/suggest", response_model=SuggestResponse)
def suggest_endpoint(request: SuggestRequest, service: CategoryService = Depends(get_category_service)):
    """Auto-complete suggestions for partially typed text."""
    limit = request.limit or get_suggest_limit()
    try:
        suggestions = service.suggest_text(request.text, limit=limit)
    except DimensionMismatch as e:
        logger.log_operation("suggest", "failed", {"text": request.text[:50], "error": str(e)})
        raise HTTPException(status_code=500, detail=f"Encoder and catalog are incompatible: {e}")

    return SuggestResponse(suggestions=[SuggestionModel.from_suggestion(s) for s in suggestions])


@app.post("/api/embed", response_model=EmbedResponse)
def embed_endpoint(request: EmbedRequest, service: CategoryService = Depends(get_category_service)):
    """Return the normalized embedding for a piece of text."""
    try:
        vector = service.embed_text(request.text)
    except EncoderUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Failed to generate embedding: {e}")

    return EmbedResponse(vector=[float(v) for v in vector], dimension=len(vector))

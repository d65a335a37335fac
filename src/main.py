"""
History Studio - FastAPI application for the content workbench

Stateless HTTP surface over the studio core:
- Relevance matching of library materials and comparison cards
- Narration script draft assembly and Markdown export

The browser keeps the library, cards and drafts; each request carries the
records it needs. Nothing is stored server-side.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

# Load environment variables from .env.local (local dev) or .env (production)
from dotenv import load_dotenv

# Load .env.local first (highest priority), then .env as fallback
env_local = Path(__file__).parent.parent / ".env.local"
env_file = Path(__file__).parent.parent / ".env"

if env_local.exists():
    load_dotenv(env_local, override=True)
elif env_file.exists():
    load_dotenv(env_file, override=True)

# Configure logging: console (brief) + file (detailed)
from src.logging_config import setup_logging

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
console_level = getattr(logging, log_level, logging.INFO)
setup_logging(
    log_file=os.getenv("LOG_FILE", "logs/history-studio.log"),
    console_level=console_level,
    file_level=logging.DEBUG  # Always DEBUG in file for troubleshooting
)

logger = logging.getLogger(__name__)


from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from .matching import extract_profile, match_compare_cards, match_materials, recommend_for_topic
from .matching.profile import QueryProfile
from .models import CompareCard, CompareMatch, Material, MaterialMatch, QueryInput, ScriptDraft
from .script import ScriptAssemblyError, build_draft, draft_to_markdown
from .vocabulary import (
    CREDIBILITY_LEVELS,
    DIMENSION_HINTS,
    DIMENSIONS,
    DYNASTIES,
    PLATFORM_LABELS,
    SOURCE_TYPES,
)

# Configuration from environment variables
PORT = int(os.getenv("PORT", "8080"))

# Version tracking
APP_VERSION = "0.1.0"
APP_START_TIME = datetime.now(timezone.utc)

# FastAPI app
app = FastAPI(
    title="History Studio API",
    description="Hot-topic to history matching and narration script drafting",
    version=APP_VERSION,
)

# CORS middleware for the studio frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    version: str
    started_at: str
    uptime_seconds: float


class ProfileInfo(BaseModel):
    tokens: List[str]
    dimensions: List[str]
    dynasties: List[str]

    @classmethod
    def from_profile(cls, profile: QueryProfile) -> "ProfileInfo":
        return cls(
            tokens=list(profile.tokens),
            dimensions=list(profile.dimensions),
            dynasties=list(profile.dynasties),
        )


class MaterialMatchRequest(BaseModel):
    query: QueryInput = Field(
        ...,
        description="Free text, or a tagged object: {\"kind\": \"text\", ...} / {\"kind\": \"hot_topic\", ...}",
    )
    materials: List[Material] = Field(default_factory=list, description="Library snapshot to rank")
    limit: Optional[int] = Field(default=None, ge=0, le=100, description="Max results (default: 10)")

    class Config:
        json_schema_extra = {
            "example": {
                "query": "财政 改革 宋朝争议",
                "materials": [
                    {
                        "id": "mat_1",
                        "title": "王安石变法与青苗法",
                        "sourceType": "研究",
                        "credibility": "高",
                        "dynasties": ["宋元"],
                        "dimensions": ["财政", "制度"],
                    }
                ],
                "limit": 10,
            }
        }


class MaterialMatchResponse(BaseModel):
    query_profile: ProfileInfo
    results: List[MaterialMatch]
    total: int


class CompareMatchRequest(BaseModel):
    query: QueryInput
    cards: List[CompareCard] = Field(default_factory=list, description="Comparison cards to rank")
    limit: Optional[int] = Field(default=None, ge=0, le=100, description="Max results (default: 5)")


class CompareMatchResponse(BaseModel):
    query_profile: ProfileInfo
    results: List[CompareMatch]
    total: int


class RecommendRequest(BaseModel):
    query: QueryInput
    cards: List[CompareCard] = Field(default_factory=list)
    materials: List[Material] = Field(default_factory=list)


class RecommendResponse(BaseModel):
    cards: List[CompareMatch]
    materials: List[MaterialMatch]


class VocabularyResponse(BaseModel):
    dynasties: List[str]
    dimensions: List[str]
    dimension_hints: Dict[str, List[str]]
    source_types: List[str]
    credibility_levels: List[str]
    platforms: Dict[str, str]


class ScriptDraftRequest(BaseModel):
    topic_title: str = Field(default="", description="Hot topic title (falls back to the card's)")
    title: str = Field(default="", description="Script title")
    texts: Dict[str, str] = Field(default_factory=dict, description="Segment text by key: hook, hot, background, history, mapping, closing")
    angle: str = Field(default="", description="Angle hint appended to the mapping segment")
    card: Optional[CompareCard] = None


# Routes
@app.get("/", response_model=dict)
async def root():
    """Root endpoint"""
    return {
        "service": "History Studio API",
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    uptime = (datetime.now(timezone.utc) - APP_START_TIME).total_seconds()

    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        started_at=APP_START_TIME.isoformat().replace("+00:00", "Z"),
        uptime_seconds=round(uptime, 2),
    )


@app.get("/v1/vocabulary", response_model=VocabularyResponse)
async def vocabulary():
    """Fixed option lists for the studio forms (eras, dimensions, source types, ...)"""
    return VocabularyResponse(
        dynasties=list(DYNASTIES),
        dimensions=list(DIMENSIONS),
        dimension_hints={dim: list(hints) for dim, hints in DIMENSION_HINTS.items()},
        source_types=list(SOURCE_TYPES),
        credibility_levels=list(CREDIBILITY_LEVELS),
        platforms=dict(PLATFORM_LABELS),
    )


@app.post("/v1/match/materials", response_model=MaterialMatchResponse)
async def match_materials_endpoint(request: MaterialMatchRequest):
    """
    Rank library materials against a query.

    Scores are lexical (token overlap weighted per field) plus bonuses for
    shared dimensions and eras and a credibility adjustment.
    """
    profile = extract_profile(request.query)
    results = match_materials(profile, request.materials, limit=request.limit)
    logger.info(f"Material match: {len(request.materials)} candidates → {len(results)} results")

    return MaterialMatchResponse(
        query_profile=ProfileInfo.from_profile(profile),
        results=results,
        total=len(results),
    )


@app.post("/v1/match/compare", response_model=CompareMatchResponse)
async def match_compare_endpoint(request: CompareMatchRequest):
    """Rank comparison cards against a query."""
    profile = extract_profile(request.query)
    results = match_compare_cards(profile, request.cards, limit=request.limit)
    logger.info(f"Compare-card match: {len(request.cards)} candidates → {len(results)} results")

    return CompareMatchResponse(
        query_profile=ProfileInfo.from_profile(profile),
        results=results,
        total=len(results),
    )


@app.post("/v1/match/recommend", response_model=RecommendResponse)
async def recommend_endpoint(request: RecommendRequest):
    """Existing cards and supporting materials for a hot topic."""
    cards, materials = recommend_for_topic(request.query, request.cards, request.materials)
    return RecommendResponse(cards=cards, materials=materials)


def _assemble(request: ScriptDraftRequest) -> ScriptDraft:
    try:
        return build_draft(
            topic_title=request.topic_title,
            title=request.title,
            texts=request.texts,
            angle=request.angle,
            card=request.card,
        )
    except ScriptAssemblyError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.post("/v1/scripts/draft", response_model=ScriptDraft)
async def script_draft_endpoint(request: ScriptDraftRequest):
    """Assemble a narration script draft from the segment template."""
    return _assemble(request)


@app.post("/v1/scripts/markdown", response_class=PlainTextResponse)
async def script_markdown_endpoint(request: ScriptDraftRequest):
    """Assemble a draft and return it as a Markdown document."""
    draft = _assemble(request)
    return PlainTextResponse(draft_to_markdown(draft), media_type="text/markdown; charset=utf-8")


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=PORT,
        reload=True,  # Development only
    )

"""
FastAPI wrapper for SEO Content Analyzer - Vercel Serverless Function.

This module exposes the content and internal link analyzers as a REST API
for deployment on Vercel.
"""

import logging
from typing import Any, Literal, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from seo_content_analyzer import __version__
from seo_content_analyzer.broken_links import detect_broken_links
from seo_content_analyzer.config import (
    BrokenLinkPolicy,
    DensityPolicy,
    LinkGraphPolicy,
    LinkPlacementOptions,
)
from seo_content_analyzer.keyword_density import KeywordDensityAnalyzer, analyze_keyword_density
from seo_content_analyzer.language_precision import LanguagePrecisionEngine
from seo_content_analyzer.link_distribution import LinkDistributionAnalyzer
from seo_content_analyzer.link_placement import LinkPlacementOptimizer
from seo_content_analyzer.lsi_integrator import LSIKeywordIntegrator
from seo_content_analyzer.models import InvalidPageDataError, to_dict
from seo_content_analyzer.page_graph import build_incoming_links
from seo_content_analyzer.problem_solution import ProblemSolutionAligner

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO Content Analyzer API",
    description="Rule-based SEO content analysis and internal link auditing",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

precision_engine = LanguagePrecisionEngine()
lsi_integrator = LSIKeywordIntegrator()
aligner = ProblemSolutionAligner()
link_placer = LinkPlacementOptimizer()


@app.exception_handler(InvalidPageDataError)
async def invalid_page_data_handler(request: Request, exc: InvalidPageDataError):
    """Report malformed page records as validation errors."""
    logger.warning(f"Rejected page data on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ============================================================================
# Request / response models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class CompetitorInput(BaseModel):
    """Competitor page used for density comparison."""
    url: str
    content: str
    title: Optional[str] = None
    headings: list[str] = Field(default_factory=list)
    meta_description: Optional[str] = None


class KeywordDensityRequest(BaseModel):
    """Request model for keyword density analysis."""
    content: str = Field(..., description="Content to analyze")
    target_keywords: list[str] = Field(default_factory=list, description="Keywords to check density for")
    primary_keyword: Optional[str] = Field(
        None, description="When set, also return a detailed report for this keyword"
    )
    keyword_variations: list[str] = Field(default_factory=list)
    related_keywords: list[str] = Field(default_factory=list)
    title: Optional[str] = None
    headings: list[str] = Field(default_factory=list)
    meta_description: Optional[str] = None
    competitors: list[CompetitorInput] = Field(default_factory=list)
    low_density_threshold: float = Field(0.5, ge=0)
    high_density_threshold: float = Field(2.0, ge=0)


class ContentRequest(BaseModel):
    """Request carrying only content."""
    content: str


class LSIKeywordInput(BaseModel):
    """Single LSI term."""
    term: str
    relevance: float = Field(1.0, ge=0, le=1)
    semantic_score: float = Field(1.0, ge=0, le=1)
    context_strength: float = Field(0.0, ge=0, le=1)


class LSIPatternInput(BaseModel):
    """Competitor usage pattern for one term."""
    term: str
    frequency: int = Field(0, ge=0)
    positions: list[int] = Field(default_factory=list)
    context_words: list[str] = Field(default_factory=list)
    semantic_weight: float = 0.0


class LSIIntegrateRequest(BaseModel):
    """Request model for LSI term integration."""
    content: str
    lsi_keywords: list[LSIKeywordInput] = Field(default_factory=list)
    competitor_patterns: list[LSIPatternInput] = Field(default_factory=list)


class LSICompetitorRequest(BaseModel):
    """Request model for competitor LSI analysis."""
    competitor_contents: list[str] = Field(..., description="Plain text of competitor pages")


class AlignmentRequest(BaseModel):
    """Request model for problem-solution alignment."""
    content: str
    user_problems: list[str] = Field(default_factory=list)


class LinkGraphRequest(BaseModel):
    """Request model for link graph analysis."""
    pages: list[dict[str, Any]] = Field(
        ..., description="Page records with url, internalLinksTo and internalLinksFrom"
    )
    homepage_url: str
    policy: Literal["default", "strict", "lenient"] = "default"
    derive_incoming: bool = Field(
        False, description="Build incoming links from outgoing links before analysis"
    )


class BrokenLinksRequest(BaseModel):
    """Request model for broken link detection."""
    pages: list[dict[str, Any]]
    request_timeout: float = Field(10.0, gt=0)
    overall_timeout: float = Field(120.0, gt=0)
    max_workers: int = Field(8, ge=1, le=32)


class LinkToPlaceInput(BaseModel):
    """Single link to place."""
    keyword: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    priority: float = 1.0
    anchor_text_type: Literal["exact", "partial", "branded", "generic", "lsi"] = "exact"
    target_section: Optional[str] = None


class LinkPlacementOptionsInput(BaseModel):
    """Placement limits."""
    max_links_per_page: int = Field(100, ge=0)
    max_links_per_paragraph: int = Field(2, ge=1)
    min_distance_between_links: int = Field(50, ge=0)
    preferred_link_density: float = Field(2.0, gt=0)
    avoid_link_clusters: bool = True
    respect_existing_links: bool = True


class LinkPlacementRequest(BaseModel):
    """Request model for internal link placement."""
    content: str
    links: list[LinkToPlaceInput] = Field(default_factory=list)
    options: Optional[LinkPlacementOptionsInput] = None


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@app.post("/api/keyword-density")
async def keyword_density(request: KeywordDensityRequest):
    """
    Analyze keyword density.

    Returns content suggestions for the target keywords and, when a
    primary keyword is given, a detailed density report (with competitor
    comparison when competitors are supplied).
    """
    try:
        policy = DensityPolicy(
            low_density_threshold=request.low_density_threshold,
            high_density_threshold=request.high_density_threshold,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    response: dict[str, Any] = {
        "suggestions": to_dict(
            analyze_keyword_density(request.content, request.target_keywords, policy)
        ),
    }

    if request.primary_keyword:
        analyzer = KeywordDensityAnalyzer(
            request.primary_keyword,
            keyword_variations=request.keyword_variations,
            related_keywords=request.related_keywords,
            policy=policy,
        )
        report = analyzer.analyze_content(
            request.content,
            title=request.title,
            headings=request.headings,
            meta_description=request.meta_description,
        )
        if request.competitors:
            report = analyzer.compare_with_competitors(
                report, [c.model_dump() for c in request.competitors]
            )
        response["report"] = to_dict(report)

    return response


@app.post("/api/precision")
async def precision(request: ContentRequest):
    """Replace vague language and report the changes with before/after scores."""
    result = precision_engine.enhance_precision(request.content)
    return {
        "content": result.content,
        "changes": to_dict(result.changes),
        "score_before": precision_engine.calculate_precision_score(request.content),
        "score_after": precision_engine.calculate_precision_score(result.content),
    }


@app.post("/api/precision/score")
async def precision_score(request: ContentRequest):
    """Score word choice precision and list vague words and unclear phrases."""
    return {
        "score": precision_engine.calculate_precision_score(request.content),
        "analysis": to_dict(precision_engine.analyze_word_choice(request.content)),
    }


@app.post("/api/lsi/integrate")
async def lsi_integrate(request: LSIIntegrateRequest):
    """Integrate semantic terms into content."""
    result = lsi_integrator.integrate_semantic_terms(
        request.content,
        [k.model_dump() for k in request.lsi_keywords],
        [p.model_dump() for p in request.competitor_patterns],
    )
    return to_dict(result)


@app.post("/api/lsi/competitors")
async def lsi_competitors(request: LSICompetitorRequest):
    """Aggregate semantic term usage across competitor documents."""
    return to_dict(lsi_integrator.analyze_competitor_lsi_patterns(request.competitor_contents))


@app.post("/api/alignment")
async def alignment(request: AlignmentRequest):
    """Check problem coverage and solution quality."""
    analysis = aligner.validate_alignment(request.content, request.user_problems)
    return {
        "analysis": to_dict(analysis),
        "stats": to_dict(aligner.get_alignment_stats(analysis)),
    }


@app.post("/api/links/analyze")
async def links_analyze(request: LinkGraphRequest):
    """Analyze internal link distribution. Malformed page records return 422."""
    policy = {
        "default": LinkGraphPolicy,
        "strict": LinkGraphPolicy.strict,
        "lenient": LinkGraphPolicy.lenient,
    }[request.policy]()

    pages = build_incoming_links(request.pages) if request.derive_incoming else request.pages
    result = LinkDistributionAnalyzer(policy).analyze(pages, request.homepage_url)
    return to_dict(result)


@app.post("/api/links/broken")
def links_broken(request: BrokenLinksRequest):
    """
    Check outgoing internal links with HEAD requests.

    Runs in the threadpool since it blocks on network I/O.
    """
    policy = BrokenLinkPolicy(
        request_timeout=request.request_timeout,
        overall_timeout=request.overall_timeout,
        max_workers=request.max_workers,
    )
    broken = detect_broken_links(request.pages, policy)
    return {"broken_links": to_dict(broken), "count": len(broken)}


@app.post("/api/links/place")
async def links_place(request: LinkPlacementRequest):
    """Place internal links into content."""
    options = LinkPlacementOptions(**request.options.model_dump()) if request.options else None
    result = link_placer.optimize(
        request.content,
        [link.model_dump() for link in request.links],
        options,
    )
    return to_dict(result)


@app.get("/api/info")
async def api_info():
    """Get API information and usage instructions."""
    return {
        "name": "SEO Content Analyzer API",
        "version": __version__,
        "description": "Rule-based SEO content analysis and internal link auditing",
        "endpoints": {
            "GET /api/health": "Health check",
            "POST /api/keyword-density": "Keyword density suggestions and detailed report",
            "POST /api/precision": "Replace vague language",
            "POST /api/precision/score": "Score word choice precision",
            "POST /api/lsi/integrate": "Integrate LSI terms into content",
            "POST /api/lsi/competitors": "Analyze competitor LSI term usage",
            "POST /api/alignment": "Problem-solution alignment",
            "POST /api/links/analyze": "Internal link distribution analysis",
            "POST /api/links/broken": "Broken link detection",
            "POST /api/links/place": "Internal link placement",
            "GET /api/info": "This endpoint",
        },
        "documentation": "/docs",
        "openapi": "/openapi.json",
    }

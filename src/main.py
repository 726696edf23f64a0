"""
TruthLens Credibility Service - HTTP API
Scores news text and sources with the heuristic truth engine
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
import logging
import time
import os
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from truthlens import __version__
from truthlens.config import get_settings
from truthlens.engine import TruthLensEngine
from truthlens.errors import InvalidUrl, MalformedInput
from truthlens.models import AnalysisRequest, AnalysisResult, FlaggedClaim, SourceRecord


# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('logs/truthlens.log') if os.path.exists('logs') else logging.NullHandler()
    ]
)

logger = logging.getLogger(__name__)

# Load environment variables early so Settings picks them up
load_dotenv()

TITLE = "TruthLens Credibility Service"
DESCRIPTION = "Heuristic credibility scoring for news text and sources"
MIN_ANALYSIS_LENGTH = 50


class Metrics:
    """Per-path request counters served by /metrics"""

    def __init__(self):
        self.started_at = time.time()
        self.requests_by_path: Dict[str, int] = {}
        self.failed_requests = 0
        self.fallback_results = 0
        self.total_processing_time = 0.0

    @property
    def total_requests(self) -> int:
        return sum(self.requests_by_path.values())

    def record_request(self, path: str, status_code: int, processing_time: float):
        """Count one finished request; 4xx and 5xx responses count as failures"""
        self.requests_by_path[path] = self.requests_by_path.get(path, 0) + 1
        if status_code >= 400:
            self.failed_requests += 1
        self.total_processing_time += processing_time

    def record_fallback(self):
        self.fallback_results += 1

    def get_stats(self) -> Dict[str, Any]:
        total = self.total_requests
        succeeded = total - self.failed_requests
        return {
            "total_requests": total,
            "failed_requests": self.failed_requests,
            "fallback_results": self.fallback_results,
            "success_rate": f"{succeeded / total * 100:.1f}%" if total else "N/A",
            "average_processing_time": f"{(self.total_processing_time / total if total else 0):.3f}s",
            "requests_by_path": dict(self.requests_by_path),
            "uptime_seconds": int(time.time() - self.started_at)
        }


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("=" * 60)
    logger.info(f"Starting {TITLE} v{__version__}")
    logger.info("=" * 60)

    settings = get_settings()
    app.state.engine = TruthLensEngine.from_settings(settings)
    app.state.metrics = Metrics()
    logger.info(f"  Cache TTL: {settings.cache_ttl_seconds}s")
    logger.info(f"  Fact-check budget: {settings.fact_check_requests_per_minute}/min")

    logger.info("Service ready")
    yield

    logger.info("Shutting down...")
    app.state.engine.cache.clear()
    logger.info("Shutdown complete")


app = FastAPI(
    title=TITLE,
    version=__version__,
    description=DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def record_metrics(request: Request, call_next):
    """Time every request and record its status, including error responses"""
    started = time.time()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        metrics = getattr(request.app.state, "metrics", None)
        if metrics is not None:
            metrics.record_request(request.url.path, status_code, time.time() - started)


@app.exception_handler(InvalidUrl)
@app.exception_handler(MalformedInput)
async def input_exception_handler(request: Request, exc: Exception):
    """Caller errors the engine refuses to work with"""
    return JSONResponse(
        status_code=422,
        content={"error": type(exc).__name__, "detail": str(exc)}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc) if os.getenv("DEBUG") else "An error occurred"
        }
    )


# Request/Response models
class AnalyzeRequest(BaseModel):
    """Text analysis request"""

    text: str = Field(..., min_length=MIN_ANALYSIS_LENGTH, max_length=10000, description="News text to analyze")
    url: Optional[str] = Field(None, description="Source URL if available")


class SourceRequest(BaseModel):
    url: str = Field(..., min_length=1, description="Source URL or bare domain")


class TextRequest(BaseModel):
    text: str = Field(..., description="Text to extract claims from")


class ClaimsResponse(BaseModel):
    claims: List[str]


class ScanResponse(BaseModel):
    flagged: List[FlaggedClaim]


# API endpoints
@app.get("/")
async def root():
    """Root endpoint with service information"""
    return {
        "service": TITLE,
        "version": __version__,
        "status": "operational",
        "endpoints": {
            "analyze": "POST /analyze",
            "source": "POST /source",
            "claims": "POST /claims",
            "scan": "POST /scan",
            "health": "GET /health",
            "metrics": "GET /metrics"
        }
    }


@app.get("/health")
async def health_check(request: Request):
    """Health check"""
    engine: TruthLensEngine = request.app.state.engine
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {
            "api": "healthy",
            "fact_check": "live" if engine.fact_checker.is_live else "offline",
            "cache": "memory"
        }
    }


@app.get("/metrics")
async def get_metrics(request: Request):
    """Get service metrics"""
    return {
        "service": TITLE,
        "version": __version__,
        "metrics": request.app.state.metrics.get_stats(),
        "cache": request.app.state.engine.cache.get_stats()
    }


@app.post("/analyze", response_model=AnalysisResult)
async def analyze(request_body: AnalyzeRequest, request: Request):
    """Score a piece of news text, optionally with its source URL"""
    engine: TruthLensEngine = request.app.state.engine
    logger.info(f"New analysis: {request_body.text[:50]}...")
    result = await engine.analyze(AnalysisRequest(text=request_body.text, source_url=request_body.url))
    if result.metadata.fallback_mode:
        request.app.state.metrics.record_fallback()
    return result


@app.post("/source", response_model=SourceRecord)
async def analyze_source(request_body: SourceRequest, request: Request):
    """Rate a source domain"""
    return await request.app.state.engine.analyze_source(request_body.url)


@app.post("/claims", response_model=ClaimsResponse)
async def extract_claims(request_body: TextRequest, request: Request):
    """Extract candidate factual claims"""
    claims = await request.app.state.engine.extract_claims(request_body.text)
    return ClaimsResponse(claims=claims)


@app.post("/scan", response_model=ScanResponse)
async def scan_claims(request_body: TextRequest, request: Request):
    """Flag suspicious claims for live checking"""
    flagged = await request.app.state.engine.scan_claims(request_body.text)
    return ScanResponse(flagged=flagged)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8080")))

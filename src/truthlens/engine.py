from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

from .analyzers import LinguisticAnalyzer, SentimentScanner
from .cache import ResultCache, fingerprint
from .claims import ClaimExtractor
from .composer import ResultComposer
from .config import Settings, get_settings
from .errors import InvalidUrl, MalformedInput
from .factcheck import FactCheckResolver, GoogleFactCheckProvider, OfflineFactCheckProvider
from .models import (
    AnalysisRequest,
    AnalysisResult,
    FactCheckResolution,
    FlaggedClaim,
    SourceRecord,
    SubAnalyses,
)
from .rate_limit import RateLimiter
from .reputation import SourceAnalyzer
from .scoring import TruthScoreAggregator

logger = logging.getLogger(__name__)


@dataclass
class TruthLensEngine:
    """Owns every analyzer plus the shared cache and fact-check rate limiter.

    Build one per process and hand it to whoever needs it.
    """

    linguistic: LinguisticAnalyzer = field(default_factory=LinguisticAnalyzer)
    sources: SourceAnalyzer = field(default_factory=SourceAnalyzer)
    claims: ClaimExtractor = field(default_factory=ClaimExtractor)
    fact_checker: FactCheckResolver = field(default_factory=FactCheckResolver)
    sentiment: SentimentScanner = field(default_factory=SentimentScanner)
    aggregator: TruthScoreAggregator = field(default_factory=TruthScoreAggregator)
    composer: ResultComposer = field(default_factory=ResultComposer)
    cache: ResultCache = field(default_factory=ResultCache)
    live_scan_min_length: int = 50

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TruthLensEngine":
        settings = settings or get_settings()
        live_provider = None
        if settings.live_fact_check_ready:
            live_provider = GoogleFactCheckProvider(
                settings.fact_check_api_key,
                endpoint=settings.fact_check_api_url,
                timeout=settings.fact_check_timeout,
            )
            logger.info("Live fact-check lookups enabled")
        else:
            logger.info("Live fact-check lookups disabled; using offline matcher")

        rate_limiter = RateLimiter(
            settings.fact_check_requests_per_minute,
            backoff=settings.fact_check_backoff_seconds,
        )
        return cls(
            fact_checker=FactCheckResolver(
                live_provider,
                fallback=OfflineFactCheckProvider(),
                rate_limiter=rate_limiter,
            ),
            cache=ResultCache(settings.cache_ttl_seconds),
            live_scan_min_length=settings.live_scan_min_length,
        )

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        return await self.analyze_text(request.text, request.source_url)

    async def analyze_text(self, text: str, source_url: str | None = None) -> AnalysisResult:
        if not isinstance(text, str) or not text.strip():
            raise MalformedInput("Text to analyze must be a non-empty string")

        key = fingerprint(text)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for %s", key)
            return cached
        logger.debug("Cache miss for %s", key)

        started = time.perf_counter()
        try:
            analyses = await self._run_analyses(text, source_url)
            truth = self.aggregator.aggregate(analyses)
            result = self.composer.compose(
                text,
                truth,
                fingerprint=key,
                processing_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        except Exception as exc:
            logger.error("Analysis failed, returning fallback result: %s", exc, exc_info=True)
            return self.composer.fallback(text, fingerprint=key)

        self.cache.put(key, result)
        logger.info(
            "Analyzed %s: %d%% (%s) in %.1fms",
            key,
            result.truth_percentage,
            result.verdict.value,
            result.metadata.processing_ms or 0.0,
        )
        return result

    async def analyze_source(self, url: str) -> SourceRecord:
        if isinstance(url, str) and url.strip() and "://" not in url:
            url = f"https://{url.strip()}"
        return await asyncio.to_thread(self.sources.analyze, url)

    async def extract_claims(self, text: str) -> list[str]:
        return self.claims.extract_claims(text)

    async def scan_claims(self, text: str) -> list[FlaggedClaim]:
        return self.claims.scan(text, min_length=self.live_scan_min_length)

    async def _run_analyses(self, text: str, source_url: str | None) -> SubAnalyses:
        results = await asyncio.gather(
            asyncio.to_thread(self.linguistic.analyze, text),
            self._source_or_none(source_url),
            self._fact_check(text),
            asyncio.to_thread(self.claims.analyze, text),
            asyncio.to_thread(self.sentiment.scan, text),
            return_exceptions=True,
        )
        linguistic, source, fact_check, claims, sentiment = (
            self._degrade(name, value)
            for name, value in zip(
                ("linguistic", "source", "fact_check", "claims", "sentiment"), results
            )
        )
        return SubAnalyses(
            linguistic=linguistic,
            source=source,
            fact_check=fact_check,
            claims=claims,
            sentiment=sentiment,
        )

    async def _source_or_none(self, source_url: str | None) -> SourceRecord | None:
        if not source_url:
            return None
        try:
            return await asyncio.to_thread(self.sources.analyze, source_url)
        except InvalidUrl as exc:
            logger.warning("Ignoring source URL: %s", exc)
            return None

    async def _fact_check(self, text: str) -> FactCheckResolution:
        claims = self.claims.extract_claims(text)
        return await self.fact_checker.resolve(claims)

    @staticmethod
    def _degrade(name: str, value: object):
        if isinstance(value, BaseException):
            if not isinstance(value, Exception):
                raise value
            logger.warning("%s analysis failed, scoring it as neutral: %s", name, value)
            return None
        return value

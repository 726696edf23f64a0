"""
Fact-check lookup and consensus.
Providers share one contract, ``search(claims) -> findings``. The offline matcher
is always available; a live provider is consulted first when configured and
any failure there falls back to the offline matcher.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, get_args

import httpx

from .errors import ProviderUnavailable
from .models import FactCheckFinding, FactCheckResolution, Rating
from .rate_limit import RateLimiter

logger = logging.getLogger(__name__)

KNOWN_RATINGS = frozenset(get_args(Rating))

RATING_SCORES: dict[str, float] = {
    "true": 95,
    "mostly-true": 80,
    "half-true": 50,
    "mostly-false": 25,
    "false": 5,
    "pants-on-fire": 0,
    "unsubstantiated": 40,
    "misleading": 35,
}
NEUTRAL_SCORE = 50.0


def normalize_rating(textual: str | None) -> str:
    """Map free-text ratings such as 'Pants on Fire!' onto the rating set."""
    if not textual:
        return "unknown"
    slug = re.sub(r"[^a-z]+", "-", textual.lower()).strip("-")
    return slug if slug in KNOWN_RATINGS else "unknown"


def rating_to_score(rating: str | None, scores: dict[str, float] | None = None) -> float:
    if not rating:
        return NEUTRAL_SCORE
    return float((scores or RATING_SCORES).get(rating, NEUTRAL_SCORE))


def consensus(findings: Sequence[FactCheckFinding]) -> str | None:
    """
    Majority rating; on a tie the rating seen first wins.

    Votes are cast on the publisher's own wording, lower-cased, so distinct
    unrecognised verdicts do not pool into a single "unknown" vote. The winning
    wording is normalised for scoring.
    """
    if not findings:
        return None
    counts: dict[str, int] = {}
    for finding in findings:
        vote = finding.display_rating.lower()
        counts[vote] = counts.get(vote, 0) + 1
    best, best_count = None, 0
    for vote, count in counts.items():
        if count > best_count:
            best, best_count = vote, count
    return normalize_rating(best)


class FactCheckProvider(Protocol):
    async def search(self, claims: Sequence[str]) -> list[FactCheckFinding]:
        ...


class OfflineFactCheckProvider:
    """Deterministic matcher for a handful of well-known misinformation themes.

    Only the first two claims are inspected and a claim yields at most one
    finding. Claims that match no theme produce nothing.
    """

    max_claims = 2
    CONSPIRACY_TOPICS = re.compile(r"5g|chemtrails|flat earth|moon landing.*fake", re.IGNORECASE)
    ELECTION_FRAUD = re.compile(r"election.*(?:rigged|stolen|fraud)", re.IGNORECASE)

    async def search(self, claims: Sequence[str]) -> list[FactCheckFinding]:
        return [
            finding
            for finding in (self.match(claim) for claim in claims[: self.max_claims])
            if finding is not None
        ]

    def match(self, claim: str) -> FactCheckFinding | None:
        lowered = claim.lower()
        if "cure for" in lowered and ("cancer" in lowered or "aging" in lowered):
            return FactCheckFinding(
                claim_text=claim,
                rating="false",
                textual_rating="False",
                source="Medical Fact Database",
                confidence=95,
                explanation="No verified cure exists for this condition. Be cautious of miracle cure claims.",
            )
        if "vaccine" in lowered and "dangerous" in lowered:
            return FactCheckFinding(
                claim_text=claim,
                rating="mostly-false",
                textual_rating="Mostly False",
                source="Health Fact Checkers",
                confidence=90,
                explanation=(
                    "Vaccines undergo rigorous safety testing. While side effects can occur, "
                    "benefits far outweigh risks."
                ),
            )
        if self.CONSPIRACY_TOPICS.search(lowered):
            return FactCheckFinding(
                claim_text=claim,
                rating="false",
                textual_rating="False",
                source="Science Verification Network",
                confidence=99,
                explanation="This claim contradicts established scientific evidence and expert consensus.",
            )
        if self.ELECTION_FRAUD.search(lowered):
            return FactCheckFinding(
                claim_text=claim,
                rating="unsubstantiated",
                textual_rating="Unsubstantiated",
                source="Election Fact Checkers",
                confidence=85,
                explanation=(
                    "No credible evidence supports widespread election fraud claims. "
                    "Multiple audits found no significant irregularities."
                ),
            )
        return None


class GoogleFactCheckProvider:
    """Google Fact Check Tools claims:search client."""

    max_claims = 3

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = "https://factchecktools.googleapis.com/v1alpha1/claims:search",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport

    async def search(self, claims: Sequence[str]) -> list[FactCheckFinding]:
        findings: list[FactCheckFinding] = []
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            for claim in claims[: self.max_claims]:
                params = {"query": claim[:500], "key": self._api_key}
                try:
                    response = await client.get(self._endpoint, params=params)
                    response.raise_for_status()
                    payload = response.json()
                except (httpx.HTTPError, ValueError) as exc:
                    raise ProviderUnavailable(f"Fact-check lookup failed: {exc}") from exc
                if not isinstance(payload, dict):
                    raise ProviderUnavailable("Fact-check lookup returned an unexpected payload")
                try:
                    findings.extend(self._parse_claims(payload.get("claims") or []))
                except (AttributeError, TypeError, ValueError) as exc:
                    raise ProviderUnavailable(f"Malformed fact-check payload: {exc}") from exc
        return findings

    def _parse_claims(self, items: list[dict]) -> list[FactCheckFinding]:
        if not isinstance(items, list):
            raise ProviderUnavailable("Fact-check lookup returned no claim list")
        output: list[FactCheckFinding] = []
        for item in items:
            if not isinstance(item, dict):
                raise ProviderUnavailable(f"Unexpected claim entry: {item!r}")
            reviews = item.get("claimReview")
            review = reviews[0] if isinstance(reviews, list) and reviews else {}
            if not isinstance(review, dict):
                review = {}
            textual = review.get("textualRating")
            if not isinstance(textual, str):
                textual = None
            output.append(
                FactCheckFinding(
                    claim_text=item.get("text", ""),
                    rating=normalize_rating(textual),
                    textual_rating=textual,
                    source=(review.get("publisher") or {}).get("name") or "Fact-check",
                    url=review.get("url"),
                    date=self._parse_datetime(review.get("reviewDate")),
                )
            )
        return output

    @staticmethod
    def _parse_datetime(value: str | None) -> datetime | None:
        if not value or not isinstance(value, str):
            return None
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None


class FactCheckResolver:
    def __init__(
        self,
        provider: FactCheckProvider | None = None,
        *,
        fallback: FactCheckProvider | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self._fallback = fallback or OfflineFactCheckProvider()
        self._provider = provider or self._fallback
        self._rate_limiter = rate_limiter

    @property
    def is_live(self) -> bool:
        return self._provider is not self._fallback

    async def resolve(self, claims: Sequence[str]) -> FactCheckResolution:
        try:
            if self._rate_limiter is not None:
                await self._rate_limiter.acquire()
            findings = await self._search(list(claims))
        except Exception as exc:
            logger.error("Fact-check resolution failed: %s", exc, exc_info=True)
            return FactCheckResolution(found=False, count=0)

        return FactCheckResolution(
            found=bool(findings),
            count=len(findings),
            fact_checks=tuple(findings),
            consensus=consensus(findings),
        )

    async def _search(self, claims: list[str]) -> list[FactCheckFinding]:
        if not self.is_live:
            return await self._fallback.search(claims)
        try:
            return await self._provider.search(claims)
        except ProviderUnavailable as exc:
            logger.warning("Live fact-check unavailable, using offline matcher: %s", exc)
            return await self._fallback.search(claims)

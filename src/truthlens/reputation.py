from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

from .directory import CredibilityDirectory
from .errors import InvalidUrl
from .models import SourceRecord

logger = logging.getLogger(__name__)

SUSPICIOUS_TLDS = (".xyz", ".info", ".click", ".top", ".site", ".loan")
TRUSTED_TLDS = (".gov", ".edu", ".org")
SPAM_PATTERNS = (
    re.compile(r"\d{3,}"),
    re.compile(r"-news-"),
    re.compile(r"real.*truth", re.IGNORECASE),
    re.compile(r"facts?-", re.IGNORECASE),
    re.compile(r"breaking", re.IGNORECASE),
    re.compile(r"247|24x7", re.IGNORECASE),
)
UNKNOWN_DESCRIPTION = "Unknown source. Credibility estimated based on domain analysis."


class SourceAnalyzer:
    """Resolve a URL to its domain and rate the domain's credibility."""

    def __init__(self, directory: CredibilityDirectory | None = None) -> None:
        self._directory = directory or CredibilityDirectory()

    def analyze(self, url: str) -> SourceRecord:
        domain = self.extract_domain(url)
        entry = self._directory.lookup(domain)
        if entry is not None:
            return SourceRecord(
                domain=domain,
                score=entry.score,
                bias=entry.bias,
                reliability=entry.reliability,
                in_database=True,
                description=self._directory.describe(domain, entry),
            )
        return self.estimate_unknown(domain)

    @staticmethod
    def extract_domain(url: str) -> str:
        if not isinstance(url, str) or not url.strip():
            raise InvalidUrl(f"Not a URL: {url!r}")
        try:
            hostname = urlparse(url.strip()).hostname
        except ValueError as exc:
            raise InvalidUrl(f"Cannot parse URL {url!r}: {exc}") from exc
        if not hostname:
            raise InvalidUrl(f"URL has no hostname: {url!r}")
        return hostname.removeprefix("www.")

    def estimate_unknown(self, domain: str) -> SourceRecord:
        score = 50
        if domain.endswith(SUSPICIOUS_TLDS):
            score -= 20
        if domain.endswith(TRUSTED_TLDS):
            score += 25
        if any(pattern.search(domain) for pattern in SPAM_PATTERNS):
            score -= 15
        if len(domain) > 30:
            score -= 10
        score = max(0, min(100, score))
        logger.debug("Estimated unknown domain %s at %d", domain, score)
        return SourceRecord(
            domain=domain,
            score=score,
            bias="unknown",
            reliability="medium" if score > 70 else "low",
            in_database=False,
            description=UNKNOWN_DESCRIPTION,
        )

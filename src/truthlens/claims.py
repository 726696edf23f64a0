"""
Claim and evidence extraction.
Claims and evidence are extracted independently; the ratio between them is a
document-level signal, not a per-claim link.
"""

from __future__ import annotations

from typing import List

from .models import ClaimAnalysis, FlaggedClaim
from .patterns import (
    CLAIM_VERB,
    EVIDENCE_PATTERNS,
    QUESTION_OPENER,
    matching_rules,
    split_sentences,
)

MIN_CLAIM_LENGTH = 20
MAX_CLAIM_LENGTH = 200
KEPT_SENTENCES = 5

# (category, points per matching pattern, reason)
SCAN_RULES = (
    ("clickbait", 20, "Clickbait language"),
    ("conspiracy", 30, "Conspiracy rhetoric"),
    ("sensationalism", 25, "Sensationalist wording"),
)
SCAN_THRESHOLD = 20


class ClaimExtractor:
    """Extract declarative claims and evidence-bearing sentences from text"""

    @staticmethod
    def extract_claims(text: str) -> List[str]:
        claims = []
        for sentence in split_sentences(text):
            if not MIN_CLAIM_LENGTH <= len(sentence) < MAX_CLAIM_LENGTH:
                continue
            stripped = sentence.strip()
            if CLAIM_VERB.search(sentence) and not QUESTION_OPENER.match(stripped):
                claims.append(stripped)
        return claims

    @staticmethod
    def find_evidence(text: str) -> List[str]:
        return [
            sentence.strip()
            for sentence in split_sentences(text)
            if any(rule.matches(sentence) for rule in EVIDENCE_PATTERNS)
        ]

    def analyze(self, text: str) -> ClaimAnalysis:
        """Claim-to-evidence ratio scored into four bands."""
        claims = self.extract_claims(text)
        evidence = self.find_evidence(text)
        ratio = len(evidence) / len(claims) if claims else 0.0

        if ratio >= 0.8:
            score = 85
        elif ratio >= 0.5:
            score = 70
        elif ratio >= 0.3:
            score = 55
        else:
            score = 40

        return ClaimAnalysis(
            score=score,
            claim_count=len(claims),
            evidence_count=len(evidence),
            ratio=ratio,
            claims=tuple(claims[:KEPT_SENTENCES]),
            evidence=tuple(evidence[:KEPT_SENTENCES]),
        )

    def scan(self, text: str, *, min_length: int = 50) -> List[FlaggedClaim]:
        """
        Flag suspicious claims for live, as-you-type checking.

        Each matching pattern adds its category's points; a claim is flagged
        once its total passes the threshold.
        """
        if not text or len(text.strip()) < min_length:
            return []

        flagged: List[FlaggedClaim] = []
        for claim in self.extract_claims(text):
            score = 0
            reasons: list[str] = []
            for category, points, reason in SCAN_RULES:
                matched = matching_rules(category, claim)
                if matched:
                    score += points * len(matched)
                    if reason not in reasons:
                        reasons.append(reason)
            if score > SCAN_THRESHOLD:
                flagged.append(FlaggedClaim(claim=claim, score=score, reasons=tuple(reasons)))
        return flagged

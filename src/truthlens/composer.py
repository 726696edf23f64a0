"""
Turn an aggregated truth score into the caller-facing result: verdict,
evidence list, red flags and a templated summary.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone

from .models import (
    AnalysisMetadata,
    AnalysisResult,
    EvidenceItem,
    RedFlag,
    TruthScore,
    Verdict,
)
from .scoring import DIMENSIONS

MAX_EVIDENCE_ITEMS = 8


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ResultComposer:
    @staticmethod
    def verdict(score: float) -> Verdict:
        if score >= 80:
            return Verdict.LIKELY_TRUE
        if score >= 60:
            return Verdict.MOSTLY_ACCURATE
        if score >= 40:
            return Verdict.MIXED_UNCERTAIN
        if score >= 20:
            return Verdict.MOSTLY_FALSE
        return Verdict.LIKELY_FALSE

    def compose(
        self,
        text: str,
        truth: TruthScore,
        *,
        fingerprint: str | None = None,
        processing_ms: float | None = None,
    ) -> AnalysisResult:
        return AnalysisResult(
            truth_percentage=round_half_up(truth.final),
            verdict=self.verdict(truth.final),
            confidence=truth.confidence,
            summary=self.summarize(truth),
            evidence=tuple(self.compile_evidence(truth)),
            source_credibility=truth.analyses.source,
            red_flags=tuple(self.identify_red_flags(truth)),
            breakdown=dict(truth.breakdown),
            metadata=AnalysisMetadata(
                analyzed_at=datetime.now(timezone.utc),
                text_length=len(text),
                processing_ms=processing_ms,
                fingerprint=fingerprint,
            ),
        )

    def compile_evidence(self, truth: TruthScore) -> list[EvidenceItem]:
        analyses = truth.analyses
        evidence: list[EvidenceItem] = []

        linguistic = analyses.linguistic
        if linguistic is not None:
            sourcing = linguistic.count("sourcing")
            balanced = linguistic.count("balanced")
            clickbait = linguistic.count("clickbait")
            conspiracy = linguistic.count("conspiracy")
            if sourcing > 0:
                evidence.append(
                    EvidenceItem(
                        type="positive",
                        text=f"Contains {sourcing} references to studies, reports, or verified data",
                        weight="medium",
                    )
                )
            if balanced > 0:
                evidence.append(
                    EvidenceItem(
                        type="positive",
                        text=(
                            f"Shows balanced reporting with {balanced} instances of "
                            "presenting multiple perspectives"
                        ),
                        weight="medium",
                    )
                )
            if clickbait > 0:
                evidence.append(
                    EvidenceItem(
                        type="negative",
                        text=(
                            f"Contains {clickbait} clickbait-style phrases often associated "
                            "with misleading content"
                        ),
                        weight="high",
                    )
                )
            if conspiracy > 0:
                evidence.append(
                    EvidenceItem(
                        type="negative",
                        text=f"Uses {conspiracy} conspiracy-related phrases that reduce credibility",
                        weight="high",
                    )
                )

        fact_check = analyses.fact_check
        if fact_check is not None and fact_check.found:
            for finding in fact_check.fact_checks:
                evidence.append(
                    EvidenceItem(
                        type="positive" if "true" in finding.display_rating.lower() else "negative",
                        text=(
                            f"Fact-checker {finding.source or 'verified source'} rated similar "
                            f"claim as: {finding.display_rating}"
                        ),
                        weight="very-high",
                        source=finding.source,
                        url=finding.url,
                    )
                )

        claims = analyses.claims
        if claims is not None:
            if claims.ratio >= 0.7:
                evidence.append(
                    EvidenceItem(
                        type="positive",
                        text=(
                            f"Good claim-to-evidence ratio: {claims.evidence_count} evidence "
                            f"points for {claims.claim_count} claims"
                        ),
                        weight="medium",
                    )
                )
            elif claims.ratio < 0.3:
                evidence.append(
                    EvidenceItem(
                        type="negative",
                        text=(
                            f"Poor claim-to-evidence ratio: Only {claims.evidence_count} "
                            f"evidence points for {claims.claim_count} claims"
                        ),
                        weight="high",
                    )
                )

        source = analyses.source
        if source is not None:
            if source.score >= 85:
                evidence.append(
                    EvidenceItem(
                        type="positive",
                        text=(
                            f"Published by highly credible source ({source.domain}) with "
                            f"{source.score}/100 credibility rating"
                        ),
                        weight="high",
                    )
                )
            elif source.score < 50:
                evidence.append(
                    EvidenceItem(
                        type="negative",
                        text=f"Source ({source.domain}) has low credibility rating of {source.score}/100",
                        weight="high",
                    )
                )

        return evidence[:MAX_EVIDENCE_ITEMS]

    def identify_red_flags(self, truth: TruthScore) -> list[RedFlag]:
        analyses = truth.analyses
        red_flags: list[RedFlag] = []

        linguistic = analyses.linguistic
        if linguistic is not None:
            if linguistic.count("sensationalism") >= 3:
                red_flags.append(
                    RedFlag(
                        severity="high",
                        type="Sensationalism",
                        description=(
                            "Excessive use of sensationalist language (all caps, multiple "
                            'exclamation marks, "BREAKING" etc.)'
                        ),
                    )
                )
            if linguistic.count("clickbait") >= 2:
                red_flags.append(
                    RedFlag(
                        severity="high",
                        type="Clickbait Language",
                        description=(
                            "Uses clickbait phrases like \"you won't believe\" or \"this one "
                            'trick" commonly seen in misleading content'
                        ),
                    )
                )
            if linguistic.count("conspiracy") >= 2:
                red_flags.append(
                    RedFlag(
                        severity="very-high",
                        type="Conspiracy Rhetoric",
                        description=(
                            "Contains language commonly associated with conspiracy theories "
                            "and unverified claims"
                        ),
                    )
                )
            if linguistic.count("unverified") >= 3:
                red_flags.append(
                    RedFlag(
                        severity="medium",
                        type="Vague Sourcing",
                        description=(
                            'Relies on vague attributions like "sources say" or "reportedly" '
                            "without specific verification"
                        ),
                    )
                )

        if analyses.sentiment is not None and analyses.sentiment.is_emotionally_charged:
            red_flags.append(
                RedFlag(
                    severity="medium",
                    type="Emotional Manipulation",
                    description="High emotional content may be designed to bypass critical thinking",
                )
            )

        if analyses.source is not None and analyses.source.score < 50:
            red_flags.append(
                RedFlag(
                    severity="high",
                    type="Low-Credibility Source",
                    description="Source has poor track record for accuracy and reliability",
                )
            )

        if analyses.claims is not None and analyses.claims.ratio < 0.2:
            red_flags.append(
                RedFlag(
                    severity="high",
                    type="Unsubstantiated Claims",
                    description="Makes numerous claims without providing adequate evidence or sources",
                )
            )

        fact_check = analyses.fact_check
        if fact_check is not None and fact_check.found:
            if any("false" in finding.display_rating.lower() for finding in fact_check.fact_checks):
                red_flags.append(
                    RedFlag(
                        severity="very-high",
                        type="Previously Debunked",
                        description=(
                            "Contains claims that have been fact-checked and rated as false "
                            "by credible organizations"
                        ),
                    )
                )

        return red_flags

    def summarize(self, truth: TruthScore) -> str:
        analyses = truth.analyses
        if truth.final >= 75:
            parts = ["This content appears largely credible based on our analysis."]
        elif truth.final >= 50:
            parts = ["This content shows mixed signals and should be verified from multiple sources."]
        else:
            parts = ["This content shows multiple red flags and may contain misinformation."]

        linguistic = analyses.linguistic
        if linguistic is not None and linguistic.count("clickbait") > 0:
            parts.append("Contains clickbait-style language.")
        if linguistic is not None and linguistic.count("sensationalism") > 2:
            parts.append("Uses sensationalist wording.")
        if analyses.source is not None:
            parts.append(f"Source credibility: {analyses.source.score}/100.")
        if analyses.fact_check is not None and analyses.fact_check.found:
            parts.append(f"{analyses.fact_check.count} related fact-checks found.")

        if truth.final < 60:
            parts.append("We recommend verifying this information with trusted sources before sharing.")
        else:
            parts.append("The information appears reasonably reliable but always verify important claims.")
        return " ".join(parts)

    @staticmethod
    def fallback(text: str, *, fingerprint: str | None = None) -> AnalysisResult:
        """Fixed neutral result used when the pipeline itself breaks."""
        return AnalysisResult(
            truth_percentage=50,
            verdict=Verdict.UNCERTAIN,
            confidence=30,
            summary=(
                "Unable to perform full analysis. Limited fact-checking available. "
                "Please verify this information through multiple trusted sources."
            ),
            evidence=(
                EvidenceItem(
                    type="neutral",
                    text="Analysis performed with limited data. Results should be verified independently.",
                    weight="low",
                ),
            ),
            source_credibility=None,
            red_flags=(),
            breakdown={name: 50.0 for name in DIMENSIONS},
            metadata=AnalysisMetadata(
                analyzed_at=datetime.now(timezone.utc),
                text_length=len(text) if isinstance(text, str) else 0,
                fingerprint=fingerprint,
                fallback_mode=True,
            ),
        )

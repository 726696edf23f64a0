from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PatternCategory = Literal[
    "clickbait",
    "sensationalism",
    "conspiracy",
    "unverified",
    "emotional",
    "sourcing",
    "balanced",
]

Bias = Literal[
    "extreme-left",
    "left",
    "center-left",
    "center",
    "center-right",
    "right",
    "extreme-right",
    "unknown",
    "satire",
]

Reliability = Literal[
    "very-high",
    "high",
    "medium-high",
    "medium",
    "low-medium",
    "low",
    "very-low",
    "satire",
]

Rating = Literal[
    "true",
    "mostly-true",
    "half-true",
    "mostly-false",
    "false",
    "pants-on-fire",
    "unsubstantiated",
    "misleading",
    "unknown",
]

EvidenceKind = Literal["positive", "negative", "neutral"]
Weight = Literal["low", "medium", "high", "very-high"]
Severity = Literal["medium", "high", "very-high"]


class Verdict(str, Enum):
    LIKELY_TRUE = "LIKELY TRUE"
    MOSTLY_ACCURATE = "MOSTLY ACCURATE"
    MIXED_UNCERTAIN = "MIXED/UNCERTAIN"
    MOSTLY_FALSE = "MOSTLY FALSE"
    LIKELY_FALSE = "LIKELY FALSE"
    UNCERTAIN = "UNCERTAIN"


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class AnalysisRequest(Record):
    text: str = Field(..., min_length=1)
    source_url: str | None = None


class PatternFlag(Record):
    category: PatternCategory
    pattern_id: str


class LinguisticResult(Record):
    score: int = Field(..., ge=0, le=100)
    flags: tuple[PatternFlag, ...] = ()
    counts: dict[str, int] = Field(default_factory=dict)

    def count(self, category: str) -> int:
        return self.counts.get(category, 0)


class SourceRecord(Record):
    domain: str
    score: int = Field(..., ge=0, le=100)
    bias: Bias
    reliability: Reliability
    in_database: bool
    description: str


class ClaimAnalysis(Record):
    score: int = Field(..., ge=0, le=100)
    claim_count: int
    evidence_count: int
    ratio: float
    claims: tuple[str, ...] = ()
    evidence: tuple[str, ...] = ()


class FactCheckFinding(Record):
    claim_text: str
    rating: Rating
    source: str
    confidence: float | None = Field(default=None, ge=0.0, le=100.0)
    url: str | None = None
    date: datetime | None = None
    textual_rating: str | None = None
    explanation: str | None = None

    @property
    def display_rating(self) -> str:
        return self.textual_rating or self.rating


class FactCheckResolution(Record):
    found: bool
    count: int
    fact_checks: tuple[FactCheckFinding, ...] = ()
    consensus: Rating | None = None


class SentimentResult(Record):
    score: float = Field(..., ge=0.0, le=100.0)
    positive: int
    negative: int
    extreme: int
    ratio: float
    is_emotionally_charged: bool


class SubAnalyses(Record):
    """Everything the aggregator saw; absent entries degraded to neutral."""

    linguistic: LinguisticResult | None = None
    source: SourceRecord | None = None
    fact_check: FactCheckResolution | None = None
    claims: ClaimAnalysis | None = None
    sentiment: SentimentResult | None = None


class TruthScore(Record):
    final: float = Field(..., ge=0.0, le=100.0)
    confidence: float = Field(..., ge=0.0, le=95.0)
    breakdown: dict[str, float]
    analyses: SubAnalyses


class EvidenceItem(Record):
    type: EvidenceKind
    text: str
    weight: Weight
    source: str | None = None
    url: str | None = None


class RedFlag(Record):
    severity: Severity
    type: str
    description: str


class FlaggedClaim(Record):
    claim: str
    score: int
    reasons: tuple[str, ...]


class AnalysisMetadata(Record):
    analyzed_at: datetime
    text_length: int
    processing_ms: float | None = None
    fingerprint: str | None = None
    fallback_mode: bool = False


class AnalysisResult(Record):
    truth_percentage: int = Field(..., ge=0, le=100)
    verdict: Verdict
    confidence: float
    summary: str
    evidence: tuple[EvidenceItem, ...] = Field(default=(), max_length=8)
    source_credibility: SourceRecord | None = None
    red_flags: tuple[RedFlag, ...] = ()
    breakdown: dict[str, float]
    metadata: AnalysisMetadata

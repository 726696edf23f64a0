from __future__ import annotations

from dataclasses import dataclass, field

from .models import LinguisticResult, PatternFlag, SentimentResult
from .patterns import BONUS_CATEGORIES, PENALTY_CATEGORIES, matching_rules


@dataclass(frozen=True)
class LinguisticPolicy:
    penalties: dict[str, int] = field(
        default_factory=lambda: {
            "clickbait": 8,
            "sensationalism": 10,
            "conspiracy": 12,
            "unverified": 6,
            "emotional": 5,
        }
    )
    bonuses: dict[str, int] = field(default_factory=lambda: {"sourcing": 5, "balanced": 3})
    base_score: int = 100


class LinguisticAnalyzer:
    """Score text against the pattern library; one flag per pattern that fires."""

    def __init__(self, policy: LinguisticPolicy | None = None) -> None:
        self._policy = policy or LinguisticPolicy()

    def analyze(self, text: str) -> LinguisticResult:
        score = self._policy.base_score
        flags: list[PatternFlag] = []
        counts: dict[str, int] = {}

        for category in PENALTY_CATEGORIES:
            matched = matching_rules(category, text)
            counts[category] = len(matched)
            flags.extend(PatternFlag(category=category, pattern_id=rule.id) for rule in matched)
            score -= len(matched) * self._policy.penalties.get(category, 0)

        for category in BONUS_CATEGORIES:
            matched = matching_rules(category, text)
            counts[category] = len(matched)
            score += len(matched) * self._policy.bonuses.get(category, 0)

        return LinguisticResult(
            score=max(0, min(100, score)),
            flags=tuple(flags),
            counts=counts,
        )


POSITIVE_WORDS = frozenset(
    {"great", "excellent", "amazing", "wonderful", "fantastic", "good", "best", "incredible"}
)
NEGATIVE_WORDS = frozenset(
    {"terrible", "awful", "horrible", "worst", "bad", "disaster", "crisis", "catastrophe"}
)
EXTREME_WORDS = frozenset({"shocking", "outrageous", "unbelievable", "devastating", "mind-blowing"})


class SentimentScanner:
    """Lexicon-based emotional intensity. Lower emotional load scores higher."""

    CHARGED_RATIO = 0.05
    RATIO_PENALTY = 500

    def scan(self, text: str) -> SentimentResult:
        # blank text is a single empty token, keeping the ratio defined
        words = text.lower().split() or [""]
        positive = sum(1 for word in words if word in POSITIVE_WORDS)
        negative = sum(1 for word in words if word in NEGATIVE_WORDS)
        extreme = sum(1 for word in words if word in EXTREME_WORDS)

        ratio = (positive + negative + extreme) / len(words)
        score = max(0.0, min(100.0, 100 - ratio * self.RATIO_PENALTY))
        return SentimentResult(
            score=score,
            positive=positive,
            negative=negative,
            extreme=extreme,
            ratio=ratio,
            is_emotionally_charged=ratio > self.CHARGED_RATIO,
        )

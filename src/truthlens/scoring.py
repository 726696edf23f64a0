from __future__ import annotations

from dataclasses import dataclass

from .factcheck import NEUTRAL_SCORE, RATING_SCORES, rating_to_score
from .models import SubAnalyses, TruthScore

DIMENSIONS = ("linguistic", "source", "fact_check", "claims", "sentiment")
MAX_CONFIDENCE = 95.0


@dataclass(frozen=True)
class TruthWeights:
    linguistic: float = 0.25
    source: float = 0.20
    fact_check: float = 0.30
    claims: float = 0.15
    sentiment: float = 0.10

    def as_dict(self) -> dict[str, float]:
        weights = {name: getattr(self, name) for name in DIMENSIONS}
        if any(weight < 0 for weight in weights.values()):
            raise ValueError("TruthWeights must not be negative")
        return weights


class TruthScoreAggregator:
    """Weighted mean of the five sub-scores.

    A missing source or fact-check result counts as a neutral 50 at full weight,
    so it never lowers confidence. Missing linguistic, claim or sentiment
    results drop their weight entirely.
    """

    NEUTRAL_WHEN_ABSENT = frozenset({"source", "fact_check"})

    def __init__(
        self,
        weights: TruthWeights | None = None,
        rating_scores: dict[str, float] | None = None,
    ) -> None:
        self._weights = (weights or TruthWeights()).as_dict()
        self._rating_scores = dict(rating_scores or RATING_SCORES)

    @property
    def weights(self) -> dict[str, float]:
        return dict(self._weights)

    def aggregate(self, analyses: SubAnalyses) -> TruthScore:
        scores = self._dimension_scores(analyses)
        weighted = 0.0
        total_weight = 0.0
        breakdown: dict[str, float] = {}

        for name in DIMENSIONS:
            score = scores[name]
            weight = self._weights[name]
            if score is None and name in self.NEUTRAL_WHEN_ABSENT:
                score = NEUTRAL_SCORE
            if score is None:
                breakdown[name] = NEUTRAL_SCORE
                continue
            weighted += score * weight
            total_weight += weight
            breakdown[name] = float(score)

        final = weighted / total_weight if total_weight > 0 else NEUTRAL_SCORE
        return TruthScore(
            final=max(0.0, min(100.0, final)),
            confidence=min(MAX_CONFIDENCE, total_weight * 100),
            breakdown=breakdown,
            analyses=analyses,
        )

    def _dimension_scores(self, analyses: SubAnalyses) -> dict[str, float | None]:
        fact_check = analyses.fact_check
        return {
            "linguistic": analyses.linguistic.score if analyses.linguistic else None,
            "source": analyses.source.score if analyses.source else None,
            "fact_check": (
                rating_to_score(fact_check.consensus, self._rating_scores)
                if fact_check is not None and fact_check.consensus
                else None
            ),
            "claims": analyses.claims.score if analyses.claims else None,
            "sentiment": analyses.sentiment.score if analyses.sentiment else None,
        }

"""
Pattern library for linguistic credibility signals.
Every pattern carries a stable identifier so flags, red flags and tests can refer
to it without depending on the regex source.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PatternRule:
    id: str
    regex: re.Pattern

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


def _rule(rule_id: str, pattern: str, flags: int = re.IGNORECASE) -> PatternRule:
    return PatternRule(id=rule_id, regex=re.compile(pattern, flags))


PENALTY_CATEGORIES = ("clickbait", "sensationalism", "conspiracy", "unverified", "emotional")
BONUS_CATEGORIES = ("sourcing", "balanced")

PATTERNS: dict[str, tuple[PatternRule, ...]] = {
    "clickbait": (
        _rule("clickbait.wont-believe", r"you won't believe"),
        _rule("clickbait.one-trick", r"this one trick"),
        _rule("clickbait.doctors-hate", r"doctors hate"),
        _rule("clickbait.shocking", r"shocking"),
        _rule("clickbait.mind-blowing", r"mind[- ]blowing"),
        _rule("clickbait.what-happens-next", r"what happens next will"),
        _rule("clickbait.number-will-shock", r"number \d+ will shock you"),
        _rule("clickbait.dont-want-you-to-know", r"they don't want you to know"),
    ),
    "sensationalism": (
        _rule("sensationalism.exclamations", r"!!!+", 0),
        _rule("sensationalism.breaking", r"BREAKING:"),
        _rule("sensationalism.urgent", r"URGENT:"),
        _rule("sensationalism.bombshell", r"BOMBSHELL:"),
        _rule("sensationalism.exclusive", r"EXCLUSIVE:"),
        # case-sensitive: a run of 20+ capitals or whitespace
        _rule("sensationalism.all-caps", r"[A-Z\s]{20,}", 0),
    ),
    "conspiracy": (
        _rule("conspiracy.wake-up", r"wake up"),
        _rule("conspiracy.sheep", r"sheep"),
        _rule("conspiracy.mainstream-media", r"mainstream media"),
        _rule("conspiracy.they-are-hiding", r"they are hiding"),
        _rule("conspiracy.cover-up", r"cover[- ]?up"),
        _rule("conspiracy.the-truth-is", r"the truth is"),
        _rule("conspiracy.dont-trust", r"don't trust"),
        _rule("conspiracy.false-flag", r"false flag"),
    ),
    "unverified": (
        _rule("unverified.sources-say", r"sources say"),
        _rule("unverified.reportedly", r"reportedly"),
        _rule("unverified.allegedly", r"allegedly"),
        _rule("unverified.some-people-say", r"some people say"),
        _rule("unverified.many-believe", r"many believe"),
        _rule("unverified.it-is-said", r"it is said"),
        _rule("unverified.rumors", r"rumors"),
    ),
    "emotional": (
        _rule("emotional.outrageous", r"outrageous"),
        _rule("emotional.unbelievable", r"unbelievable"),
        _rule("emotional.horrifying", r"horrifying"),
        _rule("emotional.devastating", r"devastating"),
        _rule("emotional.miracle", r"miracle"),
        _rule("emotional.disaster", r"disaster"),
    ),
    "sourcing": (
        _rule("sourcing.according-to-study", r"according to.*(?:study|report|research)"),
        _rule("sourcing.published-in", r"published in"),
        _rule("sourcing.peer-reviewed", r"peer[- ]reviewed"),
        _rule("sourcing.data-shows", r"data (?:shows|indicates)"),
        _rule("sourcing.statistics-from", r"statistics from"),
        _rule("sourcing.confirmed-by", r"confirmed by"),
    ),
    "balanced": (
        _rule("balanced.however", r"however"),
        _rule("balanced.other-hand", r"on the other hand"),
        _rule("balanced.critics-argue", r"critics argue"),
        _rule("balanced.some-experts", r"some experts"),
        _rule("balanced.while-others", r"while.*others"),
    ),
}

# Sentence-level evidence markers used by the claim extractor.
EVIDENCE_PATTERNS: tuple[PatternRule, ...] = (
    _rule("evidence.according-to", r"according to"),
    _rule("evidence.study", r"study (?:shows|found|indicates)"),
    _rule("evidence.research", r"research (?:shows|found|suggests)"),
    _rule("evidence.data", r"data (?:shows|indicates)"),
    _rule("evidence.statistics", r"statistics"),
    _rule("evidence.reported-by", r"reported by"),
    _rule("evidence.confirmed-by", r"confirmed by"),
    _rule("evidence.percentage", r"\d+%", 0),
    _rule("evidence.counted", r"\d+ (?:people|percent|cases)"),
)

CLAIM_VERB = re.compile(r"\b(?:is|are|was|were|has|have|will)\s", re.IGNORECASE)
QUESTION_OPENER = re.compile(r"^(?:what|when|where|who|why|how)\b", re.IGNORECASE)
SENTENCE = re.compile(r"[^.!?]+[.!?]+")


def rules_for(category: str) -> tuple[PatternRule, ...]:
    return PATTERNS.get(category, ())


def matching_rules(category: str, text: str) -> list[PatternRule]:
    """Rules of a category that fire at least once on the text."""
    return [rule for rule in rules_for(category) if rule.matches(text)]


def split_sentences(text: str) -> list[str]:
    """Sentences including their terminators; a trailing unterminated fragment is dropped."""
    return SENTENCE.findall(text or "")

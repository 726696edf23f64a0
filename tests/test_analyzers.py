import pytest

from truthlens.analyzers import LinguisticAnalyzer, LinguisticPolicy, SentimentScanner
from truthlens.models import PatternFlag


@pytest.fixture
def analyzer():
    return LinguisticAnalyzer()


def test_empty_text_keeps_base_score(analyzer):
    result = analyzer.analyze("")
    assert result.score == 100
    assert result.flags == ()
    assert all(count == 0 for count in result.counts.values())


def test_one_flag_per_pattern_not_per_occurrence(analyzer):
    result = analyzer.analyze("Wow!!! Really!!!! Yes!!!")
    assert result.count("sensationalism") == 1
    assert result.score == 90
    assert result.flags == (
        PatternFlag(category="sensationalism", pattern_id="sensationalism.exclamations"),
    )


def test_penalties_are_weighted_per_category(analyzer):
    result = analyzer.analyze("BREAKING: URGENT: you won't believe this")
    assert result.count("sensationalism") == 2
    assert result.count("clickbait") == 1
    assert result.score == 100 - 2 * 10 - 8
    assert PatternFlag(category="clickbait", pattern_id="clickbait.wont-believe") in result.flags


def test_positive_signals_offset_penalties(analyzer):
    text = (
        "Wake up: allegedly, sources say the plan failed. However, according to a report "
        "published in the journal, it worked."
    )
    result = analyzer.analyze(text)
    assert result.count("conspiracy") == 1
    assert result.count("unverified") == 2
    assert result.count("sourcing") == 2
    assert result.count("balanced") == 1
    assert result.score == 100 - 12 - 12 + 10 + 3


def test_score_is_clamped_at_zero(analyzer):
    text = (
        "Shocking! You won't believe it. Wake up sheep! The mainstream media cover-up is real. "
        "They are hiding it. The truth is out there. Don't trust them. False flag."
    )
    result = analyzer.analyze(text)
    assert result.count("conspiracy") == 8
    assert result.score == 0


def test_all_caps_run_is_case_sensitive(analyzer):
    assert analyzer.analyze("THIS IS ABSOLUTELY HUGE NEWS").count("sensationalism") == 1
    assert analyzer.analyze("this is absolutely huge news").count("sensationalism") == 0


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Plain reporting of a council meeting.",
        "According to the study, data shows growth. However, critics argue otherwise. " * 3,
        "SHOCKING!!! BREAKING: wake up sheep, they don't want you to know the truth is hidden",
    ],
)
def test_score_always_within_bounds(analyzer, text):
    assert 0 <= analyzer.analyze(text).score <= 100


def test_custom_policy_changes_penalty():
    lenient = LinguisticAnalyzer(LinguisticPolicy(penalties={"clickbait": 1}))
    assert lenient.analyze("This one trick is shocking").score == 98


def test_sentiment_neutral_text():
    result = SentimentScanner().scan("The committee met on Tuesday to review the budget proposal.")
    assert result.score == 100
    assert result.ratio == 0
    assert result.is_emotionally_charged is False


def test_sentiment_charged_text_bottoms_out():
    result = SentimentScanner().scan("This is a great and amazing day")
    assert result.positive == 2
    assert result.ratio == pytest.approx(2 / 7)
    assert result.score == 0
    assert result.is_emotionally_charged is True


def test_sentiment_threshold_is_strict():
    result = SentimentScanner().scan("good " + "word " * 19)
    assert result.ratio == pytest.approx(0.05)
    assert result.score == pytest.approx(75)
    assert result.is_emotionally_charged is False


def test_sentiment_counts_each_lexicon():
    result = SentimentScanner().scan("Terrible crisis, shocking news and the best outcome")
    assert result.negative == 1  # "crisis," keeps its comma and does not match
    assert result.extreme == 1
    assert result.positive == 1

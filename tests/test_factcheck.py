import httpx
import pytest

from truthlens.errors import ProviderUnavailable
from truthlens.factcheck import (
    FactCheckResolver,
    GoogleFactCheckProvider,
    OfflineFactCheckProvider,
    consensus,
    normalize_rating,
    rating_to_score,
)
from truthlens.models import FactCheckFinding
from truthlens.rate_limit import RateLimiter


def _finding(rating: str) -> FactCheckFinding:
    return FactCheckFinding(claim_text="claim", rating=rating, source="Test Desk")


@pytest.mark.parametrize(
    "ratings, expected",
    [
        (["false", "false", "true"], "false"),
        (["true", "false"], "true"),
        (["mostly-false", "false", "false", "mostly-false"], "mostly-false"),
        (["misleading", "true", "true"], "true"),
        ([], None),
    ],
)
def test_consensus_is_stable_first_max(ratings, expected):
    assert consensus([_finding(rating) for rating in ratings]) == expected


@pytest.mark.parametrize(
    "textual, expected",
    [
        ("Pants on Fire!", "pants-on-fire"),
        ("Mostly False", "mostly-false"),
        ("Half True", "half-true"),
        ("FALSE", "false"),
        ("Four Pinocchios", "unknown"),
        (None, "unknown"),
    ],
)
def test_normalize_rating(textual, expected):
    assert normalize_rating(textual) == expected


def test_rating_to_score_table():
    assert rating_to_score("true") == 95
    assert rating_to_score("pants-on-fire") == 0
    assert rating_to_score("misleading") == 35
    assert rating_to_score("unknown") == 50
    assert rating_to_score(None) == 50


@pytest.mark.asyncio
async def test_offline_matcher_inspects_first_two_claims_only():
    claims = [
        "There is a cure for cancer hidden in lemons.",
        "The new vaccine is dangerous for everyone.",
        "5G towers are spreading the virus.",
    ]
    findings = await OfflineFactCheckProvider().search(claims)
    assert [f.rating for f in findings] == ["false", "mostly-false"]
    assert [f.confidence for f in findings] == [95, 90]


@pytest.mark.asyncio
async def test_offline_matcher_themes():
    provider = OfflineFactCheckProvider()
    assert provider.match("Chemtrails are poisoning the water supply.").rating == "false"
    assert provider.match("The election was rigged by insiders.").rating == "unsubstantiated"
    assert provider.match("The council approved a new park budget.") is None


def _google_payload(rating: str = "Pants on Fire!") -> dict:
    return {
        "claims": [
            {
                "text": "Claim under review",
                "claimant": "Someone",
                "claimReview": [
                    {
                        "publisher": {"name": "PolitiFact"},
                        "url": "https://www.politifact.com/factchecks/x",
                        "textualRating": rating,
                        "reviewDate": "2021-03-01T00:00:00Z",
                    }
                ],
            }
        ]
    }


@pytest.mark.asyncio
async def test_google_provider_queries_at_most_three_claims():
    queries = []

    def handler(request: httpx.Request) -> httpx.Response:
        queries.append(request.url.params["query"])
        assert request.url.params["key"] == "secret"
        return httpx.Response(200, json=_google_payload())

    provider = GoogleFactCheckProvider("secret", transport=httpx.MockTransport(handler))
    findings = await provider.search(["one", "two", "three", "four"])

    assert queries == ["one", "two", "three"]
    assert len(findings) == 3
    assert findings[0].rating == "pants-on-fire"
    assert findings[0].textual_rating == "Pants on Fire!"
    assert findings[0].source == "PolitiFact"
    assert findings[0].date.year == 2021


@pytest.mark.asyncio
async def test_google_provider_raises_on_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    provider = GoogleFactCheckProvider("secret", transport=transport)
    with pytest.raises(ProviderUnavailable):
        await provider.search(["anything"])


@pytest.mark.asyncio
async def test_resolver_falls_back_when_live_provider_fails():
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    resolver = FactCheckResolver(GoogleFactCheckProvider("secret", transport=transport))
    assert resolver.is_live

    resolution = await resolver.resolve(["There is a cure for cancer in lemons."])
    assert resolution.found is True
    assert resolution.count == 1
    assert resolution.fact_checks[0].source == "Medical Fact Database"
    assert resolution.consensus == "false"


@pytest.mark.asyncio
async def test_resolver_without_findings():
    resolution = await FactCheckResolver().resolve(["The council approved a new park budget."])
    assert resolution.found is False
    assert resolution.count == 0
    assert resolution.consensus is None


@pytest.mark.asyncio
async def test_resolver_never_propagates_unexpected_errors():
    class BrokenProvider:
        async def search(self, claims):
            raise KeyError("boom")

    resolution = await FactCheckResolver(BrokenProvider()).resolve(["anything at all"])
    assert resolution.found is False
    assert resolution.fact_checks == ()


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.mark.asyncio
async def test_rate_limiter_suspends_after_budget():
    clock = FakeClock()
    limiter = RateLimiter(30, backoff=1.0, clock=clock, sleep=clock.sleep)

    for _ in range(30):
        await limiter.acquire()
    assert clock.sleeps == []
    assert limiter.get_remaining() == 0

    await limiter.acquire()
    assert clock.sleeps == [1.0]
    assert limiter.request_count == 1
    assert limiter.suspensions == 1


@pytest.mark.asyncio
async def test_rate_limiter_window_resets():
    clock = FakeClock()
    limiter = RateLimiter(2, clock=clock, sleep=clock.sleep)
    await limiter.acquire()
    await limiter.acquire()

    clock.now += 61
    assert limiter.get_remaining() == 2
    await limiter.acquire()
    assert clock.sleeps == []
    assert limiter.request_count == 1


@pytest.mark.asyncio
async def test_resolver_is_gated_by_rate_limiter():
    clock = FakeClock()
    limiter = RateLimiter(30, clock=clock, sleep=clock.sleep)
    resolver = FactCheckResolver(rate_limiter=limiter)

    for _ in range(30):
        await resolver.resolve(["The council approved a new park budget."])
    assert clock.sleeps == []

    resolution = await resolver.resolve(["There is a cure for cancer in lemons."])
    assert clock.sleeps == [1.0]
    assert resolution.found is True


def test_consensus_votes_on_publisher_wording():
    findings = [
        FactCheckFinding(claim_text="a", rating="unknown", textual_rating="Incorrect", source="A"),
        FactCheckFinding(claim_text="b", rating="unknown", textual_rating="Wrong", source="B"),
        FactCheckFinding(claim_text="c", rating="misleading", textual_rating="Misleading", source="C"),
        FactCheckFinding(claim_text="d", rating="misleading", source="D"),
    ]
    assert consensus(findings) == "misleading"
    assert rating_to_score(consensus(findings)) == 35


def test_consensus_winner_without_known_rating_is_unknown():
    findings = [
        FactCheckFinding(claim_text="a", rating="unknown", textual_rating="Four Pinocchios", source="A"),
        FactCheckFinding(claim_text="b", rating="unknown", textual_rating="four pinocchios", source="B"),
        FactCheckFinding(claim_text="c", rating="false", textual_rating="False", source="C"),
    ]
    assert consensus(findings) == "unknown"


@pytest.mark.asyncio
async def test_google_provider_tolerates_missing_publisher():
    payload = _google_payload("Partly false")
    payload["claims"][0]["claimReview"][0]["publisher"] = None

    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
    findings = await GoogleFactCheckProvider("secret", transport=transport).search(["one"])

    assert findings[0].source == "Fact-check"
    assert findings[0].rating == "unknown"
    assert findings[0].textual_rating == "Partly false"


@pytest.mark.asyncio
async def test_google_provider_tolerates_claims_without_reviews():
    payload = {"claims": [{"text": "Unreviewed claim"}, {"text": "Odd", "claimReview": "nope"}]}
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
    findings = await GoogleFactCheckProvider("secret", transport=transport).search(["one"])

    assert [f.rating for f in findings] == ["unknown", "unknown"]
    assert findings[0].source == "Fact-check"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"claims": ["not a claim object"]},
        {"claims": {"text": "a mapping instead of a list"}},
        {"claims": [{"text": "x", "claimReview": [{"publisher": "PolitiFact"}]}]},
        {"claims": [{"text": 42}]},
    ],
)
async def test_malformed_google_payload_falls_back_to_offline_matcher(payload):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
    provider = GoogleFactCheckProvider("secret", transport=transport)

    with pytest.raises(ProviderUnavailable):
        await provider.search(["anything"])

    resolution = await FactCheckResolver(provider).resolve(
        ["There is a cure for cancer hidden in lemons."]
    )
    assert resolution.found is True
    assert resolution.fact_checks[0].source == "Medical Fact Database"

"""Tests for intent parsing and match scoring."""

import pytest

from stream_fund.core import SearchIntent, ValidationError, VaultCandidate
from stream_fund.engines.search import (
    IntentParser,
    MatchScorer,
    analyze_preferences,
    describe_intent,
    investor_badge,
    parse_compact_number,
    recommend,
    summarize_results,
    vault_tags,
)


@pytest.fixture
def parser() -> IntentParser:
    return IntentParser()


@pytest.fixture
def scorer() -> MatchScorer:
    return MatchScorer()


def test_parse_apr_and_category(parser: IntentParser) -> None:
    """Test the basic search phrase."""
    intent = parser.parse("Find 12% APR gaming vaults")

    assert intent.min_apr == 12
    assert intent.category == "gaming"
    assert intent.risk_level is None
    assert intent.max_investment is None
    assert intent.confidence >= 0.6


def test_parse_all_filters(parser: IntentParser) -> None:
    intent = parser.parse("Low risk music vaults under $1,000 with 10.5% yield")

    assert intent.min_apr == 10.5
    assert intent.category == "music"
    assert intent.risk_level == "low"
    assert intent.max_investment == 1000
    assert intent.confidence == 1.0
    assert intent.parsed_tokens == (
        "APR >= 10.5%",
        "Category: music",
        "Risk: low",
        "Max: $1,000",
    )


def test_parse_variants(parser: IntentParser) -> None:
    assert parser.parse("8 return").min_apr == 8
    assert parser.parse("15%yield").min_apr == 15
    assert parser.parse("HIGH RISK tech").risk_level == "high"
    assert parser.parse("spend $250.50 on diy").max_investment == 250.5


def test_parse_nothing(parser: IntentParser) -> None:
    intent = parser.parse("show me something nice")

    assert intent.is_empty
    assert intent.confidence == 0.0
    assert intent.parsed_tokens == ()


def test_parse_custom_vocabulary() -> None:
    parser = IntentParser(categories=["Cooking"])

    assert parser.parse("cooking channels").category == "cooking"
    assert parser.parse("gaming channels").category is None


def test_parse_is_deterministic(parser: IntentParser) -> None:
    query = "low risk gaming 12% apr under $500"
    assert parser.parse(query) == parser.parse(query)


def test_score_exact_apr_and_category(scorer: MatchScorer) -> None:
    candidate = VaultCandidate(id="1", creator="A", category="gaming", apr_percent=12,
                               risk_level="low", min_investment=100)
    intent = SearchIntent(min_apr=12, category="gaming")

    assert scorer.score(candidate, intent) == pytest.approx(0.9)


def test_score_apr_proximity_bonus(scorer: MatchScorer) -> None:
    intent = SearchIntent(min_apr=10)
    close = VaultCandidate(id="1", creator="A", category="tech", apr_percent=11,
                           risk_level="low", min_investment=0)
    far = VaultCandidate(id="2", creator="B", category="tech", apr_percent=20,
                         risk_level="low", min_investment=0)
    below = VaultCandidate(id="3", creator="C", category="tech", apr_percent=9,
                           risk_level="low", min_investment=0)

    assert scorer.score(close, intent) == pytest.approx(0.55)
    assert scorer.score(far, intent) == pytest.approx(0.4)
    assert scorer.score(below, intent) == 0.0


def test_score_clamped(scorer: MatchScorer) -> None:
    candidate = VaultCandidate(id="1", creator="A", category="gaming", apr_percent=12,
                               risk_level="low", min_investment=100)
    intent = SearchIntent(min_apr=12, category="gaming", risk_level="low", max_investment=500)

    assert scorer.score(candidate, intent) == 1.0


def test_rank_orders_and_filters(scorer: MatchScorer, candidates: list[VaultCandidate]) -> None:
    """Best match first, weak matches dropped."""
    intent = SearchIntent(min_apr=12, category="gaming")
    ranked = scorer.rank(candidates, intent)

    assert [r.candidate.id for r in ranked] == ["5", "1"]
    assert ranked[0].match_score > ranked[1].match_score


def test_rank_threshold_is_inclusive(scorer: MatchScorer, candidates: list[VaultCandidate]) -> None:
    """A category-only match scores exactly 0.3 and is kept."""
    ranked = scorer.rank(candidates, SearchIntent(category="music"))

    assert [r.candidate.id for r in ranked] == ["2"]
    assert ranked[0].match_score == pytest.approx(0.3)


def test_rank_excludes_below_threshold(scorer: MatchScorer, candidates: list[VaultCandidate]) -> None:
    assert scorer.rank(candidates, SearchIntent(max_investment=10_000)) == []


def test_rank_ties_broken_by_id(scorer: MatchScorer) -> None:
    twins = [
        VaultCandidate(id=vid, creator=vid.upper(), category="gaming", apr_percent=10,
                       risk_level="low", min_investment=0)
        for vid in ("c", "a", "b")
    ]
    ranked = scorer.rank(twins, SearchIntent(category="gaming"))

    assert [r.candidate.id for r in ranked] == ["a", "b", "c"]


def test_describe_intent() -> None:
    intent = SearchIntent(min_apr=12, category="gaming", risk_level="low", max_investment=500)

    assert describe_intent(intent) == (
        'APR >= 12% AND category = "gaming" AND risk = "low" AND minInvestment <= $500'
    )
    assert describe_intent(SearchIntent()) == ""


def test_summarize_results(scorer: MatchScorer, candidates: list[VaultCandidate]) -> None:
    intent = SearchIntent(min_apr=12, category="gaming")
    ranked = scorer.rank(candidates, intent)
    summary = summarize_results("12% gaming", ranked, intent)

    assert 'Found 2 vaults matching "12% gaming"' in summary
    assert "Average APR: 13.3% (target: 12%)" in summary
    assert "2 gaming creators found" in summary
    assert "Top recommendation: Pixel Arena (12.4% APR)" in summary


def test_summarize_no_results() -> None:
    summary = summarize_results("nothing", [], SearchIntent())

    assert "Found 0 vaults" in summary


@pytest.mark.parametrize(
    "text,expected",
    [("2.4M", 2_400_000), ("850K", 850_000), ("1.5b", 1_500_000_000), ("1,200", 1200), ("n/a", 0)],
)
def test_parse_compact_number(text: str, expected: float) -> None:
    assert parse_compact_number(text) == pytest.approx(expected)


def test_vault_tags() -> None:
    big = VaultCandidate(id="1", creator="A", category="Gaming", apr_percent=15,
                         risk_level="low", min_investment=0, subscribers=2_000_000)
    small = VaultCandidate(id="2", creator="B", category="diy", apr_percent=8,
                           risk_level="low", min_investment=0, subscribers=5_000)

    assert vault_tags(big) == ("gaming", "high-yield", "mega-creator")
    assert vault_tags(small) == ("diy", "stable-yield", "emerging-creator")


def test_preferences_from_history(candidates: list[VaultCandidate]) -> None:
    assert analyze_preferences([]) == ("medium", [])

    tolerance, categories = analyze_preferences([candidates[0], candidates[2]])
    assert tolerance == "low"
    assert categories == ["gaming", "education"]


def test_recommend_respects_risk_tolerance(candidates: list[VaultCandidate]) -> None:
    history = [candidates[0]]
    picks = recommend(history, candidates)

    assert [v.id for v in picks] == ["1"]

    assert [v.id for v in recommend([], candidates)] == ["1", "2", "3", "5"]


@pytest.mark.parametrize(
    "invested,vaults,level",
    [
        (10_000, 5, "Diamond"),
        (10_000, 2, "Silver"),
        (5_000, 3, "Gold"),
        (150, 1, "Bronze"),
        (50, 10, "Starter"),
    ],
)
def test_investor_badge(invested: float, vaults: int, level: str) -> None:
    assert investor_badge(invested, vaults) == level


def test_investor_badge_negative_count() -> None:
    with pytest.raises(ValidationError):
        investor_badge(1_000, -1)

"""Free-text vault search: intent parsing and match scoring."""

import re
from typing import Iterable, Optional, Sequence

from stream_fund.core import RankedVault, SearchIntent, ValidationError, VaultCandidate
from stream_fund.core.errors import require_non_negative
from stream_fund.engines.risk import clamp_unit

DEFAULT_CATEGORIES = ("gaming", "music", "education", "tech", "diy", "lifestyle")
MIN_MATCH_SCORE = 0.3
MAX_RECOMMENDATIONS = 5

APR_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*%?\s*(apr|yield|return)", re.IGNORECASE)
RISK_PATTERN = re.compile(r"(low|medium|high)\s*risk", re.IGNORECASE)
AMOUNT_PATTERN = re.compile(r"\$(\d+(?:,\d{3})*(?:\.\d{2})?)")
COMPACT_NUMBER_PATTERN = re.compile(r"([\d.]+)\s*([KMB])?", re.IGNORECASE)

COMPACT_MULTIPLIERS = {"K": 1_000, "M": 1_000_000, "B": 1_000_000_000}
RISK_RANK = {"low": 1, "medium": 2, "high": 3}

# (level, minimum invested, minimum vaults), best first
BADGE_LEVELS = (
    ("Diamond", 10_000, 5),
    ("Gold", 5_000, 3),
    ("Silver", 1_000, 2),
    ("Bronze", 100, 0),
)


class IntentParser:
    """Rule-based parser turning a query into search filters.

    Every rule is tried; each match adds its weight to the confidence.
    """

    def __init__(self, categories: Sequence[str] = DEFAULT_CATEGORIES) -> None:
        self.categories = tuple(c.lower() for c in categories)

    def parse(self, query: str) -> SearchIntent:
        min_apr: Optional[float] = None
        category: Optional[str] = None
        risk_level: Optional[str] = None
        max_investment: Optional[float] = None
        confidence = 0.0
        tokens: list[str] = []

        apr_match = APR_PATTERN.search(query)
        if apr_match:
            min_apr = float(apr_match.group(1))
            confidence += 0.3
            tokens.append(f"APR >= {apr_match.group(1)}%")

        lowered = query.lower()
        category = next((c for c in self.categories if c in lowered), None)
        if category:
            confidence += 0.3
            tokens.append(f"Category: {category}")

        risk_match = RISK_PATTERN.search(query)
        if risk_match:
            risk_level = risk_match.group(1).lower()
            confidence += 0.2
            tokens.append(f"Risk: {risk_level}")

        amount_match = AMOUNT_PATTERN.search(query)
        if amount_match:
            max_investment = float(amount_match.group(1).replace(",", ""))
            confidence += 0.2
            tokens.append(f"Max: ${amount_match.group(1)}")

        return SearchIntent(
            min_apr=min_apr,
            category=category,
            risk_level=risk_level,
            max_investment=max_investment,
            confidence=clamp_unit(round(confidence, 4)),
            parsed_tokens=tuple(tokens),
        )


class MatchScorer:
    """Score and rank vault candidates against a parsed intent."""

    def __init__(self, min_score: float = MIN_MATCH_SCORE) -> None:
        self.min_score = min_score

    def score(self, candidate: VaultCandidate, intent: SearchIntent) -> float:
        score = 0.0

        if intent.min_apr is not None and candidate.apr_percent >= intent.min_apr:
            score += 0.4
            # Closer to the requested APR scores higher
            diff = abs(candidate.apr_percent - intent.min_apr)
            score += max(0.0, 0.2 - diff / 20)

        if intent.category and intent.category in candidate.category.lower():
            score += 0.3

        if intent.risk_level and candidate.risk_level.lower() == intent.risk_level:
            score += 0.2

        if intent.max_investment is not None and candidate.min_investment <= intent.max_investment:
            score += 0.1

        return clamp_unit(score)

    def rank(self, candidates: Iterable[VaultCandidate], intent: SearchIntent) -> list[RankedVault]:
        """Candidates scoring at least the threshold, best first, ties by id."""
        ranked = [RankedVault(candidate=c, match_score=self.score(c, intent)) for c in candidates]
        ranked = [r for r in ranked if r.match_score >= self.min_score]
        ranked.sort(key=lambda r: (-r.match_score, r.candidate.id))
        return ranked


def describe_intent(intent: SearchIntent) -> str:
    """Render intent filters as a readable query expression."""
    conditions = []

    if intent.min_apr is not None:
        conditions.append(f"APR >= {intent.min_apr:g}%")
    if intent.category:
        conditions.append(f'category = "{intent.category}"')
    if intent.risk_level:
        conditions.append(f'risk = "{intent.risk_level}"')
    if intent.max_investment is not None:
        conditions.append(f"minInvestment <= ${intent.max_investment:g}")

    return " AND ".join(conditions)


def summarize_results(query: str, results: Sequence[RankedVault], intent: SearchIntent) -> str:
    """Short text summary of a search."""
    lines = [f'🤖 Found {len(results)} vaults matching "{query}"', ""]

    if not results:
        return "\n".join(lines + ["💡 Try a broader query."])

    if intent.min_apr is not None:
        avg_apr = sum(r.candidate.apr_percent for r in results) / len(results)
        lines.append(f"📊 Average APR: {avg_apr:.1f}% (target: {intent.min_apr:g}%)")

    if intent.category:
        count = sum(1 for r in results if intent.category in r.candidate.category.lower())
        lines.append(f"🎯 {count} {intent.category} creators found")

    if intent.risk_level:
        count = sum(1 for r in results if r.candidate.risk_level.lower() == intent.risk_level)
        lines.append(f"🛡️ {count} {intent.risk_level} risk vaults available")

    top = results[0].candidate
    lines.append("")
    lines.append(f"💡 Top recommendation: {top.creator} ({top.apr_percent:g}% APR)")

    return "\n".join(lines)


def parse_compact_number(text: str) -> float:
    """Parse counts like "2.4M" or "850K". Unparseable text yields 0."""
    match = COMPACT_NUMBER_PATTERN.search(text.replace(",", ""))
    if not match:
        return 0.0
    try:
        number = float(match.group(1))
    except ValueError:
        return 0.0
    suffix = (match.group(2) or "").upper()
    return number * COMPACT_MULTIPLIERS.get(suffix, 1)


def vault_tags(candidate: VaultCandidate) -> tuple[str, ...]:
    """Category, yield band and creator size tags."""
    tags = [candidate.category.lower()]

    if candidate.apr_percent >= 15:
        tags.append("high-yield")
    elif candidate.apr_percent >= 10:
        tags.append("medium-yield")
    else:
        tags.append("stable-yield")

    if candidate.subscribers >= 1_000_000:
        tags.append("mega-creator")
    elif candidate.subscribers >= 100_000:
        tags.append("established-creator")
    else:
        tags.append("emerging-creator")

    return tuple(tags)


def analyze_preferences(history: Sequence[VaultCandidate]) -> tuple[str, list[str]]:
    """Risk tolerance and preferred categories from past investments."""
    if not history:
        return "medium", []

    avg_risk = sum(RISK_RANK.get(v.risk_level.lower(), 2) for v in history) / len(history)
    if avg_risk < 1.5:
        tolerance = "low"
    elif avg_risk < 2.5:
        tolerance = "medium"
    else:
        tolerance = "high"

    categories: list[str] = []
    for vault in history:
        if vault.category not in categories:
            categories.append(vault.category)

    return tolerance, categories


def investor_badge(total_invested: float, vaults_count: int) -> str:
    """Badge level from amount invested and number of vaults held."""
    invested = require_non_negative("total_invested", total_invested)
    if vaults_count < 0:
        raise ValidationError("vaults_count", "cannot be negative")

    for level, min_invested, min_vaults in BADGE_LEVELS:
        if invested >= min_invested and vaults_count >= min_vaults:
            return level
    return "Starter"


def recommend(
    history: Sequence[VaultCandidate], available: Iterable[VaultCandidate]
) -> list[VaultCandidate]:
    """Up to five vaults that fit the investor's past risk and categories."""
    tolerance, categories = analyze_preferences(history)
    allowed = {
        "low": {"low"},
        "medium": {"low", "medium"},
        "high": {"low", "medium", "high"},
    }[tolerance]

    matches = [
        v for v in available
        if v.risk_level.lower() in allowed and (not categories or v.category in categories)
    ]
    return matches[:MAX_RECOMMENDATIONS]

"""View-volatility and vault risk scoring."""

import math
from typing import Optional, Sequence

from stream_fund.core import RiskLevel, ValidationError, VaultRiskAssessment
from stream_fund.core.errors import require_finite, require_non_negative

YOUNG_CHANNEL_MONTHS = 12
YOUNG_CHANNEL_PENALTY = 0.2

DEFAULT_MARKET_VOLATILITY = 0.3
FULL_LIQUIDITY_MARKET_CAP = 1_000_000

VAULT_RISK_WEIGHTS = {
    "apr": 0.25,
    "duration": 0.15,
    "creator": 0.30,
    "volatility": 0.20,
    "liquidity": 0.10,
}


class VolatilityRiskScorer:
    """Score risk as the coefficient of variation of views plus an age penalty."""
    
    def score(self, view_history: Sequence[int], channel_age_months: int) -> float:
        """Return a risk score in [0, 1].
        
        An all-zero history has no meaningful mean and scores as maximum risk.
        """
        if not view_history:
            raise ValidationError("view_history", "must contain at least one entry")
        views = [require_non_negative("view_history", v) for v in view_history]
        require_non_negative("channel_age_months", channel_age_months)
        
        mean = sum(views) / len(views)
        if mean == 0:
            return 1.0
        
        variance = sum((v - mean) ** 2 for v in views) / len(views)
        volatility = math.sqrt(variance) / mean
        
        penalty = YOUNG_CHANNEL_PENALTY if channel_age_months < YOUNG_CHANNEL_MONTHS else 0.0
        
        return clamp_unit(volatility + penalty)
    
    def risk_level(self, score: float) -> RiskLevel:
        return RiskLevel.from_score(score)


def clamp_unit(value: float) -> float:
    return max(0.0, min(value, 1.0))


def classify_vault_risk(
    apr_percent: float,
    duration_months: int,
    creator_score: float,
    market_cap: float,
    volatility_index: Optional[float] = None,
) -> VaultRiskAssessment:
    """Weighted risk of a listed vault.

    Each factor is on a 0-1 scale: high APR, terms past a year, a low
    creator score (0-100), market volatility and a small market cap all
    add risk. Totals above 0.4 are Medium and above 0.7 High.
    """
    apr = require_non_negative("apr_percent", apr_percent)
    duration = require_non_negative("duration_months", duration_months)
    creator = require_finite("creator_score", creator_score)
    cap = require_non_negative("market_cap", market_cap)
    if volatility_index is None:
        volatility_index = DEFAULT_MARKET_VOLATILITY

    factors = {
        "apr": min(apr / 20, 1.0),
        "duration": max(0.0, (duration - 12) / 24),
        "creator": clamp_unit(1 - creator / 100),
        "volatility": clamp_unit(require_finite("volatility_index", volatility_index)),
        "liquidity": max(0.0, 1 - cap / FULL_LIQUIDITY_MARKET_CAP),
    }
    total = sum(factors[name] * weight for name, weight in VAULT_RISK_WEIGHTS.items())

    if total > 0.7:
        level = RiskLevel.HIGH
    elif total > 0.4:
        level = RiskLevel.MEDIUM
    else:
        level = RiskLevel.LOW

    return VaultRiskAssessment(
        score=round(total, 3),
        risk_level=level,
        factors={name: round(value, 3) for name, value in factors.items()},
    )

"""Shared fixtures."""

import pytest

from stream_fund.core import ChannelMetrics, VaultCandidate


@pytest.fixture
def gaming_metrics() -> ChannelMetrics:
    """Large, established gaming channel."""
    return ChannelMetrics(
        subscriber_count=2_400_000,
        average_views_per_video=850_000,
        cost_per_mille=2.8,
        channel_age_months=36,
        category="gaming",
        engagement_rate_bp=600,
        average_watch_time_seconds=320,
    )


@pytest.fixture
def stable_history() -> list[int]:
    return [800_000, 920_000, 750_000, 880_000, 950_000, 820_000]


@pytest.fixture
def candidates() -> list[VaultCandidate]:
    return [
        VaultCandidate(id="1", creator="TechGaming Pro", category="gaming", apr_percent=14.2,
                       risk_level="low", min_investment=100),
        VaultCandidate(id="2", creator="MusicMaven", category="music", apr_percent=11.8,
                       risk_level="medium", min_investment=250),
        VaultCandidate(id="3", creator="EduTech Academy", category="education", apr_percent=9.5,
                       risk_level="low", min_investment=500),
        VaultCandidate(id="5", creator="Pixel Arena", category="gaming", apr_percent=12.4,
                       risk_level="medium", min_investment=1000),
    ]

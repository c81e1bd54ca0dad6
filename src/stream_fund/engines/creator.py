"""Creator onboarding checks and reputation."""

from stream_fund.core import ChannelMetrics, ChannelVerification, ReputationScore
from stream_fund.core.errors import require_finite

MIN_SUBSCRIBERS = 1_000
MIN_TOTAL_VIEWS = 10_000
MIN_AGE_MONTHS = 3
MIN_VIDEOS = 10
MIN_VIEW_RATE = 0.01  # average views per video / subscribers
VERIFIED_SCORE = 80.0

# Subscriber count at which the size component maxes out
FULL_SIZE_SUBSCRIBERS = 100_000

REPUTATION_WEIGHTS = {
    "size": 0.30,
    "consistency": 0.25,
    "growth": 0.25,
    "engagement": 0.20,
}


class CreatorScoreVerifier:
    """Onboarding checks and reputation score for a creator channel."""

    def verify(self, metrics: ChannelMetrics) -> ChannelVerification:
        """Run the onboarding checks.

        The score is the share of passed checks in percent; 80 or more
        (four of the five checks) verifies the channel.
        """
        subscribers = metrics.subscriber_count
        checks = {
            "min_subscribers": subscribers >= MIN_SUBSCRIBERS,
            "min_views": metrics.total_views >= MIN_TOTAL_VIEWS,
            "min_age": metrics.channel_age_months >= MIN_AGE_MONTHS,
            "min_videos": metrics.video_count >= MIN_VIDEOS,
            "view_consistency": (
                subscribers > 0
                and metrics.average_views_per_video / subscribers > MIN_VIEW_RATE
            ),
        }

        score = round(sum(checks.values()) / len(checks) * 100, 1)
        verified = score >= VERIFIED_SCORE

        return ChannelVerification(
            verified=verified,
            score=score,
            checks=checks,
            recommendation="Approved" if verified else "Needs Review",
        )

    def reputation(
        self,
        metrics: ChannelMetrics,
        consistency_score: float,
        growth_rate: float,
        engagement_rate: float,
    ) -> ReputationScore:
        """Weighted reputation from channel size and 0-100 history scores."""
        consistency = require_finite("consistency_score", consistency_score)
        growth = require_finite("growth_rate", growth_rate)
        engagement = require_finite("engagement_rate", engagement_rate)

        size = min(metrics.subscriber_count / FULL_SIZE_SUBSCRIBERS * 100, 100.0)
        total = (
            size * REPUTATION_WEIGHTS["size"]
            + consistency * REPUTATION_WEIGHTS["consistency"]
            + growth * REPUTATION_WEIGHTS["growth"]
            + engagement * REPUTATION_WEIGHTS["engagement"]
        )

        if total >= 80:
            tier = "Premium"
        elif total >= 60:
            tier = "Standard"
        else:
            tier = "Basic"

        return ReputationScore(
            total=round(total, 1),
            size=round(size, 1),
            consistency=consistency,
            growth=growth,
            engagement=engagement,
            tier=tier,
        )

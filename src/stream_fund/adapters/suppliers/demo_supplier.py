"""Demo channel data generator."""

import random

from stream_fund.core import ChannelMetrics, ChannelMetricsSupplier

CATEGORIES = ["gaming", "music", "education", "tech", "diy", "lifestyle"]
GEOGRAPHIES = ["US", "UK", "DE", "CA", "AU", "IN", "BR"]


class DemoChannelSupplier(ChannelMetricsSupplier):
    """Generate plausible channel data for demos and tests.

    Values are drawn from a generator seeded with the supplier seed and the
    channel id, so a channel always gets the same metrics.
    """

    emoji = "🎲"
    name = "Demo data"

    def __init__(self, seed: int = 42, history_length: int = 6) -> None:
        self.seed = seed
        self.history_length = history_length

    def _rng(self, channel_id: str, stream: str) -> random.Random:
        return random.Random(f"{self.seed}:{stream}:{channel_id}")

    async def fetch_channel_metrics(self, channel_id: str) -> ChannelMetrics:
        rng = self._rng(channel_id, "metrics")

        subscribers = rng.randint(5_000, 5_000_000)
        view_rate = rng.uniform(0.02, 0.4)
        videos = rng.randint(5, 800)

        return ChannelMetrics(
            subscriber_count=subscribers,
            average_views_per_video=int(subscribers * view_rate),
            cost_per_mille=round(rng.uniform(1.5, 4.5), 2),
            channel_age_months=rng.randint(3, 120),
            category=rng.choice(CATEGORIES),
            primary_geography=rng.choice(GEOGRAPHIES),
            engagement_rate_bp=rng.randint(100, 900),
            average_watch_time_seconds=rng.randint(60, 600),
            total_views=int(subscribers * view_rate) * videos,
            video_count=videos,
        )

    async def fetch_view_history(self, channel_id: str) -> list[int]:
        metrics = await self.fetch_channel_metrics(channel_id)
        rng = self._rng(channel_id, "history")

        # Noise around the average, wider for younger channels
        spread = 0.35 if metrics.channel_age_months < 12 else 0.12
        base = metrics.average_views_per_video
        return [
            max(0, int(base * (1 + rng.uniform(-spread, spread))))
            for _ in range(self.history_length)
        ]

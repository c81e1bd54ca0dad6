"""Core interfaces for adapters."""

from abc import ABC, abstractmethod

from stream_fund.core.entities import ChannelMetrics, VaultPlan


class ChannelMetricsSupplier(ABC):
    """Interface for obtaining channel data from an upstream source."""
    
    @abstractmethod
    async def fetch_channel_metrics(self, channel_id: str) -> ChannelMetrics:
        """Fetch current metrics for a channel."""
        pass
    
    @abstractmethod
    async def fetch_view_history(self, channel_id: str) -> list[int]:
        """Fetch recent per-period view counts, oldest first."""
        pass


class ReportGenerator(ABC):
    """Interface for rendering vault plans."""
    
    @abstractmethod
    def generate(self, plans: list[VaultPlan]) -> str:
        """Render plans as a document."""
        pass

"""Supabase channel data supplier."""

import asyncio
from typing import Any, Optional

import httpx

from stream_fund.config import Settings
from stream_fund.core import ChannelMetrics, ChannelMetricsSupplier, SupplierError, ValidationError


class SupabaseChannelSupplier(ChannelMetricsSupplier):
    """Read creator profiles through the Supabase REST API.

    Fields missing from the row are looked up in its ``metadata`` JSON.

    Profiles are cached per channel for the lifetime of the supplier, so
    metrics and view history cost one request. Create a new supplier (or
    call ``clear_cache``) to pick up changed profiles.
    """

    emoji = "🗄️"
    name = "Supabase"
    table = "creator_profiles"

    def __init__(self, settings: Settings) -> None:
        if not settings.supabase_url:
            raise SupplierError("*", "SUPABASE_URL is not configured")
        self.base_url = settings.supabase_url.rstrip("/")
        self.api_key = settings.supabase_key or ""
        self.max_retries = settings.supplier.max_retries
        self.initial_retry_delay = settings.supplier.initial_retry_delay
        self.timeout = settings.supplier.timeout
        self._cache: dict[str, dict[str, Any]] = {}

    async def fetch_channel_metrics(self, channel_id: str) -> ChannelMetrics:
        row = await self._fetch_profile(channel_id)
        meta = row.get("metadata") or {}

        def value(key: str, meta_key: str, default: Any = None) -> Any:
            if row.get(key) is not None:
                return row[key]
            return meta.get(meta_key, default)

        try:
            return ChannelMetrics(
                subscriber_count=int(value("subscriber_count", "subscriber_count", 0)),
                average_views_per_video=int(value("avg_views", "avg_views", 0)),
                cost_per_mille=float(value("cpm", "cpm", 2.5)),
                channel_age_months=int(value("channel_age_months", "channel_age_months", 0)),
                category=str(value("category", "category", "")),
                primary_geography=str(value("primary_geo", "primary_geo", "")),
                engagement_rate_bp=int(value("engagement_rate_bp", "engagement_rate_bp", 0)),
                average_watch_time_seconds=int(value("avg_watch_time", "avg_watch_time", 0)),
                total_views=int(value("view_count", "view_count", 0)),
                video_count=int(value("video_count", "video_count", 0)),
            )
        except (TypeError, ValueError) as e:
            if isinstance(e, ValidationError):
                raise SupplierError(channel_id, f"invalid profile field {e.field}", e) from e
            raise SupplierError(channel_id, f"malformed profile: {e}", e) from e

    async def fetch_view_history(self, channel_id: str) -> list[int]:
        row = await self._fetch_profile(channel_id)
        history = (row.get("metadata") or {}).get("view_history")

        if not history:
            raise SupplierError(channel_id, "profile has no view history")
        try:
            return [int(v) for v in history]
        except (TypeError, ValueError) as e:
            raise SupplierError(channel_id, f"malformed view history: {e}", e) from e

    def clear_cache(self) -> None:
        self._cache.clear()

    async def _fetch_profile(self, channel_id: str) -> dict[str, Any]:
        if channel_id in self._cache:
            return self._cache[channel_id]

        rows = await self._get(
            f"/rest/v1/{self.table}",
            params={"channel_id": f"eq.{channel_id}", "is_active": "eq.true", "select": "*"},
            channel_id=channel_id,
        )
        if not rows:
            raise SupplierError(channel_id, "no active creator profile found")

        self._cache[channel_id] = rows[0]
        return rows[0]

    async def _get(self, path: str, params: dict[str, str], channel_id: str) -> list[dict[str, Any]]:
        """GET with retries on rate limits, server errors and network failures."""
        last_exception: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(
                        f"{self.base_url}{path}",
                        params=params,
                        headers={
                            "apikey": self.api_key,
                            "Authorization": f"Bearer {self.api_key}",
                            "Accept": "application/json",
                        },
                    )

                    if response.status_code == 200:
                        return self._parse_rows(response, channel_id)

                    if response.status_code == 429 or response.status_code >= 500:
                        retry_delay = self._get_retry_delay(response, attempt)
                        print(f"  ⏳ Supabase HTTP {response.status_code}, retrying after {retry_delay:.1f}s (attempt {attempt + 1}/{self.max_retries})")
                        await asyncio.sleep(retry_delay)
                        continue

                    response.raise_for_status()

            except httpx.HTTPStatusError as e:
                raise SupplierError(channel_id, f"HTTP {e.response.status_code}", e) from e
            except httpx.RequestError as e:
                last_exception = e
                if attempt < self.max_retries - 1:
                    retry_delay = self.initial_retry_delay * (2 ** attempt)
                    print(f"  ⚠️  Network error, retrying after {retry_delay:.1f}s")
                    await asyncio.sleep(retry_delay)
                    continue

        raise SupplierError(channel_id, "request failed after all retries", last_exception)

    def _parse_rows(self, response: httpx.Response, channel_id: str) -> list[dict[str, Any]]:
        try:
            rows = response.json()
        except ValueError as e:
            raise SupplierError(channel_id, "malformed response: body is not JSON", e) from e

        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise SupplierError(channel_id, "malformed response: expected a list of rows")
        return rows

    def _get_retry_delay(self, response: httpx.Response, attempt: int) -> float:
        """Use the Retry-After header when present, exponential backoff otherwise."""
        retry_after = response.headers.get("retry-after")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass

        return self.initial_retry_delay * (2 ** attempt)

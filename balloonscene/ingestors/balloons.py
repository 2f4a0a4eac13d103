"""Balloon snapshot ingestor for the WindBorne hourly position feed."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from balloonscene.config import settings

logger = logging.getLogger("balloonscene.ingestors.balloons")

HOURS_OF_HISTORY = 24


def snapshot_url(base_url: str, hour: int) -> str:
    """Return the snapshot URL for ``hour``, e.g. ``.../03.json``."""

    if not 0 <= hour < HOURS_OF_HISTORY:
        raise ValueError(f"Snapshot hour must be in [0, {HOURS_OF_HISTORY}): {hour}")
    return f"{base_url.rstrip('/')}/{hour:02d}.json"


class BalloonIngestor:
    """Fetch hourly balloon position snapshots."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.balloon_base_url
        self.timeout = timeout or settings.balloon_timeout
        self.transport = transport

    async def fetch_snapshots(self) -> dict[int, list[Any] | None]:
        """Fetch all 24 hourly snapshots concurrently.

        Each hour fails independently; a failed hour maps to ``None``.
        """

        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            results = await asyncio.gather(
                *(self.fetch_snapshot(client, hour) for hour in range(HOURS_OF_HISTORY))
            )

        snapshots = dict(enumerate(results))
        available = sum(1 for snapshot in results if snapshot is not None)
        logger.info("Fetched %s/%s balloon snapshots", available, HOURS_OF_HISTORY)
        return snapshots

    async def fetch_snapshot(self, client: httpx.AsyncClient, hour: int) -> list[Any] | None:
        url = snapshot_url(self.base_url, hour)

        try:
            response = await client.get(url)
        except httpx.TimeoutException as exc:
            logger.warning("Balloon snapshot %s timed out: %s", url, exc)
            return None
        except httpx.RequestError as exc:
            logger.warning("Balloon snapshot %s request failed: %s", url, exc)
            return None

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Balloon feed returned HTTP %s for %s", exc.response.status_code, url
            )
            return None

        try:
            payload = response.json()
        except (ValueError, RecursionError) as exc:
            logger.warning("Failed to parse balloon snapshot %s: %s", url, exc)
            return None

        if not isinstance(payload, list):
            logger.warning(
                "Balloon snapshot %s is not an array (got %s)", url, type(payload).__name__
            )
            return None

        return payload


__all__ = ["BalloonIngestor", "HOURS_OF_HISTORY", "snapshot_url"]

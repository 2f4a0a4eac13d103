"""NASA FIRMS ingestor for near-real-time fire hotspots."""

from __future__ import annotations

import csv
import io
import logging
import math
from typing import Any, Optional

import httpx

from balloonscene.config import settings
from balloonscene.models.fire import Fire
from balloonscene.models.scene import BoundingRegion

logger = logging.getLogger("balloonscene.ingestors.firms")

# FIRMS area API accepts 1..10 days of lookback
MIN_DAY_RANGE = 1
MAX_DAY_RANGE = 10


def _parse_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        parsed = float(str(value).strip())
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _row_to_fire(row: dict[str, Any]) -> Optional[Fire]:
    lat = _parse_float(row.get("latitude"))
    lon = _parse_float(row.get("longitude"))
    if lat is None or lon is None:
        return None

    # VIIRS products name the channel I-4 brightness column bright_ti4
    raw_brightness = row.get("brightness")
    if raw_brightness in (None, ""):
        raw_brightness = row.get("bright_ti4")

    return Fire(
        lat=lat,
        lon=lon,
        brightness=_parse_float(raw_brightness),
        confidence=_optional_text(row.get("confidence")),
        acq_date=_optional_text(row.get("acq_date")),
        acq_time=_optional_text(row.get("acq_time")),
        satellite=_optional_text(row.get("satellite")),
    )


def parse_fire_csv(text: str, max_fires: int | None = None) -> list[Fire]:
    """Parse a FIRMS CSV body into fires.

    The first line is the header. Rows without finite coordinates are
    skipped. At most ``max_fires`` fires are returned, in feed order.
    """

    lines = [line for line in text.strip().splitlines() if line.strip()]
    if len(lines) <= 1:
        return []

    fires: list[Fire] = []
    skipped = 0
    try:
        reader = csv.DictReader(io.StringIO("\n".join(lines)))
        if reader.fieldnames:
            reader.fieldnames = [name.strip() for name in reader.fieldnames]

        for row in reader:
            fire = _row_to_fire(row)
            if fire is None:
                skipped += 1
                continue
            fires.append(fire)
            if max_fires is not None and len(fires) >= max_fires:
                logger.debug("Fire list capped at %s entries", max_fires)
                break
    except csv.Error as exc:
        logger.warning(
            "Malformed FIRMS CSV after %s fires; keeping those: %s", len(fires), exc
        )

    if skipped:
        logger.debug("Skipped %s FIRMS rows without valid coordinates", skipped)
    return fires


class FirmsIngestor:
    """Fetch fire detections for a bounding region from the FIRMS area API."""

    def __init__(
        self,
        *,
        map_key: str | None = None,
        product: str | None = None,
        base_url: str | None = None,
        day_range: int | None = None,
        max_fires: int | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.map_key = map_key if map_key is not None else settings.firms_key
        self.product = product or settings.firms_product
        self.base_url = base_url or settings.firms_base_url
        self.day_range = min(
            max(day_range or settings.firms_day_range, MIN_DAY_RANGE), MAX_DAY_RANGE
        )
        self.max_fires = max_fires or settings.firms_max_fires
        self.timeout = timeout or settings.firms_timeout
        self.transport = transport

    def _area_url(self, bounds: BoundingRegion, key: str) -> str:
        return (
            f"{self.base_url.rstrip('/')}/api/area/csv/{key}/{self.product}/"
            f"{bounds.area_coords()}/{self.day_range}"
        )

    async def get_fires(self, bounds: BoundingRegion | None) -> list[Fire]:
        if not self.map_key:
            logger.warning("No FIRMS key configured; returning no fires")
            return []
        if bounds is None:
            return []

        url = self._area_url(bounds, self.map_key)
        # Keep the key out of the logs
        logger.info(
            "Requesting FIRMS %s fires for area %s over %s days",
            self.product,
            bounds.area_coords(),
            self.day_range,
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as exc:
            logger.warning("FIRMS request timed out: %s", type(exc).__name__)
            return []
        except httpx.RequestError as exc:
            logger.warning("FIRMS request failed: %s", type(exc).__name__)
            return []

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("FIRMS returned HTTP %s", exc.response.status_code)
            return []

        fires = parse_fire_csv(response.text, max_fires=self.max_fires)
        logger.debug("Ingested %s fire detections", len(fires))
        return fires


__all__ = ["FirmsIngestor", "parse_fire_csv"]

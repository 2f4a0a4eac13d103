"""Configuration settings for the balloonscene backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("balloonscene.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def get_firms_key_from_ssm(parameter_name: str) -> str | None:
    """Fetch the FIRMS map key from AWS SSM Parameter Store.

    The fire feed is optional, so unlike a hard dependency a failed lookup
    only logs and returns ``None``; the scene then carries no fires.
    """

    client = boto3.client(
        "ssm",
        region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1",
    )
    try:
        response = client.get_parameter(Name=parameter_name, WithDecryption=True)
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:
        logger.warning("Failed to load FIRMS key from SSM %s: %s", parameter_name, exc)
        return None

    if not value:
        logger.warning("SSM parameter %s holds an empty FIRMS key", parameter_name)
        return None

    return value


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    balloonscene_env: str = os.getenv("BALLOONSCENE_ENV", "local")
    log_level: str = os.getenv("BALLOONSCENE_LOG_LEVEL", "INFO")
    port: int = int(os.getenv("PORT", "4000"))
    debug_endpoints: bool = _get_bool("DEBUG_ENDPOINTS")

    # Balloon feed
    balloon_base_url: str = os.getenv(
        "BALLOON_BASE_URL", "https://a.windbornesystems.com/treasure"
    )
    balloon_timeout: float = float(os.getenv("BALLOON_TIMEOUT", "10.0"))
    track_downsample_step: int = int(os.getenv("TRACK_DOWNSAMPLE_STEP", "1"))

    # FIRMS fire feed
    firms_key: str | None = os.getenv("FIRMS_KEY") or None
    firms_key_ssm_parameter: str | None = os.getenv("FIRMS_KEY_SSM_PARAMETER") or None
    firms_product: str = os.getenv("FIRMS_PRODUCT", "VIIRS_SNPP_NRT")
    firms_base_url: str = os.getenv(
        "FIRMS_BASE_URL", "https://firms.modaps.eosdis.nasa.gov"
    )
    firms_day_range: int = int(os.getenv("FIRMS_DAY_RANGE", "2"))
    firms_max_fires: int = int(os.getenv("FIRMS_MAX_FIRES", "500"))
    firms_timeout: float = float(os.getenv("FIRMS_TIMEOUT", "15.0"))

    # Scene assembly
    bounds_margin_deg: float = float(os.getenv("BOUNDS_MARGIN_DEG", "5.0"))
    scene_cache_ttl_seconds: float = float(os.getenv("SCENE_CACHE_TTL_SECONDS", "300"))
    correlate_full_track: bool = _get_bool("CORRELATE_FULL_TRACK")

    @property
    def firms_configured(self) -> bool:
        return bool(self.firms_key)


def resolve_firms_key(config: Settings) -> str | None:
    """Return the configured FIRMS key, falling back to SSM when one is named."""

    if config.firms_key:
        return config.firms_key
    if config.firms_key_ssm_parameter:
        return get_firms_key_from_ssm(config.firms_key_ssm_parameter)
    return None


settings = Settings()
settings.firms_key = resolve_firms_key(settings)

__all__ = ["settings", "Settings", "get_firms_key_from_ssm", "resolve_firms_key"]

"""
Centralized configuration with environment variable overrides.

Booking rule defaults, the salon's timezone and display locale are
configurable here. Nothing is hardcoded in the slot engine itself;
callers may still override any booking rule per call.
"""

import logging
import os
from dataclasses import dataclass, field

import pytz
from dotenv import load_dotenv

from salon_booking.logging_context import RequestIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

SUPPORTED_LOCALES = ("en", "de")
LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"
MINUTES_PER_DAY = 24 * 60


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag ("true"/"false", "1"/"0", "yes"/"no") from an env var."""
    raw = os.getenv(env_var, default)
    normalized = raw.strip().lower()
    if normalized in ("true", "1", "yes", "on"):
        return True
    if normalized in ("false", "0", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class SalonConfig:
    """Salon-wide settings loaded from environment or defaults."""

    name: str = os.getenv("SALON_NAME", "Salon Lumen")
    timezone: str = os.getenv("SALON_TIMEZONE", "Europe/Berlin")
    display_locale: str = os.getenv("DISPLAY_LOCALE", "en")


@dataclass(frozen=True)
class BookingDefaults:
    """Default booking rules, merged under any per-call overrides."""

    slot_granularity_minutes: int = _safe_int("SLOT_GRANULARITY_MINUTES", "15")
    lead_time_minutes: int = _safe_int("LEAD_TIME_MINUTES", "60")
    horizon_days: int = _safe_int("HORIZON_DAYS", "30")
    buffer_between_minutes: int = _safe_int("BUFFER_BETWEEN_MINUTES", "0")
    allow_multiple_services: bool = _safe_bool("ALLOW_MULTIPLE_SERVICES", "true")
    require_deposit: bool = _safe_bool("REQUIRE_DEPOSIT", "false")
    cancellation_deadline_hours: int = _safe_int("CANCELLATION_DEADLINE_HOURS", "24")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    salon: SalonConfig = field(default_factory=SalonConfig)
    booking: BookingDefaults = field(default_factory=BookingDefaults)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "salon-slot-engine")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    booking = config.booking
    if not 1 <= booking.slot_granularity_minutes <= MINUTES_PER_DAY:
        raise ValueError(
            f"SLOT_GRANULARITY_MINUTES must be between 1 and {MINUTES_PER_DAY}, "
            f"got {booking.slot_granularity_minutes}"
        )

    for name, value in [
        ("LEAD_TIME_MINUTES", booking.lead_time_minutes),
        ("HORIZON_DAYS", booking.horizon_days),
        ("BUFFER_BETWEEN_MINUTES", booking.buffer_between_minutes),
        ("CANCELLATION_DEADLINE_HOURS", booking.cancellation_deadline_hours),
    ]:
        if value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}")

    if config.salon.timezone not in pytz.all_timezones_set:
        raise ValueError(f"SALON_TIMEZONE is not a known timezone: {config.salon.timezone!r}")

    if config.salon.display_locale not in SUPPORTED_LOCALES:
        raise ValueError(
            f"DISPLAY_LOCALE must be one of {', '.join(SUPPORTED_LOCALES)}, "
            f"got {config.salon.display_locale!r}"
        )


def build_log_handler() -> logging.Handler:
    """Console handler whose records always carry a request_id, whichever logger emitted them."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[build_log_handler()],
    )
    logger.info("Configuration loaded for '%s'", config.salon.name)
    return config


# Singleton instance
settings = load_config()

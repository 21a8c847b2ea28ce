# config.py

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent

# First puzzle went live at this instant. Day boundaries are counted from here,
# not from midnight in the player's zone.
DEFAULT_EPOCH = "2022-03-31T16:00:00+00:00"


def _env_int(name: str, default: int) -> int:
    """Read an integer value from environment variables."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_datetime(name: str, default: str) -> datetime:
    """Read an ISO-8601 instant from environment variables, assuming UTC when no offset is given."""
    raw = os.getenv(name, default)
    try:
        value = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        value = datetime.fromisoformat(default)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class Settings:
    """Central application settings loaded from environment variables."""

    epoch: datetime = field(
        default_factory=lambda: _env_datetime("GUESSER_EPOCH", DEFAULT_EPOCH)
    )

    # Static data
    data_dir: Path = field(
        default_factory=lambda: Path(os.getenv("GUESSER_DATA_DIR", BASE_DIR / "data"))
    )

    # Game rules
    bonus_round_size: int = field(
        default_factory=lambda: _env_int("GUESSER_BONUS_ROUND_SIZE", 6)
    )
    num_guesses_allowed: int = field(
        default_factory=lambda: _env_int("GUESSER_NUM_GUESSES", 6)
    )

    # Local player state
    stats_path: Path = field(
        default_factory=lambda: Path(os.getenv("GUESSER_STATS_PATH", "stats.json"))
    )

    # Metadata is regenerated at most this often
    cache_ttl_seconds: int = field(
        default_factory=lambda: _env_int("GUESSER_CACHE_TTL_SECONDS", 3600)
    )

    log_level: str = field(
        default_factory=lambda: os.getenv("GUESSER_LOG_LEVEL", "INFO")
    )

    share_url: str = field(
        default_factory=lambda: os.getenv("GUESSER_SHARE_URL", "https://worldle.acrofever.com")
    )


settings = Settings()

"""Settings for the scheduler services, loaded from environment variables."""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from flashdeck.srs.quality import ScaleKind


class Settings(BaseModel):
    """Runtime settings for review scheduling and study sessions."""

    default_scale: ScaleKind = "three_level"
    new_cards_per_day: int = Field(15, ge=0)
    reviews_per_day: int = Field(20, ge=0)
    session_ttl_seconds: int = Field(30 * 60, gt=0)
    max_sessions: int = Field(10000, gt=0)
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings from environment variables (and a local .env file)."""
    load_dotenv()

    return Settings(
        default_scale=os.getenv("SRS_DEFAULT_SCALE", "three_level"),
        new_cards_per_day=int(os.getenv("SRS_NEW_CARDS_PER_DAY", "15")),
        reviews_per_day=int(os.getenv("SRS_REVIEWS_PER_DAY", "20")),
        session_ttl_seconds=int(os.getenv("SRS_SESSION_TTL_SECONDS", str(30 * 60))),
        max_sessions=int(os.getenv("SRS_MAX_SESSIONS", "10000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once handlers exist; the level must still apply
    logging.getLogger().setLevel(settings.log_level)

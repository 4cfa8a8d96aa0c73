"""Application configuration with comprehensive validation."""
from typing import Optional, Literal
from functools import lru_cache
from pydantic import Field, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# DISPLAY DEFAULTS
# =============================================================================
# Used when a stored celebrity row is missing a display field.
# =============================================================================

DEFAULT_CELEBRITY_NAME = "Unknown"
DEFAULT_CELEBRITY_REASON = "Temporary reason"
DEFAULT_IMAGE_URL = (
    "https://upload.wikimedia.org/wikipedia/commons/0/05/"
    "Robin_Williams_2011a_%282%29.jpg"
)


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Celebrity Timeline"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Store
    STORE_BACKEND: Literal["sqlite", "snowflake"] = "sqlite"
    SQLITE_PATH: str = "data/celebrities.db"

    # Snowflake (only required when STORE_BACKEND == "snowflake")
    SNOWFLAKE_ACCOUNT: Optional[str] = None
    SNOWFLAKE_USER: Optional[str] = None
    SNOWFLAKE_PASSWORD: Optional[SecretStr] = None
    SNOWFLAKE_DATABASE: Optional[str] = None
    SNOWFLAKE_SCHEMA: Optional[str] = None
    SNOWFLAKE_WAREHOUSE: Optional[str] = None
    SNOWFLAKE_ROLE: Optional[str] = None

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_TTL_CELEBRITIES: int = Field(default=30, ge=1, le=86400)

    # Timeline geometry (vh = percent of viewport height)
    TIMELINE_PAGE_VH: float = Field(default=200.0, gt=0)
    TIMELINE_TOP_VH: float = Field(default=15.0, ge=0)
    TIMELINE_BOTTOM_VH: float = Field(default=15.0, ge=0)
    COLLISION_THRESHOLD_VH: float = Field(default=2.0, ge=0)
    STAGGER_PX: float = Field(default=10.0, ge=0)
    AVATAR_SIZE_PX: int = Field(default=72, ge=8, le=512)
    HOVER_THRESHOLD_PX: float = Field(default=48.0, gt=0)
    DETAIL_BAND_PX: float = Field(default=60.0, ge=0)
    DEFAULT_IMAGE_URL: str = DEFAULT_IMAGE_URL

    @model_validator(mode="after")
    def validate_timeline_margins(self):
        """Margins must leave a positive usable range on the page."""
        usable = self.TIMELINE_PAGE_VH - self.TIMELINE_TOP_VH - self.TIMELINE_BOTTOM_VH
        if usable <= 0:
            raise ValueError(
                f"Timeline margins leave no usable range (page={self.TIMELINE_PAGE_VH}vh, "
                f"top={self.TIMELINE_TOP_VH}vh, bottom={self.TIMELINE_BOTTOM_VH}vh)"
            )
        return self

    @model_validator(mode="after")
    def validate_store_settings(self):
        """Snowflake backend needs its credentials."""
        if self.STORE_BACKEND == "snowflake":
            missing = [
                name for name in ("SNOWFLAKE_ACCOUNT", "SNOWFLAKE_USER", "SNOWFLAKE_PASSWORD")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(f"Snowflake backend requires: {', '.join(missing)}")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self

    @property
    def timeline_usable_vh(self) -> float:
        """Height of the scored part of the timeline in vh."""
        return self.TIMELINE_PAGE_VH - self.TIMELINE_TOP_VH - self.TIMELINE_BOTTOM_VH


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PLACEMENT_FILE = Path(__file__).resolve().parents[1] / "person" / "placement.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TRAININGDEMO_",
        env_file=".env",
        extra="ignore",
    )

    # Runtime
    ENVIRONMENT: str = Field(default="dev", description="Environment name")
    HOST: str = Field(default="0.0.0.0", description="Bind host")
    PORT: int = Field(default=7920, description="Bind port")
    LOG_LEVEL: str = Field(default="info", description="uvicorn log level")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///trainingdemo_dev.db")

    # Features
    # Startups declaring required features only run when all of them are listed here.
    FEATURES_ENABLED: str = Field(
        default="graphql", description="Comma-separated feature ids, e.g. graphql"
    )
    GRAPHQL_PATH: str = Field(default="/api/graphql")

    # Display
    PLACEMENT_FILE: str = Field(
        default="",
        description="Placement JSON file; empty uses the packaged person/placement.json",
    )

    # Person list
    PERSON_LIST_MIN_AGE: int = Field(
        default=30, description="Default age threshold of the person list"
    )

    @property
    def enabled_features(self) -> set[str]:
        return {p.strip() for p in (self.FEATURES_ENABLED or "").split(",") if p.strip()}

    @property
    def placement_path(self) -> Path:
        return Path(self.PLACEMENT_FILE) if self.PLACEMENT_FILE else DEFAULT_PLACEMENT_FILE


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

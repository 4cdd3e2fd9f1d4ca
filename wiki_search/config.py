"""
Wiki Search - Configuration

Pydantic Settings for all configuration via environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, Literal
from pathlib import Path


class SiteSettings(BaseSettings):
    """Content sources and published artifact locations."""
    data_dir: Path = Field(Path("data"), alias="WIKI_DATA_DIR")
    output_dir: Path = Field(Path("public"), alias="WIKI_OUTPUT_DIR")
    base_url: str = Field("http://localhost:3000", alias="WIKI_BASE_URL")
    index_path: str = Field("/search-index.json", alias="SEARCH_INDEX_PATH")
    manifest_path: str = Field("/search-manifest.json", alias="SEARCH_MANIFEST_PATH")

    model_config = {"env_prefix": "", "extra": "ignore"}

    @property
    def index_file(self) -> Path:
        return self.output_dir / self.index_path.lstrip("/")

    @property
    def manifest_file(self) -> Path:
        return self.output_dir / self.manifest_path.lstrip("/")


class SearchSettings(BaseSettings):
    """Query client behaviour."""
    debounce_ms: int = Field(140, alias="SEARCH_DEBOUNCE_MS")
    limit: int = Field(8, alias="SEARCH_LIMIT")
    fetch_timeout: Optional[float] = Field(None, alias="SEARCH_FETCH_TIMEOUT")
    suggestion_limit: int = Field(6, alias="SEARCH_SUGGESTION_LIMIT")

    model_config = {"env_prefix": "", "extra": "ignore"}


class CacheSettings(BaseSettings):
    """Artifact caching configuration."""
    enabled: bool = Field(True, alias="CACHE_ENABLED")
    ttl_seconds: int = Field(900, alias="CACHE_TTL_SECONDS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LogSettings(BaseSettings):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", alias="LOG_LEVEL"
    )

    model_config = {"env_prefix": "", "extra": "ignore"}


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""
    site: SiteSettings = Field(default_factory=SiteSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {"env_prefix": "", "extra": "ignore"}


def get_settings() -> Settings:
    """Load settings from environment variables."""
    from dotenv import load_dotenv
    load_dotenv()
    return Settings()

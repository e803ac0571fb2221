"""Configuration management using pydantic-settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Optional, Tuple


class Settings(BaseSettings):
    """Library and service settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FASTTLD_",
        case_sensitive=False
    )

    # Suffix source (None means the managed cache below)
    suffix_source_path: Optional[str] = None
    include_private_suffixes: bool = False

    # Managed cache
    cache_dir: str = str(Path.home() / ".cache" / "fasttld")
    cache_max_age_days: int = 3
    auto_update: bool = True

    # Mirrors, tried in order
    psl_mirrors: Tuple[str, ...] = (
        "https://publicsuffix.org/list/public_suffix_list.dat",
        "https://raw.githubusercontent.com/publicsuffix/list/master/public_suffix_list.dat",
    )

    # Timeouts (seconds)
    fetch_timeout_seconds: float = 10.0

    # Refresh scheduler (seconds)
    refresh_interval_seconds: int = 3 * 24 * 3600

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    @property
    def cache_file_path(self) -> Path:
        """Location of the managed Public Suffix List cache."""
        return Path(self.cache_dir) / "public_suffix_list.dat"

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        Path(self.cache_dir).mkdir(parents=True, exist_ok=True)


settings = Settings()

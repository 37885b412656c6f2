from __future__ import annotations

import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field


class TMDbConfig(BaseModel):
    """TMDb API configuration."""

    # Read from TMDB_API_KEY if not provided
    api_key: str | None = Field(default=None)
    base_url: str = Field(default="https://api.themoviedb.org/3")
    timeout_s: float = Field(default=10.0, ge=1.0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING")  # DEBUG, INFO, WARNING, ERROR
    hash_paths: bool = Field(default=False)


class Config(BaseModel):
    """
    Main configuration for release-date-finder.

    Loads from TOML file with optional environment variable overrides.
    """

    tmdb: TMDbConfig = Field(default_factory=TMDbConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """
        Load configuration from TOML file with environment variable overrides.

        Environment variables take precedence and follow the pattern:
        RELEASE_DATE_FINDER_<SECTION>_<KEY> (e.g., RELEASE_DATE_FINDER_TMDB_TIMEOUT_S)

        All values are gathered into a single dictionary first, then validated
        by Pydantic to ensure consistent type checking and coercion.
        """
        config_dict: dict[str, object] = {}

        if config_path and config_path.exists():
            config_dict = tomllib.loads(config_path.read_text())

        config_dict = cls._merge_env_overrides(config_dict)
        return cls.model_validate(config_dict)

    @classmethod
    def _merge_env_overrides(cls, config_dict: dict[str, object]) -> dict[str, object]:
        """
        Merge environment variable overrides into config dictionary.

        Returns a new dictionary with env vars applied, ready for Pydantic validation.
        """
        env_prefix = "RELEASE_DATE_FINDER_"

        tmdb = config_dict.setdefault("tmdb", {})
        if not isinstance(tmdb, dict):
            tmdb = {}
            config_dict["tmdb"] = tmdb

        # Prefixed key wins over the conventional TMDB_API_KEY
        if api_key := os.getenv("TMDB_API_KEY"):
            tmdb["api_key"] = api_key
        if api_key := os.getenv(f"{env_prefix}TMDB_API_KEY"):
            tmdb["api_key"] = api_key
        if base_url := os.getenv(f"{env_prefix}TMDB_BASE_URL"):
            tmdb["base_url"] = base_url
        if timeout := os.getenv(f"{env_prefix}TMDB_TIMEOUT_S"):
            tmdb["timeout_s"] = timeout

        logging_config = config_dict.setdefault("logging", {})
        if not isinstance(logging_config, dict):
            logging_config = {}
            config_dict["logging"] = logging_config

        if log_level := os.getenv(f"{env_prefix}LOGGING_LEVEL"):
            logging_config["level"] = log_level
        if log_hash_paths := os.getenv(f"{env_prefix}LOGGING_HASH_PATHS"):
            logging_config["hash_paths"] = log_hash_paths.lower() in ("true", "1", "yes")

        return config_dict


## Tests


def test_config_defaults(monkeypatch):
    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    config = Config()
    assert config.tmdb.api_key is None
    assert config.tmdb.base_url == "https://api.themoviedb.org/3"
    assert config.tmdb.timeout_s == 10.0
    assert config.logging.level == "WARNING"


def test_config_from_dict():
    config = Config.model_validate(
        {
            "tmdb": {"api_key": "abc", "timeout_s": 5},
            "logging": {"level": "DEBUG"},
        }
    )
    assert config.tmdb.api_key == "abc"
    assert config.tmdb.timeout_s == 5.0
    assert config.logging.level == "DEBUG"


def test_config_env_overrides(monkeypatch):
    monkeypatch.delenv("RELEASE_DATE_FINDER_TMDB_API_KEY", raising=False)
    monkeypatch.setenv("TMDB_API_KEY", "plain-key")
    monkeypatch.setenv("RELEASE_DATE_FINDER_TMDB_TIMEOUT_S", "20")
    monkeypatch.setenv("RELEASE_DATE_FINDER_LOGGING_HASH_PATHS", "yes")

    config = Config.load()
    assert config.tmdb.api_key == "plain-key"
    assert config.tmdb.timeout_s == 20.0
    assert config.logging.hash_paths is True


def test_config_prefixed_api_key_wins(monkeypatch):
    monkeypatch.setenv("TMDB_API_KEY", "plain-key")
    monkeypatch.setenv("RELEASE_DATE_FINDER_TMDB_API_KEY", "prefixed-key")

    config = Config.load()
    assert config.tmdb.api_key == "prefixed-key"


def test_config_load_nonexistent_file(monkeypatch):
    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    monkeypatch.delenv("RELEASE_DATE_FINDER_TMDB_API_KEY", raising=False)
    config = Config.load(Path("/nonexistent/config.toml"))
    assert config.tmdb.api_key is None
    assert config.tmdb.timeout_s == 10.0

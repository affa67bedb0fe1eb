"""
Configuration management for folioscrape using Pydantic.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

DEFAULT_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-first-run",
    "--no-zygote",
    "--disable-extensions",
]

# --- Nested Configuration Models ---


class FetcherConfig(BaseModel):
    """Page fetcher configuration."""

    render_javascript: bool = Field(default=True, description="Render pages in headless Chromium before extraction.")
    fallback_to_http: bool = Field(
        default=True, description="Fall back to a plain HTTP GET when the browser cannot be launched."
    )
    timeout: float = Field(default=30.0, gt=0, description="Fetch/render timeout in seconds.")
    max_retries: int = Field(default=2, ge=0, description="Retry attempts for retryable HTTP statuses.")
    retry_backoff: float = Field(default=1.0, ge=0, description="Base delay in seconds between retries.")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent string for HTTP requests.")
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        default="networkidle", description="Playwright navigation event to wait for."
    )
    browser_args: List[str] = Field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))
    chromium_executable_path: Optional[str] = Field(
        default_factory=lambda: os.getenv("PLAYWRIGHT_CHROMIUM_EXECUTABLE_PATH") or None,
        description="Custom Chromium binary, e.g. a serverless build.",
    )


class WebConfig(BaseModel):
    """Configuration for the HTTP API."""

    host: str = Field(default="0.0.0.0", description="Host for the web server.")
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "3000")), description="Port for the web server.")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins.")
    service_name: str = Field(default="portfolio-scraper-api")

    @field_validator("cors_origins")
    @classmethod
    def validate_origins(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("cors_origins must contain at least one origin")
        return v


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")
    json_logs: bool = Field(default=False, description="Render console logs as JSON.")

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "folioscrape"
    version: str = "0.1.0"
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="FOLIO_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls()
        return cls(**yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "config.yaml", current_dir / "config.yml"):
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from an explicit path, a discovered file, or defaults."""
    config_path = path or find_config_file()
    if config_path:
        return Config.from_yaml(config_path)
    return Config()

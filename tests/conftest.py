"""
Shared fixtures for the folioscrape test suite.
"""

from pathlib import Path

import pytest
import structlog
from folioscrape.config import Config
from folioscrape.config.config import FetcherConfig

BASE_URL = "https://janedoe.dev/portfolio.html"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")

    # Route structlog through stdlib logging so pytest captures it instead of stdout.
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def reset_log_context():
    """Keep structlog context vars from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def fetcher_config() -> FetcherConfig:
    """Fast, deterministic fetcher settings: HTTP only, no backoff delay."""
    return FetcherConfig(
        render_javascript=False,
        timeout=5.0,
        max_retries=1,
        retry_backoff=0.0,
        chromium_executable_path=None,
    )


@pytest.fixture
def config(fetcher_config: FetcherConfig) -> Config:
    return Config(fetcher=fetcher_config)


@pytest.fixture
def data_dir() -> Path:
    return Path(__file__).parent / "data"


@pytest.fixture
def portfolio_html(data_dir: Path) -> str:
    """A realistic single-page portfolio."""
    return (data_dir / "portfolio.html").read_text(encoding="utf-8")

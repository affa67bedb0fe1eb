"""
FastAPI application exposing the portfolio scraper over HTTP.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from folioscrape import __version__
from folioscrape.config.config import Config, load_config
from folioscrape.exceptions import FetchError, ValidationError
from folioscrape.extractor.engine import utc_timestamp
from folioscrape.observability.metrics import export_prometheus
from folioscrape.service import PortfolioScraper
from folioscrape.web.headers import REQUEST_ID_HEADER, RequestContextMiddleware, SecurityHeadersMiddleware

logger = structlog.get_logger(__name__)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def create_app(config: Optional[Config] = None, scraper: Optional[PortfolioScraper] = None) -> FastAPI:
    """Build the API application."""
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "Portfolio Scraper API starting",
            version=__version__,
            render_javascript=config.fetcher.render_javascript,
        )
        yield
        logger.info("Portfolio Scraper API shutting down")

    app = FastAPI(title="Portfolio Scraper API", version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.scraper = scraper or PortfolioScraper(config)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.web.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestContextMiddleware)

    @app.get("/")
    async def root() -> Dict[str, str]:
        """Usage instructions."""
        return {
            "message": "Portfolio Scraper API",
            "usage": 'POST /scrape-portfolio with {"url": "https://example.com"}',
            "health": "GET /health",
        }

    @app.get("/health")
    async def health_check() -> Dict[str, Any]:
        """Liveness probe."""
        return {
            "status": "ok",
            "timestamp": utc_timestamp(),
            "service": config.web.service_name,
            "version": __version__,
        }

    @app.get("/metrics")
    async def get_prometheus_metrics() -> Response:
        """Endpoint for Prometheus to scrape."""
        return Response(export_prometheus(), media_type="text/plain")

    @app.post("/scrape-portfolio")
    async def scrape_portfolio(request: Request) -> JSONResponse:
        """Scrape a portfolio URL and return the extracted record.

        Malformed bodies and non-string URLs are answered with 400, like a bad URL.
        """
        scraper: PortfolioScraper = request.app.state.scraper
        url: Any = None
        if (await request.body()).strip():
            try:
                payload = await request.json()
            except ValueError as e:
                logger.info("Rejected scrape request", reason="invalid JSON body", error=str(e))
                return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})
            if isinstance(payload, dict):
                url = payload.get("url")

        try:
            record = await scraper.scrape(url)
        except ValidationError as e:
            logger.info("Rejected scrape request", url=url, reason=str(e))
            return JSONResponse(status_code=400, content={"error": str(e)})
        except FetchError as e:
            return _failure(500, f"Failed to scrape portfolio: {e}")
        except Exception as e:
            logger.exception("Unexpected error while scraping", url=url)
            return _failure(500, f"Failed to scrape portfolio: {e}")

        return JSONResponse(content={"success": True, "data": record.to_dict()})

    return app


app = create_app()

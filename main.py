#!/usr/bin/env python3
"""
Production entry point for the portfolio scraper API.

Reads an optional YAML config from FOLIO_CONFIG, configures logging and
serves the API with uvicorn. ``python main.py health`` prints a local
health summary instead.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import structlog
import uvicorn

from folioscrape.config.config import load_config
from folioscrape.extractor.engine import utc_timestamp
from folioscrape.observability.logging import configure_logging
from folioscrape.web.main import create_app

logger = structlog.get_logger(__name__)


def main() -> None:
    config_path = os.getenv("FOLIO_CONFIG")
    config = load_config(Path(config_path) if config_path else None)

    if len(sys.argv) > 1 and sys.argv[1] == "health":
        print(json.dumps({"status": "ok", "timestamp": utc_timestamp(), "service": config.web.service_name}, indent=2))
        return

    configure_logging(config.monitoring)
    logger.info("Starting Portfolio Scraper API", host=config.web.host, port=config.web.port)
    uvicorn.run(create_app(config), host=config.web.host, port=config.web.port, log_level="info")


if __name__ == "__main__":
    main()

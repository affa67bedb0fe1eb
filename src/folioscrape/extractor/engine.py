"""
Assembles the five extraction passes into a single ExtractionRecord.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional, TypeVar

import structlog

from .document import parse_html
from .links import extract_images, extract_resume_links
from .models import ExtractionRecord
from .profile import NO_BIO, UNKNOWN_NAME, extract_bio, extract_name
from .projects import extract_projects
from .protocols import Document

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _run_pass(name: str, func: Callable[..., T], placeholder: T, *args: Any) -> T:
    """Run one pass, treating any error raised inside it as "no match"."""
    try:
        return func(*args)
    except Exception as e:
        logger.warning(
            "Extraction pass failed, using placeholder",
            extraction_pass=name,
            error=str(e),
            error_type=type(e).__name__,
        )
        return placeholder


def extract_portfolio(
    document: Document,
    source_url: str,
    *,
    now: Optional[datetime] = None,
) -> ExtractionRecord:
    """Run every extraction pass over ``document`` and package the results.

    Args:
        document: Parsed page
        source_url: Absolute URL the page was retrieved from
        now: Optional clock override for the ``scraped_at`` timestamp

    Returns:
        ExtractionRecord with placeholders for anything not found
    """
    record = ExtractionRecord(
        candidate_name=_run_pass("name", extract_name, UNKNOWN_NAME, document),
        candidate_bio=_run_pass("bio", extract_bio, NO_BIO, document),
        image_urls=_run_pass("images", extract_images, [], document, source_url),
        resume_links=_run_pass("resume_links", extract_resume_links, [], document, source_url),
        project_summaries=_run_pass("projects", extract_projects, [], document),
        scraped_at=utc_timestamp(now),
        source_url=source_url,
    )
    logger.debug(
        "Portfolio extracted",
        source_url=source_url,
        images=len(record.image_urls),
        resume_links=len(record.resume_links),
        projects=len(record.project_summaries),
    )
    return record


def extract_portfolio_html(html: str, source_url: str, *, now: Optional[datetime] = None) -> ExtractionRecord:
    """Parse raw HTML and extract a record from it."""
    return extract_portfolio(parse_html(html), source_url, now=now)

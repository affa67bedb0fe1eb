"""
Heuristic extraction of a candidate profile from a single portfolio page.

Five independent passes read the same parsed document:
1. Name: ordered selector fallbacks ending at the page title
2. Bio: about/bio containers gated on length, then about-like headings
3. Images: absolute, de-duplicated, without icons, logos and trackers
4. Resume links: PDF links and links labelled resume/CV
5. Projects: project containers, then heading/paragraph pairs
"""

from .document import SoupDocument, SoupElement, parse_html
from .engine import extract_portfolio, extract_portfolio_html, utc_timestamp
from .links import extract_images, extract_resume_links
from .models import ExtractionRecord, ProjectSummary, ResumeLink
from .profile import extract_bio, extract_name
from .projects import extract_projects
from .protocols import Document, Element
from .urls import resolve_url

__all__ = [
    "Document",
    "Element",
    "ExtractionRecord",
    "ProjectSummary",
    "ResumeLink",
    "SoupDocument",
    "SoupElement",
    "extract_bio",
    "extract_images",
    "extract_name",
    "extract_portfolio",
    "extract_portfolio_html",
    "extract_projects",
    "extract_resume_links",
    "parse_html",
    "resolve_url",
    "utc_timestamp",
]

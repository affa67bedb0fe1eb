"""
Project summary pass.
"""

from __future__ import annotations

import re
from typing import List

from .models import MAX_PROJECTS, ProjectSummary
from .protocols import Document, Element

UNTITLED_PROJECT = "Untitled Project"
NO_DESCRIPTION = "No description available"

# Every selector is scanned; an element matching two of them is listed twice.
PROJECT_SELECTORS = (
    ".project",
    ".projects .item",
    ".portfolio-item",
    ".work-item",
    ".case-study",
)
TITLE_SELECTOR = "h1, h2, h3, h4, .title"
DESCRIPTION_SELECTOR = "p, .description, .summary"

FALLBACK_HEADINGS = "h1, h2, h3"
MIN_FALLBACK_DESCRIPTION = 20
_SECTION_HEADING = re.compile(r"about|contact|bio|skills|experience|education", re.IGNORECASE)


def _first_descendant_text(element: Element, selector: str) -> str:
    matches = element.select(selector)
    return matches[0].text().strip() if matches else ""


def _structured_projects(doc: Document) -> List[ProjectSummary]:
    projects: List[ProjectSummary] = []
    for selector in PROJECT_SELECTORS:
        for container in doc.select(selector):
            title = _first_descendant_text(container, TITLE_SELECTOR)
            description = _first_descendant_text(container, DESCRIPTION_SELECTOR)
            if title or description:
                projects.append(
                    ProjectSummary(
                        title=title or UNTITLED_PROJECT,
                        description=description or NO_DESCRIPTION,
                    )
                )
    return projects


def _heading_projects(doc: Document) -> List[ProjectSummary]:
    projects: List[ProjectSummary] = []
    for heading in doc.select(FALLBACK_HEADINGS):
        title = heading.text().strip()
        if not title or _SECTION_HEADING.search(title):
            continue
        paragraph = heading.find_next("p")
        description = paragraph.text().strip() if paragraph is not None else ""
        if len(description) > MIN_FALLBACK_DESCRIPTION:
            projects.append(ProjectSummary(title=title, description=description))
    return projects


def extract_projects(doc: Document) -> List[ProjectSummary]:
    """Return up to ``MAX_PROJECTS`` project summaries in discovery order.

    Dedicated project containers are preferred; headings paired with the
    paragraph that follows them are only used when no container matched.
    """
    projects = _structured_projects(doc)
    if not projects:
        projects = _heading_projects(doc)
    return projects[:MAX_PROJECTS]

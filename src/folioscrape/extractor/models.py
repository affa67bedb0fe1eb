"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MAX_PROJECTS = 10


@dataclass(slots=True, frozen=True)
class ResumeLink:
    """A link that looks like a resume or CV download."""

    url: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "text": self.text}


@dataclass(slots=True, frozen=True)
class ProjectSummary:
    """Title/description pair for one portfolio project."""

    title: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description}


@dataclass(slots=True, frozen=True)
class ExtractionRecord:
    """Structured summary of a single portfolio page."""

    candidate_name: str
    candidate_bio: str
    scraped_at: str
    source_url: str
    image_urls: list[str] = field(default_factory=list)
    resume_links: list[ResumeLink] = field(default_factory=list)
    project_summaries: list[ProjectSummary] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the record."""
        if not self.candidate_name or not self.candidate_bio:
            raise ValueError("candidate_name and candidate_bio must be non-empty")
        if len(self.project_summaries) > MAX_PROJECTS:
            raise ValueError(f"At most {MAX_PROJECTS} project summaries are allowed")
        if len(set(self.image_urls)) != len(self.image_urls):
            raise ValueError("image_urls must not contain duplicates")

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the public API's wire keys."""
        return {
            "candidate_name": self.candidate_name,
            "candidate_bio": self.candidate_bio,
            "image_urls": list(self.image_urls),
            "resume_pdf_links": [link.to_dict() for link in self.resume_links],
            "project_summaries": [project.to_dict() for project in self.project_summaries],
            "scraped_at": self.scraped_at,
            "source_url": self.source_url,
        }

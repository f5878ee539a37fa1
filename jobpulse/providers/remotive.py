"""Remotive source.

Docs: https://remotive.com/api/remote-jobs

One request per configured category (``JOBPULSE_REMOTIVE_CATEGORIES``);
several categories are fetched concurrently and merged.
"""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from jobpulse import config
from jobpulse.core.models import Job
from jobpulse.core.normalize import as_tags, make_job_id, optional_text, text_or_default
from jobpulse.providers.base import CategorizedProvider, UpstreamShape, parse_records, parse_shape


class RemotiveResponse(UpstreamShape):
    jobs: List[Any]


class RemotivePosting(UpstreamShape):
    id: Any = None
    title: Optional[str] = None
    company_name: Optional[str] = None
    candidate_required_location: Optional[str] = None
    job_type: Optional[str] = None
    salary: Optional[str] = None
    url: Optional[str] = None
    publication_date: Optional[str] = None
    tags: Optional[List[Any]] = None


class RemotiveProvider(CategorizedProvider):
    name = "remotive"
    base_url = "https://remotive.com/api/remote-jobs"
    home_url = "https://remotive.com"
    limit = 100

    def __init__(self, categories: Optional[Sequence[str]] = None, **kwargs) -> None:
        super().__init__(categories or config.remotive_categories(), **kwargs)

    def fetch_category(self, category: str) -> List[Job]:
        data = self.get_json({"category": category, "limit": self.limit})
        rows = parse_shape(RemotiveResponse, data).jobs
        return [self.to_job(p, category) for p in parse_records(RemotivePosting, rows, self.name)]

    def to_job(self, p: RemotivePosting, category: str) -> Job:
        title = text_or_default(p.title, "Unknown")
        company = text_or_default(p.company_name, "Unknown")
        native_id = optional_text(p.id)
        url = optional_text(p.url) or (f"{self.home_url}/remote-jobs/{native_id}" if native_id else self.home_url)
        return Job(
            id=make_job_id(self.name, native_id, title, company, url),
            title=title,
            company=company,
            location=text_or_default(p.candidate_required_location, "Remote"),
            type=optional_text(p.job_type),
            salary=optional_text(p.salary),
            url=url,
            source=self.display_name,
            posted=optional_text(p.publication_date),
            tags=as_tags(p.tags),
            category=category,
        )

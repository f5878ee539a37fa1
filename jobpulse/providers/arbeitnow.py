"""Arbeitnow source.

Docs: https://www.arbeitnow.com/api/job-board-api

Postings are keyed by ``slug``; ``created_at`` arrives as epoch seconds and
is converted to an ISO timestamp.
"""
from __future__ import annotations

from typing import Any, List, Optional

from jobpulse.core.models import Job
from jobpulse.core.normalize import (
    as_tags,
    make_job_id,
    optional_text,
    posted_to_iso,
    text_or_default,
)
from jobpulse.providers.base import SourceProvider, UpstreamShape, parse_records, parse_shape


class ArbeitnowResponse(UpstreamShape):
    data: List[Any]


class ArbeitnowPosting(UpstreamShape):
    slug: Any = None
    title: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None
    remote: Optional[bool] = None
    url: Optional[str] = None
    created_at: Any = None
    tags: Optional[List[Any]] = None


class ArbeitnowProvider(SourceProvider):
    name = "arbeitnow"
    base_url = "https://www.arbeitnow.com/api/job-board-api"
    home_url = "https://www.arbeitnow.com"
    slice_start = 0
    slice_stop = 100

    def fetch_jobs(self) -> List[Job]:
        rows = parse_shape(ArbeitnowResponse, self.get_json()).data[self.slice_start:self.slice_stop]
        return [self.to_job(p) for p in parse_records(ArbeitnowPosting, rows, self.name)]

    def to_job(self, p: ArbeitnowPosting) -> Job:
        title = text_or_default(p.title, "Unknown")
        company = text_or_default(p.company_name, "Unknown")
        slug = optional_text(p.slug)
        url = optional_text(p.url) or (f"{self.home_url}/jobs/{slug}" if slug else self.home_url)
        return Job(
            id=make_job_id(self.name, slug, title, company, url),
            title=title,
            company=company,
            location=text_or_default(p.location, "Remote"),
            type="Remote" if p.remote else "On-site",
            url=url,
            source=self.display_name,
            posted=posted_to_iso(p.created_at),
            tags=as_tags(p.tags),
        )

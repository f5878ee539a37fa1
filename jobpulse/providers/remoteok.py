"""RemoteOK source.

Docs: https://remoteok.com/api

The API returns a bare JSON array whose first element is a legal notice, not a
posting, so the records start at index 1.
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import RootModel

from jobpulse.core.models import Job
from jobpulse.core.normalize import (
    as_tags,
    format_salary,
    make_job_id,
    optional_text,
    text_or_default,
)
from jobpulse.providers.base import SourceProvider, UpstreamShape, parse_records, parse_shape


class RemoteOKResponse(RootModel[List[Any]]):
    pass


class RemoteOKPosting(UpstreamShape):
    id: Any = None
    position: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    url: Optional[str] = None
    date: Optional[str] = None
    tags: Optional[List[Any]] = None


class RemoteOKProvider(SourceProvider):
    name = "remoteok"
    base_url = "https://remoteok.com/api"
    home_url = "https://remoteok.com"
    tag = "data"
    slice_start = 1
    slice_stop = 100

    def fetch_jobs(self) -> List[Job]:
        data = self.get_json({"tag": self.tag} if self.tag else None)
        rows = parse_shape(RemoteOKResponse, data).root[self.slice_start:self.slice_stop]
        return [self.to_job(p) for p in parse_records(RemoteOKPosting, rows, self.name)]

    def to_job(self, p: RemoteOKPosting) -> Job:
        title = text_or_default(p.position, "Unknown")
        company = text_or_default(p.company, "Unknown")
        native_id = optional_text(p.id)
        if optional_text(p.url):
            url = optional_text(p.url)
        elif native_id:
            url = f"{self.home_url}/l/{native_id}"
        else:
            url = self.home_url
        return Job(
            id=make_job_id(self.name, native_id, title, company, url),
            title=title,
            company=company,
            location=text_or_default(p.location, "Remote"),
            salary=format_salary(p.salary_min, p.salary_max),
            url=url,
            source=self.display_name,
            posted=optional_text(p.date),
            tags=as_tags(p.tags),
            category=self.tag or None,
        )

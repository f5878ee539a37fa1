"""Jobicy source.

Endpoint: https://jobicy.com/api/v2/remote-jobs

Jobicy has no tag list per posting; the industry field becomes the tags.
``jobType`` and ``jobIndustry`` come back as either a string or a list.
"""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from jobpulse import config
from jobpulse.core.models import Job
from jobpulse.core.normalize import (
    as_tags,
    format_salary,
    join_values,
    make_job_id,
    optional_text,
    text_or_default,
)
from jobpulse.providers.base import CategorizedProvider, UpstreamShape, parse_records, parse_shape


class JobicyResponse(UpstreamShape):
    jobs: List[Any]


class JobicyPosting(UpstreamShape):
    id: Any = None
    jobTitle: Optional[str] = None
    companyName: Optional[str] = None
    jobGeo: Optional[str] = None
    jobType: Any = None
    annualSalaryMin: Optional[float] = None
    annualSalaryMax: Optional[float] = None
    url: Optional[str] = None
    pubDate: Optional[str] = None
    jobIndustry: Any = None


class JobicyProvider(CategorizedProvider):
    name = "jobicy"
    base_url = "https://jobicy.com/api/v2/remote-jobs"
    home_url = "https://jobicy.com"
    count = 100

    def __init__(self, industries: Optional[Sequence[str]] = None, **kwargs) -> None:
        super().__init__(industries or config.jobicy_industries(), **kwargs)

    def fetch_category(self, category: str) -> List[Job]:
        data = self.get_json({"count": self.count, "industry": category})
        rows = parse_shape(JobicyResponse, data).jobs
        return [self.to_job(p, category) for p in parse_records(JobicyPosting, rows, self.name)]

    def to_job(self, p: JobicyPosting, category: str) -> Job:
        title = text_or_default(p.jobTitle, "Unknown")
        company = text_or_default(p.companyName, "Unknown")
        native_id = optional_text(p.id)
        url = optional_text(p.url) or (f"{self.home_url}/jobs/{native_id}" if native_id else self.home_url)
        return Job(
            id=make_job_id(self.name, native_id, title, company, url),
            title=title,
            company=company,
            location=text_or_default(p.jobGeo, "Remote"),
            type=join_values(p.jobType),
            salary=format_salary(p.annualSalaryMin, p.annualSalaryMax),
            url=url,
            source=self.display_name,
            posted=optional_text(p.pubDate),
            tags=as_tags(p.jobIndustry),
            category=category,
        )

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from jobpulse.core.models import Job, SourceCounts, empty_counts


class JobsResponse(BaseModel):
    jobs: List[Job]
    total: int
    sources: Dict[str, int]
    error: Optional[str] = None


def build_envelope(
    jobs: Sequence[Job],
    counts: SourceCounts,
    total: Optional[int] = None,
    error: Optional[str] = None,
) -> JobsResponse:
    sources = empty_counts()
    sources.update(counts)
    return JobsResponse(
        jobs=list(jobs),
        total=len(jobs) if total is None else total,
        sources=sources,
        error=error,
    )


def error_envelope(message: str) -> JobsResponse:
    return build_envelope([], empty_counts(), total=0, error=message)

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

SOURCE_NAMES: Dict[str, str] = {
    "remoteok": "RemoteOK",
    "remotive": "Remotive",
    "arbeitnow": "Arbeitnow",
    "jobicy": "Jobicy",
}

SourceCounts = Dict[str, int]


class Job(BaseModel):
    """Canonical job record every source adapter maps into.

    ``source`` holds the display name (``"RemoteOK"``), not the internal key.
    ``posted`` is kept as the upstream string and only parsed for ordering.
    """

    id: str
    title: str = "Unknown"
    company: str = "Unknown"
    location: str = "Remote"
    type: Optional[str] = None
    salary: Optional[str] = None
    url: str
    source: str
    posted: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    category: Optional[str] = None


def empty_counts() -> SourceCounts:
    return {key: 0 for key in SOURCE_NAMES}

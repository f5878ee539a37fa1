from __future__ import annotations

import functools
import random
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional, Sequence

from jobpulse.core.date_parse import parse_posted
from jobpulse.core.models import Job
from jobpulse.filters.rules import Classifier, DEFAULT_CLASSIFIER

OrderMode = Literal["recency", "random"]


@dataclass(frozen=True)
class FilterParams:
    query: str = ""
    location: str = ""
    source: str = ""
    data_only: bool = False
    entry_only: bool = False
    us_only: bool = False
    order: OrderMode = "recency"
    seed: Optional[int] = None


def _matches_query(job: Job, query: str) -> bool:
    return (
        query in job.title.lower()
        or query in job.company.lower()
        or any(query in tag.lower() for tag in job.tags)
    )


def _compare_recency(a: Job, b: Job) -> int:
    da = parse_posted(a.posted)
    db = parse_posted(b.posted)
    if da is None or db is None:
        return 0
    if da > db:
        return -1
    if da < db:
        return 1
    return 0


def sort_by_recency(jobs: Sequence[Job]) -> List[Job]:
    """Most recent first; a pair with either side undated keeps its order."""
    return sorted(jobs, key=functools.cmp_to_key(_compare_recency))


def order_jobs(jobs: Sequence[Job], order: str = "recency", seed: Optional[int] = None) -> List[Job]:
    if order == "random":
        shuffled = list(jobs)
        random.Random(seed).shuffle(shuffled)
        return shuffled
    if order != "recency":
        raise ValueError(f"unknown order mode: {order!r}")
    return sort_by_recency(jobs)


def apply(jobs: Sequence[Job], params: FilterParams, classifier: Classifier = DEFAULT_CLASSIFIER) -> List[Job]:
    """Narrow ``jobs`` with every active filter, then order the survivors.

    Stages run as an AND chain, exact/substring checks before the keyword
    classifiers. The input sequence is not modified.
    """
    stages: List[Callable[[Job], bool]] = []
    if params.source:
        stages.append(lambda j: j.source == params.source)
    location = params.location.strip().lower()
    if location:
        stages.append(lambda j: location in j.location.lower())
    query = params.query.strip().lower()
    if query:
        stages.append(lambda j: _matches_query(j, query))
    if params.us_only:
        stages.append(classifier.is_us_or_remote)
    if params.data_only:
        stages.append(classifier.is_data_role)
    if params.entry_only:
        stages.append(classifier.is_entry_level)

    kept = list(jobs)
    for stage in stages:
        kept = [j for j in kept if stage(j)]
    return order_jobs(kept, params.order, params.seed)

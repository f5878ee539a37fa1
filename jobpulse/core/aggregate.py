from __future__ import annotations

import concurrent.futures
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from jobpulse import config
from jobpulse.core.envelope import JobsResponse, build_envelope, error_envelope
from jobpulse.core.models import Job, SourceCounts, empty_counts
from jobpulse.filters.pipeline import FilterParams, apply
from jobpulse.filters.rules import Classifier, DEFAULT_CLASSIFIER
from jobpulse.providers import default_providers
from jobpulse.providers.base import SourceProvider

LOGGER = logging.getLogger(__name__)

ClassifierSource = Union[Classifier, Callable[[], Classifier]]


class AggregationFailure(Exception):
    """Unexpected error while merging, filtering or packaging an aggregation run."""


class Aggregator:
    """Fan out to every provider at once and merge whatever comes back.

    A provider that fails contributes nothing and a zero count; the run
    itself never raises.
    """

    def __init__(self, providers: Optional[Sequence[SourceProvider]] = None, max_workers: Optional[int] = None) -> None:
        if providers is None:
            providers = default_providers()
        self.providers = list(providers)
        self.max_workers = max_workers or config.max_workers()

    def aggregate(self) -> Tuple[List[Job], SourceCounts]:
        counts = empty_counts()
        if not self.providers:
            return [], counts

        results: Dict[str, List[Job]] = {}
        workers = min(self.max_workers, len(self.providers))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
            futs = {ex.submit(p.fetch): p for p in self.providers}
            for fut in concurrent.futures.as_completed(futs):
                provider = futs[fut]
                try:
                    results[provider.name] = list(fut.result())
                except Exception:
                    LOGGER.exception("aggregate source=%s raised", provider.name)
                    results[provider.name] = []

        jobs: List[Job] = []
        for provider in self.providers:
            got = results.get(provider.name, [])
            counts[provider.name] = len(got)
            jobs.extend(got)
        LOGGER.info(
            "aggregate total=%s %s",
            len(jobs),
            " ".join(f"{k}={v}" for k, v in counts.items()),
        )
        return jobs, counts


def search(
    aggregator: Aggregator,
    params: Optional[FilterParams],
    classifier: ClassifierSource = DEFAULT_CLASSIFIER,
) -> JobsResponse:
    """One aggregation run followed by filtering and packaging.

    ``params=None`` returns the full set ordered by recency. ``classifier`` may
    be a zero-argument factory; it is called here so that loading errors are
    reported like any other failure. Raises :class:`AggregationFailure` when
    anything past the fan-out breaks.
    """
    try:
        if not isinstance(classifier, Classifier):
            classifier = classifier()
        jobs, counts = aggregator.aggregate()
        kept = apply(jobs, params or FilterParams(), classifier)
        return build_envelope(kept, counts)
    except Exception as exc:
        raise AggregationFailure(str(exc) or exc.__class__.__name__) from exc


def run_search(
    aggregator: Aggregator,
    params: Optional[FilterParams],
    classifier: ClassifierSource = DEFAULT_CLASSIFIER,
) -> JobsResponse:
    """Like :func:`search` but degrades to an error envelope instead of raising."""
    try:
        return search(aggregator, params, classifier)
    except AggregationFailure as exc:
        LOGGER.exception("search failed")
        return error_envelope(f"Failed to fetch jobs: {exc}")

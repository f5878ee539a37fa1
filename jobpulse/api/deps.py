from __future__ import annotations

from functools import lru_cache
from typing import Callable

from jobpulse import config
from jobpulse.core.aggregate import Aggregator
from jobpulse.filters.rules import Classifier, classifier_from_rules_file


@lru_cache(maxsize=1)
def get_aggregator() -> Aggregator:
    """FastAPI dependency returning the process-wide :class:`Aggregator`.

    Tests swap it out through ``app.dependency_overrides``.
    """
    return Aggregator()


@lru_cache(maxsize=1)
def load_classifier() -> Classifier:
    return classifier_from_rules_file(config.rules_file())


def get_classifier() -> Callable[[], Classifier]:
    # Resolved inside the search so a broken rules file becomes an error envelope.
    return load_classifier


__all__ = ["get_aggregator", "get_classifier", "load_classifier"]

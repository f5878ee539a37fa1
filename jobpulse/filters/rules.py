from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Iterable

import yaml

LOGGER = logging.getLogger(__name__)

# Debug flag for classifier traces
JOBPULSE_DEBUG_RULES = os.getenv("JOBPULSE_DEBUG_RULES", "0") == "1"


def _dbg(reason: str, *args: Any) -> None:
    if JOBPULSE_DEBUG_RULES:
        LOGGER.debug("[rules] " + reason, *args)


# Data/analytics vocabulary, matched against title + tags
DATA_KEYWORDS = (
    "data", "analyst", "analytics", "scientist", "science", "engineer",
    "sql", "python", "tableau", "power bi", "excel", "statistics",
    "machine learning", "ml", "ai", "database", "etl", "bi ",
    "business intelligence", "visualization", "reporting", "insights",
)

# Explicit entry-level markers
ENTRY_KEYWORDS = (
    "junior", "entry", "associate", "graduate", "intern", "trainee",
    "early career", "new grad", "fresher", "level 1", "l1", "i ", "i,",
    "0-2 years", "1-2 years", "0-1 year", "no experience",
)

# Seniority markers, matched against title + type
SENIOR_KEYWORDS = (
    "senior", "sr.", "sr ", "lead", "principal", "staff", "manager",
    "director", "head of", "vp", "chief", "5+ years", "7+ years", "10+ years",
)

# Without an entry marker these keep a posting out of the entry-level set
MID_KEYWORDS = ("mid", "intermediate")

# Locations counted as US-reachable; a bare "remote" is handled separately
GEO_KEYWORDS = (
    "usa", "u.s.", "united states", "north america", "americas",
    "anywhere", "worldwide", "global",
    "new york", "san francisco", "los angeles", "seattle", "austin",
    "boston", "chicago", "denver", "atlanta", "miami", "dallas", "houston",
    "washington", "portland", "philadelphia",
    "california", "texas", "florida", "colorado", "illinois", "massachusetts",
    ", ny", ", tx", ", wa", ", ma", ", il", ", fl", ", ga",
)


@dataclass(frozen=True)
class Vocabulary:
    """Immutable keyword lists used by :class:`Classifier`."""

    data: tuple[str, ...] = DATA_KEYWORDS
    entry: tuple[str, ...] = ENTRY_KEYWORDS
    senior: tuple[str, ...] = SENIOR_KEYWORDS
    mid: tuple[str, ...] = MID_KEYWORDS
    geo: tuple[str, ...] = GEO_KEYWORDS


def _field(job: Any, name: str) -> Any:
    if isinstance(job, dict):
        return job.get(name)
    return getattr(job, name, None)


def _lower(value: Any) -> str:
    return (value or "").lower() if isinstance(value, str) else ""


def _any_in(text: str, keywords: Iterable[str]) -> str | None:
    for kw in keywords:
        if kw in text:
            return kw
    return None


class Classifier:
    """Substring classifiers over a job's title, tags, type and location.

    Accepts :class:`~jobpulse.core.models.Job` instances or plain dicts with
    the same keys. Matching is plain ``in`` on lower-cased text: no word
    boundaries, so "ai" also hits "maintenance".
    """

    def __init__(self, vocabulary: Vocabulary | None = None) -> None:
        self.vocabulary = vocabulary or Vocabulary()

    def is_data_role(self, job: Any) -> bool:
        tags = _field(job, "tags") or []
        combined = f"{_lower(_field(job, 'title'))} {' '.join(_lower(t) for t in tags)}"
        hit = _any_in(combined, self.vocabulary.data)
        _dbg("data-role title=%r keyword=%r", _field(job, "title"), hit)
        return hit is not None

    def is_senior_role(self, job: Any) -> bool:
        combined = f"{_lower(_field(job, 'title'))} {_lower(_field(job, 'type'))}"
        hit = _any_in(combined, self.vocabulary.senior)
        _dbg("senior title=%r keyword=%r", _field(job, "title"), hit)
        return hit is not None

    def is_entry_level(self, job: Any) -> bool:
        if self.is_senior_role(job):
            return False
        combined = f"{_lower(_field(job, 'title'))} {_lower(_field(job, 'type'))}"
        if _any_in(combined, self.vocabulary.entry):
            return True
        # No level signal at all counts as entry-level
        return _any_in(combined, self.vocabulary.mid) is None

    def is_us_or_remote(self, job: Any) -> bool:
        loc = _lower(_field(job, "location")).strip()
        if loc == "remote":
            return True
        return _any_in(loc, self.vocabulary.geo) is not None


DEFAULT_CLASSIFIER = Classifier()


def is_data_role(job: Any) -> bool:
    return DEFAULT_CLASSIFIER.is_data_role(job)


def is_senior_role(job: Any) -> bool:
    return DEFAULT_CLASSIFIER.is_senior_role(job)


def is_entry_level(job: Any) -> bool:
    return DEFAULT_CLASSIFIER.is_entry_level(job)


def is_us_or_remote(job: Any) -> bool:
    return DEFAULT_CLASSIFIER.is_us_or_remote(job)


# --- YAML rules loader ---
def load_rules_file(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data


def vocabulary_from_rules(rules: dict[str, Any], base: Vocabulary | None = None) -> Vocabulary:
    """Override ``base`` with the keyword lists present in ``rules``.

    Recognized keys match the :class:`Vocabulary` fields (``data``, ``entry``,
    ``senior``, ``mid``, ``geo``); keywords are lower-cased.
    """
    if not isinstance(rules, dict):
        raise ValueError("rules file must contain a mapping of keyword lists")
    base = base or Vocabulary()
    overrides: dict[str, tuple[str, ...]] = {}
    for f in fields(Vocabulary):
        values = rules.get(f.name)
        if values is None:
            continue
        if not isinstance(values, list):
            raise ValueError(f"rules key '{f.name}' must be a list of strings")
        overrides[f.name] = tuple(str(v).lower() for v in values)
    return replace(base, **overrides)


def classifier_from_rules_file(path: str | None) -> Classifier:
    if not path:
        return Classifier()
    vocab = vocabulary_from_rules(load_rules_file(path))
    LOGGER.info("rules-file path=%s loaded", path)
    return Classifier(vocab)

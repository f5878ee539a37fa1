from __future__ import annotations

import concurrent.futures
import logging
import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from jobpulse import config
from jobpulse.core.models import Job, SOURCE_NAMES
from jobpulse.core.normalize import first_unique

LOGGER = logging.getLogger(__name__)

ShapeT = TypeVar("ShapeT", bound=BaseModel)


class SourceError(Exception):
    """Base class for failures inside a single source adapter."""


class UpstreamUnavailable(SourceError):
    """Network failure or non-success HTTP status from an upstream board."""


class UpstreamShapeMismatch(SourceError):
    """Upstream body is not JSON or lacks the expected top-level shape."""


class UpstreamShape(BaseModel):
    """Base for the expected-shape models of upstream payloads."""

    model_config = ConfigDict(extra="ignore")


# --- optional in-process response cache (JOBPULSE_CACHE=true) ---
_CACHE: Dict[str, Tuple[float, Any]] = {}
_CACHE_LOCK = threading.Lock()


def _cache_key(url: str, params: Optional[dict]) -> str:
    if not params:
        return url
    query = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return f"{url}?{query}"


def clear_cache() -> None:
    with _CACHE_LOCK:
        _CACHE.clear()


def get_json(url: str, params: Optional[dict] = None, *, ttl: int, timeout: Optional[float] = None) -> Any:
    """GET ``url`` and return the decoded JSON body.

    ``ttl`` is sent as a ``Cache-Control: max-age`` revalidation hint. When
    the local cache is enabled a body younger than ``ttl`` seconds is reused.
    """
    use_cache = config.cache_enabled() and ttl > 0
    key = _cache_key(url, params)
    if use_cache:
        with _CACHE_LOCK:
            hit = _CACHE.get(key)
        if hit and hit[0] > time.monotonic():
            LOGGER.debug("cache-hit url=%s", key)
            return hit[1]

    headers = {
        "User-Agent": config.USER_AGENT,
        "Accept": "application/json",
        "Cache-Control": f"max-age={ttl}",
    }
    try:
        resp = requests.get(url, params=params, headers=headers, timeout=timeout or config.http_timeout())
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise UpstreamUnavailable(f"{key}: {exc}") from exc
    try:
        data = resp.json()
    except ValueError as exc:
        raise UpstreamShapeMismatch(f"{key}: body is not JSON") from exc

    if use_cache:
        with _CACHE_LOCK:
            _CACHE[key] = (time.monotonic() + ttl, data)
    return data


def parse_shape(model: Type[ShapeT], data: Any) -> ShapeT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise UpstreamShapeMismatch(f"expected {model.__name__}: {exc.error_count()} error(s)") from exc


def parse_records(model: Type[ShapeT], rows: Iterable[Any], source: str) -> List[ShapeT]:
    """Validate each raw record, skipping the ones that do not fit ``model``."""
    out: List[ShapeT] = []
    skipped = 0
    for row in rows:
        try:
            out.append(model.model_validate(row))
        except ValidationError:
            skipped += 1
    if skipped:
        LOGGER.debug("source-records source=%s skipped=%s", source, skipped)
    return out


class SourceProvider:
    """One upstream job board.

    Subclasses implement :meth:`fetch_jobs` and may raise :class:`SourceError`;
    :meth:`fetch` is the public entry point and never raises.
    """

    name: str = ""
    base_url: str = ""
    home_url: str = ""

    def __init__(self, ttl: Optional[int] = None, timeout: Optional[float] = None) -> None:
        self.ttl = config.cache_ttl() if ttl is None else ttl
        self.timeout = timeout

    @property
    def display_name(self) -> str:
        return SOURCE_NAMES[self.name]

    def fetch(self) -> List[Job]:
        try:
            jobs = self.fetch_jobs()
        except (SourceError, requests.RequestException) as exc:
            LOGGER.warning("source-fetch source=%s error=%s", self.name, exc)
            return []
        except Exception:
            LOGGER.exception("source-fetch source=%s unexpected error", self.name)
            return []
        LOGGER.info("source-fetch source=%s count=%s", self.name, len(jobs))
        return jobs

    def fetch_jobs(self) -> List[Job]:
        raise NotImplementedError

    def get_json(self, params: Optional[dict] = None) -> Any:
        return get_json(self.base_url, params, ttl=self.ttl, timeout=self.timeout)


class CategorizedProvider(SourceProvider):
    """A provider that queries one endpoint per upstream category.

    With more than one category the sub-requests run concurrently and are
    merged in category order; a failing category is logged and skipped.
    """

    def __init__(self, categories: Sequence[str], ttl: Optional[int] = None, timeout: Optional[float] = None) -> None:
        super().__init__(ttl=ttl, timeout=timeout)
        self.categories = tuple(categories)

    def fetch_category(self, category: str) -> List[Job]:
        raise NotImplementedError

    def fetch_jobs(self) -> List[Job]:
        if len(self.categories) == 1:
            return self.fetch_category(self.categories[0])
        return first_unique(self._fan_out(self.fetch_category), key=lambda j: j.id)

    def _fan_out(self, fn: Callable[[str], List[Job]]) -> List[Job]:
        results: Dict[str, List[Job]] = {}
        failures: List[Exception] = []
        with concurrent.futures.ThreadPoolExecutor(max_workers=len(self.categories) or 1) as ex:
            futs = {ex.submit(fn, cat): cat for cat in self.categories}
            for fut in concurrent.futures.as_completed(futs):
                cat = futs[fut]
                try:
                    results[cat] = fut.result()
                except Exception as exc:
                    LOGGER.warning("source-fetch source=%s category=%s error=%r", self.name, cat, exc)
                    failures.append(exc)
        if failures and not results:
            raise failures[0]
        merged: List[Job] = []
        for cat in self.categories:
            merged.extend(results.get(cat, []))
        return merged

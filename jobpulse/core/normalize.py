from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Any, Iterable


def normalize_text(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).split()).strip()


def text_or_default(value: Any, default: str) -> str:
    text = normalize_text(value)
    return text or default


def optional_text(value: Any) -> str | None:
    return normalize_text(value) or None


def join_values(value: Any, sep: str = ", ") -> str | None:
    """Collapse a string-or-list upstream field to one string."""
    if isinstance(value, (list, tuple)):
        parts = [normalize_text(v) for v in value]
        return sep.join(p for p in parts if p) or None
    return optional_text(value)


def as_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        value = [value]
    tags: list[str] = []
    for v in value:
        t = normalize_text(v)
        if t:
            tags.append(t)
    return tags


def format_salary(low: Any, high: Any) -> str | None:
    # Both ends must be present and non-zero; zero means "not disclosed" upstream.
    if not low or not high:
        return None
    return f"${_plain_number(low)}-{_plain_number(high)}"


def _plain_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def fallback_suffix(title: str, company: str, url: str) -> str:
    # Deterministic key based on title+company+url (case-insensitive)
    key = f"{title.lower()}|{company.lower()}|{url.lower()}"
    return hashlib.sha1(key.encode("utf-8")).hexdigest()[:12]


def make_job_id(source_key: str, native_id: Any, title: str, company: str, url: str) -> str:
    native = normalize_text(native_id)
    if not native:
        native = fallback_suffix(title, company, url)
    return f"{source_key}-{native}"


def posted_to_iso(value: Any) -> str | None:
    """Return an ISO-8601 string for ``value``.

    Strings pass through untouched; epoch numbers (seconds or milliseconds)
    are converted to a UTC timestamp.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        ts = float(value)
        if ts > 1e12:
            ts /= 1000.0
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            return None
    return optional_text(value)


def first_unique(items: Iterable[Any], key) -> list[Any]:
    """Deduplicate while preserving first-seen order."""
    seen: set = set()
    out: list[Any] = []
    for it in items:
        k = key(it)
        if k in seen:
            continue
        seen.add(k)
        out.append(it)
    return out

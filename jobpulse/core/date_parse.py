from __future__ import annotations

from datetime import datetime, timezone
import re

DATE_ONLY = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
EPOCH = re.compile(r"^\d{9,13}$")


def parse_posted(text: str | None) -> datetime | None:
    """Parse an upstream ``posted`` string into an aware UTC datetime.

    Accepts ISO-8601 timestamps (``Z`` suffix, space or ``T`` separator),
    bare dates and stringified epoch seconds/milliseconds. Anything else
    returns None so ordering treats it as undated.
    """
    if not text:
        return None
    raw = str(text).strip()
    if not raw:
        return None

    if EPOCH.match(raw):
        ts = float(raw)
        if ts > 1e12:
            ts /= 1000.0
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    m = DATE_ONLY.match(raw)
    if m:
        year, month, day = map(int, m.groups())
        try:
            return datetime(year, month, day, tzinfo=timezone.utc)
        except ValueError:
            return None

    try:
        dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

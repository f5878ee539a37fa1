from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from jobpulse import __version__, config
from jobpulse.api.deps import get_aggregator, get_classifier
from jobpulse.core.aggregate import Aggregator, run_search
from jobpulse.core.envelope import JobsResponse
from jobpulse.filters.pipeline import FilterParams
from jobpulse.filters.rules import Classifier

# -------------------------
# FastAPI setup
# -------------------------
app = FastAPI(title="JobPulse API", version=__version__)
LOGGER = logging.getLogger(__name__)

# CORS (open; the presentation layer may be served from another origin)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _flag(value: Optional[str], default: bool) -> bool:
    """Query-string toggle: only the literal opposite of the default flips it."""
    if value is None:
        return default
    if default:
        return value != "false"
    return value == "true"


def _order(value: Optional[str]) -> str:
    if value and value.lower() in ("recency", "random"):
        return value.lower()
    return config.default_order()


# -------------------------
# Routes
# -------------------------
@app.get("/", tags=["meta"])
async def root():
    return {"message": "JobPulse API is running"}


@app.get("/healthz", tags=["meta"])
async def healthz():
    return {"status": "ok"}


@app.get("/api/jobs", response_model=JobsResponse, response_model_exclude_none=True, tags=["data"])
def get_jobs(
    q: Optional[str] = Query(None, description="Substring match on title, company or tags"),
    location: Optional[str] = Query(None, description="Substring match on location"),
    source: Optional[str] = Query(None, description="Exact source name, e.g. RemoteOK"),
    entry: Optional[str] = Query(None, description="'false' disables the entry-level filter"),
    data: Optional[str] = Query(None, description="'false' disables the data-role filter"),
    us: Optional[str] = Query(None, description="'true' keeps only US or remote locations"),
    order: Optional[str] = Query(None, description="recency|random"),
    aggregator: Aggregator = Depends(get_aggregator),
    classifier: Callable[[], Classifier] = Depends(get_classifier),
):
    """Fresh aggregation run, filtered on the server.

    Failures never surface as an HTTP error: the body carries ``error`` and an
    empty job list instead.
    """
    params = FilterParams(
        query=q or "",
        location=location or "",
        source=source or "",
        data_only=_flag(data, True),
        entry_only=_flag(entry, True),
        us_only=_flag(us, False),
        order=_order(order),
    )
    LOGGER.debug("jobs-request params=%s", params)
    return run_search(aggregator, params, classifier)


@app.get("/api/jobs/all", response_model=JobsResponse, response_model_exclude_none=True, tags=["data"])
def get_all_jobs(
    aggregator: Aggregator = Depends(get_aggregator),
    classifier: Callable[[], Classifier] = Depends(get_classifier),
):
    """Full aggregated set, newest first, for clients that filter locally."""
    return run_search(aggregator, None, classifier)

from .models import Job, SourceCounts, SOURCE_NAMES, empty_counts
from .envelope import JobsResponse, build_envelope, error_envelope
from .date_parse import parse_posted

__all__ = [
    "Job",
    "SourceCounts",
    "SOURCE_NAMES",
    "empty_counts",
    "JobsResponse",
    "build_envelope",
    "error_envelope",
    "parse_posted",
]

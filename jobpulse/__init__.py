"""JobPulse: aggregate, classify and serve data job postings from public job boards."""

__version__ = "0.1.0"

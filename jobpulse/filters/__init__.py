from .rules import (
    Classifier,
    Vocabulary,
    is_data_role,
    is_senior_role,
    is_entry_level,
    is_us_or_remote,
    load_rules_file,
)
from .pipeline import FilterParams, apply, order_jobs, sort_by_recency

__all__ = [
    "Classifier",
    "Vocabulary",
    "is_data_role",
    "is_senior_role",
    "is_entry_level",
    "is_us_or_remote",
    "load_rules_file",
    "FilterParams",
    "apply",
    "order_jobs",
    "sort_by_recency",
]

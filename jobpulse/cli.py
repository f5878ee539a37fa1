# jobpulse/cli.py
from __future__ import annotations

import argparse
import csv
import json
import logging
import os
from typing import List

from jobpulse import config
from jobpulse.core.aggregate import Aggregator, search, AggregationFailure
from jobpulse.core.models import Job
from jobpulse.filters.pipeline import FilterParams
from jobpulse.filters.rules import classifier_from_rules_file

CSV_COLUMNS = ["id", "title", "company", "location", "type", "salary", "source", "posted", "tags", "category", "url"]


def _write_json(path: str, jobs: List[Job]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([j.model_dump() for j in jobs], f, indent=2, ensure_ascii=False)


def _write_csv(path: str, jobs: List[Job]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for j in jobs:
            row = j.model_dump()
            row["tags"] = "; ".join(j.tags)
            writer.writerow({k: row.get(k) for k in CSV_COLUMNS})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobpulse", description="Aggregate data jobs from public job boards")
    sub = parser.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch", help="Run one aggregation and write the kept jobs")
    fetch.add_argument("--query", "-q", default="", help="Substring match on title, company or tags")
    fetch.add_argument("--location", default="", help="Substring match on location")
    fetch.add_argument("--source", default="", help="Exact source name (RemoteOK, Remotive, Arbeitnow, Jobicy)")
    fetch.add_argument("--all-levels", action="store_true", help="Keep senior roles (disables the entry-level filter)")
    fetch.add_argument("--all-roles", action="store_true", help="Keep non-data roles (disables the data-role filter)")
    fetch.add_argument("--us-only", action="store_true", help="Keep only US or remote locations")
    fetch.add_argument("--order", choices=["recency", "random"], default=None,
                       help="Result ordering (default from JOBPULSE_ORDER, else recency)")
    fetch.add_argument("--seed", type=int, default=None, help="Seed for --order random")
    fetch.add_argument("--json-out", default="output/jobs.json", help="Path to write the kept jobs as JSON")
    fetch.add_argument("--csv-out", default=None, help="Optional path to also write a CSV export")
    fetch.add_argument("--no-summary", action="store_true", help="Suppress per-source counts")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def _fetch(args: argparse.Namespace) -> int:
    params = FilterParams(
        query=args.query,
        location=args.location,
        source=args.source,
        data_only=not args.all_roles,
        entry_only=not args.all_levels,
        us_only=args.us_only,
        order=args.order or config.default_order(),
        seed=args.seed,
    )
    try:
        envelope = search(Aggregator(), params, lambda: classifier_from_rules_file(config.rules_file()))
    except AggregationFailure as exc:
        print(f"Aggregation failed: {exc}")
        return 1

    if not args.no_summary:
        parts = [f"{k}={v}" for k, v in envelope.sources.items()]
        print("Sources (raw fetch): " + ", ".join(parts))
        print(f"Summary: fetched={sum(envelope.sources.values())} kept={envelope.total}")

    _write_json(args.json_out, envelope.jobs)
    print(f"Wrote {envelope.total} jobs to: {args.json_out}")
    if args.csv_out:
        _write_csv(args.csv_out, envelope.jobs)
        print(f"CSV written to: {args.csv_out}")
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("jobpulse.api.main:app", host=args.host, port=args.port, log_level=config.log_level().lower())
    return 0


def main(argv: List[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if args.command == "serve":
        return _serve(args)
    return _fetch(args)


if __name__ == "__main__":
    # When executed as `python -m jobpulse.cli ...`
    raise SystemExit(main())

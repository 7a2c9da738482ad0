#!/usr/bin/env python3
"""
life-metrics CLI: compute dashboard stats from a JSON export of records.

    life-metrics health health.json
    life-metrics appliances appliances.json --extra appliance_table.json --json
    life-metrics all export.json --now 2026-06-01T00:00:00Z
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from life_metrics import config
from life_metrics.aggregators import (
    compute_appliances_stats,
    compute_dashboard_stats,
    compute_digital_stats,
    compute_health_stats,
    compute_pets_stats,
)
from life_metrics.config import ThresholdsError, load_thresholds
from life_metrics.domain_models import Domain
from life_metrics.normalize import parse_date
from life_metrics.observability import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 2


class InputError(Exception):
    """Raised when an input file cannot be used."""

    pass


def print_header(text: str):
    """Print a section header."""
    print(f"\n{'═' * 50}")
    print(f"  {text}")
    print(f"{'═' * 50}")


def print_stats(title: str, stats: dict):
    """Print one stats object as aligned key/value rows."""
    print_header(title)
    width = max(len(k) for k in stats)
    for key, value in stats.items():
        if isinstance(value, float):
            value = f"{value:,.2f}"
        print(f"  {key.ljust(width)} │ {value}")


def _read_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text())
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e}") from e
    except ValueError as e:
        raise InputError(f"{path} is not valid JSON: {e}") from e


def _records_for(data: Any, domain: str, path: str) -> list:
    """A bare list, or the domain's list inside an export object."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get(domain), list):
        return data[domain]
    raise InputError(f"{path}: expected a list of records or an object with a '{domain}' list")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="life-metrics",
        description="Dashboard stats from life-data records",
    )
    parser.add_argument(
        "domain",
        choices=[d.value for d in Domain] + ["all"],
        help="Domain to aggregate ('all' expects an export object keyed by domain)",
    )
    parser.add_argument("file", help="JSON file with records")
    parser.add_argument(
        "--extra",
        help="Supplementary appliance records (appliances only)",
    )
    parser.add_argument("--now", help="Reference time (ISO 8601), default: current time")
    parser.add_argument("--thresholds", help="YAML file overriding aggregation windows")
    parser.add_argument("--json", "-j", action="store_true", help="Output JSON")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Log level")
    parser.add_argument("--log-json", action="store_true", help="Force JSON log lines")
    return parser


def run(args: argparse.Namespace) -> dict[str, dict]:
    """Compute the requested stats. Returns {section title: stats dict}."""
    thresholds = load_thresholds(args.thresholds)

    now = None
    if args.now:
        now = parse_date(args.now)
        if now is None:
            raise InputError(f"--now: cannot parse {args.now!r}")

    data = _read_json(args.file)
    kwargs = {"now": now, "thresholds": thresholds}

    if args.domain == "all":
        if not isinstance(data, dict):
            raise InputError(f"{args.file}: 'all' expects an object keyed by domain")
        stats = compute_dashboard_stats(data, **kwargs)
        return {name.title(): section for name, section in stats.to_dict().items()}

    records = _records_for(data, args.domain, args.file)
    if args.domain == Domain.HEALTH:
        result = compute_health_stats(records)
    elif args.domain == Domain.PETS:
        result = compute_pets_stats(records, **kwargs)
    elif args.domain == Domain.DIGITAL:
        result = compute_digital_stats(records, **kwargs)
    else:
        extra = []
        if args.extra:
            extra = _records_for(_read_json(args.extra), "appliance_table", args.extra)
        result = compute_appliances_stats(records, extra, **kwargs)

    return {args.domain.title(): result.to_dict()}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, json_format=True if (args.log_json or config.LOG_JSON) else None)

    try:
        sections = run(args)
    except (InputError, ThresholdsError) as e:
        logger.error("Cannot compute stats: %s", e)
        return EXIT_BAD_INPUT

    if args.json:
        payload = sections if len(sections) > 1 else next(iter(sections.values()))
        print(json.dumps(payload, indent=2, default=str))
    else:
        for title, stats in sections.items():
            print_stats(title, stats)

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())

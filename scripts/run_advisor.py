"""Run the schedule advisor over a CSV/JSON snapshot."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from schedule_advisor.adapters import csv_adapter, json_adapter
from schedule_advisor.advisor import analyze_snapshot, report_to_dict


def _load_items(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def _load_overrides(path: Path | None) -> dict:
    if path is None:
        return {}
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Config file must contain a JSON object")
    return payload


def main() -> int:
    parser = argparse.ArgumentParser(description="Detect conflicts and suggest schedule rebalancing")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON snapshot file")
    parser.add_argument("--config", help="JSON file with per-analysis overrides")
    parser.add_argument("--out", default="outputs/advisory_report.json", help="Where to save the report")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        items = _load_items(Path(args.data))
        report = analyze_snapshot(items, _load_overrides(Path(args.config) if args.config else None))
    except ValueError as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return 2

    payload = report_to_dict(report)
    payload["n_items"] = len(items)
    print(json.dumps(payload, indent=2))

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"Saved advisory report to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

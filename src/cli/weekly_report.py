#!/usr/bin/env python3
"""
Weekly performance report from a snapshot file.

Usage:
    python -m src.cli.weekly_report --snapshot data/snapshot.json
    python -m src.cli.weekly_report --snapshot data/snapshot.json --date 2025-06-12 --day 3
    python -m src.cli.weekly_report --snapshot data/snapshot.json --import-csv stores.csv --save
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from src.config.settings import get_settings
from src.models.dashboard import DashboardData
from src.models.errors import SalesMonitorError
from src.repositories.memory_repository import InMemorySnapshotRepository
from src.services.dashboard_service import DashboardService
from src.services.factory import load_snapshot_file
from src.services.store_import_service import StoreImportService
from src.utils.formatters import format_change, format_progress

logger = logging.getLogger(__name__)

METRIC_LABELS = {
    "visited_stores": "Stores visited",
    "dd_achieved": "DD targets achieved",
    "fokus_achieved": "Fokus targets achieved",
}


def render_report(data: DashboardData) -> str:
    """Plain-text rendering of the dashboard."""
    lines = [f"📊 Sales monitor report for {data.today:%A %Y-%m-%d} (snapshot v{data.snapshot_version})"]

    if data.deadline.should_warn:
        lines.append(f"⚠️  Distribution deadline in {data.deadline.days_remaining} day(s) "
                     f"({data.deadline.deadline}). Step up the focus!")

    lines.append("")
    lines.append(f"Week {data.weekly.week_start} .. {data.weekly.week_end} vs previous week")
    deltas = data.weekly.deltas()
    for metric, label in METRIC_LABELS.items():
        value = getattr(data.weekly.this_week, metric)
        lines.append(f"  {label:<24} {value:>4}   {format_change(deltas[metric]):>4}")

    lines.append("")
    lines.append(f"Stores: {format_progress(data.total_stores, data.store_capacity)}")
    lines.append(f"DD targets met: {format_progress(data.targets.dd_targets_met, data.targets.dd_product_count)} products")
    lines.append(f"Fokus targets met: {format_progress(data.targets.fokus_targets_met, data.targets.fokus_product_count)} products")

    lines.append("")
    lines.append("Visit plan: " + "  ".join(
        f"{d.name} {d.date:%d}{'*' if d.is_today else ''} ({d.planned_store_count})" for d in data.week_days
    ))

    day_name = next((d.name for d in data.week_days if d.day_index == data.selected_day), None)
    lines.append("")
    lines.append(f"Store performance: {day_name or 'all stores'}")
    if not data.store_progress:
        lines.append("  (no stores)")
    for progress in data.store_progress:
        lines.append(f"  {progress.store.name:<30} {progress.store.level.value:<7} "
                     f"DD {format_progress(progress.dd_achieved, progress.dd_total):>6}  "
                     f"Fokus {format_progress(progress.fokus_achieved, progress.fokus_total):>6}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Weekly field-sales performance report")
    parser.add_argument("--snapshot", help="Snapshot JSON file (default: SNAPSHOT_PATH)")
    parser.add_argument("--date", type=date.fromisoformat, help="Reference date YYYY-MM-DD (default: today)")
    parser.add_argument("--day", type=int, choices=range(1, 7), help="Only show stores planned for day 1-6")
    parser.add_argument("--import-csv", help="Import stores from a name,level CSV before reporting")
    parser.add_argument("--save", action="store_true", help="Write the updated snapshot back to --snapshot")
    parser.add_argument("--json", action="store_true", help="Print the dashboard as JSON")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    settings = get_settings()
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    args = build_parser().parse_args(argv)
    snapshot_path = args.snapshot or settings.monitor.snapshot_path
    if not snapshot_path:
        print("❌ No snapshot given (use --snapshot or set SNAPSHOT_PATH)", file=sys.stderr)
        return 2

    try:
        repository = InMemorySnapshotRepository(load_snapshot_file(snapshot_path))

        if args.import_csv:
            text = Path(args.import_csv).read_text(encoding="utf-8-sig")
            result = StoreImportService(repository).import_text(text)
            print(f"✅ {result.summary()}")

        if args.save:
            with open(snapshot_path, "w", encoding="utf-8") as f:
                json.dump(repository.snapshot().to_dict(), f, indent=2, ensure_ascii=False)
            print(f"💾 Snapshot saved to {snapshot_path}")

        service = DashboardService(
            repository,
            deadline_warning_days=settings.monitor.deadline_warning_days,
            store_capacity=settings.monitor.store_capacity,
        )
        data = service.build_dashboard(today=args.date, selected_day=args.day)
    except (OSError, ValueError, SalesMonitorError) as e:
        logger.error(f"Report failed: {e}")
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(data.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(render_report(data))
    return 0


if __name__ == "__main__":
    sys.exit(main())

# src/prospector_cli/app.py
import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from tqdm.auto import tqdm

from consistency.model import Issue, Severity, Snapshot
from prospector_cli.controllers.report_controller import ReportController, filter_issues, group_by_category, summarize
from prospector_cli.managers.config_manager import config_manager
from prospector_cli.managers.snapshot_history_manager import DEFAULT_MAX_SNAPSHOTS, SnapshotHistoryManager
from prospector_cli.services.export_service import ExportService
from prospector_cli.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

SEVERITY_ICONS = {Severity.ERROR: "●", Severity.WARNING: "▲", Severity.INFO: "ℹ"}


class SnapshotLoadError(Exception):
    """Raised when a snapshot file cannot be read or does not hold snapshot objects."""


def load_snapshots(paths: Sequence[str]) -> List[Dict[str, Any]]:
    """
    Reads snapshot JSON files. Each file holds one snapshot object or a list of them.
    Order is preserved: files in argument order, list entries in file order.
    """
    records: List[Dict[str, Any]] = []
    for raw_path in paths:
        path = Path(raw_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotLoadError(f"Could not read snapshot file {path}: {e}") from e

        items = data if isinstance(data, list) else [data]
        for item in items:
            if not isinstance(item, dict):
                raise SnapshotLoadError(f"{path} contains a {type(item).__name__} where a snapshot object was expected")
            records.append(item)

    logger.debug("Loaded %d snapshot(s) from %d file(s)", len(records), len(paths))
    return records


def print_issues(issues: Sequence[Issue]) -> None:
    """Prints issues grouped by category, followed by the severity counts."""
    if not issues:
        print("✅ No issues found.")
        return

    for category, members in group_by_category(issues).items():
        print(f"\n{category} ({len(members)})")
        print("-" * 40)
        for issue in members:
            where = f"  [{issue.url}]" if issue.url else ""
            print(f"  {SEVERITY_ICONS[issue.severity]} {issue.message}{where}")

    summary = summarize(issues)
    print(f"\n{summary.total_issues} issues: {summary.errors} errors, "
          f"{summary.warnings} warnings, {summary.info} info")


def _export_target(export_path: Optional[str]) -> Optional[str]:
    """None means no export; an empty string (bare --export) picks a timestamped default name."""
    if export_path is None:
        return None
    if export_path:
        return export_path
    prefix = config_manager.get_nested("report.default_prefix", "prospector-report")
    return ExportService.default_filename(prefix)


def _analyze(
        snapshots: Sequence[Any],
        include_cross_page: bool,
        export_path: Optional[str],
        min_severity: Optional[str],
        categories: Optional[Sequence[str]] = None
) -> int:
    controller = ReportController(thresholds=config_manager.thresholds())

    with tqdm(total=len(snapshots), desc="Analyzing snapshots", unit="page", leave=False) as bar:
        def update(done: int, total: int) -> None:
            bar.update(done - bar.n)

        issues = controller.run(snapshots, include_cross_page=include_cross_page, progress_callback=update)

    if min_severity or categories:
        issues = filter_issues(
            issues,
            min_severity=Severity(min_severity) if min_severity else None,
            categories=categories,
        )

    print_issues(issues)

    target = _export_target(export_path)
    if target:
        report = controller.build_report(snapshots, issues)
        try:
            written = ExportService.export(report, issues, target)
        except (ValueError, OSError) as e:
            print(f"❌ Export failed: {e}")
            return 1
        print(f"📄 Report exported to {written}")
    return 0


def _history_manager(args: argparse.Namespace) -> SnapshotHistoryManager:
    path = args.history or config_manager.get_nested("history.path", ".prospector/snapshots.json")
    limit = config_manager.get_nested("history.max_snapshots", DEFAULT_MAX_SNAPSHOTS)
    return SnapshotHistoryManager(path, max_snapshots=limit)


def _handle_analyze(args: argparse.Namespace) -> int:
    snapshots = load_snapshots(args.files)
    return _analyze(snapshots, not args.no_cross_page, args.export, args.min_severity, args.categories)


def _handle_history(args: argparse.Namespace) -> int:
    history = _history_manager(args)

    if args.action == "add":
        for record in load_snapshots(args.files):
            history.add(record)
        print(f"📥 History now holds {len(history)} snapshot(s).")
        return 0

    if args.action == "list":
        snapshots = history.get_all()
        if not snapshots:
            print("  (History is empty)")
            return 0
        for i, snap in enumerate(snapshots, start=1):
            _print_snapshot_line(i, snap)
        return 0

    if args.action == "clear":
        history.clear()
        print("🧹 Snapshot history cleared.")
        return 0

    if args.action == "analyze":
        snapshots = history.get_all()
        if not snapshots:
            print("Nothing to analyze: history is empty.")
            return 0
        return _analyze(snapshots, True, args.export, args.min_severity, args.categories)

    return 1


def _print_snapshot_line(index: int, snap: Snapshot) -> None:
    counts = ", ".join(f"{len(els)} {cat}" for cat, els in snap.elements.items() if els)
    framework = f" [{snap.framework}{' (SPA)' if snap.is_spa else ''}]" if snap.framework else ""
    print(f"{index:>3}. {snap.title or snap.url} {snap.url}{framework} {counts}")


def _add_report_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--export", nargs="?", const="", default=None, metavar="PATH",
                        help="Write a .json report or .csv table. Without PATH a timestamped .json name is used.")
    parser.add_argument("--min-severity", choices=[s.value for s in Severity], default=None,
                        help="Only report issues at or above this severity.")
    parser.add_argument("--category", dest="categories", action="append", default=None, metavar="CATEGORY",
                        help="Only report issues of this category. Repeatable.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prospector",
        description="Find UI consistency, accessibility and performance issues in page snapshots."
    )
    parser.add_argument("--settings", type=str, default=None, help="Path to a settings.json file.")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("--history", type=str, default=None, help="Path of the snapshot history file.")
    parser.add_argument("--set", dest="overrides", action="append", default=None, metavar="KEY=VALUE",
                        help="Override a setting, e.g. thresholds.tap_target_min_size=48. Repeatable.")
    subparsers = parser.add_subparsers(dest="command")

    # 1. Subcommand: ANALYZE
    analyze_parser = subparsers.add_parser("analyze", help="Analyze snapshot JSON files")
    analyze_parser.add_argument("files", nargs="+", help="Snapshot files (an object or a list of objects each).")
    analyze_parser.add_argument("--no-cross-page", action="store_true", help="Skip the cross-page comparison.")
    _add_report_options(analyze_parser)

    # 2. Subcommand: HISTORY
    history_parser = subparsers.add_parser("history", help="Manage the stored snapshot session")
    history_sub = history_parser.add_subparsers(dest="action")
    add_parser = history_sub.add_parser("add", help="Store snapshots from files")
    add_parser.add_argument("files", nargs="+")
    history_sub.add_parser("list", help="List stored snapshots")
    history_sub.add_parser("clear", help="Remove all stored snapshots")
    run_parser = history_sub.add_parser("analyze", help="Analyze the stored session")
    _add_report_options(run_parser)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return 0 if e.code == 0 else 1

    if args.settings:
        config_manager.load(args.settings)
    try:
        config_manager.apply_overrides(args.overrides or [])
    except ValueError as e:
        print(f"❌ {e}")
        return 1
    configure_logger(args.log_level or config_manager.get_nested("debug.level", "WARNING"))

    if args.command is None or (args.command == "history" and args.action is None):
        parser.print_help()
        return 0

    try:
        if args.command == "analyze":
            return _handle_analyze(args)
        if args.command == "history":
            return _handle_history(args)
    except SnapshotLoadError as e:
        logger.error("%s", e)
        print(f"❌ {e}")
        return 1

    return 1


if __name__ == "__main__":
    raise SystemExit(main())

# src/prospector_cli/services/export_service.py
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from consistency.model import Issue
from prospector_cli.model import Report

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["URL", "Category", "Severity", "Message", "Detail"]


class ExportService:
    """Writes analysis results to report files (JSON report or flat CSV table)."""

    @staticmethod
    def default_filename(prefix: str = "prospector-report") -> str:
        return f"{prefix}-{int(time.time() * 1000)}.json"

    @staticmethod
    def to_rows(issues: Sequence[Issue]) -> List[Dict[str, Any]]:
        """Flattens issues into export rows; cross-page issues get an empty URL."""
        return [
            {
                "URL": issue.url or "",
                "Category": issue.category,
                "Severity": issue.severity.value,
                "Message": issue.message,
                "Detail": issue.detail,
            }
            for issue in issues
        ]

    @staticmethod
    def to_json(report: Report, path: Union[str, Path]) -> Path:
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
        logger.info("JSON report written to %s", output)
        return output

    @staticmethod
    def to_csv(issues: Sequence[Issue], path: Union[str, Path]) -> Path:
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        df = pd.DataFrame(ExportService.to_rows(issues), columns=CSV_COLUMNS)
        df.to_csv(output, index=False)
        logger.info("CSV export of %d issues written to %s", len(df), output)
        return output

    @staticmethod
    def export(report: Report, issues: Sequence[Issue], path: Union[str, Path]) -> Path:
        """Dispatches on the file suffix (.json or .csv)."""
        suffix = Path(path).suffix.lower()
        if suffix == ".json":
            return ExportService.to_json(report, path)
        if suffix == ".csv":
            return ExportService.to_csv(issues, path)
        raise ValueError(f"Unsupported export format '{suffix}'. Use .json or .csv.")

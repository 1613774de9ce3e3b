"""
CSV report output.
"""
import csv
import logging
import os

from workload_metrics.errors import ReportFileError
from workload_metrics.kube_types import ReportRow, TimeWindow

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Namespace", "Deployment", "CPU Usage Max (percent)", "Memory Usage Max (percent)"]


def report_filename(namespace: str, window: TimeWindow) -> str:
    return f"deployments_metrics_{namespace}_{window.start_compact}_to_{window.end_compact}.csv"


class ReportWriter:
    """Writes report rows as they arrive; truncates any previous report."""

    def __init__(self, path: str):
        self.path = path
        self.rows_written = 0
        self._fp = None
        self._writer = None

    def __enter__(self) -> "ReportWriter":
        try:
            self._fp = open(self.path, "w", newline="", encoding="utf-8")
        except OSError as e:
            raise ReportFileError(f"Failed to create {self.path}: {e}") from e

        self._writer = csv.writer(self._fp, lineterminator="\n")
        try:
            self._write(CSV_HEADERS)
        except ReportFileError:
            self._fp.close()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._fp:
            self._fp.close()
            self._fp = None
        if exc_type is None:
            logger.info(f"Data saved to: {self.path} ({self.rows_written} rows)")

    def write_row(self, row: ReportRow) -> None:
        self._write(row.as_csv())
        self.rows_written += 1

    def _write(self, values) -> None:
        # flushed per row so completed rows survive a fatal error later on
        try:
            self._writer.writerow(values)
            self._fp.flush()
        except OSError as e:
            raise ReportFileError(f"Failed to write {self.path}: {e}") from e


def report_path(output_dir: str, namespace: str, window: TimeWindow) -> str:
    return os.path.join(output_dir, report_filename(namespace, window))

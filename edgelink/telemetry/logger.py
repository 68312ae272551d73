"""
JSON Lines metrics logger.

Provides append-only logging of detection metrics for offline analysis.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .metrics import DetectionMetrics

logger = logging.getLogger(__name__)


class MetricsLogger:
    """
    Append-only JSON Lines writer for DetectionMetrics.

    Each line holds a UTC timestamp, the source name and the metrics fields.
    When the file grows past max_file_size it is renamed to <name>.1
    (replacing any previous rotation) and a fresh file is started.

    Usage:
        with MetricsLogger("metrics.jsonl") as metrics_log:
            metrics_log.log(metrics, source="frame_001.png")
    """

    DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB

    def __init__(
        self,
        log_file: Union[str, Path],
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ):
        """
        Initialize metrics logger.

        Args:
            log_file: Path to output .jsonl file
            max_file_size: Maximum file size in bytes before rotation
        """
        self._log_file = Path(log_file)
        self._max_file_size = max_file_size
        self._file_handle = None
        self._records_written = 0

    def open(self) -> None:
        """Open the log file for appending."""
        if self._file_handle is not None:
            return
        self._log_file.parent.mkdir(parents=True, exist_ok=True)
        self._file_handle = open(self._log_file, "a", encoding="utf-8")
        logger.debug(f"Metrics logger opened: {self._log_file}")

    def close(self) -> None:
        """Flush and close the log file."""
        if self._file_handle is not None:
            self._file_handle.close()
            self._file_handle = None
            logger.debug(f"Metrics logger closed. Written: {self._records_written}")

    def log(self, metrics: DetectionMetrics, source: Optional[str] = None) -> None:
        """
        Append one metrics record.

        Args:
            metrics: Metrics of a single run
            source: Name of the processed input (e.g. file path)
        """
        self._check_rotation()
        self.open()

        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": source,
        }
        record.update(metrics.to_dict())

        self._file_handle.write(json.dumps(record, separators=(',', ':')) + "\n")
        self._file_handle.flush()
        self._records_written += 1

    def _check_rotation(self) -> None:
        """Rotate the log file once it reaches the size limit."""
        if not self._log_file.exists():
            return

        if self._log_file.stat().st_size < self._max_file_size:
            return

        self.close()

        rotated_name = self._log_file.with_name(self._log_file.name + ".1")
        self._log_file.replace(rotated_name)
        logger.info(f"Rotated metrics log to: {rotated_name}")

    @property
    def records_written(self) -> int:
        """Get total records written."""
        return self._records_written

    @property
    def log_file(self) -> Path:
        return self._log_file

    def __enter__(self) -> "MetricsLogger":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

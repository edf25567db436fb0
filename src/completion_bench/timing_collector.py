"""Thread-safe store of per-request timings."""
import threading
from typing import List

from .constants import BenchmarkConstants
from .models import TimingRecord


class TimingCollector:
    """Collects timing records from all workers in completion order."""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: List[TimingRecord] = []
        self._skipped = 0
        self._failed = 0

    def add(self, record: TimingRecord) -> None:
        with self._lock:
            self._records.append(record)

    def record_skip(self) -> None:
        """Count a request rejected before dispatch."""
        with self._lock:
            self._skipped += 1

    def record_failure(self) -> None:
        """Count a request the endpoint answered unusably."""
        with self._lock:
            self._failed += 1

    @property
    def skipped(self) -> int:
        with self._lock:
            return self._skipped

    @property
    def failed(self) -> int:
        with self._lock:
            return self._failed

    def records(self) -> List[TimingRecord]:
        """Snapshot of the records collected so far."""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def render_report(self) -> str:
        """
        Render the timing table.

        Returns:
            The header line followed by one ``time, tokens, chars`` row per record.
        """
        with self._lock:
            rows = [
                f"{record.time_ms}, {record.context_tokens}, {record.response_chars}\n"
                for record in self._records
            ]
        return BenchmarkConstants.REPORT_HEADER + "\n" + "".join(rows)

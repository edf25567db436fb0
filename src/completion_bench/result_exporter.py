"""Loads saved benchmark reports back for analysis."""
import io
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from .constants import BenchmarkConstants
from .models import ReportData, TimingRecord


# Configure logging
logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["timeMs", "contextTokensSize", "responseCharsSize"]
_SETTING_PATTERN = re.compile(r"([a-zA-Z_]+)=('[^']*'|\"[^\"]*\"|[^,}]+)")


class ResultExporter:
    """Reads ``report.csv`` files written by the benchmark runner."""

    @staticmethod
    def parse_settings_echo(line: str) -> Dict[str, Optional[str]]:
        """
        Parse the ``INFO: BenchmarkSettings{key=value, ...}`` line of a report.

        Args:
            line: First line of a report.

        Returns:
            Mapping of setting name to its string value; ``None`` for unset values.
        """
        start = line.find("{")
        if start == -1:
            return {}

        settings = {}
        for key, value in _SETTING_PATTERN.findall(line[start + 1:]):
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
                value = value[1:-1]
            settings[key] = None if value.lower() == "none" else value
        return settings

    @staticmethod
    def load_dataframe(input_path: Union[Path, str]) -> pd.DataFrame:
        """Load the timing table of a report, starting at its header line."""
        with open(input_path, "r") as f:
            lines = f.read().split("\n")
        try:
            header_index = next(i for i, line in enumerate(lines) if line.startswith(REPORT_COLUMNS[0]))
        except StopIteration:
            raise ValueError(f"Report {input_path} has no timing table")

        table = "\n".join(lines[header_index:])
        df = pd.read_csv(io.StringIO(table), skipinitialspace=True)
        df.columns = [column.strip() for column in df.columns]
        missing = [column for column in REPORT_COLUMNS if column not in df.columns]
        if missing:
            raise ValueError(f"Report {input_path} is missing columns: {missing}")
        return df[REPORT_COLUMNS].astype(int)

    @classmethod
    def load_report(cls, input_path: Union[Path, str]) -> ReportData:
        """
        Load a report written by the benchmark runner.

        Args:
            input_path: Path of the report file.

        Returns:
            The settings echo and the timing records in file order.
        """
        with open(input_path, "r") as f:
            info = f.readline().rstrip("\n")

        if not info.startswith(BenchmarkConstants.REPORT_INFO_PREFIX):
            raise ValueError(f"Report {input_path} does not start with an INFO line")

        df = cls.load_dataframe(input_path)
        records: List[TimingRecord] = [
            TimingRecord(time_ms=int(row.timeMs), context_tokens=int(row.contextTokensSize),
                         response_chars=int(row.responseCharsSize))
            for row in df.itertuples(index=False)
        ]

        logger.info(f"Report loaded from CSV: {input_path} ({len(records)} rows)")
        return ReportData(
            info=info[len(BenchmarkConstants.REPORT_INFO_PREFIX):],
            settings=cls.parse_settings_echo(info),
            records=records,
        )

"""Analyzes and computes latency statistics."""
import logging
from typing import List

import numpy as np

from .models import LatencyResults, TimingRecord


# Configure logging
logger = logging.getLogger(__name__)


class LatencyAnalyzer:
    """Analyzes and computes latency statistics."""

    @staticmethod
    def compute(records: List[TimingRecord]) -> LatencyResults:
        """
        Compute p50, p90, p95 and means of the recorded latencies.

        Args:
            records: Timing records of completed requests.

        Returns:
            LatencyResults dataclass, all zeros when there are no records.
        """
        if not records:
            return LatencyResults(p50=0.0, p90=0.0, p95=0.0)

        latencies = np.array([record.time_ms for record in records], dtype=float)
        tokens = np.array([record.context_tokens for record in records], dtype=float)

        return LatencyResults(
            p50=float(np.percentile(latencies, 50)),
            p90=float(np.percentile(latencies, 90)),
            p95=float(np.percentile(latencies, 95)),
            mean=float(latencies.mean()),
            mean_per_token=float((latencies / tokens).mean()),
            count=len(records),
        )

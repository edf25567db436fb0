"""Generates visualizations from benchmark reports."""
import logging
from pathlib import Path
from typing import Dict, List, Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .result_exporter import ResultExporter


# Configure logging
logger = logging.getLogger(__name__)

CONTEXT_BINS = 20
RESPONSE_CHAR_WEIGHT = 4


class VisualizationGenerator:
    """Generates charts of latency against request size."""

    @staticmethod
    def build_title(settings: Dict[str, str], df: pd.DataFrame) -> str:
        """Chart title: hardware, model, context size and average timings."""
        title = (f"Config: {settings.get('gpu_config')} model: {settings.get('model_name')} "
                 f"ctx size: {settings.get('context_size')}")
        if len(df) > 0:
            per_request = df["timeMs"].mean()
            per_token = (df["timeMs"] / df["contextTokensSize"]).mean()
            title += f" Avg. time per request {per_request:8.2f}, per ctx token {per_token:8.2f}"
        return title

    @staticmethod
    def bin_by_context(df: pd.DataFrame, bins: int = CONTEXT_BINS) -> pd.DataFrame:
        """
        Average latency per context size bin.

        Args:
            df: Report table.
            bins: Number of equal-width bins over the context size range.

        Returns:
            One row per non-empty bin with its bounds, center, mean time and count.
        """
        if len(df) == 0:
            return pd.DataFrame(columns=["lower", "upper", "center", "mean_time", "count"])

        tokens = df["contextTokensSize"].to_numpy(dtype=float)
        edges = np.linspace(tokens.min(), tokens.max(), bins + 1)
        # Last bin is closed so the maximum is counted
        indices = np.clip(np.digitize(tokens, edges) - 1, 0, bins - 1)

        rows = []
        for index in range(bins):
            mask = indices == index
            count = int(mask.sum())
            if count == 0:
                continue
            lower, upper = edges[index], edges[index + 1]
            rows.append({
                "lower": lower,
                "upper": upper,
                "center": (lower + upper) / 2,
                "mean_time": float(df["timeMs"].to_numpy()[mask].mean()),
                "count": count,
            })
        return pd.DataFrame(rows)

    def _scatter(self, x, y, xlabel: str, chart_title: str, title: str, output_path: Path) -> None:
        fig, ax = plt.subplots(figsize=(10, 6))
        ax.scatter(x, y, s=12, marker='o')
        ax.set_title(chart_title)
        ax.set_xlabel(xlabel)
        ax.set_ylabel("Time (ms)")
        ax.grid(True, alpha=0.3)
        fig.suptitle(title, fontsize=9)
        plt.tight_layout()
        plt.savefig(output_path)
        plt.close(fig)
        logger.info(f"Graph saved: {output_path}")

    def plot_report(self, report_path: Union[Path, str], output_dir: Union[Path, str]) -> List[Path]:
        """
        Generate all charts for a report.

        Args:
            report_path: Path of a ``report.csv`` file.
            output_dir: Directory to save the PNG files to; created if missing.

        Returns:
            Paths of the written charts.
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        report = ResultExporter.load_report(report_path)
        df = ResultExporter.load_dataframe(report_path)
        if len(df) == 0:
            logger.warning(f"Report {report_path} has no rows. Skipping plots.")
            return []

        title = self.build_title(report.settings, df)
        combined = df["contextTokensSize"] + RESPONSE_CHAR_WEIGHT * df["responseCharsSize"]

        written = []
        binned = self.bin_by_context(df)
        fig, ax = plt.subplots(figsize=(12, 6))
        bars = ax.bar(range(len(binned)), binned["mean_time"], width=0.8)
        ax.set_xticks(range(len(binned)))
        ax.set_xticklabels([f"{row.lower:.0f}-{row.upper:.0f}" for row in binned.itertuples()], rotation=45)
        for bar, count in zip(bars, binned["count"]):
            ax.text(bar.get_x() + bar.get_width()/2, bar.get_height() + 1, f'{count}', ha='center', va='bottom', fontsize=8)
        ax.set_title("Response Time Distribution by Context Size")
        ax.set_xlabel("ContextSize")
        ax.set_ylabel("Time (ms)")
        fig.suptitle(title, fontsize=9)
        plt.tight_layout()
        path = output_dir / "time_by_context_bins.png"
        plt.savefig(path)
        plt.close(fig)
        logger.info(f"Graph saved: {path}")
        written.append(path)

        charts = [
            (df["contextTokensSize"], "Context (tokens)", "Response Time vs. Context Size", "time_vs_context.png"),
            (df["responseCharsSize"], "Response (chars)", "Response Time vs. Response Size", "time_vs_response.png"),
            (combined, "Context tokens + 4 x response chars", "Response Time vs. (Context Size + Response Size)",
             "time_vs_combined.png"),
        ]
        for x, xlabel, chart_title, file_name in charts:
            path = output_dir / file_name
            self._scatter(x, df["timeMs"], xlabel, chart_title, title, path)
            written.append(path)

        return written

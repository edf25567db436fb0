#!/usr/bin/env python3
"""
Utility to load a benchmark report and generate charts without running requests.
"""
import sys
import logging

from src.completion_bench.result_exporter import ResultExporter
from src.completion_bench.visualization_generator import VisualizationGenerator


# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def load_and_visualize_report(report_path: str = "report.csv", output_dir: str = "charts"):
    """
    Load a report.csv file and write its charts.

    Args:
        report_path: Path of the report written by a benchmark run.
        output_dir: Directory for the PNG charts.

    Returns:
        List of written chart paths.
    """
    print(f"Loading benchmark report: {report_path}")
    report = ResultExporter.load_report(report_path)
    print(f"Settings: {report.info}")
    print(f"Rows: {len(report.records)}")

    return VisualizationGenerator().plot_report(report_path, output_dir)


def main():
    """Main entry point for generating charts from a report."""
    report_path = sys.argv[1] if len(sys.argv) > 1 else "report.csv"
    output_dir = sys.argv[2] if len(sys.argv) > 2 else "charts"

    try:
        charts = load_and_visualize_report(report_path, output_dir)
    except (OSError, ValueError) as e:
        print(f"\nCould not load report {report_path}: {e}")
        return 1

    if charts:
        print(f"\nWrote {len(charts)} charts to {output_dir}/")
        return 0
    else:
        print(f"\nReport {report_path} has no rows to chart")
        return 1


if __name__ == "__main__":
    exit(main())

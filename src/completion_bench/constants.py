"""Constants for the completion benchmark."""
from typing import List


class BenchmarkConstants:
    """Centralized constants for benchmark configuration."""
    MAX_TOKENS = 100
    STOP_SEQUENCES: List[str] = ["\n"]
    SAMPLE_COUNT = 1
    TEMPERATURE = 0.0
    CONNECT_TIMEOUT = 20  # seconds
    SEED = 0
    PROGRESS_LOG_INTERVAL = 100
    HTTP_SUCCESS = 200

    # Simulated endpoint timing, in milliseconds
    SIMULATED_BASE_MS = 300
    SIMULATED_TOKENS_PER_MS = 10
    SIMULATED_JITTER_MS = 50

    REPORT_FILE_NAME = "report.csv"
    REPORT_HEADER = "timeMs, contextTokensSize, responseCharsSize"
    REPORT_INFO_PREFIX = "INFO: "

    CONTENT_TYPE_JSON = "application/json"


class FimTokens:
    """Sentinel tokens of the fill-in-middle prompt format."""
    FILE_SEPARATOR = "<|file_sep|>"
    PREFIX = "<|fim_prefix|>"
    SUFFIX = "<|fim_suffix|>"
    MIDDLE = "<|fim_middle|>"

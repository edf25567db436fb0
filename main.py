"""Main entry point for the completion latency benchmark."""
import argparse
import sys
from typing import Any, Callable, Dict, List, Optional

from src.completion_bench import BenchmarkRunner, DatasetLoadError, TransportError
from src.shared.config import BenchmarkSettings, ConfigurationError
from src.shared.logging import LoggingManager


WELCOME_MESSAGE = """*********************************************
*  Completion Latency Benchmark             *
*  Provide parameters via command line or   *
*  enter them interactively with -i         *
*********************************************"""

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Benchmark latency of a code completion endpoint")
    parser.add_argument("-sl", "--sample-limit", dest="sample_limit", type=int, help="Sample limit (default: all prompts)")
    parser.add_argument("-t", "--threads", type=int, help="Thread count for parallelism (default: 1)")
    parser.add_argument("-d", "--delay", dest="delay_ms", type=int, help="Delay between requests in ms (default: 0)")
    parser.add_argument("-g", "--gpu", dest="gpu_config", help="GPU configuration tag, echoed in the report")
    parser.add_argument("-m", "--model", dest="model_name", help="Model name (required)")
    parser.add_argument("-u", "--url", dest="model_url", help="Completion endpoint URL (required)")
    parser.add_argument("-k", "--key", dest="api_key", help="API key")
    parser.add_argument("-c", "--context", dest="context_size", type=int, help="Context size in tokens (required)")
    parser.add_argument("-tk", "--tokenizer", dest="tokenizer_path", help="Path to tokenizer.json (required)")
    parser.add_argument("-ds", "--dataset", dest="dataset_path", help="Path to the JSONL dataset (required)")
    parser.add_argument("--simulated", action="store_true", default=None,
                        help="Simulate the endpoint instead of calling it")
    parser.add_argument("--log-level", dest="log_level", help="Logging level (default: INFO)")
    parser.add_argument("-i", "--interactive", action="store_true", help="Enter parameters interactively")
    return parser


def _prompt(label: str, default: Optional[str] = None, required: bool = False,
            convert: Callable[[str], Any] = str, input_fn: Callable[[str], str] = input) -> Any:
    suffix = " (required)" if required else f" [{default}]"
    while True:
        value = input_fn(f"{label}{suffix}: ").strip()
        if not value:
            if required:
                print(f"{label} is required")
                continue
            return None
        try:
            return convert(value)
        except ValueError:
            print(f"Invalid value for {label}: {value}")


def interactive_config(input_fn: Callable[[str], str] = input) -> Dict[str, Any]:
    """Ask for every parameter on the console; blank answers keep the default."""
    return {
        "sample_limit": _prompt("Sample limit", "all", convert=int, input_fn=input_fn),
        "threads": _prompt("Thread count", "1", convert=int, input_fn=input_fn),
        "delay_ms": _prompt("Delay between requests (ms)", "0", convert=int, input_fn=input_fn),
        "gpu_config": _prompt("GPU configuration", "none", input_fn=input_fn),
        "model_name": _prompt("Model name", required=True, input_fn=input_fn),
        "model_url": _prompt("Model URL", required=True, input_fn=input_fn),
        "api_key": _prompt("API key", "none", input_fn=input_fn),
        "context_size": _prompt("Context size", required=True, convert=int, input_fn=input_fn),
        "tokenizer_path": _prompt("Path to tokenizer.json", required=True, input_fn=input_fn),
        "dataset_path": _prompt("Path to dataset .jsonl", required=True, input_fn=input_fn),
    }


def main(argv: Optional[List[str]] = None) -> int:
    print(WELCOME_MESSAGE)
    args = build_parser().parse_args(argv)

    values = vars(args)
    interactive = values.pop("interactive")
    if interactive:
        values.update({key: value for key, value in interactive_config().items() if value is not None})

    try:
        settings = BenchmarkSettings.load(**values)
        LoggingManager.setup_logging(settings.log_level, settings.library_log_levels)
        print("\nConfiguration complete. Starting benchmark with:")
        print(settings)
        runner = BenchmarkRunner(settings)
        runner.run_from_files()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except DatasetLoadError as e:
        print(f"Dataset error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except TransportError:
        LoggingManager.get_logger(__name__).exception("Benchmark aborted")
        return EXIT_RUN_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

"""Unit tests for the command line entry point."""

from unittest.mock import patch

import pytest

import main
from src.completion_bench.exceptions import TransportError
from tests.test_const import TEST_MODEL, TEST_URL


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the entry point from installing handlers on the root logger."""
    with patch("main.LoggingManager.setup_logging") as mock_setup:
        yield mock_setup


class TestBuildParser:
    """Test argument parsing."""

    def test_short_flags(self):
        args = main.build_parser().parse_args(
            ["-sl", "5", "-t", "4", "-d", "10", "-g", "1xA100", "-m", TEST_MODEL, "-u", TEST_URL,
             "-k", "key", "-c", "4096", "-tk", "tok.json", "-ds", "data.jsonl"]
        )
        assert args.sample_limit == 5
        assert args.threads == 4
        assert args.delay_ms == 10
        assert args.gpu_config == "1xA100"
        assert args.model_name == TEST_MODEL
        assert args.model_url == TEST_URL
        assert args.api_key == "key"
        assert args.context_size == 4096
        assert args.tokenizer_path == "tok.json"
        assert args.dataset_path == "data.jsonl"
        assert args.simulated is None
        assert args.interactive is False

    def test_non_integer_threads_rejected(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(["-t", "many"])


class TestInteractiveConfig:
    """Test console prompting."""

    def test_blank_answers_keep_defaults(self):
        answers = iter(["", "", "", "", TEST_MODEL, TEST_URL, "", "2048", "tok.json", "data.jsonl"])
        values = main.interactive_config(input_fn=lambda _: next(answers))
        assert values["sample_limit"] is None
        assert values["threads"] is None
        assert values["model_name"] == TEST_MODEL
        assert values["context_size"] == 2048
        assert values["dataset_path"] == "data.jsonl"

    def test_reprompts_required_and_invalid(self):
        answers = iter(["3", "x", "2", "", "", "", TEST_MODEL, TEST_URL, "", "abc", "2048", "tok.json", "d"])
        values = main.interactive_config(input_fn=lambda _: next(answers))
        assert values["sample_limit"] == 3
        assert values["threads"] == 2
        assert values["model_name"] == TEST_MODEL
        assert values["context_size"] == 2048


class TestMain:
    """Test exit codes of the entry point."""

    def test_missing_required_values(self, capsys):
        assert main.main([]) == main.EXIT_CONFIG_ERROR
        assert "Configuration error" in capsys.readouterr().err

    def test_missing_tokenizer_file(self, tmp_path, dataset_file):
        argv = ["-m", TEST_MODEL, "-u", TEST_URL, "-c", "1000",
                "-tk", str(tmp_path / "missing.json"), "-ds", str(dataset_file)]
        assert main.main(argv) == main.EXIT_CONFIG_ERROR

    def test_successful_run(self, tmp_path, dataset_file):
        tokenizer_file = tmp_path / "tokenizer.json"
        tokenizer_file.write_text("{}")
        argv = ["-m", TEST_MODEL, "-u", TEST_URL, "-c", "1000", "--simulated",
                "-tk", str(tokenizer_file), "-ds", str(dataset_file)]
        with patch("main.BenchmarkRunner") as mock_runner:
            assert main.main(argv) == main.EXIT_OK
        settings = mock_runner.call_args[0][0]
        assert settings.simulated is True
        assert settings.context_size == 1000
        mock_runner.return_value.run_from_files.assert_called_once()

    def test_transport_error(self, tmp_path, dataset_file):
        tokenizer_file = tmp_path / "tokenizer.json"
        tokenizer_file.write_text("{}")
        argv = ["-m", TEST_MODEL, "-u", TEST_URL, "-c", "1000",
                "-tk", str(tokenizer_file), "-ds", str(dataset_file)]
        with patch("main.BenchmarkRunner") as mock_runner:
            mock_runner.return_value.run_from_files.side_effect = TransportError("connection refused")
            assert main.main(argv) == main.EXIT_RUN_FAILED

    def test_interactive_mode(self, tmp_path, dataset_file):
        tokenizer_file = tmp_path / "tokenizer.json"
        tokenizer_file.write_text("{}")
        interactive_values = {"model_name": TEST_MODEL, "model_url": TEST_URL, "context_size": 1000,
                              "tokenizer_path": str(tokenizer_file), "dataset_path": str(dataset_file),
                              "threads": None}
        with patch("main.interactive_config", return_value=interactive_values), \
                patch("main.BenchmarkRunner") as mock_runner:
            assert main.main(["-i", "--simulated"]) == main.EXIT_OK
        settings = mock_runner.call_args[0][0]
        assert settings.model_name == TEST_MODEL
        assert settings.threads == 1

    def test_sample_limit_larger_than_corpus(self, tokenizer_file, dataset_file, tmp_path, capsys):
        argv = ["-m", TEST_MODEL, "-u", TEST_URL, "-c", "1000", "--simulated", "-sl", "50",
                "-tk", str(tokenizer_file), "-ds", str(dataset_file)]
        assert main.main(argv) == main.EXIT_CONFIG_ERROR
        assert "sample_limit 50" in capsys.readouterr().err
        assert not (tmp_path / "report.csv").exists()

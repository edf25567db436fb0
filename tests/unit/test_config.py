"""Unit tests for benchmark settings."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.shared.config import BenchmarkSettings, ConfigurationError
from tests.test_const import TEST_MODEL, TEST_URL, TEST_API_KEY, TEST_CONTEXT_SIZE


REQUIRED = {"model_name": TEST_MODEL, "model_url": TEST_URL, "context_size": TEST_CONTEXT_SIZE}


class TestSettings:
    """Test BenchmarkSettings configuration class."""

    def test_default_settings(self):
        """Test default configuration values."""
        settings = BenchmarkSettings.load(**REQUIRED)
        assert settings.sample_limit is None
        assert settings.threads == 1
        assert settings.delay_ms == 0
        assert settings.gpu_config is None
        assert settings.api_key is None
        assert settings.simulated is False
        assert settings.context_size == TEST_CONTEXT_SIZE

    @pytest.mark.parametrize("missing", ["model_name", "model_url", "context_size"])
    def test_missing_required_field(self, missing):
        """Test that every required field is enforced."""
        values = {key: value for key, value in REQUIRED.items() if key != missing}
        with pytest.raises(ConfigurationError) as exc_info:
            BenchmarkSettings.load(**values)
        assert exc_info.value.config_key == missing
        assert missing in exc_info.value.message

    def test_blank_model_name_rejected(self):
        """Test that a blank model name counts as missing."""
        with pytest.raises(ConfigurationError):
            BenchmarkSettings.load(**{**REQUIRED, "model_name": "   "})

    @pytest.mark.parametrize("field,value", [("threads", 0), ("delay_ms", -1), ("sample_limit", -5), ("context_size", 0)])
    def test_out_of_range_values(self, field, value):
        """Test range validation of numeric fields."""
        with pytest.raises(ConfigurationError) as exc_info:
            BenchmarkSettings.load(**{**REQUIRED, field: value})
        assert exc_info.value.config_key == field

    def test_none_overrides_are_ignored(self):
        """Test that unset command line values fall back to defaults."""
        settings = BenchmarkSettings.load(**REQUIRED, threads=None, sample_limit=None)
        assert settings.threads == 1

    def test_empty_optional_strings_become_none(self):
        """Test that blank gpu config and api key are treated as unset."""
        settings = BenchmarkSettings.load(**REQUIRED, gpu_config="", api_key="")
        assert settings.gpu_config is None
        assert settings.api_key is None

    def test_missing_file_path_rejected(self, tmp_path):
        """Test that a tokenizer path that does not exist fails fast."""
        with pytest.raises(ConfigurationError) as exc_info:
            BenchmarkSettings.load(**REQUIRED, tokenizer_path=str(tmp_path / "missing.json"))
        assert exc_info.value.config_key == "tokenizer_path"

    def test_existing_file_path_accepted(self, tmp_path):
        """Test that existing dataset paths are kept as Path objects."""
        dataset = tmp_path / "data.jsonl"
        dataset.write_text("")
        settings = BenchmarkSettings.load(**REQUIRED, dataset_path=str(dataset))
        assert settings.dataset_path == dataset

    def test_settings_are_immutable(self):
        """Test that settings cannot be changed after construction."""
        settings = BenchmarkSettings.load(**REQUIRED)
        with pytest.raises(ValidationError):
            settings.threads = 4

    @patch.dict(os.environ, {"COMPLETION_BENCH_THREADS": "8"})
    def test_env_override_threads(self):
        """Test overriding threads via environment variable."""
        settings = BenchmarkSettings.load(**REQUIRED)
        assert settings.threads == 8

    @patch.dict(os.environ, {"COMPLETION_BENCH_THREADS": "8"})
    def test_explicit_value_beats_env(self):
        """Test that explicit values take precedence over the environment."""
        settings = BenchmarkSettings.load(**REQUIRED, threads=2)
        assert settings.threads == 2

    @patch.dict(os.environ, {
        "COMPLETION_BENCH_MODEL_NAME": "env-model",
        "COMPLETION_BENCH_MODEL_URL": "http://env:9000/v1/completions",
        "COMPLETION_BENCH_CONTEXT_SIZE": "4096",
        "COMPLETION_BENCH_SIMULATED": "true",
    })
    def test_required_fields_from_env(self):
        """Test that required fields can come entirely from the environment."""
        settings = BenchmarkSettings.load()
        assert settings.model_name == "env-model"
        assert settings.context_size == 4096
        assert settings.simulated is True

    def test_json_config_file(self):
        """Test loading values from bench_config.json in the working directory."""
        Path("bench_config.json").write_text(json.dumps({**REQUIRED, "delay_ms": 25}))
        settings = BenchmarkSettings.load()
        assert settings.delay_ms == 25
        assert settings.model_name == TEST_MODEL

    def test_str_masks_api_key(self):
        """Test that the configuration echo never reveals the API key."""
        settings = BenchmarkSettings.load(**REQUIRED, api_key=TEST_API_KEY, gpu_config="2xH100")
        echo = str(settings)
        assert echo.startswith("BenchmarkSettings{")
        assert TEST_API_KEY not in echo
        assert "gpu_config='2xH100'" in echo
        assert f"model_name='{TEST_MODEL}'" in echo
        assert "threads=1" in echo
        assert "\n" not in echo

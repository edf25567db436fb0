"""Shared test configuration and fixtures for all tests."""

import json
import os
from unittest.mock import MagicMock

import pytest
from tokenizers import Tokenizer
from tokenizers.models import WordLevel
from tokenizers.pre_tokenizers import Whitespace

from src.completion_bench.models import CallResult
from src.shared.config import BenchmarkSettings
from tests.factories import make_prompts
from tests.test_const import (
    TEST_MODEL, TEST_URL, TEST_CONTEXT_SIZE, TEST_GPU, TEST_VOCAB, MOCK_COMPLETION_BODY
)


@pytest.fixture(autouse=True)
def isolated_settings_sources(monkeypatch, tmp_path):
    """Keep environment variables and bench_config.json out of the tests."""
    for key in list(os.environ):
        if key.startswith("COMPLETION_BENCH_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings():
    """Simulated-mode settings fixture."""
    return BenchmarkSettings(
        model_name=TEST_MODEL,
        model_url=TEST_URL,
        context_size=TEST_CONTEXT_SIZE,
        gpu_config=TEST_GPU,
        simulated=True,
    )


@pytest.fixture
def prompts():
    """Six small prompts that fit the test context window."""
    return make_prompts(6)


@pytest.fixture
def mock_strategy():
    """Call strategy fixture answering every request with one completion."""
    strategy = MagicMock()
    strategy.call.return_value = CallResult(status_code=200, body=MOCK_COMPLETION_BODY)
    return strategy


@pytest.fixture
def dataset_file(tmp_path):
    """JSONL dataset with two valid rows and one row with an out of range line number."""
    rows = [
        {"prompt": "a = 1\nb = 2\n", "metadata": {"line_no": 2, "task_id": "t/1"}},
        {"prompt": "def f():\n    pass", "metadata": {"line_no": 3, "task_id": "t/2"}},
        {"prompt": "x", "metadata": {"line_no": 9, "task_id": "t/3"}},
    ]
    path = tmp_path / "line_level.test.jsonl"
    path.write_text("\n".join(json.dumps(row) for row in rows) + "\n")
    return path


@pytest.fixture
def tokenizer_file(tmp_path):
    """Tiny word-level tokenizer.json; unknown words map to id 0."""
    tokenizer = Tokenizer(WordLevel(vocab=TEST_VOCAB, unk_token="[UNK]"))
    tokenizer.pre_tokenizer = Whitespace()
    path = tmp_path / "tokenizer.json"
    tokenizer.save(str(path))
    return path

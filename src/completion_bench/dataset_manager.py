"""Manages dataset loading and preparation."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from datasets import load_dataset  # Requires: pip install datasets

from .exceptions import DatasetLoadError
from .prompt_assembler import PromptAssembler


# Configure logging
logger = logging.getLogger(__name__)


class DatasetManager:
    """Manages dataset loading and preparation."""

    def __init__(self, prompt_assembler: PromptAssembler = None):
        self.prompt_assembler = prompt_assembler or PromptAssembler()
        self.rejected = 0

    @staticmethod
    def load_rows(dataset_path: Union[Path, str]) -> List[Dict[str, Any]]:
        """
        Load a JSONL code completion dataset.

        Args:
            dataset_path: File with one ``{"prompt": ..., "metadata": {"line_no": ...}}`` object per line.

        Returns:
            Rows in file order.

        Raises:
            DatasetLoadError: If the file is missing or cannot be parsed.
        """
        dataset_path = Path(dataset_path)
        if not dataset_path.exists():
            raise DatasetLoadError(f"Dataset can't be found: {dataset_path.absolute()}")

        logger.info(f"Loading dataset from {dataset_path}...")
        try:
            ds = load_dataset("json", data_files=str(dataset_path), split="train")
        except Exception as e:
            logger.error(f"Failed to load dataset: {e}")
            raise DatasetLoadError(f"Unable to load dataset {dataset_path}") from e

        return [dict(row) for row in ds]

    def prepare_prompts(self, dataset_path: Union[Path, str]) -> List[str]:
        """
        Load the dataset and turn every usable row into a fill-in-middle prompt.

        When the file cannot be loaded as a whole (a malformed line, or rows
        with mixed field types), it is read again line by line so that only
        the bad rows are dropped. ``rejected`` holds the number of dropped rows.

        Returns:
            List of prepared prompts; rejected rows are dropped.

        Raises:
            DatasetLoadError: If the dataset file is missing or unreadable.
        """
        dataset_path = Path(dataset_path)
        try:
            rows = self.load_rows(dataset_path)
        except DatasetLoadError:
            if not dataset_path.is_file():
                raise
            logger.warning(f"Falling back to line by line parsing of {dataset_path}")
            return self.prepare_prompts_by_line(dataset_path)

        prompts = []
        for row in rows:
            prompt = self.prompt_assembler.assemble(row)
            if prompt is not None:
                prompts.append(prompt)

        self.rejected = len(rows) - len(prompts)
        logger.info(f"Prepared {len(prompts)} prompts from {len(rows)} dataset rows "
                    f"({self.rejected} rejected).")
        return prompts

    def prepare_prompts_by_line(self, dataset_path: Union[Path, str]) -> List[str]:
        """Assemble a prompt from each non-blank JSONL line, dropping lines that fail."""
        try:
            with open(dataset_path, "r", encoding="utf-8") as f:
                lines = [line for line in f.read().split("\n") if line.strip()]
        except (OSError, UnicodeDecodeError) as e:
            raise DatasetLoadError(f"Unable to read dataset {dataset_path}") from e

        prompts = []
        for line in lines:
            prompt = self.prompt_assembler.assemble_json(line)
            if prompt is not None:
                prompts.append(prompt)

        self.rejected = len(lines) - len(prompts)
        logger.info(f"Prepared {len(prompts)} prompts from {len(lines)} dataset lines "
                    f"({self.rejected} rejected).")
        return prompts

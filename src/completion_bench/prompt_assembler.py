"""Builds fill-in-middle prompts from code completion dataset rows."""
import json
import logging
from typing import Any, Mapping, Optional

from .constants import FimTokens
from .exceptions import PromptAssemblyError


# Configure logging
logger = logging.getLogger(__name__)


class PromptAssembler:
    """Turns a dataset row into a prompt with fill-in-middle sentinel tokens.

    A row looks like ``{"prompt": "<source text>", "metadata": {"line_no": 3}}``.
    The suffix marker is placed on its own line in front of line ``line_no``
    (1-based), so the model is asked to fill in the code at that position.
    """

    @staticmethod
    def insert_line(original: str, text_to_insert: str, line_number: int) -> str:
        """
        Insert a line of text before the given 1-based line.

        Args:
            original: Text split on newlines; trailing empty lines are kept.
            text_to_insert: Content of the inserted line.
            line_number: Position of the new line. ``line_count + 1`` appends it.

        Returns:
            The text with the inserted line.

        Raises:
            PromptAssemblyError: If the line number is outside ``1..line_count + 1``.
        """
        lines = original.split("\n")

        if line_number < 1 or line_number > len(lines) + 1:
            raise PromptAssemblyError(
                f"Invalid line number {line_number} for text with {len(lines)} lines"
            )

        lines.insert(line_number - 1, text_to_insert)
        return "\n".join(lines)

    def assemble(self, row: Mapping[str, Any]) -> Optional[str]:
        """
        Build the prompt for one dataset row.

        Args:
            row: Mapping with a ``prompt`` string and ``metadata.line_no`` integer.

        Returns:
            The prompt text, or None if the row is malformed.
        """
        try:
            prompt_text = row["prompt"]
            line_no = row["metadata"]["line_no"]
        except (KeyError, TypeError) as e:
            logger.error(f"Dataset row is missing a required field: {e}")
            return None

        if not isinstance(prompt_text, str) or isinstance(line_no, bool) or not isinstance(line_no, int):
            logger.error(f"Dataset row has unexpected field types: prompt={type(prompt_text).__name__}, "
                         f"line_no={type(line_no).__name__}")
            return None

        try:
            body = self.insert_line(prompt_text, FimTokens.SUFFIX, line_no)
        except PromptAssemblyError as e:
            logger.error(f"Failed to assemble prompt: {e}")
            return None

        return FimTokens.FILE_SEPARATOR + "\n" + FimTokens.PREFIX + body + FimTokens.MIDDLE

    def assemble_json(self, line: str) -> Optional[str]:
        """Build the prompt for one JSONL line, or None if it cannot be parsed."""
        try:
            row = json.loads(line)
        except json.JSONDecodeError:
            logger.error(f"Failed to parse json line: {line[:200]}")
            return None
        if not isinstance(row, dict):
            logger.error(f"Json line is not an object: {line[:200]}")
            return None
        return self.assemble(row)

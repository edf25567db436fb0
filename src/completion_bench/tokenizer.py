"""Encodes prompt text into token ids with a Hugging Face tokenizer file."""
import logging
from pathlib import Path
from typing import Iterable, List, Union

from transformers import PreTrainedTokenizerFast

from .exceptions import ConfigurationError
from .models import TokenizedPrompt


# Configure logging
logger = logging.getLogger(__name__)


class PromptTokenizer:
    """Wraps a ``tokenizer.json`` file."""

    def __init__(self, tokenizer_path: Union[Path, str]):
        tokenizer_path = Path(tokenizer_path)
        if not tokenizer_path.is_file():
            raise ConfigurationError(f"tokenizer can't be found: {tokenizer_path.absolute()}",
                                     config_key="tokenizer_path")
        logger.info(f"Loading tokenizer from {tokenizer_path}")
        self._tokenizer = PreTrainedTokenizerFast(tokenizer_file=str(tokenizer_path))

    def encode(self, text: str) -> TokenizedPrompt:
        """
        Tokenize one prompt.

        Raises:
            ValueError: If the text produces no tokens.
        """
        # The sentinel tokens are already part of the text
        token_ids = self._tokenizer.encode(text, add_special_tokens=False)
        return TokenizedPrompt(tokens=tuple(token_ids), text=text)

    def encode_all(self, texts: Iterable[str]) -> List[TokenizedPrompt]:
        """Tokenize prompts, dropping those that encode to nothing."""
        prompts = []
        for text in texts:
            try:
                prompts.append(self.encode(text))
            except ValueError:
                logger.warning("Skipping prompt that produced no tokens")
        logger.info(f"Tokenized {len(prompts)} prompts")
        return prompts

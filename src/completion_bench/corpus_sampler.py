"""Deterministic shuffling and truncation of the prompt corpus."""
import logging
import random
from typing import List, Optional, Sequence, TypeVar

from .constants import BenchmarkConstants


# Configure logging
logger = logging.getLogger(__name__)

T = TypeVar("T")


class CorpusSampler:
    """Shuffles a corpus with a fixed seed and optionally keeps a prefix of it."""

    def __init__(self, seed: int = BenchmarkConstants.SEED):
        self.seed = seed

    def sample(self, items: Sequence[T], limit: Optional[int] = None) -> List[T]:
        """
        Return a shuffled copy of ``items``, truncated to ``limit`` entries.

        Every call shuffles with a fresh generator seeded with ``self.seed``, so
        the same input always yields the same order and smaller limits are
        prefixes of larger ones.

        Args:
            items: Corpus in its original order. Left untouched.
            limit: Number of items to keep, or None for all of them.

        Returns:
            The shuffled (and truncated) list.

        Raises:
            ValueError: If ``limit`` is negative or larger than the corpus.
        """
        if limit is not None and (limit < 0 or limit > len(items)):
            raise ValueError(f"Sample limit {limit} is out of range for corpus of {len(items)} items")

        shuffled = list(items)
        rng = random.Random(self.seed)
        rng.shuffle(shuffled)

        if limit is not None:
            shuffled = shuffled[:limit]

        logger.info(f"Sampled {len(shuffled)} of {len(items)} prompts (seed={self.seed})")
        return shuffled

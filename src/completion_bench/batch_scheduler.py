"""Splits the prompt list into batches for the worker pool."""
from typing import List, Sequence, TypeVar

T = TypeVar("T")


class BatchScheduler:
    """Partitions prompts into contiguous batches."""

    @staticmethod
    def partition(items: Sequence[T], threads: int, balanced: bool = False) -> List[List[T]]:
        """
        Split ``items`` into consecutive batches.

        By default the batch size is ``len(items) // threads`` (at least 1) and the
        remainder forms trailing batches of its own, so there may be more batches
        than threads. Those extra batches wait for a free worker.

        With ``balanced=True`` exactly ``min(threads, len(items))`` batches are
        produced and their sizes differ by at most one.

        Args:
            items: Prompts in submission order.
            threads: Worker count, at least 1.
            balanced: Select the balanced policy.

        Returns:
            Batches whose concatenation equals ``items``.

        Raises:
            ValueError: If ``threads`` is less than 1.
        """
        if threads < 1:
            raise ValueError(f"Thread count must be at least 1, got {threads}")

        items = list(items)
        if balanced:
            return BatchScheduler._partition_balanced(items, threads)

        size = max(1, len(items) // threads)
        return [items[start:start + size] for start in range(0, len(items), size)]

    @staticmethod
    def _partition_balanced(items: List[T], threads: int) -> List[List[T]]:
        count = min(threads, len(items))
        if count == 0:
            return []
        base, extra = divmod(len(items), count)
        batches = []
        start = 0
        for index in range(count):
            end = start + base + (1 if index < extra else 0)
            batches.append(items[start:end])
            start = end
        return batches

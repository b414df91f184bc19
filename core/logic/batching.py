"""
Bounded-size batch partitioning.

Exports:
    chunked: Split a sequence into contiguous chunks of at most `size` items
    chunk_count: Number of chunks chunked() will produce
"""

from typing import List, Sequence, TypeVar

T = TypeVar('T')


def chunk_count(total: int, size: int) -> int:
    """ceil(total / size)."""
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}")
    return (total + size - 1) // size


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """
    Partition items into contiguous chunks of at most `size`.

    Order is preserved, nothing is dropped or duplicated, and only the last
    chunk may be shorter than `size`. An empty input yields no chunks.

    Example:
        chunked([1, 2, 3, 4, 5], 2) -> [[1, 2], [3, 4], [5]]
    """
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]

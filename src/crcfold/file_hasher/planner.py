"""Split a byte count into contiguous chunk ranges."""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ChunkRange:
    """Inclusive byte range ``[start, end]`` assigned to one chunk job."""

    index: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


def plan_chunks(size: int, max_chunks: int) -> List[ChunkRange]:
    """Divide ``size`` bytes into at most ``max_chunks`` ranges.

    Every chunk except possibly the last has ``ceil(size / max_chunks)``
    bytes. The ranges are ascending, gapless, non-overlapping and cover
    ``[0, size - 1]``; an empty file yields no ranges.

    Args:
        size: Total number of bytes
        max_chunks: Upper bound on the number of ranges

    Returns:
        Ranges ordered by index (equal to byte order)

    Raises:
        ValueError: If ``size`` is negative or ``max_chunks`` is below 1
    """
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    if max_chunks < 1:
        raise ValueError(f"max_chunks must be at least 1, got {max_chunks}")

    if size == 0:
        return []

    chunk_size = -(-size // max_chunks)
    chunk_count = -(-size // chunk_size)

    return [
        ChunkRange(
            index=i,
            start=i * chunk_size,
            end=min(size - 1, (i + 1) * chunk_size - 1),
        )
        for i in range(chunk_count)
    ]

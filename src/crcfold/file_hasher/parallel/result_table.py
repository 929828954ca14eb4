"""Index-keyed collection of chunk results.

Workers finish in any order; results are stored by chunk index and read
back in index order, so the fold never depends on completion order.
"""

import logging
import threading
from typing import Dict, List

from crcfold.combine import ChunkResult

logger = logging.getLogger(__name__)


class ResultTable:
    """Thread-safe mapping of chunk index to ChunkResult.

    Each index in ``[0, chunk_count)`` may be written exactly once.
    """

    def __init__(self, chunk_count: int):
        """Initialize an empty table.

        Args:
            chunk_count: Number of chunks expected
        """
        if chunk_count < 0:
            raise ValueError(f"chunk_count must be non-negative, got {chunk_count}")
        self.chunk_count = chunk_count
        self._results: Dict[int, ChunkResult] = {}
        self._lock = threading.Lock()

    def put(self, index: int, result: ChunkResult) -> None:
        """Record the result for one chunk.

        Raises:
            ValueError: If the index is out of range or already written
        """
        if not 0 <= index < self.chunk_count:
            raise ValueError(f"Chunk index {index} out of range [0, {self.chunk_count})")

        with self._lock:
            if index in self._results:
                raise ValueError(f"Chunk {index} already has a result")
            self._results[index] = result
            filled = len(self._results)

        logger.debug(f"Stored chunk result: {{'index': {index}, 'filled': {filled}, 'total': {self.chunk_count}}}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def is_complete(self) -> bool:
        """Whether every chunk index holds a result."""
        return len(self) == self.chunk_count

    def ordered(self) -> List[ChunkResult]:
        """Return results in chunk index order.

        Raises:
            ValueError: If any chunk is still missing
        """
        with self._lock:
            missing = [i for i in range(self.chunk_count) if i not in self._results]
            if missing:
                raise ValueError(f"Result table incomplete, missing chunks: {missing}")
            return [self._results[i] for i in range(self.chunk_count)]

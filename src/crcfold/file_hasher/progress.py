"""Progress tracking for chunked hashing.

Logs chunk completions with byte throughput.
"""

import logging
import time

logger = logging.getLogger(__name__)


class ChunkProgress:
    """Tracks completed chunks and bytes for one file.

    Features:
    - Chunks and bytes completed
    - Throughput (MB/s) since start
    - Per-chunk DEBUG log line, final INFO summary
    """

    def __init__(self, total_chunks: int, total_bytes: int):
        """Initialize progress tracker.

        Args:
            total_chunks: Number of chunks dispatched
            total_bytes: Size of the file in bytes
        """
        self.total_chunks = total_chunks
        self.total_bytes = total_bytes

        self.chunks_done = 0
        self.bytes_done = 0
        self.start_time = time.monotonic()

    def record(self, chunk_index: int, length: int) -> None:
        """Record one finished chunk.

        Args:
            chunk_index: Index of the chunk that finished
            length: Number of bytes in that chunk
        """
        self.chunks_done += 1
        self.bytes_done += length

        progress = self.get_progress()
        logger.debug(
            f"Chunk {chunk_index} done: {self.chunks_done}/{self.total_chunks} "
            f"({progress['percentage']:.1f}%) - {progress['rate_mb_per_sec']:.1f} MB/s"
        )

    def get_progress(self) -> dict:
        """Get current progress statistics.

        Returns:
            Dict with progress metrics
        """
        elapsed = time.monotonic() - self.start_time
        rate = self.bytes_done / elapsed / (1024 * 1024) if elapsed > 0 else 0.0

        if self.total_bytes > 0:
            percentage = (self.bytes_done / self.total_bytes) * 100
        else:
            percentage = 100.0

        return {
            "total_chunks": self.total_chunks,
            "chunks_done": self.chunks_done,
            "total_bytes": self.total_bytes,
            "bytes_done": self.bytes_done,
            "percentage": percentage,
            "elapsed_seconds": elapsed,
            "rate_mb_per_sec": rate,
        }

    def log_final_summary(self) -> None:
        """Log final progress summary."""
        progress = self.get_progress()
        logger.info(
            f"Hashed {self.bytes_done} bytes in {self.chunks_done} chunk(s) "
            f"in {progress['elapsed_seconds']:.2f}s "
            f"({progress['rate_mb_per_sec']:.1f} MB/s)"
        )

"""Parallel whole-file CRC64 orchestrator.

Coordinates the chunked hashing pipeline:
- Chunk planning (one range per worker slot)
- Bounded thread or process pool running one job per chunk
- Index-keyed result collection
- Sequential fold of the ordered results
"""

import logging
import stat
from concurrent.futures import (
    FIRST_COMPLETED,
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    wait,
)
from concurrent.futures.process import BrokenProcessPool
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from crcfold.combine import ChunkResult, fold_ordered
from crcfold.common import LogContext, auto_detect_workers
from crcfold.common.checksums import CRC64_BLOCK_SIZE, CRC64_XZ, Crc64Parameters, format_crc64_hex
from .errors import (
    ChunkReadError,
    ChunkTimeoutError,
    StatError,
    WorkerDispatchError,
    classify_error,
)
from .parallel import ResultTable, hash_chunk
from .planner import ChunkRange, plan_chunks
from .progress import ChunkProgress

logger = logging.getLogger(__name__)

RangeHasher = Callable[[Path, ChunkRange, Crc64Parameters, int], ChunkResult]

EXECUTOR_TYPES = ("thread", "process")


@dataclass(frozen=True)
class FileChecksum:
    """Final CRC64 of a file."""

    path: str
    crc64: int
    size: int
    chunk_count: int

    @property
    def decimal(self) -> str:
        return str(self.crc64)

    @property
    def hex(self) -> str:
        return format_crc64_hex(self.crc64)


def stat_file_size(file_path: Path) -> int:
    """Return the size of a regular file.

    Raises:
        StatError: If the file is missing, unreadable or not a regular file
    """
    try:
        st = file_path.stat()
    except OSError as e:
        raise StatError(
            f"Cannot stat {file_path}: {e}",
            file_path=str(file_path),
            cause=repr(e),
        ) from e

    if not stat.S_ISREG(st.st_mode):
        raise StatError(f"Not a regular file: {file_path}", file_path=str(file_path))

    return st.st_size


class ParallelHasher:
    """Computes whole-file CRC64 by hashing chunks concurrently.

    Architecture:
    - Chunk count = min(max_concurrency, ceil(size / chunk_size))
    - Pool size = number of chunks (never more than max_concurrency)
    - Results keyed by chunk index, folded left to right once complete
    - First failing chunk cancels the jobs not yet started and fails the call
    """

    def __init__(
        self,
        max_concurrency: Optional[int] = None,
        executor: str = "thread",
        params: Crc64Parameters = CRC64_XZ,
        block_size: int = CRC64_BLOCK_SIZE,
        chunk_timeout: Optional[float] = None,
        range_hasher: RangeHasher = hash_chunk,
    ):
        """Initialize parallel hasher.

        Args:
            max_concurrency: Chunk cap and worker cap (default: CPU based, 3..16)
            executor: "thread" or "process"
            params: CRC64 variant
            block_size: Bytes per read inside a chunk job
            chunk_timeout: Seconds to wait for the next chunk to finish (None waits forever)
            range_hasher: Chunk job callable; must be picklable for process pools
        """
        if executor not in EXECUTOR_TYPES:
            raise ValueError(f"executor must be one of {EXECUTOR_TYPES}, got {executor!r}")

        if max_concurrency is None:
            max_concurrency = auto_detect_workers()
        self.max_concurrency = max_concurrency
        if self.max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {self.max_concurrency}")

        self.executor = executor
        self.params = params
        self.block_size = block_size
        self.chunk_timeout = chunk_timeout
        self.range_hasher = range_hasher

        logger.debug(
            f"Initialized ParallelHasher: {{'max_concurrency': {self.max_concurrency}, "
            f"'executor': {executor!r}, 'algorithm': {params.name!r}}}"
        )

    def hash_file(self, file_path: Union[str, Path]) -> FileChecksum:
        """Compute the CRC64 of a file.

        Args:
            file_path: File to hash

        Returns:
            FileChecksum of the whole file

        Raises:
            StatError: If the file size cannot be determined
            ChunkReadError: If any chunk fails (including dispatch and timeout)
        """
        file_path = Path(file_path)
        size = stat_file_size(file_path)
        chunks = plan_chunks(size, self.max_concurrency)

        if not chunks:
            logger.info(f"Empty file, using CRC64 of zero bytes: {{'path': {str(file_path)!r}}}")
            return FileChecksum(
                path=str(file_path),
                crc64=self.params.empty_value,
                size=0,
                chunk_count=0,
            )

        with LogContext(logger, file_path=str(file_path), chunk_count=len(chunks)):
            logger.info(
                f"Hashing file: {{'path': {str(file_path)!r}, 'size': {size}, "
                f"'chunks': {len(chunks)}, 'chunk_size': {chunks[0].length}}}"
            )
            try:
                table = self._run_chunks(file_path, chunks, size)
            except ChunkReadError as e:
                logger.error(
                    f"Hashing failed: {{'path': {str(file_path)!r}, "
                    f"'category': {classify_error(e)!r}, 'error': {e.message!r}}}"
                )
                raise

            crc = fold_ordered(table.ordered(), self.params)

        result = FileChecksum(path=str(file_path), crc64=crc, size=size, chunk_count=len(chunks))
        logger.info(f"Hashed file: {{'path': {str(file_path)!r}, 'crc64': {result.hex!r}}}")
        return result

    def _create_executor(self, workers: int) -> Executor:
        if self.executor == "process":
            return ProcessPoolExecutor(max_workers=workers)
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="crc64-chunk")

    def _run_chunks(self, file_path: Path, chunks: List[ChunkRange], size: int) -> ResultTable:
        """Fan chunks out to the pool and collect every result by index."""
        table = ResultTable(len(chunks))
        progress = ChunkProgress(total_chunks=len(chunks), total_bytes=size)
        workers = min(self.max_concurrency, len(chunks))
        pool = self._create_executor(workers)
        futures: Dict[Future, ChunkRange] = {}
        failed = False

        try:
            for chunk in chunks:
                futures[self._submit(pool, file_path, chunk)] = chunk

            pending = set(futures)
            while pending:
                done, pending = wait(pending, timeout=self.chunk_timeout, return_when=FIRST_COMPLETED)
                if not done:
                    raise ChunkTimeoutError(
                        f"No chunk of {file_path} finished within {self.chunk_timeout}s",
                        file_path=str(file_path),
                        pending_chunks=sorted(futures[f].index for f in pending),
                    )

                for future in done:
                    chunk = futures[future]
                    result = self._collect(future, file_path, chunk)
                    table.put(chunk.index, result)
                    progress.record(chunk.index, result.length)

        except BaseException:
            failed = True
            cancelled = sum(1 for f in futures if f.cancel())
            logger.debug(f"Cancelled pending chunk jobs: {{'count': {cancelled}}}")
            raise

        finally:
            # In-flight jobs of a failed run are abandoned, their results discarded
            pool.shutdown(wait=not failed, cancel_futures=failed)

        progress.log_final_summary()
        return table

    def _submit(self, pool: Executor, file_path: Path, chunk: ChunkRange) -> Future:
        try:
            return pool.submit(self.range_hasher, file_path, chunk, self.params, self.block_size)
        except RuntimeError as e:
            # Covers thread start failures and broken process pools
            raise WorkerDispatchError(
                f"Could not dispatch chunk {chunk.index} of {file_path}: {e}",
                file_path=str(file_path),
                chunk_index=chunk.index,
                start=chunk.start,
                end=chunk.end,
                cause=repr(e),
            ) from e

    def _collect(self, future: Future, file_path: Path, chunk: ChunkRange) -> ChunkResult:
        try:
            return future.result()
        except ChunkReadError:
            raise
        except BrokenProcessPool as e:
            raise WorkerDispatchError(
                f"Worker process died while hashing chunk {chunk.index} of {file_path}",
                file_path=str(file_path),
                chunk_index=chunk.index,
                start=chunk.start,
                end=chunk.end,
                cause=repr(e),
            ) from e
        except (OSError, EOFError) as e:
            raise ChunkReadError(
                f"Failed to read bytes {chunk.start}-{chunk.end} of {file_path}: {e}",
                file_path=str(file_path),
                chunk_index=chunk.index,
                start=chunk.start,
                end=chunk.end,
                cause=repr(e),
            ) from e


def hash_file(
    file_path: Union[str, Path],
    max_concurrency: Optional[int] = None,
    **kwargs,
) -> FileChecksum:
    """Compute the CRC64 of a file with a one-off ParallelHasher.

    Args:
        file_path: File to hash
        max_concurrency: Chunk and worker cap (default: CPU based)
        **kwargs: Further ParallelHasher options

    Returns:
        FileChecksum with decimal and hex renderings
    """
    return ParallelHasher(max_concurrency=max_concurrency, **kwargs).hash_file(file_path)

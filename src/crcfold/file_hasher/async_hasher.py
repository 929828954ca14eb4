"""Asyncio variant of the whole-file CRC64 orchestrator.

Chunks are read with ``aiofiles`` on the event loop's thread pool; at most
``max_concurrency`` chunk tasks hold a slot at once. The contract matches
``ParallelHasher.hash_file``: results are keyed by chunk index and the first
failure cancels every other task.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

import aiofiles

from crcfold.combine import ChunkResult, fold_ordered
from crcfold.common import auto_detect_workers
from crcfold.common.checksums import CRC64_BLOCK_SIZE, CRC64_XZ, Crc64Parameters, get_crc64_function
from .errors import ChunkReadError
from .parallel import ResultTable
from .parallel_hasher import FileChecksum, stat_file_size
from .planner import ChunkRange, plan_chunks
from .progress import ChunkProgress

logger = logging.getLogger(__name__)


async def hash_chunk_async(
    file_path: Path,
    chunk: ChunkRange,
    params: Crc64Parameters = CRC64_XZ,
    block_size: int = CRC64_BLOCK_SIZE,
) -> ChunkResult:
    """Compute the CRC64 of one chunk using non-blocking reads.

    Raises:
        ChunkReadError: If the range cannot be read completely
    """
    crc_fun = get_crc64_function(params)
    crc = params.empty_value
    remaining = chunk.length

    try:
        async with aiofiles.open(file_path, 'rb') as f:
            await f.seek(chunk.start)
            while remaining > 0:
                block = await f.read(min(block_size, remaining))
                if not block:
                    raise EOFError(f"File ended {remaining} bytes before offset {chunk.end}")
                crc = crc_fun(block, crc)
                remaining -= len(block)
    except (OSError, EOFError) as e:
        raise ChunkReadError(
            f"Failed to read bytes {chunk.start}-{chunk.end} of {file_path}: {e}",
            file_path=str(file_path),
            chunk_index=chunk.index,
            start=chunk.start,
            end=chunk.end,
            cause=repr(e),
        ) from e

    return ChunkResult(hash=crc, length=chunk.length)


async def hash_file_async(
    file_path: Union[str, Path],
    max_concurrency: Optional[int] = None,
    params: Crc64Parameters = CRC64_XZ,
    block_size: int = CRC64_BLOCK_SIZE,
) -> FileChecksum:
    """Compute the CRC64 of a file with concurrent asyncio chunk tasks.

    Args:
        file_path: File to hash
        max_concurrency: Chunk cap and concurrent task cap (default: CPU based)
        params: CRC64 variant
        block_size: Bytes per read call

    Returns:
        FileChecksum of the whole file

    Raises:
        StatError: If the file size cannot be determined
        ChunkReadError: If any chunk fails
    """
    file_path = Path(file_path)
    if max_concurrency is None:
        max_concurrency = auto_detect_workers()
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

    size = stat_file_size(file_path)
    chunks = plan_chunks(size, max_concurrency)
    if not chunks:
        return FileChecksum(path=str(file_path), crc64=params.empty_value, size=0, chunk_count=0)

    logger.info(
        f"Hashing file (async): {{'path': {str(file_path)!r}, 'size': {size}, 'chunks': {len(chunks)}}}"
    )

    table = ResultTable(len(chunks))
    progress = ChunkProgress(total_chunks=len(chunks), total_bytes=size)
    slots = asyncio.Semaphore(min(max_concurrency, len(chunks)))

    async def run(chunk: ChunkRange) -> None:
        async with slots:
            result = await hash_chunk_async(file_path, chunk, params, block_size)
        table.put(chunk.index, result)
        progress.record(chunk.index, result.length)

    tasks = [asyncio.create_task(run(chunk)) for chunk in chunks]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Let cancelled tasks unwind before reporting the failure
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    progress.log_final_summary()
    crc = fold_ordered(table.ordered(), params)
    return FileChecksum(path=str(file_path), crc64=crc, size=size, chunk_count=len(chunks))

"""Chunk job executed by pool workers.

One job opens the file on its own, checksums one byte range and returns a
ChunkResult. The function is module-level so process pools can pickle it.
"""

import logging
from pathlib import Path

from crcfold.combine import ChunkResult
from crcfold.common.checksums import CRC64_BLOCK_SIZE, CRC64_XZ, Crc64Parameters, compute_crc64_range
from ..errors import ChunkReadError
from ..planner import ChunkRange

logger = logging.getLogger(__name__)


def hash_chunk(
    file_path: Path,
    chunk: ChunkRange,
    params: Crc64Parameters = CRC64_XZ,
    block_size: int = CRC64_BLOCK_SIZE,
) -> ChunkResult:
    """Compute the CRC64 of one chunk of a file.

    Args:
        file_path: File to read
        chunk: Byte range to checksum
        params: CRC64 variant
        block_size: Bytes per read call

    Returns:
        ChunkResult with the range's CRC64 and length

    Raises:
        ChunkReadError: If the range cannot be read completely
    """
    logger.debug(f"Hashing chunk: {{'index': {chunk.index}, 'start': {chunk.start}, 'end': {chunk.end}}}")

    try:
        crc = compute_crc64_range(file_path, chunk.start, chunk.end, params, block_size)
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

"""Left-to-right reduction of ordered per-chunk checksums."""

from dataclasses import dataclass
from typing import Sequence

from crcfold.common.checksums import CRC64_XZ, Crc64Parameters
from .crc64 import crc64_combine


@dataclass(frozen=True)
class ChunkResult:
    """CRC64 of one contiguous byte range and the range's length."""

    hash: int
    length: int


def fold_ordered(results: Sequence[ChunkResult], params: Crc64Parameters = CRC64_XZ) -> int:
    """Fold chunk results into the CRC64 of their concatenation.

    ``results`` must be in byte order of the ranges they were computed from,
    not in the order the computations finished.

    Args:
        results: Per-chunk results, first range first
        params: CRC64 variant all results were computed with

    Returns:
        CRC64 of the whole sequence

    Raises:
        ValueError: If ``results`` is empty
    """
    if not results:
        raise ValueError("Cannot fold an empty result sequence")

    accumulator = results[0].hash
    for result in results[1:]:
        accumulator = crc64_combine(accumulator, result.hash, result.length, params)
    return accumulator

"""Checksum combine operators usable without any file I/O.

Typical use is merging checksums of independently stored pieces, e.g. the
parts of a multipart upload, into the checksum of the assembled object.
"""

from .adler32 import adler32_combine
from .crc64 import crc64_combine, crc64_combine_raw
from .fold import ChunkResult, fold_ordered
from .gf2 import gf2_matrix_square, gf2_matrix_times, zeros_operator

__all__ = [
    'adler32_combine',
    'crc64_combine',
    'crc64_combine_raw',
    'ChunkResult',
    'fold_ordered',
    'gf2_matrix_square',
    'gf2_matrix_times',
    'zeros_operator',
]

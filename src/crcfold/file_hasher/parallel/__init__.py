"""Parallel processing components for chunked hashing.

This package contains the fan-out/fan-in pieces:
- Worker: hashes one byte range per job
- Result table: collects results by chunk index
"""

from .result_table import ResultTable
from .worker import hash_chunk

__all__ = [
    "ResultTable",
    "hash_chunk",
]

"""Chunked, parallel whole-file CRC64 hashing."""

from .async_hasher import hash_file_async
from .config import FileHasherConfig, HasherConfig
from .errors import (
    HashingError,
    StatError,
    ChunkReadError,
    WorkerDispatchError,
    ChunkTimeoutError,
)
from .parallel_hasher import FileChecksum, ParallelHasher, hash_file
from .planner import ChunkRange, plan_chunks

__version__ = "0.1.0"

__all__ = [
    'ParallelHasher',
    'FileChecksum',
    'hash_file',
    'hash_file_async',
    'ChunkRange',
    'plan_chunks',
    'FileHasherConfig',
    'HasherConfig',
    'HashingError',
    'StatError',
    'ChunkReadError',
    'WorkerDispatchError',
    'ChunkTimeoutError',
]

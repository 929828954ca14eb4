"""Error classes for chunked file hashing."""

from crcfold.common import FileAccessError


class HashingError(FileAccessError):
    """Base error for whole-file hashing operations."""
    pass


class StatError(HashingError):
    """File size could not be determined (missing file, permission denied)."""
    pass


class ChunkReadError(HashingError):
    """A worker could not read or checksum its assigned byte range."""
    pass


class WorkerDispatchError(ChunkReadError):
    """The executor could not start a chunk job."""
    pass


class ChunkTimeoutError(ChunkReadError):
    """No chunk job completed within the configured timeout."""
    pass


def classify_error(exception: Exception) -> str:
    """
    Classify an exception into an error category.

    Args:
        exception: The exception to classify

    Returns:
        Error category string: 'stat', 'dispatch', 'timeout', 'read',
        'permission', 'io', or 'unknown'
    """
    if isinstance(exception, StatError):
        return 'stat'
    elif isinstance(exception, WorkerDispatchError):
        return 'dispatch'
    elif isinstance(exception, ChunkTimeoutError):
        return 'timeout'
    elif isinstance(exception, ChunkReadError):
        return 'read'
    elif isinstance(exception, PermissionError):
        return 'permission'
    elif isinstance(exception, (OSError, EOFError)):
        return 'io'
    else:
        return 'unknown'

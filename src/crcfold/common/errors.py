"""Base error definitions for crcfold packages."""

from typing import Any, Dict


class CrcFoldError(Exception):
    """Base exception for all crcfold errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class FileAccessError(CrcFoldError):
    """Base exception for errors touching the file being hashed."""
    pass

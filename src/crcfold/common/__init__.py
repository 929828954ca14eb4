"""Common utilities for crcfold packages."""

from .config import ConfigLoader
from .config_utils import auto_detect_workers, expand_path_variables
from .logging import setup_logging, get_logger, LogContext
from .logging_config import LoggingConfig
from .errors import CrcFoldError, FileAccessError
from .checksums import (
    Crc64Parameters,
    CRC64_XZ,
    CRC64_ECMA_182,
    CRC64_WE,
    CRC64_GO_ISO,
    get_crc64_parameters,
    crc64_bytes,
    compute_crc64,
    compute_crc64_hex,
    compute_crc64_range,
    format_crc64_hex,
)

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'auto_detect_workers',
    'expand_path_variables',
    'setup_logging',
    'get_logger',
    'LogContext',
    'CrcFoldError',
    'FileAccessError',
    'Crc64Parameters',
    'CRC64_XZ',
    'CRC64_ECMA_182',
    'CRC64_WE',
    'CRC64_GO_ISO',
    'get_crc64_parameters',
    'crc64_bytes',
    'compute_crc64',
    'compute_crc64_hex',
    'compute_crc64_range',
    'format_crc64_hex',
]

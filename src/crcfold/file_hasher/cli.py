"""CLI command for chunked CRC64 file hashing."""

import logging
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import FileHasherConfig
from .errors import HashingError
from .parallel_hasher import ParallelHasher
from crcfold.common import ConfigLoader, expand_path_variables, get_crc64_parameters, setup_logging

# Application name derived from package name
_package = __package__ or "crcfold.file_hasher"
APP_NAME = _package.replace('_', '-').replace('.', '-')


def hash_command(
    config: FileHasherConfig,
    paths: List[Path],
    max_concurrency_override: Optional[int] = None,
    executor_override: Optional[str] = None,
    algorithm_override: Optional[str] = None,
) -> int:
    """Hash each file and print its CRC64 in decimal and hex.

    Args:
        config: Configuration object
        paths: Files to hash
        max_concurrency_override: Optional override for max concurrency
        executor_override: Optional override for executor type
        algorithm_override: Optional override for CRC64 variant

    Returns:
        Exit code (0 if every file was hashed)
    """
    # Use __package__ to avoid __main__ when run as module
    logger_name = __package__ or __name__
    logger = logging.getLogger(logger_name)

    max_concurrency = max_concurrency_override if max_concurrency_override is not None else config.hasher.max_concurrency
    executor = executor_override or config.hasher.executor
    algorithm = algorithm_override or config.hasher.algorithm

    try:
        params = get_crc64_parameters(algorithm)
        hasher = ParallelHasher(
            max_concurrency=max_concurrency,
            executor=executor,
            params=params,
            block_size=config.hasher.block_size,
            chunk_timeout=config.hasher.chunk_timeout,
        )
    except (KeyError, ValueError) as e:
        logger.error(f"Invalid hasher settings: {e}")
        return 1

    failed = 0
    for path in paths:
        try:
            result = hasher.hash_file(path)
        except HashingError as e:
            logger.error(f"Failed to hash {path}: {{'error': {e.message!r}, 'context': {e.context}}}")
            failed += 1
            continue

        print(f"{result.path}")
        print(f"  crc64 (dec): {result.decimal}")
        print(f"  crc64 (hex): 0x{result.hex}")

    if failed:
        logger.error(f"Hashing finished with errors: {{'failed': {failed}, 'total': {len(paths)}}}")
    return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the hash command."""
    parser = argparse.ArgumentParser(
        description="Compute the CRC64 of files by hashing chunks in parallel"
    )
    parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        help="Files to hash"
    )
    parser.add_argument(
        "--max-concurrency",
        type=int,
        required=False,
        help="Maximum number of chunks and concurrent workers (overrides config)"
    )
    parser.add_argument(
        "--executor",
        choices=["thread", "process"],
        required=False,
        help="Run chunk jobs on threads or processes (overrides config)"
    )
    parser.add_argument(
        "--algorithm",
        required=False,
        help="CRC64 variant, e.g. crc-64-xz (overrides config)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (TOML)"
    )

    args = parser.parse_args(argv)

    loader = ConfigLoader(
        app_name=APP_NAME,
        config_class=FileHasherConfig
    )

    try:
        config = loader.load(defaults_path=args.config)
    except Exception as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return 1

    log_file = Path(expand_path_variables(config.logging.file, APP_NAME)) if config.logging.file else None
    setup_logging(
        level=config.logging.level,
        format=config.logging.format,
        log_file=log_file,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
    )

    return hash_command(
        config=config,
        paths=args.paths,
        max_concurrency_override=args.max_concurrency,
        executor_override=args.executor,
        algorithm_override=args.algorithm,
    )


if __name__ == "__main__":
    sys.exit(main())

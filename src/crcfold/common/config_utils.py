"""Configuration utilities."""

import os
import tempfile
import platformdirs
from pathlib import Path

# Worker bounds for chunked hashing
MIN_WORKERS = 3
MAX_WORKERS = 16


def expand_path_variables(path: str, app_name: str | None = None) -> str:
    """Expand ${VAR} variables in paths.

    Supported variables:
        ${USER_HOME}: User's home directory
        ${USER_CONFIG}: User config directory
        ${USER_CACHE}: User cache directory
        ${USER_LOGS}: User log directory
        ${TEMP}: Temporary directory

    Args:
        path: Path string with variables
        app_name: Application name used for the platformdirs lookups

    Returns:
        Expanded path string
    """
    if not isinstance(path, str):
        return path

    replacements = {
        "${USER_HOME}": str(Path.home()),
        "${USER_CONFIG}": platformdirs.user_config_dir(app_name, appauthor=False),
        "${USER_CACHE}": platformdirs.user_cache_dir(app_name, appauthor=False),
        "${USER_LOGS}": platformdirs.user_log_dir(app_name, appauthor=False),
        "${TEMP}": tempfile.gettempdir(),
    }

    for var, value in replacements.items():
        path = path.replace(var, value)

    return path


def get_cpu_count() -> int:
    """Get number of CPU cores, with fallback."""
    return os.cpu_count() or MIN_WORKERS


def auto_detect_workers(
    multiplier: float = 1.0,
    min_workers: int = MIN_WORKERS,
    max_workers: int = MAX_WORKERS,
) -> int:
    """Auto-detect number of chunk workers.

    Args:
        multiplier: Multiplier for CPU count (e.g., 0.5 for half cores)
        min_workers: Minimum number of workers
        max_workers: Maximum number of workers

    Returns:
        Number of workers, clamped to [min_workers, max_workers]
    """
    cpu_count = get_cpu_count()
    workers = max(min_workers, int(cpu_count * multiplier))
    return min(max_workers, workers)

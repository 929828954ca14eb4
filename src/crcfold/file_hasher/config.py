"""Configuration models for the chunked file hasher."""

from typing import Literal
from pydantic import BaseModel, Field, ConfigDict, field_validator

from crcfold.common import LoggingConfig, auto_detect_workers
from crcfold.common.checksums import CRC64_BLOCK_SIZE, CRC64_VARIANTS


class HasherConfig(BaseModel):
    """Chunked hashing performance configuration."""

    model_config = ConfigDict(extra='forbid')

    max_concurrency: int = Field(
        default_factory=auto_detect_workers,
        ge=1,
        description="Maximum number of chunks, and of concurrent chunk jobs (default: CPU cores, 3..16)"
    )
    executor: Literal["thread", "process"] = Field(
        default="thread",
        description="Run chunk jobs on a thread pool or a process pool"
    )
    block_size: int = Field(
        default=CRC64_BLOCK_SIZE,
        ge=1,
        description="Bytes read per I/O call inside a chunk job"
    )
    chunk_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Fail if no chunk job completes within this many seconds"
    )
    algorithm: str = Field(
        default="crc-64-xz",
        description="CRC64 variant name"
    )

    @field_validator('algorithm', mode='before')
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """Accept known CRC64 variant names case-insensitively."""
        if isinstance(v, str):
            v = v.lower()
            if v not in CRC64_VARIANTS:
                known = ", ".join(sorted(CRC64_VARIANTS))
                raise ValueError(f"Unknown CRC64 variant {v!r} (known: {known})")
        return v


class FileHasherConfig(BaseModel):
    """Root configuration for the file hasher."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    hasher: HasherConfig = Field(default_factory=HasherConfig)

"""Parallel CRC64 file hashing with checksum combination over GF(2)."""

__version__ = "0.1.0"

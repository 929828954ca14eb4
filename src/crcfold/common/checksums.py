"""CRC64 primitives for buffers, byte ranges and whole files.

The actual CRC64 register arithmetic is delegated to ``crcmod``. This module
only pins down the parameter sets and the byte-range streaming contract that
the combine layer relies on.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional

import crcmod

# Constants for checksum calculation
CRC64_BLOCK_SIZE = 65536  # 64 KB reads
CRC64_MASK = 0xFFFFFFFFFFFFFFFF


def reflect64(value: int) -> int:
    """Reverse the bit order of a 64-bit value."""
    result = 0
    for _ in range(64):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


@dataclass(frozen=True)
class Crc64Parameters:
    """Algorithm constants of a CRC64 variant.

    Attributes:
        name: Catalogue name of the variant
        poly: Generator polynomial in normal (non-reflected) form, x^64 omitted
        init: Initial shift register value
        xor_out: Value XORed into the register to produce the result
        reflected: Whether input and output bits are reflected
    """

    name: str
    poly: int
    init: int
    xor_out: int
    reflected: bool

    @property
    def combine_poly(self) -> int:
        """Polynomial oriented the way the GF(2) operator matrix expects it."""
        return reflect64(self.poly) if self.reflected else self.poly

    @property
    def empty_value(self) -> int:
        """CRC64 of zero bytes."""
        return self.init ^ self.xor_out


CRC64_XZ = Crc64Parameters(
    name="crc-64-xz",
    poly=0x42F0E1EBA9EA3693,
    init=CRC64_MASK,
    xor_out=CRC64_MASK,
    reflected=True,
)

CRC64_ECMA_182 = Crc64Parameters(
    name="crc-64-ecma-182",
    poly=0x42F0E1EBA9EA3693,
    init=0,
    xor_out=0,
    reflected=False,
)

CRC64_WE = Crc64Parameters(
    name="crc-64-we",
    poly=0x42F0E1EBA9EA3693,
    init=CRC64_MASK,
    xor_out=CRC64_MASK,
    reflected=False,
)

CRC64_GO_ISO = Crc64Parameters(
    name="crc-64-go-iso",
    poly=0x000000000000001B,
    init=CRC64_MASK,
    xor_out=CRC64_MASK,
    reflected=True,
)

CRC64_VARIANTS = {
    params.name: params
    for params in (CRC64_XZ, CRC64_ECMA_182, CRC64_WE, CRC64_GO_ISO)
}


def get_crc64_parameters(name: str) -> Crc64Parameters:
    """Look up a predefined CRC64 variant by name.

    Raises:
        KeyError: If the name is not a known variant
    """
    try:
        return CRC64_VARIANTS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(CRC64_VARIANTS))
        raise KeyError(f"Unknown CRC64 variant {name!r} (known: {known})") from None


@lru_cache(maxsize=None)
def get_crc64_function(params: Crc64Parameters) -> Callable[..., int]:
    """Build (once per variant) the crcmod function for a parameter set.

    crcmod takes the polynomial with its x^64 term and an initial value that
    already has ``xor_out`` folded in, so that ``fn(b"")`` is the CRC of zero
    bytes and ``fn(data, previous)`` continues a running checksum.
    """
    return crcmod.mkCrcFun(
        (1 << 64) | params.poly,
        initCrc=params.init ^ params.xor_out,
        rev=params.reflected,
        xorOut=params.xor_out,
    )


def crc64_bytes(data: bytes, params: Crc64Parameters = CRC64_XZ, crc: Optional[int] = None) -> int:
    """Compute CRC64 of a buffer.

    Args:
        data: Bytes to checksum
        params: CRC64 variant
        crc: Result of a previous call to continue from (None starts fresh)

    Returns:
        CRC64 as unsigned 64-bit integer
    """
    crc_fun = get_crc64_function(params)
    if crc is None:
        return crc_fun(bytes(data))
    return crc_fun(bytes(data), crc)


def compute_crc64_range(
    file_path: Path,
    start: int,
    end: int,
    params: Crc64Parameters = CRC64_XZ,
    block_size: int = CRC64_BLOCK_SIZE,
) -> int:
    """
    Compute CRC64 of the inclusive byte range [start, end] of a file.

    The file is opened read-only for this call alone, so concurrent callers
    working on disjoint ranges never share a file object.

    Args:
        file_path: Path to the file
        start: Offset of the first byte
        end: Offset of the last byte (inclusive)
        params: CRC64 variant
        block_size: Size of each read

    Returns:
        CRC64 of the range as unsigned 64-bit integer

    Raises:
        OSError: If the file cannot be opened or read
        EOFError: If the file ends before ``end``
    """
    if start < 0 or end < start:
        raise ValueError(f"Invalid byte range [{start}, {end}]")

    crc_fun = get_crc64_function(params)
    crc = params.empty_value
    remaining = end - start + 1

    with open(file_path, 'rb') as f:
        f.seek(start)
        while remaining > 0:
            block = f.read(min(block_size, remaining))
            if not block:
                raise EOFError(
                    f"File ended {remaining} bytes before offset {end}: {file_path}"
                )
            crc = crc_fun(block, crc)
            remaining -= len(block)

    return crc


def compute_crc64(file_path: Path, params: Crc64Parameters = CRC64_XZ) -> int:
    """
    Compute CRC64 of an entire file in a single sequential pass.

    Args:
        file_path: Path to the file
        params: CRC64 variant

    Returns:
        CRC64 checksum as unsigned 64-bit integer

    Raises:
        OSError: If file cannot be read
    """
    crc_fun = get_crc64_function(params)
    crc = params.empty_value

    with open(file_path, 'rb') as f:
        while chunk := f.read(CRC64_BLOCK_SIZE):
            crc = crc_fun(chunk, crc)

    return crc


def compute_crc64_hex(file_path: Path, params: Crc64Parameters = CRC64_XZ) -> str:
    """
    Compute CRC64 of an entire file as hex string.

    Returns:
        CRC64 checksum as 16-character hex string (e.g., "995dc9bbdf1939fa")

    Raises:
        OSError: If file cannot be read
    """
    return format_crc64_hex(compute_crc64(file_path, params))


def format_crc64_hex(crc: int) -> str:
    """Format a CRC64 value as 16 lowercase hex digits."""
    return f"{crc:016x}"

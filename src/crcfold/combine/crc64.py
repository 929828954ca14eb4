"""Combine operator for CRC64 checksums of adjacent byte ranges.

Let AB be the concatenation of byte strings A and B. Then::

    crc64(AB) == crc64_combine(crc64(A), crc64(B), len(B))

The operator feeds ``len(B)`` zero bytes through the register holding
``crc64(A)`` using binary exponentiation of the one-zero-bit operator, then
XORs in ``crc64(B)``. The approach follows zlib's ``crc32_combine``.
"""

from crcfold.common.checksums import CRC64_MASK, CRC64_XZ, Crc64Parameters
from .gf2 import GF2_DIM, gf2_matrix_square, gf2_matrix_times, zeros_operator


def _check_crc(name: str, value: int) -> None:
    if not 0 <= value <= CRC64_MASK:
        raise ValueError(f"{name} is not an unsigned 64-bit value: {value!r}")


def crc64_combine_raw(
    poly: int,
    init: int,
    reflected: bool,
    xor_out: int,
    crc1: int,
    crc2: int,
    len2: int,
) -> int:
    """Combine two CRC64 values given explicit algorithm constants.

    Args:
        poly: Polynomial in register orientation (bit-reversed if reflected)
        init: Initial register value of the algorithm
        reflected: Whether the algorithm reflects input/output bits
        xor_out: Final XOR value of the algorithm
        crc1: CRC64 of the first range
        crc2: CRC64 of the second range
        len2: Length of the second range in bytes

    Returns:
        CRC64 of the concatenated ranges

    Raises:
        ValueError: If ``len2`` is negative or a CRC is out of range
    """
    if len2 < 0:
        raise ValueError(f"len2 must be non-negative, got {len2}")
    _check_crc("crc1", crc1)
    _check_crc("crc2", crc2)

    if len2 == 0:
        return crc1

    # Strip the init/xor boundary terms so only the linear part is advanced
    crc1 ^= init ^ xor_out

    odd = zeros_operator(poly, reflected)
    even = [0] * GF2_DIM

    gf2_matrix_square(even, odd)  # two zero bits
    gf2_matrix_square(odd, even)  # four zero bits

    # The first square in the loop yields the one-zero-byte operator, each
    # later one doubles the byte count
    while True:
        gf2_matrix_square(even, odd)
        if len2 & 1:
            crc1 = gf2_matrix_times(even, crc1)
        len2 >>= 1
        if len2 == 0:
            break
        odd, even = even, odd

    return crc1 ^ crc2


def crc64_combine(crc1: int, crc2: int, len2: int, params: Crc64Parameters = CRC64_XZ) -> int:
    """Combine CRC64 values of two adjacent ranges into the CRC64 of both.

    Both checksums must have been computed with ``params``; mixing variants
    yields a wrong value without any error.
    """
    return crc64_combine_raw(
        params.combine_poly,
        params.init,
        params.reflected,
        params.xor_out,
        crc1,
        crc2,
        len2,
    )

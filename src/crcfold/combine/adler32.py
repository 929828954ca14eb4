"""Combine operator for Adler-32 checksums (zlib ``adler32_combine``)."""

ADLER32_MOD = 65521


def adler32_combine(adler1: int, adler2: int, len2: int) -> int:
    """Combine Adler-32 values of two adjacent byte strings.

    ``zlib.adler32(a + b) == adler32_combine(zlib.adler32(a), zlib.adler32(b), len(b))``

    Raises:
        ValueError: If ``len2`` is negative
    """
    if len2 < 0:
        raise ValueError(f"len2 must be non-negative, got {len2}")

    rem = len2 % ADLER32_MOD
    sum1 = adler1 & 0xFFFF
    sum2 = (rem * sum1) % ADLER32_MOD
    sum1 += (adler2 & 0xFFFF) + ADLER32_MOD - 1
    sum2 += ((adler1 >> 16) & 0xFFFF) + ((adler2 >> 16) & 0xFFFF) + ADLER32_MOD - rem

    if sum1 >= ADLER32_MOD:
        sum1 -= ADLER32_MOD
    if sum1 >= ADLER32_MOD:
        sum1 -= ADLER32_MOD
    if sum2 >= ADLER32_MOD << 1:
        sum2 -= ADLER32_MOD << 1
    if sum2 >= ADLER32_MOD:
        sum2 -= ADLER32_MOD

    return sum1 | (sum2 << 16)

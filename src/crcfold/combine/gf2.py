"""Bit-matrix arithmetic over GF(2) for 64-bit CRC registers.

A 64x64 matrix is a list of 64 integers; entry ``n`` is the image of the
register bit ``n`` (the matrix column, stored as a row word). Addition is
XOR, so multiplying by a vector XORs together the words selected by the
vector's set bits.
"""

from typing import List

GF2_DIM = 64

Matrix = List[int]


def gf2_matrix_times(mat: Matrix, vec: int) -> int:
    """Multiply ``mat`` by the bit vector ``vec``, scanning from the low bit."""
    total = 0
    index = 0
    while vec:
        if vec & 1:
            total ^= mat[index]
        vec >>= 1
        index += 1
    return total


def gf2_matrix_square(square: Matrix, mat: Matrix) -> None:
    """Store ``mat * mat`` into ``square`` (in place)."""
    for n in range(GF2_DIM):
        square[n] = gf2_matrix_times(mat, mat[n])


def zeros_operator(poly: int, reflected: bool) -> Matrix:
    """Build the operator that feeds one zero bit through the CRC register.

    Args:
        poly: Polynomial in the register's orientation (bit-reversed for
            reflected CRCs)
        reflected: True when the register shifts right

    Returns:
        64-entry operator matrix
    """
    mat = [0] * GF2_DIM
    if reflected:
        # Bit 0 falls off the low end and feeds back the polynomial
        mat[0] = poly
        row = 1
        for n in range(1, GF2_DIM):
            mat[n] = row
            row <<= 1
    else:
        row = 2
        for n in range(GF2_DIM - 1):
            mat[n] = row
            row <<= 1
        mat[GF2_DIM - 1] = poly
    return mat

"""Tests for GF(2) bit-matrix primitives."""

import random

from crcfold.combine.gf2 import GF2_DIM, gf2_matrix_square, gf2_matrix_times, zeros_operator
from crcfold.common.checksums import CRC64_ECMA_182, CRC64_MASK, CRC64_XZ

IDENTITY = [1 << n for n in range(GF2_DIM)]


def shift_zero_bit_reflected(register, poly):
    """Reference: feed one zero bit through a right-shifting register."""
    return (register >> 1) ^ poly if register & 1 else register >> 1


def shift_zero_bit_normal(register, poly):
    """Reference: feed one zero bit through a left-shifting register."""
    if register & (1 << 63):
        return ((register << 1) & CRC64_MASK) ^ poly
    return register << 1


class TestMatrixTimes:
    """Tests for gf2_matrix_times."""

    def test_identity(self):
        """Test that the identity matrix returns the vector."""
        rng = random.Random(7)
        for _ in range(20):
            vec = rng.getrandbits(64)
            assert gf2_matrix_times(IDENTITY, vec) == vec

    def test_zero_vector(self):
        """Test that the zero vector maps to zero."""
        assert gf2_matrix_times(IDENTITY, 0) == 0

    def test_selects_rows_by_bits(self):
        """Test that set bits select and XOR rows."""
        mat = [0] * GF2_DIM
        mat[0] = 0b0011
        mat[2] = 0b0110

        assert gf2_matrix_times(mat, 0b101) == 0b0101


class TestMatrixSquare:
    """Tests for gf2_matrix_square."""

    def test_identity_squared(self):
        """Test that the identity squared is the identity."""
        square = [0] * GF2_DIM
        gf2_matrix_square(square, IDENTITY)
        assert square == IDENTITY

    def test_square_applies_twice(self):
        """Test that M^2 v == M (M v)."""
        rng = random.Random(11)
        mat = [rng.getrandbits(64) for _ in range(GF2_DIM)]
        square = [0] * GF2_DIM
        gf2_matrix_square(square, mat)

        for _ in range(10):
            vec = rng.getrandbits(64)
            assert gf2_matrix_times(square, vec) == gf2_matrix_times(mat, gf2_matrix_times(mat, vec))


class TestZerosOperator:
    """Tests for zeros_operator."""

    def test_reflected_matches_register_shift(self):
        """Test the reflected operator against a bitwise register step."""
        poly = CRC64_XZ.combine_poly
        op = zeros_operator(poly, reflected=True)
        rng = random.Random(3)
        for _ in range(20):
            reg = rng.getrandbits(64)
            assert gf2_matrix_times(op, reg) == shift_zero_bit_reflected(reg, poly)

    def test_normal_matches_register_shift(self):
        """Test the non-reflected operator against a bitwise register step."""
        poly = CRC64_ECMA_182.combine_poly
        op = zeros_operator(poly, reflected=False)
        rng = random.Random(5)
        for _ in range(20):
            reg = rng.getrandbits(64)
            assert gf2_matrix_times(op, reg) == shift_zero_bit_normal(reg, poly)

    def test_layout(self):
        """Test where the polynomial row sits for each orientation."""
        reflected = zeros_operator(0xABC, reflected=True)
        normal = zeros_operator(0xABC, reflected=False)

        assert reflected[0] == 0xABC
        assert reflected[1] == 1
        assert normal[GF2_DIM - 1] == 0xABC
        assert normal[0] == 2

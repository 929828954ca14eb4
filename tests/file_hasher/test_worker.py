"""Tests for the chunk worker job."""

import pytest

from crcfold.common.checksums import CRC64_ECMA_182, crc64_bytes
from crcfold.file_hasher.errors import ChunkReadError
from crcfold.file_hasher.parallel import hash_chunk
from crcfold.file_hasher.planner import ChunkRange


class TestHashChunk:
    """Tests for hash_chunk."""

    def test_hash_chunk(self, tmp_path):
        """Test a chunk result carries the range CRC and length."""
        data = b"0123456789abcdef"
        test_file = tmp_path / "data.bin"
        test_file.write_bytes(data)

        result = hash_chunk(test_file, ChunkRange(index=1, start=4, end=11))

        assert result.hash == crc64_bytes(data[4:12])
        assert result.length == 8

    def test_variant_and_block_size(self, tmp_path):
        """Test that parameters are passed through."""
        data = b"123456789"
        test_file = tmp_path / "check.txt"
        test_file.write_bytes(data)

        result = hash_chunk(test_file, ChunkRange(0, 0, 8), CRC64_ECMA_182, 2)

        assert result.hash == 0x6C40DF5F0B497347

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ChunkReadError with the range."""
        with pytest.raises(ChunkReadError) as exc_info:
            hash_chunk(tmp_path / "gone.bin", ChunkRange(index=2, start=20, end=29))

        assert exc_info.value.context["chunk_index"] == 2
        assert exc_info.value.context["start"] == 20
        assert exc_info.value.context["end"] == 29
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_truncated_file(self, tmp_path):
        """Test that a file shorter than the range raises ChunkReadError."""
        test_file = tmp_path / "short.bin"
        test_file.write_bytes(b"abc")

        with pytest.raises(ChunkReadError):
            hash_chunk(test_file, ChunkRange(index=0, start=0, end=9))

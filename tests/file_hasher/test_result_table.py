"""Tests for the index-keyed result table."""

import random
import threading

import pytest

from crcfold.combine import ChunkResult, fold_ordered
from crcfold.common.checksums import crc64_bytes
from crcfold.file_hasher.parallel import ResultTable


def make_results(data, pieces):
    """Checksum data split into equal pieces."""
    size = -(-len(data) // pieces)
    return [
        ChunkResult(hash=crc64_bytes(data[i:i + size]), length=len(data[i:i + size]))
        for i in range(0, len(data), size)
    ]


class TestResultTable:
    """Tests for ResultTable."""

    def test_ordered_by_index(self):
        """Test that results come back in index order."""
        table = ResultTable(3)
        table.put(2, ChunkResult(hash=3, length=1))
        table.put(0, ChunkResult(hash=1, length=1))
        table.put(1, ChunkResult(hash=2, length=1))

        assert [r.hash for r in table.ordered()] == [1, 2, 3]
        assert table.is_complete()

    def test_incomplete_table(self):
        """Test that reading an incomplete table fails."""
        table = ResultTable(2)
        table.put(0, ChunkResult(hash=1, length=1))

        assert not table.is_complete()
        with pytest.raises(ValueError, match="missing"):
            table.ordered()

    def test_double_write(self):
        """Test that each index can be written once."""
        table = ResultTable(1)
        table.put(0, ChunkResult(hash=1, length=1))

        with pytest.raises(ValueError):
            table.put(0, ChunkResult(hash=2, length=1))

    def test_index_out_of_range(self):
        """Test that unknown indices are rejected."""
        table = ResultTable(2)

        with pytest.raises(ValueError):
            table.put(2, ChunkResult(hash=1, length=1))
        with pytest.raises(ValueError):
            table.put(-1, ChunkResult(hash=1, length=1))

    @pytest.mark.parametrize("order", ["forward", "reverse", "random"])
    def test_arrival_order_does_not_change_fold(self, order):
        """Test that the folded hash is independent of completion order."""
        data = random.Random(8).randbytes(1000)
        results = make_results(data, 10)
        indices = list(range(len(results)))
        if order == "reverse":
            indices.reverse()
        elif order == "random":
            random.Random(4).shuffle(indices)

        table = ResultTable(len(results))
        for i in indices:
            table.put(i, results[i])

        assert fold_ordered(table.ordered()) == crc64_bytes(data)

    def test_concurrent_writers(self):
        """Test writes from many threads."""
        table = ResultTable(64)
        barrier = threading.Barrier(8)

        def writer(offset):
            barrier.wait()
            for i in range(offset, 64, 8):
                table.put(i, ChunkResult(hash=i, length=1))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert [r.hash for r in table.ordered()] == list(range(64))

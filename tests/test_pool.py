"""Unit tests for ScratchPool.

Tests cover:
- Bucket sizing (power-of-two rounding, minimum bucket)
- Recycling (released buffers serve later requests of equal or smaller size)
- Scoped acquisition (borrow releases on normal and exceptional exit)
- Release validation (kind, container type, dtype, dimensionality, double release)
- Stats and clear()
"""

from __future__ import annotations

import numpy as np
import pytest

from strcompare.errors import PoolError
from strcompare.pool import MIN_BUCKET, ScratchPool, default_pool


class TestBucketSizing:
    """Numeric buffers are at least as long as requested, rounded to a bucket."""

    @pytest.mark.parametrize(
        ("capacity", "expected"),
        [(0, 16), (1, 16), (16, 16), (17, 32), (100, 128), (128, 128)],
    )
    def test_length_is_power_of_two_bucket(
        self, pool: ScratchPool, capacity: int, expected: int
    ) -> None:
        buffer = pool.acquire("int64", capacity)
        assert len(buffer) == expected
        assert len(buffer) >= capacity

    @pytest.mark.parametrize("kind", ["int32", "int64", "uint16", "float64"])
    def test_numeric_kinds_have_matching_dtype(self, pool: ScratchPool, kind: str) -> None:
        buffer = pool.acquire(kind, 4)
        assert isinstance(buffer, np.ndarray)
        assert buffer.dtype == np.dtype(kind)
        assert buffer.ndim == 1

    def test_hash_kinds_are_empty_containers(self, pool: ScratchPool) -> None:
        assert pool.acquire("set", 10) == set()
        assert pool.acquire("map", 10) == {}

    def test_negative_capacity_raises(self, pool: ScratchPool) -> None:
        with pytest.raises(PoolError, match="capacity"):
            pool.acquire("int64", -1)

    def test_unknown_kind_raises(self, pool: ScratchPool) -> None:
        with pytest.raises(PoolError, match="unknown buffer kind"):
            pool.acquire("complex128", 4)


class TestRecycling:
    """Released buffers are handed out again instead of allocating."""

    def test_released_buffer_is_reused(self, pool: ScratchPool) -> None:
        first = pool.acquire("int64", 10)
        pool.release("int64", first, 10)
        second = pool.acquire("int64", 5)
        assert second is first
        assert pool.stats().reused == 1

    def test_larger_bucket_serves_smaller_request(self, pool: ScratchPool) -> None:
        big = pool.acquire("int32", 100)
        pool.release("int32", big, 100)
        assert pool.acquire("int32", 3) is big

    def test_smaller_bucket_never_serves_larger_request(self, pool: ScratchPool) -> None:
        small = pool.acquire("int32", 3)
        pool.release("int32", small, 3)
        bigger = pool.acquire("int32", 100)
        assert bigger is not small
        assert len(bigger) >= 100

    def test_smallest_fitting_bucket_preferred(self, pool: ScratchPool) -> None:
        large = pool.acquire("float64", 200)
        medium = pool.acquire("float64", 40)
        pool.release("float64", large, 200)
        pool.release("float64", medium, 40)
        assert pool.acquire("float64", 20) is medium

    def test_kinds_do_not_share_free_lists(self, pool: ScratchPool) -> None:
        row = pool.acquire("int32", 8)
        pool.release("int32", row, 8)
        other = pool.acquire("int64", 8)
        assert other is not row
        assert other.dtype == np.int64

    def test_released_set_comes_back_empty(self, pool: ScratchPool) -> None:
        container = pool.acquire("set", 3)
        container.update({"a", "b"})
        pool.release("set", container, 3)
        again = pool.acquire("set", 1)
        assert again is container
        assert again == set()

    def test_acquire_many_returns_distinct_buffers(self, pool: ScratchPool) -> None:
        buffers = pool.acquire_many("int64", [4, 4, 4])
        assert len({id(b) for b in buffers}) == 3


class TestBorrow:
    """borrow() hands back every buffer on every exit path."""

    def test_yields_one_buffer_per_capacity(self, pool: ScratchPool) -> None:
        with pool.borrow("int64", 5, 40) as (first, second):
            assert len(first) >= 5
            assert len(second) >= 40
        assert pool.stats().free == 2

    def test_releases_on_exception(self, pool: ScratchPool) -> None:
        with pytest.raises(RuntimeError, match="boom"):
            with pool.borrow("uint16", 4, 4):
                raise RuntimeError("boom")
        stats = pool.stats()
        assert stats.released == 2
        assert stats.free == 2

    def test_second_borrow_reuses_first(self, pool: ScratchPool) -> None:
        with pool.borrow("int32", 10) as (row,):
            first_id = id(row)
        with pool.borrow("int32", 10) as (row,):
            assert id(row) == first_id
        assert pool.stats().allocated == 1


class TestReleaseValidation:
    """release() rejects buffers that do not fit the declared kind."""

    def test_wrong_dtype(self, pool: ScratchPool) -> None:
        with pytest.raises(PoolError, match="dtype"):
            pool.release("int64", np.empty(16, dtype=np.float64), 4)

    def test_two_dimensional_array(self, pool: ScratchPool) -> None:
        with pytest.raises(PoolError, match="1-D"):
            pool.release("int64", np.empty((4, 4), dtype=np.int64), 4)

    def test_not_an_array(self, pool: ScratchPool) -> None:
        with pytest.raises(PoolError):
            pool.release("int64", [0] * 16, 4)

    def test_used_size_beyond_length(self, pool: ScratchPool) -> None:
        buffer = pool.acquire("int64", 4)
        with pytest.raises(PoolError, match="exceeds"):
            pool.release("int64", buffer, len(buffer) + 1)

    def test_negative_used_size(self, pool: ScratchPool) -> None:
        buffer = pool.acquire("int64", 4)
        with pytest.raises(PoolError, match="used_size"):
            pool.release("int64", buffer, -1)

    def test_undersized_array(self, pool: ScratchPool) -> None:
        with pytest.raises(PoolError, match="minimum bucket"):
            pool.release("int64", np.empty(MIN_BUCKET - 1, dtype=np.int64), 2)

    def test_wrong_container_type(self, pool: ScratchPool) -> None:
        with pytest.raises(PoolError, match="expected a dict"):
            pool.release("map", set(), 0)

    def test_double_release(self, pool: ScratchPool) -> None:
        buffer = pool.acquire("int64", 4)
        pool.release("int64", buffer, 4)
        with pytest.raises(PoolError, match="released twice"):
            pool.release("int64", buffer, 4)

    def test_pool_error_is_value_error(self, pool: ScratchPool) -> None:
        with pytest.raises(ValueError):
            pool.acquire("nope", 1)


class TestLifecycle:
    def test_clear_drops_free_buffers_and_counters(self, pool: ScratchPool) -> None:
        with pool.borrow("int64", 4, 4):
            pass
        pool.clear()
        stats = pool.stats()
        assert (stats.allocated, stats.reused, stats.released, stats.free) == (0, 0, 0, 0)

    def test_default_pool_is_singleton(self) -> None:
        assert default_pool() is default_pool()

    def test_instances_are_isolated(self) -> None:
        first, second = ScratchPool(), ScratchPool()
        buffer = first.acquire("int64", 4)
        first.release("int64", buffer, 4)
        assert second.stats().free == 0
        assert second.acquire("int64", 4) is not buffer

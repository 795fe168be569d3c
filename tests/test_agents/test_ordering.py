"""
Unit tests for Order Resolver.
"""

import itertools
import random

import pytest

from review_combiner.agents.ordering import OrderResolver
from review_combiner.models.review import ReviewRecord


def test_resolve_sorts_by_file_then_position():
    """Test canonical order is (file_order, record_order)."""
    records = [
        ReviewRecord(name="c", file_order=1, record_order=0),
        ReviewRecord(name="b", file_order=0, record_order=1),
        ReviewRecord(name="d", file_order=1, record_order=1),
        ReviewRecord(name="a", file_order=0, record_order=0),
    ]

    ordered = OrderResolver().resolve(records)

    assert [r.name for r in ordered] == ["a", "b", "c", "d"]


def test_resolve_returns_new_list():
    """Test that the input list is left untouched."""
    records = [ReviewRecord(name="b", record_order=1), ReviewRecord(name="a", record_order=0)]
    OrderResolver().resolve(records)
    assert [r.name for r in records] == ["b", "a"]


def test_canonical_order_is_total():
    """Test that distinct records never tie."""
    records = [
        ReviewRecord(name=f"{f}-{r}", file_order=f, record_order=r)
        for f in range(3) for r in range(4)
    ]
    random.Random(7).shuffle(records)

    ordered = OrderResolver().resolve(records)
    keys = [OrderResolver.canonical_key(r) for r in ordered]

    for earlier, later in itertools.combinations(keys, 2):
        assert earlier < later


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Unit tests for review statistics.
"""

import pytest

from review_combiner.agents.statistics import generate_stats
from review_combiner.models.review import ReviewRecord


def test_generate_stats():
    """Test counts and average length."""
    records = [
        ReviewRecord(name="Alice", review="abcd", rating="Recommended"),
        ReviewRecord(name="Alice", review="ab", rating="Not Recommended"),
        ReviewRecord(name="Bob", review="abcdefghi", rating="Recommended"),
    ]

    assert generate_stats(records) == {
        "totalReviews": 3,
        "uniqueReviewers": 2,
        "recommendations": 2,
        "notRecommended": 1,
        "averageReviewLength": 5,
    }


def test_average_length_rounds_half_up():
    """Test an average of 2.5 characters reports 3."""
    records = [ReviewRecord(name="a", review="ab"), ReviewRecord(name="b", review="abc")]
    assert generate_stats(records)["averageReviewLength"] == 3


def test_non_string_ratings_are_not_counted():
    """Test odd rating values are ignored instead of crashing."""
    records = [
        ReviewRecord(name="a", rating=["Recommended"]),
        ReviewRecord(name="b", rating={"x": 1}),
        ReviewRecord(name="c", rating="Recommended"),
    ]
    stats = generate_stats(records)
    assert stats["recommendations"] == 1
    assert stats["notRecommended"] == 0


def test_generate_stats_empty():
    """Test an empty record set doesn't divide by zero."""
    stats = generate_stats([])
    assert stats["totalReviews"] == 0
    assert stats["averageReviewLength"] == 0


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Unit tests for Record Loader.
"""

import json
import os
import tempfile

import pytest

from review_combiner.agents.loading import RecordLoader, parse_batch_range
from review_combiner.models.review import BatchRange


def write_file(directory, name, content):
    with open(os.path.join(directory, name), "w", encoding="utf-8") as f:
        f.write(content if isinstance(content, str) else json.dumps(content))


def test_parse_batch_range():
    """Test range parsing from batch filenames."""
    assert parse_batch_range("facebook-reviews-001-010-1718000000000.json") == BatchRange(1, 10)
    assert parse_batch_range("facebook-reviews-011-015-remaining-1718000000000.json") == BatchRange(11, 15)
    assert parse_batch_range("file-001-010.json") == BatchRange(1, 10)


def test_parse_batch_range_defaults_to_zero():
    """Test that names without a range sort first."""
    assert parse_batch_range("reviews.json") == BatchRange(0, 0)
    assert parse_batch_range("facebook-reviews-latest.json") == BatchRange(0, 0)


def test_list_batch_files_in_canonical_order():
    """Test files sort numerically by start range, not alphabetically."""
    with tempfile.TemporaryDirectory() as tmpdir:
        for name in ["r-100-110-5.json", "r-011-020-3.json", "r-9-10-9.json", "manual.json", "notes.txt"]:
            write_file(tmpdir, name, [])

        files = RecordLoader().list_batch_files(tmpdir)

        assert files == ["manual.json", "r-9-10-9.json", "r-011-020-3.json", "r-100-110-5.json"]


def test_load_arrays_and_single_objects():
    """Test both file shapes load with order metadata."""
    with tempfile.TemporaryDirectory() as tmpdir:
        write_file(tmpdir, "facebook-reviews-011-012-2.json", [
            {"name": "Bob", "review": "Fine", "rating": "Recommended"},
            {"name": "Carol", "review": "Bad", "rating": "Not Recommended", "date": "2 days ago"},
        ])
        write_file(tmpdir, "facebook-reviews-001-001-1.json", {"name": "Alice", "review": "Great"})

        result = RecordLoader().load(tmpdir)

        assert [r.name for r in result.records] == ["Alice", "Bob", "Carol"]
        assert [(r.file_order, r.record_order) for r in result.records] == [(0, 0), (1, 0), (1, 1)]
        assert result.records[0].source_file == "facebook-reviews-001-001-1.json"
        assert result.records[2].date == "2 days ago"
        assert result.combined_files == [
            "facebook-reviews-001-001-1.json",
            "facebook-reviews-011-012-2.json",
        ]


def test_malformed_file_is_skipped():
    """Test that a broken file doesn't stop the others from loading."""
    with tempfile.TemporaryDirectory() as tmpdir:
        write_file(tmpdir, "broken.json", "[{\"name\": \"Oops\",")
        write_file(tmpdir, "facebook-reviews-001-001-1.json", [{"name": "Alice", "review": "Great"}])

        result = RecordLoader().load(tmpdir)

        assert [r.name for r in result.records] == ["Alice"]
        assert result.skipped_files == ["broken.json"]
        assert result.combined_files == ["facebook-reviews-001-001-1.json"]


def test_missing_review_text_becomes_empty():
    """Test records without review text load with an empty string."""
    with tempfile.TemporaryDirectory() as tmpdir:
        write_file(tmpdir, "a.json", [{"name": "Alice"}, {"name": "Bob", "review": None}])

        result = RecordLoader().load(tmpdir)

        assert [r.review for r in result.records] == ["", ""]


def test_non_object_entries_are_skipped():
    """Test that stray values inside an array are ignored."""
    with tempfile.TemporaryDirectory() as tmpdir:
        write_file(tmpdir, "a.json", [{"name": "Alice"}, "junk", 42, {"name": "Bob"}])

        result = RecordLoader().load(tmpdir)

        assert [(r.name, r.record_order) for r in result.records] == [("Alice", 0), ("Bob", 3)]


def test_off_schema_values_do_not_stop_the_load():
    """Test wrongly typed fields load next to a valid file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        write_file(tmpdir, "a-001-002.json", [
            {"name": 7, "review": 42, "profile": None, "rating": ["Recommended"], "date": 3, "id": {"x": 1}},
        ])
        write_file(tmpdir, "b-003-004.json", [{"name": "Alice", "review": "Great", "rating": "Recommended"}])

        result = RecordLoader().load(tmpdir)

        odd, good = result.records
        assert (odd.name, odd.review, odd.profile) == ("7", "42", "")
        assert odd.rating is None
        assert odd.date is None
        assert odd.id is None
        assert good.name == "Alice"
        assert result.combined_files == ["a-001-002.json", "b-003-004.json"]


def test_missing_directory_is_fatal():
    """Test that a missing input directory raises."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(FileNotFoundError):
            RecordLoader().load(os.path.join(tmpdir, "missing"))


def test_file_instead_of_directory_is_fatal():
    """Test that a file path raises NotADirectoryError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        write_file(tmpdir, "a.json", [])
        with pytest.raises(NotADirectoryError):
            RecordLoader().load(os.path.join(tmpdir, "a.json"))


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])

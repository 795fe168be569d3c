"""
Review data model.

Represents one scraped review as it moves through the merge pipeline.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional

RECOMMENDED = "Recommended"
NOT_RECOMMENDED = "Not Recommended"


def _as_text(value) -> str:
    """Coerce a scraped value to text; None becomes an empty string."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_optional_text(value) -> Optional[str]:
    """Keep string values only; anything else counts as absent."""
    return value if isinstance(value, str) else None


class BatchRange(NamedTuple):
    """Numeric collection range encoded in a batch filename."""
    start: int
    end: int


@dataclass
class ReviewRecord:
    """
    A single review loaded from a batch file.

    file_order and record_order are ordering keys for the current run only
    and are never written to output.
    """
    name: str  # Reviewer display name, not unique
    profile: str = ""  # Profile URL, may be empty
    review: str = ""  # Review text
    rating: Optional[str] = None  # "Recommended" or "Not Recommended"
    date: Optional[str] = None  # Relative phrase, sentinel, or absent
    id: Optional[str] = None  # Fingerprint, derived when absent
    source_file: str = ""
    file_order: int = 0
    record_order: int = 0
    date_resolved: Optional[str] = None  # YYYY-MM-DD, set by the interpolator

    @classmethod
    def from_dict(
        cls,
        data: dict,
        source_file: str = "",
        file_order: int = 0,
        record_order: int = 0
    ) -> "ReviewRecord":
        """Create ReviewRecord from a raw batch file object."""
        return cls(
            name=_as_text(data.get("name")),
            profile=_as_text(data.get("profile")),
            review=_as_text(data.get("review")),
            rating=_as_optional_text(data.get("rating")),
            date=_as_optional_text(data.get("date")),
            id=_as_optional_text(data.get("id")),
            source_file=source_file,
            file_order=file_order,
            record_order=record_order
        )

    def to_dict(self, include_resolved_date: bool = False) -> dict:
        """Convert to the persisted canonical shape."""
        data = {
            "name": self.name,
            "profile": self.profile,
            "review": self.review,
            "rating": self.rating,
        }
        if self.date is not None:
            data["date"] = self.date
        data["id"] = self.id
        data["sourceFile"] = self.source_file
        if include_resolved_date:
            data["dateResolved"] = self.date_resolved
        return data

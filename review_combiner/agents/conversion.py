"""
Format Converter.

Reshapes canonical records for output, either in the standard shape or
in the Judge.me import shape ("body" instead of "review", 1-5 stars).
"""

import logging
from typing import List, Optional, Union

from review_combiner.models.review import NOT_RECOMMENDED, RECOMMENDED, ReviewRecord

logger = logging.getLogger(__name__)

RATING_STARS = {
    RECOMMENDED: 5,
    NOT_RECOMMENDED: 1,
}


def rating_to_stars(rating: Optional[str]) -> Union[int, str]:
    """Map Recommended -> 5 and Not Recommended -> 1; anything else -> ""."""
    if not isinstance(rating, str):
        return ""
    return RATING_STARS.get(rating, "")


class FormatConverter:
    """
    Converts ReviewRecord objects into output rows.

    Conversion is pure: missing optional fields become empty strings and
    records are never modified.
    """

    def __init__(self, convert: bool = False, interpolated: bool = False):
        """
        Initialize format converter.

        Args:
            convert: If True, produce the Judge.me import shape
            interpolated: If True, an interpolation pass ran and
                date_resolved is the authoritative date
        """
        self.convert = convert
        self.interpolated = interpolated

    @property
    def format_name(self) -> str:
        return "judge-me" if self.convert else "standard"

    def output_date(self, record: ReviewRecord) -> str:
        """Pick the authoritative date: interpolated, then raw, then empty."""
        if self.interpolated and record.date_resolved:
            return record.date_resolved
        return record.date or ""

    def to_output(self, record: ReviewRecord) -> dict:
        """Convert a record into its JSON output object."""
        if not self.convert:
            return record.to_dict(include_resolved_date=self.interpolated)

        return {
            "name": record.name or "",
            "profile": record.profile or "",
            "body": record.review or "",
            "rating": rating_to_stars(record.rating),
            "date": self.output_date(record),
            "id": record.id or "",
        }

    def csv_columns(self) -> List[str]:
        columns = ["Name", "Profile", "Body" if self.convert else "Review", "Rating"]
        if self.interpolated:
            columns.append("Date")
        columns.append("ID")
        return columns

    def csv_row(self, record: ReviewRecord) -> list:
        """Values for csv_columns(), in the same order."""
        rating = rating_to_stars(record.rating) if self.convert else (record.rating or "")
        row = [record.name or "", record.profile or "", record.review or "", rating]
        if self.interpolated:
            row.append(self.output_date(record))
        row.append(record.id or "")
        return row

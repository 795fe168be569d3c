"""
Deduplicator.

Drops repeated reviews that show up in more than one batch file.
"""

import logging
import re
from typing import List, Optional, Set

from review_combiner.models.review import ReviewRecord

logger = logging.getLogger(__name__)

NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def normalize_text(text: Optional[str]) -> str:
    """Strip everything except ASCII letters and digits."""
    return NON_ALPHANUMERIC.sub("", text or "")


def compute_fingerprint(name: Optional[str], review: Optional[str], prefix_length: int = 50) -> str:
    """
    Build the dedup key for a review.

    Args:
        name: Reviewer name
        review: Review text, None treated as empty and other values as str()
        prefix_length: Number of leading characters of the text to use

    Returns:
        "<name>_<normalized text prefix>"
    """
    text = "" if review is None else str(review)
    return f"{name or ''}_{normalize_text(text[:prefix_length])}"


class Deduplicator:
    """
    Keeps the first record seen for each fingerprint.

    The seen set belongs to this instance; create a new one per run.
    """

    def __init__(self, prefix_length: int = 50):
        self.prefix_length = prefix_length
        self.seen: Set[str] = set()
        self.duplicates_skipped = 0

    def fingerprint(self, record: ReviewRecord) -> str:
        return compute_fingerprint(record.name, record.review, self.prefix_length)

    def deduplicate(self, records: List[ReviewRecord]) -> List[ReviewRecord]:
        """
        Filter out records whose fingerprint was already seen.

        Records without an id get their fingerprint as id.

        Args:
            records: Records in load order

        Returns:
            First-seen records, in input order
        """
        survivors = []

        for record in records:
            key = self.fingerprint(record)

            if key in self.seen:
                self.duplicates_skipped += 1
                logger.info(f"Skipping duplicate review from {record.source_file}: {record.name}")
                continue

            self.seen.add(key)
            if not record.id:
                record.id = key
            survivors.append(record)

        logger.info(
            f"Kept {len(survivors)} unique reviews "
            f"({self.duplicates_skipped} duplicates skipped)"
        )
        return survivors

"""
Order Resolver.

Puts surviving records into canonical order: batch file order first,
then position within the file. The first collected review is the most
recent one, so this order is written to output as-is.
"""

import logging
from typing import List, Tuple

from review_combiner.models.review import ReviewRecord

logger = logging.getLogger(__name__)


class OrderResolver:
    """Sorts records by (file_order, record_order)."""

    @staticmethod
    def canonical_key(record: ReviewRecord) -> Tuple[int, int]:
        return (record.file_order, record.record_order)

    def resolve(self, records: List[ReviewRecord]) -> List[ReviewRecord]:
        """
        Return a new list of records in canonical order.

        Args:
            records: Deduplicated records in any order

        Returns:
            Records sorted by file order, then in-file position
        """
        ordered = sorted(records, key=self.canonical_key)
        logger.debug(f"Resolved canonical order for {len(ordered)} records")
        return ordered

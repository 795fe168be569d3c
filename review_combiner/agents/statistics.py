"""
Review statistics for the combined dataset.
"""

import logging
from collections import Counter
from typing import Dict, List

from review_combiner.models.review import NOT_RECOMMENDED, RECOMMENDED, ReviewRecord

logger = logging.getLogger(__name__)


def generate_stats(records: List[ReviewRecord]) -> Dict[str, int]:
    """
    Summarize a record set.

    Args:
        records: Deduplicated records

    Returns:
        Dict with totalReviews, uniqueReviewers, recommendations,
        notRecommended and averageReviewLength
    """
    ratings = Counter(record.rating for record in records if isinstance(record.rating, str))
    total_length = sum(len(record.review or "") for record in records)

    stats = {
        "totalReviews": len(records),
        "uniqueReviewers": len({record.name for record in records}),
        "recommendations": ratings[RECOMMENDED],
        "notRecommended": ratings[NOT_RECOMMENDED],
        # Halves round up
        "averageReviewLength": int(total_length / len(records) + 0.5) if records else 0,
    }

    logger.info(
        f"Stats: {stats['totalReviews']} reviews, {stats['uniqueReviewers']} reviewers, "
        f"{stats['recommendations']} recommended, {stats['notRecommended']} not recommended, "
        f"average length {stats['averageReviewLength']} characters"
    )
    return stats

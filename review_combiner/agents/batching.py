"""
Batch Collector.

Producer side of the pipeline: accumulates scraped review objects and
writes them out as numbered batch files that RecordLoader can read later.

The collector stops on its own once several consecutive offers bring
nothing new (end of the review feed).
"""

import logging
import time
from enum import Enum
from typing import Callable, List, Optional, Set

from review_combiner.agents.deduplication import compute_fingerprint
from review_combiner.utils.storage import StorageManager

logger = logging.getLogger(__name__)


class CollectorState(Enum):
    COLLECTING = "collecting"
    STALLED = "stalled"
    ENDED = "ended"


class BatchCollector:
    """
    Collects unique reviews and writes everything pending as one batch
    file once at least batch_size reviews are pending.

    State machine:
        COLLECTING -> STALLED(n) on an offer with no new reviews
        STALLED(n) -> COLLECTING on an offer with new reviews
        STALLED(n) -> ENDED when n reaches stall_threshold
    """

    def __init__(
        self,
        storage: StorageManager,
        batch_size: int = 10,
        stall_threshold: int = 5,
        prefix: str = "facebook-reviews",
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Initialize batch collector.

        Args:
            storage: Storage manager whose output_dir receives batch files
            batch_size: Number of new reviews per batch file
            stall_threshold: Consecutive empty offers before ending
            prefix: Batch filename prefix
            clock: Returns seconds since the epoch, used for filename timestamps
        """
        if batch_size < 1:
            raise ValueError(f"Invalid batch_size: {batch_size}. Must be >= 1")
        if stall_threshold < 1:
            raise ValueError(f"Invalid stall_threshold: {stall_threshold}. Must be >= 1")

        self.storage = storage
        self.batch_size = batch_size
        self.stall_threshold = stall_threshold
        self.prefix = prefix
        self.clock = clock or time.time

        self.state = CollectorState.COLLECTING
        self.stalled_offers = 0
        self.seen_ids: Set[str] = set()
        self.collected: List[dict] = []
        self.last_download_count = 0
        self.written_files: List[str] = []

    @property
    def pending(self) -> int:
        """Reviews collected but not yet written to a batch file."""
        return len(self.collected) - self.last_download_count

    def offer(self, reviews: List[dict]) -> List[str]:
        """
        Offer freshly scraped reviews to the collector.

        Args:
            reviews: Review objects (name, profile, review, rating, ...)

        Returns:
            Paths of batch files written during this call

        Raises:
            RuntimeError: If the collector has already ended
        """
        if self.state == CollectorState.ENDED:
            raise RuntimeError("BatchCollector has ended; create a new one to collect again")

        new_reviews = []
        for review in reviews:
            review_id = review.get("id") or compute_fingerprint(review.get("name"), review.get("review"))
            if review_id in self.seen_ids:
                logger.debug(f"Skipping already seen review: {review.get('name')}")
                continue
            self.seen_ids.add(review_id)
            new_reviews.append({**review, "id": review_id})

        written = []

        if new_reviews:
            self.collected.extend(new_reviews)
            self.state = CollectorState.COLLECTING
            self.stalled_offers = 0
            logger.info(f"Total unique reviews collected: {len(self.collected)}")
        else:
            self.stalled_offers += 1
            self.state = CollectorState.STALLED
            logger.info(
                f"No new unique reviews ({self.stalled_offers}/{self.stall_threshold})"
            )

        if self.pending >= self.batch_size:
            written.append(self._write_batch(self.pending))

        if self.stalled_offers >= self.stall_threshold:
            logger.info("No new reviews after repeated attempts, ending collection")
            written.extend(self.flush_remaining())
            self.state = CollectorState.ENDED

        return written

    def flush_remaining(self) -> List[str]:
        """Write any collected reviews that haven't been written yet."""
        if self.pending == 0:
            return []
        return [self._write_batch(self.pending, remaining=True)]

    def _write_batch(self, size: int, remaining: bool = False) -> str:
        start = self.last_download_count + 1
        end = self.last_download_count + size
        batch = self.collected[self.last_download_count:end]
        timestamp = int(self.clock() * 1000)

        tail = f"remaining-{timestamp}" if remaining else f"{timestamp}"
        filename = f"{self.prefix}-{start:03d}-{end:03d}-{tail}.json"

        path = self.storage.save_json(batch, filename)
        self.last_download_count = end
        self.written_files.append(path)

        logger.info(f"Batch ready: wrote {len(batch)} reviews ({start}-{end}) to {filename}")
        return path

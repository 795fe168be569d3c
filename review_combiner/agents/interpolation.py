"""
Date Interpolator.

Turns the heterogeneous "date" values scraped from the review feed into
calendar dates, then fills in the gaps between known dates.

Raw values come in three kinds:
- relative phrases such as "3 weeks ago"
- the "Encoded" sentinel (a date was shown but couldn't be read)
- nothing at all

Records are expected in canonical order (newest first). Known dates act
as anchors; records between two anchors are spread evenly across the
interval, records after the last anchor step back one day at a time.

Records before the first anchor are left unresolved under the default
"skip" policy. The "backfill" policy steps back one day at a time from
the first anchor instead.
"""

import logging
import random
import re
from datetime import date, timedelta
from typing import Callable, List, Optional

import pandas as pd

from review_combiner.models.review import ReviewRecord

logger = logging.getLogger(__name__)

RELATIVE_DATE_PATTERN = re.compile(
    r"^\s*(\d+)\s+(day|week|month|year)s?\s+ago\s*$",
    re.IGNORECASE
)

LEADING_GAP_SKIP = "skip"
LEADING_GAP_BACKFILL = "backfill"
LEADING_GAP_POLICIES = (LEADING_GAP_SKIP, LEADING_GAP_BACKFILL)


class DateInterpolator:
    """
    Resolves and interpolates review dates.

    Runs once over a fixed record set. A record that already carries
    date_resolved is treated as an anchor and never overwritten.
    """

    def __init__(
        self,
        today: Optional[Callable[[], date]] = None,
        rng: Optional[random.Random] = None,
        leading_gap_policy: str = LEADING_GAP_SKIP,
        sentinel: str = "Encoded",
        encoded_max_days: int = 7
    ):
        """
        Initialize date interpolator.

        Args:
            today: Zero-arg callable returning the current date
            rng: Random source used to approximate "Encoded" dates
            leading_gap_policy: "skip" leaves records before the first
                anchor unresolved, "backfill" fills them
            sentinel: Raw value meaning "date present but unreadable"
            encoded_max_days: Upper bound of days subtracted for the sentinel
        """
        if leading_gap_policy not in LEADING_GAP_POLICIES:
            raise ValueError(
                f"Invalid leading_gap_policy: {leading_gap_policy}. "
                f"Must be one of {', '.join(LEADING_GAP_POLICIES)}"
            )

        self.today = today or date.today
        self.rng = rng or random.Random()
        self.leading_gap_policy = leading_gap_policy
        self.sentinel = sentinel
        self.encoded_max_days = encoded_max_days

    def resolve_raw_date(self, raw: Optional[str]) -> Optional[date]:
        """
        Convert a raw date value into a calendar date.

        Args:
            raw: Relative phrase, sentinel, or None

        Returns:
            Resolved date, or None if the value isn't recognised
        """
        if not isinstance(raw, str):
            return None

        today = self.today()

        if raw.strip() == self.sentinel:
            # Approximation: the real date is not recoverable from the page
            return today - timedelta(days=self.rng.randint(1, self.encoded_max_days))

        match = RELATIVE_DATE_PATTERN.match(raw)
        if not match:
            return None

        amount = int(match.group(1))
        unit = match.group(2).lower()

        try:
            if unit == "day":
                return today - timedelta(days=amount)
            if unit == "week":
                return today - timedelta(days=7 * amount)

            # Month and year shifts move the calendar field, clamped to month end
            offset = pd.DateOffset(months=amount) if unit == "month" else pd.DateOffset(years=amount)
            return (pd.Timestamp(today) - offset).date()
        except (OverflowError, ValueError):
            # ValueError covers pd.errors.OutOfBoundsDatetime
            logger.warning(f"Date out of range, leaving unresolved: {raw!r}")
            return None

    def interpolate(self, records: List[ReviewRecord]) -> List[ReviewRecord]:
        """
        Fill date_resolved on every record that can be dated.

        Args:
            records: Records in canonical order

        Returns:
            The same list, with date_resolved set
        """
        resolved: List[Optional[date]] = []
        for record in records:
            if record.date_resolved:
                resolved.append(date.fromisoformat(record.date_resolved))
            else:
                resolved.append(self.resolve_raw_date(record.date))

        anchor_count = sum(1 for d in resolved if d is not None)
        unresolved_count = len(resolved) - anchor_count

        if anchor_count < 2:
            logger.info(
                f"Only {anchor_count} date anchors found, "
                f"assigning fallback dates to {unresolved_count} records"
            )
            self._fill_fallback(resolved)
        else:
            logger.info(
                f"Interpolating {unresolved_count} dates between {anchor_count} anchors"
            )
            self._fill_gaps(resolved)

        for record, resolved_date in zip(records, resolved):
            if record.date_resolved is None and resolved_date is not None:
                record.date_resolved = resolved_date.isoformat()

        still_missing = sum(1 for record in records if record.date_resolved is None)
        if still_missing:
            logger.warning(f"{still_missing} records before the first anchor left without a date")

        return records

    def _fill_fallback(self, resolved: List[Optional[date]]) -> None:
        """Give unresolved records today-1, today-2, ... in order."""
        today = self.today()
        step = 0
        for i, value in enumerate(resolved):
            if value is None:
                step += 1
                resolved[i] = today - timedelta(days=step)

    def _fill_gaps(self, resolved: List[Optional[date]]) -> None:
        """Forward pass over resolved dates, filling runs between anchors."""
        last_anchor: Optional[date] = None
        leading_run: List[int] = []
        run: List[int] = []

        for i, value in enumerate(resolved):
            if value is None:
                run.append(i)
                continue

            if last_anchor is None:
                leading_run = run
            elif run:
                days_per_record = (value - last_anchor).days // (len(run) + 1)
                for k, index in enumerate(run, start=1):
                    resolved[index] = last_anchor + timedelta(days=k * days_per_record)

            run = []
            last_anchor = value

        # Trailing run: one day earlier per step after the last anchor
        for k, index in enumerate(run, start=1):
            resolved[index] = last_anchor - timedelta(days=k)

        if leading_run and self.leading_gap_policy == LEADING_GAP_BACKFILL:
            first_anchor = resolved[leading_run[-1] + 1]
            for k, index in enumerate(reversed(leading_run), start=1):
                resolved[index] = first_anchor - timedelta(days=k)

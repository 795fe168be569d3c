"""
Pipeline Orchestrator.

Runs the merge pipeline once over a directory of batch files:
Loader -> Deduplicator -> Order Resolver -> (optional) Date Interpolator
-> Format Converter -> output files.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pandas as pd

from review_combiner.agents.conversion import FormatConverter
from review_combiner.agents.deduplication import Deduplicator
from review_combiner.agents.interpolation import DateInterpolator
from review_combiner.agents.loading import RecordLoader
from review_combiner.agents.ordering import OrderResolver
from review_combiner.agents.statistics import generate_stats
from review_combiner.models.review import ReviewRecord
from review_combiner.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Paths and counts from one pipeline run."""
    json_path: str
    csv_path: str
    total_reviews: int
    duplicates_skipped: int
    combined_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    statistics: Dict[str, int] = field(default_factory=dict)


class PipelineOrchestrator:
    """
    Orchestrates one merge run.

    Every component is created fresh here, so nothing carries over from
    one run to the next.
    """

    def __init__(
        self,
        input_dir: str,
        output_dir: str,
        convert: bool = False,
        interpolate: bool = False,
        interpolator: Optional[DateInterpolator] = None
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            input_dir: Directory holding batch files
            output_dir: Directory for combined output (created if missing)
            convert: Write the Judge.me import shape instead of the standard one
            interpolate: Run the Date Interpolator and include its dates
            interpolator: Preconfigured interpolator (clock, random source, policy)

        Raises:
            FileNotFoundError: If input_dir doesn't exist
            NotADirectoryError: If input_dir isn't a directory
            OSError: If output_dir can't be created
        """
        self.input_dir = str(input_dir)
        self.output_dir = str(output_dir)
        self.convert = convert
        self.interpolate = interpolate

        logger.info("Initializing pipeline components...")

        StorageManager.validate_input_dir(self.input_dir)
        self.storage = StorageManager(self.output_dir)

        self.loader = RecordLoader(extension=settings.BATCH_FILE_EXTENSION)
        self.deduplicator = Deduplicator(prefix_length=settings.FINGERPRINT_PREFIX_LENGTH)
        self.order_resolver = OrderResolver()
        self.interpolator = interpolator or DateInterpolator(
            rng=random.Random(),
            leading_gap_policy=settings.LEADING_GAP_POLICY,
            sentinel=settings.ENCODED_DATE_SENTINEL,
            encoded_max_days=settings.ENCODED_DATE_MAX_DAYS
        )
        self.converter = FormatConverter(convert=convert, interpolated=interpolate)

        logger.info("Pipeline initialized successfully")

    @property
    def output_name(self) -> str:
        return settings.CONVERTED_OUTPUT_NAME if self.convert else settings.STANDARD_OUTPUT_NAME

    def run(self) -> PipelineResult:
        """
        Run the complete pipeline and write the output files.

        Returns:
            PipelineResult with output paths and counts
        """
        logger.info(f"Starting review combination from {self.input_dir}")

        # STAGE 1: Load
        loaded = self.loader.load(self.input_dir)

        # STAGE 2: Deduplicate
        unique = self.deduplicator.deduplicate(loaded.records)

        # STAGE 3: Canonical order
        records = self.order_resolver.resolve(unique)

        # STAGE 4: Dates
        if self.interpolate:
            records = self.interpolator.interpolate(records)

        stats = generate_stats(records)

        # STAGE 5: Output
        document = self.build_document(records, loaded.combined_files, stats)
        frame = self.build_frame(records)

        json_path = self.storage.save_json(document, f"{self.output_name}.json")
        csv_path = self.storage.save_csv(frame, f"{self.output_name}.csv")

        logger.info(
            f"Combined {len(records)} unique reviews from "
            f"{len(loaded.combined_files)} files into {json_path} and {csv_path}"
        )

        return PipelineResult(
            json_path=json_path,
            csv_path=csv_path,
            total_reviews=len(records),
            duplicates_skipped=self.deduplicator.duplicates_skipped,
            combined_files=loaded.combined_files,
            skipped_files=loaded.skipped_files,
            statistics=stats
        )

    def build_document(
        self,
        records: List[ReviewRecord],
        combined_files: List[str],
        stats: Dict[str, int]
    ) -> dict:
        """Build the combined JSON document."""
        return {
            "metadata": {
                "generatedAt": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
                "totalReviews": len(records),
                "sourceDirectory": self.input_dir,
                "combinedFromFiles": combined_files,
                "format": self.converter.format_name,
                "dateInterpolation": self.interpolate,
                "statistics": stats
            },
            "reviews": [self.converter.to_output(record) for record in records]
        }

    def build_frame(self, records: List[ReviewRecord]) -> pd.DataFrame:
        """Build the CSV table with the converter's fixed columns."""
        return pd.DataFrame(
            [self.converter.csv_row(record) for record in records],
            columns=self.converter.csv_columns(),
            dtype=object
        )

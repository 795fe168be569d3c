"""
Record Loader.

Reads a directory of batch files and turns their contents into
ReviewRecord objects tagged with file of origin and position.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import List

from review_combiner.models.review import BatchRange, ReviewRecord
from review_combiner.utils.storage import StorageManager

logger = logging.getLogger(__name__)

# <prefix>-<start>-<end>[-<timestamp>].json, <prefix>-<start>-<end>-remaining-<timestamp>.json
BATCH_RANGE_PATTERN = re.compile(r"-(\d+)-(\d+)(?:-(?:remaining-)?\d+)?\.[^.]+$")


def parse_batch_range(filename: str) -> BatchRange:
    """
    Parse the collection range encoded in a batch filename.

    Returns:
        BatchRange(start, end), or BatchRange(0, 0) when the name
        doesn't follow the batch naming pattern
    """
    match = BATCH_RANGE_PATTERN.search(filename)
    if not match:
        return BatchRange(0, 0)
    return BatchRange(int(match.group(1)), int(match.group(2)))


@dataclass
class LoadResult:
    """Records from one load pass plus the files they came from."""
    records: List[ReviewRecord] = field(default_factory=list)
    combined_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)


class RecordLoader:
    """
    Loads review records from batch files.

    Files are read in canonical file order (ascending start range, ties
    broken by filename), so records come out in the order later used
    for deduplication and output.
    """

    def __init__(self, extension: str = ".json"):
        """
        Initialize record loader.

        Args:
            extension: File extension that marks a batch file
        """
        self.extension = extension

    def list_batch_files(self, directory: str) -> List[str]:
        """
        List batch files sorted in canonical file order.

        Raises:
            FileNotFoundError: If the directory doesn't exist
            NotADirectoryError: If the path is not a directory
        """
        StorageManager.validate_input_dir(directory)
        files = StorageManager.list_files(directory, self.extension)
        return sorted(files, key=lambda name: (parse_batch_range(name).start, name))

    def load(self, directory: str) -> LoadResult:
        """
        Load every batch file in a directory.

        A file that can't be parsed is skipped and doesn't affect the others.

        Args:
            directory: Directory holding batch files

        Returns:
            LoadResult with records in canonical load order
        """
        files = self.list_batch_files(directory)
        logger.info(f"Found {len(files)} batch files in {directory}")

        result = LoadResult()

        for file_order, filename in enumerate(files):
            filepath = os.path.join(directory, filename)
            logger.debug(f"Reading {filename}")

            content = StorageManager.load_json(filepath)
            if content is None:
                logger.warning(f"Skipping {filename}: could not be parsed")
                result.skipped_files.append(filename)
                continue

            # Handle both array and single-object files
            entries = content if isinstance(content, list) else [content]

            for record_order, entry in enumerate(entries):
                if not isinstance(entry, dict):
                    logger.warning(
                        f"Skipping entry {record_order} in {filename}: "
                        f"expected an object, got {type(entry).__name__}"
                    )
                    continue

                result.records.append(
                    ReviewRecord.from_dict(
                        entry,
                        source_file=filename,
                        file_order=file_order,
                        record_order=record_order
                    )
                )

            result.combined_files.append(filename)

        logger.info(
            f"Loaded {len(result.records)} records from {len(result.combined_files)} files "
            f"({len(result.skipped_files)} skipped)"
        )
        return result

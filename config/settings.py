"""
Configuration settings for Review Combiner.

Centralized configuration for the merge pipeline and the batch collector.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
INPUT_DIR = Path(os.getenv("REVIEW_INPUT_DIR", "./review-files"))
OUTPUT_DIR = Path(os.getenv("REVIEW_OUTPUT_DIR", "./combined-reviews"))

# Batch files
BATCH_FILE_EXTENSION = ".json"
BATCH_FILE_PREFIX = "facebook-reviews"
DEFAULT_BATCH_SIZE = 10
STALL_THRESHOLD = 5  # Consecutive empty offers before the collector ends

# Output file names
STANDARD_OUTPUT_NAME = "combined-facebook-reviews"
CONVERTED_OUTPUT_NAME = "judge-me-facebook-reviews"

# Deduplication
FINGERPRINT_PREFIX_LENGTH = 50

# Dates
ENCODED_DATE_SENTINEL = "Encoded"
ENCODED_DATE_MAX_DAYS = 7
LEADING_GAP_POLICY = "skip"  # "skip" or "backfill"

# Logging
LOG_LEVEL = os.getenv("REVIEW_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "review-combiner.log"

"""
Storage utility.

File I/O helpers for batch files and combined output documents.
"""

import json
import os
import logging
from typing import List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file I/O for the merge pipeline.

    Handles:
    - Batch files (review-files/<prefix>-<start>-<end>-<timestamp>.json)
    - Combined output (combined-reviews/<name>.json and <name>.csv)
    """

    def __init__(self, output_dir: str):
        """
        Initialize storage manager and provision the output directory.

        Args:
            output_dir: Directory that receives written files

        Raises:
            OSError: If the output directory cannot be created
        """
        self.output_dir = str(output_dir)

        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create output directory {self.output_dir}: {e}")
            raise

        logger.info(f"Initialized StorageManager with output_dir={self.output_dir}")

    @staticmethod
    def validate_input_dir(input_dir: str) -> None:
        """
        Check that the input directory exists and is a directory.

        Raises:
            FileNotFoundError: If the path does not exist
            NotADirectoryError: If the path is not a directory
        """
        if not os.path.exists(input_dir):
            raise FileNotFoundError(f"Input directory not found: {input_dir}")
        if not os.path.isdir(input_dir):
            raise NotADirectoryError(f"Input path is not a directory: {input_dir}")

    @staticmethod
    def list_files(directory: str, extension: str) -> List[str]:
        """
        List file names in a directory with the given extension.

        Returns:
            File names (not paths), sorted alphabetically
        """
        return sorted(
            name for name in os.listdir(directory)
            if name.endswith(extension)
            and os.path.isfile(os.path.join(directory, name))
        )

    @staticmethod
    def load_json(filepath: str) -> Optional[Union[list, dict]]:
        """
        Load one JSON document.

        Args:
            filepath: Path to the JSON file

        Returns:
            Parsed document, or None if the file can't be read or parsed
        """
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Malformed JSON in {filepath}: {e}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {filepath}: {e}")
            return None

    def save_json(self, data: Union[list, dict], filename: str) -> str:
        """
        Save a JSON document into the output directory.

        Returns:
            Path of the written file
        """
        content = json.dumps(data, indent=2, ensure_ascii=False)
        return self._write_text(content, filename)

    def save_csv(self, frame: pd.DataFrame, filename: str) -> str:
        """
        Save a DataFrame as CSV into the output directory.

        Values containing a comma, quote or newline are quoted and embedded
        quotes are doubled.

        Returns:
            Path of the written file
        """
        content = frame.to_csv(index=False, lineterminator="\n")
        return self._write_text(content, filename)

    def _write_text(self, content: str, filename: str) -> str:
        """Write through a temporary file so a failed write leaves no partial output."""
        filepath = os.path.join(self.output_dir, filename)
        tmp_path = f"{filepath}.tmp"

        try:
            with open(tmp_path, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
            os.replace(tmp_path, filepath)
        except OSError as e:
            logger.error(f"Failed to write {filepath}: {e}")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        logger.info(f"Saved {filepath}")
        return filepath

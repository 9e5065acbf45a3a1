"""
Snapshot loader for officer data.

Reads the STFC.space export (JSON, or YAML for hand-curated additions) and
parses it into Officer models. Loading never raises: a broken snapshot yields
an empty dataset and a diagnostic, so the bot keeps answering "not found"
instead of crashing.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import Officer

logger = logging.getLogger(__name__)

DATA_SUFFIXES = (".json", ".yaml", ".yml")


@dataclass
class LoadResult:
    """Outcome of loading a snapshot."""

    officers: list[Officer] = field(default_factory=list)
    skipped: int = 0
    diagnostic: str | None = None  # Set when the whole snapshot was unusable

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


class SnapshotError(Exception):
    """Raised internally when a snapshot document cannot be used."""


class DataLoader:
    """
    Loads officer records from a snapshot file or directory.

    Accepted layouts:
    - a single ``.json``/``.yaml`` document holding ``{"officers": [...]}``
      or a bare array of records;
    - a directory of such documents, each holding one record, an array, or an
      ``officers`` document. Files starting with ``_`` are skipped.
    """

    def __init__(self, data_path: str | Path):
        """
        Initialize the data loader.

        Args:
            data_path: Snapshot file or directory of snapshot files.
        """
        self.data_path = Path(data_path)

    def _is_data_file(self, file_path: Path) -> bool:
        """Check if a file is a data file (not schema/template/example)."""
        if file_path.stem.startswith("_"):
            return False
        return file_path.suffix.lower() in DATA_SUFFIXES

    def _read_document(self, file_path: Path) -> Any:
        """Parse a single JSON or YAML file."""
        # utf-8-sig also accepts exports saved with a byte order mark
        try:
            with open(file_path, encoding="utf-8-sig") as f:
                if file_path.suffix.lower() == ".json":
                    return json.load(f)
                return yaml.safe_load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise SnapshotError(f"Cannot read {file_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SnapshotError(f"JSON parse error in {file_path}: {e}") from e
        except yaml.YAMLError as e:
            raise SnapshotError(f"YAML parse error in {file_path}: {e}") from e

    def _extract_records(self, document: Any, source: Path, allow_single: bool) -> list[Any]:
        """Pull the raw record list out of a parsed document."""
        if isinstance(document, list):
            return document
        if isinstance(document, dict):
            if isinstance(document.get("officers"), list):
                return document["officers"]
            if allow_single and "name" in document:
                return [document]
        raise SnapshotError(f"{source} missing 'officers' array")

    def _parse_records(self, raw_records: list[Any], source: Path) -> tuple[list[Officer], int]:
        """Validate raw records, skipping the ones that do not fit the model."""
        officers = []
        skipped = 0
        for position, raw in enumerate(raw_records):
            if not isinstance(raw, dict):
                logger.warning(f"Skipping non-object record #{position} in {source}")
                skipped += 1
                continue
            try:
                officers.append(Officer.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping invalid record #{position} in {source}:\n{e}")
                skipped += 1
        return officers, skipped

    def _snapshot_files(self) -> list[Path]:
        if self.data_path.is_dir():
            return sorted(p for p in self.data_path.iterdir() if self._is_data_file(p))
        return [self.data_path]

    def load_officers(self) -> LoadResult:
        """
        Load every officer record in the snapshot.

        Returns:
            LoadResult with parsed officers. On failure the officer list is
            empty and ``diagnostic`` explains why.
        """
        if not self.data_path.exists():
            return self._failed(f"Officer data not found: {self.data_path}")

        is_dir = self.data_path.is_dir()
        result = LoadResult()
        try:
            for file_path in self._snapshot_files():
                document = self._read_document(file_path)
                raw_records = self._extract_records(document, file_path, allow_single=is_dir)
                officers, skipped = self._parse_records(raw_records, file_path)
                result.officers.extend(officers)
                result.skipped += skipped
                logger.debug(f"Loaded {len(officers)} officers from {file_path}")
        except SnapshotError as e:
            return self._failed(str(e))

        logger.info(f"Loaded {len(result.officers)} officers from {self.data_path}")
        if result.skipped:
            logger.warning(f"Skipped {result.skipped} malformed officer records")
        return result

    def _failed(self, diagnostic: str) -> LoadResult:
        logger.warning(f"Failed to load officer data: {diagnostic}")
        return LoadResult(diagnostic=diagnostic)

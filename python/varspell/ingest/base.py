"""Base ingestor interface for variant corpora.

All ingestors inherit from Ingestor and implement parse() and to_entry().
This provides a consistent API for loading entries from any corpus format.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional

from loguru import logger

from ..schema import Entry


class CorpusFormatError(ValueError):
    """A corpus record could not be turned into an Entry."""


@dataclass
class IngestResult:
    """Result of ingesting a corpus source."""

    entries: list[Entry]
    source_path: str
    corpus_name: str
    total_raw: int = 0          # Records seen in source
    total_valid: int = 0        # Records parsed into entries
    errors: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"IngestResult({self.corpus_name}: "
            f"{self.total_valid}/{self.total_raw} valid, "
            f"{len(self.errors)} errors)"
        )


class Ingestor(ABC):
    """Base class for corpus ingestors.

    Subclasses must implement:
        - parse(filepath) -> Iterator of (record, line_number) tuples
        - to_entry(record) -> Entry, raising CorpusFormatError if malformed
        - file_extensions: list of supported extensions

    The ingest() method handles error collection and statistics.
    """

    file_extensions: list[str] = []

    @abstractmethod
    def parse(self, filepath: Path) -> Iterator[tuple[Any, Optional[int]]]:
        """Parse source file and yield raw records.

        Args:
            filepath: Path to source file.

        Yields:
            Tuples of (record, line_number).
        """
        pass

    @abstractmethod
    def to_entry(self, record: Any) -> Entry:
        """Convert one raw record into an Entry.

        Raises:
            CorpusFormatError: If the record is malformed.
        """
        pass

    def get_corpus_name(self, filepath: Path) -> str:
        """Generate corpus name from filepath."""
        return filepath.stem

    def ingest(self, filepath: Path | str) -> IngestResult:
        """Ingest a corpus file.

        Malformed records are recorded in the result's errors and skipped.

        Args:
            filepath: Path to source file.

        Returns:
            IngestResult with entries and statistics.
        """
        filepath = Path(filepath)
        corpus_name = self.get_corpus_name(filepath)

        entries: list[Entry] = []
        errors: list[str] = []
        total_raw = 0

        for record, line_num in self.parse(filepath):
            total_raw += 1
            try:
                entries.append(self.to_entry(record))
            except CorpusFormatError as e:
                location = f"{filepath.name}:{line_num}" if line_num else filepath.name
                errors.append(f"{location}: {e}")
                logger.debug(f"Skipping malformed record at {location}: {e}")

        logger.debug(
            f"Ingested {corpus_name}: {len(entries)}/{total_raw} records, "
            f"{len(errors)} errors"
        )

        return IngestResult(
            entries=entries,
            source_path=str(filepath.resolve()),
            corpus_name=corpus_name,
            total_raw=total_raw,
            total_valid=len(entries),
            errors=errors,
        )

"""JSON corpus ingestor.

Format:
    {
      "entries": [
        {
          "variants": [
            {"word": "color", "types": [{"category": "american", "tag": null}]},
            {"word": "colour", "types": [{"category": "british", "tag": null}]}
          ],
          "note": null
        }
      ]
    }

Same shape as Entry.to_dict(), so corpora can be round-tripped through the
data model.
"""

from pathlib import Path
from typing import Any, Iterator, Optional
import json

from .base import CorpusFormatError, Ingestor
from ..schema import Entry


class JsonCorpusIngestor(Ingestor):
    """Ingestor for JSON entry lists."""

    file_extensions = [".json"]

    def parse(self, filepath: Path) -> Iterator[tuple[Any, Optional[int]]]:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        for record in data.get("entries", []):
            yield record, None

    def to_entry(self, record: Any) -> Entry:
        try:
            entry = Entry.from_dict(record)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CorpusFormatError(f"Bad entry {record!r}: {e}") from e
        if not entry.variants:
            raise CorpusFormatError(f"Entry without variants: {record!r}")
        return entry


def save(entries: list[Entry], filepath: Path | str) -> None:
    """Write entries in the format JsonCorpusIngestor reads."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump({"entries": [e.to_dict() for e in entries]}, f, indent=2)


def ingest(filepath: Path | str):
    """Convenience function to ingest a JSON corpus.

    Returns:
        IngestResult with entries.
    """
    return JsonCorpusIngestor().ingest(filepath)

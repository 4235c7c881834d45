"""Corpus ingestion module.

Provides pluggable ingestors for variant corpus formats:
- VARCON-style text ("A Cv: color / B C D: colour")
- JSON entry lists

Usage:
    from varspell.ingest import varcon, json_corpus

    result = varcon.ingest("path/to/varcon.txt")
    result = json_corpus.ingest("path/to/entries.json")
"""

from pathlib import Path

from .base import CorpusFormatError, Ingestor, IngestResult
from . import json_corpus
from . import varcon

# Register available ingestors
INGESTORS: dict[str, type[Ingestor]] = {
    "varcon": varcon.VarconIngestor,
    "json": json_corpus.JsonCorpusIngestor,
}


def get_ingestor(name: str) -> type[Ingestor]:
    """Get ingestor class by name."""
    if name not in INGESTORS:
        raise ValueError(f"Unknown ingestor: {name}. Available: {list(INGESTORS.keys())}")
    return INGESTORS[name]


def register_ingestor(name: str, ingestor_cls: type[Ingestor]) -> None:
    """Register a custom ingestor."""
    INGESTORS[name] = ingestor_cls


def ingestor_for(filepath: Path | str) -> type[Ingestor]:
    """Pick an ingestor by file extension, defaulting to VARCON text."""
    suffix = Path(filepath).suffix.lower()
    for ingestor_cls in INGESTORS.values():
        if suffix in ingestor_cls.file_extensions:
            return ingestor_cls
    return varcon.VarconIngestor


__all__ = [
    "CorpusFormatError",
    "Ingestor",
    "IngestResult",
    "varcon",
    "json_corpus",
    "get_ingestor",
    "register_ingestor",
    "ingestor_for",
    "INGESTORS",
]

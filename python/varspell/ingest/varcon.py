"""VARCON-style corpus ingestor.

One entry per line, variants separated by "/":

    # color (level 10)
    A Cv: color / B C D: colour
    A Cv: colors / B C D: colours | plural

Each variant is "<types>: <word>". A type is a category code optionally
followed by a tag code:

    Categories: A American, B British (-ise), Z British (-ize),
                C Canadian, D Australian, _ all of them
    Tags:       . standard, v variant, V seldom, - possible, x improper

Text after "|" is kept as the entry's note. Lines starting with "#" are
comments.
"""

from pathlib import Path
from typing import Iterator, Optional

from .base import CorpusFormatError, Ingestor
from ..schema import Category, Entry, Tag, Variant, VariantType


class VarconIngestor(Ingestor):
    """Ingestor for VARCON-style text corpora."""

    file_extensions = [".txt", ".varcon"]

    def __init__(self, comment_char: str = "#"):
        self.comment_char = comment_char

    def parse(self, filepath: Path) -> Iterator[tuple[str, Optional[int]]]:
        """Parse corpus lines.

        Args:
            filepath: Path to corpus file.

        Yields:
            Tuples of (line, line_number).
        """
        with open(filepath, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()

                # Skip empty lines and comments
                if not line or line.startswith(self.comment_char):
                    continue

                yield line, line_num

    def to_entry(self, record: str) -> Entry:
        return parse_entry(record)


def parse_type(token: str) -> VariantType:
    """Parse a type token like "A", "Cv" or "_x"."""
    try:
        category = Category.from_code(token[0])
        if len(token) == 1:
            return VariantType(category)
        if len(token) == 2:
            return VariantType(category, Tag.from_code(token[1]))
    except ValueError as e:
        raise CorpusFormatError(f"Bad type {token!r}: {e}") from e
    raise CorpusFormatError(f"Bad type {token!r}")


def parse_variant(text: str) -> Variant:
    """Parse "<types>: <word>"."""
    types_part, sep, word = text.partition(":")
    word = word.strip()
    if not sep or not word:
        raise CorpusFormatError(f"Missing word in variant {text!r}")

    tokens = types_part.split()
    if not tokens:
        raise CorpusFormatError(f"Missing types in variant {text!r}")

    return Variant(word=word, types=[parse_type(t) for t in tokens])


def parse_entry(line: str) -> Entry:
    """Parse one corpus line into an Entry.

    Raises:
        CorpusFormatError: If any variant on the line is malformed.
    """
    body, _, note = line.partition("|")
    variants = [parse_variant(part.strip()) for part in body.split("/")]
    return Entry(variants=variants, note=note.strip() or None)


def ingest(filepath: Path | str, comment_char: str = "#"):
    """Convenience function to ingest a VARCON-style corpus.

    Args:
        filepath: Path to corpus file.
        comment_char: Character that starts a comment line.

    Returns:
        IngestResult with entries.
    """
    return VarconIngestor(comment_char=comment_char).ingest(filepath)

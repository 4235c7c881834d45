"""Token model for varspell.

Identifiers are runs of word characters found in source text or filenames.
Each identifier splits into words on underscores, digits and case changes:

    "fooBar_baz"   -> "foo", "Bar", "baz"
    "HTTPServer"   -> "HTTP", "Server"

The compiler only accepts corpus spellings that are exactly one word, and
the correction engine uses the word's case to shape its suggestions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator
import re

IDENT_PATTERN = re.compile(r"\b[\w']+\b")

# Order matters: an upper-case run followed by a capitalised word
# ("HTTPServer") must stop before the last capital.
WORD_PATTERN = re.compile(
    r"[A-Z]+(?=[A-Z][a-z])"
    r"|[A-Z]?[a-z]+(?:'[a-z]+)*"
    r"|[A-Z]+(?:'[A-Z]+)*"
    r"|[^\W\d_]+"
)


class Case(Enum):
    """Casing pattern of a word."""

    LOWER = "lower"
    TITLE = "title"
    SCREAM = "scream"
    NONE = "none"

    @classmethod
    def of(cls, token: str) -> "Case":
        if token.islower():
            return cls.LOWER
        if token.isupper():
            return cls.SCREAM
        if token[:1].isupper() and token[1:].islower():
            return cls.TITLE
        return cls.NONE


def apply_case(text: str, case: Case) -> str:
    """Reshape a lowercase spelling to match a casing pattern.

    Args:
        text: Spelling as stored in the dictionary.
        case: Case of the token being corrected.

    Returns:
        Re-cased spelling. Mixed-case tokens get the spelling unchanged.
    """
    if case is Case.TITLE:
        return text[:1].upper() + text[1:]
    if case is Case.SCREAM:
        return text.upper()
    return text


@dataclass(frozen=True)
class Word:
    """A single word with its character offset."""

    token: str
    offset: int = 0

    @classmethod
    def parse(cls, token: str, offset: int = 0) -> "Word":
        """Parse a token that must be exactly one word.

        Raises:
            ValueError: If the token is empty, padded, or holds several words.
        """
        words = list(split_words(token))
        if not words:
            raise ValueError(f"Invalid word (none found): {token!r}")
        if len(words) > 1:
            raise ValueError(f"Invalid word (multiple found): {token!r}")
        if words[0].token != token:
            raise ValueError(f"Invalid word (padding found): {token!r}")
        return cls(token, offset)


@dataclass(frozen=True)
class Identifier:
    """An identifier with its character offset."""

    token: str
    offset: int = 0

    @classmethod
    def parse(cls, text: str) -> Iterator["Identifier"]:
        """Find identifiers in a line of text or a filename component."""
        for match in IDENT_PATTERN.finditer(text):
            yield cls(match.group(), match.start())

    def split(self) -> Iterator[Word]:
        """Split into words, offsets relative to the original text."""
        for word in split_words(self.token):
            yield Word(word.token, word.offset + self.offset)


def split_words(token: str) -> Iterator[Word]:
    for match in WORD_PATTERN.finditer(token):
        yield Word(match.group(), match.start())


def is_word(token: str) -> bool:
    """Check if a token is exactly one well-formed word."""
    try:
        Word.parse(token)
    except ValueError:
        return False
    return True

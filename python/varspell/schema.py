"""Data model for varspell.

Core concept:
    - An Entry groups the regional spellings of one underlying word
    - Each spelling is tagged with the categories it is valid for
    - The compiled dictionary maps a spelling to the categories it is
      already correct for, plus the table of corrections for the rest

Example:
    "A Cv: color / B C D: colour"
    "color" is correct for American and Canadian; British and Australian
    writers get "colour" suggested.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, Optional, Union
import hashlib
import json


class Category(Enum):
    """Regional spelling convention."""

    AMERICAN = "american"
    BRITISH_ISE = "british"
    BRITISH_IZE = "british_ize"
    CANADIAN = "canadian"
    AUSTRALIAN = "australian"
    OTHER = "other"

    @property
    def bit(self) -> int:
        return _CATEGORY_BITS[self]

    @property
    def code(self) -> str:
        """Single-character corpus code."""
        return _CATEGORY_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> "Category":
        for category, category_code in _CATEGORY_CODES.items():
            if category_code == code:
                return category
        raise ValueError(f"Unknown category code: {code!r}")

    @classmethod
    def from_name(cls, name: str) -> "Category":
        """Get a category from its value, e.g. "british"."""
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(
                f"Unknown category: {name}. "
                f"Available: {[c.value for c in TRACKED_CATEGORIES]}"
            ) from None


_CATEGORY_BITS = {
    Category.AMERICAN: 0b000001,
    Category.BRITISH_ISE: 0b000010,
    Category.BRITISH_IZE: 0b000100,
    Category.CANADIAN: 0b001000,
    Category.AUSTRALIAN: 0b010000,
    Category.OTHER: 0b100000,
}

_CATEGORY_CODES = {
    Category.AMERICAN: "A",
    Category.BRITISH_ISE: "B",
    Category.BRITISH_IZE: "Z",
    Category.CANADIAN: "C",
    Category.AUSTRALIAN: "D",
    Category.OTHER: "_",
}

# Correction table slot order. Only the -ise British form is supported;
# OTHER means "all of these".
TRACKED_CATEGORIES = (
    Category.AMERICAN,
    Category.BRITISH_ISE,
    Category.CANADIAN,
    Category.AUSTRALIAN,
)


class Tag(Enum):
    """How strongly a spelling belongs to a category."""

    EQ = "eq"
    VARIANT = "variant"
    SELDOM = "seldom"
    POSSIBLE = "possible"
    IMPROPER = "improper"

    @property
    def code(self) -> str:
        return _TAG_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> "Tag":
        for tag, tag_code in _TAG_CODES.items():
            if tag_code == code:
                return tag
        raise ValueError(f"Unknown tag code: {code!r}")


_TAG_CODES = {
    Tag.EQ: ".",
    Tag.VARIANT: "v",
    Tag.SELDOM: "V",
    Tag.POSSIBLE: "-",
    Tag.IMPROPER: "x",
}


@dataclass(frozen=True)
class CategorySet:
    """Bitset of categories, stored in a single byte."""

    bits: int = 0

    def __post_init__(self):
        if not 0 <= self.bits <= 0xFF:
            raise ValueError(f"CategorySet bits out of range: {self.bits:#x}")

    @classmethod
    def empty(cls) -> "CategorySet":
        return cls()

    @classmethod
    def of(cls, *categories: Category) -> "CategorySet":
        bits = 0
        for category in categories:
            bits |= category.bit
        return cls(bits)

    def __or__(self, other: Union["CategorySet", Category]) -> "CategorySet":
        if isinstance(other, Category):
            return CategorySet(self.bits | other.bit)
        if isinstance(other, CategorySet):
            return CategorySet(self.bits | other.bits)
        return NotImplemented

    def __contains__(self, category: Category) -> bool:
        return bool(self.bits & category.bit)

    def __iter__(self) -> Iterator[Category]:
        for category, bit in _CATEGORY_BITS.items():
            if self.bits & bit:
                yield category

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def __repr__(self) -> str:
        names = "|".join(c.name for c in self) or "EMPTY"
        return f"CategorySet({names})"


ALL_CATEGORIES = CategorySet.of(*TRACKED_CATEGORIES)


@dataclass(frozen=True)
class VariantType:
    """One (category, tag) association of a spelling."""

    category: Category
    tag: Optional[Tag] = None

    @property
    def effective_tag(self) -> Tag:
        """Untagged associations count as the standard spelling."""
        return self.tag if self.tag is not None else Tag.EQ

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "tag": self.tag.value if self.tag is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VariantType":
        tag = data.get("tag")
        return cls(
            category=Category(data["category"]),
            tag=Tag(tag) if tag is not None else None,
        )


@dataclass
class Variant:
    """A single spelling within an Entry."""

    word: str
    types: list[VariantType] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "types": [t.to_dict() for t in self.types],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Variant":
        return cls(
            word=data["word"],
            types=[VariantType.from_dict(t) for t in data.get("types", [])],
        )


@dataclass
class Entry:
    """Spellings of the same underlying word across regions."""

    variants: list[Variant] = field(default_factory=list)
    note: Optional[str] = None

    def words(self) -> list[str]:
        """Get the spellings in corpus order."""
        return [v.word for v in self.variants]

    def symbol(self) -> str:
        """Stable name derived from the variant set.

        Two entries with the same variants and types get the same symbol,
        which is what deduplicates them during compilation.
        """
        payload = json.dumps(
            [v.to_dict() for v in self.variants],
            sort_keys=True,
            separators=(",", ":"),
        )
        digest = hashlib.sha1(payload.encode("utf-8")).hexdigest()[:16]
        head = self.variants[0].word.upper() if self.variants else "EMPTY"
        return f"ENTRY_{head}_{digest}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "variants": [v.to_dict() for v in self.variants],
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        return cls(
            variants=[Variant.from_dict(v) for v in data.get("variants", [])],
            note=data.get("note"),
        )


@dataclass(frozen=True)
class CorrectionTable:
    """Per-entry corrections, one slot per tracked category."""

    symbol: str
    slots: tuple[tuple[str, ...], ...]

    def __post_init__(self):
        if len(self.slots) != len(TRACKED_CATEGORIES):
            raise ValueError(
                f"{self.symbol}: expected {len(TRACKED_CATEGORIES)} slots, "
                f"got {len(self.slots)}"
            )

    def corrections(self, category: Category) -> tuple[str, ...]:
        """Get the correct spellings for a tracked category."""
        if category not in ALL_CATEGORIES:
            raise ValueError(f"{category} is unused")
        return self.slots[TRACKED_CATEGORIES.index(category)]

    def to_dict(self) -> dict[str, list[str]]:
        return {
            category.value: list(slot)
            for category, slot in zip(TRACKED_CATEGORIES, self.slots)
        }

    @classmethod
    def from_dict(cls, symbol: str, data: dict[str, list[str]]) -> "CorrectionTable":
        return cls(
            symbol=symbol,
            slots=tuple(tuple(data.get(c.value, [])) for c in TRACKED_CATEGORIES),
        )


WordLinks = tuple[tuple[CategorySet, CorrectionTable], ...]


@dataclass
class CompiledDictionary:
    """The compiled, read-only variant dictionary."""

    words: dict[str, WordLinks] = field(default_factory=dict)
    tables: dict[str, CorrectionTable] = field(default_factory=dict)
    word_min: int = 0
    word_max: int = 0
    categories: CategorySet = ALL_CATEGORIES
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def get(self, word: str) -> Optional[WordLinks]:
        """Case-insensitive probe."""
        return self.words.get(word.lower())

    def count(self) -> int:
        """Get word count."""
        return len(self.words)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generated_at": self.generated_at,
            "categories": [c.value for c in self.categories],
            "word_min": self.word_min,
            "word_max": self.word_max,
            "word_count": self.count(),
            "tables": {
                symbol: table.to_dict()
                for symbol, table in sorted(self.tables.items())
            },
            "words": {
                word: [[cats.bits, table.symbol] for cats, table in links]
                for word, links in sorted(self.words.items())
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompiledDictionary":
        """Create from dictionary.

        Raises:
            ValueError: If a word links to a table the document lacks.
        """
        tables = {
            symbol: CorrectionTable.from_dict(symbol, slots)
            for symbol, slots in data.get("tables", {}).items()
        }
        words: dict[str, WordLinks] = {}
        for word, links in data.get("words", {}).items():
            resolved = []
            for bits, symbol in links:
                if symbol not in tables:
                    raise ValueError(f"Corrupt artifact: {word!r} links to unknown {symbol}")
                resolved.append((CategorySet(bits), tables[symbol]))
            words[word] = tuple(resolved)

        return cls(
            words=words,
            tables=tables,
            word_min=data.get("word_min", 0),
            word_max=data.get("word_max", 0),
            categories=CategorySet.of(
                *(Category(c) for c in data.get("categories", []))
            ),
            generated_at=data.get("generated_at", ""),
        )

    def save(self, filepath: Path) -> None:
        """Save dictionary to JSON file."""
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, filepath: Path) -> "CompiledDictionary":
        """Load dictionary from JSON file."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

"""Dictionary compiler.

Turns a corpus of variant entries into a CompiledDictionary:

    entries ──filter/lowercase──▶ per-entry word → CategorySet
            ──group──▶ word → [(symbol, CategorySet)]
            ──prune always-valid──▶ surviving words
            ──tables──▶ one CorrectionTable per referenced entry

A word is only stored when no entry considers it correct everywhere, so the
compiled map holds nothing but spellings that can need a correction.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from loguru import logger

from ..ingest.base import IngestResult
from ..schema import (
    ALL_CATEGORIES,
    TRACKED_CATEGORIES,
    Category,
    CategorySet,
    CompiledDictionary,
    CorrectionTable,
    Entry,
    Tag,
    Variant,
)
from ..tokens import is_word


@dataclass(frozen=True)
class IgnoredVariant:
    """A corpus variant that is never offered as a correction.

    Matches a variant spelled `word` whose only type is `category` with one
    of `tags`.
    """

    word: str
    category: Category
    tags: frozenset[Tag]

    def matches(self, variant: Variant) -> bool:
        if variant.word != self.word or len(variant.types) != 1:
            return False
        only = variant.types[0]
        return only.category == self.category and only.tag in self.tags

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IgnoredVariant":
        return cls(
            word=data["word"].lower(),
            category=Category.from_name(data["category"]),
            tags=frozenset(Tag(t) for t in data.get("tags", [])),
        )


# Corpus quirk: rare Australian variant, never suggested.
ANESTHETISATION_AU = IgnoredVariant(
    word="anesthetisation",
    category=Category.AUSTRALIAN,
    tags=frozenset({Tag.VARIANT, Tag.SELDOM}),
)

DEFAULT_IGNORED_VARIANTS: tuple[IgnoredVariant, ...] = (ANESTHETISATION_AU,)


@dataclass
class CompileStats:
    """Statistics from a compile operation."""

    total_entries: int = 0
    skipped_entries: int = 0
    duplicate_entries: int = 0
    total_words: int = 0
    pruned_words: int = 0
    tables_emitted: int = 0
    word_min: int = 0
    word_max: int = 0
    files_written: list[str] = field(default_factory=list)


def entry_category_sets(entry: Entry) -> dict[str, CategorySet]:
    """Union the categories each spelling of an entry is valid for.

    OTHER counts as every tracked category; BRITISH_IZE is not tracked.
    """
    sets: dict[str, CategorySet] = {}
    for variant in entry.variants:
        current = sets.get(variant.word, CategorySet.empty())
        for vtype in variant.types:
            if vtype.category == Category.OTHER:
                current = current | ALL_CATEGORIES
            elif vtype.category == Category.BRITISH_IZE:
                continue
            else:
                current = current | vtype.category
        sets[variant.word] = current
    return sets


def is_always_valid(links: Iterable[tuple[str, CategorySet]]) -> bool:
    """Check if any entry marks the word correct in every tracked category."""
    return any(cats == ALL_CATEGORIES for _symbol, cats in links)


def collect_corrections(
    entry: Entry,
    category: Category,
    ignored: Iterable[IgnoredVariant] = DEFAULT_IGNORED_VARIANTS,
) -> tuple[str, ...]:
    """Get the correct spellings of an entry for one category.

    A single standard (EQ) spelling wins outright. With none or several,
    every spelling that is not IMPROPER is kept so no plausible form is lost.

    Returns:
        Sorted, deduplicated spellings.
    """
    ignored = tuple(ignored)
    primary: set[str] = set()
    backup: set[str] = set()
    for variant in entry.variants:
        if any(rule.matches(variant) for rule in ignored):
            continue
        for vtype in variant.types:
            if vtype.category not in (category, Category.OTHER):
                continue
            tag = vtype.effective_tag
            if tag == Tag.EQ:
                primary.add(variant.word)
            if tag != Tag.IMPROPER:
                backup.add(variant.word)

    chosen = primary if len(primary) == 1 else backup
    return tuple(sorted(chosen))


def lowercase_entry(entry: Entry) -> Entry:
    return Entry(
        variants=[
            Variant(word=v.word.lower(), types=list(v.types))
            for v in entry.variants
        ],
        note=entry.note,
    )


class DictionaryCompiler:
    """Compiles variant entries into a CompiledDictionary."""

    def __init__(
        self,
        ignored_variants: Optional[Iterable[IgnoredVariant]] = None,
    ):
        """Initialize compiler.

        Args:
            ignored_variants: Corpus exceptions never offered as corrections.
                Defaults to DEFAULT_IGNORED_VARIANTS.
        """
        if ignored_variants is None:
            ignored_variants = DEFAULT_IGNORED_VARIANTS
        self.ignored_variants = tuple(ignored_variants)
        self.stats = CompileStats()

        # symbol -> lowercased Entry
        self._entries: dict[str, Entry] = {}

    def add_entry(self, entry: Entry) -> bool:
        """Add a single entry.

        Entries with any spelling that is not exactly one word are skipped.

        Returns:
            True if the entry was kept (or already present).
        """
        self.stats.total_entries += 1

        if not entry.variants or not all(is_word(w) for w in entry.words()):
            self.stats.skipped_entries += 1
            logger.debug(f"Skipping entry that is not single words: {entry.words()}")
            return False

        entry = lowercase_entry(entry)
        symbol = entry.symbol()
        if symbol in self._entries:
            self.stats.duplicate_entries += 1
        else:
            self._entries[symbol] = entry
        return True

    def add_entries(self, source: Union[IngestResult, Iterable[Entry]]) -> None:
        """Add entries from an IngestResult or any iterable of entries."""
        entries = source.entries if isinstance(source, IngestResult) else source
        for entry in entries:
            self.add_entry(entry)

    def get_entry_count(self) -> int:
        return len(self._entries)

    def group_words(self) -> dict[str, list[tuple[str, CategorySet]]]:
        """Map every spelling to the (symbol, CategorySet) of its entries."""
        groups: dict[str, list[tuple[str, CategorySet]]] = {}
        for symbol in sorted(self._entries):
            for word, cats in sorted(entry_category_sets(self._entries[symbol]).items()):
                groups.setdefault(word, []).append((symbol, cats))
        return dict(sorted(groups.items()))

    def build_table(self, symbol: str) -> CorrectionTable:
        entry = self._entries[symbol]
        return CorrectionTable(
            symbol=symbol,
            slots=tuple(
                collect_corrections(entry, category, self.ignored_variants)
                for category in TRACKED_CATEGORIES
            ),
        )

    def compile(self) -> CompiledDictionary:
        """Compile the added entries.

        Returns:
            CompiledDictionary with only the correction tables it references.
        """
        tables: dict[str, CorrectionTable] = {}
        words = {}
        pruned = 0

        for word, links in self.group_words().items():
            if is_always_valid(links):
                # No need to convert from current form to target form
                pruned += 1
                continue

            resolved = []
            for symbol, cats in links:
                if symbol not in tables:
                    tables[symbol] = self.build_table(symbol)
                resolved.append((cats, tables[symbol]))
            words[word] = tuple(resolved)

        lengths = [len(w) for w in words]
        compiled = CompiledDictionary(
            words=words,
            tables=tables,
            word_min=min(lengths, default=0),
            word_max=max(lengths, default=0),
            categories=ALL_CATEGORIES,
        )

        self.stats.total_words = compiled.count()
        self.stats.pruned_words = pruned
        self.stats.tables_emitted = len(tables)
        self.stats.word_min = compiled.word_min
        self.stats.word_max = compiled.word_max

        logger.debug(
            f"Compiled {compiled.count()} words from {len(self._entries)} entries "
            f"({self.stats.skipped_entries} skipped, {pruned} always-valid pruned, "
            f"{len(tables)} tables)"
        )
        return compiled

    def build(self, output_path: Path | str) -> CompileStats:
        """Compile and write the artifact.

        Args:
            output_path: JSON file to write.

        Returns:
            CompileStats.
        """
        output_path = Path(output_path)
        compiled = self.compile()
        compiled.save(output_path)
        self.stats.files_written.append(str(output_path))
        logger.info(f"Wrote {compiled.count()} words to {output_path}")
        return self.stats


def compile_entries(
    entries: Iterable[Entry],
    ignored_variants: Optional[Iterable[IgnoredVariant]] = None,
) -> CompiledDictionary:
    """Convenience function to compile entries in one step."""
    compiler = DictionaryCompiler(ignored_variants=ignored_variants)
    compiler.add_entries(entries)
    return compiler.compile()

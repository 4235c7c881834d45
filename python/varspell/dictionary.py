"""Correction engine.

Answers "what is the correct spelling of this word for this region?" from a
CompiledDictionary. Lookups are case-insensitive, and the case of the input
is reapplied to the suggestions:

    >>> correct_word("Color", Category.BRITISH_ISE)
    ['Colour']
    >>> correct_word("color", Category.AMERICAN) is None
    True

The process-wide default dictionary is built on first use and never changes
afterwards, so any number of threads may query it without locking.
"""

from pathlib import Path
from typing import Optional, Union
import threading

from loguru import logger

from . import config
from .builder import IgnoredVariant, compile_entries
from .ingest import ingestor_for
from .schema import ALL_CATEGORIES, Category, CategorySet, CompiledDictionary
from .tokens import Case, Identifier, Word, apply_case

BUNDLED_CORPUS = Path(__file__).parent / "data" / "varcon.txt"

Token = Union[str, Word, Identifier]


def _token_text(token: Token) -> str:
    return token if isinstance(token, str) else token.token


class VariantsDictionary:
    """Read-only lookups over a compiled variant dictionary."""

    def __init__(self, compiled: CompiledDictionary):
        self.compiled = compiled

    @property
    def word_min(self) -> int:
        return self.compiled.word_min

    @property
    def word_max(self) -> int:
        return self.compiled.word_max

    def all_categories(self) -> CategorySet:
        return self.compiled.categories

    def correct_word(self, word: Token, category: Category) -> Optional[list[str]]:
        """Get the spellings of a word for a category.

        Args:
            word: A single word, as produced by splitting an identifier.
            category: Target category; must be one of the tracked ones.

        Returns:
            Corrections in the input's case, or None if the word is unknown
            or already correct for the category.

        Raises:
            ValueError: If category is not tracked.
        """
        return self._correct(_token_text(word), category)

    def correct_ident(self, ident: Token, category: Category) -> Optional[list[str]]:
        """Like correct_word, for a whole identifier before it is split."""
        return self._correct(_token_text(ident), category)

    def _correct(self, token: str, category: Category) -> Optional[list[str]]:
        if category not in ALL_CATEGORIES:
            raise ValueError(f"{category} is unused")

        if not self.word_min <= len(token) <= self.word_max:
            return None

        links = self.compiled.get(token)
        if links is None:
            return None

        # Union over every entry that does not already accept this spelling.
        corrections: set[str] = set()
        for cats, table in links:
            if category in cats:
                continue
            corrections.update(table.corrections(category))

        if not corrections:
            return None

        case = Case.of(token)
        return [apply_case(c, case) for c in sorted(corrections)]


def load_dictionary(
    corpus_path: Optional[Path | str] = None,
    artifact_path: Optional[Path | str] = None,
) -> VariantsDictionary:
    """Build a VariantsDictionary from an artifact or a corpus.

    Args:
        corpus_path: Corpus to compile (format picked by extension).
            Defaults to the bundled corpus.
        artifact_path: Prebuilt artifact; takes precedence over corpus_path.
    """
    if artifact_path:
        logger.debug(f"Loading variant artifact {artifact_path}")
        return VariantsDictionary(CompiledDictionary.load(Path(artifact_path)))

    corpus_path = Path(corpus_path) if corpus_path else BUNDLED_CORPUS
    result = ingestor_for(corpus_path)().ingest(corpus_path)
    ignored = [IgnoredVariant.from_dict(d) for d in config.default_ignored_variants()]
    compiled = compile_entries(result.entries, ignored_variants=ignored)
    logger.debug(f"Compiled {compiled.count()} variant words from {corpus_path}")
    return VariantsDictionary(compiled)


_default: Optional[VariantsDictionary] = None
_default_lock = threading.Lock()


def default_dictionary() -> VariantsDictionary:
    """Get the process-wide dictionary, building it on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = load_dictionary(
                    corpus_path=config.default_corpus_path(),
                    artifact_path=config.default_artifact_path(),
                )
    return _default


def correct_word(word: Token, category: Category) -> Optional[list[str]]:
    return default_dictionary().correct_word(word, category)


def correct_ident(ident: Token, category: Category) -> Optional[list[str]]:
    return default_dictionary().correct_ident(ident, category)


def all_categories() -> CategorySet:
    return default_dictionary().all_categories()


def __getattr__(name: str) -> int:
    # WORD_MIN / WORD_MAX depend on the corpus, so they resolve lazily.
    if name == "WORD_MIN":
        return default_dictionary().word_min
    if name == "WORD_MAX":
        return default_dictionary().word_max
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

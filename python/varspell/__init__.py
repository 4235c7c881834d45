"""varspell - Regional spelling variant dictionary.

Flags words spelled for one region (American, British, Canadian,
Australian) and suggests the spelling for another. Built for checking
identifiers in source code, not prose.

Core concepts:
    - An Entry groups the regional spellings of one word
    - The compiler keeps only spellings that some region would correct
    - The engine answers per (word, category) with a list or None

Example:
    "A Cv: color / B C D: colour"
    correct_word("color", Category.BRITISH_ISE)  -> ["colour"]
    correct_word("color", Category.AMERICAN)     -> None

Usage:
    from varspell import Category, correct_word, correct_ident

    correct_word("Colour", Category.AMERICAN)        # ["Color"]
    correct_ident("initialise", Category.AMERICAN)   # ["initialize"]

    # Compile a corpus of your own
    from varspell.ingest import varcon
    from varspell.builder import DictionaryCompiler

    compiler = DictionaryCompiler()
    compiler.add_entries(varcon.ingest("path/to/varcon.txt"))
    stats = compiler.build("output/variants.json")
"""

from loguru import logger

from .dictionary import (
    VariantsDictionary,
    all_categories,
    correct_ident,
    correct_word,
    default_dictionary,
    load_dictionary,
)
from .schema import ALL_CATEGORIES, Category, CategorySet, Tag

__version__ = "0.1.0"

logger.disable("varspell")

__all__ = [
    "ALL_CATEGORIES",
    "Category",
    "CategorySet",
    "Tag",
    "VariantsDictionary",
    "all_categories",
    "correct_ident",
    "correct_word",
    "default_dictionary",
    "load_dictionary",
]

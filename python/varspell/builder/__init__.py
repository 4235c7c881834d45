"""Dictionary compiler module.

Compiles variant corpora into the read-only structure the correction
engine queries, optionally persisted as a JSON artifact.
"""

from .compiler import (
    DEFAULT_IGNORED_VARIANTS,
    CompileStats,
    DictionaryCompiler,
    IgnoredVariant,
    compile_entries,
)

__all__ = [
    "DEFAULT_IGNORED_VARIANTS",
    "CompileStats",
    "DictionaryCompiler",
    "IgnoredVariant",
    "compile_entries",
]

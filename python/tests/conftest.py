"""Pytest configuration and fixtures."""

import logging
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from varspell import config
from varspell.schema import Category, Entry, Tag, Variant, VariantType


class PropagateHandler(logging.Handler):
    def emit(self, record):
        logging.getLogger(record.name).handle(record)


@pytest.fixture(autouse=True)
def loguru_to_caplog():
    """Route loguru records into the standard logging tree for caplog."""
    logger.enable("varspell")
    handler_id = logger.add(PropagateHandler(), format="{message}", level="DEBUG")
    yield
    try:
        logger.remove(handler_id)
    except ValueError:  # CLI tests reconfigure loguru and drop every handler
        pass
    logger.disable("varspell")


@pytest.fixture
def fallback_config(monkeypatch):
    """Use the hardcoded defaults regardless of any config.json around."""
    monkeypatch.setattr(config, "_config", {"defaults": config.FALLBACK_DEFAULTS})
    yield
    config.reset()


def make_variant(word: str, *types: str) -> Variant:
    """Build a variant from VARCON type codes, e.g. make_variant("color", "A", "Cv")."""
    parsed = []
    for code in types:
        tag = Tag.from_code(code[1]) if len(code) > 1 else None
        parsed.append(VariantType(Category.from_code(code[0]), tag))
    return Variant(word=word, types=parsed)


def make_entry(*variants: Variant) -> Entry:
    return Entry(variants=list(variants))


@pytest.fixture
def color_entry():
    """The classic American/British alternation."""
    return make_entry(
        make_variant("color", "A", "Cv"),
        make_variant("colour", "B", "C", "D"),
    )


@pytest.fixture
def sample_varcon_content():
    """Sample VARCON-style corpus content."""
    return """# color (level 10)
A Cv: color / B C D: colour
A Cv: colors / B C D: colours | plural

# tire
A C: tire / B D: tyre
A C: tire iron / B D: tyre iron
"""

"""Tests for the ingest module."""

import json
import logging
import tempfile
from pathlib import Path

import pytest

from conftest import make_entry, make_variant
from varspell.ingest import (
    INGESTORS,
    CorpusFormatError,
    Ingestor,
    IngestResult,
    get_ingestor,
    ingestor_for,
    json_corpus,
    register_ingestor,
    varcon,
)
from varspell.ingest.json_corpus import JsonCorpusIngestor
from varspell.ingest.varcon import VarconIngestor, parse_entry
from varspell.schema import Category, Tag


class TestIngestResult:
    """Tests for IngestResult dataclass."""

    def test_repr(self):
        """Test IngestResult string representation."""
        result = IngestResult(
            entries=[],
            source_path="/varcon.txt",
            corpus_name="varcon",
            total_raw=100,
            total_valid=98,
            errors=["a", "b"],
        )
        repr_str = repr(result)
        assert "varcon" in repr_str
        assert "98/100" in repr_str
        assert "2 errors" in repr_str


class TestParseEntry:
    """Tests for VARCON line parsing."""

    def test_simple_line(self):
        """Test variants, categories and tags are read."""
        entry = parse_entry("A Cv: color / B C D: colour")
        assert entry.words() == ["color", "colour"]

        color_types = entry.variants[0].types
        assert color_types[0].category == Category.AMERICAN
        assert color_types[0].tag is None
        assert color_types[1].category == Category.CANADIAN
        assert color_types[1].tag == Tag.VARIANT

    def test_all_codes(self):
        """Test every category and tag code."""
        entry = parse_entry("A. Bv ZV C- Dx _: word")
        types = [(t.category, t.tag) for t in entry.variants[0].types]
        assert types == [
            (Category.AMERICAN, Tag.EQ),
            (Category.BRITISH_ISE, Tag.VARIANT),
            (Category.BRITISH_IZE, Tag.SELDOM),
            (Category.CANADIAN, Tag.POSSIBLE),
            (Category.AUSTRALIAN, Tag.IMPROPER),
            (Category.OTHER, None),
        ]

    def test_note(self):
        """Test text after the bar is kept as a note."""
        entry = parse_entry("A: meter / B C D: metre | unit of length")
        assert entry.words() == ["meter", "metre"]
        assert entry.note == "unit of length"

    def test_multi_word_spelling_is_kept(self):
        """Test phrases parse; the compiler decides whether to use them."""
        entry = parse_entry("A C: tire iron / B D: tyre iron")
        assert entry.words() == ["tire iron", "tyre iron"]

    @pytest.mark.parametrize(
        "line",
        [
            "A Cv color / B: colour",     # missing colon
            "A Cv: / B: colour",          # missing word
            ": color",                    # missing types
            "Q: color",                   # unknown category
            "Aq: color",                  # unknown tag
            "Avv: color",                 # overlong type
        ],
    )
    def test_malformed(self, line):
        """Test malformed lines raise CorpusFormatError."""
        with pytest.raises(CorpusFormatError):
            parse_entry(line)


class TestVarconIngestor:
    """Tests for VarconIngestor."""

    def test_ingest_file(self, sample_varcon_content):
        """Test comments and blank lines are skipped."""
        with tempfile.TemporaryDirectory() as tmpdir:
            filepath = Path(tmpdir) / "varcon.txt"
            filepath.write_text(sample_varcon_content, encoding="utf-8")

            result = VarconIngestor().ingest(filepath)

        assert result.corpus_name == "varcon"
        assert result.total_raw == 4
        assert result.total_valid == 4
        assert result.errors == []
        assert result.entries[1].note == "plural"

    def test_errors_are_collected(self):
        """Test bad lines are recorded with line numbers and skipped."""
        content = "A Cv: color / B C D: colour\nA Cv color\n\nQ: honor\n"
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".txt", delete=False, encoding="utf-8"
        ) as f:
            f.write(content)
            filepath = Path(f.name)

        try:
            result = varcon.ingest(filepath)
            assert result.total_raw == 3
            assert result.total_valid == 1
            assert len(result.errors) == 2
            assert result.errors[0].startswith(f"{filepath.name}:2:")
            assert result.errors[1].startswith(f"{filepath.name}:4:")
        finally:
            filepath.unlink()

    def test_bad_lines_are_logged(self, caplog):
        """Test skipped records show up in debug logs."""
        with tempfile.TemporaryDirectory() as tmpdir:
            filepath = Path(tmpdir) / "bad.txt"
            filepath.write_text("nonsense\n", encoding="utf-8")
            with caplog.at_level(logging.DEBUG):
                varcon.ingest(filepath)

        assert "Skipping malformed record" in caplog.text

    def test_missing_file(self):
        """Test a missing corpus is an error, not an empty result."""
        with pytest.raises(FileNotFoundError):
            varcon.ingest("/nonexistent/varcon.txt")


class TestJsonCorpusIngestor:
    """Tests for JsonCorpusIngestor."""

    def test_round_trip(self, color_entry):
        """Test entries saved as JSON ingest back unchanged."""
        with tempfile.TemporaryDirectory() as tmpdir:
            filepath = Path(tmpdir) / "corpus.json"
            json_corpus.save([color_entry], filepath)
            result = json_corpus.ingest(filepath)

        assert result.total_valid == 1
        assert result.entries[0].symbol() == color_entry.symbol()

    def test_bad_records(self):
        """Test malformed records are collected as errors."""
        data = {
            "entries": [
                {"variants": [{"word": "color", "types": [{"category": "american"}]}]},
                {"variants": [{"types": []}]},
                {"variants": [{"word": "x", "types": [{"category": "martian"}]}]},
                {"variants": []},
            ]
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            filepath = Path(tmpdir) / "corpus.json"
            filepath.write_text(json.dumps(data), encoding="utf-8")
            result = JsonCorpusIngestor().ingest(filepath)

        assert result.total_raw == 4
        assert result.total_valid == 1
        assert len(result.errors) == 3


class TestRegistry:
    """Tests for the ingestor registry."""

    def test_get_ingestor(self):
        """Test built-in ingestors are registered."""
        assert get_ingestor("varcon") is VarconIngestor
        assert get_ingestor("json") is JsonCorpusIngestor

    def test_unknown_ingestor(self):
        """Test unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown ingestor"):
            get_ingestor("hunspell")

    def test_ingestor_for_extension(self):
        """Test picking an ingestor by extension."""
        assert ingestor_for("corpus.json") is JsonCorpusIngestor
        assert ingestor_for("varcon.txt") is VarconIngestor
        assert ingestor_for("varcon") is VarconIngestor

    def test_register_custom(self, monkeypatch):
        """Test registering a custom ingestor."""
        monkeypatch.setitem(INGESTORS, "inline", None)

        class InlineIngestor(Ingestor):
            def parse(self, filepath):
                yield "color|colour", 1

            def to_entry(self, record):
                american, british = record.split("|")
                return make_entry(
                    make_variant(american, "A"),
                    make_variant(british, "B"),
                )

        register_ingestor("inline", InlineIngestor)
        assert get_ingestor("inline") is InlineIngestor
        result = InlineIngestor().ingest("anything")
        assert result.entries[0].words() == ["color", "colour"]

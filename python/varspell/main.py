"""varspell CLI - regional spelling variant dictionary.

Usage:
    python -m varspell.main build --corpus varcon.txt --output variants.json
    python -m varspell.main check --category british color initialize
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from . import config as cfg
from .builder import DictionaryCompiler, IgnoredVariant
from .dictionary import BUNDLED_CORPUS, load_dictionary
from .ingest import get_ingestor, ingestor_for
from .schema import TRACKED_CATEGORIES, Category


def configure_logging(log_level: str = "INFO") -> None:
    """Configures loguru logging."""
    logger.remove()
    format_string = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    logger.add(sys.stderr, level=log_level.upper(), format=format_string)


def run_build(args: argparse.Namespace) -> int:
    corpus = Path(args.corpus)
    ingestor_cls = get_ingestor(args.format) if args.format else ingestor_for(corpus)

    print("=" * 60)
    print("varspell - Regional Variant Dictionary")
    print("=" * 60)
    print(f"Corpus: {corpus}")
    print(f"Output: {args.output}")
    print()

    print("[1/2] Ingesting corpus...")
    result = ingestor_cls().ingest(corpus)
    print(f"  {result.total_valid:,}/{result.total_raw:,} entries parsed")
    for error in result.errors:
        print(f"  SKIP - {error}")

    print("\n[2/2] Compiling dictionary...")
    ignored = [IgnoredVariant.from_dict(d) for d in cfg.default_ignored_variants()]
    compiler = DictionaryCompiler(ignored_variants=ignored)
    compiler.add_entries(result)
    stats = compiler.build(args.output)

    print(f"  Entries: {compiler.get_entry_count():,} "
          f"({stats.skipped_entries:,} not single words, "
          f"{stats.duplicate_entries:,} duplicates)")
    print(f"  Words: {stats.total_words:,} ({stats.pruned_words:,} always valid, pruned)")
    print(f"  Correction tables: {stats.tables_emitted:,}")
    print(f"  Word length: {stats.word_min}-{stats.word_max}")
    print(f"  Files written: {len(stats.files_written)}")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)

    return 0


def run_check(args: argparse.Namespace) -> int:
    category = Category.from_name(args.category)
    dictionary = load_dictionary(
        corpus_path=args.corpus or cfg.default_corpus_path(),
        artifact_path=args.artifact or cfg.default_artifact_path(),
    )

    for word in args.words:
        corrections = dictionary.correct_word(word, category)
        if corrections is None:
            print(f"{word}: ok")
        else:
            print(f"{word} -> {', '.join(corrections)}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="varspell - Regional spelling variant dictionary"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=cfg.get_default("verbose", False),
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Compile a corpus into a JSON artifact")
    build.add_argument(
        "--corpus",
        "-c",
        type=Path,
        default=Path(cfg.default_corpus_path() or BUNDLED_CORPUS),
        help="Corpus file (default: bundled corpus)",
    )
    build.add_argument(
        "--format",
        choices=["varcon", "json"],
        help="Corpus format (default: from file extension)",
    )
    build.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path(cfg.default_output()),
        help=f"Artifact path (default: {cfg.default_output()})",
    )
    build.set_defaults(func=run_build)

    categories = [c.value for c in TRACKED_CATEGORIES]
    check = subparsers.add_parser("check", help="Look words up")
    check.add_argument(
        "--category",
        "-k",
        choices=categories,
        default=cfg.default_category(),
        help=f"Target category (default: {cfg.default_category()})",
    )
    check.add_argument("--corpus", "-c", type=Path, help="Corpus file to compile")
    check.add_argument("--artifact", "-a", type=Path, help="Prebuilt JSON artifact")
    check.add_argument("words", nargs="+", help="Words to check")
    check.set_defaults(func=run_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logger.enable("varspell")
    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        return args.func(args)
    except (ValueError, OSError) as e:
        print(f"ERROR - {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

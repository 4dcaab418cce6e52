"""Quran PDF Builder - Command Line Interface

Assembles selected chapters from a directory of chapter JSON payloads into a
single PDF.

Environment variables (also read from a .env file):
    QURAN_PDF_TITLE: Default cover title
    QURAN_PDF_SUBTITLE: Default cover subtitle
    QURAN_PDF_OUTPUT_DIR: Default output directory
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .config import DEFAULT_COVER_SUBTITLE, DEFAULT_COVER_TITLE
from .content_provider import JsonDirectoryProvider, load_sections
from .cover_options import CoverOptions
from .exceptions import QuranPdfError
from .pipeline import FileSink, QuranPDFPipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quran-pdf",
        description="Assemble selected Quran chapters into a paginated PDF.",
    )
    parser.add_argument("chapters", nargs="*", type=int, help="Chapter ids, in output order")
    parser.add_argument("--source-dir", default=".", help="Directory holding <id>.json chapter payloads")
    parser.add_argument("--title", default=os.getenv("QURAN_PDF_TITLE", DEFAULT_COVER_TITLE))
    parser.add_argument("--subtitle", default=os.getenv("QURAN_PDF_SUBTITLE", DEFAULT_COVER_SUBTITLE))
    parser.add_argument("--no-date", action="store_true", help="Omit the generation date from the cover")
    parser.add_argument("--no-stats", action="store_true", help="Omit chapter/verse counts from the cover")
    parser.add_argument("--output-dir", default=os.getenv("QURAN_PDF_OUTPUT_DIR", "."))
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI. Returns the process exit status."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cover_options = CoverOptions(
            title=args.title,
            subtitle=args.subtitle,
            include_date=not args.no_date,
            include_stats=not args.no_stats,
        )
        sections = load_sections(JsonDirectoryProvider(args.source_dir), args.chapters)
    except QuranPdfError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = QuranPDFPipeline().process(sections, cover_options, sink=FileSink(args.output_dir))
    if result.is_failed:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    print(f"{result.status_message} -> {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command-line entry point: fetch a conference page and export its data as CSV."""

from __future__ import annotations

import argparse
import codecs
import logging
import sys
from os import PathLike
from pathlib import Path

import requests

from .extract import ExtractionError
from .partners import (
    DEFAULT_PARTNERS_OUTPUT,
    PARTNERS_URL,
    extract_partners_from_html,
    write_partners_csv,
)
from .speakers import SpeakerParseError, extract_speakers_json, parse_speakers, write_speakers_csv

__all__ = [
    "DEFAULT_OUTPUT_FILE",
    "TARGET_URL",
    "USER_AGENT",
    "DEBUG_HTML_FILE",
    "fetch_page_content",
    "save_debug_html",
    "run_speakers",
    "run_partners",
    "main",
]

log = logging.getLogger(__name__)

DEFAULT_OUTPUT_FILE = "vivatech_speakers_2025_extended.csv"
TARGET_URL = "https://vivatechnology.com/speakers"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEBUG_HTML_FILE = "debug_vivatech_page.html"

_VERSION = "0.1.0"
_TIMEOUT = 30


def _charset(content_type: str) -> str | None:
    for param in content_type.split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset":
            return value.strip().strip("\"'") or None
    return None


def _decode(response: requests.Response) -> str:
    encoding = _charset(response.headers.get("Content-Type", "")) or "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        encoding = "utf-8"
    return response.content.decode(encoding, errors="replace")


def fetch_page_content(url: str) -> str:
    """Download ``url`` and return its body as text.

    Raises ``requests.HTTPError`` when the server answers with a non-2xx status.
    """
    log.info("Fetching content from URL: %s", url)
    response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=_TIMEOUT)
    status = response.status_code
    if not 200 <= status < 300:
        raise requests.HTTPError(
            f"Server returned non-success status code: {status}", response=response
        )
    content = _decode(response)
    log.info("Successfully fetched %d bytes of content", len(content.encode("utf-8")))
    return content


def save_debug_html(html: str, filename: str | PathLike) -> None:
    """Write a page to disk so a failed extraction can be inspected."""
    Path(filename).write_text(html, encoding="utf-8")
    log.info("Saved debug HTML to: %s", filename)
    print(f"💾 Debug HTML saved to: {filename}")


def run_speakers(url: str, output_path: str | PathLike) -> int:
    """Scrape the speakers page at ``url`` into a CSV file; return the speaker count."""
    print("🌐 Fetching webpage content...")
    html = fetch_page_content(url)

    print("🔍 Extracting speaker data from HTML...")
    try:
        json_text = extract_speakers_json(html)
    except ExtractionError:
        save_debug_html(html, DEBUG_HTML_FILE)
        raise

    print("📊 Parsing JSON data...")
    speakers = parse_speakers(json_text)
    print(f"✅ Found {len(speakers)} speakers")

    print("💾 Writing data to CSV file...")
    write_speakers_csv(speakers, output_path)
    print(f"✨ Successfully saved speaker data to: {output_path}")
    return len(speakers)


def run_partners(url: str, output_path: str | PathLike) -> int:
    """Scrape the partners page at ``url`` into a CSV file; return the partner count."""
    print("🌐 Fetching webpage content...")
    html = fetch_page_content(url)

    print("🔍 Extracting partner data from HTML...")
    partners = extract_partners_from_html(html)
    print(f"✅ Found {len(partners)} partners")

    print("💾 Writing data to CSV file...")
    write_partners_csv(partners, output_path)
    print(f"✨ Successfully saved partner data to: {output_path}")
    return len(partners)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vivatech-scraper",
        description=(
            "Scrapes VivaTech conference data. Extracts speaker and partner data "
            "from the embedded JSON of the conference website and exports it as CSV."
        ),
    )
    parser.add_argument(
        "target",
        nargs="?",
        choices=("speakers", "partners"),
        default="speakers",
        help="what to scrape (default: speakers)",
    )
    parser.add_argument(
        "-o", "--output", help="output CSV file path (defaults depend on target)"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="enable verbose logging; repeat for more detail",
    )
    parser.add_argument("--url", help=argparse.SUPPRESS)
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_VERSION}")
    return parser


def _configure_logging(verbosity: int) -> None:
    levels = {0: logging.WARNING, 1: logging.INFO}
    logging.basicConfig(
        level=levels.get(verbosity, logging.DEBUG),
        format="[%(levelname)s %(name)s] %(message)s",
        stream=sys.stderr,
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    """Run the scraper from the command line and return the exit status."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    print("🔍 VivaTech Scraper")
    print("━━━━━━━━━━━━━━━━━━━")

    try:
        if args.target == "speakers":
            print("🎤 Scraping speakers...")
            run_speakers(args.url or TARGET_URL, args.output or DEFAULT_OUTPUT_FILE)
        else:
            print("🤝 Scraping partners...")
            run_partners(args.url or PARTNERS_URL, args.output or DEFAULT_PARTNERS_OUTPUT)
    except (requests.RequestException, ExtractionError, SpeakerParseError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
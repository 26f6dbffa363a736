"""Command-line front end for the remote script list."""

import argparse
import logging
import re
import sys
from pathlib import Path

import httpx

from lzon.catalog import CatalogError
from lzon.catalog import InvalidIndexError
from lzon.catalog import ScriptCatalog
from lzon.catalog import ScriptEntry
from lzon.catalog import format_entry
from lzon.catalog import list_url

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Available commands:
list - List all available scripts.
inject <number> - Fetch a script and hand it to the loader.
download <number> - Shows url of a script.
search <query> - Search for scripts."""

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_UNAVAILABLE = 2

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
# Digits, optionally with an all-zero fraction ("2" and "2.0" are the same index)
_INDEX_PATTERN = re.compile(r"(\d+)(?:\.0*)?", re.ASCII)


def _parse_index(raw: str) -> int | None:
    match = _INDEX_PATTERN.fullmatch(raw.strip())
    if match is None:
        return None
    return int(match.group(1))


def _lookup(catalog: ScriptCatalog, raw: str) -> ScriptEntry | None:
    index = _parse_index(raw)
    if index is None:
        return None
    try:
        return catalog[index]
    except InvalidIndexError as e:
        logger.debug("%s", e)
        return None


def cmd_list(catalog: ScriptCatalog, args: argparse.Namespace) -> int:
    """Prints every complete entry of the list."""
    print("Available scripts:")
    for entry in catalog:
        print(format_entry(entry))
    return EXIT_OK


def cmd_search(catalog: ScriptCatalog, args: argparse.Namespace) -> int:
    """Prints entries whose name or description contains the query."""
    matches = catalog.search(args.query)
    if not matches:
        print("No results found.", file=sys.stderr)
        return EXIT_NOT_FOUND
    for entry in matches:
        print(format_entry(entry))
    return EXIT_OK


def cmd_download(catalog: ScriptCatalog, args: argparse.Namespace) -> int:
    """Prints the name and source url of one entry."""
    entry = _lookup(catalog, args.index)
    if entry is None:
        print("Invalid index.", file=sys.stderr)
        return EXIT_NOT_FOUND
    print(f"{entry.name} - {entry.url}")
    return EXIT_OK


def save_script(output_dir: Path, entry: ScriptEntry, source: str) -> Path:
    """Writes the script source to ``<output_dir>/<name>.lua``."""
    stem = _UNSAFE_FILENAME_CHARS.sub("_", entry.name).strip("._") or str(
        entry.index
    )
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{stem}.lua"
    path.write_text(source, encoding="utf-8")
    return path


def cmd_inject(catalog: ScriptCatalog, args: argparse.Namespace) -> int:
    """
    Fetches an entry's source and saves it under ``args.output_dir``.

    Exits with EXIT_UNAVAILABLE when the source cannot be fetched or the
    file cannot be written.
    """
    index = _parse_index(args.index)
    if index is None:
        print("Invalid index.", file=sys.stderr)
        return EXIT_NOT_FOUND

    output_dir = Path(args.output_dir)
    try:
        path = catalog.inject(
            index,
            lambda entry, source: save_script(output_dir, entry, source),
            client=args.client,
        )
    except InvalidIndexError:
        print("Invalid index.", file=sys.stderr)
        return EXIT_NOT_FOUND
    except CatalogError as e:
        print(f"Failed to fetch script: {e}", file=sys.stderr)
        return EXIT_UNAVAILABLE
    except OSError as e:
        logger.warning("Could not save script %s to %s: %s", index, output_dir, e)
        print(f"Failed to save script: {e}", file=sys.stderr)
        return EXIT_UNAVAILABLE

    entry = catalog[index]
    print(f"Injected: {entry.name} - {entry.description}")
    logger.info("Saved %s", path)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Builds the argument parser with one subcommand per command."""
    p = argparse.ArgumentParser(
        prog="lzon", description="Browse and fetch scripts from a remote list."
    )
    p.add_argument("--url", help="Script list URL (default: $LZON_LIST_URL)")
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    sub = p.add_subparsers(dest="cmd")

    s = sub.add_parser("list", help="List all available scripts")
    s.set_defaults(func=cmd_list)
    s = sub.add_parser("search", help="Search names and descriptions")
    s.add_argument("query")
    s.set_defaults(func=cmd_search)
    s = sub.add_parser("download", help="Show the url of a script")
    s.add_argument("index")
    s.set_defaults(func=cmd_download)
    s = sub.add_parser("inject", help="Fetch a script and save it")
    s.add_argument("index")
    s.add_argument(
        "--output-dir", "-o", default="scripts", help="Directory to save into"
    )
    s.set_defaults(func=cmd_inject)
    sub.add_parser("help", help="Show available commands")
    return p


def main(
    argv: list[str] | None = None, client: httpx.Client | None = None
) -> int:
    """
    Runs one command and returns its exit code.

    ``client`` is used for every HTTP request when given; otherwise each
    request opens its own.
    """
    p = build_parser()
    args = p.parse_args(argv)
    args.client = client

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd is None or args.cmd == "help":
        print(HELP_TEXT)
        return EXIT_OK

    try:
        catalog = ScriptCatalog.fetch(args.url or list_url(), client=client)
    except CatalogError as e:
        print(f"Failed to load script list: {e}", file=sys.stderr)
        return EXIT_UNAVAILABLE

    return args.func(catalog, args)


if __name__ == "__main__":
    raise SystemExit(main())

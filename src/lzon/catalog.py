"""
Remote script list: fetch, decode and look up entries.

The list is a JSON array of objects carrying ``name``, ``description`` and
``url``. Entries are addressed 1-based, the way they are printed.
"""

import logging
import os
from collections.abc import Callable
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import httpx

import lzon

logger = logging.getLogger(__name__)

DEFAULT_LIST_URL = (
    "https://raw.githubusercontent.com/StanSmits/lboxlualist/"
    "refs/heads/master/list.json"
)
DEFAULT_TIMEOUT = 10.0

REQUIRED_FIELDS = ("name", "description", "url")


class CatalogError(Exception):
    """Raised when the script list cannot be fetched or understood."""


class InvalidIndexError(CatalogError, LookupError):
    """Raised for an index with no complete entry behind it."""


@dataclass(frozen=True)
class ScriptEntry:
    """One script of the list, with its 1-based position."""

    index: int
    name: str
    description: str
    url: str


ScriptLoader = Callable[[ScriptEntry, str], Any]


def list_url() -> str:
    """Returns the list URL, honouring LZON_LIST_URL."""
    return os.environ.get("LZON_LIST_URL", DEFAULT_LIST_URL)


def fetch_text(
    url: str,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """
    Fetches a complete response body as text.

    Uses ``client`` when given, otherwise a short-lived client that follows
    redirects. Non-2xx responses and transport failures raise CatalogError.
    """
    logger.debug("Fetching %s", url)
    try:
        if client is None:
            with httpx.Client(follow_redirects=True, timeout=timeout) as owned:
                response = owned.get(url)
                response.raise_for_status()
        else:
            response = client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Fetch of %s failed: %s", url, e)
        raise CatalogError(f"failed to fetch {url}: {e}") from e

    return response.text


def format_entry(entry: ScriptEntry) -> str:
    """Formats an entry as a numbered list line."""
    return f"[{entry.index}] {entry.name} - {entry.description}"


class ScriptCatalog:
    """
    Decoded script list.

    Keeps the raw decoded objects so an entry missing a field only fails
    when it is looked up, not when the list is decoded.
    """

    def __init__(self, items: list[dict[str, Any]]):
        self._items = items

    @classmethod
    def from_text(cls, text: str) -> "ScriptCatalog":
        try:
            value = lzon.decode(text)
        except lzon.JSONDecodeError as e:
            logger.warning("Script list is not valid JSON: %s", e)
            raise CatalogError(f"failed to decode script list: {e}") from e

        if not isinstance(value, list):
            raise CatalogError(
                f"script list must be an array, got {type(value).__name__}"
            )
        for position, item in enumerate(value, start=1):
            if not isinstance(item, dict):
                raise CatalogError(f"script list item {position} is not an object")
        return cls(value)

    @classmethod
    def fetch(
        cls, url: str | None = None, client: httpx.Client | None = None
    ) -> "ScriptCatalog":
        """Fetches and decodes the list; decode runs on the whole body."""
        catalog = cls.from_text(fetch_text(url or list_url(), client=client))
        logger.debug("Loaded %d scripts", len(catalog))
        return catalog

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> ScriptEntry:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidIndexError(f"invalid index {index!r}")
        if not 1 <= index <= len(self._items):
            raise InvalidIndexError(f"invalid index {index}")

        item = self._items[index - 1]
        missing = [
            field for field in REQUIRED_FIELDS if not isinstance(item.get(field), str)
        ]
        if missing:
            raise InvalidIndexError(
                f"script {index} is missing {', '.join(missing)}"
            )
        return ScriptEntry(index, item["name"], item["description"], item["url"])

    def __iter__(self) -> Iterator[ScriptEntry]:
        for index in range(1, len(self._items) + 1):
            try:
                yield self[index]
            except InvalidIndexError as e:
                logger.debug("Skipping %s", e)

    def search(self, query: str) -> list[ScriptEntry]:
        """Case-insensitive substring match on name or description."""
        needle = query.lower()
        return [
            entry
            for entry in self
            if needle in entry.name.lower() or needle in entry.description.lower()
        ]

    def inject(
        self,
        index: int,
        loader: ScriptLoader,
        client: httpx.Client | None = None,
    ) -> Any:
        """
        Fetches the script source and hands it to ``loader``.

        The loader is the host's code-loading facility; it is only called
        with a complete source body.
        """
        entry = self[index]
        source = fetch_text(entry.url, client=client)
        logger.info("Loading %s from %s", entry.name, entry.url)
        return loader(entry, source)


__all__ = [
    "DEFAULT_LIST_URL",
    "CatalogError",
    "InvalidIndexError",
    "ScriptCatalog",
    "ScriptEntry",
    "fetch_text",
    "format_entry",
    "list_url",
]

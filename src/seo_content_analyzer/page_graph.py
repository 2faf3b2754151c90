"""
Page graph loading.

Reads internal link data for a site from JSON, either as a list of page
records or as {"pages": [...]}. Records use snake_case or camelCase keys:

    [{"url": "https://example.com/", "internalLinksTo": ["https://example.com/a"]}]
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Union

from .link_distribution import PageInput, coerce_pages, url_key
from .models import InvalidPageDataError, PageLinkData

logger = logging.getLogger(__name__)


class PageGraphLoadError(Exception):
    """Raised when a page graph file cannot be loaded."""
    pass


def load_page_graph(file_path: Union[str, Path]) -> list[PageLinkData]:
    """
    Load page records from a JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Validated page records in file order.

    Raises:
        PageGraphLoadError: If the file is missing, not JSON, or malformed.
    """
    path = Path(file_path)
    if not path.exists():
        raise PageGraphLoadError(f"File not found: {file_path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PageGraphLoadError(f"Failed to read page graph: {e}")

    if isinstance(data, dict):
        data = data.get("pages")
    if not isinstance(data, list):
        raise PageGraphLoadError(
            'Page graph must be a JSON list of pages or an object with a "pages" list'
        )

    try:
        pages = coerce_pages(data)
    except InvalidPageDataError as e:
        raise PageGraphLoadError(f"Invalid page record: {e}")

    logger.info(f"Loaded {len(pages)} page(s) from {file_path}")
    return pages


def build_incoming_links(pages: Iterable[PageInput]) -> list[PageLinkData]:
    """
    Fill internal_links_from from every page's internal_links_to.

    Existing incoming links are kept; derived ones are appended without
    duplicates. Links to URLs outside the page set are ignored.

    Args:
        pages: Page records, usually with only outgoing links supplied.

    Returns:
        New PageLinkData records in input order.

    Raises:
        InvalidPageDataError: If a page record is malformed.
    """
    records = coerce_pages(pages)
    incoming: dict[str, list[str]] = {
        url_key(p.url): list(p.internal_links_from) for p in records
    }

    for page in records:
        for target in page.internal_links_to:
            sources = incoming.get(url_key(target))
            if sources is not None and page.url not in sources:
                sources.append(page.url)

    return [
        PageLinkData(
            url=p.url,
            internal_links_to=list(p.internal_links_to),
            internal_links_from=incoming[url_key(p.url)],
        )
        for p in records
    ]

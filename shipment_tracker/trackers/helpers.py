"""HTML and URL helpers for the scraping trackers."""

from typing import Any, Dict, Iterable, Optional, Union
from urllib.parse import urlencode

from bs4 import BeautifulSoup, NavigableString, Tag

from ..utils import squash_whitespace


def build_url(base: str, *param_maps: Optional[Dict[str, Any]]) -> str:
    """Append query params to a URL, later maps overriding earlier ones."""
    query: Dict[str, Any] = {}
    for params in param_maps:
        query.update(params or {})
    if not query:
        return base
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{urlencode(query)}"


def to_soup(contents: str) -> BeautifulSoup:
    return BeautifulSoup(contents, "lxml")


def node_value(element: Optional[Union[Tag, NavigableString]], preserve_line_breaks: bool = False) -> Optional[str]:
    """Get the normalized text of an element.

    With ``preserve_line_breaks`` each ``<br>`` becomes a ``|`` separator.
    """
    if element is None:
        return None

    if preserve_line_breaks and isinstance(element, Tag):
        value = _value_with_line_breaks(element)
    else:
        value = element.get_text() if isinstance(element, Tag) else str(element)

    return squash_whitespace(value)


def _value_with_line_breaks(element: Tag) -> str:
    parts = []
    for child in element.children:
        if isinstance(child, Tag) and child.name == "br":
            parts.append("|")
        else:
            parts.append(node_value(child) or "")
    return "".join(parts).rstrip("|")


def description_for_term(
    soup: Tag,
    terms: Union[str, Iterable[str]],
    with_line_breaks: bool = False,
    term_tag: str = "dt",
    description_tag: str = "dd",
) -> Optional[str]:
    """Find the description following a definition term that starts with one of ``terms``."""
    terms = [terms] if isinstance(terms, str) else list(terms)

    for definition_list in soup.find_all("dl"):
        term_matched = False
        for child in definition_list.find_all(True, recursive=False):
            if child.name == description_tag and term_matched:
                return node_value(child, with_line_breaks)
            if child.name != term_tag:
                continue
            term_text = node_value(child) or ""
            if any(term_text.startswith(term) for term in terms):
                term_matched = True

    return None


def cells(row: Tag) -> list:
    """Normalized text of the ``td`` cells of a table row."""
    return [node_value(cell) or "" for cell in row.find_all("td", recursive=False)]

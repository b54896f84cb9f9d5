"""Parse HTML into a BeautifulSoup tree and serialize it back.

Serialization concatenates the outer HTML of each top-level node with no
re-indentation. Whitespace normalization, when requested, happens at parse
time.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, NavigableString
from bs4.element import PageElement

# Text inside these elements is significant and never normalized
_PRESERVE_WHITESPACE = frozenset({"script", "style", "pre", "textarea"})

_WS_RE = re.compile(r"\s+")


def _normalize_whitespace(soup: BeautifulSoup) -> None:
    # Collect first, replace after: replace_with mutates the sibling chain
    targets: list[NavigableString] = []
    for text in soup.find_all(string=True):
        if any(parent.name in _PRESERVE_WHITESPACE for parent in text.parents):
            continue
        if type(text) is not NavigableString:
            # Doctype, CData, ProcessingInstruction and friends
            continue
        targets.append(text)

    for text in targets:
        collapsed = _WS_RE.sub(" ", str(text))
        if collapsed != str(text):
            text.replace_with(NavigableString(collapsed))


def parse_document(html: str, *, normalize_whitespace: bool = False) -> BeautifulSoup:
    """Parse HTML text into a document tree using bs4's html.parser builder."""

    soup = BeautifulSoup(html, "html.parser")
    if normalize_whitespace:
        _normalize_whitespace(soup)
    return soup


def _outer_html(node: PageElement) -> str:
    if isinstance(node, NavigableString):
        # Applies entity substitution and Doctype/Comment delimiters
        return node.output_ready()
    return node.decode()


def serialize_document(soup: BeautifulSoup) -> str:
    """Flatten a document tree back into HTML text."""

    return "".join(_outer_html(node) for node in soup.contents)


__all__ = ["parse_document", "serialize_document"]

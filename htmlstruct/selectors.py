"""
htmlstruct Selector Resolver

Thin layer over lxml: parses HTML documents and evaluates XPath (or CSS,
translated to XPath by parsel) against a document or a sub-tree.
"""

import logging
from typing import Any, List, Optional

import parsel
from lxml import etree, html

from .errors import ParseError, SelectorError

logger = logging.getLogger(__name__)

SELECTOR_TYPES = ('xpath', 'css')


def parse_html(text: str) -> html.HtmlElement:
    """
    Parse raw HTML text into a document tree

    Args:
        text: Complete or partial HTML document

    Returns:
        The root <html> element

    Raises:
        ParseError: if the text is not a string, is empty, or lxml rejects it
    """
    if not isinstance(text, str):
        raise ParseError(f"parsing html: expected str, got {type(text).__name__}")

    if not text.strip():
        raise ParseError("parsing html: document is empty")

    try:
        return html.document_fromstring(text)
    except ValueError:
        # lxml refuses str input carrying an XML encoding declaration
        logger.debug("Re-parsing document with an encoding declaration as UTF-8 bytes")
    except etree.ParserError as e:
        raise ParseError(f"parsing html: {e}") from e

    try:
        return html.document_fromstring(text.encode('utf-8'), parser=html.HTMLParser(encoding='utf-8'))
    except (etree.ParserError, ValueError) as e:
        raise ParseError(f"parsing html: {e}") from e


def to_xpath(selector: str, selector_type: str = 'xpath') -> str:
    """Return the XPath form of a selector"""
    if selector_type == 'xpath':
        return selector
    if selector_type == 'css':
        try:
            return parsel.css2xpath(selector)
        except Exception as e:
            raise SelectorError(selector, e) from e
    raise ValueError(f"Unknown selector type: {selector_type} (expected one of {SELECTOR_TYPES})")


def resolve_all(scope: Any, selector: str, selector_type: str = 'xpath') -> List[Any]:
    """
    Find every node matching selector under scope, in document order

    Absence of a match is an empty list. Attribute and text selections come
    back as strings; scalar XPath results become a one-item list.

    Raises:
        SelectorError: if the selector cannot be compiled or evaluated
    """
    xpath = to_xpath(selector, selector_type)

    try:
        result = scope.xpath(xpath)
    except etree.XPathError as e:
        raise SelectorError(selector, e) from e

    if isinstance(result, list):
        return result

    # string(), count() and boolean expressions
    logger.debug(f"Selector {selector!r} returned scalar {result!r}")
    return [str(result)]


def resolve_one(scope: Any, selector: str, selector_type: str = 'xpath') -> Optional[Any]:
    """First node matching selector under scope, or None"""
    matches = resolve_all(scope, selector, selector_type)
    if not matches:
        return None
    return matches[0]


def inner_text(node: Any) -> str:
    """Concatenated text of a node and its descendants"""
    if isinstance(node, str):
        return str(node)

    if isinstance(node, etree._Element):
        if isinstance(node, (etree._Comment, etree._ProcessingInstruction)):
            return node.text or ""
        return etree.tostring(node, method='text', encoding='unicode', with_tail=False)

    return str(node)


def resolve_scopes(scope: Any, selector: str, selector_type: str = 'xpath') -> List[Any]:
    """
    Elements matching a collection selector, each used as a record scope

    Raises:
        SelectorError: if the selector is invalid or selects anything other
            than elements (attributes, text, scalar results)
    """
    matches = resolve_all(scope, selector, selector_type)

    for match in matches:
        if not isinstance(match, etree._Element):
            raise SelectorError(selector, "collection selector must select elements")

    return matches

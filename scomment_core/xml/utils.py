"""
XML Utility Functions
=====================

Helpers for handling structured comment sections as XML fragments,
i.e. mixed text and elements without a single root element.
"""

from typing import Any, Optional
import logging

from lxml import etree

logger = logging.getLogger(__name__)

# Synthetic root used to parse a fragment as a document
FRAGMENT_ROOT = "fragment"


def make_fragment_parser(recover: bool = False) -> etree.XMLParser:
    """
    Create a non-validating parser that only checks well-formedness.

    No DTD is loaded, no entities are resolved and nothing is fetched
    from the network. Use recover=True for content that has already been
    validated, so undeclared namespace prefixes do not stop the parse.
    """
    return etree.XMLParser(
        load_dtd=False,
        dtd_validation=False,
        resolve_entities=False,
        no_network=True,
        recover=recover,
    )


def wrap_fragment(content: str, root_tag: str = FRAGMENT_ROOT) -> str:
    """
    Wrap fragment content in a synthetic root element.

    Example:
        >>> wrap_fragment("a <b>bold</b> word")
        '<fragment>a <b>bold</b> word</fragment>'
    """
    return f"<{root_tag}>{content}</{root_tag}>"


def parse_fragment(content: str, parser: Optional[etree.XMLParser] = None) -> Any:
    """
    Parse fragment content and return the synthetic root element.

    The default parser recovers from errors; check the fragment with
    WellFormednessValidator first.
    """
    parser = parser if parser is not None else make_fragment_parser(recover=True)
    return etree.fromstring(wrap_fragment(content).encode('utf-8'), parser)


def append_fragment(parent: Any, content: str,
                    parser: Optional[etree.XMLParser] = None) -> None:
    """
    Append the text and nodes of a fragment to the end of parent.

    Args:
        parent: lxml Element receiving the content
        content: Well-formed fragment content
        parser: Optional parser to reuse
    """
    root = parse_fragment(content, parser)

    if root.text:
        if len(parent):
            last = parent[-1]
            last.tail = (last.tail or "") + root.text
        else:
            parent.text = (parent.text or "") + root.text

    for child in list(root):
        parent.append(child)

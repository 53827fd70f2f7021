"""
XML Processing Utilities
========================

Fragment handling and annotation output for structured comments.
"""

from scomment_core.xml.utils import (
    FRAGMENT_ROOT,
    make_fragment_parser,
    wrap_fragment,
    parse_fragment,
    append_fragment,
)

from scomment_core.xml.annotations import (
    comment_to_element,
    comments_to_element,
    comments_to_xml,
)

__all__ = [
    "FRAGMENT_ROOT",
    "make_fragment_parser",
    "wrap_fragment",
    "parse_fragment",
    "append_fragment",
    "comment_to_element",
    "comments_to_element",
    "comments_to_xml",
]

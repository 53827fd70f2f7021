"""
Annotation Output
=================

Serializes structured comments for the documentation generator:

    <scomments>
      <scomment type="elem" name="article" root="true">
        <annotations>
          <annotation type="tags"><tag>root</tag></annotation>
          <annotation type="notes">Top level <a href='#p=elem-front'>...</a></annotation>
        </annotations>
      </scomment>
    </scomments>

Section content is parsed into the tree, not escaped, so the XSLT stage
sees the links and tags as elements.
"""

from typing import Any, Iterable, Optional
import logging

from lxml import etree

from scomment_core.xml.utils import append_fragment, make_fragment_parser

logger = logging.getLogger(__name__)


def comment_to_element(comment: Any, parser: Optional[etree.XMLParser] = None) -> Any:
    """
    Build the <scomment> element for one structured comment.

    Args:
        comment: SComment whose sections have all been added
        parser: Optional fragment parser to reuse

    Returns:
        lxml Element
    """
    parser = parser if parser is not None else make_fragment_parser(recover=True)

    elem = etree.Element("scomment", type=comment.kind.slug)
    if comment.name is not None:
        elem.set("name", comment.name)
    if comment.title:
        elem.set("title", comment.title)
    if comment.is_root:
        elem.set("root", "true")

    annotations = etree.SubElement(elem, "annotations")
    for name in comment.section_names():
        annotation = etree.SubElement(annotations, "annotation", type=name)
        append_fragment(annotation, comment.get_section(name), parser)

    return elem


def comments_to_element(comments: Iterable[Any]) -> Any:
    """Build an <scomments> element holding every comment."""
    parser = make_fragment_parser(recover=True)
    root = etree.Element("scomments")
    count = 0
    for comment in comments:
        root.append(comment_to_element(comment, parser))
        count += 1
    logger.debug(f"Serialized {count} structured comment(s)")
    return root


def comments_to_xml(comments: Iterable[Any], pretty_print: bool = False) -> str:
    """Serialize comments to an XML string."""
    root = comments_to_element(comments)
    return etree.tostring(root, encoding="unicode", pretty_print=pretty_print)

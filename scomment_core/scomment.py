"""
Structured Comments
===================

A structured comment ("scomment") is an annotation block written in a DTD
next to the declaration it documents. Its identifier names the target:

    %name;  parameter entity      &name;  general entity
    <name>  element               @name   attribute
    other   module (the identifier text, if any, is the module title)

The comment body is split into named sections by the DTD scanner, which
adds them one at a time through ``SComment.add_section``.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple
import logging
import threading

from scomment_core.processor import SectionProcessor

logger = logging.getLogger(__name__)


class CommentType(IntEnum):
    """Target of a structured comment; values match the DTD entity kinds."""

    PARAMETER_ENTITY = 1
    GENERAL_ENTITY = 2
    MODULE = 3
    ELEMENT = 4
    ATTRIBUTE = 5

    @property
    def slug(self) -> str:
        """Short name used in anchors and annotation output."""
        return _SLUGS[self]


_SLUGS = {
    CommentType.PARAMETER_ENTITY: "pe",
    CommentType.GENERAL_ENTITY: "ge",
    CommentType.MODULE: "module",
    CommentType.ELEMENT: "elem",
    CommentType.ATTRIBUTE: "attr",
}


def _strip_semicolon(name: str) -> str:
    # the closing semicolon is optional in entity identifiers
    return name[:-1] if name.endswith(";") else name


def classify_identifier(identifier: Optional[str]) -> Tuple[CommentType, Optional[str], Optional[str]]:
    """
    Work out what a structured comment is attached to.

    Args:
        identifier: Text following the comment opener, e.g. "<split>"

    Returns:
        Tuple of (kind, name, title). Module comments have no name (the
        scanner supplies one later) and use a non-empty identifier as title.

    Example:
        >>> classify_identifier("%block-elements;")
        (<CommentType.PARAMETER_ENTITY: 1>, 'block-elements', None)
    """
    identifier = identifier or ""

    if identifier.startswith("%"):
        return CommentType.PARAMETER_ENTITY, _strip_semicolon(identifier[1:]), None
    if identifier.startswith("&"):
        return CommentType.GENERAL_ENTITY, _strip_semicolon(identifier[1:]), None
    if identifier.startswith("<") and identifier.endswith(">"):
        return CommentType.ELEMENT, identifier[1:-1], None
    if identifier.startswith("@"):
        return CommentType.ATTRIBUTE, identifier[1:], None

    return CommentType.MODULE, None, identifier or None


class SComment:
    """
    A single structured comment from the DTD.

    Sections are only stored once their processed content has passed the
    well-formedness check; a rejected section leaves the comment unchanged.

    Example:
        comment = SComment("<article>")
        comment.add_section("tags", "root journal")
        comment.add_section("notes", "Top level element, see @article-type")
        comment.is_root           # True
        comment.get_section("notes")
    """

    def __init__(self, identifier: Optional[str], processor: Optional[SectionProcessor] = None):
        """
        Args:
            identifier: Raw identifier such as "<split>" or "%para.content;"
            processor: Section processor to use (default: no external converter)
        """
        self._kind, self._name, self._title = classify_identifier(identifier)
        self._processor = processor if processor is not None else SectionProcessor()
        self._sections: Dict[str, str] = {}
        self._root = False

    def __repr__(self) -> str:
        return f"SComment({self._kind.name}, name={self._name!r}, sections={list(self._sections)})"

    @property
    def kind(self) -> CommentType:
        return self._kind

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        # Module comments are named after the DTD file they appear in
        self._name = value

    @property
    def title(self) -> Optional[str]:
        return self._title

    @property
    def is_root(self) -> bool:
        """True if a tags section contained the tag "root"."""
        return self._root

    @property
    def sections(self) -> Mapping[str, str]:
        """Read-only view of the accepted sections, in insertion order."""
        return MappingProxyType(self._sections)

    def add_section(self,
                    name: str,
                    text: str,
                    timeout: Optional[float] = None,
                    cancel_event: Optional[threading.Event] = None) -> str:
        """
        Process a section and store it under its name.

        Args:
            name: Section name, e.g. "tags", "schematron" or "notes"
            text: Raw section text from the DTD
            timeout: Seconds to allow the external converter
            cancel_event: Abandons a running external converter when set

        Returns:
            The stored section content

        Raises:
            MalformedSectionError: If the processed content is not well-formed
        """
        section = self._processor.process(name, text, timeout=timeout, cancel_event=cancel_event)

        self._sections[name] = section.content
        if section.is_root:
            self._root = True

        return section.content

    def get_section(self, name: str) -> Optional[str]:
        return self._sections.get(name)

    def section_names(self) -> Iterator[str]:
        """Iterate over the names of all stored sections."""
        return iter(list(self._sections))

    def has_section(self, name: str) -> bool:
        return name in self._sections

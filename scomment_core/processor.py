"""
Section Processor
=================

Turns raw structured comment sections into validated markup.

Section names select the processing:

    tags        whitespace separated tags -> <tag>..</tag> elements
    schematron  passed through unchanged
    json        passed through unchanged
    anything    link resolution, then the comment converter

Every result is checked for well-formedness before it is returned.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging
import threading

from scomment_core.config.settings import EngineConfig
from scomment_core.errors import MalformedSectionError
from scomment_core.mapping.link_resolver import LinkResolver
from scomment_core.transform.converter import CommentConverter, ConversionResult
from scomment_core.validation.base import BaseValidator
from scomment_core.validation.wellformed import WellFormednessValidator

logger = logging.getLogger(__name__)

TAGS_SECTION = "tags"
ROOT_TAG = "root"
PASS_THROUGH_SECTIONS = frozenset({"schematron", "json"})


@dataclass
class ProcessedSection:
    """A section that passed validation."""

    name: str
    content: str
    is_root: bool = False
    degraded: bool = False  # External converter failed, text left unconverted


def build_tags(text: str) -> Tuple[str, bool]:
    """
    Convert a whitespace separated tag list into <tag> elements.

    Returns:
        Tuple of (markup, has_root_tag)
    """
    tags: List[str] = text.split()
    markup = "".join(f"<tag>{tag}</tag>" for tag in tags)
    return markup, ROOT_TAG in tags


class SectionProcessor:
    """
    The structured comment engine.

    Holds the link resolver, the comment converter and the validator, all
    built once from an EngineConfig.

    Example:
        processor = SectionProcessor(load_config(Path("scomment.yaml")))
        comment = processor.new_comment("<front>")
        comment.add_section("notes", "Contains `<article-meta>")
    """

    def __init__(self,
                 config: Optional[EngineConfig] = None,
                 validator: Optional[BaseValidator] = None):
        """
        Args:
            config: Engine configuration (default: no external converter)
            validator: Section validator (default: well-formedness check)

        Raises:
            InitializationError: If the default validator cannot be created
        """
        self.config = config or EngineConfig()
        self.resolver = LinkResolver(self.config.links)
        self.converter = CommentConverter(self.config.converter)
        self.validator = validator if validator is not None else WellFormednessValidator()

    def new_comment(self, identifier: Optional[str]):
        """Create a structured comment that uses this processor."""
        from scomment_core.scomment import SComment
        return SComment(identifier, processor=self)

    def convert_text(self,
                     text: str,
                     timeout: Optional[float] = None,
                     cancel_event: Optional[threading.Event] = None) -> ConversionResult:
        """Link shorthand references and run the comment converter."""
        linked = self.resolver.resolve(text)
        return self.converter.run(linked, timeout=timeout, cancel_event=cancel_event)

    def process(self,
                name: str,
                text: str,
                timeout: Optional[float] = None,
                cancel_event: Optional[threading.Event] = None) -> ProcessedSection:
        """
        Process one section.

        Raises:
            MalformedSectionError: If the result is not a well-formed fragment
        """
        is_root = False
        degraded = False

        if name == TAGS_SECTION:
            content, is_root = build_tags(text)
        elif name in PASS_THROUGH_SECTIONS:
            content = text
        else:
            conversion = self.convert_text(text, timeout=timeout, cancel_event=cancel_event)
            content = conversion.text
            degraded = conversion.degraded

        result = self.validator.validate_fragment(content, context=name)
        if not result.is_valid:
            logger.debug(f"Rejected section '{name}': {result.summary()}")
            raise MalformedSectionError(name, content, result.summary())

        return ProcessedSection(name=name, content=content, is_root=is_root, degraded=degraded)

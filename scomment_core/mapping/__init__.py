"""
Reference Linking
=================

Turns shorthand references in structured comments into hyperlinks.
"""

from scomment_core.mapping.link_resolver import (
    LinkResolver,
    LinkRule,
    TRIGGER_CHARS,
    general_entity_pattern,
    strip_escapes,
)

__all__ = [
    "LinkResolver",
    "LinkRule",
    "TRIGGER_CHARS",
    "general_entity_pattern",
    "strip_escapes",
]

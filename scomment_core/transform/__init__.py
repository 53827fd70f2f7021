"""
Comment Transformation
======================

External converter adapter for structured comment text.
"""

from scomment_core.transform.converter import (
    CommentConverter,
    ConversionResult,
    POLL_INTERVAL,
    parse_command,
)

__all__ = [
    "CommentConverter",
    "ConversionResult",
    "POLL_INTERVAL",
    "parse_command",
]

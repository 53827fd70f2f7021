"""
Error Types
===========

Exceptions raised by the structured comment engine.
"""

from typing import Optional

SEPARATOR = "-" * 61


class SCommentError(Exception):
    """Base class for structured comment errors."""


class MalformedSectionError(SCommentError):
    """
    A section, after processing, is not a well-formed XML fragment.

    Attributes:
        section_name: Name of the rejected section
        content: The processed content that failed to parse
        details: Parser message (optional)
    """

    def __init__(self, section_name: str, content: str, details: Optional[str] = None):
        self.section_name = section_name
        self.content = content
        self.details = details
        super().__init__(self.format_report())

    def format_report(self) -> str:
        """Render the diagnostic with the offending content framed."""
        lines = [
            "",
            f"The following annotation ({self.section_name}), after processing, is not valid XML:",
            SEPARATOR,
            self.content,
            SEPARATOR,
        ]
        if self.details:
            lines.append(self.details)
        return "\n".join(lines) + "\n"


class ConverterError(SCommentError):
    """The external comment converter could not be run."""


class InitializationError(SCommentError):
    """The well-formedness checker could not be created."""

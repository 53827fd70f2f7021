"""
Well-Formedness Validator
=========================

Checks that processed section content is a well-formed XML fragment
before it is accepted into a structured comment.
"""

import logging

from lxml import etree

from scomment_core.errors import InitializationError
from scomment_core.validation.base import BaseValidator, ValidationResult
from scomment_core.xml.utils import make_fragment_parser, wrap_fragment

logger = logging.getLogger(__name__)

NAMESPACE_DOMAIN = etree.ErrorDomains.NAMESPACE


class WellFormednessValidator(BaseValidator):
    """
    Non-validating XML checker.

    Example:
        validator = WellFormednessValidator()
        result = validator.validate_fragment("<tag>root</tag><tag>x</tag>")
        assert result.is_valid
    """

    def __init__(self):
        """
        Raises:
            InitializationError: If the XML parser cannot be created
        """
        try:
            self._parser = make_fragment_parser()
        except Exception as e:
            raise InitializationError(f"Fatal error during initialization: {e}") from e

    @property
    def schema_type(self) -> str:
        return "Well-formedness"

    def validate_string(self, xml_string: str, context: str = "string") -> ValidationResult:
        """
        Check that xml_string parses as an XML document.

        Namespace errors (e.g. an undeclared "sch:" prefix) are not
        well-formedness errors and are ignored.
        """
        result = ValidationResult()

        try:
            etree.fromstring(xml_string.encode('utf-8'), self._parser)
        except etree.XMLSyntaxError as e:
            log = list(e.error_log)
            entries = [entry for entry in log if entry.domain != NAMESPACE_DOMAIN]
            if not log:
                result.add_error(
                    context=context,
                    message=str(e),
                    error_type="XML Syntax Error",
                    line=getattr(e, 'lineno', None),
                )
            for entry in entries:
                result.add_error(
                    context=context,
                    message=entry.message,
                    error_type="XML Syntax Error",
                    line=entry.line,
                    column=entry.column,
                )

        if not result.is_valid:
            logger.debug(f"{context}: {result.error_count} well-formedness error(s)")

        return result

    def validate_fragment(self, fragment: str, context: str = "fragment") -> ValidationResult:
        """Check that fragment parses once wrapped in a synthetic root."""
        return self.validate_string(wrap_fragment(fragment), context)

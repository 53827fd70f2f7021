"""
Base Validation Classes
=======================

Abstract base classes for the validation framework. Extend these classes
to create validators for section content.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """
    Container for validation results.

    Attributes:
        is_valid: Whether validation passed
        error_count: Total number of errors
        warning_count: Total number of warnings
        errors: List of error dictionaries with keys:
            - context: What was validated (e.g. a section name)
            - line: Line number (optional)
            - column: Column number (optional)
            - type: Error type/category
            - message: Error description
            - severity: 'Error', 'Warning', or 'Info'
    """
    is_valid: bool = True
    error_count: int = 0
    warning_count: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def add_error(self,
                  context: str,
                  message: str,
                  error_type: str = "Validation Error",
                  line: Optional[int] = None,
                  column: Optional[int] = None,
                  severity: str = "Error") -> None:
        """
        Add an error to the result.

        Args:
            context: What was validated
            message: Error description
            error_type: Error type/category
            line: Line number (optional)
            column: Column number (optional)
            severity: 'Error', 'Warning', or 'Info'
        """
        self.errors.append({
            'context': context,
            'line': line,
            'column': column,
            'type': error_type,
            'message': message,
            'severity': severity,
        })

        if severity == "Error":
            self.error_count += 1
            self.is_valid = False
        elif severity == "Warning":
            self.warning_count += 1

    def summary(self) -> str:
        """Generate a text summary of validation results."""
        if self.is_valid:
            return "Validation PASSED - No errors found"

        lines = [
            f"Validation FAILED - {self.error_count} error(s), {self.warning_count} warning(s)",
        ]
        for error in self.errors:
            location = ""
            if error['line'] is not None:
                location = f" line {error['line']}"
                if error['column'] is not None:
                    location += f", column {error['column']}"
            lines.append(f"  {error['type']}{location}: {error['message']}")

        return "\n".join(lines)


class BaseValidator(ABC):
    """
    Abstract base class for validators.

    Example:
        class NonEmptyValidator(BaseValidator):
            def validate_string(self, xml_string, context="string"):
                result = ValidationResult()
                if not xml_string.strip():
                    result.add_error(context, "Section is empty")
                return result

            def validate_fragment(self, fragment, context="fragment"):
                return self.validate_string(fragment, context)
    """

    @abstractmethod
    def validate_string(self, xml_string: str, context: str = "string") -> ValidationResult:
        """
        Validate XML from a string.

        Args:
            xml_string: XML content as string
            context: Context string for error reporting

        Returns:
            ValidationResult with validation outcome
        """
        pass

    @abstractmethod
    def validate_fragment(self, fragment: str, context: str = "fragment") -> ValidationResult:
        """
        Validate content that may lack a single root element.

        Args:
            fragment: Mixed text and elements, e.g. a processed section
            context: Context string for error reporting

        Returns:
            ValidationResult with validation outcome
        """
        pass

    @property
    def schema_type(self) -> str:
        """Return the kind of check this validator performs."""
        return "Unknown"

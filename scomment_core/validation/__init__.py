"""
Validation Framework
====================

Validators for structured comment section content.

Components:
- BaseValidator: Abstract base class for all validators
- ValidationResult: Container for validation results
- WellFormednessValidator: Non-validating XML well-formedness check
"""

from scomment_core.validation.base import (
    BaseValidator,
    ValidationResult,
)

from scomment_core.validation.wellformed import (
    WellFormednessValidator,
)

__all__ = [
    "BaseValidator",
    "ValidationResult",
    "WellFormednessValidator",
]

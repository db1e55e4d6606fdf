"""
formrules - Declarative Form Data Validation
=============================================

Validate request and form data against compact rule strings such as
``"required|minLength:5"`` and get localized, parameterized error
messages back.

Features:
---------
- Rule-string mini-language with escaping
- Built-in predicates for text, numbers, network values and dates
- File upload predicates (size, MIME type, image dimensions)
- Pluggable validator sources with defined precedence
- English and Brazilian Portuguese messages
- Fluent rule builder

Quick Start:
    from formrules import Validation

    validation = Validation()
    validation.set_rules({"name": "required|minLength:3", "email": "optional|email"})
    if not validation.validate({"name": "Al"}):
        print(validation.get_errors())
"""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"

from formrules.language import Language
from formrules.validation import (
    BaseValidator,
    ConfigurationError,
    FilesValidator,
    InvalidRuleArgumentError,
    Rules,
    UnknownRuleError,
    UploadedFile,
    Validation,
    ValidationError,
    ValidationResult,
    Validator,
    rule,
    validate,
    validate_or_fail,
)

__all__ = [
    "__version__",
    "Language",
    "Validation",
    "ValidationResult",
    "ValidationError",
    "ConfigurationError",
    "UnknownRuleError",
    "InvalidRuleArgumentError",
    "BaseValidator",
    "Validator",
    "FilesValidator",
    "UploadedFile",
    "Rules",
    "rule",
    "validate",
    "validate_or_fail",
]

"""
formrules Validation
====================

Rule grammar, predicate sources and the validation engine.

Features:
- Rule strings with escaped delimiters
- Declarative predicate sources (``@rule``)
- Ordered source registry with custom overrides
- Pseudo-rules: optional, blank, null, empty
- Cross-field ``{field}`` argument placeholders
"""

from formrules.validation.base import BaseValidator, rule
from formrules.validation.engine import (
    Validation,
    ValidationResult,
    validate,
    validate_or_fail,
)
from formrules.validation.exceptions import (
    ConfigurationError,
    InvalidRuleArgumentError,
    UnknownRuleError,
    ValidationError,
)
from formrules.validation.files import FilesValidator, UploadedFile
from formrules.validation.grammar import ParsedRule, extract_rules, parse_rule
from formrules.validation.registry import PSEUDO_RULES, ValidatorRegistry
from formrules.validation.rules import Rules
from formrules.validation.validator import Validator

__all__ = [
    # Engine
    "Validation",
    "ValidationResult",
    "validate",
    "validate_or_fail",
    # Errors
    "ValidationError",
    "ConfigurationError",
    "UnknownRuleError",
    "InvalidRuleArgumentError",
    # Sources
    "BaseValidator",
    "Validator",
    "FilesValidator",
    "UploadedFile",
    "ValidatorRegistry",
    "PSEUDO_RULES",
    "rule",
    # Grammar
    "ParsedRule",
    "parse_rule",
    "extract_rules",
    "Rules",
]

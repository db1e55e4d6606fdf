"""
formrules Language
==================

Localized validation messages.
"""

from formrules.language.language import Language, format_message, normalize_locale

__all__ = ["Language", "format_message", "normalize_locale"]

"""
formrules Rules Builder
=======================

Fluent construction of rule strings.

Method names are the rule names in snake_case; a trailing underscore
avoids Python keywords and builtins (``in_``, ``int_``). Arguments are
escaped, so values containing commas or pipes stay single arguments.

Example:
    rules = Rules.create().required().min_length(3).in_("a,b", "c")
    str(rules)   # "required|minLength:3|in:a\\,b,c"

    validation.set_rule("name", rules)
"""

from __future__ import annotations

import re
from typing import Any, Callable, List, Optional, Sequence

from formrules.validation.base import to_string
from formrules.validation.grammar import escape_arg
from formrules.validation.registry import PSEUDO_RULES, Source, ValidatorRegistry

_SNAKE_SEGMENT = re.compile(r"_([a-z0-9])")


def rule_name(attribute: str) -> str:
    """
    Rule name for a builder method name.

    Example:
        >>> rule_name("greater_or_equal")
        'greaterOrEqual'
        >>> rule_name("in_")
        'in'
    """
    return _SNAKE_SEGMENT.sub(lambda match: match.group(1).upper(), attribute.rstrip("_"))


class Rules:
    """
    Accumulates rule tokens.

    Args:
        validators: Extra predicate sources whose rules the builder
            should also offer
    """

    def __init__(self, validators: Optional[Sequence[Source]] = None) -> None:
        self._rules: List[str] = []
        self._names = set(ValidatorRegistry(validators).rule_names()) | set(PSEUDO_RULES)

    @classmethod
    def create(cls, validators: Optional[Sequence[Source]] = None) -> Rules:
        return cls(validators)

    @property
    def rules(self) -> List[str]:
        """Rule tokens added so far."""
        return list(self._rules)

    def add(self, name: str, *args: Any) -> Rules:
        """Append a rule by its name."""
        if name not in self._names:
            raise AttributeError(f"'{type(self).__name__}' has no rule '{name}'")

        token = name
        if args:
            token += ":" + ",".join(
                escape_arg(to_string(arg)).replace("|", "\\|") for arg in args
            )
        self._rules.append(token)
        return self

    def __getattr__(self, attribute: str) -> Callable[..., Rules]:
        if attribute.startswith("__"):
            raise AttributeError(attribute)

        name = rule_name(attribute)
        if name not in self.__dict__.get("_names", ()):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{attribute}'")

        def append(*args: Any) -> Rules:
            return self.add(name, *args)

        append.__name__ = attribute
        return append

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | self._names)

    def __str__(self) -> str:
        return "|".join(self._rules)

    def __repr__(self) -> str:
        return f"Rules({str(self)!r})"

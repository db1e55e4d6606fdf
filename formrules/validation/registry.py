"""
formrules Validator Registry
============================

Resolves rule names to predicates across an ordered list of sources.

Search order: sources passed by the caller, in the order given (the
first source defining a rule wins), followed by the built-in
``Validator`` and ``FilesValidator`` unless already listed. A custom
source can therefore override any built-in rule by defining the same
name.
"""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from formrules.validation.base import BaseValidator, Predicate
from formrules.validation.exceptions import UnknownRuleError
from formrules.validation.files import FilesValidator
from formrules.validation.validator import Validator

PSEUDO_RULES = ("optional", "blank", "null", "empty")

DEFAULT_VALIDATORS = (Validator, FilesValidator)

Source = Union[type, BaseValidator, Mapping[str, Callable[..., bool]]]


class ValidatorRegistry:
    """
    Ordered predicate sources.

    Example:
        registry = ValidatorRegistry([{"even": lambda f, d: int(d[f]) % 2 == 0}])
        registry.get("even", "count")("count", {"count": "4"})  # True
        registry.get("alpha", "name")                            # Validator.alpha
    """

    def __init__(self, sources: Optional[Sequence[Source]] = None) -> None:
        ordered: List[Source] = list(sources or [])
        for default in DEFAULT_VALIDATORS:
            if not any(source is default for source in ordered):
                ordered.append(default)
        self._sources = ordered

    @property
    def sources(self) -> List[Source]:
        """Sources in search order."""
        return list(self._sources)

    @staticmethod
    def _lookup(source: Source, name: str) -> Optional[Predicate]:
        if isinstance(source, Mapping):
            predicate = source.get(name)
            return predicate if callable(predicate) else None

        get_rule = getattr(source, "get_rule", None)
        if get_rule is None:
            return None
        return get_rule(name)

    def resolve(self, name: str) -> Optional[Predicate]:
        """First predicate defined for the name, or None."""
        for source in self._sources:
            predicate = self._lookup(source, name)
            if predicate is not None:
                return predicate
        return None

    def get(self, name: str, field: str) -> Predicate:
        """
        Resolve a rule used on a field.

        Raises:
            UnknownRuleError: No source defines the rule
        """
        predicate = self.resolve(name)
        if predicate is None:
            raise UnknownRuleError(name, field)
        return predicate

    def is_rule_available(self, name: str) -> bool:
        return name in PSEUDO_RULES or self.resolve(name) is not None

    def rule_names(self) -> List[str]:
        """Every rule name defined by any source, sorted."""
        names = set()
        for source in self._sources:
            if isinstance(source, Mapping):
                names.update(name for name, item in source.items() if callable(item))
            elif hasattr(source, "rule_names"):
                names.update(source.rule_names())
        return sorted(names)


def describe(source: Any) -> str:
    """Readable name of a source for logs."""
    if isinstance(source, type):
        return source.__name__
    if isinstance(source, Mapping):
        return f"mapping({', '.join(sorted(source))})"
    return type(source).__name__

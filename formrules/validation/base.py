"""
formrules Validator Base
========================

Declarative predicate sources.

A validator source is a class whose predicates are marked with
``@rule``. The metaclass collects them into a name -> attribute table,
so rule names are free to be Python keywords (``in``, ``int``) and are
looked up explicitly instead of through attribute reflection.

Example:
    class ShopValidator(BaseValidator):
        @rule("sku")
        def sku(cls, field, data):
            value = cls.get_data(field, data)
            return value is not None and value.startswith("SKU-")

    validation = Validation([ShopValidator])
    validation.set_rule("code", "required|sku")
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, List, Mapping, Optional

from formrules.utils import arrays
from formrules.validation.exceptions import InvalidRuleArgumentError

Predicate = Callable[..., bool]

SCALAR_TYPES = (str, int, float, bool)


def rule(name: Optional[str] = None) -> Callable[[Callable], Callable]:
    """
    Mark a method as the predicate for a rule name.

    The method receives the class first, then ``field``, ``data`` and
    the rule arguments. It defaults to the method's own name.
    """
    def decorator(func: Callable) -> Callable:
        func.__rule_name__ = name or func.__name__
        return func

    return decorator


class ValidatorMeta(type):
    """Metaclass collecting ``@rule`` methods into ``_rules``."""

    def __new__(
        mcs,
        name: str,
        bases: tuple,
        namespace: dict,
    ) -> ValidatorMeta:
        rules: Dict[str, str] = {}

        for base in reversed(bases):
            rules.update(getattr(base, "_rules", {}))

        inherited = set(rules.values())

        for attribute, value in list(namespace.items()):
            if not inspect.isfunction(value):
                continue
            rule_name = getattr(value, "__rule_name__", None)
            if rule_name is not None:
                rules[rule_name] = attribute
            elif attribute not in inherited:
                continue
            # Overrides of an inherited rule stay class-level too
            namespace[attribute] = classmethod(value)

        namespace["_rules"] = rules

        return super().__new__(mcs, name, bases, namespace)


def to_string(value: Any) -> str:
    """String form of a scalar, the way it reads in submitted form data."""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_int(value: Any, rule_name: str) -> int:
    """Convert a rule argument to int or fail as a configuration error."""
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidRuleArgumentError(
            f"Rule '{rule_name}' requires an integer argument, got '{value}'"
        ) from None


class BaseValidator(metaclass=ValidatorMeta):
    """
    Base class for predicate sources.

    Subclasses inherit the parent's rule table and may redefine any
    method to change a rule. Predicates are class-level; instances
    are accepted wherever a class is.
    """

    _rules: Dict[str, str]

    @classmethod
    def get_rule(cls, name: str) -> Optional[Predicate]:
        """Get the predicate for a rule name, or None."""
        attribute = cls._rules.get(name)
        if attribute is None:
            return None
        return getattr(cls, attribute)

    @classmethod
    def rule_names(cls) -> List[str]:
        return sorted(cls._rules)

    @classmethod
    def get_value(cls, field: str, data: Mapping[str, Any]) -> Any:
        """Raw value at the field path, None when absent."""
        return arrays.value(field, data)

    @classmethod
    def get_data(cls, field: str, data: Mapping[str, Any]) -> Optional[str]:
        """String form of the field value, or None if absent or not scalar."""
        value = cls.get_value(field, data)
        if not isinstance(value, SCALAR_TYPES):
            return None
        return to_string(value)

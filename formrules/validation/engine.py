"""
formrules Validation Engine
===========================

Stores rules, labels and custom messages, runs them against data and
formats the errors.

Example:
    validation = Validation()
    validation.set_rules({
        "name": "required|minLength:3",
        "email": "optional|email",
        "confirm": "equals:password",
    })
    validation.set_label("confirm", "Confirm Password")
    validation.set_label("password", "Password")

    if not validation.validate(request_data):
        print(validation.get_errors())
        # {"confirm": "The Confirm Password field must be equals the Password field."}
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from formrules.language.language import Language
from formrules.utils import arrays
from formrules.utils.logger import get_logger
from formrules.validation.base import Predicate
from formrules.validation.exceptions import (
    ConfigurationError,
    InvalidRuleArgumentError,
    ValidationError,
)
from formrules.validation.grammar import ParsedRule, escape_arg, extract_rules, parse_rule
from formrules.validation.registry import PSEUDO_RULES, Source, ValidatorRegistry, describe

_ARG_PLACEHOLDER = re.compile(r"^\{(\w+)\}$")

logger = get_logger("formrules.validation")

# Rule spec accepted by set_rule: a rule string, a list of rule tokens
# or a Rules builder.
RuleSpec = Union[str, Sequence[str], Any]


@dataclass
class ValidationResult:
    """
    Result of one validation run.

    Independent of the engine that produced it: later runs do not
    change it.
    """

    valid: bool
    errors: Dict[str, str] = field(default_factory=dict)
    data: Dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.valid

    def failed(self) -> bool:
        return not self.valid

    def has_error(self, field_name: str) -> bool:
        return field_name in self.errors

    def get_error(self, field_name: str) -> Optional[str]:
        return self.errors.get(field_name)

    def first_error(self) -> Optional[str]:
        return next(iter(self.errors.values()), None)

    def raise_if_invalid(self) -> None:
        """Raise ValidationError if invalid."""
        if not self.valid:
            raise ValidationError(errors=self.errors)


class Validation:
    """
    Rule-string validation engine.

    Args:
        validators: Extra predicate sources, searched before the
            built-in ``Validator`` and ``FilesValidator``
        language: Message renderer, created from configuration when
            omitted

    Not safe for concurrent runs on one instance; use ``check`` to get
    a result value that does not depend on the stored errors.
    """

    def __init__(
        self,
        validators: Optional[Sequence[Source]] = None,
        language: Optional[Language] = None,
    ) -> None:
        self._registry = ValidatorRegistry(validators)
        self._language = language
        self._rules: Dict[str, List[ParsedRule]] = {}
        self._labels: Dict[str, str] = {}
        self._messages: Dict[str, Dict[str, str]] = {}
        self._errors: Dict[str, ParsedRule] = {}
        self._validated: Dict[str, Any] = {}

    # Language

    @property
    def language(self) -> Language:
        if self._language is None:
            self._language = Language()
        return self._language

    def set_language(self, language: Optional[Language] = None) -> Validation:
        self._language = language or Language()
        return self

    # Sources

    def get_validators(self) -> List[Source]:
        """Predicate sources in search order."""
        return self._registry.sources

    def is_rule_available(self, rule: str) -> bool:
        return self._registry.is_rule_available(rule)

    # Rules

    def set_rule(self, field: str, rules: RuleSpec) -> Validation:
        """
        Set the rules of a field, replacing previous ones.

        Args:
            field: Field path
            rules: Rule string (``"required|minLength:5"``), list of
                single rule tokens, or a ``Rules`` builder
        """
        if isinstance(rules, (list, tuple)):
            self._rules[field] = [parse_rule(token) for token in rules]
        else:
            self._rules[field] = extract_rules(str(rules))
        return self

    def set_rules(self, rules: Mapping[str, RuleSpec]) -> Validation:
        self._rules = {}
        for field, spec in rules.items():
            self.set_rule(field, spec)
        return self

    def get_rules(self) -> Dict[str, List[ParsedRule]]:
        return {field: list(rules) for field, rules in self._rules.items()}

    # Labels

    def set_label(self, field: str, label: str) -> Validation:
        self._labels[field] = label
        return self

    def set_labels(self, labels: Mapping[str, str]) -> Validation:
        self._labels = {}
        for field, label in labels.items():
            self.set_label(field, label)
        return self

    def get_label(self, field: str) -> Optional[str]:
        return self._labels.get(field)

    def get_labels(self) -> Dict[str, str]:
        return dict(self._labels)

    # Messages

    def set_message(self, field: str, rule: str, message: str) -> Validation:
        """Set a custom error message template for a field rule."""
        self._messages.setdefault(field, {})[rule] = message
        return self

    def set_messages(self, messages: Mapping[str, Mapping[str, str]]) -> Validation:
        self._messages = {}
        for field, rules in messages.items():
            for rule, message in rules.items():
                self.set_message(field, rule, message)
        return self

    def get_message(self, field: str, rule: str) -> Optional[str]:
        return self._messages.get(field, {}).get(rule)

    def get_messages(self) -> Dict[str, Dict[str, str]]:
        return {field: dict(rules) for field, rules in self._messages.items()}

    def get_filled_message(
        self,
        field: str,
        rule: str,
        args: Optional[Mapping[Any, Any]] = None,
    ) -> str:
        """
        Format the message of a field rule.

        Uses the custom message when one is set, otherwise the
        ``validation`` catalog line for the rule.
        """
        message = self.get_message(field, rule)
        if message is None:
            return self.language.render("validation", rule, args)
        return self.language.format_message(message, args)

    def get_ruleset(self) -> List[Dict[str, Any]]:
        """
        Describe every field with its rules and their messages.

        Example:
            [{"field": "name", "label": "Name", "rules": [
                {"rule": "minLength:3",
                 "message": "The Name field requires 3 or more characters in length."},
            ]}]
        """
        ruleset = []
        for field, rules in self._rules.items():
            label = self.get_label(field)
            entries = []
            for parsed in rules:
                escaped = [escape_arg(arg) for arg in parsed.args]
                entries.append({
                    "rule": str(parsed),
                    "message": self.get_filled_message(
                        field,
                        parsed.name,
                        self._message_args(label or field, escaped),
                    ),
                })
            ruleset.append({"field": field, "label": label, "rules": entries})
        return ruleset

    # Errors

    def set_error(self, field: str, rule: str, args: Optional[Sequence[Any]] = None) -> Validation:
        self._errors[field] = ParsedRule(rule, list(args or []))
        return self

    def get_error(self, field: str) -> Optional[str]:
        """Formatted message of the last error of a field, or None."""
        error = self._errors.get(field)
        if error is None:
            return None
        label = self.get_label(field) or field
        return self.get_filled_message(field, error.name, self._message_args(label, error.args))

    def get_errors(self) -> Dict[str, str]:
        return {field: self.get_error(field) for field in self._errors}

    def reset(self) -> Validation:
        """Clear labels, rules, errors and messages."""
        self._labels = {}
        self._rules = {}
        self._errors = {}
        self._messages = {}
        self._validated = {}
        return self

    @staticmethod
    def _message_args(label: str, args: Sequence[Any]) -> Dict[str, Any]:
        bag: Dict[str, Any] = {str(index): arg for index, arg in enumerate(args)}
        bag["args"] = ", ".join(str(arg) for arg in args)
        bag["field"] = label
        return bag

    # Running

    def validate(self, data: Mapping[str, Any]) -> bool:
        """Validate every field that has rules."""
        return self._run(self._rules, data, "all")

    def validate_only(self, data: Mapping[str, Any]) -> bool:
        """Validate only the fields whose path exists in data."""
        rules = {
            field: spec for field, spec in self._rules.items()
            if arrays.has(field, data)
        }
        return self._run(rules, data, "only")

    def check(self, data: Mapping[str, Any], only: bool = False) -> ValidationResult:
        """
        Validate and return the outcome as a standalone result.

        Example:
            result = validation.check(form)
            if result.failed():
                return {"errors": result.errors}
        """
        valid = self.validate_only(data) if only else self.validate(data)
        return ValidationResult(valid=valid, errors=self.get_errors(), data=dict(self._validated))

    def _run(
        self,
        rules: Mapping[str, List[ParsedRule]],
        data: Mapping[str, Any],
        mode: str,
    ) -> bool:
        self._errors = {}
        self._validated = {}

        resolved = {field: self._resolve(field, spec) for field, spec in rules.items()}

        errors: Dict[str, ParsedRule] = {}
        validated: Dict[str, Any] = {}

        for field, (pseudo, checks) in resolved.items():
            failed = self._validate_field(field, pseudo, checks, data)
            if failed is not None:
                errors[field] = failed
            elif arrays.has(field, data):
                validated[field] = arrays.value(field, data)

        self._errors = errors
        self._validated = validated

        logger.debug(
            "Validation run finished",
            mode=mode,
            fields=len(rules),
            failed=len(errors),
        )
        return not errors

    def _resolve(
        self,
        field: str,
        rules: List[ParsedRule],
    ) -> Tuple[List[str], List[Tuple[ParsedRule, Predicate]]]:
        """Split pseudo-rules from checks and look up every predicate."""
        pseudo = []
        checks = []

        for parsed in rules:
            if parsed.name in PSEUDO_RULES:
                pseudo.append(parsed.name)
                continue
            try:
                predicate = self._registry.get(parsed.name, field)
                _check_arguments(predicate, parsed, field)
            except ConfigurationError as exc:
                logger.warning(
                    "Invalid rule configuration",
                    field=field,
                    rule=parsed.name,
                    sources=[describe(source) for source in self._registry.sources],
                    error=str(exc),
                )
                raise
            checks.append((parsed, predicate))

        return pseudo, checks

    def _validate_field(
        self,
        field: str,
        pseudo: List[str],
        checks: List[Tuple[ParsedRule, Predicate]],
        data: Mapping[str, Any],
    ) -> Optional[ParsedRule]:
        """Run the rules of a field; returns the failed rule, or None."""
        if _short_circuits(field, pseudo, data):
            return None

        for parsed, predicate in checks:
            args = self._replace_args(parsed.args, data)
            try:
                passed = predicate(field, data, *args)
            except ConfigurationError as exc:
                logger.warning("Invalid rule argument", field=field, rule=parsed.name, error=str(exc))
                raise
            if not passed:
                return self._error_rule(ParsedRule(parsed.name, args))

        return None

    @staticmethod
    def _replace_args(args: Sequence[Any], data: Mapping[str, Any]) -> List[Any]:
        """Replace ``{key}`` arguments with ``data[key]`` when it is set."""
        result = []
        for arg in args:
            match = _ARG_PLACEHOLDER.match(arg) if isinstance(arg, str) else None
            if match and data.get(match.group(1)) is not None:
                result.append(data[match.group(1)])
            else:
                result.append(arg)
        return result

    def _error_rule(self, parsed: ParsedRule) -> ParsedRule:
        # equals and notEquals name another field; show its label
        if parsed.name in ("equals", "notEquals") and parsed.args:
            other = str(parsed.args[0])
            parsed.args[0] = self.get_label(other) or parsed.args[0]
        return parsed


def _short_circuits(field: str, pseudo: List[str], data: Mapping[str, Any]) -> bool:
    if not pseudo:
        return False

    exists = arrays.has(field, data)
    value = arrays.value(field, data)

    for name in pseudo:
        if name == "optional" and not exists:
            return True
        if name == "blank" and exists and value == "":
            return True
        if name == "null" and exists and value is None:
            return True
        if name == "empty" and exists and not value:
            return True

    return False


def _check_arguments(predicate: Predicate, parsed: ParsedRule, field: str) -> None:
    try:
        signature = inspect.signature(predicate)
    except (TypeError, ValueError):
        return

    try:
        signature.bind(field, {}, *parsed.args)
    except TypeError:
        raise InvalidRuleArgumentError(
            f"Rule '{parsed.name}' on field '{field}' does not accept {len(parsed.args)} argument(s)"
        ) from None


# Convenience functions

def validate(
    data: Mapping[str, Any],
    rules: Mapping[str, RuleSpec],
    labels: Optional[Mapping[str, str]] = None,
    messages: Optional[Mapping[str, Mapping[str, str]]] = None,
    validators: Optional[Sequence[Source]] = None,
) -> ValidationResult:
    """
    Validate data with rules.

    Example:
        result = validate(
            {"email": "user@example.com"},
            {"email": "required|email"},
        )
    """
    validation = Validation(validators)
    validation.set_rules(rules)
    validation.set_labels(labels or {})
    validation.set_messages(messages or {})
    return validation.check(data)


def validate_or_fail(
    data: Mapping[str, Any],
    rules: Mapping[str, RuleSpec],
    labels: Optional[Mapping[str, str]] = None,
    messages: Optional[Mapping[str, Mapping[str, str]]] = None,
    validators: Optional[Sequence[Source]] = None,
) -> Dict[str, Any]:
    """
    Validate data and raise on failure.

    Returns the values of the validated fields.

    Example:
        try:
            clean = validate_or_fail(form, {"email": "required|email"})
        except ValidationError as e:
            return {"errors": e.errors}
    """
    result = validate(data, rules, labels, messages, validators)
    result.raise_if_invalid()
    return result.data

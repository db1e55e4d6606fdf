"""
formrules Rule Grammar
======================

Parser for the rule-string mini-language.

A rule spec is a ``|``-separated list of rules. Each rule is a name,
optionally followed by ``:`` and a ``,``-separated argument list::

    required|minLength:5|in:red,green,blue

Delimiters inside a value are escaped with a backslash: ``\\,`` keeps a
comma inside an argument and ``\\|`` keeps a pipe inside a rule token.
Unescaping is a single pass, so ``\\\\\\,`` leaves ``\\,`` in the
argument. Only the first ``:`` separates name and arguments.

Parsing never fails; unknown rule names are reported when the rules
are evaluated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

_PIPE_SPLIT = re.compile(r"(?<!\\)\|")
_COMMA_SPLIT = re.compile(r"(?<!\\),")


@dataclass
class ParsedRule:
    """A rule name and its positional arguments."""

    name: str
    args: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"rule": self.name, "args": list(self.args)}

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}:{join_args(self.args)}"


def parse_rule(token: str) -> ParsedRule:
    """
    Split one rule token into name and arguments.

    Example:
        >>> parse_rule("between:1,10")
        ParsedRule(name='between', args=['1', '10'])
        >>> parse_rule("regex:^a:b$")
        ParsedRule(name='regex', args=['^a:b$'])
    """
    if ":" not in token:
        return ParsedRule(token)

    name, blob = token.split(":", 1)
    args = [arg.replace("\\,", ",") for arg in _COMMA_SPLIT.split(blob)]
    return ParsedRule(name, args)


def extract_rules(spec: str) -> List[ParsedRule]:
    """
    Parse a full rule spec.

    Example:
        >>> [str(r) for r in extract_rules("required|in:a\\\\,b,c")]
        ['required', 'in:a\\\\,b,c']
    """
    return [parse_rule(token.replace("\\|", "|")) for token in _PIPE_SPLIT.split(spec)]


def escape_arg(value: Any) -> str:
    """Escape commas so the value survives as a single argument."""
    return str(value).replace(",", "\\,")


def join_args(values: Iterable[Any]) -> str:
    """Escape and join arguments with commas."""
    return ",".join(escape_arg(value) for value in values)

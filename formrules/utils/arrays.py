"""
formrules Array Helpers
=======================

Bracket-path access into nested request data.

Field paths use the HTML form convention, so ``user[address][city]``
addresses ``data["user"]["address"]["city"]``. Digit segments index
lists and tuples.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Sequence

_PATH_PATTERN = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]*)\]")

_MISSING = object()

UPLOAD_KEYS = ("name", "type", "tmp_name", "error", "size", "full_path")


def extract_keys(path: str) -> List[str]:
    """
    Split a field path into its segments.

    Example:
        >>> extract_keys("user[address][city]")
        ['user', 'address', 'city']
        >>> extract_keys("name")
        ['name']
    """
    match = _PATH_PATTERN.match(path)
    if not match:
        return [path]

    keys = [match.group(1)]
    keys.extend(_SEGMENT_PATTERN.findall(match.group(2)))
    return keys


def _lookup(path: str, data: Any) -> Any:
    current = data

    for key in extract_keys(path):
        if isinstance(current, Mapping):
            if key in current:
                current = current[key]
            elif key.lstrip("-").isdigit() and int(key) in current:
                current = current[int(key)]
            else:
                return _MISSING
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not key.isdigit() or int(key) >= len(current):
                return _MISSING
            current = current[int(key)]
        else:
            return _MISSING

    return current


def value(path: str, data: Any, default: Any = None) -> Any:
    """
    Resolve a field path against nested data.

    Args:
        path: Field path, possibly with bracket segments
        data: Mapping (or sequence) to search
        default: Returned when any segment is missing

    Returns:
        The value at the path, or default
    """
    found = _lookup(path, data)
    return default if found is _MISSING else found


def has(path: str, data: Any) -> bool:
    """Check whether every segment of the path exists, even if the value is None."""
    return _lookup(path, data) is not _MISSING


def organize_files(files: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Reorganize PHP-style upload arrays into per-file records.

    Upload parsers that mimic ``$_FILES`` group multi-file inputs by
    attribute (``name``, ``tmp_name``...) first and by field key second.
    This flips them so every leaf is a single file record.

    Example:
        >>> organize_files({
        ...     "photos": {
        ...         "name": {"a": "a.png"},
        ...         "tmp_name": {"a": "/tmp/x"},
        ...         "error": {"a": 0},
        ...         "size": {"a": 10},
        ...     }
        ... })
        {'photos': {'a': {'name': 'a.png', 'tmp_name': '/tmp/x', 'error': 0, 'size': 10}}}
    """
    organized: Dict[str, Any] = {}

    for field_name, record in files.items():
        if not isinstance(record, Mapping) or not isinstance(record.get("name"), Mapping):
            organized[field_name] = record
            continue

        tree: Dict[str, Any] = {}
        for attribute, branch in record.items():
            if attribute not in UPLOAD_KEYS:
                continue
            _spread(tree, attribute, branch)
        organized[field_name] = tree

    return organized


def _spread(tree: Dict[str, Any], attribute: str, branch: Any) -> None:
    for key, item in branch.items():
        if isinstance(item, Mapping):
            _spread(tree.setdefault(key, {}), attribute, item)
        else:
            tree.setdefault(key, {})[attribute] = item


"""
formrules Validator
===================

Built-in predicate library.

Every predicate has the signature ``(field, data, *args) -> bool``.
The field value is read from ``data`` by path and, for most rules,
string-coerced first. Absent or non-scalar values fail; use the
``optional``/``blank``/``null``/``empty`` pseudo-rules to accept them.

Arguments arrive as strings when they come from a rule spec, so
numeric arguments are converted inside each predicate.
"""

from __future__ import annotations

import base64
import binascii
import ipaddress
import json
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any, Callable, FrozenSet, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlsplit

import idna
import regex
from email_validator import EmailNotValidError, validate_email

from formrules.validation.base import BaseValidator, rule, to_int, to_string
from formrules.validation.exceptions import InvalidRuleArgumentError

Data = Mapping[str, Any]

# OWASP password special characters
SPECIAL_CHARACTERS = "!\"#$%&'()*+,-./:;=<>?@[\\]^_`{|}~"

NIL_UUID = "00000000-0000-0000-0000-000000000000"

_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")
_UUID = re.compile(r"[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}")
_MD5 = re.compile(r"[a-f0-9]{32}")
_HEX = re.compile(r"[0-9A-Fa-f]+")
_HEX_COLOR = re.compile(r"#(?:[0-9A-Fa-f]{3}){1,2}")
_URL_PREFIX = re.compile(r"^(?:([^:]*):)?//(.+)$")
_URL_CHARS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")
_HOST_LABEL = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")
_EMAIL_PARTS = re.compile(r"([^@]+)@(.+)", re.DOTALL)
_LATIN = regex.compile(r"\p{Latin}+")


def _as_number(text: str) -> Optional[Decimal]:
    if not _NUMBER.fullmatch(text):
        return None
    try:
        return Decimal(text.strip())
    except InvalidOperation:
        return None


def _operands(value: str, other: Any) -> Tuple[Union[str, Decimal], Union[str, Decimal]]:
    """Numeric operands when both sides are numbers, string operands otherwise."""
    other_text = to_string(other)
    left, right = _as_number(value), _as_number(other_text)
    if left is not None and right is not None:
        return left, right
    return value, other_text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


@lru_cache(maxsize=1)
def _timezones() -> FrozenSet[str]:
    import zoneinfo

    return frozenset(zoneinfo.available_timezones())


def _valid_http_url(url: str) -> bool:
    if not _URL_CHARS.fullmatch(url):
        return False

    parts = urlsplit(url)
    try:
        host = parts.hostname
        parts.port
    except ValueError:
        return False

    if not host:
        return False

    if "[" in parts.netloc:
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            return False
        return True

    labels = host[:-1].split(".") if host.endswith(".") else host.split(".")
    return all(_HOST_LABEL.fullmatch(label) for label in labels)


# PHP-style date format characters: strptime directive and re-formatter
_DATE_TOKENS: dict = {
    "d": ("%d", lambda dt: f"{dt.day:02d}"),
    "j": ("%d", lambda dt: str(dt.day)),
    "D": ("%a", lambda dt: dt.strftime("%a")),
    "l": ("%A", lambda dt: dt.strftime("%A")),
    "m": ("%m", lambda dt: f"{dt.month:02d}"),
    "n": ("%m", lambda dt: str(dt.month)),
    "M": ("%b", lambda dt: dt.strftime("%b")),
    "F": ("%B", lambda dt: dt.strftime("%B")),
    "Y": ("%Y", lambda dt: f"{dt.year:04d}"),
    "y": ("%y", lambda dt: f"{dt.year % 100:02d}"),
    "H": ("%H", lambda dt: f"{dt.hour:02d}"),
    "G": ("%H", lambda dt: str(dt.hour)),
    "h": ("%I", lambda dt: f"{dt.hour % 12 or 12:02d}"),
    "g": ("%I", lambda dt: str(dt.hour % 12 or 12)),
    "i": ("%M", lambda dt: f"{dt.minute:02d}"),
    "s": ("%S", lambda dt: f"{dt.second:02d}"),
    "u": ("%f", lambda dt: f"{dt.microsecond:06d}"),
    "A": ("%p", lambda dt: "AM" if dt.hour < 12 else "PM"),
    "a": ("%p", lambda dt: "am" if dt.hour < 12 else "pm"),
    "O": ("%z", lambda dt: dt.strftime("%z")),
    "P": ("%z", lambda dt: dt.strftime("%z")[:3] + ":" + dt.strftime("%z")[3:]),
}


@lru_cache(maxsize=64)
def _compile_date_format(format: str) -> Tuple[str, Tuple[Union[str, Callable], ...]]:
    """Translate a PHP date format into a strptime pattern plus re-format pieces."""
    directives: List[str] = []
    pieces: List[Union[str, Callable]] = []
    escaped = False

    for char in format:
        if escaped or char not in _DATE_TOKENS:
            if char == "\\" and not escaped:
                escaped = True
                continue
            escaped = False
            directives.append("%%" if char == "%" else char)
            pieces.append(char)
            continue
        directive, formatter = _DATE_TOKENS[char]
        directives.append(directive)
        pieces.append(formatter)

    return "".join(directives), tuple(pieces)


class Validator(BaseValidator):
    """
    Built-in validators.

    Predicates can be called directly:

        Validator.alpha("name", {"name": "abc"})                # True
        Validator.get_rule("between")("n", {"n": 5}, "1", "9")  # True
    """

    @rule("alpha")
    def alpha(cls, field: str, data: Data) -> bool:
        """ASCII letters only."""
        value = cls.get_data(field, data)
        return value is not None and value.isascii() and value.isalpha()

    @rule("number")
    def number(cls, field: str, data: Data) -> bool:
        """Integer or decimal number, optionally signed or with exponent."""
        value = cls.get_data(field, data)
        return value is not None and _NUMBER.fullmatch(value) is not None

    @rule("alphaNumber")
    def alpha_number(cls, field: str, data: Data) -> bool:
        """ASCII letters and digits only."""
        value = cls.get_data(field, data)
        return value is not None and value.isascii() and value.isalnum()

    @rule("uuid")
    def uuid(cls, field: str, data: Data) -> bool:
        """Canonical 8-4-4-4-12 UUID, the nil UUID excluded."""
        value = cls.get_data(field, data)
        if value is None or value == NIL_UUID:
            return False
        return _UUID.fullmatch(value) is not None

    @rule("timezone")
    def timezone(cls, field: str, data: Data) -> bool:
        """IANA timezone identifier, e.g. ``America/Sao_Paulo``."""
        value = cls.get_data(field, data)
        return value is not None and value in _timezones()

    @rule("base64")
    def base64(cls, field: str, data: Data) -> bool:
        """
        Canonical base64 string.

        The decoded bytes must encode back to exactly the same text, so
        strings with missing or superfluous padding are rejected.
        """
        value = cls.get_data(field, data)
        if value is None:
            return False
        try:
            decoded = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            return False
        return bool(decoded) and base64.b64encode(decoded).decode("ascii") == value

    @rule("md5")
    def md5(cls, field: str, data: Data) -> bool:
        value = cls.get_data(field, data)
        return value is not None and _MD5.fullmatch(value) is not None

    @rule("hex")
    def hex(cls, field: str, data: Data) -> bool:
        value = cls.get_data(field, data)
        return value is not None and _HEX.fullmatch(value) is not None

    @rule("hexColor")
    def hex_color(cls, field: str, data: Data) -> bool:
        """``#abc`` or ``#aabbcc``."""
        value = cls.get_data(field, data)
        return value is not None and _HEX_COLOR.fullmatch(value) is not None

    @rule("json")
    def json(cls, field: str, data: Data) -> bool:
        value = cls.get_data(field, data)
        if value is None:
            return False
        try:
            json.loads(value, parse_constant=_reject_constant)
        except (ValueError, RecursionError):
            return False
        return True

    @rule("regex")
    def regex(cls, field: str, data: Data, pattern: str) -> bool:
        """
        Value matches a Python regular expression.

        The pattern is searched, so anchor it with ``^``/``$`` to match
        the whole value.
        """
        pattern = to_string(pattern)
        value = cls.get_data(field, data)
        if value is None:
            return False
        try:
            return re.search(pattern, value) is not None
        except re.error as exc:
            raise InvalidRuleArgumentError(f"Invalid regex pattern '{pattern}': {exc}") from exc

    @rule("notRegex")
    def not_regex(cls, field: str, data: Data, pattern: str) -> bool:
        return not cls.regex(field, data, pattern)

    @rule("equals")
    def equals(cls, field: str, data: Data, equals_field: str) -> bool:
        """Value equals the value of another field, both compared as strings."""
        value = cls.get_data(field, data)
        other = cls.get_data(to_string(equals_field), data)
        return value is not None and other is not None and value == other

    @rule("notEquals")
    def not_equals(cls, field: str, data: Data, diff_field: str) -> bool:
        return not cls.equals(field, data, diff_field)

    @rule("between")
    def between(cls, field: str, data: Data, min: Any, max: Any) -> bool:
        """
        Value is within ``min`` and ``max``, inclusive.

        Compared as numbers when the value and the bound are both
        numeric, as strings otherwise.
        """
        value = cls.get_data(field, data)
        if value is None:
            return False
        low, minimum = _operands(value, min)
        high, maximum = _operands(value, max)
        return low >= minimum and high <= maximum

    @rule("notBetween")
    def not_between(cls, field: str, data: Data, min: Any, max: Any) -> bool:
        return not cls.between(field, data, min, max)

    @rule("in")
    def in_(cls, field: str, data: Data, value: Any, *others: Any) -> bool:
        """Value is one of the arguments."""
        current = cls.get_data(field, data)
        allowed = {to_string(item) for item in (value, *others)}
        return current is not None and current in allowed

    @rule("notIn")
    def not_in(cls, field: str, data: Data, value: Any, *others: Any) -> bool:
        return not cls.in_(field, data, value, *others)

    @rule("ip")
    def ip(cls, field: str, data: Data, version: Any = 0) -> bool:
        """
        IP address.

        Args:
            version: 4 or 6 to restrict the family, 0 for either

        Raises:
            InvalidRuleArgumentError: Any other version
        """
        version = to_int(version, "ip")
        if version not in (0, 4, 6):
            raise InvalidRuleArgumentError(f"Invalid IP Version: {version}")

        value = cls.get_data(field, data)
        if value is None or "%" in value:
            return False
        try:
            address = ipaddress.ip_address(value)
        except ValueError:
            return False
        return version == 0 or address.version == version

    @rule("url")
    def url(cls, field: str, data: Data) -> bool:
        """
        HTTP(S) URL.

        A scheme is optional, but when one is given (including the bare
        ``//`` form) it must be http or https.
        """
        value = cls.get_data(field, data)
        if value is None:
            return False

        match = _URL_PREFIX.match(value)
        if match:
            if match.group(1) not in ("http", "https"):
                return False
            value = match.group(2)

        return _valid_http_url("http://" + value)

    @rule("datetime")
    def datetime(cls, field: str, data: Data, format: str = "Y-m-d H:i:s") -> bool:
        """
        Date/time in a PHP-style format (``Y-m-d H:i:s``).

        The value must parse and format back to exactly the same text,
        which rejects out-of-range parts and missing zero padding.
        """
        value = cls.get_data(field, data)
        if value is None:
            return False

        pattern, pieces = _compile_date_format(to_string(format))
        try:
            parsed = datetime.strptime(value, pattern)
        except ValueError:
            return False

        rendered = "".join(p if isinstance(p, str) else p(parsed) for p in pieces)
        return rendered == value

    @rule("email")
    def email(cls, field: str, data: Data) -> bool:
        """Email address; internationalized domains are IDNA-encoded first."""
        value = cls.get_data(field, data)
        if value is None:
            return False

        match = _EMAIL_PARTS.fullmatch(value)
        if match:
            try:
                domain = idna.encode(match.group(2), uts46=True).decode("ascii")
            except (idna.IDNAError, UnicodeError):
                return False
            value = f"{match.group(1)}@{domain}"

        try:
            validate_email(value, check_deliverability=False, allow_smtputf8=False)
        except EmailNotValidError:
            return False
        return True

    @rule("greater")
    def greater(cls, field: str, data: Data, greater_than: Any) -> bool:
        value = cls.get_data(field, data)
        if value is None:
            return False
        left, right = _operands(value, greater_than)
        return left > right

    @rule("greaterOrEqual")
    def greater_or_equal(cls, field: str, data: Data, greater_than_or_equal_to: Any) -> bool:
        value = cls.get_data(field, data)
        if value is None:
            return False
        left, right = _operands(value, greater_than_or_equal_to)
        return left >= right

    @rule("less")
    def less(cls, field: str, data: Data, less_than: Any) -> bool:
        value = cls.get_data(field, data)
        if value is None:
            return False
        left, right = _operands(value, less_than)
        return left < right

    @rule("lessOrEqual")
    def less_or_equal(cls, field: str, data: Data, less_than_or_equal_to: Any) -> bool:
        value = cls.get_data(field, data)
        if value is None:
            return False
        left, right = _operands(value, less_than_or_equal_to)
        return left <= right

    @rule("latin")
    def latin(cls, field: str, data: Data) -> bool:
        """Latin-script characters only (accents and ª º included, spaces and digits not)."""
        value = cls.get_data(field, data)
        return value is not None and _LATIN.fullmatch(value) is not None

    @rule("maxLength")
    def max_length(cls, field: str, data: Data, max_length: Any) -> bool:
        value = cls.get_data(field, data)
        return value is not None and len(value) <= to_int(max_length, "maxLength")

    @rule("minLength")
    def min_length(cls, field: str, data: Data, min_length: Any) -> bool:
        value = cls.get_data(field, data)
        return value is not None and len(value) >= to_int(min_length, "minLength")

    @rule("length")
    def length(cls, field: str, data: Data, length: Any) -> bool:
        value = cls.get_data(field, data)
        return value is not None and len(value) == to_int(length, "length")

    @rule("required")
    def required(cls, field: str, data: Data) -> bool:
        """Present and not blank after trimming whitespace."""
        value = cls.get_data(field, data)
        return value is not None and value.strip() != ""

    @rule("isset")
    def isset(cls, field: str, data: Data) -> bool:
        """Present with any scalar value, the empty string included."""
        return cls.get_data(field, data) is not None

    @rule("array")
    def array(cls, field: str, data: Data) -> bool:
        return isinstance(cls.get_value(field, data), (list, tuple, dict))

    @rule("bool")
    def bool_(cls, field: str, data: Data) -> bool:
        return isinstance(cls.get_value(field, data), bool)

    @rule("float")
    def float_(cls, field: str, data: Data) -> bool:
        return isinstance(cls.get_value(field, data), float)

    @rule("int")
    def int_(cls, field: str, data: Data) -> bool:
        value = cls.get_value(field, data)
        return isinstance(value, int) and not isinstance(value, bool)

    @rule("object")
    def object_(cls, field: str, data: Data) -> bool:
        value = cls.get_value(field, data)
        return value is not None and not isinstance(
            value, (str, int, float, bool, list, tuple, dict)
        )

    @rule("string")
    def string(cls, field: str, data: Data) -> bool:
        return isinstance(cls.get_value(field, data), str)

    @rule("specialChar")
    def special_char(
        cls,
        field: str,
        data: Data,
        quantity: Any = 1,
        characters: str = SPECIAL_CHARACTERS,
    ) -> bool:
        """
        At least ``quantity`` distinct characters from ``characters``.

        Raises:
            InvalidRuleArgumentError: quantity lower than 1
        """
        quantity = to_int(quantity, "specialChar")
        if quantity < 1:
            raise InvalidRuleArgumentError("Special characters quantity must be greater than 0")

        value = cls.get_data(field, data)
        if value is None:
            return False

        present = set(value)
        found = sum(1 for char in dict.fromkeys(characters) if char in present)
        return found >= quantity

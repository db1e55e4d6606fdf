"""Built-in predicates."""

import pytest

from formrules.validation.exceptions import InvalidRuleArgumentError
from formrules.validation.validator import Validator


@pytest.fixture
def data():
    return {
        "alpha": "abc",
        "equals-alpha": "abc",
        "number": 123,
        "alphaNumber": "abc123",
        "timezone": "America/Sao_Paulo",
        "base64": "YQ==",
        "md5": "0cc175b9c0f1b6a831c399e269772661",
        "hex": "61",
        "json": '{"a":1}',
        "empty": "",
        "email": "user@domain.tld",
        "email-false": "a@b",
        "year": "2018",
        "datetime": "2018-04-02 13:50:00",
        "latin": "Coração",
        "phrase": "Mens sana in corpore sano",
        "ipv4": "127.0.0.1",
        "ipv6": "ff02::1",
        "url": "http://domain.tld/path?foo=bar#id",
        "url-false": "httd://domain.tld/path?foo=bar#id",
        "uuid": "b2b6ec94-5679-11e9-8647-d663bd873d93",
        "uuid-zero": "00000000-0000-0000-0000-000000000000",
    }


def test_rule_table_maps_camel_case_names():
    assert Validator.get_rule("alphaNumber") == Validator.alpha_number
    assert Validator.get_rule("in") == Validator.in_
    assert Validator.get_rule("alpha_number") is None
    assert "specialChar" in Validator.rule_names()


def test_alpha(data):
    assert Validator.alpha("alpha", data)
    assert not Validator.alpha("alphaNumber", data)
    assert not Validator.alpha("latin", data)
    assert not Validator.alpha("unknown", data)


def test_number(data):
    assert Validator.number("number", data)
    assert Validator.number("n", {"n": "-1.5e3"})
    assert not Validator.number("alphaNumber", data)
    assert not Validator.number("unknown", data)


def test_alpha_number(data):
    assert Validator.alpha_number("alpha", data)
    assert Validator.alpha_number("number", data)
    assert not Validator.alpha_number("timezone", data)
    assert not Validator.alpha_number("unknown", data)


def test_timezone(data):
    assert Validator.timezone("timezone", data)
    assert not Validator.timezone("alpha", data)
    assert not Validator.timezone("unknown", data)


def test_base64(data):
    assert Validator.base64("base64", data)
    assert not Validator.base64("alpha", data)
    assert not Validator.base64("b", {"b": "YQ"})
    assert not Validator.base64("unknown", data)


def test_md5(data):
    assert Validator.md5("md5", data)
    assert not Validator.md5("alpha", data)
    assert not Validator.md5("unknown", data)


def test_hex(data):
    assert Validator.hex("hex", data)
    assert Validator.hex("alpha", data)
    assert not Validator.hex("timezone", data)
    assert not Validator.hex("unknown", data)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("abc", False),
        ("#abc", True),
        ("#abg", False),
        ("abc123", False),
        ("#abc123", True),
        ("#abh123", False),
        ("#abcd", False),
    ],
)
def test_hex_color(value, expected):
    assert Validator.hex_color("color", {"color": value}) is expected


def test_json(data):
    assert Validator.json("json", data)
    assert Validator.json("n", {"n": "null"})
    assert not Validator.json("n", {"n": "NaN"})
    assert not Validator.json("deep", {"deep": "[" * 100000 + "]" * 100000})
    assert not Validator.json("alpha", data)
    assert not Validator.json("unknown", data)


def test_lengths(data):
    assert Validator.max_length("alpha", data, 3)
    assert Validator.max_length("number", data, "3")
    assert not Validator.max_length("alphaNumber", data, 3)
    assert Validator.min_length("alpha", data, 3)
    assert not Validator.min_length("alpha", data, 4)
    assert Validator.length("number", data, 3)
    assert not Validator.length("alpha", data, 4)
    assert not Validator.length("unknown", data, 3)


def test_length_argument_must_be_integer(data):
    with pytest.raises(InvalidRuleArgumentError):
        Validator.min_length("alpha", data, "three")


def test_required(data):
    assert Validator.required("alpha", data)
    assert Validator.required("number", data)
    assert not Validator.required("empty", data)
    assert not Validator.required("blank", {"blank": "   "})
    assert not Validator.required("unknown", data)


def test_isset(data):
    assert Validator.isset("alpha", data)
    assert Validator.isset("empty", data)
    assert not Validator.isset("unknown", data)
    assert not Validator.isset("list", {"list": [1, 2]})


def test_email(data):
    assert Validator.email("email", data)
    assert Validator.email("idn", {"idn": "user@bücher.de"})
    assert not Validator.email("email-false", data)
    assert not Validator.email("alpha", data)
    assert not Validator.email("unknown", data)


def test_datetime(data):
    assert Validator.datetime("datetime", data)
    assert Validator.datetime("year", data, "Y")
    assert Validator.datetime("d", {"d": "02/04/2018"}, "d/m/Y")
    assert not Validator.datetime("d", {"d": "2018-02-30 10:00:00"})
    assert not Validator.datetime("d", {"d": "2018-4-2 13:50:00"})
    assert Validator.datetime("y", {"y": "2018"}, 2018)
    assert not Validator.datetime("alpha", data)
    assert not Validator.datetime("unknown", data)


def test_equals(data):
    assert Validator.equals("alpha", data, "equals-alpha")
    assert Validator.equals("equals-alpha", data, "alpha")
    assert not Validator.equals("alpha", data, "number")
    assert not Validator.equals("alpha", data, "unknown")
    assert not Validator.equals("unknown", data, "alpha")


def test_not_equals(data):
    assert not Validator.not_equals("alpha", data, "equals-alpha")
    assert Validator.not_equals("alpha", data, "number")
    assert Validator.not_equals("alpha", data, "unknown")
    assert Validator.not_equals("unknown", data, "alpha")


def test_between(data):
    assert Validator.between("alpha", data, "a", "b")
    assert Validator.between("number", data, 120, 123)
    assert Validator.between("number", data, "120", "123")
    assert not Validator.between("alpha", data, "b", "c")
    assert not Validator.between("unknown", data, 1, 2)


def test_between_compares_numbers_numerically():
    assert Validator.between("n", {"n": "9"}, "1", "10")
    assert not Validator.between("n", {"n": "9.5"}, "1", "9")


def test_not_between(data):
    assert not Validator.not_between("alpha", data, "a", "b")
    assert not Validator.not_between("number", data, 120, 123)
    assert Validator.not_between("alpha", data, "b", "c")
    assert Validator.not_between("unknown", data, 1, 2)


def test_in(data):
    assert Validator.in_("alpha", data, "a", "abc", "def")
    assert Validator.in_("number", data, 120, 123, 456)
    assert not Validator.in_("alpha", data, "b", "c", "d")
    assert not Validator.in_("unknown", data, 1, 2, 3)


def test_not_in(data):
    assert not Validator.not_in("alpha", data, "a", "abc", "def")
    assert not Validator.not_in("number", data, 120, 123, 456)
    assert Validator.not_in("alpha", data, "b", "c", "d")
    assert Validator.not_in("unknown", data, 1, 2, 3)


def test_latin(data):
    assert Validator.latin("alpha", data)
    assert Validator.latin("latin", data)
    assert Validator.latin("ordinal", {"ordinal": "ªº"})
    assert not Validator.latin("empty", {"empty": ""})
    assert not Validator.latin("phrase", data)
    assert not Validator.latin("number", data)
    assert not Validator.latin("unknown", data)


def test_ip(data):
    assert Validator.ip("ipv4", data)
    assert Validator.ip("ipv6", data)
    assert Validator.ip("ipv4", data, 4)
    assert Validator.ip("ipv6", data, "6")
    assert not Validator.ip("ipv4", data, 6)
    assert not Validator.ip("ipv6", data, 4)
    assert not Validator.ip("alpha", data)
    assert not Validator.ip("unknown", data)


def test_ip_rejects_unknown_version(data):
    with pytest.raises(InvalidRuleArgumentError, match="Invalid IP Version: 7"):
        Validator.ip("ipv4", data, 7)


def test_url(data):
    assert Validator.url("url", data)
    assert Validator.url("alpha", data)
    assert Validator.url("u", {"u": "https://[::1]:8080/a"})
    assert not Validator.url("url-false", data)
    assert not Validator.url("u", {"u": "ftp://domain.tld"})
    assert not Validator.url("json", data)
    assert not Validator.url("unknown", data)


def test_regex(data):
    assert Validator.regex("alpha", data, "[a-z]")
    assert Validator.regex("number", data, "[0-9]")
    assert not Validator.regex("alpha", data, "[0-9]")
    assert not Validator.regex("unknown", data, "[0-9]")


def test_invalid_regex_is_an_argument_error(data):
    with pytest.raises(InvalidRuleArgumentError):
        Validator.regex("alpha", data, "[a-")


def test_not_regex(data):
    assert not Validator.not_regex("alpha", data, "[a-z]")
    assert Validator.not_regex("alpha", data, "[0-9]")
    assert Validator.not_regex("unknown", data, "[0-9]")


def test_uuid(data):
    assert Validator.uuid("uuid", data)
    assert not Validator.uuid("alpha", data)
    assert not Validator.uuid("uuid-zero", data)
    assert not Validator.uuid("unknown", data)


def test_greater(data):
    assert Validator.greater("number", data, 122)
    assert not Validator.greater("number", data, 123)
    assert Validator.greater("alpha", data, "abb")
    assert not Validator.greater("alpha", data, "abc")
    assert not Validator.greater("unknown", data, 1)


def test_greater_or_equal(data):
    assert Validator.greater_or_equal("number", data, 123)
    assert not Validator.greater_or_equal("number", data, 124)
    assert Validator.greater_or_equal("alpha", data, "abc")
    assert not Validator.greater_or_equal("alpha", data, "abd")


def test_less(data):
    assert Validator.less("number", data, 124)
    assert not Validator.less("number", data, 123)
    assert Validator.less("alpha", data, "abd")
    assert not Validator.less("alpha", data, "abc")


def test_less_or_equal(data):
    assert Validator.less_or_equal("number", data, 123)
    assert not Validator.less_or_equal("number", data, 122)
    assert Validator.less_or_equal("alpha", data, "abc")
    assert not Validator.less_or_equal("alpha", data, "abb")


def test_type_predicates():
    values = {
        "list": [1],
        "dict": {"a": 1},
        "bool": False,
        "float": 1.5,
        "int": 3,
        "str": "x",
        "obj": object(),
    }
    assert Validator.array("list", values)
    assert Validator.array("dict", values)
    assert not Validator.array("str", values)
    assert Validator.bool_("bool", values)
    assert not Validator.bool_("int", values)
    assert Validator.float_("float", values)
    assert not Validator.float_("int", values)
    assert Validator.int_("int", values)
    assert not Validator.int_("bool", values)
    assert Validator.object_("obj", values)
    assert not Validator.object_("dict", values)
    assert not Validator.object_("missing", values)
    assert Validator.string("str", values)
    assert not Validator.string("int", values)


def test_nested_paths():
    data = {"user": {"emails": ["user@domain.tld", "bad"]}}
    assert Validator.email("user[emails][0]", data)
    assert not Validator.email("user[emails][1]", data)
    assert not Validator.email("user[emails][2]", data)


def test_booleans_read_as_form_values():
    assert Validator.equals("a", {"a": True, "b": "1"}, "b")
    assert not Validator.required("a", {"a": False})


def test_special_char():
    data = {
        "p1": "abcde",
        "p2": "a@cde",
        "p3": "a@c%!",
        "p4": "çb♦a♥",
        "p5": "  0 0",
    }
    assert not Validator.special_char("p0", data)
    assert not Validator.special_char("p1", data)
    assert Validator.special_char("p2", data)
    assert not Validator.special_char("p2", data, 3)
    assert Validator.special_char("p3", data, 3)
    assert not Validator.special_char("p3", data, 3, "♦♥ç")
    assert Validator.special_char("p4", data, 3, "♦♥ç")
    assert not Validator.special_char("p5", data, 3, " 0")
    assert not Validator.special_char("p5", data, 2, "0")
    assert Validator.special_char("p5", data, 1, "0")


def test_special_char_quantity_must_be_positive():
    with pytest.raises(InvalidRuleArgumentError, match="greater than 0"):
        Validator.special_char("p", {"p": "a@"}, 0)


def test_subclass_overrides_rule():
    class Strict(Validator):
        def alpha(cls, field, data):
            return False

    assert Strict.get_rule("alpha")("alpha", {"alpha": "abc"}) is False
    assert Validator.get_rule("alpha")("alpha", {"alpha": "abc"}) is True

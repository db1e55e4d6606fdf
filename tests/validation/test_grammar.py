"""Rule-string parsing."""

import pytest

from formrules.validation.grammar import ParsedRule, escape_arg, extract_rules, join_args, parse_rule


def as_dicts(rules):
    return [parsed.to_dict() for parsed in rules]


class TestParseRule:
    @pytest.mark.parametrize(
        "token, name, args",
        [
            ("foo", "foo", []),
            ("foo:bar:baz", "foo", ["bar:baz"]),
            ("fo,o:bar:baz", "fo,o", ["bar:baz"]),
            ("foo:param", "foo", ["param"]),
            ("foo:param,param2", "foo", ["param", "param2"]),
            ("foo:  param, param2 ", "foo", ["  param", " param2 "]),
            ("foo:param,param2,param3", "foo", ["param", "param2", "param3"]),
            (r"foo:param,param2\,param3", "foo", ["param", "param2,param3"]),
        ],
    )
    def test_name_and_args(self, token, name, args):
        assert parse_rule(token) == ParsedRule(name, args)

    def test_escaped_backslash_before_comma_is_unescaped_once(self):
        parsed = parse_rule(r"foo:param,param2\\,param3")
        assert parsed.args == ["param", r"param2\,param3"]

    def test_empty_argument_list(self):
        assert parse_rule("foo:").args == [""]


class TestExtractRules:
    def test_single(self):
        assert as_dicts(extract_rules("foo")) == [{"rule": "foo", "args": []}]

    def test_pipe_separated(self):
        assert [r.name for r in extract_rules("foo|bar")] == ["foo", "bar"]

    def test_escaped_pipe(self):
        assert [r.name for r in extract_rules(r"foo|bar\|baz")] == ["foo", "bar|baz"]

    def test_escaped_backslash_before_pipe(self):
        assert [r.name for r in extract_rules(r"foo|bar\\|baz")] == ["foo", r"bar\|baz"]

    def test_mixed_escapes(self):
        assert as_dicts(extract_rules(r"foo:a,b\,c|bar:\|\\||baz")) == [
            {"rule": "foo", "args": ["a", "b,c"]},
            {"rule": "bar", "args": [r"|\|"]},
            {"rule": "baz", "args": []},
        ]

    def test_regex_argument_keeps_colons(self):
        (parsed,) = extract_rules(r"regex:^\d{2}:\d{2}$")
        assert parsed.args == [r"^\d{2}:\d{2}$"]


class TestEscaping:
    def test_escape_arg(self):
        assert escape_arg("a,b") == r"a\,b"
        assert escape_arg(5) == "5"

    def test_join_args(self):
        assert join_args(["a,b", "c"]) == r"a\,b,c"

    def test_str_round_trips_through_parser(self):
        parsed = ParsedRule("in", ["red,green", "blue"])
        assert str(parsed) == r"in:red\,green,blue"
        assert parse_rule(str(parsed)) == parsed

    def test_str_without_args(self):
        assert str(ParsedRule("required")) == "required"

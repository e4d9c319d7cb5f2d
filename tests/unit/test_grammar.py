"""
Unit tests for the @value statement grammar.

Covers alias lists, the import form (quoted and path constant sources),
plain definitions and the invalid multi-statement form.
"""

import pytest

from cssvalues.errors import MalformedAliasError
from cssvalues.resolution.grammar import (
    DefinitionStatement,
    ImportStatement,
    extract_statement,
    parse_aliases,
    parse_definition,
    parse_import,
    unquote,
)


class TestParseAliases:
    """Test alias list parsing."""

    def test_single_name(self):
        assert parse_aliases("red") == [("red", "red")]

    def test_alias(self):
        assert parse_aliases("blue as green") == [("blue", "green")]

    def test_comma_separated(self):
        assert parse_aliases("blue, red as primary") == [("blue", "blue"), ("red", "primary")]

    def test_parenthesized_multiline(self):
        aliases = "(\n  blue,\n  red as primary\n)"
        assert parse_aliases(aliases) == [("blue", "blue"), ("red", "primary")]

    def test_dashed_and_custom_property_names(self):
        assert parse_aliases("--red, scoped-module as sm") == [
            ("--red", "--red"),
            ("scoped-module", "sm"),
        ]

    def test_empty_entry_is_malformed(self):
        with pytest.raises(MalformedAliasError, match='@value statement "" is invalid!'):
            parse_aliases(",")

    def test_malformed_entry_reports_entry_text(self):
        with pytest.raises(MalformedAliasError) as exc_info:
            parse_aliases("red, blue as")
        assert exc_info.value.entry == "blue as"


class TestParseImport:
    """Test the import statement form."""

    def test_double_quoted_source(self):
        statement = parse_import('blue as green from "./colors.css"')
        assert statement == ImportStatement(aliases="blue as green", source='"./colors.css"', quoted=True)

    def test_single_quoted_source(self):
        statement = parse_import("red from './colors.css'")
        assert statement.source == "'./colors.css'"
        assert statement.quoted

    def test_path_constant_source(self):
        statement = parse_import("red from colors")
        assert statement.aliases == "red"
        assert statement.source == "colors"
        assert not statement.quoted

    def test_parenthesized_aliases_may_span_lines(self):
        statement = parse_import('(\n  blue,\n  red\n) from "./colors.css"')
        assert statement.aliases == "(\n  blue,\n  red\n)"

    def test_unparenthesized_aliases_must_fit_on_one_line(self):
        assert parse_import('blue,\nred from "./colors.css"') is None

    def test_plain_definitions_are_not_imports(self):
        assert parse_import("red blue") is None
        assert parse_import('colors: "./colors.css"') is None

    def test_quoted_path_may_contain_spaces(self):
        statement = parse_import('red from "./my colors.css"')
        assert unquote(statement.source) == "./my colors.css"


class TestParseDefinition:
    """Test plain definitions."""

    def test_colon_separator(self):
        definition = parse_definition("base: 10px")
        assert definition.name == "base"
        assert definition.expression == "10px"
        assert definition.separator == ": "

    def test_whitespace_separator(self):
        definition = parse_definition("blue red")
        assert (definition.name, definition.expression, definition.separator) == ("blue", "red", " ")

    def test_expression_keeps_commas_and_functions(self):
        definition = parse_definition("coolShadow: 0 11px 15px -7px rgba(0,0,0,.2),0 24px 38px 3px rgba(0,0,0,.14)")
        assert definition.expression == "0 11px 15px -7px rgba(0,0,0,.2),0 24px 38px 3px rgba(0,0,0,.14)"

    def test_trailing_whitespace_is_kept_apart(self):
        definition = parse_definition("red blue\n")
        assert definition.expression == "blue"
        assert definition.trailing == "\n"

    def test_rewrite_keeps_separator(self):
        definition = parse_definition("bbb: aaa")
        assert definition.rewrite("red") == "bbb: red"

    def test_missing_expression(self):
        assert parse_definition("lonely") is None


class TestExtractStatement:
    """Test statement classification."""

    def test_import_is_tried_first(self):
        assert isinstance(extract_statement('red from "./colors.css"'), ImportStatement)

    def test_plain_definition(self):
        statement = extract_statement("blue red", line=3, column=1)
        assert isinstance(statement, DefinitionStatement)
        assert not statement.invalid
        assert [d.name for d in statement.definitions] == ["blue"]
        assert statement.definitions[0].line == 3

    def test_swallowed_statement_is_invalid_but_still_defines(self):
        statement = extract_statement("red blue\n@value green yellow")
        assert statement.invalid
        assert [(d.name, d.expression) for d in statement.definitions] == [
            ("red", "blue"),
            ("green", "yellow"),
        ]

    def test_unrecognized_statement_is_ignored(self):
        statement = extract_statement("lonely")
        assert statement.definitions == ()
        assert not statement.invalid


class TestUnquote:
    """Test path string detection."""

    @pytest.mark.parametrize("text,expected", [
        ('"./colors.css"', "./colors.css"),
        ("'./colors.css'", "./colors.css"),
        ("./colors.css", None),
        ('"./a.css" "./b.css"', None),
    ])
    def test_unquote(self, text, expected):
        assert unquote(text) == expected

"""
Tests for the syntax tree walker (lint_source / lint_file).
"""

import pytest

from conftest import lint_text, messages
from domql_lint.reporting import LintResult, Severity
from domql_lint.walker import lint_file, lint_source


class TestEndToEnd:
    """Whole-snippet behaviour."""

    def test_mixed_component(self):
        source = (
            "const c = {\n"
            "  props: { width: '100px', onClick: fn, id: 'x' },\n"
            "  style: { id: 'y' },\n"
            "  on: { id: 'z', click: fn }\n"
            "}\n"
        )
        result = lint_text(source)
        assert messages(result) == [
            "Style property 'width' should be in 'style' object, not 'props'",
            "Event handler 'onClick' should be in 'on' object, not 'props'",
            "HTML attribute 'id' should be in 'props' object, not 'style'",
            "'id' doesn't look like an event handler and should probably be in 'props'",
        ]
        assert result.errors == []
        assert len(result.warnings) == 4
        assert result.success is True

    def test_prefixed_attributes_in_props(self):
        source = "const c = { props: { id: 'a', 'data-testid': 'b', 'aria-label': 'c' } }\n"
        result = lint_text(source)
        assert result.diagnostics == []
        assert result.success

    def test_positions(self):
        source = (
            "const c = {\n"
            "  props: {\n"
            "    width: 1,\n"
            "      onClick() {}\n"
            "  }\n"
            "}\n"
        )
        result = lint_text(source, "src/c.js")
        assert [(d.file, d.line, d.column) for d in result.diagnostics] == [
            ("src/c.js", 3, 5),
            ("src/c.js", 4, 7),
        ]

    def test_component_without_sub_objects(self):
        source = "const c = { extend: 'div', width: 1, onClick: fn, id: 'x' }\n"
        assert lint_text(source).diagnostics == []

    def test_plain_objects_are_ignored(self):
        source = "const config = { width: 1, onClick: fn, data: { id: 1 } }\n"
        assert lint_text(source).diagnostics == []

    def test_shorthand_and_methods_are_checked(self):
        source = "const c = { props: { width, onClick() {} } }\n"
        assert len(lint_text(source).warnings) == 2

    def test_computed_and_spread_are_skipped(self):
        source = "const c = { props: { [width]: 1, ...rest, ['onClick']: fn } }\n"
        assert lint_text(source).diagnostics == []

    def test_string_keyed_sub_object(self):
        source = "const c = { 'style': { 'data-x': 1 } }\n"
        assert messages(lint_text(source)) == [
            "HTML attribute 'data-x' should be in 'props' object, not 'style'",
        ]

    def test_non_object_sub_values(self):
        source = "const c = { props: makeProps(), style: theme.button, on: [click] }\n"
        assert lint_text(source).diagnostics == []

    def test_code_point_escaped_attribute(self):
        result = lint_text("const c = { style: { '\\u{64}ata-x': 1 } }\n")
        assert messages(result) == ["HTML attribute 'data-x' should be in 'props' object, not 'style'"]

    def test_leading_bom_keeps_columns(self):
        source = "const c = { props: { width: 1 } }\n"
        plain = lint_text(source)
        with_bom = lint_text("\ufeff" + source)
        assert [(d.line, d.column) for d in with_bom.diagnostics] == [(1, 22)]
        assert with_bom.diagnostics == plain.diagnostics


class TestNesting:
    """Nested literals are visited on their own."""

    def test_component_nested_in_field(self):
        source = (
            "const Page = {\n"
            "  extend: 'main',\n"
            "  Header: { extend: 'header', props: { color: 'red' } }\n"
            "}\n"
        )
        result = lint_text(source)
        assert messages(result) == ["Style property 'color' should be in 'style' object, not 'props'"]
        assert result.diagnostics[0].line == 3

    def test_outer_before_inner(self):
        source = (
            "const Page = {\n"
            "  props: { width: 1 },\n"
            "  Child: { props: { height: 1 } }\n"
            "}\n"
        )
        assert messages(lint_text(source)) == [
            "Style property 'width' should be in 'style' object, not 'props'",
            "Style property 'height' should be in 'style' object, not 'props'",
        ]

    def test_sub_object_that_is_itself_a_component(self):
        """A props object containing `on` is a component in its own right."""
        source = "const c = { props: { on: { id: 1 } } }\n"
        assert messages(lint_text(source)) == [
            "'id' doesn't look like an event handler and should probably be in 'props'",
        ]

    def test_component_inside_jsx_expression(self):
        source = "const el = <Box config={{ props: { width: 1 } }} />\n"
        assert len(lint_text(source, "a.jsx").warnings) == 1

    def test_components_in_array_and_call(self):
        source = "export default [create({ props: { onClick: fn } }), { style: { id: 1 } }]\n"
        assert len(lint_text(source).warnings) == 2


class TestParseFailures:
    """One error per unparseable file, never more."""

    def test_single_error_diagnostic(self):
        result = lint_text("const c = { props: { width: 1 }\n")
        assert len(result.diagnostics) == 1
        error = result.diagnostics[0]
        assert error.severity is Severity.ERROR
        assert (error.line, error.column) == (1, 1)
        assert error.message.startswith("Parse error: ")
        assert error.suggestion is None
        assert result.success is False

    def test_object_hole_is_a_parse_error(self):
        result = lint_text("const c = { props: { width: 1,, id: 2 } }\n")
        assert [d.severity for d in result.diagnostics] == [Severity.ERROR]
        assert result.diagnostics[0].message == "Parse error: Unexpected token ',' (1:31)"
        assert result.success is False

    def test_top_level_return_is_a_parse_error(self):
        result = lint_text("return { props: { width: 1 } }\n")
        assert [d.severity for d in result.diagnostics] == [Severity.ERROR]
        assert result.diagnostics[0].message == "Parse error: 'return' outside of function (1:1)"
        assert result.success is False

    def test_return_inside_function_is_linted(self):
        result = lint_text("export default () => {\n  return { props: { width: 1 } }\n}\n")
        assert messages(result) == ["Style property 'width' should be in 'style' object, not 'props'"]

    def test_failure_does_not_affect_other_files(self):
        result = LintResult()
        lint_source("bad.js", "const = {", result)
        lint_source("good.js", "const c = { props: { width: 1 } }", result)
        assert [(d.file, d.severity) for d in result.diagnostics] == [
            ("bad.js", Severity.ERROR),
            ("good.js", Severity.WARNING),
        ]
        assert result.files_checked == 2


class TestIdempotence:
    """Same input, same output."""

    def test_repeatable(self, components_dir):
        path = components_dir / "bad_component.js"
        first = lint_file(path)
        second = lint_file(path)
        assert first.diagnostics == second.diagnostics


class TestFixtures:
    """Lint the fixture files."""

    def test_bad_component(self, components_dir):
        result = lint_file(components_dir / "bad_component.js", display_path="bad_component.js")
        assert [(d.line, d.column) for d in result.diagnostics] == [
            (7, 5), (8, 5), (10, 5), (13, 5), (14, 5),
            (24, 5), (25, 5), (26, 5),
            (34, 5), (35, 5),
        ]
        assert [d.suggestion for d in result.diagnostics] == [
            "Move 'width' to the 'style' object",
            "Move 'height' to the 'style' object",
            "Move 'margin' to the 'style' object",
            "Move 'onClick' to the 'on' object",
            "Move 'onMouseEnter' to the 'on' object",
            "Move 'id' to the 'props' object",
            "Move 'className' to the 'props' object",
            "Move 'data-wrong' to the 'props' object",
            "Consider moving 'id' to the 'props' object",
            "Consider moving 'className' to the 'props' object",
        ]
        assert all(d.file == "bad_component.js" for d in result.diagnostics)

    def test_good_component(self, components_dir):
        result = lint_file(components_dir / "good_component.js")
        assert result.diagnostics == []
        assert result.files_checked == 1

    def test_typed_component(self, components_dir):
        result = lint_file(components_dir / "typed_component.tsx")
        assert messages(result) == ["Event handler 'onClick' should be in 'on' object, not 'props'"]

    def test_broken_file(self, components_dir):
        result = lint_file(components_dir / "broken.js")
        assert len(result.errors) == 1
        assert result.warnings == []

    def test_unreadable_file(self, tmp_path):
        result = lint_file(tmp_path / "missing.js")
        assert len(result.errors) == 1
        assert result.errors[0].message.startswith("Parse error: ")
        assert result.files_checked == 1

    def test_latin1_file(self, tmp_path):
        path = tmp_path / "legacy.js"
        path.write_bytes("// caf\xe9\nconst c = { props: { width: 1 } }\n".encode("latin-1"))
        result = lint_file(path)
        assert len(result.warnings) == 1
        assert result.warnings[0].line == 2

"""
Tests for the DocumentParser state machine.

Sources are written with four-space indentation for readability and
converted to tabs (the default indent unit) before parsing.
"""
from __future__ import annotations

import textwrap

import pytest

from gddoc.errors import (
    BracketMismatchError,
    GdDocError,
    IndentationExpectedError,
    InvalidDeclarationSyntaxError,
)
from gddoc.models import (
    CATEGORY_ORDER,
    CLASS,
    CONSTANT,
    ENUM,
    EXPORT,
    FUNCTION,
    SIGNAL,
    VARIABLE,
    ClassPayload,
)
from gddoc.parser.document_parser import DocumentParser
from gddoc.passes.line_continuation import LineContinuationPass


def _tabs(source):
    lines = []
    for line in textwrap.dedent(source).strip("\n").splitlines():
        stripped = line.lstrip(" ")
        lines.append("\t" * ((len(line) - len(stripped)) // 4) + stripped)
    return lines


def _parse(source, show_private=False):
    logical = LineContinuationPass().run(_tabs(source), filename="test.gd")
    return DocumentParser("test.gd", show_private=show_private).parse(logical)


def _names(tree, category):
    return [s.name for s in tree.symbols(category)]


def _class_symbols(symbol, category):
    for entry in symbol.payload.entries:
        if entry.category == category:
            return entry.symbols
    return []


# ─────────────────────────────────────────────────────────────────────────────
# Top-level declarations
# ─────────────────────────────────────────────────────────────────────────────


class TestDeclarations:
    def test_every_category_recognised(self):
        tree = _parse(
            """
            extends Node
            signal died
            export var health = 3
            const MAX = 10
            var speed = 1.0
            enum State {IDLE, RUN}
            class Helper:
                var x
            func ready():
                pass
            """
        )
        assert _names(tree, SIGNAL) == ["died"]
        assert _names(tree, EXPORT) == ["health"]
        assert _names(tree, CONSTANT) == ["MAX"]
        assert _names(tree, VARIABLE) == ["speed"]
        assert _names(tree, ENUM) == ["State"]
        assert _names(tree, CLASS) == ["Helper"]
        assert _names(tree, FUNCTION) == ["ready"]

    def test_category_order_independent_of_source_order(self):
        tree = _parse(
            """
            var v
            func f():
                pass
            const C = 1
            export var e
            signal s
            enum E {A}
            class K:
                var k
            """
        )
        assert [e.category for e in tree.entries] == list(CATEGORY_ORDER)

    def test_empty_categories_omitted(self):
        tree = _parse("var a\nvar b")
        assert [e.category for e in tree.entries] == [VARIABLE]
        assert tree.entry(FUNCTION) is None

    def test_empty_file(self):
        tree = _parse("")
        assert tree.source_file == "test.gd"
        assert tree.entries == []

    def test_symbols_keep_source_order(self):
        tree = _parse("var b\nvar a\nvar c")
        assert _names(tree, VARIABLE) == ["b", "a", "c"]

    def test_signal_name_is_whole_text(self):
        tree = _parse("signal hit(damage, source)")
        assert _names(tree, SIGNAL) == ["hit(damage, source)"]

    def test_indented_lines_ignored_at_top_level(self):
        tree = _parse(
            """
            func f():
                var local = 1
                const INNER = 2
            var outer
            """
        )
        assert _names(tree, VARIABLE) == ["outer"]
        assert tree.entry(CONSTANT) is None

    def test_unrecognised_lines_ignored(self):
        tree = _parse('extends "res://base.gd"\ntool\nonready var node = $Node')
        assert tree.entries == []

    def test_export_payload(self):
        tree = _parse('export(int, "A","B") var mode = 2 setget set_mode')
        payload = tree.symbols(EXPORT)[0].payload
        assert payload.value_type == "int"
        assert payload.options == ['"A"', '"B"']
        assert payload.assignment == "2"
        assert payload.setter == "set_mode"
        assert payload.getter is None

    def test_function_payload(self):
        tree = _parse("func _init(a: int, b).( c ) -> void:\n    pass", show_private=True)
        symbol = tree.symbols(FUNCTION)[0]
        assert symbol.name == "_init"
        args = [(a.name, a.value_type, a.default_value) for a in symbol.payload.arguments]
        assert args == [("a", "int", None), ("b", None, None)]
        assert [a.name for a in symbol.payload.super_arguments] == ["c"]
        assert symbol.payload.return_type == "void"


# ─────────────────────────────────────────────────────────────────────────────
# Comments and visibility
# ─────────────────────────────────────────────────────────────────────────────


class TestComments:
    def test_preceding_comments_attached(self):
        tree = _parse(
            """
            # The player's speed.
            # In pixels per second.
            var speed = 1.0
            """
        )
        assert tree.symbols(VARIABLE)[0].text == [
            "The player's speed.",
            "In pixels per second.",
        ]

    def test_trailing_comment_attached(self):
        tree = _parse("var speed = 1.0 # pixels per second")
        symbol = tree.symbols(VARIABLE)[0]
        assert symbol.payload.assignment == "1.0"
        assert symbol.text == ["pixels per second"]

    def test_code_line_clears_pending_comments(self):
        tree = _parse(
            """
            # about something else
            print("hi")
            var speed
            """
        )
        assert tree.symbols(VARIABLE)[0].text == []

    def test_blank_line_keeps_pending_comments(self):
        tree = _parse("# doc\n\nvar speed")
        assert tree.symbols(VARIABLE)[0].text == ["doc"]

    def test_hash_inside_string_is_not_comment(self):
        tree = _parse('var color = "#ff0000" # red')
        symbol = tree.symbols(VARIABLE)[0]
        assert symbol.payload.assignment == '"#ff0000"'
        assert symbol.text == ["red"]

    def test_warning_ignore_not_documented(self):
        tree = _parse("# warning-ignore:unused_variable\n# Real doc\nvar a")
        assert tree.symbols(VARIABLE)[0].text == ["Real doc"]

    def test_indented_comment_attaches_to_class_member(self):
        tree = _parse(
            """
            class Inner:
                # member doc
                var x
            """
        )
        inner = tree.symbols(CLASS)[0]
        assert _class_symbols(inner, VARIABLE)[0].text == ["member doc"]


class TestVisibility:
    def test_private_symbols_hidden_by_default(self):
        tree = _parse("var _secret\nvar public\nfunc _helper():\n    pass")
        assert _names(tree, VARIABLE) == ["public"]
        assert tree.entry(FUNCTION) is None

    def test_show_private(self):
        tree = _parse("var _secret\nvar public", show_private=True)
        assert _names(tree, VARIABLE) == ["_secret", "public"]

    def test_show_directive(self):
        tree = _parse("# [Show]\n# Exposed on purpose\nvar _secret")
        symbol = tree.symbols(VARIABLE)[0]
        assert symbol.name == "_secret"
        assert symbol.text == ["Exposed on purpose"]

    def test_hide_directive(self):
        tree = _parse("# [Hide]\nvar public\nvar other")
        assert _names(tree, VARIABLE) == ["other"]

    def test_hide_wins_over_show_private(self):
        tree = _parse("# [Hide]\nvar _a\nvar _b", show_private=True)
        assert _names(tree, VARIABLE) == ["_b"]

    def test_directive_applies_to_next_declaration_only(self):
        tree = _parse("# [Show]\nvar _a\nvar _b")
        assert _names(tree, VARIABLE) == ["_a"]

    def test_hidden_class_body_consumed(self):
        tree = _parse(
            """
            class _Internal:
                var inner
                func f():
                    pass
            var after
            """
        )
        assert tree.entry(CLASS) is None
        assert _names(tree, VARIABLE) == ["after"]

    def test_hide_directive_on_class(self):
        tree = _parse("# [Hide]\nclass Shown:\n    var x\nvar y")
        assert tree.entry(CLASS) is None
        assert _names(tree, VARIABLE) == ["y"]

    def test_hidden_multiline_enum_consumed(self):
        tree = _parse("enum _Hidden {\n    A,\n    B\n}\nvar after")
        assert tree.entry(ENUM) is None
        assert _names(tree, VARIABLE) == ["after"]


# ─────────────────────────────────────────────────────────────────────────────
# Inner classes
# ─────────────────────────────────────────────────────────────────────────────


class TestClasses:
    def test_inner_class_then_outer_line(self):
        tree = _parse(
            """
            class Inner:
                var x = 1
            var y
            """
        )
        inner = tree.symbols(CLASS)[0]
        assert inner.name == "Inner"
        assert isinstance(inner.payload, ClassPayload)
        assert [s.name for s in _class_symbols(inner, VARIABLE)] == ["x"]
        assert _names(tree, VARIABLE) == ["y"]

    def test_class_doc_comment(self):
        tree = _parse("# A helper.\nclass Helper:\n    var x")
        assert tree.symbols(CLASS)[0].text == ["A helper."]

    def test_extends_clause(self):
        tree = _parse("class Enemy extends KinematicBody2D:\n    var hp")
        symbol = tree.symbols(CLASS)[0]
        assert symbol.name == "Enemy"
        assert symbol.payload.base == "KinematicBody2D"

    def test_class_without_base(self):
        tree = _parse("class Plain:\n    var hp")
        assert tree.symbols(CLASS)[0].payload.base is None

    def test_method_bodies_ignored(self):
        tree = _parse(
            """
            class Inner:
                func f():
                    var local
                var member
            """
        )
        inner = tree.symbols(CLASS)[0]
        assert [s.name for s in _class_symbols(inner, VARIABLE)] == ["member"]
        assert [s.name for s in _class_symbols(inner, FUNCTION)] == ["f"]

    def test_blank_lines_inside_class(self):
        tree = _parse("class Inner:\n\n    var a\n\n    var b\nvar c")
        inner = tree.symbols(CLASS)[0]
        assert [s.name for s in _class_symbols(inner, VARIABLE)] == ["a", "b"]
        assert _names(tree, VARIABLE) == ["c"]

    def test_nested_classes(self):
        tree = _parse(
            """
            class Outer:
                class Middle:
                    class Deep:
                        var d
                    var m
                var o
            var top
            """
        )
        outer = tree.symbols(CLASS)[0]
        middle = _class_symbols(outer, CLASS)[0]
        deep = _class_symbols(middle, CLASS)[0]
        assert [s.name for s in _class_symbols(outer, VARIABLE)] == ["o"]
        assert [s.name for s in _class_symbols(middle, VARIABLE)] == ["m"]
        assert [s.name for s in _class_symbols(deep, VARIABLE)] == ["d"]
        assert _names(tree, VARIABLE) == ["top"]

    def test_dedent_closes_several_classes(self):
        tree = _parse(
            """
            class A:
                class B:
                    var b
            var top
            """
        )
        a = tree.symbols(CLASS)[0]
        assert [s.name for s in _class_symbols(a, CLASS)] == ["B"]
        assert _names(tree, VARIABLE) == ["top"]

    def test_class_open_at_end_of_file(self):
        tree = _parse("class Last:\n    var x")
        assert [s.name for s in _class_symbols(tree.symbols(CLASS)[0], VARIABLE)] == ["x"]

    def test_class_entries_in_category_order(self):
        tree = _parse("class K:\n    var v\n    func f():\n        pass\n    const C = 1")
        categories = [e.category for e in tree.symbols(CLASS)[0].payload.entries]
        assert categories == [CONSTANT, FUNCTION, VARIABLE]

    def test_enum_inside_class(self):
        tree = _parse("class K:\n    enum Dir {\n        UP,\n        DOWN\n    }\n    var v")
        k = tree.symbols(CLASS)[0]
        values = [(v.name, v.value) for v in _class_symbols(k, ENUM)[0].payload.values]
        assert values == [("UP", 0), ("DOWN", 1)]
        assert [s.name for s in _class_symbols(k, VARIABLE)] == ["v"]

    def test_missing_indented_block(self):
        with pytest.raises(IndentationExpectedError) as info:
            _parse("class Empty:\nvar x")
        assert info.value.lineno == 2
        assert str(info.value) == (
            "Failed to parse test.gd, line 2: indented block expected after class 'Empty'"
        )


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────


class TestEnums:
    def _values(self, symbol):
        return [(v.name, v.value) for v in symbol.payload.values]

    def test_single_line_enum(self):
        tree = _parse("enum State {IDLE, RUN = 4, JUMP}")
        assert self._values(tree.symbols(ENUM)[0]) == [("IDLE", 0), ("RUN", 4), ("JUMP", 5)]

    def test_multi_line_enum(self):
        tree = _parse("enum E {\n    A,\n    B=5,\n    C\n}")
        assert self._values(tree.symbols(ENUM)[0]) == [("A", 0), ("B", 5), ("C", 6)]

    def test_several_values_per_line(self):
        tree = _parse("enum E {\n    A, B=5, C\n}")
        assert self._values(tree.symbols(ENUM)[0]) == [("A", 0), ("B", 5), ("C", 6)]

    def test_anonymous_enum(self):
        tree = _parse("enum {ONE = 1, TWO}")
        symbol = tree.symbols(ENUM)[0]
        assert symbol.name == ""
        assert self._values(symbol) == [("ONE", 1), ("TWO", 2)]

    def test_enum_doc_comment_captured_at_header(self):
        tree = _parse("# Movement states.\nenum State {\n    IDLE\n}")
        assert tree.symbols(ENUM)[0].text == ["Movement states."]

    def test_value_comments(self):
        tree = _parse(
            """
            enum State {
                # Standing still.
                IDLE,
                RUN, # Moving fast.
            }
            """
        )
        values = tree.symbols(ENUM)[0].payload.values
        assert values[0].text == ["Standing still."]
        assert values[1].text == ["Moving fast."]

    def test_private_values_hidden_but_counted(self):
        tree = _parse("enum E {A, _B, C}")
        assert self._values(tree.symbols(ENUM)[0]) == [("A", 0), ("C", 2)]

    def test_lines_after_enum_processed(self):
        tree = _parse("enum E {\n    A\n}\nvar after")
        assert _names(tree, VARIABLE) == ["after"]

    def test_unclosed_enum_at_end_of_file(self):
        tree = _parse("enum E {\n    A,\n    B")
        assert self._values(tree.symbols(ENUM)[0]) == [("A", 0), ("B", 1)]

    def test_expression_values_do_not_abort_file(self):
        tree = _parse("enum Flags {A = 1 << 0, B = 1 << 1}\nvar after = 1")
        assert self._values(tree.symbols(ENUM)[0]) == [("A", 0), ("B", 1)]
        assert _names(tree, VARIABLE) == ["after"]

    def test_constant_reference_value(self):
        tree = _parse("const X = 3\nenum E {A = X, B}")
        assert self._values(tree.symbols(ENUM)[0]) == [("A", 0), ("B", 1)]

    def test_enum_without_brace_rejected(self):
        with pytest.raises(InvalidDeclarationSyntaxError):
            _parse("enum E")


# ─────────────────────────────────────────────────────────────────────────────
# Bracket continuation and errors
# ─────────────────────────────────────────────────────────────────────────────


class TestContinuation:
    def test_multi_line_signature(self):
        tree = _parse(
            """
            # Spawns things.
            func spawn(
                    scene: PackedScene,
                    count: int = 1) -> void:
                pass
            """
        )
        symbol = tree.symbols(FUNCTION)[0]
        assert [a.name for a in symbol.payload.arguments] == ["scene", "count"]
        assert symbol.payload.return_type == "void"
        assert symbol.text == ["Spawns things."]

    def test_multi_line_literal(self):
        tree = _parse(
            """
            const TABLE = {
                "a": 1, # not documentation
                "b": 2,
            }
            var after
            """
        )
        symbol = tree.symbols(CONSTANT)[0]
        assert symbol.payload.assignment == '{ "a": 1, "b": 2, }'
        assert symbol.text == []
        assert _names(tree, VARIABLE) == ["after"]

    def test_backslash_continuation(self):
        tree = _parse("var total = 1 + \\\n2")
        assert tree.symbols(VARIABLE)[0].payload.assignment == "1 + 2"


class TestErrors:
    def test_bracket_mismatch_located(self):
        with pytest.raises(BracketMismatchError) as info:
            _parse("var a = 1\nvar b = [1, 2)")
        assert info.value.filename == "test.gd"
        assert info.value.lineno == 2

    def test_declaration_error_located(self):
        with pytest.raises(InvalidDeclarationSyntaxError) as info:
            _parse("var ok\n\nfunc broken\n")
        assert info.value.lineno == 3
        assert str(info.value).startswith("Failed to parse test.gd, line 3:")

    def test_error_inside_class_located(self):
        with pytest.raises(GdDocError) as info:
            _parse("class K:\n    var = 1")
        assert info.value.lineno == 2

    def test_parser_reusable_after_error(self):
        parser = DocumentParser("test.gd")
        lines = LineContinuationPass().run(["class K:", "var x"])
        with pytest.raises(IndentationExpectedError):
            parser.parse(lines)
        tree = parser.parse(LineContinuationPass().run(["var y"]))
        assert _names(tree, VARIABLE) == ["y"]

"""
Unit tests for schema/members.py module.

Tests how documentation and signatures combine into positional and option
schemas.
"""

import unittest

from ..declarations import Project
from ..errors import DocTagParseError
from .literal import BooleanLiteral, NumericLiteral, QualifiedName, StringLiteral
from .members import (
    POSITIONAL_DEMAND, build_option_schema, build_positional_schema,
    make_option_description, make_option_tags, make_positional_demand_option,
    make_positional_description,
)
from .types import OPTION, resolve_type


def get_function_decl(code: str):
    return Project(read_from_disk=False).add_source("tmp.ts", code).functions[0]


def get_interface_property(code: str, index: int = 0):
    source = Project(read_from_disk=False).add_source("tmp.ts", code)
    return source.interfaces[0].properties[index]


def option_tags(code: str):
    prop = get_interface_property(code)
    descriptor, _ = resolve_type(prop, OPTION)
    return make_option_tags(prop, descriptor)


class TestPositionalDescription(unittest.TestCase):
    """Tests for make_positional_description."""

    def test_with_description(self):
        func = get_function_decl("/** @param {string} foo - desc for foo */function f(foo) {}")
        self.assertEqual(make_positional_description(func.parameters[0]), {"description": StringLiteral("desc for foo")})

    def test_no_description(self):
        func = get_function_decl("/** @param {string} foo */function f(foo) {}")
        self.assertEqual(make_positional_description(func.parameters[0]), {})

    def test_no_param_tag(self):
        func = get_function_decl("function f(foo) {}")
        self.assertEqual(make_positional_description(func.parameters[0]), {})


class TestPositionalDemandOption(unittest.TestCase):
    """Tests for make_positional_demand_option."""

    def test_required(self):
        param = get_function_decl("function f(foo) {}").parameters[0]
        self.assertEqual(make_positional_demand_option(param), {"demand_option": StringLiteral("true")})

    def test_optional(self):
        for code in ["function f(foo?) {}", "function f(foo = 'x') {}", "function f(...foo) {}"]:
            with self.subTest(code=code):
                param = get_function_decl(code).parameters[0]
                self.assertEqual(make_positional_demand_option(param), {})


class TestBuildPositionalSchema(unittest.TestCase):
    """Tests for build_positional_schema."""

    def test_single(self):
        func = get_function_decl("""\
/**
 * @param {string} foo - desc for foo
 */
function f(foo) {}""")
        schema, ref = build_positional_schema(func.parameters[0])
        self.assertEqual(schema.name, "foo")
        self.assertEqual(schema.properties(), {
            "type": StringLiteral("string"),
            "description": StringLiteral("desc for foo"),
            "demandOption": POSITIONAL_DEMAND,
        })
        self.assertIsNone(ref)

    def test_multi(self):
        func = get_function_decl("""\
/**
 * @param {string} foo - desc for foo
 * @param bar
 */
function f(foo, bar: number) {}""")
        schemas = [build_positional_schema(p)[0] for p in func.parameters]
        self.assertEqual(schemas[1].properties(), {
            "type": StringLiteral("number"),
            "demandOption": StringLiteral("true"),
        })

    def test_variadic(self):
        func = get_function_decl("function f(...files: string[]) {}")
        schema, _ = build_positional_schema(func.parameters[0])
        self.assertTrue(schema.variadic)
        self.assertEqual(schema.properties(), {"type": StringLiteral("string"), "array": BooleanLiteral(True)})


class TestOptionDescription(unittest.TestCase):
    """Tests for make_option_description."""

    def test_desc(self):
        prop = get_interface_property("interface Options { \n/** desc */\nfoo: string }")
        self.assertEqual(make_option_description(prop), {"description": StringLiteral("desc")})

    def test_first_line_only(self):
        prop = get_interface_property("interface Options {\n/**\n * Shout it.\n * Loudly.\n */\nfoo: string }")
        self.assertEqual(make_option_description(prop), {"description": StringLiteral("Shout it.")})

    def test_comment_no_desc(self):
        prop = get_interface_property("interface Options { \n/** */\nfoo: string }")
        self.assertEqual(make_option_description(prop), {})

    def test_no_comment(self):
        prop = get_interface_property("interface Options { foo: string }")
        self.assertEqual(make_option_description(prop), {})


class TestOptionTags(unittest.TestCase):
    """Tests for make_option_tags."""

    def test_alias(self):
        self.assertEqual(option_tags("interface Options { \n/**@alias f */\nfoo: string }"), {"alias": StringLiteral("f")})

    def test_quoted_alias(self):
        self.assertEqual(option_tags("interface Options { \n/**@alias \"f\" */\nfoo: string }"), {"alias": StringLiteral("f")})

    def test_invalid_alias(self):
        with self.assertRaises(DocTagParseError):
            option_tags("interface Options { \n/**@alias f g */\nfoo: string }")

    def test_default_string(self):
        self.assertEqual(option_tags("interface Options { \n/**@default \"bar\" */\nfoo: string }"), {"default": StringLiteral("bar")})

    def test_default_number(self):
        self.assertEqual(option_tags("interface Options { \n/**@default 42 */\nfoo: number }"), {"default": NumericLiteral("42")})

    def test_default_boolean(self):
        self.assertEqual(option_tags("interface Options { \n/**@default false */\nfoo: boolean }"), {"default": BooleanLiteral(False)})

    def test_default_enum_member(self):
        tags = option_tags("enum E { A, B }\ninterface Options { \n/**@default E.B */\nfoo: E }")
        self.assertEqual(tags, {"default": QualifiedName(("E", "B"))})

    def test_default_not_a_choice(self):
        with self.assertRaises(DocTagParseError):
            option_tags("enum E { A, B }\ninterface Options { \n/**@default E.C */\nfoo: E }")

    def test_default_enum_value(self):
        """A member value is accepted in place of the member path."""
        tags = option_tags("enum Color { Red = 'red', Blue = 'blue' }\ninterface Options { \n/**@default 'blue' */\nfoo: Color }")
        self.assertEqual(tags, {"default": StringLiteral("blue")})

    def test_default_misspelled_enum_value(self):
        with self.assertRaises(DocTagParseError) as ctx:
            option_tags("enum Color { Red = 'red', Blue = 'blue' }\ninterface Options { \n/**@default \"bleu\" */\nfoo: Color }")
        self.assertIn("not one of the declared choice values", str(ctx.exception))

    def test_default_numeric_enum_value(self):
        """Members without initializers count up from the previous number."""
        source = "enum Level { Low = 1, Mid, High }\ninterface Options { \n/**@default %s */\nfoo: Level }"
        self.assertEqual(option_tags(source % "3"), {"default": NumericLiteral("3")})
        with self.assertRaises(DocTagParseError):
            option_tags(source % "4")

    def test_default_computed_enum_not_checked(self):
        """Values of computed members are unknown, so any value passes."""
        tags = option_tags("enum Flag { A = 1 << 0, B = 1 << 1 }\ninterface Options { \n/**@default 8 */\nfoo: Flag }")
        self.assertEqual(tags, {"default": NumericLiteral("8")})

    def test_default_kind_mismatch(self):
        with self.assertRaises(DocTagParseError) as ctx:
            option_tags("interface Options { \n/**@default \"x\" */\nfoo: number }")
        self.assertIn("expected a number literal", str(ctx.exception))

    def test_default_unparseable(self):
        with self.assertRaises(DocTagParseError):
            option_tags("interface Options { \n/**@default [1, 2] */\nfoo: number[] }")

    def test_demand_option_tags(self):
        """@demandOption, @require and @required all make an option required."""
        for tag in ["demandOption", "require", "required"]:
            with self.subTest(tag=tag):
                tags = option_tags(f"interface Options {{ \n/**@{tag} */\nfoo: string }}")
                self.assertEqual(tags, {"demand_option": BooleanLiteral(True)})

    def test_optional_marker_does_not_demand(self):
        """Requiredness of options comes from tags, not from `?`."""
        self.assertEqual(option_tags("interface Options { foo: string }"), {})


class TestBuildOptionSchema(unittest.TestCase):
    """Tests for build_option_schema."""

    def test_all_fields(self):
        prop = get_interface_property("""\
interface Options {
  /**
   * Output directory.
   * @alias o
   * @default "dist"
   * @required
   */
  out: string
}""")
        schema, ref = build_option_schema(prop)
        self.assertIsNone(ref)
        self.assertEqual(schema.properties(), {
            "type": StringLiteral("string"),
            "description": StringLiteral("Output directory."),
            "alias": StringLiteral("o"),
            "default": StringLiteral("dist"),
            "demandOption": BooleanLiteral(True),
        })

    def test_custom_demand_tags(self):
        prop = get_interface_property("interface Options {\n/** @mandatory */\nfoo: string\n}")
        schema, _ = build_option_schema(prop, ["mandatory"])
        self.assertEqual(schema.demand_option, BooleanLiteral(True))

        schema, _ = build_option_schema(prop)
        self.assertIsNone(schema.demand_option)

    def test_enum_reference(self):
        prop = get_interface_property("export enum E { A }\ninterface Options { foo: E }")
        schema, ref = build_option_schema(prop)
        self.assertEqual(schema.choices, (QualifiedName(("E", "A")),))
        self.assertEqual(ref.name, "E")


if __name__ == "__main__":
    unittest.main()

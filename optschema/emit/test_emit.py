"""
Unit tests for the emit/ modules.

Tests the generated yargs command module and the plain-data rendering used
by `optschema inspect`.
"""

import unittest

from ..config import Emit
from ..declarations import Project
from ..schema import build_command_schema, build_source_schemas, find_paired_options
from .dict_gen import schema_to_dict
from .yargs_gen import (
    command_string, generate_command_module, generate_imports, module_specifier,
    render_option_literal,
)


GREET_SOURCE = """\
import { Color } from './color'

/**
 * Greets someone.
 * @param name - who to greet
 */
export default function greet(name: string, times?: number) {}

export interface GreetOptions {
  /** Paint the greeting. */
  color?: Color
  /**
   * Shout it.
   * @alias s
   * @default false
   */
  shout?: boolean
}
"""


def greet_schema():
    project = Project(read_from_disk=False)
    project.add_source("src/color.ts", "export enum Color { Red = 'red', Green = 'green' }")
    source = project.add_source("src/greet.ts", GREET_SOURCE)
    func = source.functions[0]
    return build_command_schema(func, find_paired_options(func))


class TestGenerateCommandModule(unittest.TestCase):
    """Tests for generate_command_module."""

    def test_full_module(self):
        self.assertEqual(generate_command_module(greet_schema(), "src/greet.command.ts"), """\
import greet from './greet'
import { Color } from './color'

export const command = 'greet <name> [times]'
export const describe = 'Greets someone.'
export const positionals = {
  name: { type: 'string', description: 'who to greet', demandOption: 'true' },
  times: { type: 'number' },
}
export const options = {
  color: { choices: [Color.Red, Color.Green], description: 'Paint the greeting.' },
  shout: { type: 'boolean', description: 'Shout it.', alias: 's', default: false },
}
export const handler = (argv) => greet(argv.name, argv.times, argv)
""")

    def test_emit_config(self):
        """Quote and indent follow the emit configuration."""
        text = generate_command_module(greet_schema(), "src/greet.command.ts", Emit({"quote": '"', "indent": 4}))
        self.assertIn('import greet from "./greet"', text)
        self.assertIn('    name: { type: "string", description: "who to greet", demandOption: "true" },', text)

    def test_empty_tables_and_variadic(self):
        source = Project(read_from_disk=False).add_source("bin/run.ts", """\
/** Runs a script. */
export function run(script: string, ...args: string[]) {}
""")
        text = generate_command_module(build_source_schemas(source)[0], "bin/run.command.ts")
        self.assertIn("import { run } from './run'", text)
        self.assertIn("export const command = 'run <script> [args..]'", text)
        self.assertIn("  args: { type: 'string', array: true },", text)
        self.assertIn("export const options = {}", text)
        self.assertIn("export const handler = (argv) => run(argv.script, ...argv.args)", text)

    def test_quoted_property_names(self):
        source = Project(read_from_disk=False).add_source("cmd.ts", """\
export default function cmd() {}
interface Options { 'dry-run'?: boolean }
""")
        schema = build_source_schemas(source)[0]
        self.assertIn("  'dry-run': { type: 'boolean' },", generate_command_module(schema, "cmd.command.ts"))

    def test_anonymous_command_in_hyphenated_file(self):
        """The command string keeps the stem; code binds a valid identifier."""
        source = Project(read_from_disk=False).add_source("my-cmd.ts", "export default function (foo: string) {}")
        text = generate_command_module(build_source_schemas(source)[0], "my-cmd.command.ts")
        self.assertIn("import myCmd from './my-cmd'", text)
        self.assertIn("export const command = 'my-cmd <foo>'", text)
        self.assertIn("export const handler = (argv) => myCmd(argv.foo)", text)


class TestImports(unittest.TestCase):
    """Tests for module_specifier and generate_imports."""

    def test_module_specifier(self):
        project = Project(read_from_disk=False)
        source = project.add_source("src/lib/color.ts", "")
        self.assertEqual(module_specifier("src/greet.command.ts", source), "./lib/color")
        self.assertEqual(module_specifier("out/greet.command.ts", source), "../src/lib/color")

    def test_default_and_named_from_one_file(self):
        project = Project(read_from_disk=False)
        project.add_source("types.ts", "enum Size { S }\nexport default Size\nexport enum Color { Red }")
        source = project.add_source("cmd.ts", """\
import Size, { Color } from './types'
export default function cmd(size: Size) {}
interface Options { color?: Color }
""")
        schema = build_source_schemas(source)[0]
        self.assertEqual(generate_imports(schema, "cmd.command.ts"), [
            "import cmd from './cmd'",
            "import Size, { Color } from './types'",
        ])

    def test_aliased_exports(self):
        """Symbols exported under an alias are imported by it and bound to their own name."""
        source = Project(read_from_disk=False).add_source("run.ts", """\
enum E { A = 'a' }
function run(c: E) {}
export { E as Color, run as go }
""")
        schema = build_source_schemas(source)[0]
        text = generate_command_module(schema, "run.command.ts")
        self.assertIn("import { go as run, Color as E } from './run'", text)
        self.assertEqual(schema_to_dict(schema)["command"]["export_name"], "go")
        self.assertIn("  c: { choices: [E.A], demandOption: 'true' },", text)
        self.assertIn("export const handler = (argv) => run(argv.c)", text)

    def test_aliased_enum_imported_across_files(self):
        project = Project(read_from_disk=False)
        project.add_source("color.ts", "enum E { Red }\nexport { E as Color }")
        source = project.add_source("paint.ts", """\
import { Color } from './color'
export default function paint(color: Color) {}
""")
        self.assertEqual(generate_imports(build_source_schemas(source)[0], "paint.command.ts"), [
            "import paint from './paint'",
            "import { Color as E } from './color'",
        ])


class TestRendering(unittest.TestCase):
    """Tests for command_string and render_option_literal."""

    def test_command_string(self):
        self.assertEqual(command_string(greet_schema()), "greet <name> [times]")

    def test_render_option_literal(self):
        schema = greet_schema()
        self.assertEqual(
            render_option_literal(schema.get_option("color")),
            "{ choices: [Color.Red, Color.Green], description: 'Paint the greeting.' }",
        )


class TestSchemaToDict(unittest.TestCase):
    """Tests for schema_to_dict."""

    def test_greet(self):
        data = schema_to_dict(greet_schema())
        self.assertEqual(data["name"], "greet")
        self.assertEqual(data["description"], "Greets someone.")
        self.assertEqual(data["positionals"][0], {
            "name": "name",
            "properties": {"type": "string", "description": "who to greet", "demandOption": "true"},
        })
        self.assertEqual(data["options"][1]["properties"], {
            "type": "boolean", "description": "Shout it.", "alias": "s", "default": False,
        })
        self.assertEqual(data["options"][0]["properties"]["choices"], ["Color.Red", "Color.Green"])
        self.assertEqual(data["references"], {"src/color.ts": {"default": [], "named": ["Color"]}})
        self.assertEqual(data["command"], {"name": "greet", "export": "default", "source": "src/greet.ts"})

    def test_variadic_flag(self):
        source = Project(read_from_disk=False).add_source("run.ts", "export function run(...args: string[]) {}")
        data = schema_to_dict(build_source_schemas(source)[0])
        self.assertTrue(data["positionals"][0]["variadic"])
        self.assertEqual(data["references"], {})


if __name__ == "__main__":
    unittest.main()

"""
Unit tests for declarations/project.py module.

Tests source registration, module resolution and cross-file type lookup.
"""

import os
import tempfile
import unittest

from ..common import OptSchemaException, file_write
from .nodes import EnumDeclaration, ExportKind
from .project import Project


class TestProjectSources(unittest.TestCase):
    """Tests for registering sources."""

    def test_add_source(self):
        """Added sources are iterable and retrievable by normalized path."""
        project = Project(read_from_disk=False)
        source = project.add_source("src/./a.ts", "export function a() {}")
        self.assertEqual(source.path, "src/a.ts")
        self.assertIs(project.get_source_file("src/a.ts"), source)
        self.assertIs(source.project, project)
        self.assertEqual(list(project), [source])
        self.assertEqual(len(project), 1)

    def test_duplicate_source(self):
        """A path can only be registered once."""
        project = Project(read_from_disk=False)
        project.add_source("a.ts", "")
        with self.assertRaises(OptSchemaException):
            project.add_source("a.ts", "")

    def test_ids_unique_across_files(self):
        """Declaration ids come from one counter per project."""
        project = Project(read_from_disk=False)
        a = project.add_source("a.ts", "function f() {}")
        b = project.add_source("b.ts", "function f() {}")
        self.assertNotEqual(a.functions[0].decl_id, b.functions[0].decl_id)

    def test_load_from_disk(self):
        """load() reads a file once."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "cmd.ts")
            file_write(path, "export default function cmd() {}")

            project = Project()
            first = project.load(path)
            self.assertIs(project.load(path), first)
            self.assertEqual(first.functions[0].name, "cmd")

    def test_load_missing_file(self):
        """Missing files raise the toolchain exception."""
        with self.assertRaises(OptSchemaException):
            Project().load("/nonexistent/cmd.ts")


class TestLookupType(unittest.TestCase):
    """Tests for Project.lookup_type and module resolution."""

    def setUp(self):
        self.project = Project(read_from_disk=False)
        self.colors = self.project.add_source("src/color.ts", "export enum Color { Red, Green }\nenum Hidden { X }")
        self.sizes = self.project.add_source("src/size/index.ts", "enum Size { S, M }\nexport default Size")

    def test_local_declaration(self):
        decl = self.project.lookup_type(self.colors, "Hidden")
        self.assertIsInstance(decl, EnumDeclaration)
        self.assertEqual(decl.export_kind, ExportKind.NONE)

    def test_named_import(self):
        """Named imports resolve to the exported declaration of the target file."""
        cmd = self.project.add_source("src/cmd.ts", "import { Color } from './color'")
        self.assertIs(self.project.lookup_type(cmd, "Color"), self.colors.enums[0])

    def test_aliased_import(self):
        cmd = self.project.add_source("src/cmd.ts", "import { Color as C } from './color'")
        self.assertIs(self.project.lookup_type(cmd, "C"), self.colors.enums[0])
        self.assertIsNone(self.project.lookup_type(cmd, "Color"))

    def test_default_import_from_index(self):
        """Directory imports resolve to index.ts; default imports to the default export."""
        cmd = self.project.add_source("src/cmd.ts", "import Size from './size'")
        self.assertIs(self.project.lookup_type(cmd, "Size"), self.sizes.enums[0])

    def test_unexported_import(self):
        """Importing a declaration the target does not export resolves nothing."""
        cmd = self.project.add_source("src/cmd.ts", "import { Hidden } from './color'")
        self.assertIsNone(self.project.lookup_type(cmd, "Hidden"))

    def test_bare_specifier(self):
        """Package imports are outside the project."""
        cmd = self.project.add_source("src/cmd.ts", "import { Color } from 'colors'")
        self.assertIsNone(self.project.lookup_type(cmd, "Color"))

    def test_parent_directory(self):
        cmd = self.project.add_source("src/sub/cmd.ts", "import { Color } from '../color'")
        self.assertIs(self.project.lookup_type(cmd, "Color"), self.colors.enums[0])

    def test_visible_type_names(self):
        cmd = self.project.add_source("src/cmd.ts", "import Size, { Color as C } from './x'\nenum Local { A }")
        self.assertEqual(sorted(self.project.visible_type_names(cmd)), ["C", "Local", "Size"])

    def test_import_read_from_disk(self):
        """Unregistered relative imports are read from disk on demand."""
        with tempfile.TemporaryDirectory() as tmpdir:
            file_write(os.path.join(tmpdir, "color.ts"), "export enum Color { Red }")
            file_write(os.path.join(tmpdir, "cmd.ts"), "import { Color } from './color'")

            project = Project()
            cmd = project.load(os.path.join(tmpdir, "cmd.ts"))
            decl = project.lookup_type(cmd, "Color")
            self.assertEqual(decl.name, "Color")
            self.assertEqual(len(project), 2)


if __name__ == "__main__":
    unittest.main()

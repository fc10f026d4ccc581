"""
Unit tests for schema/model.py module.

Tests reference identity, the reference table and option schema invariants.
"""

import unittest

from ..declarations import Project
from .literal import BooleanLiteral, QualifiedName, StringLiteral
from .model import (
    OptionSchema, Reference, ReferenceKind, ReferenceTable,
    ReferenceTableFrozenError,
)


class TestReferenceTable(unittest.TestCase):
    """Tests for ReferenceTable."""

    def setUp(self):
        project = Project(read_from_disk=False)
        self.types = project.add_source("types.ts", "export enum A { X }\nexport enum B { Y }\nenum Size { S }\nexport default Size")
        self.other = project.add_source("other.ts", "export enum C { Z }")
        self.a, self.b, self.size = self.types.enums
        self.c = self.other.enums[0]

    def ref(self, decl, kind=ReferenceKind.NAMED):
        return Reference(name=decl.name, export_kind=kind, declaration=decl, source_file=decl.source_file)

    def test_empty_table_equals_empty_mapping(self):
        self.assertEqual(ReferenceTable(), {})
        self.assertEqual(len(ReferenceTable()), 0)

    def test_reference_identity(self):
        """References to one declaration are equal regardless of how they were built."""
        self.assertEqual(self.ref(self.a), self.ref(self.a))
        self.assertNotEqual(self.ref(self.a), self.ref(self.b))
        self.assertEqual(len({self.ref(self.a), self.ref(self.a)}), 1)

    def test_groups_by_file(self):
        """References are grouped per source file, default first."""
        table = ReferenceTable()
        table.add(self.ref(self.a))
        table.add(self.ref(self.c))
        table.add(self.ref(self.size, ReferenceKind.DEFAULT))

        self.assertEqual(list(table), [self.types, self.other])
        self.assertEqual([r.name for r in table[self.types].default], ["Size"])
        self.assertEqual([r.name for r in table[self.types].named], ["A"])
        self.assertEqual([r.name for r in table.references()], ["Size", "A", "C"])

    def test_deduplicates(self):
        table = ReferenceTable()
        table.add(self.ref(self.a))
        table.add(self.ref(self.a))
        table.add(None)
        self.assertEqual(len(table.references()), 1)
        self.assertIn(self.ref(self.a), table)
        self.assertNotIn(self.ref(self.b), table)
        self.assertIn(self.types, table)

    def test_merge(self):
        first, second = ReferenceTable(), ReferenceTable()
        first.add(self.ref(self.a))
        second.add(self.ref(self.a))
        second.add(self.ref(self.c))
        first.merge(second)
        self.assertEqual([r.name for r in first.references()], ["A", "C"])

    def test_freeze(self):
        """A frozen table rejects additions."""
        table = ReferenceTable()
        table.add(self.ref(self.a))
        self.assertIs(table.freeze(), table)
        self.assertTrue(table.is_frozen)
        with self.assertRaises(ReferenceTableFrozenError):
            table.add(self.ref(self.b))
        self.assertEqual(len(table.references()), 1)


class TestOptionSchema(unittest.TestCase):
    """Tests for OptionSchema invariants and properties."""

    def test_requires_type_or_choices(self):
        with self.assertRaises(ValueError):
            OptionSchema(name="foo")
        with self.assertRaises(ValueError):
            OptionSchema(name="foo", type=StringLiteral("string"), choices=(QualifiedName(("E", "A")),))

    def test_array_needs_type(self):
        with self.assertRaises(ValueError):
            OptionSchema(name="foo", choices=(QualifiedName(("E", "A")),), array=BooleanLiteral(True))

    def test_properties_order(self):
        """Only present fields are listed, in emit order, under yargs names."""
        schema = OptionSchema(
            name="foo",
            demand_option=BooleanLiteral(True),
            description=StringLiteral("desc"),
            type=StringLiteral("string"),
        )
        self.assertEqual(list(schema.properties()), ["type", "description", "demandOption"])


if __name__ == "__main__":
    unittest.main()

"""
Parse TypeScript declaration sources into declaration trees.

Sources are parsed with tree-sitter's TypeScript grammar (TSX for `.tsx`
files). The parser walks the top-level statements and keeps the declarations
that describe commands and their options:

    /**
     * Greets someone.
     * @param name - who to greet
     */
    export default function greet(name: string, times?: number) { ... }

    export interface Options {
      /**
       * Shout the greeting.
       * @alias s
       */
      shout?: boolean
    }

    export enum Color { Red = 'red', Green = 'green' }

Function bodies, initializers and every other statement are never
interpreted. Overload signatures of a function merge into the first one
declared, so each function name yields a single declaration.
"""

import functools
import itertools
import re
from typing import Callable, Dict, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from ..errors import DeclarationSyntaxError
from .nodes import (
    ArrayType, DocBlock, DocTag, EnumDeclaration, EnumMember, ExportKind,
    FunctionDeclaration, ImportDeclaration, InterfaceDeclaration,
    IntersectionType, LiteralType, OpaqueType, Parameter, PropertySignature,
    SourceFile, TypeNode, TypeReference, UnionType,
)


# Function forms: declarations, bodiless signatures (overloads, `declare`)
# and the anonymous expression of `export default function () {}`
_FUNCTION_NODES = {
    "function_declaration", "generator_function_declaration", "function_signature",
    "function_expression", "function", "generator_function",
}

_PARAMETER_NODES = {"required_parameter", "optional_parameter"}

# Keyword literals written in type position; resolved like named types
_KEYWORD_TYPES = {"null", "undefined", "true", "false"}

_TAG_RE = re.compile(r"^@([A-Za-z_$][\w$-]*)\s*(.*)$")


@functools.lru_cache(maxsize=None)
def get_treesitter_parser(tsx: bool = False) -> Parser:
    """The tree-sitter parser for TypeScript, or for TSX sources."""
    if tsx:
        language = Language(tree_sitter_typescript.language_tsx())
    else:
        language = Language(tree_sitter_typescript.language_typescript())

    return Parser(language)


def parse_doc_comment(text: str, line: int = 0) -> DocBlock:
    """
    Parse the raw text of a /** ... */ comment.

    Lines before the first tag form the description. A tag runs from its
    `@name` up to the next line starting with `@`; its comment keeps inner
    line breaks and is stripped at both ends.
    """
    body = text[3:-2] if text.startswith("/**") and text.endswith("*/") else text

    description: List[str] = []
    tags: List[Tuple[str, List[str], int]] = []

    for offset, raw in enumerate(body.split("\n")):
        stripped = raw.strip()
        if stripped.startswith("*"):
            stripped = stripped[1:].strip()

        match = _TAG_RE.match(stripped)
        if match:
            tags.append((match.group(1), [match.group(2)], line + offset))
        elif tags:
            tags[-1][1].append(stripped)
        else:
            description.append(stripped)

    return DocBlock(
        description="\n".join(description).strip(),
        tags=tuple(DocTag(name, "\n".join(lines).strip(), tag_line) for name, lines, tag_line in tags),
        line=line,
    )


def _named(node: Optional[Node]) -> List[Node]:
    """Named children of a node, comments excluded."""
    if node is None:
        return []
    return [child for child in node.named_children if child.type != "comment"]


def _first_named(node: Optional[Node]) -> Optional[Node]:
    children = _named(node)
    return children[0] if children else None


def _has_token(node: Node, text: str) -> bool:
    """Whether a node has the anonymous token `text` as a direct child."""
    return any(not child.is_named and child.type == text for child in node.children)


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


class DeclarationParser:
    """
    Reader over the tree-sitter syntax tree of one source file.

    Args:
        text: Source text.
        path: Path recorded on the SourceFile and in error messages.
        next_id: Callable returning a fresh declaration id on every call.
    """

    def __init__(self, text: str, path: str, next_id: Optional[Callable[[], int]] = None):
        self.text = text
        self.path = path
        self.source = text.encode("utf-8")
        self.next_id = next_id or itertools.count(1).__next__
        self.source_file = SourceFile(path=path)

        self._functions: Dict[str, FunctionDeclaration] = {}
        self._default_export_name: Optional[str] = None
        self._named_exports: List[Tuple[str, str]] = []     # (local, exported)

    # --- node helpers ---

    def node_text(self, node: Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8")

    @staticmethod
    def line_of(node: Node) -> int:
        return node.start_point[0] + 1

    def error(self, message: str, node: Node) -> DeclarationSyntaxError:
        row, column = node.start_point
        return DeclarationSyntaxError(message, self.path, row + 1, column + 1)

    def check_syntax(self, root: Node) -> None:
        """Raise for the first ERROR or MISSING node, in source order."""
        if not root.has_error:
            return

        stack = [root]
        while stack:
            node = stack.pop()
            if node.is_missing:
                raise self.error(f"Expected '{node.type}'", node)
            if node.type == "ERROR":
                snippet = self.node_text(node).split("\n", 1)[0][:24]
                raise self.error(f"Unexpected {snippet!r}" if snippet else "Unexpected end of file", node)
            stack.extend(reversed([child for child in node.children if child.has_error or child.is_missing]))

    def doc_before(self, node: Node) -> Optional[DocBlock]:
        """The nearest /** */ block among the comments directly above a node."""
        sibling = node.prev_sibling
        while sibling is not None and sibling.type == "comment":
            text = self.node_text(sibling)
            if text.startswith("/**") and text != "/**/":
                return parse_doc_comment(text, self.line_of(sibling))
            sibling = sibling.prev_sibling
        return None

    # --- entry point ---

    def parse(self) -> SourceFile:
        tree = get_treesitter_parser(self.path.endswith(".tsx")).parse(self.source)
        self.check_syntax(tree.root_node)

        for node in _named(tree.root_node):
            self.parse_statement(node)

        self._apply_export_statements()
        return self.source_file

    def parse_statement(self, node: Node) -> None:
        if node.type == "import_statement":
            self.parse_import(node)
        elif node.type == "export_statement":
            self.parse_export(node)
        else:
            self.parse_declaration(node, self.doc_before(node), ExportKind.NONE)

    def parse_export(self, node: Node) -> None:
        if node.child_by_field_name("source") is not None:
            # Re-exports declare nothing locally
            return

        doc = self.doc_before(node)
        kind = ExportKind.DEFAULT if _has_token(node, "default") else ExportKind.NAMED

        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            self.parse_declaration(declaration, doc, kind)
            return

        value = node.child_by_field_name("value")
        if value is None and _has_token(node, "="):
            # export = Name (CommonJS style); treated like a default export
            value = _first_named(node)
        if value is not None:
            if value.type == "identifier":
                self._default_export_name = self.node_text(value)
            else:
                self.parse_declaration(value, doc, ExportKind.DEFAULT)
            return

        for clause in _named(node):
            if clause.type == "export_clause":
                self.parse_export_clause(clause)

    def parse_export_clause(self, node: Node) -> None:
        for spec in _named(node):
            if spec.type != "export_specifier":
                continue
            local = _unquote(self.node_text(spec.child_by_field_name("name")))
            alias = spec.child_by_field_name("alias")
            exported = _unquote(self.node_text(alias)) if alias is not None else local

            if exported == "default":
                self._default_export_name = local
            else:
                self._named_exports.append((local, exported))

    def parse_declaration(self, node: Node, doc: Optional[DocBlock], export_kind: ExportKind) -> bool:
        """Parse a function/interface/enum declaration; False for anything else."""
        if node.type == "ambient_declaration":
            # declare function f(): void
            return any(self.parse_declaration(child, doc, export_kind) for child in _named(node))
        if node.type in _FUNCTION_NODES:
            self.parse_function(node, doc, export_kind)
            return True
        if node.type == "interface_declaration":
            self.parse_interface(node, doc, export_kind)
            return True
        if node.type == "enum_declaration":
            self.parse_enum(node, doc, export_kind)
            return True
        return False

    # --- imports ---

    def parse_import(self, node: Node) -> None:
        source = node.child_by_field_name("source")
        clause = next((child for child in _named(node) if child.type == "import_clause"), None)
        if source is None or clause is None:
            # import './side-effect' or import x = require(...)
            return

        default_name, namespace = None, None
        named: List[Tuple[str, str]] = []

        for child in _named(clause):
            if child.type == "identifier":
                default_name = self.node_text(child)
            elif child.type == "namespace_import":
                namespace = self.node_text(_first_named(child))
            elif child.type == "named_imports":
                for spec in _named(child):
                    if spec.type != "import_specifier":
                        continue
                    imported = _unquote(self.node_text(spec.child_by_field_name("name")))
                    alias = spec.child_by_field_name("alias")
                    named.append((imported, self.node_text(alias) if alias is not None else imported))

        self.source_file.imports.append(ImportDeclaration(
            module=_unquote(self.node_text(source)), default_name=default_name, named=tuple(named),
            namespace=namespace, line=self.line_of(node),
        ))

    # --- declarations ---

    def _register(self, decl, collection: list) -> None:
        decl.decl_id = self.next_id()
        decl.source_file = self.source_file
        collection.append(decl)

    def parse_function(self, node: Node, doc: Optional[DocBlock], export_kind: ExportKind) -> FunctionDeclaration:
        name_node = node.child_by_field_name("name")
        name = self.node_text(name_node) if name_node is not None else None

        first = self._functions.get(name) if name is not None else None
        if first is not None:
            # A later overload or the implementation: the first signature stands
            if first.doc is None:
                first.doc = doc
            if first.export_kind == ExportKind.NONE:
                first.export_kind = export_kind
            return first

        decl = FunctionDeclaration(name=name, doc=doc, export_kind=export_kind, line=self.line_of(node))
        decl.parameters = self.parse_parameters(node.child_by_field_name("parameters"), decl)

        self._register(decl, self.source_file.functions)
        if name is not None:
            self._functions[name] = decl
        return decl

    def parse_parameters(self, node: Optional[Node], parent: FunctionDeclaration) -> List[Parameter]:
        params: List[Parameter] = []

        for child in _named(node):
            if child.type not in _PARAMETER_NODES:
                continue

            pattern = child.child_by_field_name("pattern")
            rest = pattern.type == "rest_pattern"
            if rest:
                pattern = _first_named(pattern)
            if pattern.type == "this":
                continue
            if pattern.type != "identifier":
                raise self.error("Destructured parameters cannot be used as positionals", pattern)

            param = Parameter(
                name=self.node_text(pattern), optional=child.type == "optional_parameter",
                rest=rest, line=self.line_of(pattern), parent=parent,
            )
            annotation = child.child_by_field_name("type")
            if annotation is not None:
                param.type = self.parse_type(annotation)
            value = child.child_by_field_name("value")
            if value is not None:
                param.initializer = self.node_text(value)

            params.append(param)

        return params

    def parse_interface(self, node: Node, doc: Optional[DocBlock], export_kind: ExportKind) -> InterfaceDeclaration:
        decl = InterfaceDeclaration(
            name=self.node_text(node.child_by_field_name("name")), doc=doc,
            export_kind=export_kind, line=self.line_of(node),
        )

        for member in _named(node.child_by_field_name("body")):
            # Method, index, call and construct signatures are not options
            if member.type != "property_signature":
                continue
            prop = self.parse_property(member, decl)
            if prop is not None:
                decl.properties.append(prop)

        self._register(decl, self.source_file.interfaces)
        return decl

    def parse_property(self, node: Node, parent: InterfaceDeclaration) -> Optional[PropertySignature]:
        name_node = node.child_by_field_name("name")
        if name_node.type == "computed_property_name":
            return None

        prop = PropertySignature(
            name=_unquote(self.node_text(name_node)), optional=_has_token(node, "?"),
            doc=self.doc_before(node), line=self.line_of(name_node), parent=parent,
        )
        annotation = node.child_by_field_name("type")
        if annotation is not None:
            prop.type = self.parse_type(annotation)
        return prop

    def parse_enum(self, node: Node, doc: Optional[DocBlock], export_kind: ExportKind) -> EnumDeclaration:
        decl = EnumDeclaration(
            name=self.node_text(node.child_by_field_name("name")), doc=doc,
            export_kind=export_kind, line=self.line_of(node), const=_has_token(node, "const"),
        )

        for member in _named(node.child_by_field_name("body")):
            if member.type == "enum_assignment":
                name_node = member.child_by_field_name("name")
                initializer = self.node_text(member.child_by_field_name("value"))
            elif member.type in ("property_identifier", "string", "number"):
                name_node, initializer = member, None
            else:
                continue

            decl.members.append(EnumMember(
                name=_unquote(self.node_text(name_node)), initializer=initializer,
                doc=self.doc_before(member), line=self.line_of(member),
            ))

        self._register(decl, self.source_file.enums)
        return decl

    # --- types ---

    def parse_type(self, node: Node) -> TypeNode:
        kind = node.type

        if kind in ("type_annotation", "parenthesized_type", "readonly_type"):
            return self.parse_type(_first_named(node))

        if kind in ("union_type", "intersection_type"):
            cls = UnionType if kind == "union_type" else IntersectionType
            types: List[TypeNode] = []
            for child in _named(node):
                inner = self.parse_type(child)
                if child.type == kind and isinstance(inner, cls):
                    types.extend(inner.types)
                else:
                    types.append(inner)
            return types[0] if len(types) == 1 else cls(tuple(types))

        if kind == "array_type":
            return ArrayType(self.parse_type(_first_named(node)))

        if kind in ("predefined_type", "type_identifier", "nested_type_identifier"):
            return TypeReference(re.sub(r"\s+", "", self.node_text(node)))

        if kind == "generic_type":
            name = re.sub(r"\s+", "", self.node_text(node.child_by_field_name("name")))
            args = node.child_by_field_name("type_arguments")
            return TypeReference(name, tuple(self.parse_type(arg) for arg in _named(args)))

        if kind == "literal_type":
            inner = _first_named(node)
            if inner is not None and inner.type in _KEYWORD_TYPES:
                return TypeReference(inner.type)
            return LiteralType(self.node_text(node))

        if kind in _KEYWORD_TYPES:
            return TypeReference(kind)

        # Object, tuple, function, conditional, query and lookup types
        return OpaqueType(self.node_text(node))

    # --- exports declared apart from their declaration ---

    def _apply_export_statements(self) -> None:
        for decl in self.source_file.declarations:
            if decl.name is None:
                continue
            if decl.name == self._default_export_name:
                decl.export_kind = ExportKind.DEFAULT
                continue
            for local, exported in self._named_exports:
                if local == decl.name and decl.export_kind == ExportKind.NONE:
                    decl.export_kind = ExportKind.NAMED
                    if exported != local:
                        decl.export_name = exported
                    break


def parse_source(text: str, path: str = "<source>.ts", next_id: Optional[Callable[[], int]] = None) -> SourceFile:
    """
    Parse a declaration source.

    Args:
        text: TypeScript source text.
        path: Path recorded on the returned SourceFile; `.tsx` paths are
            parsed with the TSX grammar.
        next_id: Declaration id factory; projects share one across files so
            ids stay unique project-wide.

    Returns:
        The parsed SourceFile.

    Raises:
        DeclarationSyntaxError: If the source has a syntax error, or a
            parameter cannot be exposed as a positional.
    """
    return DeclarationParser(text, path, next_id).parse()

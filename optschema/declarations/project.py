"""
Declaration Project.

A Project owns every parsed source file and the counter that gives each
declaration its identity. It resolves type names across files by following
relative `import` declarations, so that an enum declared in one file can be
referenced by a command or options shape in another.
"""

import itertools
import os
import posixpath
from typing import Dict, Iterator, List, Optional

from ..common import OptSchemaException, file_read
from .nodes import Declaration, SourceFile
from .parser import parse_source


# Extensions tried, in order, when resolving a relative module specifier
MODULE_SUFFIXES = ["", ".ts", ".tsx", ".d.ts", "/index.ts", "/index.tsx"]


def _normalize(path: str) -> str:
    return posixpath.normpath(path.replace("\\", "/"))


class Project:
    """
    Collection of declaration sources sharing one identity space.

    Sources are registered either from text (add_source) or from disk (load).
    When an import names a relative module that has not been registered yet,
    the project reads it from disk on demand.
    """

    def __init__(self, read_from_disk: bool = True):
        self._ids = itertools.count(1)
        self._files: Dict[str, SourceFile] = {}
        self.read_from_disk = read_from_disk

    def __iter__(self) -> Iterator[SourceFile]:
        return iter(self._files.values())

    def __len__(self) -> int:
        return len(self._files)

    def next_id(self) -> int:
        return next(self._ids)

    def add_source(self, path: str, text: str) -> SourceFile:
        """
        Parse text and register it under path.

        Raises:
            OptSchemaException: If a source is already registered under path.
            DeclarationSyntaxError: If the text cannot be parsed.
        """
        key = _normalize(path)
        if key in self._files:
            raise OptSchemaException(f"Source '{key}' is already part of the project")

        source_file = parse_source(text, key, self.next_id)
        source_file.project = self
        self._files[key] = source_file
        return source_file

    def load(self, path: str) -> SourceFile:
        """Read and register a source from disk (once)."""
        key = _normalize(path)
        if key in self._files:
            return self._files[key]
        return self.add_source(key, file_read(path))

    def get_source_file(self, path: str) -> Optional[SourceFile]:
        return self._files.get(_normalize(path))

    def resolve_module(self, from_file: SourceFile, specifier: str) -> Optional[SourceFile]:
        """
        Find the source file a relative module specifier points at.

        Bare specifiers (packages) are never resolved: their declarations are
        not part of the project.
        """
        if not specifier.startswith("."):
            return None

        base = _normalize(posixpath.join(posixpath.dirname(from_file.path), specifier))
        for suffix in MODULE_SUFFIXES:
            candidate = base + suffix
            if candidate in self._files:
                return self._files[candidate]

        if self.read_from_disk:
            for suffix in MODULE_SUFFIXES:
                candidate = base + suffix
                if os.path.isfile(candidate):
                    return self.load(candidate)

        return None

    def lookup_type(self, source_file: SourceFile, name: str) -> Optional[Declaration]:
        """
        Resolve a type name as seen from source_file.

        Local enum and interface declarations win; otherwise default and named
        imports (including `import { E as F }` aliases) are followed into
        their source files.
        """
        local = source_file.get_type_declaration(name)
        if local is not None:
            return local

        for imp in source_file.imports:
            if imp.default_name == name:
                target = self.resolve_module(source_file, imp.module)
                if target is not None:
                    return target.default_export
            for imported, local_name in imp.named:
                if local_name != name:
                    continue
                target = self.resolve_module(source_file, imp.module)
                if target is None:
                    return None
                if imported == "default":
                    return target.default_export
                return target.get_exported(imported)

        return None

    def visible_type_names(self, source_file: SourceFile) -> List[str]:
        """Names of every enum and interface usable from source_file."""
        names = [decl.name for decl in [*source_file.enums, *source_file.interfaces]]
        for imp in source_file.imports:
            if imp.default_name:
                names.append(imp.default_name)
            names.extend(local for _, local in imp.named)
        return names

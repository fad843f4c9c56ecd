"""
Module Table

Owns every Module of a program: registers trees under normalised names,
assigns ids, resolves authored dependency paths (`get_module`) and runs
symbol linking once all modules are known.

The table is read-only once `analyze()` has run; formatting one module
never touches another module's records.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from ...shared.errors import DuplicateModuleIdError, UnresolvedModuleError
from ...shared.nodes import Program
from ...shared.serialization import from_estree
from ...utils.io_utils import read_json_file
from .module_info import Module
from .path_resolver import PathResolver
from .symbol_linker import SymbolLinker

logger = logging.getLogger(__name__)


class ModuleTable:
    """
    Program-wide module registry.

    Usage:
        table = ModuleTable()
        table.add("lib/a", program_a)
        table.add("lib/b", program_b)
        table.analyze()
        modules = table.modules   # insertion order
    """

    def __init__(self, resolver: Optional[PathResolver] = None):
        self.resolver = resolver or PathResolver()
        self._modules: Dict[str, Module] = {}
        self._ids: Dict[str, str] = {}
        self._analyzed = False

    def add(self, name: str, program: Program, relative_path: Optional[str] = None) -> Module:
        name = self.resolver.normalize(name)
        module_id = self.resolver.module_id(name)
        owner = self._ids.get(module_id)
        if owner is not None and owner != name:
            raise DuplicateModuleIdError(
                f"modules `{owner}` and `{name}` both map to identifier `{module_id}`"
            )
        module = Module(
            name=name,
            id=module_id,
            ast=program,
            relative_path=relative_path or f"{name}.js",
            table=self,
        )
        self._modules[name] = module
        self._ids[module_id] = name
        logger.debug(f"Registered module {name} as {module_id}")
        return module

    def add_file(self, path: Union[Path, str], root: Union[Path, str]) -> Module:
        """Register a module from an ESTree JSON file below root."""
        name = self.resolver.name_for_file(path, root)
        relative_path = f"{name}.js"
        program = from_estree(read_json_file(path), file=relative_path)
        return self.add(name, program, relative_path)

    def get_module(self, path: str, importer: Optional[Module] = None) -> Module:
        name = self.resolver.resolve(path, importer.name if importer is not None else None)
        module = self._modules.get(name)
        if module is None:
            location = None
            if importer is not None:
                location = importer.ast.location
            raise UnresolvedModuleError(
                f"cannot resolve module `{path}`"
                + (f" imported from {importer.relative_path}" if importer is not None else ""),
                location,
            )
        return module

    def analyze(self) -> List[Module]:
        """Link the import/export collections of every registered module."""
        if self._analyzed:
            return self.modules
        linker = SymbolLinker()
        for module in self._modules.values():
            linker.link(module)
        self._analyzed = True
        return self.modules

    @property
    def modules(self) -> List[Module]:
        return list(self._modules.values())

    def __iter__(self) -> Iterator[Module]:
        return iter(self._modules.values())

    def __contains__(self, name: str) -> bool:
        return self.resolver.normalize(name) in self._modules

    def __len__(self) -> int:
        return len(self._modules)

"""Module system: path resolution, module records, symbol linking."""

from .path_resolver import PathResolver
from .module_info import (
    Module, Specifier, DeclarationCollection, ImportDeclarationList, ExportDeclarationList,
)
from .symbol_linker import SymbolLinker
from .module_table import ModuleTable

__all__ = [
    'PathResolver',
    'Module',
    'Specifier',
    'DeclarationCollection',
    'ImportDeclarationList',
    'ExportDeclarationList',
    'SymbolLinker',
    'ModuleTable',
]

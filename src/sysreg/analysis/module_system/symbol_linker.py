"""
Symbol Linking

Fills a module's `imports` and `exports` collections from the top-level
import/export statements of its tree, linking every sourced specifier to the
module it resolves to:

    import d from './a'                -> imports  d    <- a["default"]
    import {x as y} from './a'         -> imports  y    <- a["x"]
    import * as ns from './a'          -> imports  ns   <- a (namespace)
    import './a'                       -> imports  (no binding) <- a
    export var v = 1                   -> exports  v    <- local v
    export default function f() {}     -> exports  default <- local f
    export {x as y} from './a'         -> exports  y    <- a["x"]

This class is stateless and can be shared/reused.
"""

import logging

from ...shared.nodes import (
    ClassDeclaration, ExportDefaultDeclaration, ExportNamedDeclaration,
    FunctionDeclaration, Identifier, ImportDeclaration, ImportDefaultSpecifier,
    ImportNamespaceSpecifier, ImportSpecifier, VariableDeclaration,
    FunctionExpression, ClassExpression,
)
from ...utils.config import DEFAULT_EXPORT_NAME
from .module_info import Module, Specifier

logger = logging.getLogger(__name__)


class SymbolLinker:
    """Builds declaration collections for one module at a time."""

    def link(self, module: Module) -> None:
        for stmt in module.ast.body:
            if isinstance(stmt, ImportDeclaration):
                self._link_import(module, stmt)
            elif isinstance(stmt, ExportNamedDeclaration):
                self._link_named_export(module, stmt)
            elif isinstance(stmt, ExportDefaultDeclaration):
                self._link_default_export(module, stmt)
        logger.debug(
            f"Linked {module.name}: imports={module.imports.names}, exports={module.exports.names}"
        )

    def _link_import(self, module: Module, stmt: ImportDeclaration) -> None:
        source = module.get_module(stmt.source.value)
        if not stmt.specifiers:
            module.imports.add(Specifier(None, None, stmt, source, stmt))
            return
        for specifier in stmt.specifiers:
            if isinstance(specifier, ImportDefaultSpecifier):
                from_ = DEFAULT_EXPORT_NAME
            elif isinstance(specifier, ImportNamespaceSpecifier):
                from_ = None
            elif isinstance(specifier, ImportSpecifier):
                from_ = specifier.imported.name
            else:
                continue
            module.imports.add(Specifier(specifier.local.name, from_, stmt, source, specifier))

    def _link_named_export(self, module: Module, stmt: ExportNamedDeclaration) -> None:
        decl = stmt.declaration
        if decl is None:
            source = module.get_module(stmt.source.value) if stmt.source is not None else None
            for specifier in stmt.specifiers:
                module.exports.add(Specifier(specifier.exported.name, specifier.local.name, stmt, source, specifier))
        elif isinstance(decl, (FunctionDeclaration, ClassDeclaration)) and decl.id is not None:
            module.exports.add(Specifier(decl.id.name, decl.id.name, stmt, None, decl))
        elif isinstance(decl, VariableDeclaration):
            for declarator in decl.declarations:
                # Destructuring patterns are rejected when the export is rewritten
                if isinstance(declarator.id, Identifier):
                    name = declarator.id.name
                    module.exports.add(Specifier(name, name, stmt, None, declarator))

    def _link_default_export(self, module: Module, stmt: ExportDefaultDeclaration) -> None:
        decl = stmt.declaration
        local = None
        if isinstance(decl, (FunctionDeclaration, ClassDeclaration, FunctionExpression, ClassExpression)):
            if decl.id is not None:
                local = decl.id.name
        module.exports.add(Specifier(DEFAULT_EXPORT_NAME, local, stmt, None, decl))

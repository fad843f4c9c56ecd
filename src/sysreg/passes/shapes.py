"""
Declaration Shapes

Closed sets of the import/export forms the formatter understands. Passes
classify a statement once and dispatch over the enum; every dispatch ends
in `assert_never` so a new member is a type-checker error at each site that
forgot to handle it.

Classifying a form outside these sets raises UnexpectedExportError: the
upstream grammar never produces one.
"""

from enum import Enum

from ..analysis.module_system.module_info import Module, Specifier
from ..shared.errors import UnexpectedExportError
from ..shared.nodes import (
    ASTNode, ClassDeclaration, ClassExpression, ExportDefaultDeclaration,
    ExportNamedDeclaration, Expression, FunctionDeclaration, FunctionExpression,
    Identifier, VariableDeclaration,
)


class ExportShape(Enum):
    FUNCTION = "function"                                   # export function f() {}
    CLASS = "class"                                         # export class C {}
    VARIABLE_WITH_INITIALIZER = "variable_with_init"        # export var a = 1, b;
    VARIABLE_WITHOUT_INITIALIZER = "variable_without_init"  # export var a, b;
    DEFAULT_FUNCTION_OR_CLASS = "default_function_or_class" # export default function () {}
    DEFAULT_EXPRESSION = "default_expression"               # export default {a: 1};
    BARE_SPECIFIER_LIST = "bare_specifier_list"             # export {a, b as c};
    SOURCED_SPECIFIER_LIST = "sourced_specifier_list"       # export {a} from './dep';


class ImportShape(Enum):
    NAMED_IMPORT = "named_import"              # import {a}, import d
    NAMESPACE_IMPORT = "namespace_import"      # import * as ns
    SIDE_EFFECT_IMPORT = "side_effect_import"  # import './dep'


def _unexpected(module: Module, node: ASTNode) -> UnexpectedExportError:
    return UnexpectedExportError(
        f"unexpected export style, found a declaration of type: {node.type}"
        f" ({module.source_position(node)})",
        node.location,
    )


def classify_export(module: Module, stmt: ASTNode) -> ExportShape:
    if isinstance(stmt, ExportDefaultDeclaration):
        decl = stmt.declaration
        if isinstance(decl, (FunctionDeclaration, FunctionExpression, ClassDeclaration, ClassExpression)):
            return ExportShape.DEFAULT_FUNCTION_OR_CLASS
        if isinstance(decl, Expression):
            return ExportShape.DEFAULT_EXPRESSION
        raise _unexpected(module, decl)

    if not isinstance(stmt, ExportNamedDeclaration):
        raise _unexpected(module, stmt)

    decl = stmt.declaration
    if decl is None:
        if stmt.source is not None:
            return ExportShape.SOURCED_SPECIFIER_LIST
        return ExportShape.BARE_SPECIFIER_LIST
    if isinstance(decl, FunctionDeclaration) and decl.id is not None:
        return ExportShape.FUNCTION
    if isinstance(decl, ClassDeclaration) and decl.id is not None:
        return ExportShape.CLASS
    if isinstance(decl, VariableDeclaration):
        for declarator in decl.declarations:
            if not isinstance(declarator.id, Identifier):
                raise _unexpected(module, declarator.id)
        if any(declarator.init is not None for declarator in decl.declarations):
            return ExportShape.VARIABLE_WITH_INITIALIZER
        return ExportShape.VARIABLE_WITHOUT_INITIALIZER
    raise _unexpected(module, decl)


def classify_import(specifier: Specifier) -> ImportShape:
    if specifier.name is None:
        return ImportShape.SIDE_EFFECT_IMPORT
    if specifier.is_namespace:
        return ImportShape.NAMESPACE_IMPORT
    return ImportShape.NAMED_IMPORT

"""
Export Rewriting

Replaces every top-level export statement with equivalent non-exporting code
plus explicit notify calls:

    export function f() {}        ->  function f() {}
                                      __es6_export__("f", f);
    export var a = 1, b;          ->  var a = __es6_export__("a", 1), b;
    export default function () {} ->  __es6_export__("default", function () {});
    export default function g() {} -> function g() {}
                                      __es6_export__("default", g);
    export default {a: 1};        ->  __es6_export__("default", {a: 1});
    export {a, b as c};           ->  __es6_export__("a", a);
                                      __es6_export__("c", b);
    export {x} from './dep';      ->  (removed; the setter for ./dep notifies)

Variable initializers are wrapped in place so assignment and notification
happen in one expression.
"""

import logging
from typing import List

from typing_extensions import assert_never

from ..shared.builders import statement
from ..shared.nodes import (
    ClassDeclaration, ClassExpression, ExportDefaultDeclaration, ExportNamedDeclaration,
    FunctionDeclaration, FunctionExpression, Identifier, Program, Statement,
)
from ..utils.config import DEFAULT_EXPORT_NAME
from .base import BasePass, FormatContext
from .live_bindings import LiveBindingPass
from .shapes import ExportShape, classify_export

logger = logging.getLogger(__name__)


class ExportRewriter:
    """Rewrites one export statement at a time."""

    def __init__(self, ctx: FormatContext):
        self.ctx = ctx

    def rewrite(self, stmt: Statement) -> List[Statement]:
        shape = classify_export(self.ctx.module, stmt)
        notify = self.ctx.notify

        if shape is ExportShape.FUNCTION or shape is ExportShape.CLASS:
            decl = stmt.declaration
            return [decl, statement(notify(decl.id.name, Identifier(decl.id.name)), stmt)]
        elif shape is ExportShape.VARIABLE_WITH_INITIALIZER:
            decl = stmt.declaration
            for declarator in decl.declarations:
                if declarator.init is not None:
                    declarator.init = notify(declarator.id.name, declarator.init)
            return [decl]
        elif shape is ExportShape.VARIABLE_WITHOUT_INITIALIZER:
            return [stmt.declaration]
        elif shape is ExportShape.DEFAULT_FUNCTION_OR_CLASS:
            return self._default_function_or_class(stmt)
        elif shape is ExportShape.DEFAULT_EXPRESSION:
            return [statement(notify(DEFAULT_EXPORT_NAME, stmt.declaration), stmt)]
        elif shape is ExportShape.BARE_SPECIFIER_LIST:
            return [
                statement(notify(specifier.exported.name, Identifier(specifier.local.name)), specifier)
                for specifier in stmt.specifiers
            ]
        elif shape is ExportShape.SOURCED_SPECIFIER_LIST:
            return []
        else:
            assert_never(shape)

    def _default_function_or_class(self, stmt: ExportDefaultDeclaration) -> List[Statement]:
        decl = stmt.declaration
        notify = self.ctx.notify
        is_function = isinstance(decl, (FunctionDeclaration, FunctionExpression))

        if decl.id is None:
            if is_function:
                value = FunctionExpression(None, decl.params, decl.body, decl.generator, decl.async_)
            else:
                value = ClassExpression(None, decl.super_class, decl.body)
            value.location = decl.location
            return [statement(notify(DEFAULT_EXPORT_NAME, value), stmt)]

        if is_function:
            named = FunctionDeclaration(decl.id, decl.params, decl.body, decl.generator, decl.async_)
        else:
            named = ClassDeclaration(decl.id, decl.super_class, decl.body)
        named.location = decl.location
        return [named, statement(notify(DEFAULT_EXPORT_NAME, Identifier(decl.id.name)), stmt)]


class ExportRewritingPass(BasePass):
    """Rewrites every top-level export statement; runs after live binding rewriting."""
    requires = [LiveBindingPass]

    def run(self, program: Program, ctx: FormatContext) -> Program:
        rewriter = ExportRewriter(ctx)
        body: List[Statement] = []
        rewritten = 0
        for stmt in program.body:
            if isinstance(stmt, (ExportNamedDeclaration, ExportDefaultDeclaration)):
                body.extend(rewriter.rewrite(stmt))
                rewritten += 1
            else:
                body.append(stmt)
        program.body = body
        logger.debug(f"[export_rewriting] {ctx.module.name}: rewrote {rewritten} export statement(s)")
        return program

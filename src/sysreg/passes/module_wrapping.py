"""
Module Wrapping

Assembles the registration call that replaces the module's whole top-level
tree:

    System.register("name", ["./dep"], function (__es6_export__) {
      var a, b;                             // hoisted import bindings
      function dep$$(m) { ... }             // setters
      return {
        setters: [dep$$],
        execute: function () {
          "use strict";
          ...rewritten body...
        }
      };
    });

In anonymous mode the name argument is omitted.
"""

import logging

from ..shared.builders import directive, member, var
from ..shared.nodes import (
    ArrayExpression, BlockStatement, CallExpression, ExpressionStatement,
    FunctionExpression, Identifier, Literal, ObjectExpression, Program, Property,
    ReturnStatement,
)
from ..utils.config import EXECUTE_KEY, REGISTER_METHOD, REGISTER_OBJECT, SETTERS_KEY, USE_STRICT
from .base import BasePass, FormatContext
from .dependency_meta import DependencyMetaPass
from .export_rewriting import ExportRewritingPass
from .import_erasure import ImportErasurePass
from .setter_synthesis import SetterSynthesisPass

logger = logging.getLogger(__name__)


class ModuleWrappingPass(BasePass):
    requires = [ExportRewritingPass, ImportErasurePass, DependencyMetaPass, SetterSynthesisPass]

    def run(self, program: Program, ctx: FormatContext) -> Program:
        module = ctx.module
        meta = ctx.get_analysis(DependencyMetaPass)
        setters = ctx.get_analysis(SetterSynthesisPass)

        body = [directive(USE_STRICT)] + program.body

        wrapper = []
        if module.imports.names:
            wrapper.append(var(module.imports.names))
        wrapper.extend(setters)
        wrapper.append(ReturnStatement(ObjectExpression([
            Property(Identifier(SETTERS_KEY), ArrayExpression(list(meta.setters))),
            Property(Identifier(EXECUTE_KEY), FunctionExpression(None, [], BlockStatement(body))),
        ])))

        arguments = [] if ctx.options.anonymous else [Literal(module.name)]
        arguments.append(ArrayExpression(list(meta.deps)))
        arguments.append(FunctionExpression(
            None, [Identifier(ctx.options.notify_identifier)], BlockStatement(wrapper),
        ))
        register = CallExpression(member(REGISTER_OBJECT, REGISTER_METHOD), arguments)

        wrapped = Program([ExpressionStatement(register)], program.source_type, module.relative_path)
        wrapped.location = program.location
        logger.debug(f"[module_wrapping] {module.name}: {len(setters)} setter(s), {len(body)} statement(s)")
        return wrapped

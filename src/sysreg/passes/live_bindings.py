"""
Live Binding Rewriting

A consumer may hold a live view of an export, so every mutation of an
exported local binding, wherever it happens in the module, republishes the
new value:

    x = expr      ->  __es6_export__("x", x = expr)
    x += 2        ->  __es6_export__("x", x += 2)
    ++x           ->  __es6_export__("x", ++x)
    x++           ->  (__es6_export__("x", x + 1), x++)
    [x, y] = o    ->  ([x, y] = o, __es6_export__("x", x))

The postfix form notifies with a freshly computed `x + 1` (no second
mutation) and then performs the real update, so the expression still yields
the original value. A destructuring assignment notifies each exported target
after the whole assignment has run.

Exported bindings are looked up in an ExportBindingMap built once per module
before any rewriting. Names re-declared in a nested function, block, switch
or catch scope are left alone; destructured declarations count as
re-declarations.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from ..analysis.module_system.module_info import Module
from ..shared.ast_visitor import ASTTransformer, ScopedASTAnalyzer
from ..shared.nodes import (
    ASTNode, ArrayPattern, ArrowFunctionExpression, AssignmentExpression, AssignmentPattern,
    BinaryExpression, BlockStatement, CatchClause, ClassDeclaration, DoWhileStatement,
    ForInStatement, ForOfStatement, ForStatement, FunctionDeclaration, FunctionExpression,
    Identifier, IfStatement, LabeledStatement, Literal, ObjectPattern, Program, Property,
    RestElement, SequenceExpression, Statement, SwitchStatement, TryStatement,
    UpdateExpression, VariableDeclaration, WhileStatement,
)
from .base import BasePass, FormatContext

logger = logging.getLogger(__name__)


class ExportBindingMap:
    """
    Local binding name -> exported names.

        export var a = 1;          a -> ["a"]
        export {a as b, a as c};   a -> ["b", "c"]
        export default function f() {}   f -> ["default"]

    Re-exports from other modules and anonymous default exports have no
    local binding and are not listed.
    """

    def __init__(self):
        self._exports: Dict[str, List[str]] = {}

    @classmethod
    def build(cls, module: Module) -> "ExportBindingMap":
        bindings = cls()
        for specifier in module.exports:
            if specifier.source is not None or not specifier.from_:
                continue
            bindings._exports.setdefault(specifier.from_, []).append(specifier.name)
        return bindings

    def exported_names(self, local: str) -> List[str]:
        return list(self._exports.get(local, ()))

    def locals(self) -> List[str]:
        return list(self._exports)

    def __contains__(self, local: str) -> bool:
        return local in self._exports

    def __len__(self) -> int:
        return len(self._exports)


def _pattern_names(pattern: Optional[ASTNode]) -> Iterator[str]:
    """Binding names a declaration target introduces, in source order."""
    if isinstance(pattern, Identifier):
        yield pattern.name
    elif isinstance(pattern, ObjectPattern):
        for prop in pattern.properties:
            yield from _pattern_names(prop.value if isinstance(prop, Property) else prop)
    elif isinstance(pattern, ArrayPattern):
        for element in pattern.elements:
            yield from _pattern_names(element)
    elif isinstance(pattern, AssignmentPattern):
        yield from _pattern_names(pattern.left)
    elif isinstance(pattern, RestElement):
        yield from _pattern_names(pattern.argument)


def _hoisted_names(statements: Iterable[Optional[Statement]]) -> Iterator[str]:
    """`var` and function names a function body declares, without entering nested functions."""
    for stmt in statements:
        if isinstance(stmt, VariableDeclaration):
            if stmt.kind == "var":
                for declarator in stmt.declarations:
                    yield from _pattern_names(declarator.id)
        elif isinstance(stmt, FunctionDeclaration):
            if stmt.id is not None:
                yield stmt.id.name
        elif isinstance(stmt, BlockStatement):
            yield from _hoisted_names(stmt.body)
        elif isinstance(stmt, IfStatement):
            yield from _hoisted_names([stmt.consequent, stmt.alternate])
        elif isinstance(stmt, ForStatement):
            yield from _hoisted_names([stmt.init, stmt.body])
        elif isinstance(stmt, (ForInStatement, ForOfStatement)):
            yield from _hoisted_names([stmt.left, stmt.body])
        elif isinstance(stmt, (WhileStatement, DoWhileStatement, LabeledStatement)):
            yield from _hoisted_names([stmt.body])
        elif isinstance(stmt, SwitchStatement):
            for case in stmt.cases:
                yield from _hoisted_names(case.consequent)
        elif isinstance(stmt, TryStatement):
            handler = stmt.handler.body if stmt.handler is not None else None
            yield from _hoisted_names([stmt.block, handler, stmt.finalizer])


def _lexical_names(statements: Iterable[Statement]) -> Iterator[str]:
    """let/const/class/function names declared directly in a block."""
    for stmt in statements:
        if isinstance(stmt, VariableDeclaration) and stmt.kind != "var":
            for declarator in stmt.declarations:
                yield from _pattern_names(declarator.id)
        elif isinstance(stmt, (ClassDeclaration, FunctionDeclaration)) and stmt.id is not None:
            yield stmt.id.name


class LiveBindingRewriter(ScopedASTAnalyzer[bool], ASTTransformer):
    """Wraps mutations of exported bindings in notify calls."""

    def __init__(self, bindings: ExportBindingMap, ctx: FormatContext):
        super().__init__()
        self.bindings = bindings
        self.ctx = ctx
        self.rewritten = 0

    def _is_live(self, name: str) -> bool:
        return name in self.bindings and not self._is_shadowed(name)

    def _exported_names(self, target: ASTNode) -> List[str]:
        if not isinstance(target, Identifier) or not self._is_live(target.name):
            return []
        return self.bindings.exported_names(target.name)

    def _declare(self, names: Iterable[str]) -> None:
        for name in names:
            self._set_var(name, True)

    def _notify_all(self, names: List[str], value: ASTNode) -> ASTNode:
        for name in names:
            value = self.ctx.notify(name, value)
        return value

    # -- scopes -------------------------------------------------------------

    def _transform_function(self, node):
        with self._scope():
            if isinstance(node, FunctionExpression) and node.id is not None:
                self._set_var(node.id.name, True)
            for param in node.params:
                self._declare(_pattern_names(param))
            if isinstance(node.body, BlockStatement):
                self._declare(_hoisted_names(node.body.body))
            # parameter defaults may mutate exports too
            node.params = [self.transform(param) for param in node.params]
            node.body = self.transform(node.body)
        return node

    def visit_function_declaration(self, node: FunctionDeclaration) -> ASTNode:
        return self._transform_function(node)

    def visit_function_expression(self, node: FunctionExpression) -> ASTNode:
        return self._transform_function(node)

    def visit_arrow_function_expression(self, node: ArrowFunctionExpression) -> ASTNode:
        return self._transform_function(node)

    def visit_block_statement(self, node: BlockStatement) -> ASTNode:
        with self._scope():
            self._declare(_lexical_names(node.body))
            return self.generic_transform(node)

    def visit_switch_statement(self, node: SwitchStatement) -> ASTNode:
        node.discriminant = self.transform(node.discriminant)
        # all cases share one block scope
        with self._scope():
            for case in node.cases:
                self._declare(_lexical_names(case.consequent))
            node.cases = [self.transform(case) for case in node.cases]
        return node

    def visit_catch_clause(self, node: CatchClause) -> ASTNode:
        with self._scope():
            self._declare(_pattern_names(node.param))
            return self.generic_transform(node)

    def _transform_loop(self, node, head):
        with self._scope():
            if isinstance(head, VariableDeclaration) and head.kind != "var":
                for declarator in head.declarations:
                    self._declare(_pattern_names(declarator.id))
            return self.generic_transform(node)

    def visit_for_statement(self, node: ForStatement) -> ASTNode:
        return self._transform_loop(node, node.init)

    def visit_for_in_statement(self, node: ForInStatement) -> ASTNode:
        return self._transform_loop(node, node.left)

    def visit_for_of_statement(self, node: ForOfStatement) -> ASTNode:
        return self._transform_loop(node, node.left)

    # -- mutations ----------------------------------------------------------

    def visit_assignment_expression(self, node: AssignmentExpression) -> ASTNode:
        node.right = self.transform(node.right)
        if isinstance(node.left, (ObjectPattern, ArrayPattern)):
            return self._destructuring_assignment(node)
        names = self._exported_names(node.left)
        if not names:
            node.left = self.transform(node.left)
            return node
        self.rewritten += 1
        return self._notify_all(names, node)

    def _destructuring_assignment(self, node: AssignmentExpression) -> ASTNode:
        """`[a, b] = o` -> `([a, b] = o, __es6_export__("a", a))` for an exported a"""
        node.left = self.transform(node.left)
        targets = [name for name in _pattern_names(node.left) if self._is_live(name)]
        if not targets:
            return node
        self.rewritten += 1
        notifications = [
            self._notify_all(self.bindings.exported_names(name), Identifier(name))
            for name in dict.fromkeys(targets)
        ]
        return SequenceExpression([node] + notifications)

    def visit_update_expression(self, node: UpdateExpression) -> ASTNode:
        names = self._exported_names(node.argument)
        if not names:
            return self.generic_transform(node)
        self.rewritten += 1
        if node.prefix:
            return self._notify_all(names, node)
        operator = "+" if node.operator == "++" else "-"
        local = node.argument.name
        notifications = [
            self.ctx.notify(name, BinaryExpression(operator, Identifier(local), Literal(1)))
            for name in names
        ]
        return SequenceExpression(notifications + [node])


class LiveBindingPass(BasePass):
    """Builds the ExportBindingMap and rewrites mutation sites of exported bindings."""
    requires = []

    def run(self, program: Program, ctx: FormatContext) -> Program:
        bindings = ExportBindingMap.build(ctx.module)
        ctx.set_analysis(LiveBindingPass, bindings)
        if not bindings:
            return program
        rewriter = LiveBindingRewriter(bindings, ctx)
        program = rewriter.transform(program)
        logger.debug(
            f"[live_bindings] {ctx.module.name}: rewrote {rewriter.rewritten} mutation(s) "
            f"of {bindings.locals()}"
        )
        return program

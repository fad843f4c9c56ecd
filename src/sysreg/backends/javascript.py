"""
JavaScript Printer

Renders a syntax tree as JavaScript source: two-space indentation,
double-quoted strings, parentheses only where operator precedence needs
them. Output is stable, so tests compare it verbatim.
"""

import json
import re
from typing import List, Optional

from ..shared.ast_visitor import ASTVisitor
from ..shared.nodes import (
    ASTNode, ArrayPattern, ArrowFunctionExpression, AssignmentExpression, AssignmentPattern,
    AwaitExpression, BinaryExpression, BlockStatement, BreakStatement, CallExpression,
    CatchClause, ClassBody, ClassDeclaration, ClassExpression, ConditionalExpression,
    ContinueStatement, DoWhileStatement, ExportDefaultDeclaration, ExportNamedDeclaration,
    Expression, ExpressionStatement, ForInStatement, ForOfStatement, ForStatement,
    FunctionDeclaration, FunctionExpression, Identifier, IfStatement, ImportDeclaration,
    ImportDefaultSpecifier, ImportNamespaceSpecifier, LabeledStatement, Literal,
    LogicalExpression, MemberExpression, MethodDefinition, NewExpression, ObjectExpression,
    ObjectPattern, Program, Property, RestElement, ReturnStatement, SequenceExpression,
    SpreadElement, Statement, SwitchCase, SwitchStatement, TaggedTemplateExpression,
    TemplateLiteral, ThrowStatement, TryStatement, UnaryExpression, UpdateExpression,
    VariableDeclaration, VariableDeclarator, WhileStatement, YieldExpression,
)
from ..utils.config import INDENT

BINARY_PRECEDENCE = {
    "||": 3, "??": 3,
    "&&": 4,
    "|": 5,
    "^": 6,
    "&": 7,
    "==": 8, "!=": 8, "===": 8, "!==": 8,
    "<": 9, ">": 9, "<=": 9, ">=": 9, "in": 9, "instanceof": 9,
    "<<": 10, ">>": 10, ">>>": 10,
    "+": 11, "-": 11,
    "*": 12, "/": 12, "%": 12,
    "**": 13,
}

PREC_SEQUENCE = 0
PREC_ASSIGNMENT = 1
PREC_CONDITIONAL = 2
PREC_UNARY = 15
PREC_POSTFIX = 16
PREC_CALL = 18
PREC_MEMBER = 19
PREC_PRIMARY = 20

_WORD_OPERATORS = frozenset({"typeof", "void", "delete"})
_NEEDS_STATEMENT_PARENS = re.compile(r"^(function\b|async function\b|class\b|let \[|\{)")


def print_js(node: ASTNode) -> str:
    """Render a node (usually a Program) as JavaScript."""
    return JavaScriptPrinter().print(node)


class JavaScriptPrinter(ASTVisitor[str]):

    def __init__(self):
        self.level = 0

    def print(self, node: ASTNode) -> str:
        if isinstance(node, Statement) or isinstance(node, Program):
            return node.accept(self)
        return self._expr(node)

    # -- helpers ------------------------------------------------------------

    def _pad(self) -> str:
        return INDENT * self.level

    def _statement(self, node: Statement) -> str:
        return self._pad() + node.accept(self)

    def _block(self, statements: List[Statement]) -> str:
        if not statements:
            return "{}"
        self.level += 1
        inner = "\n".join(self._statement(s) for s in statements)
        self.level -= 1
        return "{\n" + inner + "\n" + self._pad() + "}"

    def _body(self, node: Statement) -> str:
        """Loop / if body: blocks stay on the header line."""
        if isinstance(node, BlockStatement):
            return self._block(node.body)
        return node.accept(self)

    def _precedence(self, node: ASTNode) -> int:
        if isinstance(node, SequenceExpression):
            return PREC_SEQUENCE
        if isinstance(node, (AssignmentExpression, ArrowFunctionExpression, YieldExpression)):
            return PREC_ASSIGNMENT
        if isinstance(node, ConditionalExpression):
            return PREC_CONDITIONAL
        if isinstance(node, (BinaryExpression, LogicalExpression)):
            return BINARY_PRECEDENCE[node.operator]
        if isinstance(node, (UnaryExpression, AwaitExpression)):
            return PREC_UNARY
        if isinstance(node, UpdateExpression):
            return PREC_UNARY if node.prefix else PREC_POSTFIX
        if isinstance(node, (CallExpression, NewExpression, TaggedTemplateExpression)):
            return PREC_CALL
        if isinstance(node, MemberExpression):
            return PREC_MEMBER
        return PREC_PRIMARY

    def _expr(self, node: Expression, min_precedence: int = PREC_SEQUENCE) -> str:
        text = node.accept(self)
        if self._precedence(node) < min_precedence:
            return f"({text})"
        return text

    def _params(self, params: List[ASTNode]) -> str:
        return "(" + ", ".join(self._expr(p, PREC_ASSIGNMENT) for p in params) + ")"

    def _arguments(self, arguments: List[Expression]) -> str:
        return "(" + ", ".join(self._expr(a, PREC_ASSIGNMENT) for a in arguments) + ")"

    def _function(self, node, keyword: str = "function") -> str:
        star = "*" if node.generator else ""
        if node.async_:
            keyword = "async " + keyword
        # anonymous functions print as `function (a) {`
        name = f" {node.id.name}" if node.id is not None else " "
        return f"{keyword}{star}{name}{self._params(node.params)} {self._block(node.body.body)}"

    def _class(self, node) -> str:
        parts = ["class"]
        if node.id is not None:
            parts.append(node.id.name)
        if node.super_class is not None:
            parts.append("extends " + self._expr(node.super_class, PREC_CALL))
        parts.append(node.body.accept(self))
        return " ".join(parts)

    def _key(self, key: Expression, computed: bool) -> str:
        if computed:
            return "[" + self._expr(key, PREC_ASSIGNMENT) + "]"
        return key.accept(self)

    def _variable_declaration(self, node: VariableDeclaration) -> str:
        return node.kind + " " + ", ".join(d.accept(self) for d in node.declarations)

    # -- program & statements -----------------------------------------------

    def visit_program(self, node: Program) -> str:
        if not node.body:
            return ""
        return "\n".join(self._statement(s) for s in node.body) + "\n"

    def visit_empty_statement(self, node) -> str:
        return ";"

    def visit_expression_statement(self, node: ExpressionStatement) -> str:
        if node.directive is not None:
            return json.dumps(node.directive) + ";"
        text = self._expr(node.expression)
        if _NEEDS_STATEMENT_PARENS.match(text):
            text = f"({text})"
        return text + ";"

    def visit_block_statement(self, node: BlockStatement) -> str:
        return self._block(node.body)

    def visit_return_statement(self, node: ReturnStatement) -> str:
        if node.argument is None:
            return "return;"
        return "return " + self._expr(node.argument) + ";"

    def visit_throw_statement(self, node: ThrowStatement) -> str:
        return "throw " + self._expr(node.argument) + ";"

    def visit_if_statement(self, node: IfStatement) -> str:
        text = "if (" + self._expr(node.test) + ") " + self._body(node.consequent)
        if node.alternate is not None:
            text += " else " + self._body(node.alternate)
        return text

    def visit_for_statement(self, node: ForStatement) -> str:
        if node.init is None:
            init = ""
        elif isinstance(node.init, VariableDeclaration):
            init = self._variable_declaration(node.init)
        else:
            init = self._expr(node.init)
        test = self._expr(node.test) if node.test is not None else ""
        update = self._expr(node.update) if node.update is not None else ""
        return f"for ({init}; {test}; {update}) " + self._body(node.body)

    def _loop_target(self, left) -> str:
        if isinstance(left, VariableDeclaration):
            return self._variable_declaration(left)
        return self._expr(left, PREC_CALL)

    def visit_for_in_statement(self, node: ForInStatement) -> str:
        left = self._loop_target(node.left)
        return f"for ({left} in {self._expr(node.right)}) " + self._body(node.body)

    def visit_for_of_statement(self, node: ForOfStatement) -> str:
        keyword = "for await" if node.await_ else "for"
        left = self._loop_target(node.left)
        return f"{keyword} ({left} of {self._expr(node.right, PREC_ASSIGNMENT)}) " + self._body(node.body)

    def visit_while_statement(self, node: WhileStatement) -> str:
        return "while (" + self._expr(node.test) + ") " + self._body(node.body)

    def visit_do_while_statement(self, node: DoWhileStatement) -> str:
        return "do " + self._body(node.body) + " while (" + self._expr(node.test) + ");"

    def visit_break_statement(self, node: BreakStatement) -> str:
        return "break;" if node.label is None else f"break {node.label.name};"

    def visit_continue_statement(self, node: ContinueStatement) -> str:
        return "continue;" if node.label is None else f"continue {node.label.name};"

    def visit_labeled_statement(self, node: LabeledStatement) -> str:
        return f"{node.label.name}: " + node.body.accept(self)

    def visit_debugger_statement(self, node) -> str:
        return "debugger;"

    def visit_switch_statement(self, node: SwitchStatement) -> str:
        head = "switch (" + self._expr(node.discriminant) + ") "
        if not node.cases:
            return head + "{}"
        self.level += 1
        inner = "\n".join(self._pad() + case.accept(self) for case in node.cases)
        self.level -= 1
        return head + "{\n" + inner + "\n" + self._pad() + "}"

    def visit_switch_case(self, node: SwitchCase) -> str:
        text = "default:" if node.test is None else "case " + self._expr(node.test) + ":"
        self.level += 1
        for stmt in node.consequent:
            text += "\n" + self._statement(stmt)
        self.level -= 1
        return text

    def visit_try_statement(self, node: TryStatement) -> str:
        text = "try " + self._block(node.block.body)
        if node.handler is not None:
            text += " " + node.handler.accept(self)
        if node.finalizer is not None:
            text += " finally " + self._block(node.finalizer.body)
        return text

    def visit_catch_clause(self, node: CatchClause) -> str:
        if node.param is None:
            return "catch " + self._block(node.body.body)
        return "catch (" + node.param.accept(self) + ") " + self._block(node.body.body)

    def visit_variable_declaration(self, node: VariableDeclaration) -> str:
        return self._variable_declaration(node) + ";"

    def visit_variable_declarator(self, node: VariableDeclarator) -> str:
        text = node.id.accept(self)
        if node.init is not None:
            text += " = " + self._expr(node.init, PREC_ASSIGNMENT)
        return text

    def visit_function_declaration(self, node: FunctionDeclaration) -> str:
        return self._function(node)

    def visit_class_declaration(self, node: ClassDeclaration) -> str:
        return self._class(node)

    def visit_class_body(self, node: ClassBody) -> str:
        if not node.body:
            return "{}"
        self.level += 1
        inner = "\n".join(self._pad() + m.accept(self) for m in node.body)
        self.level -= 1
        return "{\n" + inner + "\n" + self._pad() + "}"

    def _method(self, prefix: str, key: str, fn: FunctionExpression) -> str:
        if fn.async_:
            prefix += "async "
        if fn.generator:
            prefix += "*"
        return prefix + key + self._params(fn.params) + " " + self._block(fn.body.body)

    def visit_method_definition(self, node: MethodDefinition) -> str:
        prefix = "static " if node.static else ""
        if node.kind in ("get", "set"):
            prefix += node.kind + " "
        return self._method(prefix, self._key(node.key, node.computed), node.value)

    # -- module declarations ------------------------------------------------

    def visit_import_declaration(self, node: ImportDeclaration) -> str:
        source = self._expr(node.source)
        if not node.specifiers:
            return f"import {source};"
        parts = []
        named = []
        for specifier in node.specifiers:
            if isinstance(specifier, ImportDefaultSpecifier):
                parts.append(specifier.local.name)
            elif isinstance(specifier, ImportNamespaceSpecifier):
                parts.append("* as " + specifier.local.name)
            elif specifier.imported.name == specifier.local.name:
                named.append(specifier.local.name)
            else:
                named.append(f"{specifier.imported.name} as {specifier.local.name}")
        if named:
            parts.append("{" + ", ".join(named) + "}")
        return f"import {', '.join(parts)} from {source};"

    def visit_export_named_declaration(self, node: ExportNamedDeclaration) -> str:
        if node.declaration is not None:
            return "export " + node.declaration.accept(self)
        names = []
        for specifier in node.specifiers:
            if specifier.local.name == specifier.exported.name:
                names.append(specifier.local.name)
            else:
                names.append(f"{specifier.local.name} as {specifier.exported.name}")
        text = "export {" + ", ".join(names) + "}"
        if node.source is not None:
            text += " from " + self._expr(node.source)
        return text + ";"

    def visit_export_default_declaration(self, node: ExportDefaultDeclaration) -> str:
        decl = node.declaration
        if isinstance(decl, Statement):
            return "export default " + decl.accept(self)
        return "export default " + self._expr(decl, PREC_ASSIGNMENT) + ";"

    # -- expressions --------------------------------------------------------

    def visit_identifier(self, node: Identifier) -> str:
        return node.name

    def visit_literal(self, node: Literal) -> str:
        if node.regex is not None:
            return "/" + node.regex["pattern"] + "/" + node.regex.get("flags", "")
        value = node.value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return json.dumps(value)
        if node.raw:
            return node.raw
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return repr(value)

    def visit_this_expression(self, node) -> str:
        return "this"

    def _elements(self, elements: List[Optional[ASTNode]]) -> str:
        text = ", ".join("" if e is None else self._expr(e, PREC_ASSIGNMENT) for e in elements)
        # a trailing hole needs its own comma
        if elements and elements[-1] is None:
            text += ","
        return "[" + text + "]"

    def visit_array_expression(self, node) -> str:
        return self._elements(node.elements)

    def visit_array_pattern(self, node: ArrayPattern) -> str:
        return self._elements(node.elements)

    def visit_object_pattern(self, node: ObjectPattern) -> str:
        if not node.properties:
            return "{}"
        return "{" + ", ".join(self._pattern_property(p) for p in node.properties) + "}"

    def _pattern_property(self, node: ASTNode) -> str:
        if not isinstance(node, Property):
            return node.accept(self)
        if node.shorthand:
            # `{a = 1}` keeps its default
            return node.value.accept(self)
        return self._key(node.key, node.computed) + ": " + node.value.accept(self)

    def visit_assignment_pattern(self, node: AssignmentPattern) -> str:
        return node.left.accept(self) + " = " + self._expr(node.right, PREC_ASSIGNMENT)

    def visit_rest_element(self, node: RestElement) -> str:
        return "..." + node.argument.accept(self)

    def visit_spread_element(self, node: SpreadElement) -> str:
        return "..." + self._expr(node.argument, PREC_ASSIGNMENT)

    def visit_object_expression(self, node: ObjectExpression) -> str:
        if not node.properties:
            return "{}"
        self.level += 1
        inner = ",\n".join(self._pad() + p.accept(self) for p in node.properties)
        self.level -= 1
        return "{\n" + inner + "\n" + self._pad() + "}"

    def visit_property(self, node: Property) -> str:
        key = self._key(node.key, node.computed)
        if node.shorthand:
            return key
        if node.kind in ("get", "set") or node.method:
            prefix = node.kind + " " if node.kind in ("get", "set") else ""
            return self._method(prefix, key, node.value)
        return key + ": " + self._expr(node.value, PREC_ASSIGNMENT)

    def visit_function_expression(self, node: FunctionExpression) -> str:
        return self._function(node)

    def visit_arrow_function_expression(self, node: ArrowFunctionExpression) -> str:
        params = self._params(node.params)
        if node.async_:
            params = "async " + params
        if isinstance(node.body, BlockStatement):
            return params + " => " + self._block(node.body.body)
        body = self._expr(node.body, PREC_ASSIGNMENT)
        if isinstance(node.body, ObjectExpression):
            body = f"({body})"
        return params + " => " + body

    def visit_class_expression(self, node: ClassExpression) -> str:
        return self._class(node)

    def visit_unary_expression(self, node: UnaryExpression) -> str:
        argument = self._expr(node.argument, PREC_UNARY)
        if node.operator in _WORD_OPERATORS:
            return f"{node.operator} {argument}"
        if argument[:1] in ("+", "-") and argument[:1] == node.operator[-1:]:
            return f"{node.operator} {argument}"
        return node.operator + argument

    def visit_update_expression(self, node: UpdateExpression) -> str:
        if node.prefix:
            return node.operator + self._expr(node.argument, PREC_UNARY)
        return self._expr(node.argument, PREC_POSTFIX) + node.operator

    def _binary(self, node) -> str:
        precedence = BINARY_PRECEDENCE[node.operator]
        if node.operator == "**":
            left = self._expr(node.left, precedence + 1)
            right = self._expr(node.right, precedence)
        else:
            left = self._expr(node.left, precedence)
            right = self._expr(node.right, precedence + 1)
        return f"{left} {node.operator} {right}"

    def visit_binary_expression(self, node: BinaryExpression) -> str:
        return self._binary(node)

    def visit_logical_expression(self, node: LogicalExpression) -> str:
        return self._binary(node)

    def visit_assignment_expression(self, node: AssignmentExpression) -> str:
        left = self._expr(node.left, PREC_CALL)
        return f"{left} {node.operator} {self._expr(node.right, PREC_ASSIGNMENT)}"

    def visit_conditional_expression(self, node: ConditionalExpression) -> str:
        return (
            self._expr(node.test, PREC_CONDITIONAL + 1)
            + " ? " + self._expr(node.consequent, PREC_ASSIGNMENT)
            + " : " + self._expr(node.alternate, PREC_ASSIGNMENT)
        )

    def visit_call_expression(self, node: CallExpression) -> str:
        return self._expr(node.callee, PREC_CALL) + self._arguments(node.arguments)

    def visit_new_expression(self, node: NewExpression) -> str:
        return "new " + self._expr(node.callee, PREC_MEMBER) + self._arguments(node.arguments)

    def visit_member_expression(self, node: MemberExpression) -> str:
        obj = self._expr(node.object, PREC_CALL)
        if node.computed:
            return obj + "[" + self._expr(node.property) + "]"
        return obj + "." + node.property.accept(self)

    def visit_sequence_expression(self, node: SequenceExpression) -> str:
        return ", ".join(self._expr(e, PREC_ASSIGNMENT) for e in node.expressions)

    def visit_super(self, node) -> str:
        return "super"

    def visit_yield_expression(self, node: YieldExpression) -> str:
        keyword = "yield*" if node.delegate else "yield"
        if node.argument is None:
            return keyword
        return keyword + " " + self._expr(node.argument, PREC_ASSIGNMENT)

    def visit_await_expression(self, node: AwaitExpression) -> str:
        return "await " + self._expr(node.argument, PREC_UNARY)

    def visit_template_literal(self, node: TemplateLiteral) -> str:
        text = "`"
        for i, quasi in enumerate(node.quasis):
            text += _template_raw(quasi.value)
            if i < len(node.expressions):
                text += "${" + self._expr(node.expressions[i]) + "}"
        return text + "`"

    def visit_tagged_template_expression(self, node: TaggedTemplateExpression) -> str:
        return self._expr(node.tag, PREC_CALL) + node.quasi.accept(self)


def _template_raw(value) -> str:
    if value.get("raw") is not None:
        return value["raw"]
    cooked = value.get("cooked") or ""
    return cooked.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")

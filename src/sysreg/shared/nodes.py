"""
JavaScript Syntax Tree Definitions

ESTree-shaped nodes for the ES2017 module code the formatter reads and
writes. Class names match the ESTree `type` strings so trees round-trip
through ESTree JSON without a lookup table; field names are the snake_case
spelling of the ESTree properties (`superClass` -> `super_class`), with a
trailing underscore where the property is a Python keyword (`async_`).

Visitor Pattern Support:
- All nodes have accept() for polymorphic dispatch to visit_<snake_name>()
- Children are discovered from dataclass fields, so default traversal in
  ASTVisitor / ASTTransformer needs no per-node code
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING, Tuple, TypeVar, Union

from .source_location import SourceLocation

if TYPE_CHECKING:
    from .ast_visitor import ASTVisitor

T = TypeVar('T')

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def visit_method_name(node_type: str) -> str:
    """`ExportNamedDeclaration` -> `visit_export_named_declaration`"""
    return "visit_" + _CAMEL_BOUNDARY.sub("_", node_type).lower()


class ASTNode:
    """
    Base class for all syntax tree nodes.

    `location` is not a dataclass field: two nodes that differ only in where
    they came from compare equal, which keeps rewritten-tree assertions
    readable.
    """
    location: Optional[SourceLocation] = None

    @property
    def type(self) -> str:
        """ESTree node type"""
        return type(self).__name__

    def accept(self, visitor: 'ASTVisitor[T]') -> T:
        """
        Accept a visitor (polymorphic dispatch).

        Example:
            class Names(ASTVisitor[None]):
                def visit_identifier(self, node):
                    print(node.name)

            program.accept(Names())
        """
        return getattr(visitor, visit_method_name(self.type))(self)

    def children(self) -> Iterator[Tuple[str, Any]]:
        """Yield (field_name, value) for every field holding nodes or node lists."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, ASTNode):
                yield f.name, value
            elif isinstance(value, list) and any(isinstance(v, ASTNode) for v in value):
                yield f.name, value

    def at(self, location: Optional[SourceLocation]) -> 'ASTNode':
        """Attach a location and return self (builder convenience)."""
        self.location = location
        return self


class Statement(ASTNode):
    """Marker base for statements and declarations"""


class Expression(ASTNode):
    """Marker base for expressions"""


class Declaration(Statement):
    """Marker base for function/class/variable declarations"""


# ============================================
# PROGRAM
# ============================================

@dataclass
class Program(ASTNode):
    body: List[Statement] = field(default_factory=list)
    source_type: str = "module"
    filename: Optional[str] = field(default=None, compare=False)


# ============================================
# STATEMENTS
# ============================================

@dataclass
class EmptyStatement(Statement):
    pass


@dataclass
class ExpressionStatement(Statement):
    expression: Expression
    directive: Optional[str] = None


@dataclass
class BlockStatement(Statement):
    body: List[Statement] = field(default_factory=list)


@dataclass
class ReturnStatement(Statement):
    argument: Optional[Expression] = None


@dataclass
class ThrowStatement(Statement):
    argument: Expression


@dataclass
class IfStatement(Statement):
    test: Expression
    consequent: Statement
    alternate: Optional[Statement] = None


@dataclass
class ForStatement(Statement):
    init: Optional[Union['VariableDeclaration', Expression]]
    test: Optional[Expression]
    update: Optional[Expression]
    body: Statement


@dataclass
class ForInStatement(Statement):
    left: Union['VariableDeclaration', Expression]
    right: Expression
    body: Statement


@dataclass
class WhileStatement(Statement):
    test: Expression
    body: Statement


@dataclass
class DoWhileStatement(Statement):
    body: Statement
    test: Expression


@dataclass
class ForOfStatement(Statement):
    left: Union['VariableDeclaration', Expression]
    right: Expression
    body: Statement
    await_: bool = False


@dataclass
class BreakStatement(Statement):
    label: Optional['Identifier'] = None


@dataclass
class ContinueStatement(Statement):
    label: Optional['Identifier'] = None


@dataclass
class LabeledStatement(Statement):
    label: 'Identifier'
    body: Statement


@dataclass
class DebuggerStatement(Statement):
    pass


@dataclass
class SwitchCase(ASTNode):
    test: Optional[Expression]
    consequent: List[Statement] = field(default_factory=list)


@dataclass
class SwitchStatement(Statement):
    discriminant: Expression
    cases: List[SwitchCase] = field(default_factory=list)


@dataclass
class CatchClause(ASTNode):
    param: Optional[ASTNode]
    body: BlockStatement = field(default_factory=BlockStatement)


@dataclass
class TryStatement(Statement):
    block: BlockStatement
    handler: Optional[CatchClause] = None
    finalizer: Optional[BlockStatement] = None


@dataclass
class VariableDeclarator(ASTNode):
    id: ASTNode
    init: Optional[Expression] = None


@dataclass
class VariableDeclaration(Declaration):
    kind: str
    declarations: List[VariableDeclarator] = field(default_factory=list)


@dataclass
class FunctionDeclaration(Declaration):
    id: Optional['Identifier']
    params: List[ASTNode] = field(default_factory=list)
    body: BlockStatement = field(default_factory=BlockStatement)
    generator: bool = False
    async_: bool = False


@dataclass
class ClassBody(ASTNode):
    body: List['MethodDefinition'] = field(default_factory=list)


@dataclass
class MethodDefinition(ASTNode):
    key: Expression
    value: 'FunctionExpression'
    kind: str = "method"
    static: bool = False
    computed: bool = False


@dataclass
class ClassDeclaration(Declaration):
    id: Optional['Identifier']
    super_class: Optional[Expression] = None
    body: ClassBody = field(default_factory=ClassBody)


# ============================================
# EXPRESSIONS
# ============================================

@dataclass
class Identifier(Expression):
    name: str


@dataclass
class Literal(Expression):
    value: Union[str, int, float, bool, None, Dict[str, Any]]
    raw: Optional[str] = field(default=None, compare=False)
    regex: Optional[Dict[str, str]] = None     # {"pattern": ..., "flags": ...}


@dataclass
class ThisExpression(Expression):
    pass


@dataclass
class ArrayExpression(Expression):
    elements: List[Optional[Expression]] = field(default_factory=list)


@dataclass
class Property(ASTNode):
    key: Expression
    value: Expression
    kind: str = "init"
    computed: bool = False
    shorthand: bool = False
    method: bool = False


@dataclass
class ObjectExpression(Expression):
    properties: List[Property] = field(default_factory=list)


@dataclass
class FunctionExpression(Expression):
    id: Optional[Identifier]
    params: List[ASTNode] = field(default_factory=list)
    body: BlockStatement = field(default_factory=BlockStatement)
    generator: bool = False
    async_: bool = False


@dataclass
class ArrowFunctionExpression(Expression):
    params: List[ASTNode]
    body: Union[BlockStatement, Expression]
    expression: bool = False
    async_: bool = False


@dataclass
class ClassExpression(Expression):
    id: Optional[Identifier]
    super_class: Optional[Expression] = None
    body: ClassBody = field(default_factory=ClassBody)


@dataclass
class UnaryExpression(Expression):
    operator: str
    argument: Expression
    prefix: bool = True


@dataclass
class UpdateExpression(Expression):
    operator: str
    argument: Expression
    prefix: bool


@dataclass
class BinaryExpression(Expression):
    operator: str
    left: Expression
    right: Expression


@dataclass
class LogicalExpression(Expression):
    operator: str
    left: Expression
    right: Expression


@dataclass
class AssignmentExpression(Expression):
    operator: str
    left: Expression
    right: Expression


@dataclass
class ConditionalExpression(Expression):
    test: Expression
    consequent: Expression
    alternate: Expression


@dataclass
class CallExpression(Expression):
    callee: Expression
    arguments: List[Expression] = field(default_factory=list)


@dataclass
class NewExpression(Expression):
    callee: Expression
    arguments: List[Expression] = field(default_factory=list)


@dataclass
class MemberExpression(Expression):
    object: Expression
    property: Expression
    computed: bool = False


@dataclass
class SequenceExpression(Expression):
    expressions: List[Expression] = field(default_factory=list)


@dataclass
class Super(Expression):
    pass


@dataclass
class SpreadElement(Expression):
    argument: Expression


@dataclass
class YieldExpression(Expression):
    argument: Optional[Expression] = None
    delegate: bool = False


@dataclass
class AwaitExpression(Expression):
    argument: Expression


@dataclass
class TemplateElement(ASTNode):
    value: Dict[str, Optional[str]]     # {"raw": ..., "cooked": ...}
    tail: bool = False


@dataclass
class TemplateLiteral(Expression):
    quasis: List[TemplateElement] = field(default_factory=list)
    expressions: List[Expression] = field(default_factory=list)


@dataclass
class TaggedTemplateExpression(Expression):
    tag: Expression
    quasi: TemplateLiteral


# ============================================
# PATTERNS
# ============================================

@dataclass
class RestElement(ASTNode):
    argument: ASTNode


@dataclass
class AssignmentPattern(ASTNode):
    left: ASTNode
    right: Expression


@dataclass
class ObjectPattern(ASTNode):
    # Property nodes whose value is a pattern, and at most one trailing RestElement
    properties: List[ASTNode] = field(default_factory=list)


@dataclass
class ArrayPattern(ASTNode):
    elements: List[Optional[ASTNode]] = field(default_factory=list)


# ============================================
# MODULE DECLARATIONS
# ============================================

@dataclass
class ImportSpecifier(ASTNode):
    local: Identifier
    imported: Identifier


@dataclass
class ImportDefaultSpecifier(ASTNode):
    local: Identifier


@dataclass
class ImportNamespaceSpecifier(ASTNode):
    local: Identifier


@dataclass
class ImportDeclaration(Statement):
    specifiers: List[ASTNode]
    source: Literal


@dataclass
class ExportSpecifier(ASTNode):
    local: Identifier
    exported: Identifier


@dataclass
class ExportNamedDeclaration(Statement):
    declaration: Optional[Declaration] = None
    specifiers: List[ExportSpecifier] = field(default_factory=list)
    source: Optional[Literal] = None


@dataclass
class ExportDefaultDeclaration(Statement):
    declaration: ASTNode


FUNCTION_NODES = (FunctionDeclaration, FunctionExpression, ArrowFunctionExpression)
MODULE_DECLARATION_NODES = (ImportDeclaration, ExportNamedDeclaration, ExportDefaultDeclaration)

NODE_CLASSES = {
    cls.__name__: cls
    for cls in (
        Program, EmptyStatement, ExpressionStatement, BlockStatement, ReturnStatement,
        ThrowStatement, IfStatement, ForStatement, ForInStatement, WhileStatement,
        DoWhileStatement, ForOfStatement, BreakStatement, ContinueStatement,
        LabeledStatement, DebuggerStatement, SwitchCase, SwitchStatement, CatchClause,
        TryStatement,
        VariableDeclarator, VariableDeclaration, FunctionDeclaration, ClassBody,
        MethodDefinition, ClassDeclaration, Identifier, Literal, ThisExpression,
        ArrayExpression, Property, ObjectExpression, FunctionExpression,
        ArrowFunctionExpression, ClassExpression, UnaryExpression, UpdateExpression,
        BinaryExpression, LogicalExpression, AssignmentExpression, ConditionalExpression,
        CallExpression, NewExpression, MemberExpression, SequenceExpression, Super,
        SpreadElement, YieldExpression, AwaitExpression, TemplateElement,
        TemplateLiteral, TaggedTemplateExpression, RestElement, AssignmentPattern,
        ObjectPattern, ArrayPattern,
        ImportSpecifier, ImportDefaultSpecifier, ImportNamespaceSpecifier,
        ImportDeclaration, ExportSpecifier, ExportNamedDeclaration,
        ExportDefaultDeclaration,
    )
}

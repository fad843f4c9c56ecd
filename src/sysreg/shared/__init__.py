"""
Shared components: syntax tree, visitors, locations, errors.
"""

from .source_location import SourceLocation
from .errors import (
    Error, ErrorReporter, SysregError, FormatterContractError, UnexpectedExportError,
    MissingSpecifierError, MissingDependencyError, DuplicateModuleIdError, DuplicateBindingError,
    UnresolvedModuleError, SerializationError,
)
from .nodes import (
    ASTNode, Statement, Expression, Declaration, Program,
    EmptyStatement, ExpressionStatement, BlockStatement, ReturnStatement, ThrowStatement,
    IfStatement, ForStatement, ForInStatement, WhileStatement, DoWhileStatement, ForOfStatement,
    BreakStatement, ContinueStatement, LabeledStatement, DebuggerStatement,
    SwitchStatement, SwitchCase, TryStatement, CatchClause,
    VariableDeclaration, VariableDeclarator, FunctionDeclaration, ClassDeclaration,
    ClassBody, MethodDefinition,
    Identifier, Literal, ThisExpression, ArrayExpression, ObjectExpression, Property,
    FunctionExpression, ArrowFunctionExpression, ClassExpression,
    UnaryExpression, UpdateExpression, BinaryExpression, LogicalExpression,
    AssignmentExpression, ConditionalExpression, CallExpression, NewExpression,
    MemberExpression, SequenceExpression, Super, SpreadElement, YieldExpression,
    AwaitExpression, TemplateLiteral, TemplateElement, TaggedTemplateExpression,
    ObjectPattern, ArrayPattern, AssignmentPattern, RestElement,
    ImportDeclaration, ImportSpecifier, ImportDefaultSpecifier, ImportNamespaceSpecifier,
    ExportNamedDeclaration, ExportDefaultDeclaration, ExportSpecifier,
)
from .ast_visitor import ASTVisitor, ASTTransformer, ScopedASTAnalyzer

"""
Node builders

Thin factories over the node classes for the shapes the passes emit over
and over. Anything more specific is built with the node constructors.
"""

from typing import List, Optional, Sequence, Union

from .nodes import (
    ASTNode, AssignmentExpression, CallExpression, Expression, ExpressionStatement,
    FunctionDeclaration, BlockStatement, Identifier, Literal, MemberExpression,
    Statement, VariableDeclaration, VariableDeclarator,
)


def identifier(name: Union[str, Identifier]) -> Identifier:
    return name if isinstance(name, Identifier) else Identifier(name)


def literal(value) -> Literal:
    return Literal(value)


def member(obj: Union[str, Expression], prop: Union[str, Expression], computed: bool = False) -> MemberExpression:
    if isinstance(obj, str):
        obj = Identifier(obj)
    if isinstance(prop, str):
        prop = Literal(prop) if computed else Identifier(prop)
    return MemberExpression(obj, prop, computed)


def call(callee: Union[str, Expression], arguments: Sequence[Expression]) -> CallExpression:
    return CallExpression(identifier(callee) if isinstance(callee, str) else callee, list(arguments))


def assign(target: Union[str, Expression], value: Expression, operator: str = "=") -> AssignmentExpression:
    return AssignmentExpression(operator, identifier(target) if isinstance(target, str) else target, value)


def statement(expression: Expression, origin: Optional[ASTNode] = None) -> ExpressionStatement:
    """Expression statement, located where `origin` was."""
    node = ExpressionStatement(expression)
    if origin is not None:
        node.location = origin.location
    return node


def directive(value: str) -> ExpressionStatement:
    """`"use strict";` style prologue statement"""
    return ExpressionStatement(Literal(value), directive=value)


def var(names: Sequence[str], kind: str = "var") -> VariableDeclaration:
    return VariableDeclaration(kind, [VariableDeclarator(Identifier(n)) for n in names])


def function_declaration(name: str, params: Sequence[str], body: List[Statement]) -> FunctionDeclaration:
    return FunctionDeclaration(Identifier(name), [Identifier(p) for p in params], BlockStatement(list(body)))

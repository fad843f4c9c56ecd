"""
AST Visitor Pattern and Scope Management

This module provides:
1. ScopedASTAnalyzer (scope stack shared by analyzers that track shadowing)
2. ASTVisitor (read-only visitor with default child traversal)
3. ASTTransformer (visitor whose visit_* results replace the visited node)

Design:
- Node classes expose accept() and children(); nothing here knows the
  concrete node set except the leaf hooks
- Scope is TEMPORARY (only during a pass), results are written into the tree
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Generic, List, Optional, TypeVar, TYPE_CHECKING

from .nodes import ASTNode, visit_method_name

if TYPE_CHECKING:
    from .nodes import Identifier, Literal

T = TypeVar('T')


# ============================================
# SCOPED AST ANALYZER
# ============================================

class ScopedASTAnalyzer(Generic[T]):
    """
    Base class for analyzers that need lexical scope management.

    - Lexical scoping with shadowing support
    - Clean scope entry/exit via context managers

    Usage:
        class MyAnalyzer(ScopedASTAnalyzer[bool]):
            def enter_function(self, node):
                with self._scope():
                    self._set_var("x", True)
                    # Analyze function body
                # Scope automatically exits
    """

    def __init__(self):
        # Index 0 is the module scope, higher indices are nested function scopes
        self._scope_stack: List[Dict[str, T]] = [{}]

    @contextmanager
    def _scope(self):
        """Context manager for entering/exiting a scope (exception-safe)."""
        self._push_scope()
        try:
            yield
        finally:
            self._pop_scope()

    def _push_scope(self) -> None:
        """Enter a new scope (prefer using _scope() context manager)"""
        self._scope_stack.append({})

    def _pop_scope(self) -> None:
        """Exit current scope (prefer using _scope() context manager)"""
        if len(self._scope_stack) > 1:
            self._scope_stack.pop()

    def _set_var(self, var_name: str, value: T) -> None:
        """Set variable data in current scope (with shadowing)"""
        self._scope_stack[-1][var_name] = value

    def _is_shadowed(self, var_name: str) -> bool:
        """True if a nested (non-module) scope declares var_name"""
        return any(var_name in scope for scope in self._scope_stack[1:])


# ============================================
# AST VISITOR
# ============================================

class ASTVisitor(ABC, Generic[T]):
    """
    Base AST visitor with default traversal for all nodes.

    Leaf nodes that MUST be implemented:
    - visit_identifier, visit_literal

    Every other node falls back to generic_visit(), which visits children in
    field order. Override visit_<snake_name> to add custom behavior.
    """

    def __getattr__(self, name: str):
        # Only reached for visit_* methods the subclass did not define
        if name.startswith("visit_"):
            return self.generic_visit
        raise AttributeError(name)

    def visit(self, node: Optional[ASTNode]) -> Optional[T]:
        if node is None:
            return None
        return node.accept(self)

    def generic_visit(self, node: ASTNode) -> Optional[T]:
        for _, value in node.children():
            if isinstance(value, list):
                for item in value:
                    if item is not None:
                        item.accept(self)
            else:
                value.accept(self)
        return None

    @abstractmethod
    def visit_identifier(self, node: 'Identifier') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_identifier()")

    @abstractmethod
    def visit_literal(self, node: 'Literal') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_literal()")


# ============================================
# AST TRANSFORMER
# ============================================

class ASTTransformer:
    """
    Visitor that rebuilds the tree in place.

    Each visit_* returns the node that takes the visited node's place (the
    node itself to keep it). generic_transform() transforms children and
    writes results back into the parent's fields; returning None from a
    list element removes it.
    """

    def transform(self, node: Optional[ASTNode]) -> Optional[ASTNode]:
        if node is None:
            return None
        method = getattr(self, visit_method_name(node.type), None)
        if method is None:
            return self.generic_transform(node)
        return method(node)

    def generic_transform(self, node: ASTNode) -> ASTNode:
        for name, value in list(node.children()):
            if isinstance(value, list):
                replaced = []
                for item in value:
                    if item is None:
                        replaced.append(None)
                        continue
                    result = self.transform(item)
                    if result is not None:
                        replaced.append(result)
                value[:] = replaced
            else:
                setattr(node, name, self.transform(value))
        return node

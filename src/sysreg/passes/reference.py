"""
Reference Resolution

Access expressions for bindings read from outside their module. Used by
collaborators that rewrite cross-module reference sites; the formatter
itself never rewrites a reference:

- exported values are captured by closures inside `execute`, so local
  references to exported names stay as written
- imported bindings become plain locals assigned by the setters, so every
  later reference is already correct
"""

from typing import Optional, Union

from ..analysis.module_system.module_info import Module
from ..shared.nodes import ASTNode, Expression, Identifier, MemberExpression


class ReferenceResolver:

    def reference(self, module: Module, identifier: Union[str, Identifier]) -> MemberExpression:
        """
        Expression globally referencing the export named by `identifier`:

            // rsvp/defer.js, export default
            rsvp$defer$$.default

            // rsvp/utils.js, export function isFunction
            rsvp$utils$$.isFunction
        """
        prop = identifier if isinstance(identifier, Identifier) else Identifier(identifier)
        return MemberExpression(Identifier(module.id), prop, False)

    def exported_reference(self, module: Module, node: ASTNode) -> Optional[Expression]:
        return None

    def imported_reference(self, module: Module, node: ASTNode) -> Optional[Expression]:
        return None

    def local_reference(self, module: Module, node: ASTNode) -> Optional[Expression]:
        return None

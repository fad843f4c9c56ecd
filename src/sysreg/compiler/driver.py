"""
Formatter Driver

Turns analyzed modules into `System.register` calls, one per module.

Pass order per module:
1. LiveBindingPass       (export binding map, mutation sites re-notify)
2. ExportRewritingPass   (export statements -> declarations + notify calls)
3. ImportErasurePass     (drop import statements)
4. DependencyMetaPass    (ordered setter names + dependency paths)
5. SetterSynthesisPass   (one setter function per dependency)
6. ModuleWrappingPass    (registration call replaces the module body)

Each module is formatted on a copy of its tree; the module's Program is
only updated once every pass has succeeded, so a failing module is left
untouched and emits nothing.
"""

import copy
import logging
from typing import Iterable, List, Optional, Union

from ..analysis.module_system.module_info import Module
from ..passes.base import FormatContext, PassManager
from ..passes.dependency_meta import DependencyMetaPass
from ..passes.export_rewriting import ExportRewritingPass
from ..passes.import_erasure import ImportErasurePass
from ..passes.live_bindings import LiveBindingPass
from ..passes.module_wrapping import ModuleWrappingPass
from ..passes.reference import ReferenceResolver
from ..passes.setter_synthesis import SetterSynthesisPass
from ..shared.errors import ErrorReporter, SysregError
from ..shared.nodes import ASTNode, Expression, Identifier, MemberExpression, Program
from ..utils.config import FormatterOptions

logger = logging.getLogger(__name__)


class BuildResult:
    """Result of formatting a set of modules"""
    def __init__(
        self,
        programs: Optional[List[Program]] = None,
        modules: Optional[List[Module]] = None,
        reporter: Optional[ErrorReporter] = None,
    ):
        self.programs = programs or []
        self.modules = modules or []
        self.reporter = reporter or ErrorReporter()

    @property
    def success(self) -> bool:
        return not self.reporter.has_errors()


class SystemFormatter:
    """
    The `System.register` formatter.

    Produces code for environments loading modules through System.import().
    Modules are independent: each gets its own FormatContext and nothing
    reads another module's tree.
    """

    def __init__(self, options: Optional[FormatterOptions] = None):
        self.options = options or FormatterOptions()
        self.references = ReferenceResolver()
        self.pass_manager = PassManager()
        self._register_passes()

    def _register_passes(self) -> None:
        self.pass_manager.register_pass(LiveBindingPass)
        self.pass_manager.register_pass(ExportRewritingPass)
        self.pass_manager.register_pass(ImportErasurePass)
        self.pass_manager.register_pass(DependencyMetaPass)
        self.pass_manager.register_pass(SetterSynthesisPass)
        self.pass_manager.register_pass(ModuleWrappingPass)

    # -- references -----------------------------------------------------------

    def reference(self, module: Module, identifier: Union[str, Identifier]) -> MemberExpression:
        return self.references.reference(module, identifier)

    def exported_reference(self, module: Module, node: ASTNode) -> Optional[Expression]:
        return self.references.exported_reference(module, node)

    def imported_reference(self, module: Module, node: ASTNode) -> Optional[Expression]:
        return self.references.imported_reference(module, node)

    def local_reference(self, module: Module, node: ASTNode) -> Optional[Expression]:
        return self.references.local_reference(module, node)

    # -- building -------------------------------------------------------------

    def format_module(self, module: Module) -> Program:
        """
        Replace the module's top-level tree with its registration call.

        Raises FormatterContractError (and leaves the module untouched) when
        the tree or declaration metadata are inconsistent.
        """
        ctx = FormatContext(module, self.options)
        working = copy.deepcopy(module.ast)
        result = self.pass_manager.run_all(working, ctx)
        module.ast.body = result.body
        module.ast.filename = module.relative_path
        logger.debug(f"Formatted {module.name}")
        return module.ast

    def build(self, modules: Iterable[Module]) -> List[Program]:
        """
        Convert modules (in execution order) into registration programs.
        The first failing module aborts the build.
        """
        return [self.format_module(module) for module in modules]

    def build_all(self, modules: Iterable[Module], reporter: Optional[ErrorReporter] = None) -> BuildResult:
        """Format every module, reporting failures instead of raising."""
        result = BuildResult(reporter=reporter)
        for module in modules:
            try:
                program = self.format_module(module)
            except SysregError as e:
                logger.debug(f"Formatting {module.name} failed: {e.message}")
                result.reporter.report_exception(e)
                continue
            result.programs.append(program)
            result.modules.append(module)
        return result

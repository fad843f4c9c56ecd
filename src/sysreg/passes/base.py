"""
Base Pass System

Every step of formatting one module is a pass over that module's Program.
Passes declare what they need through `requires`; the PassManager runs
them in dependency order and passes analysis results along in the
FormatContext.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Type

from ..analysis.module_system.module_info import Module
from ..shared.builders import call
from ..shared.nodes import CallExpression, Expression, Literal, Program
from ..utils.config import FormatterOptions

logger = logging.getLogger(__name__)


class FormatContext:
    """
    Per-module formatting state.

    - module: the module being formatted (read-only apart from the final commit)
    - options: formatter options shared by the whole build
    - analysis results keyed by the pass that produced them

    One context per module: nothing here is visible to another module's pass.
    """

    def __init__(self, module: Module, options: FormatterOptions):
        self.module = module
        self.options = options
        self._analysis_results: Dict[Type['BasePass'], Any] = {}

    def get_analysis(self, pass_class: Type['BasePass']) -> Any:
        """Get analysis results from a pass"""
        if pass_class not in self._analysis_results:
            raise RuntimeError(f"Analysis {pass_class.__name__} not available")
        return self._analysis_results[pass_class]

    def set_analysis(self, pass_class: Type['BasePass'], results: Any) -> None:
        """Store analysis results"""
        self._analysis_results[pass_class] = results

    def has_analysis(self, pass_class: Type['BasePass']) -> bool:
        return pass_class in self._analysis_results

    def notify(self, name: str, value: Expression) -> CallExpression:
        """`__es6_export__("name", value)`"""
        return call(self.options.notify_identifier, [Literal(name), value])


class BasePass(ABC):
    """
    Base class for all formatting passes.

    - Explicit dependencies via `requires`
    - Results stored in the FormatContext (not in the pass)
    - Returns the Program to hand to the next pass
    """
    requires: List[Type['BasePass']] = []

    @abstractmethod
    def run(self, program: Program, ctx: FormatContext) -> Program:
        raise NotImplementedError


class PassManager:
    """
    Pass manager with dependency resolution.

    - Passes run in dependency order (topological sort)
    - Independent passes keep their registration order
    """

    def __init__(self):
        self.passes: List[Type[BasePass]] = []
        self._dependency_graph: Dict[Type[BasePass], set] = {}

    def register_pass(self, pass_class: Type[BasePass]) -> None:
        """Register a pass"""
        self.passes.append(pass_class)
        self._dependency_graph[pass_class] = set(pass_class.requires)

    def run_all(self, program: Program, ctx: FormatContext) -> Program:
        for pass_class in self._topological_sort():
            logger.debug(f"Running {pass_class.__name__} on {ctx.module.name}")
            program = pass_class().run(program, ctx)
        return program

    def _topological_sort(self) -> List[Type[BasePass]]:
        """Topological sort of passes by dependencies"""
        missing = {
            dep.__name__
            for deps in self._dependency_graph.values()
            for dep in deps
            if dep not in self._dependency_graph
        }
        if missing:
            raise RuntimeError(f"Passes required but not registered: {sorted(missing)}")

        in_degree = {p: len(self._dependency_graph[p]) for p in self.passes}
        queue = [p for p, degree in in_degree.items() if degree == 0]
        result = []

        while queue:
            pass_class = queue.pop(0)
            result.append(pass_class)

            for other_pass in self.passes:
                if pass_class in self._dependency_graph[other_pass]:
                    in_degree[other_pass] -= 1
                    if in_degree[other_pass] == 0:
                        queue.append(other_pass)

        if len(result) != len(self.passes):
            raise RuntimeError("Circular dependency detected in passes")

        return result

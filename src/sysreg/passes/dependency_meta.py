"""
Dependency Metadata

Orders a module's dependencies for the registration call. Modules are
deduplicated on first occurrence across `imports` then `exports`, each
scanned in its own `modules` order. For every dependency the first
declaration citing it supplies the authored path, so

    import {a} from './dep';
    export {b} from './dep';

yields one entry, `"./dep"`, not two.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..analysis.module_system.module_info import Module
from ..shared.errors import MissingDependencyError
from ..shared.nodes import Identifier, Literal, Program
from .base import BasePass, FormatContext

logger = logging.getLogger(__name__)


@dataclass
class DependencyMeta:
    """
    Parallel, index-aligned sequences:

        modules  [<Module lib/foo>, <Module bar>]
        setters  [lib$foo$$, bar$$]      setter function names
        deps     ["./foo", "../bar"]     authored dependency paths
    """
    modules: List[Module] = field(default_factory=list)
    setters: List[Identifier] = field(default_factory=list)
    deps: List[Literal] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.modules)


def build_dependencies_meta(module: Module) -> DependencyMeta:
    meta = DependencyMeta()
    for declarations in (module.imports, module.exports):
        for source in declarations.modules:
            if any(source is required for required in meta.modules):
                continue
            matching = next(
                (decl for decl in declarations.declarations if decl.source is source),
                None,
            )
            if matching is None:
                raise MissingDependencyError(
                    f"no matching declaration for source module: {source.relative_path}"
                    f" (in {module.relative_path})",
                    module.ast.location,
                )
            meta.modules.append(source)
            meta.setters.append(Identifier(source.id))
            meta.deps.append(Literal(matching.source_path))
    return meta


class DependencyMetaPass(BasePass):
    requires = []

    def run(self, program: Program, ctx: FormatContext) -> Program:
        meta = build_dependencies_meta(ctx.module)
        ctx.set_analysis(DependencyMetaPass, meta)
        logger.debug(
            f"[dependency_meta] {ctx.module.name}: deps={[d.value for d in meta.deps]}"
        )
        return program

"""
Setter Synthesis

One setter per dependency, named by the dependency's id and called by the
loader with that dependency's live export object (again whenever it
republishes):

    function lib$foo$$(m) {
      a = m.a;                              // import {a} from './foo'
      d = m["default"];                     // import d from './foo'
      ns = m;                               // import * as ns from './foo'
      __es6_export__("b", m["c"]);          // export {c as b} from './foo'
    }

Setters come out in dependency-metadata order, so the `setters` array and
the dependency list stay index-aligned. A dependency cited only by a
re-export, or only for its side effects, still gets a setter.
"""

import logging
import re
from typing import Dict, List, Set

from typing_extensions import assert_never

from ..analysis.module_system.module_info import Module, Specifier
from ..shared.builders import assign, function_declaration, member, statement
from ..shared.errors import MissingDependencyError, MissingSpecifierError
from ..shared.nodes import Expression, FunctionDeclaration, Identifier, Program, Statement
from ..utils.config import RESERVED_WORDS
from .base import BasePass, FormatContext
from .dependency_meta import DependencyMetaPass
from .shapes import ImportShape, classify_import

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _export_key(param: str, key: str) -> Expression:
    """`m.key`, or `m["key"]` when key cannot follow a dot"""
    if _IDENTIFIER.match(key) and key not in RESERVED_WORDS:
        return member(param, key)
    return member(param, key, computed=True)


def _setter_parameter(base: str, taken: Set[str]) -> str:
    """`base`, with `$` appended until it names no import binding"""
    param = base
    while param in taken:
        param += "$"
    return param


def _dependency_of(module: Module, specifier: Specifier) -> Module:
    if specifier.source is not None:
        return specifier.source
    return module.get_module(specifier.source_path)


class SetterSynthesizer:

    def __init__(self, ctx: FormatContext):
        self.ctx = ctx
        # the setters assign import bindings, so the parameter must not hide one
        self.param = _setter_parameter(ctx.options.setter_parameter, set(ctx.module.imports.names))

    def build(self) -> List[FunctionDeclaration]:
        module = self.ctx.module
        meta = self.ctx.get_analysis(DependencyMetaPass)
        setters = [function_declaration(dep.id, [self.param], []) for dep in meta.modules]
        bodies: Dict[str, List[Statement]] = {fn.id.name: fn.body.body for fn in setters}

        def body_for(specifier: Specifier) -> List[Statement]:
            dep = _dependency_of(module, specifier)
            if dep.id not in bodies:
                raise MissingDependencyError(
                    f"dependency `{dep.name}` of {module.relative_path} is missing from the dependency list",
                    specifier.location,
                )
            return bodies[dep.id]

        for name in module.imports.names:
            specifier = module.imports.find_specifier_by_name(name)
            if specifier is None:
                raise MissingSpecifierError(
                    f"no import specifier found for import name `{name}` from {module.relative_path}"
                )
            shape = classify_import(specifier)
            if shape is ImportShape.NAMED_IMPORT:
                value = _export_key(self.param, specifier.from_)
            elif shape is ImportShape.NAMESPACE_IMPORT:
                value = Identifier(self.param)
            elif shape is ImportShape.SIDE_EFFECT_IMPORT:
                continue
            else:
                assert_never(shape)
            body_for(specifier).append(statement(assign(specifier.name, value), specifier.node))

        for name in module.exports.names:
            specifier = module.exports.find_specifier_by_name(name)
            if specifier is None:
                raise MissingSpecifierError(
                    f"no export specifier found for export name `{name}` from {module.relative_path}"
                )
            if specifier.source is None and specifier.source_path is None:
                continue
            remote = member(self.param, specifier.from_, computed=True)
            body_for(specifier).append(statement(self.ctx.notify(specifier.name, remote), specifier.node))

        return setters


class SetterSynthesisPass(BasePass):
    requires = [DependencyMetaPass]

    def run(self, program: Program, ctx: FormatContext) -> Program:
        setters = SetterSynthesizer(ctx).build()
        ctx.set_analysis(SetterSynthesisPass, setters)
        logger.debug(
            f"[setter_synthesis] {ctx.module.name}: "
            + ", ".join(f"{fn.id.name}({len(fn.body.body)})" for fn in setters)
        )
        return program

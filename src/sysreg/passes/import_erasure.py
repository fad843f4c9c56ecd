"""
Import Erasure

Import declarations carry no runtime code: their bindings are already
recorded in the module's `imports` collection and become hoisted locals
assigned by the setters. Every top-level import is dropped; the remaining
statements keep their order.
"""

import logging

from ..shared.nodes import ImportDeclaration, Program
from .base import BasePass, FormatContext

logger = logging.getLogger(__name__)


class ImportErasurePass(BasePass):
    requires = []

    def run(self, program: Program, ctx: FormatContext) -> Program:
        before = len(program.body)
        program.body = [stmt for stmt in program.body if not isinstance(stmt, ImportDeclaration)]
        logger.debug(f"[import_erasure] {ctx.module.name}: removed {before - len(program.body)} import(s)")
        return program

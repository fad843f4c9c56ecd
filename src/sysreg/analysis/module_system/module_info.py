"""
Module System Types

Data structures the analyzer fills in and the formatter reads:
- Module: one compilation unit with its tree and declaration collections
- Specifier: one named binding crossing a module boundary
- DeclarationCollection: ordered names, distinct source modules, specifiers

The formatter only ever mutates `Module.ast`.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from ...shared.errors import DuplicateBindingError
from ...shared.nodes import ASTNode, Program
from ...shared.source_location import SourceLocation

if TYPE_CHECKING:
    from .module_table import ModuleTable


@dataclass(eq=False)
class Specifier:
    """
    One binding crossing a module boundary.

    - name: local binding name (imports) or exported name (exports);
      None for a side-effect-only import, which binds nothing
    - from_: remote export key for imports and sourced re-exports, the
      local binding for local exports; None marks a namespace import, or a
      default export of an anonymous value
    - source: dependency module, None for exports of local declarations
    - declaration: the import/export statement node that introduced it
    - node: the specifier or declaration node naming the binding
    """
    name: Optional[str]
    from_: Optional[str]
    declaration: ASTNode
    source: Optional["Module"] = None
    node: Optional[ASTNode] = None

    @property
    def source_path(self) -> Optional[str]:
        """Dependency path exactly as authored, e.g. "./utils"."""
        src = getattr(self.declaration, "source", None)
        return src.value if src is not None else None

    @property
    def location(self) -> Optional[SourceLocation]:
        if self.node is not None and self.node.location is not None:
            return self.node.location
        return self.declaration.location

    @property
    def is_namespace(self) -> bool:
        return not self.from_

    def __repr__(self) -> str:
        source = self.source.name if self.source is not None else None
        return f"Specifier(name={self.name!r}, from_={self.from_!r}, source={source!r})"


class DeclarationCollection:
    """
    Ordered record of one module's imports or exports.

    names: binding names in declaration order (no duplicates)
    modules: distinct dependency modules, in order of first citation
    declarations: every specifier record, in source order
    """

    kind = "declaration"

    def __init__(self, module: "Module"):
        self.module = module
        self.declarations: List[Specifier] = []
        self._by_name: Dict[str, Specifier] = {}

    def add(self, specifier: Specifier) -> Specifier:
        if specifier.name is not None:
            if specifier.name in self._by_name:
                raise DuplicateBindingError(
                    f"duplicate {self.kind} `{specifier.name}` in {self.module.relative_path}",
                    specifier.location,
                )
            self._by_name[specifier.name] = specifier
        self.declarations.append(specifier)
        return specifier

    @property
    def names(self) -> List[str]:
        return list(self._by_name)

    @property
    def modules(self) -> List["Module"]:
        seen: List["Module"] = []
        for specifier in self.declarations:
            source = specifier.source
            if source is not None and not any(source is m for m in seen):
                seen.append(source)
        return seen

    def find_specifier_by_name(self, name: str) -> Optional[Specifier]:
        return self._by_name.get(name)

    def __iter__(self) -> Iterator[Specifier]:
        return iter(self.declarations)

    def __len__(self) -> int:
        return len(self.declarations)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(names={self.names}, modules={[m.name for m in self.modules]})"


class ImportDeclarationList(DeclarationCollection):
    kind = "import"


class ExportDeclarationList(DeclarationCollection):
    kind = "export"


@dataclass(eq=False)
class Module:
    """
    One compilation unit.

    - name: registration key (normalised relative path without extension)
    - id: identifier used bare in generated code, unique across the table
    - ast: the module's Program; replaced in place by the formatter
    """
    name: str
    id: str
    ast: Program
    relative_path: str
    table: Optional["ModuleTable"] = field(default=None, repr=False)
    imports: ImportDeclarationList = field(init=False, repr=False)
    exports: ExportDeclarationList = field(init=False, repr=False)

    def __post_init__(self):
        self.imports = ImportDeclarationList(self)
        self.exports = ExportDeclarationList(self)

    def get_module(self, path: str) -> "Module":
        """Resolve an authored dependency path, relative to this module."""
        return self.table.get_module(path, importer=self)

    def source_position(self, node: Optional[ASTNode]) -> str:
        loc = node.location if node is not None else None
        if loc is not None:
            return f"{self.relative_path}:{loc.line}:{loc.column}"
        return self.relative_path

    def __str__(self) -> str:
        return f"Module({self.name}, {len(self.imports)} imports, {len(self.exports)} exports)"

"""
Tree Serialization
==================

Three renderings of a syntax tree:

- ESTree JSON in (`from_estree`): the upstream parser's wire format, as
  emitted by esprima/acorn (`File` wrappers and unknown keys are accepted)
- ESTree JSON out (`to_estree`): for tools downstream of the formatter
- S-expressions (`serialize_tree`): canonical dump for tests and debugging,
  built as nested lists with `sexpdata.Symbol` heads, then pretty-printed
"""

from dataclasses import MISSING, fields
from typing import Any, Dict, List, Optional

import sexpdata

from .errors import SerializationError
from .nodes import ASTNode, NODE_CLASSES
from .source_location import SourceLocation

# Dataclass fields that never appear in ESTree
_NON_ESTREE_FIELDS = frozenset({"filename"})

# ESTree properties holding plain objects rather than nodes
_PLAIN_OBJECT_FIELDS = frozenset({
    ("Literal", "value"),          # a RegExp serializes as {}
    ("Literal", "regex"),
    ("TemplateElement", "value"),
})


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


# ---------------------------------------------------------------------------
# ESTree JSON -> nodes
# ---------------------------------------------------------------------------

def from_estree(data: Dict[str, Any], file: str = "<unknown>") -> ASTNode:
    """
    Build a node tree from ESTree JSON data.

    Args:
        data: decoded ESTree JSON (a `Program` or a `File` wrapping one)
        file: module relative path recorded on every node location
    """
    if not isinstance(data, dict) or "type" not in data:
        raise SerializationError(f"expected an ESTree node, found {type(data).__name__}")
    if data["type"] == "File":
        return from_estree(data.get("program"), file)
    return _node_from_estree(data, file)


def _node_from_estree(data: Dict[str, Any], file: str) -> ASTNode:
    node_type = data["type"]
    cls = NODE_CLASSES.get(node_type)
    if cls is None:
        raise SerializationError(
            f"unsupported node type: {node_type}",
            _location_from_estree(data.get("loc"), file),
        )
    kwargs = {}
    for f in fields(cls):
        if f.name in _NON_ESTREE_FIELDS:
            continue
        key = _camel(f.name)
        if key in data and (node_type, f.name) in _PLAIN_OBJECT_FIELDS and isinstance(data[key], dict):
            kwargs[f.name] = dict(data[key])
        elif key in data:
            kwargs[f.name] = _value_from_estree(data[key], file, node_type)
        elif f.default is MISSING and f.default_factory is MISSING:
            kwargs[f.name] = None
    node = cls(**kwargs)
    node.location = _location_from_estree(data.get("loc"), file)
    return node


def _value_from_estree(value: Any, file: str, owner: str) -> Any:
    if isinstance(value, list):
        return [None if v is None else _value_from_estree(v, file, owner) for v in value]
    if isinstance(value, dict):
        if "type" not in value:
            raise SerializationError(f"unsupported value in {owner}: {value!r}")
        return _node_from_estree(value, file)
    return value


def _location_from_estree(loc: Optional[Dict[str, Any]], file: str) -> Optional[SourceLocation]:
    if not loc or "start" not in loc:
        return None
    start = loc["start"]
    end = loc.get("end") or {}
    return SourceLocation(
        file=file,
        line=start["line"],
        column=start["column"] + 1,
        end_line=end.get("line", 0),
        end_column=end["column"] + 1 if "column" in end else 0,
    )


# ---------------------------------------------------------------------------
# nodes -> ESTree JSON
# ---------------------------------------------------------------------------

def to_estree(node: Optional[ASTNode], include_location: bool = False) -> Optional[Dict[str, Any]]:
    """Convert a node tree back to ESTree JSON data."""
    if node is None:
        return None
    out: Dict[str, Any] = {"type": node.type}
    for f in fields(node):
        if f.name in _NON_ESTREE_FIELDS:
            continue
        out[_camel(f.name)] = _value_to_estree(getattr(node, f.name), include_location)
    if include_location and node.location is not None:
        loc = node.location
        out["loc"] = {"start": {"line": loc.line, "column": loc.column - 1}}
        if loc.end_line:
            out["loc"]["end"] = {"line": loc.end_line, "column": max(loc.end_column - 1, 0)}
    return out


def _value_to_estree(value: Any, include_location: bool) -> Any:
    if isinstance(value, ASTNode):
        return to_estree(value, include_location)
    if isinstance(value, list):
        return [_value_to_estree(v, include_location) for v in value]
    return value


# ---------------------------------------------------------------------------
# nodes -> S-expressions
# ---------------------------------------------------------------------------

def serialize_tree(node: ASTNode, include_location: bool = False, pretty: bool = True) -> str:
    """
    Serialize a node tree to an S-expression string.

    Node types become heads, scalar fields become `:field value` pairs, and
    child nodes nest:

        (ExpressionStatement :directive nil
          (CallExpression (Identifier :name "__es6_export__") ...))
    """
    sexpr = TreeSerializer(include_location).serialize_to_sexpr(node)
    if pretty:
        return _pretty_dumps(sexpr)
    return sexpdata.dumps(sexpr)


class TreeSerializer:
    """Node tree to structured S-expression (nested lists + sexpdata.Symbol)."""

    def __init__(self, include_location: bool = False):
        self.include_location = include_location

    def serialize_to_sexpr(self, node: Optional[ASTNode]) -> Any:
        if node is None:
            return sexpdata.Symbol("nil")
        parts: List[Any] = [sexpdata.Symbol(node.type)]
        children: List[Any] = []
        for f in fields(node):
            if f.name in _NON_ESTREE_FIELDS:
                continue
            value = getattr(node, f.name)
            if isinstance(value, ASTNode):
                children.append(self.serialize_to_sexpr(value))
            elif isinstance(value, list):
                children.append([sexpdata.Symbol(f":{f.name}")] + [self.serialize_to_sexpr(v) for v in value])
            elif f.name == "raw" or (f.name == "regex" and value is None):
                continue
            else:
                parts.extend([sexpdata.Symbol(f":{f.name}"), self._scalar(value)])
        if self.include_location and node.location is not None:
            parts.extend([sexpdata.Symbol(":loc"), str(node.location)])
        return parts + children

    def _scalar(self, value: Any) -> Any:
        if value is None:
            return sexpdata.Symbol("nil")
        if isinstance(value, bool):
            return sexpdata.Symbol("true" if value else "false")
        if isinstance(value, dict):
            return [item for k, v in value.items() for item in (sexpdata.Symbol(f":{k}"), self._scalar(v))]
        return value


def _pretty_dumps(sexpr: Any, indent: int = 0, indent_str: str = "  ", max_line: int = 100) -> str:
    """Pretty-print structured sexpr. Keeps short forms on one line; breaks only when needed."""
    # Check Symbol before str (sexpdata.Symbol subclasses str)
    if isinstance(sexpr, sexpdata.Symbol):
        return sexpr.value()
    if isinstance(sexpr, (bool, int, float, str)):
        return sexpdata.dumps(sexpr)
    if isinstance(sexpr, list):
        if not sexpr:
            return "()"
        parts = [_pretty_dumps(e, indent + 1, indent_str, max_line) for e in sexpr]
        one_line = "(" + " ".join(parts) + ")"
        if len(one_line) <= max_line and "\n" not in one_line:
            return one_line
        prefix = indent_str * indent
        next_prefix = indent_str * (indent + 1)
        rest = "\n".join(next_prefix + p for p in parts[1:])
        inner = parts[0] + ("\n" + rest if rest else "")
        return f"({inner}\n{prefix})"
    return str(sexpr)

"""Syntax tree nodes and their dictionary form."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union


@dataclass
class PathType:
    """A named type such as ``i32``, ``String`` or ``Option<u8>``."""

    name: str


@dataclass
class RawPtrType:
    """A raw pointer to another type."""

    inner: "Type"


@dataclass
class RefType:
    """A shared or mutable reference to another type."""

    mutable: bool
    inner: "Type"


Type = Union[PathType, RawPtrType, RefType]


class BinaryOp(enum.Enum):
    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    LESS_THAN = "LessThan"
    LESS_EQUAL = "LessEqual"
    GREATER_THAN = "GreaterThan"
    GREATER_EQUAL = "GreaterEqual"


@dataclass
class Literal:
    """An integer, string or boolean literal."""

    value: Union[int, str, bool]


@dataclass
class Variable:
    name: str


@dataclass
class CallExpr:
    func_name: str
    args: list["Expression"] = field(default_factory=list)


@dataclass
class BinaryExpr:
    op: BinaryOp
    left: "Expression"
    right: "Expression"


@dataclass
class RefExpr:
    mutable: bool
    expr: "Expression"


@dataclass
class BlockExpr:
    block: "Block"


Expression = Union[Literal, Variable, CallExpr, BinaryExpr, RefExpr, BlockExpr]


@dataclass
class Block:
    statements: list["Statement"] = field(default_factory=list)
    unsafe_block: bool = False


@dataclass
class LetStatement:
    name: str
    ty: Optional[Type]
    value: Expression


@dataclass
class ConstStatement:
    name: str
    ty: Optional[Type]
    value: Expression


@dataclass
class IfStatement:
    condition: Expression
    then_block: Block
    else_block: Optional[Block] = None


@dataclass
class ForStatement:
    var_name: str
    start: Expression
    end: Expression
    inclusive: bool
    body: Block


@dataclass
class BreakStatement:
    pass


@dataclass
class ContinueStatement:
    pass


@dataclass
class ExprStatement:
    expr: Expression


Statement = Union[
    LetStatement,
    ConstStatement,
    IfStatement,
    ForStatement,
    BreakStatement,
    ContinueStatement,
    ExprStatement,
]


class SafetyLevel(enum.Enum):
    SAFE = "Safe"
    RAW = "Raw"


@dataclass
class Arg:
    name: str
    ty: Type


@dataclass
class Function:
    name: str
    safety: SafetyLevel
    args: list[Arg]
    ret_type: Optional[Type]
    body: Block


@dataclass
class Alias:
    name: str
    target: str


@dataclass
class StructField:
    name: str
    ty: Type


@dataclass
class Struct:
    name: str
    fields: list[StructField] = field(default_factory=list)


Item = Union[Function, Alias, Struct]


@dataclass
class SourceFile:
    items: list[Item] = field(default_factory=list)


_ITEM_TAGS: dict[type, str] = {Function: "Function", Alias: "Alias", Struct: "Struct"}


def _optional(value: Any, convert: Callable[[Any], Any]) -> Any:
    return None if value is None else convert(value)


def _literal_payload(value: Union[int, str, bool]) -> dict[str, Any]:
    if isinstance(value, bool):
        return {"Bool": value}
    if isinstance(value, int):
        return {"Integer": value}
    if isinstance(value, str):
        return {"String": value}
    raise TypeError(f"Unsupported literal value: {value!r}")


def _binding(name: str, ty: Optional[Type], value: Expression) -> dict[str, Any]:
    return {"name": name, "ty": _optional(ty, to_dict), "value": to_dict(value)}


def to_dict(node: Any) -> Any:
    """Return the JSON-compatible form of a syntax tree node."""
    match node:
        case PathType(name=name):
            return {"Path": name}
        case RawPtrType(inner=inner):
            return {"RawPtr": to_dict(inner)}
        case RefType(mutable=mutable, inner=inner):
            return {"Ref": {"mutable": mutable, "inner": to_dict(inner)}}
        case BinaryOp() | SafetyLevel():
            return node.value
        case Literal(value=value):
            return {"Literal": _literal_payload(value)}
        case Variable(name=name):
            return {"Variable": name}
        case CallExpr(func_name=func_name, args=args):
            return {"Call": {"func_name": func_name, "args": [to_dict(a) for a in args]}}
        case BinaryExpr(op=op, left=left, right=right):
            return {
                "Binary": {"op": op.value, "left": to_dict(left), "right": to_dict(right)}
            }
        case RefExpr(mutable=mutable, expr=expr):
            return {"Ref": {"mutable": mutable, "expr": to_dict(expr)}}
        case BlockExpr(block=block):
            return {"Block": to_dict(block)}
        case Block(statements=statements, unsafe_block=unsafe_block):
            return {
                "statements": [to_dict(s) for s in statements],
                "unsafe_block": unsafe_block,
            }
        case LetStatement(name=name, ty=ty, value=value):
            return {"Let": _binding(name, ty, value)}
        case ConstStatement(name=name, ty=ty, value=value):
            return {"Const": _binding(name, ty, value)}
        case IfStatement(condition=condition, then_block=then_block, else_block=else_block):
            return {
                "If": {
                    "condition": to_dict(condition),
                    "then_block": to_dict(then_block),
                    "else_block": _optional(else_block, to_dict),
                }
            }
        case ForStatement(
            var_name=var_name, start=start, end=end, inclusive=inclusive, body=body
        ):
            return {
                "For": {
                    "var_name": var_name,
                    "start": to_dict(start),
                    "end": to_dict(end),
                    "inclusive": inclusive,
                    "body": to_dict(body),
                }
            }
        case BreakStatement():
            return "Break"
        case ContinueStatement():
            return "Continue"
        case ExprStatement(expr=expr):
            return {"Expr": to_dict(expr)}
        case Arg(name=name, ty=ty):
            return {"name": name, "ty": to_dict(ty)}
        case Function(name=name, safety=safety, args=args, ret_type=ret_type, body=body):
            return {
                "name": name,
                "safety": safety.value,
                "args": [to_dict(a) for a in args],
                "ret_type": _optional(ret_type, to_dict),
                "body": to_dict(body),
            }
        case Alias(name=name, target=target):
            return {"name": name, "target": target}
        case StructField(name=name, ty=ty):
            return {"name": name, "ty": to_dict(ty)}
        case Struct(name=name, fields=fields):
            return {"name": name, "fields": [to_dict(f) for f in fields]}
        case SourceFile(items=items):
            return {"items": [{_ITEM_TAGS[type(i)]: to_dict(i)} for i in items]}
    raise TypeError(f"Not a syntax tree node: {node!r}")


def _tagged(data: Any, what: str) -> tuple[str, Any]:
    if isinstance(data, str):
        return data, None
    if isinstance(data, dict) and len(data) == 1:
        ((tag, payload),) = data.items()
        return tag, payload
    raise ValueError(f"Malformed {what}: {data!r}")


def _type_from(data: Any) -> Type:
    tag, payload = _tagged(data, "type")
    match tag:
        case "Path":
            return PathType(payload)
        case "RawPtr":
            return RawPtrType(_type_from(payload))
        case "Ref":
            return RefType(payload["mutable"], _type_from(payload["inner"]))
    raise ValueError(f"Unknown type tag: {tag!r}")


def _literal_from(data: Any) -> Literal:
    tag, payload = _tagged(data, "literal")
    if tag not in ("Integer", "String", "Bool"):
        raise ValueError(f"Unknown literal tag: {tag!r}")
    return Literal(payload)


def _expr_from(data: Any) -> Expression:
    tag, payload = _tagged(data, "expression")
    match tag:
        case "Literal":
            return _literal_from(payload)
        case "Variable":
            return Variable(payload)
        case "Call":
            return CallExpr(payload["func_name"], [_expr_from(a) for a in payload["args"]])
        case "Binary":
            return BinaryExpr(
                BinaryOp(payload["op"]),
                _expr_from(payload["left"]),
                _expr_from(payload["right"]),
            )
        case "Ref":
            return RefExpr(payload["mutable"], _expr_from(payload["expr"]))
        case "Block":
            return BlockExpr(_block_from(payload))
    raise ValueError(f"Unknown expression tag: {tag!r}")


def _block_from(data: Any) -> Block:
    return Block([_stmt_from(s) for s in data["statements"]], data["unsafe_block"])


def _stmt_from(data: Any) -> Statement:
    tag, payload = _tagged(data, "statement")
    match tag:
        case "Let":
            return LetStatement(
                payload["name"], _optional(payload["ty"], _type_from), _expr_from(payload["value"])
            )
        case "Const":
            return ConstStatement(
                payload["name"], _optional(payload["ty"], _type_from), _expr_from(payload["value"])
            )
        case "If":
            return IfStatement(
                _expr_from(payload["condition"]),
                _block_from(payload["then_block"]),
                _optional(payload["else_block"], _block_from),
            )
        case "For":
            return ForStatement(
                payload["var_name"],
                _expr_from(payload["start"]),
                _expr_from(payload["end"]),
                payload["inclusive"],
                _block_from(payload["body"]),
            )
        case "Break":
            return BreakStatement()
        case "Continue":
            return ContinueStatement()
        case "Expr":
            return ExprStatement(_expr_from(payload))
    raise ValueError(f"Unknown statement tag: {tag!r}")


def _item_from(data: Any) -> Item:
    tag, payload = _tagged(data, "item")
    match tag:
        case "Function":
            return Function(
                payload["name"],
                SafetyLevel(payload["safety"]),
                [Arg(a["name"], _type_from(a["ty"])) for a in payload["args"]],
                _optional(payload["ret_type"], _type_from),
                _block_from(payload["body"]),
            )
        case "Alias":
            return Alias(payload["name"], payload["target"])
        case "Struct":
            return Struct(
                payload["name"],
                [StructField(f["name"], _type_from(f["ty"])) for f in payload["fields"]],
            )
    raise ValueError(f"Unknown item tag: {tag!r}")


def from_dict(data: Any) -> SourceFile:
    """Rebuild a SourceFile from the form produced by :func:`to_dict`."""
    try:
        return SourceFile([_item_from(i) for i in data["items"]])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed source file data: {exc}") from exc
"""
seqdist.formats — Convert edit scripts to and from plain data.

Supported conversions:
    • EditOp / script ↔ plain Python (dicts, lists)
    • script ↔ JSON strings
    • EditOp / script → one-line human-readable text
"""

import json
from typing import Any

from .core import EditKind, EditOp, EditScript


# ═══════════════════════════════════════════════════════════════════
#  PYTHON OBJECTS ↔ OPERATIONS
# ═══════════════════════════════════════════════════════════════════

def op_to_python(op: EditOp) -> dict[str, Any]:
    """
    Convert an operation to a plain dict.

    Mapping:
        kind    → its tag ("copy", "add", "del", "sub", "trans")
        symbols → as is; a transposed pair becomes a list unless it
                  is a string slice
    """
    def plain(symbol):
        if isinstance(symbol, (tuple, list)):
            return list(symbol)
        return symbol

    return {
        "op": op.kind.value,
        "source_index": op.source_index,
        "source_symbol": plain(op.source_symbol),
        "target_index": op.target_index,
        "target_symbol": plain(op.target_symbol),
    }


def op_from_python(obj: dict[str, Any]) -> EditOp:
    """
    Inverse of op_to_python.

    Raises ValueError for an unknown "op" tag and KeyError for a
    missing field.
    """
    kind = EditKind(obj["op"])
    return EditOp(kind, obj["source_index"], obj["source_symbol"],
                  obj["target_index"], obj["target_symbol"])


def script_to_python(script: EditScript) -> list[dict[str, Any]]:
    return [op_to_python(op) for op in script]


def script_from_python(items: list[dict[str, Any]]) -> EditScript:
    return tuple(op_from_python(item) for item in items)


# ═══════════════════════════════════════════════════════════════════
#  JSON STRINGS ↔ SCRIPTS
# ═══════════════════════════════════════════════════════════════════

def to_json(script: EditScript, **kwargs) -> str:
    """Serialize a script to a JSON array of operation objects."""
    return json.dumps(script_to_python(script), **kwargs)


def from_json(text: str) -> EditScript:
    """Parse a JSON array produced by to_json."""
    return script_from_python(json.loads(text))


# ═══════════════════════════════════════════════════════════════════
#  TEXT
# ═══════════════════════════════════════════════════════════════════

def format_op(op: EditOp) -> str:
    """
    One operation as text, e.g.

        sub 0:'k' -> 0:'s'
        add 6:- -> 6:'g'
        del 3:'x' -> 2:-
    """
    def side(index, symbol):
        return f"{index}:{'-' if symbol is None else repr(symbol)}"

    return (f"{op.kind.value} {side(op.source_index, op.source_symbol)} -> "
            f"{side(op.target_index, op.target_symbol)}")


def format_script(script: EditScript, skip_copies: bool = False) -> str:
    """Operations joined with ", "; copies can be left out."""
    return ", ".join(format_op(op) for op in script
                     if not (skip_copies and op.kind is EditKind.COPY))

"""
seqdist.core — Edit operations, scripts and costs
==================================================

THE MODEL
═════════

§1  EDIT OPERATIONS
───────────────────

An edit script transforms a SOURCE sequence into a TARGET sequence by
reading it left to right.  Every step is one of:

    copy        source[i] == target[j], keep it           (cost 0)
    add         emit target[j], consume nothing           (cost 1)
    del         consume source[i], emit nothing           (cost 1)
    sub         consume source[i], emit target[j] ≠ it    (cost 1)
    trans       consume source[i:i+2], emit the swapped
                pair target[j:j+2]                        (cost 1)

Transpositions are only produced by the Damerau engine.

POSITIONS
    Every operation records where it happens in the ORIGINAL inputs:
        source_index = number of source symbols consumed before it
        target_index = number of target symbols produced before it
    So an insert carries no source symbol and a delete no target
    symbol, and replaying a script can check every index against a
    cursor (see `patch`).


§2  SCRIPTS WITH STRUCTURAL SHARING
───────────────────────────────────

The matrix engines keep, for every table cell, the script that
reaches it.  Each cell's script is its predecessor's script plus one
operation, so cells share their prefixes through an immutable linked
list (`ScriptNode`) instead of copying a growing list per cell:

    (start) ◄── del ◄── sub ◄── copy       ← cell (2, 2)
                         ▲
                         └──── add         ← cell (1, 2)

Appending is O(1); unwinding to a tuple is O(length) and iterative.


§3  COSTS
─────────

    CostConfig()                              → unit costs
    CostConfig(insert=2, delete=2)            → overrides
    CostConfig.from_mapping({"trans": 0})     → original tag names

Costs must be non-negative numbers.  `math.inf` is allowed and simply
disables an operation.  An all-zero configuration is legal; every
distance is then 0.
"""

import math
import time
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence


# Largest (n+1)·(m+1) table the full-matrix engine agrees to allocate.
DEFAULT_MAX_CELLS = 25_000_000


# ═══════════════════════════════════════════════════════════════════
#  ERRORS
# ═══════════════════════════════════════════════════════════════════

class SeqDistError(Exception):
    """Base class for every error raised by seqdist."""


class InvalidCostError(SeqDistError, ValueError):
    """A cost configuration entry is negative, not a number, or unknown."""


class ResourceLimitError(SeqDistError, MemoryError):
    """The inputs are too large for the engine's memory model."""


class BacktrackError(SeqDistError, RuntimeError):
    """An engine's own bookkeeping is inconsistent (a bug, not bad input)."""


class PatchError(SeqDistError, ValueError):
    """A script does not describe a transformation of the given source."""


# ═══════════════════════════════════════════════════════════════════
#  OPERATIONS
# ═══════════════════════════════════════════════════════════════════

class EditKind(Enum):
    """Kinds of edit operations.  Values are the short script tags."""
    COPY = "copy"
    INSERT = "add"
    DELETE = "del"
    SUBSTITUTE = "sub"
    TRANSPOSE = "trans"


@dataclass(frozen=True, slots=True)
class EditOp:
    """A single step of an edit script."""
    kind: EditKind
    source_index: int
    source_symbol: Any
    target_index: int
    target_symbol: Any

    @property
    def consumed(self) -> int:
        """Number of source symbols this step reads."""
        if self.kind is EditKind.INSERT:
            return 0
        if self.kind is EditKind.TRANSPOSE:
            return 2
        return 1

    @property
    def produced(self) -> int:
        """Number of target symbols this step writes."""
        if self.kind is EditKind.DELETE:
            return 0
        if self.kind is EditKind.TRANSPOSE:
            return 2
        return 1

    def __repr__(self) -> str:
        return (f"EditOp({self.kind.value}, {self.source_index}:{self.source_symbol!r}"
                f" -> {self.target_index}:{self.target_symbol!r})")


EditScript = tuple[EditOp, ...]


def make_op(kind: EditKind, source: Sequence, target: Sequence,
            i: int, j: int) -> EditOp:
    """
    Build the operation that enters table cell (i, j).

    (i, j) is the cell AFTER the step, i.e. i source symbols consumed
    and j target symbols produced, so the predecessor cell is
        copy/sub  (i-1, j-1)      del    (i-1, j)
        add       (i, j-1)        trans  (i-2, j-2)
    """
    if kind is EditKind.DELETE:
        return EditOp(kind, i - 1, source[i - 1], j, None)
    if kind is EditKind.INSERT:
        return EditOp(kind, i, None, j - 1, target[j - 1])
    if kind is EditKind.TRANSPOSE:
        return EditOp(kind, i - 2, source[i - 2:i], j - 2, target[j - 2:j])
    return EditOp(kind, i - 1, source[i - 1], j - 1, target[j - 1])


# ═══════════════════════════════════════════════════════════════════
#  PERSISTENT SCRIPTS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class ScriptNode:
    """
    Last operation of a script plus a link to the script before it.

    `None` stands for the empty script, so a chain always ends there.
    """
    op: EditOp
    prev: Optional["ScriptNode"]
    length: int

    @staticmethod
    def extend(node: Optional["ScriptNode"], op: EditOp) -> "ScriptNode":
        """Return a new chain: `node`'s script followed by `op`."""
        return ScriptNode(op, node, 1 if node is None else node.length + 1)

    def to_script(self) -> EditScript:
        ops = [None] * self.length
        node = self
        while node is not None:
            ops[node.length - 1] = node.op
            node = node.prev
        return tuple(ops)


def unwind(node: Optional[ScriptNode]) -> EditScript:
    """Script held by a chain, oldest operation first."""
    return () if node is None else node.to_script()


# ═══════════════════════════════════════════════════════════════════
#  COSTS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CostConfig:
    """Non-negative cost of each operation kind."""
    copy: float = 0
    insert: float = 1
    delete: float = 1
    substitute: float = 1
    transpose: float = 1

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            # bool is an int subclass, but True is not a cost
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidCostError(
                    f"cost of {f.name!r} must be a number, got {value!r}")
            if math.isnan(value) or value < 0:
                raise InvalidCostError(
                    f"cost of {f.name!r} must be non-negative, got {value!r}")

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[Any, float]]) -> "CostConfig":
        """
        Build a configuration from a partial mapping.

        Keys may be `EditKind` members, their tags ("add", "trans") or
        field names ("insert", "transpose").  Missing keys keep their
        defaults; `None` gives the default configuration.
        """
        if mapping is None:
            return cls()
        overrides: dict[str, float] = {}
        for key, value in mapping.items():
            name = _COST_FIELDS.get(key)
            if name is None:
                raise InvalidCostError(f"unknown cost key: {key!r}")
            overrides[name] = value
        return cls(**overrides)

    def cost(self, kind: EditKind) -> float:
        return getattr(self, _COST_FIELDS[kind])


_COST_FIELDS: dict[Any, str] = {
    EditKind.COPY: "copy",
    EditKind.INSERT: "insert",
    EditKind.DELETE: "delete",
    EditKind.SUBSTITUTE: "substitute",
    EditKind.TRANSPOSE: "transpose",
}
_COST_FIELDS.update({kind.value: name for kind, name in list(_COST_FIELDS.items())})
_COST_FIELDS.update({name: name for name in list(_COST_FIELDS.values())})

UNIT_COSTS = CostConfig()


def resolve_costs(costs: Any) -> CostConfig:
    """Accept a `CostConfig`, a partial mapping, or `None`."""
    if isinstance(costs, CostConfig):
        return costs
    return CostConfig.from_mapping(costs)


# ═══════════════════════════════════════════════════════════════════
#  RESULTS
# ═══════════════════════════════════════════════════════════════════

@dataclass
class EditResult:
    """What every engine returns."""
    distance: float
    script: Optional[EditScript]
    elapsed: float
    engine: str = ""

    def __repr__(self) -> str:
        ops = "-" if self.script is None else f"{len(self.script)} ops"
        return (f"EditResult({self.engine or '?'}: distance={self.distance}, "
                f"{ops}, {self.elapsed * 1000:.3f}ms)")


def timed(engine: str, compute: Callable[[], tuple[float, Optional[EditScript]]]) -> EditResult:
    """Run `compute` and wrap its (distance, script) with the wall-clock time."""
    t0 = time.perf_counter()
    dist, script = compute()
    return EditResult(dist, script, time.perf_counter() - t0, engine)


def script_cost(script: EditScript, costs: Any = None) -> float:
    """Total cost of a script under `costs` (unit costs by default)."""
    config = resolve_costs(costs)
    return sum(config.cost(op.kind) for op in script)


# ═══════════════════════════════════════════════════════════════════
#  PATCH (apply edit script)
# ═══════════════════════════════════════════════════════════════════

def patch(source: Sequence, script: EditScript):
    """
    Apply an edit script to `source` and return the result.

    This is the inverse of every engine:
        patch(a, engine(a, b).script) == b

    Returns a `str` when `source` is a `str`, otherwise a `list`.
    Raises `PatchError` if an operation's positions or source symbols
    disagree with what has been consumed and produced so far, or if the
    script does not consume the whole source.
    """
    out: list = []
    cursor = 0

    for step, op in enumerate(script):
        if op.source_index != cursor or op.target_index != len(out):
            raise PatchError(
                f"step {step} ({op!r}) expected at source {cursor}, "
                f"target {len(out)}")

        if op.kind is EditKind.INSERT:
            out.append(op.target_symbol)
            continue

        if op.kind is EditKind.TRANSPOSE:
            pair = source[cursor:cursor + 2]
            if len(pair) != 2 or pair != op.source_symbol:
                raise PatchError(f"step {step} ({op!r}) does not match source {pair!r}")
            out.extend(op.target_symbol)
            cursor += 2
            continue

        if cursor >= len(source) or source[cursor] != op.source_symbol:
            raise PatchError(f"step {step} ({op!r}) runs past or disagrees with source")
        if op.kind is EditKind.COPY:
            out.append(op.source_symbol)
        elif op.kind is EditKind.SUBSTITUTE:
            out.append(op.target_symbol)
        elif op.kind is not EditKind.DELETE:
            raise PatchError(f"step {step}: unknown operation kind {op.kind!r}")
        cursor += 1

    if cursor != len(source):
        raise PatchError(f"script consumed {cursor} of {len(source)} source symbols")

    if isinstance(source, str):
        return "".join(out)
    return out

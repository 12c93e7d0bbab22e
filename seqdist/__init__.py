"""
Sequence Edit Distance (seqdist)
================================

Edit distance between two sequences, with the minimum-cost EDIT
SCRIPT that realises it, computed four different ways:

    wagner_fischer("kitten", "sitting").distance          → 3
    wagner_fischer_rolling("kitten", "sitting").distance  → 3
    allison("kitten", "sitting").distance                 → 3
    damerau("ca", "ac").distance                          → 1  (transpose)

    wagner_fischer  full O(n·m) table; the reference
    ..._rolling     same answer from two columns, O(n) space
    allison         lazy diagonals, O(n·(1 + distance)) time
    damerau         adds adjacent transpositions and custom costs

The three Levenshtein engines return identical scripts.  Every script
replays onto its source:

    patch(a, engine(a, b).script) == b
"""

from seqdist.core import (
    # Types
    EditKind,
    EditOp,
    EditScript,
    EditResult,
    ScriptNode,
    CostConfig,
    UNIT_COSTS,
    # Errors
    SeqDistError,
    InvalidCostError,
    ResourceLimitError,
    BacktrackError,
    PatchError,
    # Scripts
    patch,
    script_cost,
)
from seqdist.matrix import wagner_fischer, wagner_fischer_rolling
from seqdist.lazy import allison
from seqdist.damerau import damerau
from seqdist.formats import (
    op_to_python, op_from_python, script_to_python, script_from_python,
    to_json, from_json, format_op, format_script,
)
from seqdist.harness import ENGINES, EngineReport, compare, recursive, render_reports

__version__ = "0.1.0"
__all__ = [
    "EditKind", "EditOp", "EditScript", "EditResult", "ScriptNode",
    "CostConfig", "UNIT_COSTS",
    "SeqDistError", "InvalidCostError", "ResourceLimitError",
    "BacktrackError", "PatchError",
    "patch", "script_cost",
    "wagner_fischer", "wagner_fischer_rolling", "allison", "damerau",
    "op_to_python", "op_from_python", "script_to_python", "script_from_python",
    "to_json", "from_json", "format_op", "format_script",
    "ENGINES", "EngineReport", "compare", "recursive", "render_reports",
]

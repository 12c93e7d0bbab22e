"""
seqdist.matrix — Wagner–Fischer edit distance
==============================================

Two renditions of the classical O(n·m) dynamic program over unit
costs (copy 0, add/del/sub 1):

    D[i][0] = i                      D[0][j] = j
    D[i][j] = D[i-1][j-1]                      if a[i-1] == b[j-1]
            = 1 + min(D[i-1][j],               # del
                      D[i][j-1],               # add
                      D[i-1][j-1])             # sub
                                               otherwise

TIE-BREAK
    When several cases reach the minimum the FIRST one in the order
    del, add, sub wins, both for the value stored and for the
    operation appended to the cell's script.  Both engines (and the
    backtracking in `seqdist.lazy`) follow the same order, so they
    return identical scripts.

`wagner_fischer` keeps the whole table, `wagner_fischer_rolling`
only the previous and current column.  Every cell holds a
`ScriptNode`, so scripts share prefixes rather than being copied.
"""

import logging
from typing import Optional, Sequence

from .core import (
    DEFAULT_MAX_CELLS,
    EditKind,
    EditResult,
    ResourceLimitError,
    ScriptNode,
    make_op,
    timed,
    unwind,
)

logger = logging.getLogger(__name__)

_COPY = EditKind.COPY
_INSERT = EditKind.INSERT
_DELETE = EditKind.DELETE
_SUBSTITUTE = EditKind.SUBSTITUTE


# ═══════════════════════════════════════════════════════════════════
#  FULL MATRIX
# ═══════════════════════════════════════════════════════════════════

def wagner_fischer(source: Sequence, target: Sequence,
                   max_cells: int = DEFAULT_MAX_CELLS) -> EditResult:
    """
    Edit distance and script using the complete (n+1)×(m+1) table.

    Raises `ResourceLimitError` when the table would have more than
    `max_cells` cells or the interpreter runs out of memory building it.
    """
    n, m = len(source), len(target)
    cells = (n + 1) * (m + 1)
    if cells > max_cells:
        raise ResourceLimitError(
            f"full matrix for {n}x{m} inputs needs {cells} cells, "
            f"limit is {max_cells}")

    def compute():
        try:
            return _full_matrix(source, target)
        except MemoryError as exc:
            raise ResourceLimitError(
                f"out of memory filling the {n}x{m} distance matrix") from exc

    result = timed("wagner_fischer", compute)
    logger.debug("wagner_fischer: n=%d m=%d distance=%s in %.3fms",
                 n, m, result.distance, result.elapsed * 1000)
    return result


def _full_matrix(a: Sequence, b: Sequence):
    n, m = len(a), len(b)
    dist = [[0] * (m + 1) for _ in range(n + 1)]
    script: list[list[Optional[ScriptNode]]] = [[None] * (m + 1) for _ in range(n + 1)]

    # First column and row: comparison with an empty prefix
    for i in range(1, n + 1):
        dist[i][0] = i
        script[i][0] = ScriptNode.extend(script[i - 1][0], make_op(_DELETE, a, b, i, 0))
    for j in range(1, m + 1):
        dist[0][j] = j
        script[0][j] = ScriptNode.extend(script[0][j - 1], make_op(_INSERT, a, b, 0, j))

    for j in range(1, m + 1):
        for i in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dist[i][j] = dist[i - 1][j - 1]
                script[i][j] = ScriptNode.extend(
                    script[i - 1][j - 1], make_op(_COPY, a, b, i, j))
                continue

            deleted = dist[i - 1][j] + 1
            inserted = dist[i][j - 1] + 1
            substituted = dist[i - 1][j - 1] + 1
            best = min(deleted, inserted, substituted)
            dist[i][j] = best

            if best == deleted:
                prev, kind = script[i - 1][j], _DELETE
            elif best == inserted:
                prev, kind = script[i][j - 1], _INSERT
            else:
                prev, kind = script[i - 1][j - 1], _SUBSTITUTE
            script[i][j] = ScriptNode.extend(prev, make_op(kind, a, b, i, j))

    return dist[n][m], unwind(script[n][m])


# ═══════════════════════════════════════════════════════════════════
#  ROLLING COLUMNS
# ═══════════════════════════════════════════════════════════════════

def wagner_fischer_rolling(source: Sequence, target: Sequence) -> EditResult:
    """
    Same result as `wagner_fischer`, keeping only two table columns.

    Space is O(n) for distances.  Scripts still share prefixes with
    cells of earlier columns, so only the chains reachable from the
    live columns stay in memory.
    """
    result = timed("wagner_fischer_rolling", lambda: _rolling(source, target))
    logger.debug("wagner_fischer_rolling: n=%d m=%d distance=%s in %.3fms",
                 len(source), len(target), result.distance, result.elapsed * 1000)
    return result


def _rolling(a: Sequence, b: Sequence):
    n, m = len(a), len(b)

    # Column j = 0: delete every source prefix
    curr = list(range(n + 1))
    curr_script: list[Optional[ScriptNode]] = [None] * (n + 1)
    for i in range(1, n + 1):
        curr_script[i] = ScriptNode.extend(curr_script[i - 1], make_op(_DELETE, a, b, i, 0))

    prev = [0] * (n + 1)
    prev_script: list[Optional[ScriptNode]] = [None] * (n + 1)

    for j in range(1, m + 1):
        # The finished column becomes `prev`; the stale one is
        # overwritten top to bottom, and row i only reads rows < i of it.
        prev, curr = curr, prev
        prev_script, curr_script = curr_script, prev_script

        curr[0] = j
        curr_script[0] = ScriptNode.extend(prev_script[0], make_op(_INSERT, a, b, 0, j))

        for i in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                curr[i] = prev[i - 1]
                curr_script[i] = ScriptNode.extend(
                    prev_script[i - 1], make_op(_COPY, a, b, i, j))
                continue

            deleted = curr[i - 1] + 1
            inserted = prev[i] + 1
            substituted = prev[i - 1] + 1
            best = min(deleted, inserted, substituted)
            curr[i] = best

            if best == deleted:
                node, kind = curr_script[i - 1], _DELETE
            elif best == inserted:
                node, kind = prev_script[i], _INSERT
            else:
                node, kind = prev_script[i - 1], _SUBSTITUTE
            curr_script[i] = ScriptNode.extend(node, make_op(kind, a, b, i, j))

    return curr[n], unwind(curr_script[n])

"""
seqdist.lazy — Allison's lazy diagonal edit distance
=====================================================

L. Allison, "Lazy Dynamic-Programming can be Eager", Inf. Proc.
Letters 43(4) pp. 207-212, 1992.

§1  DIAGONALS
─────────────

The Wagner–Fischer table is cut into diagonals, cells (i, j) sharing
the offset  o = j - i.  Along a diagonal the value never decreases
and grows by at most 1 per step, and every value on diagonal o is at
least |o|.  So only diagonals with |o| <= D(a, b) can matter, and
evaluating them lazily costs O(n·(1 + D)) instead of O(n·m).

                 b →
           o=0   o=1   o=2
        a   ╲     ╲     ╲
        ↓ ╲  ╲     ╲     ╲
      o=-1 ╲  ╲     ╲
            ╲  ╲

§2  ORIENTATION
───────────────

Upper diagonals (o >= 0) read rows from a and columns from b.  Lower
diagonals (o < 0) are stored MIRRORED: rows from b, columns from a,
i.e. as the upper half of the transposed table.  With unit costs the
transposed table holds the same values, so every diagonal computes
its k-th element the same way in its own frame:

    frame cell (k, span + k),   span = |o|,   element 0 = span

         nw   n        n  = "north", diagonal one further out, k-1
           ╲  │        w  = "west",  diagonal one further in,  k
       w ── me             (k-1 for the main diagonal, whose west
                            neighbour is the mirrored diagonal -1)

    me = nw                          if rows[k-1] == cols[span+k-1]
       = 1 + w                       if w < nw  (then w <= n, so the
                                                 north value is never
                                                 evaluated)
       = 1 + min(nw, n)              otherwise

The `mirrored` flag decides which real operation a frame move stands
for: moving north is a delete on upper diagonals but an insert on
mirrored ones, and west the other way round.

§3  NO RECURSION
────────────────

Evaluating one element may demand elements on neighbouring diagonals,
which demand their neighbours, and so on.  Demands are kept on an
explicit stack, and backtracking is a loop, so inputs of any length
stay clear of the interpreter's recursion limit.
"""

import logging
from typing import Optional, Sequence

from .core import (
    BacktrackError,
    EditKind,
    EditOp,
    EditResult,
    make_op,
    timed,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  DIAGONALS
# ═══════════════════════════════════════════════════════════════════

class _Diagonal:
    """Lazily grown list of table values along one diagonal."""
    __slots__ = ("offset", "span", "mirrored", "rows", "cols", "elements")

    def __init__(self, source: Sequence, target: Sequence, offset: int):
        self.offset = offset
        self.span = abs(offset)
        self.mirrored = offset < 0
        if self.mirrored:
            self.rows, self.cols = target, source
        else:
            self.rows, self.cols = source, target
        self.elements = [self.span]

    def cell(self, k: int) -> tuple[int, int]:
        """Real (i, j) table coordinates of element k."""
        if self.mirrored:
            return self.span + k, k
        return k, self.span + k

    def matches(self, k: int) -> bool:
        """Whether element k is reached by copying a symbol."""
        return self.rows[k - 1] == self.cols[self.span + k - 1]

    def north_kind(self) -> EditKind:
        return EditKind.INSERT if self.mirrored else EditKind.DELETE

    def west_kind(self) -> EditKind:
        return EditKind.DELETE if self.mirrored else EditKind.INSERT

    def __repr__(self) -> str:
        side = "mirrored" if self.mirrored else "upper"
        return f"_Diagonal(offset={self.offset}, {side}, {len(self.elements)} computed)"


class _DiagonalArena:
    """
    All diagonals of one computation, indexed by offset.

    Diagonals are created on demand and always form a contiguous range
    of offsets around 0.
    """

    def __init__(self, source: Sequence, target: Sequence):
        self.source = source
        self.target = target
        self.diagonals: dict[int, _Diagonal] = {0: _Diagonal(source, target, 0)}

    def diagonal(self, offset: int) -> _Diagonal:
        diag = self.diagonals.get(offset)
        if diag is None:
            # walk out from the main diagonal, creating the missing ones
            step = 1 if offset > 0 else -1
            for o in range(step, offset + step, step):
                if o not in self.diagonals:
                    self.diagonals[o] = _Diagonal(self.source, self.target, o)
            diag = self.diagonals[offset]
        return diag

    # Neighbour positions: (offset, element index), without creating anything

    @staticmethod
    def west_of(diag: _Diagonal, k: int) -> tuple[int, int]:
        if diag.offset == 0:
            return -1, k - 1
        return (diag.offset + 1 if diag.mirrored else diag.offset - 1), k

    @staticmethod
    def north_of(diag: _Diagonal, k: int) -> tuple[int, int]:
        return (diag.offset - 1 if diag.mirrored else diag.offset + 1), k - 1

    def value(self, diag: _Diagonal, k: int) -> int:
        if k >= len(diag.elements):
            self._force(diag, k)
        return diag.elements[k]

    def _force(self, diag: _Diagonal, k: int) -> None:
        """Grow `diag` up to element k, and whatever that depends on."""
        pending = [(diag, k)]
        while pending:
            d, wanted = pending[-1]
            done = len(d.elements)
            if wanted < done:
                pending.pop()
                continue

            nw = d.elements[done - 1]
            if d.matches(done):
                d.elements.append(nw)
                continue

            offset, wk = self.west_of(d, done)
            west = self.diagonal(offset)
            if wk >= len(west.elements):
                pending.append((west, wk))
                continue
            w = west.elements[wk]
            if w < nw:
                d.elements.append(1 + w)
                continue

            offset, nk = self.north_of(d, done)
            north = self.diagonal(offset)
            if nk >= len(north.elements):
                pending.append((north, nk))
                continue
            d.elements.append(1 + min(nw, north.elements[nk]))

    def size(self) -> int:
        """Number of elements materialised so far."""
        return sum(len(d.elements) for d in self.diagonals.values())


# ═══════════════════════════════════════════════════════════════════
#  BACKTRACKING
# ═══════════════════════════════════════════════════════════════════

def _last_step(arena: _DiagonalArena, diag: _Diagonal,
               k: int) -> tuple[Optional[EditKind], Optional[_Diagonal], int]:
    """
    The operation that produced element k of `diag`, and where it came from.

    Returns (None, None, 0) at the top-left cell.  Uses the same
    del, add, sub preference as the matrix engines, translated into
    frame moves through the diagonal's orientation.
    """
    if k == 0:
        if diag.offset == 0:
            return None, None, 0
        # first row or column of the real table: one step along it
        offset, wk = arena.west_of(diag, 0)
        return diag.west_kind(), arena.diagonal(offset), wk

    if diag.matches(k):
        return EditKind.COPY, diag, k - 1

    me = arena.value(diag, k)
    if diag.mirrored:
        moves = ((EditKind.DELETE, arena.west_of(diag, k)),
                 (EditKind.INSERT, arena.north_of(diag, k)))
    else:
        moves = ((EditKind.DELETE, arena.north_of(diag, k)),
                 (EditKind.INSERT, arena.west_of(diag, k)))

    for kind, (offset, index) in moves:
        # values on a diagonal are >= its span
        if abs(offset) + 1 > me:
            continue
        neighbour = arena.diagonal(offset)
        if arena.value(neighbour, index) + 1 == me:
            return kind, neighbour, index

    nw = arena.value(diag, k - 1)
    if nw + 1 == me:
        return EditKind.SUBSTITUTE, diag, k - 1

    raise BacktrackError(
        f"no predecessor explains element {k} = {me} on diagonal "
        f"{diag.offset} (cell {diag.cell(k)}, diagonal predecessor {nw})")


def _backtrack(arena: _DiagonalArena, diag: _Diagonal, k: int) -> tuple[EditOp, ...]:
    a, b = arena.source, arena.target
    ops: list[EditOp] = []
    while True:
        kind, prev_diag, prev_k = _last_step(arena, diag, k)
        if kind is None:
            break
        i, j = diag.cell(k)
        ops.append(make_op(kind, a, b, i, j))
        diag, k = prev_diag, prev_k

    # collected from the last operation back to the first
    ops.reverse()
    return tuple(ops)


# ═══════════════════════════════════════════════════════════════════
#  ENGINE
# ═══════════════════════════════════════════════════════════════════

def allison(source: Sequence, target: Sequence) -> EditResult:
    """
    Edit distance and script in O(n·(1 + distance)) time.

    Returns the same distance and script as `wagner_fischer`.
    Raises `BacktrackError` if the lazy bookkeeping is ever
    inconsistent.
    """
    n, m = len(source), len(target)
    arena = _DiagonalArena(source, target)

    def compute():
        # the bottom-right cell (n, m) is element min(n, m) of diagonal m - n
        diag = arena.diagonal(m - n)
        k = min(n, m)
        dist = arena.value(diag, k)
        return dist, _backtrack(arena, diag, k)

    result = timed("allison", compute)
    logger.debug("allison: n=%d m=%d distance=%s, %d diagonals, %d elements in %.3fms",
                 n, m, result.distance, len(arena.diagonals), arena.size(),
                 result.elapsed * 1000)
    return result

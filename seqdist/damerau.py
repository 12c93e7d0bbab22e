"""
seqdist.damerau — Damerau–Levenshtein distance with custom costs
================================================================

Levenshtein distance plus TRANSPOSITION of two adjacent symbols
("ca" → "ac" in one step), computed column by column like
`wagner_fischer_rolling` but with a third column kept, because a
transposition reaches back two rows AND two columns:

      j-2     j-1      j
    ┌───────┬───────┬───────┐
    │ before│       │       │  i-2
    ├───────┼───────┼───────┤
    │       │  prev │ curr  │  i-1
    ├───────┼───────┼───────┤
    │       │  prev │ curr  │  i
    └───────┴───────┴───────┘

    D[i][j] = min( D[i-1][j]   + del,
                   D[i][j-1]   + add,
                   D[i-1][j-1] + (copy if a[i-1] == b[j-1] else sub) )
    then, only if a[i-1] == b[j-2] and a[i-2] == b[j-1]:
    D[i][j] = D[i-2][j-2] + trans      when that is STRICTLY smaller

The first three cases are tried in that order and the first one
reaching the minimum wins.  Costs come from a `CostConfig`
(unit costs by default); the first column and row accumulate the
configured delete and insert costs.
"""

import logging
from typing import Any, Optional, Sequence

from .core import (
    CostConfig,
    EditKind,
    EditResult,
    ScriptNode,
    make_op,
    resolve_costs,
    timed,
    unwind,
)

logger = logging.getLogger(__name__)


def damerau(source: Sequence, target: Sequence, costs: Any = None) -> EditResult:
    """
    Damerau–Levenshtein distance and script.

    `costs` may be a `CostConfig`, a partial mapping of costs (see
    `CostConfig.from_mapping`) or `None` for unit costs.  Invalid
    costs raise `InvalidCostError` before any work is done.
    """
    config = resolve_costs(costs)
    result = timed("damerau", lambda: _Damerau(config).compute(source, target))
    logger.debug("damerau: n=%d m=%d distance=%s in %.3fms (%r)",
                 len(source), len(target), result.distance,
                 result.elapsed * 1000, config)
    return result


class _Damerau:
    """Three rolling columns of distances and scripts for one call."""

    def __init__(self, costs: CostConfig):
        self.costs = costs

    def compute(self, a: Sequence, b: Sequence):
        n, m = len(a), len(b)
        c = self.costs

        # Columns j-2, j-1 and j.  Column j = 0 deletes every prefix.
        self.before = [0] * (n + 1)
        self.prev = [0] * (n + 1)
        self.curr = [0] * (n + 1)
        self.before_script: list[Optional[ScriptNode]] = [None] * (n + 1)
        self.prev_script: list[Optional[ScriptNode]] = [None] * (n + 1)
        self.curr_script: list[Optional[ScriptNode]] = [None] * (n + 1)
        for i in range(1, n + 1):
            self.curr[i] = self.curr[i - 1] + c.delete
            self.curr_script[i] = ScriptNode.extend(
                self.curr_script[i - 1], make_op(EditKind.DELETE, a, b, i, 0))

        for j in range(1, m + 1):
            self._shift(a, b, j)
            for i in range(1, n + 1):
                self._add_del_sub(a, b, i, j)
                if i >= 2 and j >= 2 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                    self._transpose(a, b, i, j)

        return self.curr[n], unwind(self.curr_script[n])

    def _shift(self, a: Sequence, b: Sequence, j: int) -> None:
        """Rotate the columns and start column j with its first row."""
        self.before, self.prev, self.curr = self.prev, self.curr, self.before
        self.before_script, self.prev_script, self.curr_script = (
            self.prev_script, self.curr_script, self.before_script)

        self.curr[0] = self.prev[0] + self.costs.insert
        self.curr_script[0] = ScriptNode.extend(
            self.prev_script[0], make_op(EditKind.INSERT, a, b, 0, j))

    def _add_del_sub(self, a: Sequence, b: Sequence, i: int, j: int) -> None:
        c = self.costs
        if a[i - 1] == b[j - 1]:
            diagonal_kind, diagonal_cost = EditKind.COPY, c.copy
        else:
            diagonal_kind, diagonal_cost = EditKind.SUBSTITUTE, c.substitute

        cases = (
            (self.curr[i - 1] + c.delete, EditKind.DELETE, self.curr_script[i - 1]),
            (self.prev[i] + c.insert, EditKind.INSERT, self.prev_script[i]),
            (self.prev[i - 1] + diagonal_cost, diagonal_kind, self.prev_script[i - 1]),
        )
        best = min(cost for cost, _, _ in cases)
        for cost, kind, node in cases:
            if cost == best:
                self.curr[i] = cost
                self.curr_script[i] = ScriptNode.extend(node, make_op(kind, a, b, i, j))
                return

    def _transpose(self, a: Sequence, b: Sequence, i: int, j: int) -> None:
        cost = self.before[i - 2] + self.costs.transpose
        if cost < self.curr[i]:
            self.curr[i] = cost
            self.curr_script[i] = ScriptNode.extend(
                self.before_script[i - 2], make_op(EditKind.TRANSPOSE, a, b, i, j))

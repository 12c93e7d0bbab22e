"""
seqdist.harness — Run every engine on the same pair and compare.

Besides the four real engines this module holds the naive recursive
definition of edit distance.  It is exponential and only there as a
reference, so `compare` skips it unless

    len(source) + len(target) < NAIVE_LENGTH_LIMIT
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from .core import EditResult, timed
from .damerau import damerau
from .formats import format_script
from .lazy import allison
from .matrix import wagner_fischer, wagner_fischer_rolling

logger = logging.getLogger(__name__)

NAIVE_LENGTH_LIMIT = 16


# ═══════════════════════════════════════════════════════════════════
#  NAIVE BASELINE
# ═══════════════════════════════════════════════════════════════════

def recursive(source: Sequence, target: Sequence) -> EditResult:
    """
    Edit distance straight from its recursive definition.

    No script is produced (`script` is None).  Runs in exponential
    time; keep inputs short.
    """
    n, m = len(source), len(target)

    def d(i: int, j: int) -> int:
        if i == n:
            return m - j
        if j == m:
            return n - i
        return min(
            (0 if source[i] == target[j] else 1) + d(i + 1, j + 1),
            1 + d(i + 1, j),
            1 + d(i, j + 1),
        )

    return timed("recursive", lambda: (d(0, 0), None))


# ═══════════════════════════════════════════════════════════════════
#  COMPARISON
# ═══════════════════════════════════════════════════════════════════

ENGINES: dict[str, Callable[..., EditResult]] = {
    "Recursive": recursive,
    "Wagner-Fischer": wagner_fischer,
    "Wagner-Fischer rolling": wagner_fischer_rolling,
    "Allison": allison,
    "Damerau": damerau,
}


@dataclass
class EngineReport:
    """One engine's outcome; `result` is None when the engine was skipped."""
    name: str
    result: Optional[EditResult]

    @property
    def skipped(self) -> bool:
        return self.result is None


def compare(source: Sequence, target: Sequence, costs: Any = None) -> list[EngineReport]:
    """
    Run every engine in `ENGINES` on (source, target).

    `costs` goes to the Damerau engine only; the others use unit
    costs.  Each engine builds its own state, so the order of the
    runs does not matter.
    """
    reports = []
    for name, engine in ENGINES.items():
        if engine is recursive and len(source) + len(target) >= NAIVE_LENGTH_LIMIT:
            logger.info("skipping %s: inputs of total length %d are too long",
                        name, len(source) + len(target))
            reports.append(EngineReport(name, None))
            continue
        if engine is damerau:
            result = engine(source, target, costs)
        else:
            result = engine(source, target)
        reports.append(EngineReport(name, result))
    return reports


def render_reports(reports: list[EngineReport], show_script: bool = True) -> str:
    """
    Reports as text, two lines per engine:

        Allison:
                3    0.041ms    sub 0:'k' -> 0:'s', ...
    """
    lines = []
    for report in reports:
        lines.append(f"{report.name}:")
        if report.skipped:
            lines.append("\t\tinput too long for this engine")
            continue
        result = report.result
        if show_script and result.script is not None:
            script = format_script(result.script)
        else:
            script = "-"
        lines.append(f"\t\t{result.distance}\t{result.elapsed * 1000:.3f}ms\t{script}")
    return "\n".join(lines)

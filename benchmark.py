"""
Benchmark: the seqdist engines side by side.

For a fixed list of string pairs this runs every engine (the naive
recursion only where it is feasible) and prints distance, running
time and edit script; then it shows how the three fast engines scale
as inputs grow while their distance stays small.

    python benchmark.py            # reports + scaling table
    python benchmark.py -q         # hide edit scripts
    python benchmark.py -v         # DEBUG logging from the engines
"""

import argparse
import logging
import sys
import os
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from seqdist import __version__
from seqdist.harness import compare, render_reports
from seqdist.lazy import allison
from seqdist.matrix import wagner_fischer, wagner_fischer_rolling

logger = logging.getLogger("benchmark")


# ═══════════════════════════════════════════════════════════════════
#  TEST DATA
# ═══════════════════════════════════════════════════════════════════

STRING_PAIRS = [
    ("kitten", "sitting"),
    ("saturday", "sunday"),
    ("ca", "ac"),
    ("the cat", "teh cta"),
    ("intention", "execution"),
    ("pneumonoultramicroscopicsilicovolcanoconiosis",
     "pseudopseudohypoparathyroidism"),
    ("abcdefghijklmnopqrstuvwxyz", "zyxwvutsrqponmlkjihgfedcba"),
]


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_pairs(show_script: bool):
    """Every engine on every fixed pair."""
    print("=" * 70)
    print("  §1  ALL ENGINES")
    print("=" * 70)
    print()

    for a, b in STRING_PAIRS:
        print(f"  \"{a[:30]}\" → \"{b[:30]}\"")
        reports = compare(a, b)
        print(render_reports(reports, show_script=show_script))

        distances = {r.result.distance for r in reports
                     if not r.skipped and r.name != "Damerau"}
        match = "✓" if len(distances) == 1 else "✗"
        print(f"  {match} Levenshtein engines agree: {sorted(distances)}")
        print()


def benchmark_scaling():
    """Long, nearly equal inputs: where the lazy diagonals pay off."""
    print("=" * 70)
    print("  §2  SCALING (few edits, growing length)")
    print("=" * 70)
    print()

    engines = [
        ("Wagner-Fischer", wagner_fischer),
        ("rolling", wagner_fischer_rolling),
        ("Allison", allison),
    ]
    for n in [100, 500, 1000, 2000]:
        a = ("abcdefghij" * (n // 10 + 1))[:n]
        b = a[:n // 3] + "X" + a[n // 3 + 1:n // 2] + a[n // 2 + 2:] + "YZ"

        row = []
        for name, engine in engines:
            t0 = time.perf_counter()
            d = engine(a, b).distance
            dt = time.perf_counter() - t0
            row.append(f"{name} {dt * 1000:>9.2f}ms")
        print(f"  n={n:>5}  d={d:>3}  " + "  ".join(row))

    print()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare the seqdist engines.")
    parser.add_argument("-q", "--quiet", action="store_true", help="hide edit scripts")
    parser.add_argument("-v", "--verbose", action="store_true", help="DEBUG logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print()
    print("╔══════════════════════════════════════════════════════════════════════╗")
    print("║          SEQUENCE EDIT DISTANCE — BENCHMARK SUITE                    ║")
    print(f"║          seqdist v{__version__:<51}║")
    print("╚══════════════════════════════════════════════════════════════════════╝")
    print()

    benchmark_pairs(show_script=not args.quiet)
    benchmark_scaling()
    logger.info("benchmark finished")


if __name__ == "__main__":
    main()

"""
Stress tests / adversarial evaluation of seqdist.

This script attempts to BREAK the claimed properties:
  1. All Levenshtein engines agree (distance AND script)
  2. Agreement with the naive recursive definition
  3. Symmetry and triangle inequality
  4. Every script replays onto its source
  5. Long inputs and large distances (no recursion limits)
"""

import sys, os, random, time, itertools, math
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from seqdist.core import CostConfig, patch, script_cost
from seqdist.damerau import damerau
from seqdist.harness import recursive
from seqdist.lazy import allison
from seqdist.matrix import wagner_fischer, wagner_fischer_rolling


def test(name, condition, detail=""):
    status = "PASS" if condition else "FAIL"
    print(f"  [{status}] {name}" + (f"  ({detail})" if detail else ""))
    return condition


def random_string(rng, alphabet, max_len):
    return "".join(rng.choice(alphabet) for _ in range(rng.randint(0, max_len)))


NO_TRANSPOSE = CostConfig(transpose=math.inf)


# ═══════════════════════════════════════════════════════════════
#  §1  ENGINE AGREEMENT: random pairs
# ═══════════════════════════════════════════════════════════════

print("=" * 70)
print("  §1  ENGINE AGREEMENT")
print("=" * 70)

random.seed(42)
pairs = [(random_string(random, "abc", 10), random_string(random, "abc", 10))
         for _ in range(2000)]

dist_mismatches = 0
script_mismatches = 0
for s1, s2 in pairs:
    full = wagner_fischer(s1, s2)
    others = [wagner_fischer_rolling(s1, s2), allison(s1, s2)]
    if any(r.distance != full.distance for r in others) or \
            damerau(s1, s2, NO_TRANSPOSE).distance != full.distance:
        dist_mismatches += 1
        if dist_mismatches <= 5:
            print(f"    MISMATCH: d(\"{s1}\", \"{s2}\")")
    if any(r.script != full.script for r in others):
        script_mismatches += 1

test("Distances agree (2000 random pairs, len≤10)",
     dist_mismatches == 0, f"{dist_mismatches} mismatches")
test("Scripts agree between matrix, rolling and lazy engines",
     script_mismatches == 0, f"{script_mismatches} mismatches")


# ═══════════════════════════════════════════════════════════════
#  §2  NAIVE BASELINE
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §2  NAIVE RECURSION")
print("=" * 70)

naive_mismatches = sum(
    1 for s1, s2 in pairs[:300]
    if len(s1) + len(s2) < 14 and recursive(s1, s2).distance != wagner_fischer(s1, s2).distance
)
test("Recursive definition agrees", naive_mismatches == 0,
     f"{naive_mismatches} mismatches")


# ═══════════════════════════════════════════════════════════════
#  §3  METRIC PROPERTIES
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §3  METRIC PROPERTIES")
print("=" * 70)

asym = sum(1 for s1, s2 in pairs[:500]
           if allison(s1, s2).distance != allison(s2, s1).distance)
test("Symmetry (lazy engine)", asym == 0, f"{asym} asymmetric pairs")

words = [random_string(random, "ab", 5) for _ in range(25)]
d = {(x, y): wagner_fischer_rolling(x, y).distance for x in words for y in words}
violations = sum(1 for x, y, z in itertools.product(words, repeat=3)
                 if d[x, z] > d[x, y] + d[y, z])
test("Triangle inequality (25 words, all triples)", violations == 0,
     f"{violations} violations")

costs = CostConfig(insert=2, delete=2, substitute=3, transpose=1)
asym = sum(1 for s1, s2 in pairs[:500]
           if damerau(s1, s2, costs).distance != damerau(s2, s1, costs).distance)
test("Symmetry (Damerau, symmetric custom costs)", asym == 0,
     f"{asym} asymmetric pairs")


# ═══════════════════════════════════════════════════════════════
#  §4  SCRIPT REPLAY
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §4  SCRIPT REPLAY")
print("=" * 70)

failures = 0
for s1, s2 in pairs[:500]:
    for engine in (wagner_fischer, wagner_fischer_rolling, allison, damerau):
        result = engine(s1, s2)
        if patch(s1, result.script) != s2 or script_cost(result.script) != result.distance:
            failures += 1
test("patch(a, script) == b and cost(script) == distance", failures == 0,
     f"{failures} failures")


# ═══════════════════════════════════════════════════════════════
#  §5  LONG INPUTS / PERFORMANCE
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §5  LONG INPUTS (wall-clock)")
print("=" * 70)

for n in [1000, 5000, 10000, 20000]:
    a = "".join(random.choice("acgt") for _ in range(n))
    b = list(a)
    for _ in range(10):
        b[random.randrange(n)] = "n"
    b = "".join(b)
    t0 = time.perf_counter()
    result = allison(a, b)
    dt = time.perf_counter() - t0
    test(f"Allison n={n}: d={result.distance}", patch(a, result.script) == b,
         f"{dt * 1000:.1f}ms")

a, b = "x" * 500, "y" * 5000
t0 = time.perf_counter()
result = allison(a, b)
dt = time.perf_counter() - t0
test("Allison with 4500 diagonals (beyond recursion limit)",
     result.distance == 5000 and patch(a, result.script) == b,
     f"{dt * 1000:.1f}ms")


# ═══════════════════════════════════════════════════════════════
#  SUMMARY
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  STRESS TEST SUMMARY")
print("=" * 70)
print("  If you see FAIL above, there's a bug.")
print("  If everything is PASS, the implementation is correct")
print("  for the tested cases (not a proof, but high confidence).")

# tests/utils.py
"""
Small, reusable helpers used across the kpalette test suite.

Functions:
- index_sets(clusters): member indices of each cluster as Python sets.
- assert_partition(clusters, n): every index 0..n-1 in exactly one cluster.
- labels_equal_up_to_perm(y1, y2, K): label vectors equal after relabeling.
- time_block(label, meta=None): context manager that prints wall-clock time.
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence, Set

import numpy as np


def index_sets(clusters: Sequence[Any]) -> List[Set[int]]:
    """Member indices of each cluster, in cluster order."""
    return [set(cluster.indices.tolist()) for cluster in clusters]


def assert_partition(clusters: Sequence[Any], n_points: int) -> None:
    """Assert that cluster membership is a partition of range(n_points)."""
    seen: List[int] = []
    for cluster in clusters:
        seen.extend(cluster.indices.tolist())
    assert len(seen) == n_points, f"Expected {n_points} memberships, got {len(seen)}"
    assert sorted(seen) == list(range(n_points)), "Membership is not a bijection"


def labels_equal_up_to_perm(y1: np.ndarray, y2: np.ndarray, K: int) -> bool:
    """Return True if y2 can be relabeled to equal y1 exactly."""
    y1 = np.asarray(y1)
    y2 = np.asarray(y2)
    for perm in itertools.permutations(range(K)):
        mapping = np.array(perm)
        if np.array_equal(y1, mapping[y2]):
            return True
    return False


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """Print a single timing line with optional metadata as JSON."""
    suffix = f" {json.dumps(meta, sort_keys=True)}" if meta else ""
    print(f"[timing] {label}: {seconds:.4f}s{suffix}")


@contextmanager
def time_block(label: str, meta: Optional[Dict[str, Any]] = None):
    """Context manager that prints the wall-clock time of its body."""
    start = time.perf_counter()
    try:
        yield
    finally:
        print_timing(label, time.perf_counter() - start, **(meta or {}))

# tests/test_kmeans_basic.py
"""
K-means engine behaviour on small, hand-checkable inputs.

Covers:
- degenerate inputs (empty, k >= n, k = 1)
- the two-pair example and membership invariants
- lowest-index tie-breaking and empty-cluster centroid retention
- reproducibility, iteration budget, and input validation
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from kpalette import (
    ConvergenceWarning,
    DistanceMetric,
    EuclideanDistance,
    KMeans,
    SamplingError,
)
from kpalette.utils.metrics import labels_from_clusters

from data_gen import make_blobs
from utils import assert_partition, index_sets


TWO_PAIRS = [[0.0, 0.0], [0.0, 1.0], [10.0, 10.0], [10.0, 11.0]]


@pytest.mark.parametrize("seed", range(10))
def test_two_pairs_example(seed, torch_device):
    km = KMeans(n_clusters=2, max_iter=50, tol=1e-4, random_state=seed, device=torch_device)
    clusters = km.fit(TWO_PAIRS)

    assert len(clusters) == 2
    by_members = {frozenset(s): c for s, c in zip(index_sets(clusters), clusters)}
    assert set(by_members) == {frozenset({0, 1}), frozenset({2, 3})}

    assert torch.allclose(by_members[frozenset({0, 1})].centroid(), torch.tensor([0.0, 0.5]))
    assert torch.allclose(by_members[frozenset({2, 3})].centroid(), torch.tensor([10.0, 10.5]))


@pytest.mark.parametrize("empty", [[], np.empty((0, 3)), torch.empty(0, 2)])
def test_empty_input_gives_empty_result(empty, torch_device):
    km = KMeans(n_clusters=3, random_state=0, device=torch_device)
    assert km.fit(empty) == []

    result = km.fit_detailed(empty)
    assert result.clusters == []
    assert result.labels.numel() == 0


@pytest.mark.parametrize("k", [3, 4, 100])
def test_k_at_least_n_gives_singletons(k, torch_device):
    X = torch.tensor([[1.0, 2.0], [1.0, 2.0], [5.0, 0.0]])
    km = KMeans(n_clusters=k, random_state=0, device=torch_device)
    result = km.fit_detailed(X)

    assert len(result.clusters) == 3
    for i, cluster in enumerate(result.clusters):
        assert cluster.indices.tolist() == [i]
        assert torch.equal(cluster.centroid(), X[i])
    assert result.labels.tolist() == [0, 1, 2]
    assert result.n_iter == 0
    assert result.converged


def test_single_cluster_holds_everything(torch_device):
    X, _ = make_blobs([[0, 0, 0], [4, 4, 4]], n_per=30, seed=0)
    km = KMeans(n_clusters=1, random_state=0, device=torch_device)
    clusters = km.fit(X)

    assert len(clusters) == 1
    assert sorted(clusters[0].indices.tolist()) == list(range(len(X)))
    assert torch.allclose(clusters[0].centroid(), torch.from_numpy(X).mean(dim=0), atol=1e-5)


@pytest.mark.parametrize("k", [2, 3, 5, 8])
def test_membership_is_a_partition(k, rng, torch_device):
    X = rng.normal(size=(200, 3)).astype(np.float32)
    km = KMeans(n_clusters=k, random_state=11, device=torch_device)
    result = km.fit_detailed(X)

    assert len(result.clusters) == k
    assert_partition(result.clusters, len(X))
    assert torch.equal(labels_from_clusters(result.clusters, len(X)), result.labels)
    assert sum(result.sizes()) == len(X)


def test_ties_go_to_lowest_centroid_index(torch_device):
    X = [[0.0, 0.0], [2.0, 0.0], [1.0, 0.0]]
    km = KMeans(n_clusters=2, max_iter=1, init=[[0.0, 0.0], [2.0, 0.0]], device=torch_device)
    # Index 2 is equidistant from both centroids
    clusters = km.fit(X)

    assert index_sets(clusters) == [{0, 2}, {1}]


def test_empty_cluster_keeps_previous_centroid(torch_device):
    X = [[0.0, 0.0], [1.0, 0.0], [10.0, 0.0]]
    km = KMeans(n_clusters=2, max_iter=10, tol=1e-6,
                init=[[0.0, 0.0], [100.0, 100.0]], device=torch_device)
    result = km.fit_detailed(X)

    assert index_sets(result.clusters) == [{0, 1, 2}, set()]
    assert result.clusters[1].is_empty
    assert result.centroids[1].tolist() == [100.0, 100.0]
    assert torch.allclose(result.centroids[0], torch.tensor([11.0 / 3.0, 0.0]))
    assert result.converged
    assert result.n_iter == 2


def test_same_seed_gives_same_assignments(rng, torch_device):
    X = rng.uniform(0, 255, size=(300, 3)).astype(np.float32)

    km = KMeans(n_clusters=6, random_state=123, device=torch_device)
    first = km.fit_predict(X)
    second = km.fit_predict(X)
    other_engine = KMeans(n_clusters=6, random_state=123, device=torch_device).fit_predict(X)

    assert torch.equal(first, second)
    assert torch.equal(first, other_engine)


def test_input_formats_agree(torch_device):
    X, _ = make_blobs([[0, 0], [3, 3], [0, 3]], n_per=20, seed=4)
    km = KMeans(n_clusters=3, random_state=5, device=torch_device)

    from_numpy = km.fit_predict(X)
    from_tensor = km.fit_predict(torch.from_numpy(X))
    from_list = km.fit_predict(X.tolist())

    assert torch.equal(from_numpy, from_tensor)
    assert torch.equal(from_numpy, from_list)


def test_iteration_budget_is_respected(rng, torch_device):
    X = rng.normal(size=(150, 2)).astype(np.float32)
    for max_iter in (1, 2, 5):
        result = KMeans(n_clusters=4, max_iter=max_iter, tol=1e-12,
                        random_state=0, device=torch_device).fit_detailed(X)
        assert 1 <= result.n_iter <= max_iter
        assert len(result.shift_history) == result.n_iter
        assert_partition(result.clusters, len(X))


def test_unconverged_run_warns_when_verbose(capsys, torch_device):
    km = KMeans(n_clusters=2, max_iter=1, init=[[0.0, 0.0], [0.0, 1.0]],
                verbose=1, device=torch_device)
    with pytest.warns(ConvergenceWarning):
        result = km.fit_detailed(TWO_PAIRS)

    assert not result.converged
    assert result.n_iter == 1
    out = capsys.readouterr().out
    assert "Initializing 2 clusters" in out
    assert "Iteration   0" in out


def test_converged_run_reports_shift(torch_device):
    result = KMeans(n_clusters=2, random_state=0, device=torch_device).fit_detailed(TWO_PAIRS)

    assert result.converged
    assert result.max_shift < 1e-4
    assert result.shift_history[-1] == result.max_shift
    # Within-cluster distances: four points each 0.5 from their centroid
    assert result.inertia == pytest.approx(2.0, abs=1e-5)


class _SwappedEuclidean(DistanceMetric):
    """Euclidean distance evaluated with its arguments swapped."""

    name = "swapped_euclidean"

    def __init__(self):
        self._inner = EuclideanDistance()

    def pairwise(self, points, others):
        return self._inner.pairwise(others, points).T

    def paired(self, points, others):
        return self._inner.paired(others, points)


def test_argument_order_of_metric_does_not_change_assignments(rng, torch_device):
    X = rng.normal(size=(120, 3)).astype(np.float32)

    plain = KMeans(n_clusters=4, random_state=9, device=torch_device).fit_predict(X)
    swapped = KMeans(n_clusters=4, random_state=9, metric=_SwappedEuclidean(),
                     device=torch_device).fit_predict(X)

    assert torch.equal(plain, swapped)


def test_chunked_assignment_matches_full(rng, torch_device):
    X = rng.normal(size=(101, 2)).astype(np.float32)

    full = KMeans(n_clusters=5, random_state=2, device=torch_device).fit_predict(X)
    chunked = KMeans(n_clusters=5, random_state=2, chunk_size=7,
                     device=torch_device).fit_predict(X)

    assert torch.equal(full, chunked)


def test_manhattan_metric_on_example(torch_device):
    clusters = KMeans(n_clusters=2, metric="manhattan", random_state=1,
                      device=torch_device).fit(TWO_PAIRS)
    assert sorted(map(sorted, index_sets(clusters))) == [[0, 1], [2, 3]]


def test_float64_working_precision(torch_device):
    result = KMeans(n_clusters=2, random_state=0, dtype=torch.float64,
                    device=torch_device).fit_detailed(TWO_PAIRS)
    assert result.centroids.dtype == torch.float64
    assert result.clusters[0].centroid().dtype == torch.float64


def test_duplicate_points_fail_seeding(torch_device):
    # Six points but only two distinct positions: a third centroid cannot be drawn
    X = [[1.0, 1.0]] * 3 + [[2.0, 2.0]] * 3
    km = KMeans(n_clusters=3, random_state=0, device=torch_device)
    with pytest.raises(SamplingError):
        km.fit(X)


@pytest.mark.parametrize("bad", [
    [[0.0, 1.0], [2.0]],
    [[0.0, float("nan")], [1.0, 1.0]],
    [1.0, 2.0, 3.0],
    np.zeros((2, 2, 2)),
])
def test_malformed_points_raise(bad, torch_device):
    with pytest.raises(ValueError):
        KMeans(n_clusters=1, device=torch_device).fit(bad)


def test_unsupported_input_type_raises(torch_device):
    with pytest.raises(TypeError):
        KMeans(n_clusters=1, device=torch_device).fit("points")

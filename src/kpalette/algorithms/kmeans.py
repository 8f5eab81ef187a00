"""
K-means clustering engine.

Lloyd's algorithm with k-means++ seeding under a pluggable distance metric.
The engine is immutable once constructed; every call to fit works on its own
random generator, centroids and clusters.
"""

from typing import Optional, List, Dict, Any, Union
import time
import warnings

import numpy as np
import torch
from torch import Tensor

from ..base.data_structures import Cluster, KMeansConfig, FitResult, _is_integer
from ..base.exceptions import ConfigurationError, ConfigurationErrorKind, ConvergenceWarning
from ..base.interfaces import DistanceMetric, InitializationStrategy
from ..assignments.hard import NearestCentroidAssignment
from ..distances import get_metric
from ..initialization import get_initialization
from ..utils.convergence import MaxCentroidShift
from ..utils.metrics import inertia
from ..utils.validation import validate_points, check_random_state


class KMeans:
    """K-means clustering algorithm.

    Partitions points into at most K clusters by alternating nearest-centroid
    assignment and centroid updates until no centroid moves further than
    ``tol``, or until ``max_iter`` iterations have run.

    Parameters
    ----------
    n_clusters : int
        Number of clusters K (>= 1)
    max_iter : int, default=100
        Maximum number of assignment/update iterations (>= 1)
    tol : float, default=1e-4
        Convergence threshold on the largest centroid shift, in the units of
        the metric (> 0)
    random_state : int, torch.Generator or None
        Random source for seeding. The state is captured at construction, so
        every fit of the same engine starts from the same state.
    metric : str or DistanceMetric, default='euclidean'
        'euclidean', 'squared_euclidean', 'manhattan', or a DistanceMetric
    init : str, InitializationStrategy or array-like, default='k-means++'
        Initialization method:
        - 'k-means++' : distance-weighted seeding
        - 'random' : distinct random points
        - array of shape (n_clusters, n_features) : Use as initial centers
    verbose : int, default=0
        Verbosity level (0=silent, 1=progress, 2=detailed)
    device : torch.device, optional
        Device for computation (CPU/GPU)
    dtype : torch.dtype, default=torch.float32
        Floating point type of the working tensors
    chunk_size : int, optional
        Points per block when computing point-to-centroid distances

    Raises
    ------
    ConfigurationError
        If any setting is invalid; see ``ConfigurationError.kind``
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 100,
                 tol: float = 1e-4,
                 random_state: Union[None, int, torch.Generator] = None,
                 metric: Union[str, DistanceMetric] = 'euclidean',
                 init: Union[str, InitializationStrategy, Tensor, np.ndarray, list] = 'k-means++',
                 verbose: int = 0,
                 device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float32,
                 chunk_size: Optional[int] = None):
        """Initialize and validate the K-means engine."""
        self.config = KMeansConfig(n_clusters=n_clusters, max_iter=max_iter, tol=tol)
        self.metric = get_metric(metric)
        self.init = init
        self.initialization_strategy = get_initialization(
            init, self.config.n_clusters, self.metric
        )

        # Snapshot the random source; each fit restores it into a new generator
        self.random_state = random_state
        self._rng_state = check_random_state(random_state).get_state()

        if chunk_size is not None and (not _is_integer(chunk_size) or chunk_size < 1):
            raise ConfigurationError(
                ConfigurationErrorKind.INVALID_CHUNK_SIZE,
                f"chunk_size must be None or a positive integer, got {chunk_size!r}"
            )

        self.verbose = verbose
        self.dtype = dtype
        self.chunk_size = chunk_size

        if device is None:
            self.device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')
        else:
            self.device = torch.device(device)

        self.assignment_strategy = NearestCentroidAssignment(self.metric, chunk_size)

    @property
    def n_clusters(self) -> int:
        return self.config.n_clusters

    @property
    def max_iter(self) -> int:
        return self.config.max_iter

    @property
    def tol(self) -> float:
        return self.config.tol

    def fit(self, X: Union[Tensor, np.ndarray, list]) -> List[Cluster]:
        """Cluster the points.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Points to cluster; all rows share one dimension

        Returns
        -------
        clusters : list of Cluster
            Cluster j holds the indices of the rows assigned to centroid j
        """
        return self.fit_detailed(X).clusters

    def fit_predict(self, X: Union[Tensor, np.ndarray, list]) -> Tensor:
        """Cluster the points and return the label of every row.

        Returns
        -------
        labels : Tensor of shape (n_samples,)
            Cluster labels
        """
        return self.fit_detailed(X).labels

    def fit_detailed(self, X: Union[Tensor, np.ndarray, list]) -> FitResult:
        """Cluster the points and return the full run record.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Points to cluster

        Returns
        -------
        result : FitResult
            Clusters, final centroids, labels and convergence information

        Raises
        ------
        ValueError
            If the points are malformed
        SamplingError
            If k-means++ seeding cannot pick enough distinct centroids
        """
        if _is_empty(X):
            return FitResult(
                clusters=[],
                centroids=torch.empty(0, 0, dtype=self.dtype, device=self.device),
                labels=torch.empty(0, dtype=torch.long, device=self.device),
            )

        X = validate_points(X, dtype=self.dtype, device=self.device)
        n_points, dimension = X.shape

        if self.n_clusters >= n_points:
            return self._singleton_result(X)

        generator = self._make_generator()

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")

        start_time = time.time()
        centroids = self.initialization_strategy.initialize(
            X, self.n_clusters, generator
        ).to(dtype=self.dtype, device=self.device)

        clusters = [Cluster(dimension, self.device, self.dtype)
                    for _ in range(self.n_clusters)]
        convergence_criterion = MaxCentroidShift(self.tol, self.metric)

        converged = False
        n_iter = 0

        # Main optimization loop
        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            # Assignment step
            labels = self.assignment_strategy.compute_assignments(X, centroids)
            self._populate(clusters, X, labels)

            # Update step; empty clusters keep their previous centroid
            new_centroids = centroids.clone()
            for k, cluster in enumerate(clusters):
                if cluster.is_empty:
                    if self.verbose >= 2:
                        print(f"Cluster {k} is empty; keeping its previous centroid")
                    continue
                new_centroids[k] = cluster.centroid()

            n_iter = iteration + 1

            # Check convergence
            converged = convergence_criterion.check({
                'iteration': iteration,
                'previous_centroids': centroids,
                'centroids': new_centroids
            })

            # Logging
            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: max shift = "
                      f"{convergence_criterion.last_shift:.6f} ({iter_time:.3f}s)")

            centroids = new_centroids
            if converged:
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        total_time = time.time() - start_time

        if self.verbose:
            if not converged:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations",
                              ConvergenceWarning)
            print(f"Total fitting time: {total_time:.3f}s")

        return FitResult(
            clusters=clusters,
            centroids=centroids,
            labels=labels,
            n_iter=n_iter,
            converged=converged,
            max_shift=convergence_criterion.last_shift,
            inertia=inertia(clusters, self.metric),
            shift_history=[entry['max_shift'] for entry in convergence_criterion.history]
        )

    def _make_generator(self) -> torch.Generator:
        """Fresh generator restored from the captured random state."""
        generator = torch.Generator()
        generator.set_state(self._rng_state.clone())
        return generator

    def _populate(self, clusters: List[Cluster], X: Tensor, labels: Tensor) -> None:
        """Rebuild cluster membership from labels."""
        for k, cluster in enumerate(clusters):
            cluster.clear()
            indices = torch.nonzero(labels == k).flatten()
            cluster.add_points(indices, X[indices])

    def _singleton_result(self, X: Tensor) -> FitResult:
        """One cluster per point; used when there are no more points than clusters."""
        n_points, dimension = X.shape
        clusters = []
        for index in range(n_points):
            cluster = Cluster(dimension, self.device, self.dtype)
            cluster.add_point(index, X[index])
            clusters.append(cluster)

        return FitResult(
            clusters=clusters,
            centroids=X.clone(),
            labels=torch.arange(n_points, device=self.device),
            n_iter=0,
            converged=True
        )

    def get_params(self) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'tol': self.tol,
            'random_state': self.random_state,
            'metric': self.metric,
            'init': self.init,
            'verbose': self.verbose,
            'device': self.device,
            'dtype': self.dtype,
            'chunk_size': self.chunk_size
        }

    def __repr__(self) -> str:
        return (f"KMeans(n_clusters={self.n_clusters}, max_iter={self.max_iter}, "
                f"tol={self.tol}, metric={self.metric!r})")


def _is_empty(X: Any) -> bool:
    """True for an input holding no points."""
    if isinstance(X, (Tensor, np.ndarray)):
        return X.ndim > 0 and X.shape[0] == 0
    try:
        return len(X) == 0
    except TypeError:
        return False

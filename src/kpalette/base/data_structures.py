"""
Core data structures for the kpalette clustering engine.

This module provides the cluster accumulator that carries membership out of a
run, the validated engine configuration, and the detailed result record.
"""

from typing import Optional, List, Any
from dataclasses import dataclass, field
import math
import numbers

import torch
from torch import Tensor

from .exceptions import ConfigurationError, ConfigurationErrorKind


class Cluster:
    """Accumulator of the points assigned to one centroid.

    Members are stored as (index, point) pairs, where the index refers back to
    the row of the caller's input. The centroid is the coordinate-wise mean of
    the members; it is computed on demand and cached until the membership
    changes. An empty cluster reports a zero centroid instead of raising.
    """

    def __init__(self, dimension: int,
                 device: Optional[torch.device] = None,
                 dtype: torch.dtype = torch.float32):
        """
        Args:
            dimension: Dimension d of the member points
            device: Torch device for tensor allocation
            dtype: Floating point type of the member points
        """
        self._dimension = dimension
        self._device = torch.device('cpu') if device is None else device
        self._dtype = dtype
        self._index_chunks: List[Tensor] = []
        self._point_chunks: List[Tensor] = []
        self._size = 0
        self._centroid: Optional[Tensor] = None

    @property
    def dimension(self) -> int:
        """Dimension of the member points."""
        return self._dimension

    @property
    def device(self) -> torch.device:
        """Device where tensors are stored."""
        return self._device

    def clear(self) -> None:
        """Drop all members."""
        self._index_chunks = []
        self._point_chunks = []
        self._size = 0
        self._centroid = None

    def add_point(self, index: int, point: Tensor) -> None:
        """Append a single member.

        Args:
            index: Row of the point in the caller's input
            point: (d,) coordinates of the point
        """
        point = torch.as_tensor(point, dtype=self._dtype, device=self._device)
        if point.shape != (self._dimension,):
            raise ValueError(f"Expected point of shape ({self._dimension},), "
                             f"got {tuple(point.shape)}")
        self._index_chunks.append(
            torch.tensor([int(index)], dtype=torch.long, device=self._device))
        self._point_chunks.append(point.unsqueeze(0))
        self._size += 1
        self._centroid = None

    def add_points(self, indices: Tensor, points: Tensor) -> None:
        """Append a batch of members.

        Args:
            indices: (m,) rows of the points in the caller's input
            points: (m, d) coordinates of the points
        """
        indices = torch.as_tensor(indices, dtype=torch.long, device=self._device).reshape(-1)
        points = torch.as_tensor(points, dtype=self._dtype, device=self._device)
        if points.dim() != 2 or points.shape[1] != self._dimension:
            raise ValueError(f"Expected points of shape (m, {self._dimension}), "
                             f"got {tuple(points.shape)}")
        if points.shape[0] != indices.shape[0]:
            raise ValueError(f"Got {indices.shape[0]} indices for {points.shape[0]} points")
        if len(indices) == 0:
            return
        self._index_chunks.append(indices)
        self._point_chunks.append(points)
        self._size += len(indices)
        self._centroid = None

    @property
    def indices(self) -> Tensor:
        """(m,) long tensor of member rows, in insertion order."""
        if not self._index_chunks:
            return torch.empty(0, dtype=torch.long, device=self._device)
        if len(self._index_chunks) > 1:
            self._index_chunks = [torch.cat(self._index_chunks)]
        return self._index_chunks[0]

    @property
    def points(self) -> Tensor:
        """(m, d) tensor of member coordinates, in insertion order."""
        if not self._point_chunks:
            return torch.empty(0, self._dimension, dtype=self._dtype, device=self._device)
        if len(self._point_chunks) > 1:
            self._point_chunks = [torch.cat(self._point_chunks)]
        return self._point_chunks[0]

    @property
    def is_empty(self) -> bool:
        """Whether the cluster has no members."""
        return self._size == 0

    def centroid(self) -> Tensor:
        """Coordinate-wise mean of the members (zero vector when empty)."""
        if self._centroid is None:
            if self._size == 0:
                self._centroid = torch.zeros(self._dimension, dtype=self._dtype,
                                             device=self._device)
            else:
                self._centroid = self.points.mean(dim=0)
        return self._centroid

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"Cluster(dimension={self._dimension}, size={self._size})"


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class KMeansConfig:
    """Validated, immutable K-means settings.

    Invalid values fail construction with a ConfigurationError.
    """

    n_clusters: int
    max_iter: int = 100
    tol: float = 1e-4

    def __post_init__(self):
        if not _is_integer(self.n_clusters) or self.n_clusters < 1:
            raise ConfigurationError(
                ConfigurationErrorKind.INVALID_CLUSTER_COUNT,
                f"n_clusters must be a positive integer, got {self.n_clusters!r}"
            )
        if not _is_integer(self.max_iter) or self.max_iter < 1:
            raise ConfigurationError(
                ConfigurationErrorKind.INVALID_MAX_ITERATIONS,
                f"max_iter must be a positive integer, got {self.max_iter!r}"
            )
        if (not isinstance(self.tol, numbers.Real) or isinstance(self.tol, bool)
                or not math.isfinite(self.tol) or self.tol <= 0):
            raise ConfigurationError(
                ConfigurationErrorKind.INVALID_TOLERANCE,
                f"tol must be a finite number greater than zero, got {self.tol!r}"
            )
        # Normalise numpy scalars to plain Python numbers
        object.__setattr__(self, 'n_clusters', int(self.n_clusters))
        object.__setattr__(self, 'max_iter', int(self.max_iter))
        object.__setattr__(self, 'tol', float(self.tol))


@dataclass(frozen=True)
class FitResult:
    """Everything a single K-means run produced."""

    clusters: List[Cluster]
    centroids: Tensor            # (k, d) final working centroids
    labels: Tensor               # (n,) cluster index of every input point
    n_iter: int = 0
    converged: bool = True
    max_shift: float = 0.0
    inertia: float = 0.0
    shift_history: List[float] = field(default_factory=list)

    @property
    def n_clusters(self) -> int:
        """Number of clusters in the result."""
        return len(self.clusters)

    def sizes(self) -> List[int]:
        """Member count of each cluster, in cluster order."""
        return [len(cluster) for cluster in self.clusters]

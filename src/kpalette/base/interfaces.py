"""
Core interfaces for the kpalette clustering engine.

This module defines the abstract base classes that the pluggable pieces of
the engine implement, so metrics, seeding schemes and convergence tests can be
swapped without touching the main loop.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import torch
from torch import Tensor


class DistanceMetric(ABC):
    """Abstract base class for point-to-point distances.

    Implementations must be symmetric and non-negative. The engine only relies
    on the ordering of distances, so a non-metric "distance" (e.g. squared
    Euclidean) is acceptable.
    """

    #: Name used when selecting the metric by string
    name: str = ''

    @abstractmethod
    def pairwise(self, points: Tensor, others: Tensor) -> Tensor:
        """Compute distances between every pair of rows.

        Args:
            points: (n, d) tensor of points
            others: (m, d) tensor of points

        Returns:
            (n, m) tensor of distances
        """
        pass

    @abstractmethod
    def paired(self, points: Tensor, others: Tensor) -> Tensor:
        """Compute distances between corresponding rows.

        Args:
            points: (n, d) tensor of points
            others: (n, d) tensor of points

        Returns:
            (n,) tensor of distances
        """
        pass

    def measure(self, a: Tensor, b: Tensor) -> float:
        """Distance between two single points."""
        a = torch.as_tensor(a)
        if not a.is_floating_point():
            a = a.to(torch.float32)
        b = torch.as_tensor(b, dtype=a.dtype, device=a.device)
        return self.paired(a.reshape(1, -1), b.reshape(1, -1))[0].item()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class InitializationStrategy(ABC):
    """Abstract base class for centroid seeding strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: torch.Generator, **kwargs) -> Tensor:
        """Choose initial centroids.

        Args:
            points: (n, d) tensor of data points
            n_clusters: Number of centroids to produce
            generator: Random source owned by the current run

        Returns:
            (n_clusters, d) tensor of centroids
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-centroid assignment."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            **kwargs) -> Tensor:
        """Compute the cluster index of every point.

        Args:
            points: (n, d) tensor of data points
            centroids: (k, d) tensor of current centroids

        Returns:
            (n,) long tensor of cluster indices
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []

"""
Initialization from caller-supplied centroids.

Useful to resume from a known palette or to make a run fully deterministic.
"""

from typing import Union
import torch
from torch import Tensor
import numpy as np

from ..base.interfaces import InitializationStrategy


class FixedInit(InitializationStrategy):
    """Initialize with fixed centroids."""
    
    def __init__(self, centroids: Union[Tensor, np.ndarray, list]):
        """
        Args:
            centroids: (K, d) initial centroids
        """
        if not isinstance(centroids, Tensor):
            centroids = torch.as_tensor(np.asarray(centroids, dtype=np.float64))
        if centroids.dim() != 2:
            raise ValueError(f"Expected 2D centroids, got {centroids.dim()}D")
        if not torch.isfinite(centroids).all():
            raise ValueError("Centroids must be finite")
        self.centroids = centroids.detach().clone()
        
    @property
    def n_clusters(self) -> int:
        return self.centroids.shape[0]
        
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: torch.Generator, **kwargs) -> Tensor:
        """Return a copy of the stored centroids on the data's device.
        
        Args:
            points: (n, d) data points
            n_clusters: Number of clusters (must match the stored centroids)
            generator: Unused
            
        Returns:
            (n_clusters, d) tensor of centroids
        """
        if self.centroids.shape[0] != n_clusters:
            raise ValueError(f"Have {self.centroids.shape[0]} centroids, "
                             f"need {n_clusters}")
        if self.centroids.shape[1] != points.shape[1]:
            raise ValueError(f"Centroid dimension {self.centroids.shape[1]} does not "
                             f"match data dimension {points.shape[1]}")
        return self.centroids.to(dtype=points.dtype, device=points.device).clone()

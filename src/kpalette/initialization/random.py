"""
Random initialization strategy.

Selects distinct random points from the dataset as initial centroids.
"""

import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy


class RandomInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.
    
    Selects n_clusters random rows (without replacement) as initial centroids.
    """
    
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: torch.Generator, **kwargs) -> Tensor:
        """Initialize centroids with random points.
        
        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Random source
            
        Returns:
            (n_clusters, d) tensor of centroids
        """
        n_points = points.shape[0]
        
        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")
            
        # Select random indices without replacement
        indices = torch.randperm(n_points, generator=generator)[:n_clusters]
        
        return points[indices.to(points.device)].clone()

"""
Hard assignment strategy for the K-means loop.

Assigns each point to its nearest centroid under the configured metric.
"""

from typing import Optional, Tuple
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, DistanceMetric
from ..distances import EuclideanDistance


class NearestCentroidAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to the nearest centroid.
    
    Ties between equally near centroids go to the lowest centroid index,
    which keeps runs deterministic.
    """
    
    def __init__(self, metric: Optional[DistanceMetric] = None,
                 chunk_size: Optional[int] = None):
        """
        Args:
            metric: Distance used for assignment (Euclidean if None)
            chunk_size: Number of points per distance block; None computes
                        the full (n, k) matrix at once
        """
        self.metric = metric if metric is not None else EuclideanDistance()
        if chunk_size is not None and chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        
    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            **kwargs) -> Tensor:
        """Assign each point to nearest centroid.
        
        Args:
            points: (n, d) data points
            centroids: (k, d) current centroids
            
        Returns:
            (n,) tensor of cluster indices
        """
        assignments, _ = self.compute_assignments_with_distances(points, centroids)
        return assignments
        
    def compute_assignments_with_distances(self, points: Tensor,
                                           centroids: Tensor) -> Tuple[Tensor, Tensor]:
        """Assign points and return the distance to the chosen centroid.
        
        Returns:
            assignments: (n,) cluster indices
            min_distances: (n,) distance of each point to its centroid
        """
        if centroids.shape[0] == 0:
            raise ValueError("Need at least one centroid")
            
        n_points = points.shape[0]
        step = n_points if self.chunk_size is None else self.chunk_size
        
        assignments = torch.empty(n_points, dtype=torch.long, device=points.device)
        min_distances = torch.empty(n_points, dtype=points.dtype, device=points.device)
        
        # Blocks are processed in point order, so the result does not depend
        # on chunk_size
        for start in range(0, n_points, max(step, 1)):
            block = points[start:start + step]
            distances = self.metric.pairwise(block, centroids)
            
            # argmin returns the first minimal index on ties
            indices = torch.argmin(distances, dim=1)
            assignments[start:start + step] = indices
            min_distances[start:start + step] = torch.gather(
                distances, 1, indices.unsqueeze(1)).squeeze(1)
            
        return assignments, min_distances

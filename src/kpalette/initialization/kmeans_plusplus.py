"""
K-means++ initialization strategy.

Selects initial centroids that are spread out over the data, which speeds up
convergence and avoids many poor local minima.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, DistanceMetric
from ..base.exceptions import SamplingError
from ..distances import EuclideanDistance
from ..utils.sampling import WeightedSampler, uniform_index


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ seeding under an arbitrary distance metric.
    
    Algorithm:
    1. Choose the first centroid uniformly at random
    2. For each remaining centroid:
       - Compute the distance from each point to its nearest chosen centroid
       - Choose the next centroid with probability proportional to that distance
       
    Weights are the metric's own distances; pass a squared metric for the
    classic D² weighting. Points coincident with a chosen centroid have weight
    zero and are never chosen again.
    """
    
    def __init__(self, metric: Optional[DistanceMetric] = None):
        """
        Args:
            metric: Distance used for the weights (Euclidean if None)
        """
        self.metric = metric if metric is not None else EuclideanDistance()
        
    def select_indices(self, points: Tensor, n_clusters: int,
                       generator: torch.Generator) -> List[int]:
        """Pick the rows of points that become initial centroids.
        
        Args:
            points: (n, d) data points
            n_clusters: Number of centroids
            generator: Random source
            
        Returns:
            List of n_clusters row indices
            
        Raises:
            SamplingError: If the remaining points all coincide with chosen
                           centroids (fewer distinct points than clusters)
        """
        n_points = points.shape[0]
        
        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")
            
        # Choose first center uniformly at random
        center_indices = [uniform_index(n_points, generator)]
        
        # Distance from every point to its nearest chosen center
        distances = self._distances_to(points, center_indices[0])
        
        for c in range(1, n_clusters):
            try:
                sampler = WeightedSampler(distances)
            except SamplingError as err:
                raise SamplingError(
                    f"Could not choose centroid {c + 1} of {n_clusters}: {err}"
                ) from err
                
            idx = sampler.sample(generator)
            center_indices.append(idx)
            
            distances = torch.minimum(distances, self._distances_to(points, idx))
            
        return center_indices
        
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: torch.Generator, **kwargs) -> Tensor:
        """Initialize centroids using K-means++.
        
        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Random source
            
        Returns:
            (n_clusters, d) tensor of centroids
        """
        indices = self.select_indices(points, n_clusters, generator)
        return points[indices].clone()
        
    def _distances_to(self, points: Tensor, index: int) -> Tensor:
        return self.metric.pairwise(points, points[index].unsqueeze(0)).squeeze(1)

"""
Euclidean distance metrics for clustering.

The most common distance metric, and the default for palette reduction.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """Euclidean distance ||x - y||.
    
    With ``squared=True`` returns ||x - y||², which preserves the ordering of
    distances and turns k-means++ seeding into its classic D² weighting.
    """
    
    def __init__(self, squared: bool = False):
        """
        Args:
            squared: If True, return squared distances.
                    If False (default), return actual Euclidean distances.
        """
        self.squared = squared
        
    @property
    def name(self) -> str:
        return 'squared_euclidean' if self.squared else 'euclidean'
        
    def pairwise(self, points: Tensor, others: Tensor) -> Tensor:
        """Compute Euclidean distances between all rows of points and others.
        
        Args:
            points: (n, d) tensor of points
            others: (m, d) tensor of points
            
        Returns:
            (n, m) tensor of distances
        """
        # Explicit differences instead of the ||x||² - 2xy + ||y||² expansion
        # so that coincident points come out as exactly zero
        diff = points.unsqueeze(1) - others.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=2)
        
        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)
            
    def paired(self, points: Tensor, others: Tensor) -> Tensor:
        """Compute Euclidean distances between corresponding rows."""
        diff = points - others
        squared_distances = torch.sum(diff * diff, dim=1)
        
        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)
            
    def __repr__(self) -> str:
        return f"EuclideanDistance(squared={self.squared})"
            
            
class WeightedEuclideanDistance(DistanceMetric):
    """Weighted Euclidean distance with per-coordinate weights.
    
    Computes sqrt(sum_i w_i * (x_i - y_i)²) where w_i are coordinate weights,
    e.g. to emphasise lightness over the chroma axes of a colour space.
    """
    
    name = 'weighted_euclidean'
    
    def __init__(self, weights: Tensor, squared: bool = False):
        """
        Args:
            weights: (d,) tensor of non-negative coordinate weights
            squared: Whether to return squared distances
        """
        weights = torch.as_tensor(weights, dtype=torch.float32)
        if weights.dim() != 1:
            raise ValueError(f"Expected 1D weights, got {weights.dim()}D")
        if (weights < 0).any() or not torch.isfinite(weights).all():
            raise ValueError("Weights must be finite and non-negative")
        self.weights = weights
        self.squared = squared
        
    def _finish(self, weighted_sq_diff: Tensor, dim: int) -> Tensor:
        squared_distances = torch.sum(weighted_sq_diff, dim=dim)
        
        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)
        
    def pairwise(self, points: Tensor, others: Tensor) -> Tensor:
        """Compute weighted Euclidean distances between all pairs of rows."""
        # Ensure weights are on same device
        weights = self.weights.to(device=points.device, dtype=points.dtype)
        
        diff = points.unsqueeze(1) - others.unsqueeze(0)
        return self._finish(weights.view(1, 1, -1) * diff * diff, dim=2)
        
    def paired(self, points: Tensor, others: Tensor) -> Tensor:
        """Compute weighted Euclidean distances between corresponding rows."""
        weights = self.weights.to(device=points.device, dtype=points.dtype)
        
        diff = points - others
        return self._finish(weights.unsqueeze(0) * diff * diff, dim=1)
        
    def __repr__(self) -> str:
        return f"WeightedEuclideanDistance(weights={self.weights.tolist()}, squared={self.squared})"

"""
Convergence criteria for the K-means loop.

Lloyd's algorithm stops once no centroid moves further than a tolerance
between consecutive iterations.
"""

from typing import Dict, Any, Optional
import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion, DistanceMetric
from ..distances import EuclideanDistance


class MaxCentroidShift(ConvergenceCriterion):
    """Convergence when the largest centroid movement drops below tol.
    
    The shift of each centroid is measured with the clustering metric, so the
    tolerance is expressed in the same units as the distances.
    """
    
    def __init__(self, tol: float = 1e-4,
                 metric: Optional[DistanceMetric] = None):
        """
        Args:
            tol: Shift strictly below which the centroids are considered settled
            metric: Distance used to measure the shift (Euclidean if None)
        """
        super().__init__()
        self.tol = tol
        self.metric = metric if metric is not None else EuclideanDistance()
        
    @property
    def last_shift(self) -> float:
        """Max shift seen by the latest check (inf before the first one)."""
        if not self.history:
            return float('inf')
        return self.history[-1]['max_shift']
        
    def max_shift(self, previous: Tensor, current: Tensor) -> float:
        """Largest distance between corresponding centroids."""
        if previous.shape != current.shape:
            raise ValueError(f"Centroid shapes differ: {tuple(previous.shape)} "
                             f"vs {tuple(current.shape)}")
        if previous.shape[0] == 0:
            return 0.0
        return torch.max(self.metric.paired(previous, current)).item()
        
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the centroids have stopped moving.
        
        Expects 'previous_centroids' and 'centroids', both (k, d).
        """
        shift = self.max_shift(current_state['previous_centroids'],
                               current_state['centroids'])
        
        # Update history
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'max_shift': shift
        })
        
        return shift < self.tol

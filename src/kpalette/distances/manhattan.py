"""Manhattan (city block) distance metric."""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class ManhattanDistance(DistanceMetric):
    """L1 distance sum_i |x_i - y_i|."""
    
    name = 'manhattan'
    
    def pairwise(self, points: Tensor, others: Tensor) -> Tensor:
        """Compute L1 distances between all rows of points and others."""
        diff = points.unsqueeze(1) - others.unsqueeze(0)
        return torch.sum(torch.abs(diff), dim=2)
        
    def paired(self, points: Tensor, others: Tensor) -> Tensor:
        """Compute L1 distances between corresponding rows."""
        return torch.sum(torch.abs(points - others), dim=1)

"""
Random index selection used while seeding centroids.

All draws go through an explicit torch.Generator owned by the current run, so
a run is reproducible from the generator state alone.
"""

from typing import Union
import torch
from torch import Tensor
import numpy as np

from ..base.exceptions import SamplingError


def uniform_index(n: int, generator: torch.Generator) -> int:
    """Draw an index uniformly from range(n).
    
    Args:
        n: Number of candidates
        generator: Random source
        
    Returns:
        Index in [0, n)
    """
    if n < 1:
        raise SamplingError(f"Cannot draw an index from {n} candidates")
    return int(torch.randint(n, (1,), generator=generator).item())


class WeightedSampler:
    """Discrete distribution proportional to non-negative weights.
    
    Sampling inverts the cumulative distribution with a binary search, so an
    index whose weight is zero can never be drawn.
    
    Raises:
        SamplingError: If the weights are empty, not 1D, contain negative or
                       non-finite values, or sum to zero
    """
    
    def __init__(self, weights: Union[Tensor, np.ndarray, list]):
        """
        Args:
            weights: (n,) non-negative weights
        """
        weights = torch.as_tensor(weights).detach().to(device='cpu', dtype=torch.float64)
        
        if weights.dim() != 1:
            raise SamplingError(f"Expected 1D weights, got {weights.dim()}D")
        if weights.numel() == 0:
            raise SamplingError("Cannot sample from an empty weight vector")
        if not torch.isfinite(weights).all():
            raise SamplingError("Weights contain NaN or infinite values")
        if (weights < 0).any():
            raise SamplingError("Weights must be non-negative")
            
        positive = torch.nonzero(weights > 0).flatten()
        if len(positive) == 0:
            raise SamplingError("All weights are zero")
            
        self._weights = weights
        self._cumulative = torch.cumsum(weights, dim=0)
        self._total = self._cumulative[-1].item()
        self._last_positive = int(positive[-1].item())
        
    def __len__(self) -> int:
        return self._weights.numel()
        
    @property
    def probabilities(self) -> Tensor:
        """(n,) normalised selection probabilities."""
        return self._weights / self._total
        
    def sample(self, generator: torch.Generator) -> int:
        """Draw one index with probability proportional to its weight.
        
        Args:
            generator: Random source
            
        Returns:
            Selected index
        """
        u = torch.rand(1, generator=generator, dtype=torch.float64) * self._total
        index = int(torch.searchsorted(self._cumulative, u, right=True).item())
        
        # u * total can round up to total itself
        return min(index, self._last_positive)

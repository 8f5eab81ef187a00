"""Initialization strategies for the K-means engine."""

from typing import Union, Optional
from torch import Tensor
import numpy as np

from ..base.interfaces import InitializationStrategy, DistanceMetric
from ..base.exceptions import ConfigurationError, ConfigurationErrorKind
from .random import RandomInit
from .kmeans_plusplus import KMeansPlusPlusInit
from .fixed import FixedInit


def get_initialization(init: Union[str, InitializationStrategy, Tensor, np.ndarray, list],
                       n_clusters: int,
                       metric: Optional[DistanceMetric] = None) -> InitializationStrategy:
    """Resolve an init argument to a strategy.
    
    Args:
        init: 'k-means++', 'random', an InitializationStrategy, or an array
              of shape (n_clusters, d) used as initial centroids
        n_clusters: Number of clusters the engine will produce
        metric: Metric used by K-means++ weighting
        
    Returns:
        InitializationStrategy
        
    Raises:
        ConfigurationError: If init is unknown or has the wrong shape
    """
    if isinstance(init, InitializationStrategy):
        return init
        
    if isinstance(init, str):
        if init == 'k-means++':
            return KMeansPlusPlusInit(metric)
        elif init == 'random':
            return RandomInit()
        raise ConfigurationError(
            ConfigurationErrorKind.INVALID_INITIALIZATION,
            f"Unknown init method: {init!r}"
        )
        
    try:
        strategy = FixedInit(init)
    except (ValueError, TypeError) as err:
        raise ConfigurationError(
            ConfigurationErrorKind.INVALID_INITIALIZATION,
            f"Invalid initial centroids: {err}"
        ) from err
        
    if strategy.n_clusters != n_clusters:
        raise ConfigurationError(
            ConfigurationErrorKind.INVALID_INITIALIZATION,
            f"Got {strategy.n_clusters} initial centroids for {n_clusters} clusters"
        )
    return strategy


__all__ = [
    'RandomInit',
    'KMeansPlusPlusInit',
    'FixedInit',
    'get_initialization'
]

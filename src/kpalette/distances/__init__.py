"""Distance metrics for the clustering engine."""

from typing import Union

from ..base.interfaces import DistanceMetric
from ..base.exceptions import ConfigurationError, ConfigurationErrorKind
from .euclidean import EuclideanDistance, WeightedEuclideanDistance
from .manhattan import ManhattanDistance

_METRICS = {
    'euclidean': lambda: EuclideanDistance(squared=False),
    'squared_euclidean': lambda: EuclideanDistance(squared=True),
    'manhattan': ManhattanDistance,
}


def get_metric(metric: Union[str, DistanceMetric]) -> DistanceMetric:
    """Resolve a metric name or instance to a DistanceMetric.
    
    Args:
        metric: One of 'euclidean', 'squared_euclidean', 'manhattan',
                or a DistanceMetric instance
                
    Returns:
        DistanceMetric instance
        
    Raises:
        ConfigurationError: If the metric is unknown
    """
    if isinstance(metric, DistanceMetric):
        return metric
    if isinstance(metric, str):
        key = metric.lower().replace('-', '_')
        if key in _METRICS:
            return _METRICS[key]()
        raise ConfigurationError(
            ConfigurationErrorKind.INVALID_METRIC,
            f"Unknown metric: {metric!r}. Choose from {sorted(_METRICS)}"
        )
    raise ConfigurationError(
        ConfigurationErrorKind.INVALID_METRIC,
        f"Expected a metric name or DistanceMetric, got {type(metric).__name__}"
    )


__all__ = [
    'DistanceMetric',
    'EuclideanDistance',
    'WeightedEuclideanDistance',
    'ManhattanDistance',
    'get_metric'
]

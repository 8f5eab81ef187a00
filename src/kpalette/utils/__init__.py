"""Utility functions for the kpalette engine."""

from .convergence import MaxCentroidShift

from .metrics import (
    labels_from_clusters,
    inertia
)

from .sampling import (
    WeightedSampler,
    uniform_index
)

from .validation import (
    validate_points,
    check_random_state
)

__all__ = [
    # Convergence criteria
    'MaxCentroidShift',
    
    # Metrics
    'labels_from_clusters',
    'inertia',
    
    # Sampling
    'WeightedSampler',
    'uniform_index',
    
    # Validation
    'validate_points',
    'check_random_state'
]

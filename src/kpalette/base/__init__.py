"""Base classes, data structures and errors for kpalette."""

from .interfaces import (
    DistanceMetric,
    InitializationStrategy,
    AssignmentStrategy,
    ConvergenceCriterion
)

from .data_structures import (
    Cluster,
    KMeansConfig,
    FitResult
)

from .exceptions import (
    KPaletteError,
    ConfigurationError,
    ConfigurationErrorKind,
    SamplingError,
    ConvergenceWarning
)

__all__ = [
    # Interfaces
    'DistanceMetric',
    'InitializationStrategy',
    'AssignmentStrategy',
    'ConvergenceCriterion',
    
    # Data structures
    'Cluster',
    'KMeansConfig',
    'FitResult',
    
    # Errors
    'KPaletteError',
    'ConfigurationError',
    'ConfigurationErrorKind',
    'SamplingError',
    'ConvergenceWarning'
]

"""
Exceptions and warnings raised by kpalette.

Configuration problems are rejected when an engine is constructed; sampling
problems surface while seeding a run.
"""

from enum import Enum


class KPaletteError(Exception):
    """Base class for all kpalette errors."""


class ConfigurationErrorKind(str, Enum):
    """Which configuration value was rejected."""

    INVALID_CLUSTER_COUNT = 'InvalidClusterCount'
    INVALID_MAX_ITERATIONS = 'InvalidMaxIterations'
    INVALID_TOLERANCE = 'InvalidTolerance'
    INVALID_METRIC = 'InvalidMetric'
    INVALID_INITIALIZATION = 'InvalidInitialization'
    INVALID_RANDOM_STATE = 'InvalidRandomState'
    INVALID_CHUNK_SIZE = 'InvalidChunkSize'


class ConfigurationError(KPaletteError, ValueError):
    """Invalid engine configuration.
    
    Attributes
    ----------
    kind : ConfigurationErrorKind
        The rejected setting
    """
    
    def __init__(self, kind: ConfigurationErrorKind, message: str):
        super().__init__(message)
        self.kind = ConfigurationErrorKind(kind)
        
    def __reduce__(self):
        return (self.__class__, (self.kind, str(self)))


class SamplingError(KPaletteError, RuntimeError):
    """Weighted selection could not produce a valid index."""


class ConvergenceWarning(UserWarning):
    """Iteration budget exhausted before the centroids settled."""

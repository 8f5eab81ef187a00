"""
kpalette: K-means clustering for palette reduction.

This package groups fixed-dimension points into a requested number of
clusters with Lloyd's algorithm and k-means++ seeding, and reduces colour
palettes to representative swatches:
- KMeans engine with pluggable distance metrics
- Reproducible seeding from an explicit random source
- Palette extraction and plotting helpers

Example usage:
    >>> import torch
    >>> from kpalette import KMeans
    >>> 
    >>> points = torch.tensor([[0., 0.], [0., 1.], [10., 10.], [10., 11.]])
    >>> 
    >>> # Fit K-means
    >>> kmeans = KMeans(n_clusters=2, random_state=0)
    >>> clusters = kmeans.fit(points)
    >>> 
    >>> # Indices of the rows in each cluster
    >>> [sorted(cluster.indices.tolist()) for cluster in clusters]
"""

__version__ = '0.1.0'

# Import main algorithm
from .algorithms.kmeans import KMeans

# Palette reduction
from .palette import Swatch, extract_palette

# Import visualization
from .visualization import (
    plot_clusters_2d,
    plot_palette
)

# Convenience imports
from .base import (
    Cluster,
    DistanceMetric,
    FitResult,
    KMeansConfig,
    KPaletteError,
    ConfigurationError,
    ConfigurationErrorKind,
    SamplingError,
    ConvergenceWarning
)

from .distances import (
    EuclideanDistance,
    WeightedEuclideanDistance,
    ManhattanDistance,
    get_metric
)

__all__ = [
    # Algorithm
    'KMeans',
    
    # Palette
    'Swatch',
    'extract_palette',
    
    # Core data structures
    'Cluster',
    'FitResult',
    'KMeansConfig',
    'DistanceMetric',
    
    # Errors
    'KPaletteError',
    'ConfigurationError',
    'ConfigurationErrorKind',
    'SamplingError',
    'ConvergenceWarning',
    
    # Distances
    'EuclideanDistance',
    'WeightedEuclideanDistance',
    'ManhattanDistance',
    'get_metric',
    
    # Visualization
    'plot_clusters_2d',
    'plot_palette',
    
    # Version
    '__version__'
]

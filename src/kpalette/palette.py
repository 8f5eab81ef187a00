"""
Palette reduction on top of the K-means engine.

The engine knows nothing about colour; this module treats each input row as a
colour in whatever space the caller chose and turns clusters into swatches.
"""

from dataclasses import dataclass
from typing import List, Optional, Union
import torch
from torch import Tensor
import numpy as np

from .algorithms.kmeans import KMeans
from .base.interfaces import DistanceMetric


@dataclass(frozen=True)
class Swatch:
    """One representative colour of a reduced palette."""
    
    color: Tensor        # (d,) centroid of the member colours
    population: int      # number of input colours it represents
    indices: Tensor      # (population,) rows of the input colours
    
    def fraction(self, total: int) -> float:
        """Share of the input covered by this swatch."""
        return self.population / total if total else 0.0


def extract_palette(colors: Union[Tensor, np.ndarray, list],
                    n_colors: int,
                    max_iter: int = 100,
                    tol: float = 1e-3,
                    metric: Union[str, DistanceMetric] = 'euclidean',
                    random_state: Union[None, int, torch.Generator] = None,
                    device: Optional[torch.device] = None) -> List[Swatch]:
    """Reduce colours to at most n_colors representative swatches.
    
    Args:
        colors: (n, d) colour coordinates, e.g. RGB or Lab triples
        n_colors: Maximum number of swatches
        max_iter: K-means iteration budget
        tol: K-means convergence tolerance
        metric: Distance between colours
        random_state: Seed or generator for reproducible palettes
        device: Torch device for the computation
        
    Returns:
        Swatches for the non-empty clusters, most populous first; ties keep
        cluster order
    """
    kmeans = KMeans(n_clusters=n_colors, max_iter=max_iter, tol=tol,
                    metric=metric, random_state=random_state, device=device)
    clusters = kmeans.fit(colors)
    
    swatches = [
        Swatch(color=cluster.centroid(), population=len(cluster), indices=cluster.indices)
        for cluster in clusters
        if not cluster.is_empty
    ]
    
    # sorted() is stable, so equal populations stay in cluster order
    return sorted(swatches, key=lambda swatch: -swatch.population)

"""
Evaluation helpers for clustering results.
"""

from typing import Optional, Sequence
import torch
from torch import Tensor

from ..base.data_structures import Cluster
from ..base.interfaces import DistanceMetric
from ..distances import EuclideanDistance


def labels_from_clusters(clusters: Sequence[Cluster], n_points: int,
                         device: Optional[torch.device] = None) -> Tensor:
    """Flatten cluster membership into a per-point label vector.
    
    Args:
        clusters: Clusters whose indices refer to rows 0..n_points-1
        n_points: Number of input points
        device: Device of the returned tensor
        
    Returns:
        (n_points,) long tensor; -1 marks points found in no cluster
        
    Raises:
        ValueError: If a point appears in more than one cluster
    """
    labels = torch.full((n_points,), -1, dtype=torch.long, device=device)
    for k, cluster in enumerate(clusters):
        indices = cluster.indices.to(labels.device)
        if (labels[indices] != -1).any():
            raise ValueError(f"Cluster {k} shares points with another cluster")
        labels[indices] = k
    return labels


def inertia(clusters: Sequence[Cluster],
            metric: Optional[DistanceMetric] = None) -> float:
    """Sum of distances from each member to its cluster centroid.
    
    Args:
        clusters: Clusters to score
        metric: Distance used (Euclidean if None)
        
    Returns:
        Total within-cluster distance
    """
    metric = metric if metric is not None else EuclideanDistance()
    total = 0.0
    for cluster in clusters:
        if cluster.is_empty:
            continue
        centroid = cluster.centroid().unsqueeze(0)
        total += metric.pairwise(cluster.points, centroid).sum().item()
    return total

"""
Cluster and palette visualization utilities.

Provides functions for plotting 2D clustering results and the swatches of a
reduced palette.
"""

from typing import Optional, Sequence, List
import torch
from torch import Tensor
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
import numpy as np

from ..base.data_structures import Cluster


def plot_clusters_2d(X: Tensor,
                     clusters: Sequence[Cluster],
                     centroids: Optional[Tensor] = None,
                     ax: Optional[plt.Axes] = None,
                     colors: Optional[List[str]] = None,
                     alpha: float = 0.7,
                     center_marker: str = 'X',
                     center_size: int = 200,
                     point_size: int = 50,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot 2D clustering results.
    
    Args:
        X: (n, 2) data points
        clusters: Clusters returned by KMeans.fit
        centroids: Optional (k, 2) centers; defaults to the mean of each non-empty cluster
        ax: Matplotlib axes (created if None)
        colors: List of colors for clusters
        alpha: Point transparency
        center_marker: Marker for centers
        center_size: Size of center markers
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title
        
    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))
        
    # Convert to numpy for matplotlib
    X_np = torch.as_tensor(X).detach().cpu().numpy()
    if X_np.ndim != 2 or X_np.shape[1] != 2:
        raise ValueError(f"Expected (n, 2) points, got shape {X_np.shape}")
        
    n_clusters = len(clusters)
    
    # Default colors
    if colors is None:
        cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
        colors = [cmap(i % cmap.N) for i in range(n_clusters)]
        
    # Plot each cluster
    for k, cluster in enumerate(clusters):
        if cluster.is_empty:
            continue
        indices = cluster.indices.cpu().numpy()
        ax.scatter(X_np[indices, 0], X_np[indices, 1],
                   c=[colors[k % len(colors)]],
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=f'Cluster {k}')
                   
    # Plot centers
    if centroids is None:
        # Empty clusters have no mean to draw
        means = [cluster.centroid() for cluster in clusters if not cluster.is_empty]
        if means:
            centroids = torch.stack(means)
    if centroids is not None and len(centroids) > 0:
        centers_np = torch.as_tensor(centroids).detach().cpu().numpy()
        ax.scatter(centers_np[:, 0], centers_np[:, 1],
                   c='red',
                   marker=center_marker,
                   s=center_size,
                   edgecolors='black',
                   linewidth=2,
                   label='Centers')
                   
    ax.set_xlabel('Feature 1')
    ax.set_ylabel('Feature 2')
    
    if title:
        ax.set_title(title)
        
    if show_legend and n_clusters > 0:
        ax.legend(loc='best')
        
    ax.grid(True, alpha=0.3)
    
    return ax


def plot_palette(swatches: Sequence,
                 ax: Optional[plt.Axes] = None,
                 show_population: bool = True,
                 title: Optional[str] = None) -> plt.Axes:
    """Draw palette swatches as bars whose widths follow their population.
    
    Args:
        swatches: Swatch objects from extract_palette (RGB colors in [0, 1]
                  or [0, 255])
        ax: Matplotlib axes (created if None)
        show_population: Whether to annotate each bar with its share
        title: Plot title
        
    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 2))
        
    total = sum(swatch.population for swatch in swatches)
    colors = np.array([swatch.color.detach().cpu().numpy() for swatch in swatches])
    if len(colors) and colors.shape[1] != 3:
        raise ValueError(f"Expected RGB swatches, got {colors.shape[1]} channels")
    if len(colors) and colors.max() > 1.0:
        colors = colors / 255.0
    colors = np.clip(colors, 0.0, 1.0)
    
    left = 0.0
    for swatch, color in zip(swatches, colors):
        width = swatch.population / total if total else 0.0
        ax.add_patch(Rectangle((left, 0.0), width, 1.0, facecolor=color,
                               edgecolor='white', linewidth=1))
        if show_population and width > 0.05:
            ax.text(left + width / 2, 0.5, f"{width:.0%}",
                    ha='center', va='center', fontsize=8,
                    color='white' if color.mean() < 0.5 else 'black')
        left += width
        
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_xticks([])
    ax.set_yticks([])
    
    if title:
        ax.set_title(title)
        
    return ax

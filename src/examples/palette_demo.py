"""
Demo of palette reduction with kpalette.

This example shows how to:
1. Generate a synthetic "image" made of a few dominant colours
2. Reduce it to a small palette with K-means
3. Visualize the clusters and the resulting palette
"""

import torch
import matplotlib.pyplot as plt

# Add parent directory to path for imports
import sys
sys.path.append('..')

from kpalette import KMeans, extract_palette, plot_clusters_2d, plot_palette


def generate_pixels(n_pixels=4000, seed=42):
    """Generate RGB pixels scattered around five base colours."""
    generator = torch.Generator().manual_seed(seed)

    base_colors = torch.tensor([
        [231.0, 76.0, 60.0],
        [46.0, 204.0, 113.0],
        [52.0, 152.0, 219.0],
        [241.0, 196.0, 15.0],
        [44.0, 62.0, 80.0],
    ])
    shares = torch.tensor([0.35, 0.25, 0.2, 0.15, 0.05])

    # Draw the base colour of every pixel, then jitter it
    choice = torch.multinomial(shares, n_pixels, replacement=True, generator=generator)
    noise = torch.randn(n_pixels, 3, generator=generator) * 12.0
    pixels = (base_colors[choice] + noise).clamp(0.0, 255.0)

    return pixels


def main():
    pixels = generate_pixels()
    print(f"Generated {len(pixels)} pixels")

    # Full run record
    kmeans = KMeans(n_clusters=5, max_iter=50, tol=1e-2, random_state=0, verbose=1)
    result = kmeans.fit_detailed(pixels)
    print(f"Converged: {result.converged} after {result.n_iter} iterations")
    print(f"Cluster sizes: {result.sizes()}")

    # Palette, most common colour first
    swatches = extract_palette(pixels, n_colors=5, random_state=0)
    for swatch in swatches:
        rgb = tuple(int(round(c)) for c in swatch.color.tolist())
        print(f"  #{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}  "
              f"{swatch.fraction(len(pixels)):6.1%}")

    fig, axes = plt.subplots(2, 1, figsize=(8, 8),
                             gridspec_kw={'height_ratios': [4, 1]})
    plot_clusters_2d(pixels[:, :2], result.clusters, result.centroids[:, :2],
                     ax=axes[0], title='Red/green projection of the pixel clusters')
    plot_palette(swatches, ax=axes[1], title='Palette')
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()

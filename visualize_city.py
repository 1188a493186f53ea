#!/usr/bin/env python3
"""
Visualize a generated city as a top-down plan.
Blocks are colored by cell type, buildings drawn as footprints shaded by
height and trees as dots.

Usage:
    python visualize_city.py [seed] [grid_size]
"""

import sys
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from matplotlib.patches import Rectangle

sys.path.append(str(Path(__file__).parent))

from py_citygen.config.city_options import CityOptions
from py_citygen.core.city_generator import generate_city

# Scene palette: water, park, parking, building curb
CELL_COLORS = ["#4B95DE", "#81A377", "#888888", "#E8E8E8"]


def visualize_city(seed="city123", grid_size=15, output="city_plan.png"):
    """
    Generate a city and save a plan view of it.

    Args:
        seed: Random seed
        grid_size: Blocks per grid side
        output: Output image path
    """
    print(f"Generating {grid_size}x{grid_size} city with seed '{seed}'...")
    layout = generate_city(CityOptions(seed=seed, grid_size=grid_size))
    options = layout.options

    summary = layout.summary()
    print(f"  Water: {summary['water']}, parks: {summary['park']}, "
          f"parking: {summary['parking']}, building blocks: {summary['building']}")
    print(f"  Buildings: {summary['buildings']} ({summary['tall_buildings']} tall), trees: {summary['trees']}")

    fig, ax = plt.subplots(figsize=(10, 10))
    half = options.city_width / 2

    # grid[i, j] is column i (x) and row j (z)
    ax.imshow(
        layout.grid.T,
        cmap=ListedColormap(CELL_COLORS),
        vmin=0,
        vmax=3,
        origin="lower",
        extent=(-half, half, -half, half),
        alpha=0.6,
    )

    cmap = plt.get_cmap("viridis")
    for volume in layout.buildings:
        shade = (volume.height - options.min_building_height) / max(
            1, options.max_building_height - options.min_building_height
        )
        ax.add_patch(
            Rectangle(
                (volume.x - volume.width / 2, volume.z - volume.depth / 2),
                volume.width,
                volume.depth,
                facecolor=cmap(shade),
                edgecolor="black",
                linewidth=0.3,
            )
        )

    if layout.trees:
        ax.scatter(
            [tree.x for tree in layout.trees],
            [tree.z for tree in layout.trees],
            s=2,
            c="#216E41",
        )

    ax.set_xlim(-half, half)
    ax.set_ylim(-half, half)
    ax.set_aspect("equal")
    ax.set_title(f"City plan - seed {layout.seed}")
    plt.savefig(output, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved {output}")


if __name__ == "__main__":
    seed = sys.argv[1] if len(sys.argv) > 1 else "city123"
    grid_size = int(sys.argv[2]) if len(sys.argv) > 2 else 15
    visualize_city(seed=seed, grid_size=grid_size)

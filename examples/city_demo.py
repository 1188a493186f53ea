#!/usr/bin/env python3
"""
Simple demo script showing city generation capabilities.
"""

import numpy as np
from py_citygen.config import CityOptions
from py_citygen.core import CellType, generate_city

SYMBOLS = {
    CellType.WATER: "~",
    CellType.PARK: "T",
    CellType.PARKING: "P",
    CellType.BUILDING: "#",
}


def main():
    """Demonstrate city generation."""
    print("Procedural City Generation Demo")
    print("=" * 40)

    for seed in ["harbor", "downtown", "suburb"]:
        print(f"\nSeed '{seed}':")
        print("-" * 30)

        layout = generate_city(CityOptions(seed=seed, grid_size=12))

        for j in range(layout.grid.shape[1]):
            print("  " + "".join(SYMBOLS[CellType(int(layout.grid[i, j]))] for i in range(layout.grid.shape[0])))

        summary = layout.summary()
        heights = np.array([volume.height for volume in layout.buildings])
        print(f"  Buildings: {summary['buildings']} ({summary['tall_buildings']} tall)")
        print(f"  Trees: {summary['trees']}")
        if len(heights):
            print(f"  Height range: {heights.min():.0f}-{heights.max():.0f}")

    # Deeper subdivision produces more, smaller buildings
    print("\n\nSubdivision depth comparison:")
    print("-" * 30)
    for depth in range(4):
        layout = generate_city(CityOptions(seed="depth", grid_size=8, block_subdivisions=depth))
        print(f"  depth {depth}: {len(layout.buildings)} buildings")


if __name__ == "__main__":
    main()

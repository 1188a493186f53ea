"""
Scene coordinates and terrain slabs for a classified grid.

Slabs are plain boxes (center plus size) describing the city base, the
water plane, ground and street tiles, and the curb of every ground block.
Renderers turn them into meshes; nothing here depends on a renderer.
"""

import numpy as np
from dataclasses import dataclass, asdict
from typing import List

from .grid_classifier import CellType
from ..config.city_options import CityOptions

# Curb slab kind per ground cell type
CURB_KINDS = {
    CellType.BUILDING: "building_curb",
    CellType.PARK: "park",
    CellType.PARKING: "parking",
}


@dataclass(frozen=True)
class Slab:
    """Axis-aligned box centered on (x, y, z)."""

    kind: str
    x: float
    y: float
    z: float
    width: float
    height: float
    depth: float

    def to_dict(self) -> dict:
        return asdict(self)


def scene_x(i: int, options: CityOptions) -> float:
    """Scene x coordinate of the center of grid column i; the city is centered on 0."""
    return (i * options.block_size + options.block_size / 2) - options.city_width / 2


def scene_z(j: int, options: CityOptions) -> float:
    """Scene z coordinate of the center of grid row j."""
    return (j * options.block_size + options.block_size / 2) - options.city_length / 2


def build_terrain(grid: np.ndarray, options: CityOptions) -> List[Slab]:
    """
    Build the terrain slabs of a classified grid.

    Order: base, water plane, then per ground cell in scan order its ground
    tile, street tile and curb.
    """
    street_height = options.street_height
    slabs = [
        Slab(
            kind="base",
            x=0.0,
            y=-(options.ground_height / 2) - street_height,
            z=0.0,
            width=options.city_width,
            height=options.ground_height,
            depth=options.city_length,
        ),
        Slab(
            kind="water",
            x=0.0,
            y=-street_height,
            z=0.0,
            width=options.city_width - 2,
            height=0.0,
            depth=options.city_length - 2,
        ),
    ]

    n = grid.shape[0]
    for i in range(n):
        for j in range(n):
            cell_type = CellType(int(grid[i, j]))
            if cell_type == CellType.WATER:
                continue
            x = scene_x(i, options)
            z = scene_z(j, options)
            slabs.append(Slab("ground", x, -street_height, z, options.block_size, 0.0, options.block_size))
            slabs.append(
                Slab("street", x, -street_height / 2, z, options.block_size, street_height, options.block_size)
            )
            slabs.append(
                Slab(
                    CURB_KINDS[cell_type],
                    x,
                    options.curb_height / 2,
                    z,
                    options.curb_width,
                    options.curb_height,
                    options.curb_width,
                )
            )

    return slabs

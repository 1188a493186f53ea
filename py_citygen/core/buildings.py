"""
Recursive subdivision of building blocks into building volumes.

Each building cell starts from one square footprint with a random base
height. Footprints that are not tall are split in two along their longer
side, with a random slice deviation so siblings differ in size, until the
subdivision budget runs out. Every leaf becomes a BuildingVolume whose
height deviates slightly from the block's base height.
"""

import math
import structlog
from dataclasses import dataclass, field, asdict, replace
from typing import List, Optional, Tuple

from .alea_prng import AleaPRNG
from ..config.city_options import CityOptions

logger = structlog.get_logger()


@dataclass(frozen=True)
class Footprint:
    """Axis-aligned building footprint centered on (x, z)."""

    width: float
    depth: float
    height: float
    x: float
    z: float


@dataclass(frozen=True)
class BuildingVolume:
    """Final building box; y is the box center so its base rests on the curb."""

    x: float
    y: float
    z: float
    width: float
    depth: float
    height: float
    tall: bool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BlockSubdivision:
    """Volumes generated for one building cell, grouped into hand-off batches."""

    volumes: List[BuildingVolume] = field(default_factory=list)
    batches: List[List[BuildingVolume]] = field(default_factory=list)
    _pending: List[BuildingVolume] = field(default_factory=list, repr=False)

    def add(self, volume: BuildingVolume) -> None:
        self.volumes.append(volume)
        self._pending.append(volume)

    def close_batch(self) -> None:
        """Hand off every volume added since the previous batch."""
        if self._pending:
            self.batches.append(self._pending)
            self._pending = []


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def is_tall(height: float, max_height: float, cutoff_percentage: float) -> bool:
    """True when height reaches the cutoff percentage of the maximum height."""
    return round_half_up(height / max_height * 100) >= cutoff_percentage


def split_footprint(
    footprint: Footprint,
    slice_deviation: float,
    margin: float,
    min_size: float = 1.0,
) -> Tuple[Footprint, Footprint]:
    """
    Split a footprint in two along its longer side.

    The depth is split when width <= depth, otherwise the width. Before the
    margin is subtracted the two child sizes add up to the parent size as
    long as slice_deviation <= size / 2. Child sizes are clamped to min_size.

    Args:
        footprint: Footprint to split
        slice_deviation: Offset moving the cut away from the center
        margin: Gap left between the two children
        min_size: Smallest allowed child width/depth

    Returns:
        The two child footprints
    """
    s = slice_deviation

    if footprint.width <= footprint.depth:
        size = footprint.depth
        center = footprint.z
    else:
        size = footprint.width
        center = footprint.x

    size1 = _clamp_size(abs(size / 2 - s) - margin / 2, min_size)
    size2 = _clamp_size(abs(-size / 2 - s) - margin / 2, min_size)
    center1 = center + s / 2 + size / 4 + margin / 4
    center2 = center + s / 2 - size / 4 - margin / 4

    if footprint.width <= footprint.depth:
        return (
            replace(footprint, depth=size1, z=center1),
            replace(footprint, depth=size2, z=center2),
        )
    return (
        replace(footprint, width=size1, x=center1),
        replace(footprint, width=size2, x=center2),
    )


def _clamp_size(size: float, min_size: float) -> float:
    if size < min_size:
        logger.debug("Clamped degenerate footprint size", size=size, min_size=min_size)
        return min_size
    return size


class BuildingSubdivider:
    """Generates the building volumes of building cells."""

    def __init__(self, options: CityOptions, prng: AleaPRNG):
        """
        Initialize the subdivider.

        Args:
            options: City options (heights, deviations, subdivision depth)
            prng: Generator for this cell's draws
        """
        self.options = options
        self._prng = prng

    def initial_footprint(self, x: float, z: float) -> Footprint:
        """Square footprint inside a building curb with a random base height."""
        size = self.options.footprint_size
        height = self._prng.randint(self.options.min_building_height, self.options.max_building_height)
        return Footprint(width=size, depth=size, height=height, x=x, z=z)

    def is_tall(self, height: float) -> bool:
        return is_tall(height, self.options.max_building_height, self.options.tall_percentage_cutoff)

    def subdivide(self, footprint: Footprint, subdivisions: Optional[int] = None) -> BlockSubdivision:
        """
        Recursively subdivide a footprint into building volumes.

        Args:
            footprint: Footprint of one building cell
            subdivisions: Recursion depth; defaults to options.block_subdivisions

        Returns:
            BlockSubdivision holding between 1 and 2**subdivisions volumes
        """
        if subdivisions is None:
            subdivisions = self.options.block_subdivisions
        if subdivisions < 0:
            raise ValueError("subdivisions must be non-negative")

        block = BlockSubdivision()
        self._subdivide(footprint, subdivisions, 2 ** subdivisions, block)
        block.close_batch()
        return block

    def _subdivide(
        self, footprint: Footprint, divisions: int, target_count: int, block: BlockSubdivision
    ) -> None:
        if self.is_tall(footprint.height) or divisions < 1:
            volume = self._build_volume(footprint)
            block.add(volume)
            # Batching only; the recursion continues regardless
            if len(block.volumes) >= target_count or volume.tall:
                block.close_batch()
            return

        slice_deviation = abs(self._prng.randint(0, self.options.max_building_slice_deviation))
        for child in split_footprint(
            footprint,
            slice_deviation,
            self.options.block_margin,
            self.options.min_footprint_size,
        ):
            self._subdivide(child, divisions - 1, target_count, block)

    def _build_volume(self, footprint: Footprint) -> BuildingVolume:
        deviation = self.options.max_building_height_deviation
        height = self._prng.randint(footprint.height - deviation, footprint.height + deviation)
        height = min(max(height, self.options.min_building_height), self.options.max_building_height)

        return BuildingVolume(
            x=footprint.x,
            y=height / 2 + self.options.curb_height,
            z=footprint.z,
            width=footprint.width,
            depth=footprint.depth,
            height=height,
            tall=self.is_tall(height),
        )

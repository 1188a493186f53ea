"""Tree placement inside park cells."""

import math
import structlog
from dataclasses import dataclass, asdict
from typing import List

from .alea_prng import AleaPRNG

logger = structlog.get_logger()


@dataclass(frozen=True)
class TreePlacement:
    """Tree standing at (x, z). Trees may overlap."""

    x: float
    z: float
    height: float

    def to_dict(self) -> dict:
        return asdict(self)


class VegetationScatterer:
    """Scatters a random number of trees over a square park area."""

    def __init__(self, prng: AleaPRNG, min_tree_height: int = 4, max_tree_height: int = 10):
        self._prng = prng
        self.min_tree_height = min_tree_height
        self.max_tree_height = max_tree_height

    def scatter(self, x: float, z: float, size: float, density_cap: int) -> List[TreePlacement]:
        """
        Place between 0 and density_cap trees in the square centered on (x, z).

        Coordinates are whole units drawn independently per axis from
        [center - size/2, center + size/2]; no spacing is enforced.

        Args:
            x: Park center x
            z: Park center z
            size: Side length of the usable park area
            density_cap: Maximum number of trees

        Returns:
            Tree placements in draw order
        """
        count = self._prng.randint(0, density_cap)
        trees = []
        for _ in range(count):
            tree_x = self._coordinate(x, size)
            tree_z = self._coordinate(z, size)
            height = self._prng.randint(self.min_tree_height, self.max_tree_height)
            trees.append(TreePlacement(x=tree_x, z=tree_z, height=height))
        return trees

    def _coordinate(self, center: float, size: float) -> float:
        low = center - size / 2
        high = center + size / 2
        # Areas narrower than one unit may contain no whole coordinate
        if math.floor(high) < math.ceil(low):
            return center
        return self._prng.randint(low, high)

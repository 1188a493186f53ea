"""
Coherent noise fields driving terrain and land use.

Both fields of a run are sampled from the same Perlin permutation, chosen
once from the run PRNG, and differ only in frequency. Higher frequencies
give smoother fields.
"""

import numpy as np
import structlog
from dataclasses import dataclass
from noise import pnoise2

from .alea_prng import AleaPRNG

logger = structlog.get_logger()

# Perlin permutation offsets wrap at 256
NOISE_BASE_RANGE = 256


@dataclass
class NoiseFields:
    """Normalized noise fields of one run, indexed [i, j]."""

    general: np.ndarray  # terrain: ground vs water
    ground: np.ndarray  # land use: buildings vs open space


def normalize_field(field: np.ndarray) -> np.ndarray:
    """
    Map values onto [0, 1] using the field's global min and max.

    The minimum maps to exactly 0.0 and the maximum to exactly 1.0.
    A constant field has no spread and maps to all zeros.
    """
    field = np.asarray(field, dtype=np.float64)
    min_value = field.min()
    max_value = field.max()
    if max_value == min_value:
        return np.zeros_like(field)
    return (field - min_value) / (max_value - min_value)


class NoiseFieldSampler:
    """Samples absolute Perlin noise over grid coordinates."""

    def __init__(self, grid_size: int, prng: AleaPRNG):
        """
        Initialize the sampler.

        Args:
            grid_size: Cells per grid side
            prng: Run PRNG; one draw picks the noise permutation for the run
        """
        self.grid_size = grid_size
        self.base = prng.randint(0, NOISE_BASE_RANGE - 1)

    def sample_raw(self, frequency: float) -> np.ndarray:
        """Return |perlin(i / frequency, j / frequency)| for every cell."""
        n = self.grid_size
        field = np.empty((n, n), dtype=np.float64)
        for i in range(n):
            for j in range(n):
                field[i, j] = abs(pnoise2(i / frequency, j / frequency, base=self.base))
        return field

    def sample(self, frequency: float) -> np.ndarray:
        """Return the normalized field for the given frequency."""
        return normalize_field(self.sample_raw(frequency))

    def sample_fields(self, general_frequency: float, ground_frequency: float) -> NoiseFields:
        """Sample the terrain and land use fields of a run."""
        fields = NoiseFields(
            general=self.sample(general_frequency),
            ground=self.sample(ground_frequency),
        )
        logger.debug(
            "Sampled noise fields",
            grid_size=self.grid_size,
            base=self.base,
            general_frequency=general_frequency,
            ground_frequency=ground_frequency,
        )
        return fields

"""
Random number generation utilities.

Every generation run creates its own Alea PRNG through these helpers;
there is no process-wide generator. Python's random and NumPy's random
are not used so that a seed reproduces the same city everywhere.
"""

import uuid
from typing import Optional

from ..core.alea_prng import AleaPRNG


def new_seed() -> str:
    """Generate a short random seed string for runs started without one."""
    return str(uuid.uuid4())[:8]


def create_prng(seed: Optional[str] = None) -> AleaPRNG:
    """
    Create the run-level Alea PRNG.

    Args:
        seed: Seed string; "default" is used when omitted

    Returns:
        AleaPRNG instance owned by the caller
    """
    return AleaPRNG(seed if seed is not None else "default")


def cell_prng(seed: str, i: int, j: int) -> AleaPRNG:
    """
    Create the sub-generator for grid cell (i, j).

    The sub-generator depends only on the run seed and the coordinates,
    never on how many draws other cells made before it.
    """
    return AleaPRNG((seed, "cell", i, j))

"""
City generation pipeline.

A run samples both noise fields once, classifies the whole grid, and only
then generates buildings and trees cell by cell. Each cell draws from its
own sub-generator seeded from the run seed and its coordinates, so the
result is the same whether cells run sequentially or on a thread pool.
"""

import time
import numpy as np
import structlog
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Dict, List, Optional, Tuple

from ..config.city_options import CityOptions
from ..utils import random as prng_utils
from .buildings import BlockSubdivision, BuildingSubdivider, BuildingVolume
from .grid_classifier import CellType, GridClassifier, cell_type_counts
from .noise_field import NoiseFieldSampler, NoiseFields
from .terrain import Slab, build_terrain, scene_x, scene_z
from .vegetation import TreePlacement, VegetationScatterer

logger = structlog.get_logger()


@dataclass
class CellOutput:
    """Generation output of one building or park cell."""

    i: int
    j: int
    cell_type: CellType
    block: Optional[BlockSubdivision] = None
    trees: List[TreePlacement] = field(default_factory=list)


@dataclass
class CityLayout:
    """Fully generated city handed to a renderer."""

    options: CityOptions
    seed: str
    grid: np.ndarray
    fields: NoiseFields
    buildings: List[BuildingVolume]
    trees: List[TreePlacement]
    slabs: List[Slab]
    blocks: Dict[Tuple[int, int], BlockSubdivision]
    generation_time_seconds: float = 0.0

    def summary(self) -> Dict[str, int]:
        """Cell counts per type plus the number of buildings and trees."""
        counts = cell_type_counts(self.grid)
        counts["buildings"] = len(self.buildings)
        counts["tall_buildings"] = sum(1 for volume in self.buildings if volume.tall)
        counts["trees"] = len(self.trees)
        return counts

    def to_dict(self, include_noise: bool = False) -> dict:
        """JSON-ready representation of the layout."""
        data = {
            "seed": self.seed,
            "options": self.options.model_dump(),
            "grid": self.grid.astype(int).tolist(),
            "buildings": [volume.to_dict() for volume in self.buildings],
            "trees": [tree.to_dict() for tree in self.trees],
            "slabs": [slab.to_dict() for slab in self.slabs],
            "blocks": [
                {
                    "i": i,
                    "j": j,
                    "volume_count": len(block.volumes),
                    "batch_sizes": [len(batch) for batch in block.batches],
                }
                for (i, j), block in self.blocks.items()
            ],
            "summary": self.summary(),
            "generation_time_seconds": self.generation_time_seconds,
        }
        if include_noise:
            data["noise"] = {
                "general": self.fields.general.tolist(),
                "ground": self.fields.ground.tolist(),
            }
        return data


class CityGenerator:
    """Runs the full generation pipeline for one set of options."""

    def __init__(self, options: Optional[CityOptions] = None):
        """
        Initialize the generator.

        Args:
            options: Validated city options; defaults when omitted
        """
        self.options = options or CityOptions()
        self.seed = self.options.seed or prng_utils.new_seed()

    def sample_noise(self) -> NoiseFields:
        prng = prng_utils.create_prng(self.seed)
        sampler = NoiseFieldSampler(self.options.grid_size, prng)
        return sampler.sample_fields(
            self.options.general_noise_frequency,
            self.options.ground_noise_frequency,
        )

    def classify(self, fields: NoiseFields) -> np.ndarray:
        classifier = GridClassifier(
            fields,
            ground_threshold=self.options.ground_threshold,
            park_threshold=self.options.park_threshold,
            park_neighbor_threshold=self.options.park_neighbor_threshold,
        )
        return classifier.classify()

    def generate_cell(self, grid: np.ndarray, cell: Tuple[int, int]) -> CellOutput:
        """
        Generate the buildings or trees of one classified cell.

        Reads only the finished grid; safe to call from worker threads.
        """
        i, j = cell
        cell_type = CellType(int(grid[i, j]))
        output = CellOutput(i=i, j=j, cell_type=cell_type)
        x = scene_x(i, self.options)
        z = scene_z(j, self.options)

        if cell_type == CellType.BUILDING:
            subdivider = BuildingSubdivider(self.options, prng_utils.cell_prng(self.seed, i, j))
            output.block = subdivider.subdivide(subdivider.initial_footprint(x, z))
        elif cell_type == CellType.PARK:
            scatterer = VegetationScatterer(
                prng_utils.cell_prng(self.seed, i, j),
                min_tree_height=self.options.min_tree_height,
                max_tree_height=self.options.max_tree_height,
            )
            output.trees = scatterer.scatter(
                x, z, self.options.footprint_size, self.options.maximum_tree_density
            )

        return output

    def generate(self) -> CityLayout:
        """
        Generate the city.

        Returns:
            CityLayout with grid, building volumes, trees and terrain slabs
        """
        start_time = time.time()
        logger.info(
            "Starting city generation",
            seed=self.seed,
            grid_size=self.options.grid_size,
            workers=self.options.workers,
        )

        fields = self.sample_noise()
        grid = self.classify(fields)

        n = self.options.grid_size
        cells = [
            (i, j)
            for i in range(n)
            for j in range(n)
            if grid[i, j] in (CellType.BUILDING, CellType.PARK)
        ]

        generate_cell = partial(self.generate_cell, grid)
        if self.options.workers > 1 and len(cells) > 1:
            # map() yields in submission order, keeping grid scan order
            with ThreadPoolExecutor(max_workers=self.options.workers) as executor:
                outputs = list(executor.map(generate_cell, cells))
        else:
            outputs = [generate_cell(cell) for cell in cells]

        buildings = []
        trees = []
        blocks = {}
        for output in outputs:
            if output.block is not None:
                blocks[(output.i, output.j)] = output.block
                buildings.extend(output.block.volumes)
            trees.extend(output.trees)

        layout = CityLayout(
            options=self.options,
            seed=self.seed,
            grid=grid,
            fields=fields,
            buildings=buildings,
            trees=trees,
            slabs=build_terrain(grid, self.options),
            blocks=blocks,
            generation_time_seconds=time.time() - start_time,
        )

        logger.info("City generation completed", seed=self.seed, **layout.summary())
        return layout


def generate_city(options: Optional[CityOptions] = None, **kwargs) -> CityLayout:
    """
    Generate a city from options or option keyword arguments.

    Raises:
        CityConfigurationError: If keyword options are invalid
    """
    if options is None:
        options = CityOptions.build(**kwargs)
    elif kwargs:
        options = CityOptions.build(**{**options.model_dump(), **kwargs})
    return CityGenerator(options).generate()

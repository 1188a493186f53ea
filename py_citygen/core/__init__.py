"""
Core city generation functionality.
"""

from .alea_prng import AleaPRNG
from .noise_field import NoiseFieldSampler, NoiseFields, normalize_field
from .grid_classifier import CellType, GridClassifier, count_surrounding_buildings, neighborhood_size
from .buildings import BuildingSubdivider, BuildingVolume, BlockSubdivision, Footprint, split_footprint
from .vegetation import TreePlacement, VegetationScatterer
from .terrain import Slab, build_terrain, scene_x, scene_z
from .city_generator import CityGenerator, CityLayout, generate_city

__all__ = ['AleaPRNG', 'NoiseFieldSampler', 'NoiseFields', 'normalize_field',
           'CellType', 'GridClassifier', 'count_surrounding_buildings', 'neighborhood_size',
           'BuildingSubdivider', 'BuildingVolume', 'BlockSubdivision', 'Footprint', 'split_footprint',
           'TreePlacement', 'VegetationScatterer',
           'Slab', 'build_terrain', 'scene_x', 'scene_z',
           'CityGenerator', 'CityLayout', 'generate_city']

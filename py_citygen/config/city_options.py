"""
Generation options for a city run.

This module defines every numeric parameter that shapes a generated city,
with defaults, limits and cross-field validation rules. Options are
validated once at construction and are immutable afterwards; derive
changed options with CityOptions.build instead of assigning fields.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..errors import CityConfigurationError


class CityOptions(BaseModel):
    """Options controlling grid classification, buildings and parks."""

    model_config = ConfigDict(frozen=True)

    # Grid
    grid_size: int = Field(default=15, gt=0, description="Number of blocks per grid side")

    # Block geometry
    block_size: float = Field(default=150, gt=0, description="Side length of one grid block")
    block_margin: float = Field(default=10, gt=0, description="Margin between curb edge and buildings")
    road_width: float = Field(default=20, gt=0, description="Road width separating blocks")

    # Buildings
    min_building_height: int = Field(default=50, ge=0, description="Minimum base building height")
    max_building_height: int = Field(default=250, gt=0, description="Maximum base building height")
    max_building_height_deviation: int = Field(
        default=15, ge=0, description="Maximum height deviation between buildings of one block"
    )
    max_building_slice_deviation: int = Field(
        default=20, ge=0, description="Maximum offset applied when slicing a footprint"
    )
    tall_percentage_cutoff: float = Field(
        default=40, ge=0, le=100, description="Percentage of max height at which a building is tall"
    )
    block_subdivisions: int = Field(default=2, ge=0, description="Recursion depth for footprint splits")
    min_footprint_size: float = Field(
        default=1.0, gt=0, description="Smallest width/depth a split footprint may shrink to"
    )

    # Parks
    maximum_tree_density: int = Field(default=70, ge=0, description="Maximum number of trees per park")
    min_tree_height: int = Field(default=4, ge=0, description="Minimum tree height")
    max_tree_height: int = Field(default=10, ge=0, description="Maximum tree height")

    # Classification
    ground_threshold: float = Field(default=0.85, ge=0.0, le=1.0, description="Ground vs water threshold")
    park_threshold: float = Field(default=0.20, ge=0.0, le=1.0, description="Building vs open space threshold")
    park_neighbor_threshold: int = Field(
        default=5, ge=0, le=9, description="Open space with fewer surrounding buildings becomes a park"
    )
    general_noise_frequency: float = Field(default=15, gt=0, description="Terrain noise frequency")
    ground_noise_frequency: float = Field(default=8, gt=0, description="Land use noise frequency")

    # Base heights
    ground_height: float = Field(default=30, gt=0, description="Thickness of the city base")
    curb_height: float = Field(default=1, gt=0, description="Curb height; streets are twice as high")

    # Run
    seed: Optional[str] = Field(default=None, description="Seed for reproducible generation")
    workers: int = Field(default=1, ge=1, description="Threads used for per-cell generation")

    @model_validator(mode="after")
    def _check_ranges(self):
        if self.min_building_height > self.max_building_height:
            raise ValueError("min_building_height must not exceed max_building_height")
        if self.min_tree_height > self.max_tree_height:
            raise ValueError("min_tree_height must not exceed max_tree_height")
        if self.footprint_size <= 0:
            raise ValueError("block_size - road_width - 2 * block_margin must be positive")
        return self

    @property
    def curb_width(self) -> float:
        """Side length of a block's curb, the block minus its road."""
        return self.block_size - self.road_width

    @property
    def footprint_size(self) -> float:
        """Usable side length inside a curb, shared by buildings and parks."""
        return self.curb_width - 2 * self.block_margin

    @property
    def city_width(self) -> float:
        return self.block_size * self.grid_size

    @property
    def city_length(self) -> float:
        return self.block_size * self.grid_size

    @property
    def street_height(self) -> float:
        return 2 * self.curb_height

    @property
    def max_volumes_per_block(self) -> int:
        """Number of volumes a fully subdivided footprint produces."""
        return 2 ** self.block_subdivisions

    @classmethod
    def build(cls, **kwargs) -> "CityOptions":
        """
        Construct options, raising CityConfigurationError on invalid input.

        Args:
            **kwargs: Option values overriding the defaults

        Returns:
            Validated CityOptions
        """
        try:
            return cls(**kwargs)
        except ValidationError as e:
            raise CityConfigurationError(str(e)) from e

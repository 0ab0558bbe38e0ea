from pydantic import BaseModel, field_validator, model_validator

from shared.constants import (
    COMMANDS_PER_RUN,
    DEFAULT_BASE_LEVEL,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_COUNTER_HOLDER,
    DEFAULT_DATA_DIR,
    DEFAULT_DOWNSAMPLE,
    DEFAULT_LOADER_OBJECTIVE,
    DEFAULT_NAMESPACE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SCALE_M,
    MAX_FUNCTION_COMMANDS,
)


class GeoBoundingBox(BaseModel):
    """Geographic bounding box in decimal degrees (WGS84)."""

    model_config = {'frozen': True}

    west: float
    east: float
    south: float
    north: float

    @field_validator('west', 'east')
    @classmethod
    def validate_longitude(cls, v: float) -> float:
        if not (-180.0 <= v <= 180.0):
            msg = 'Longitude must be within [-180, 180]'
            raise ValueError(msg)
        return v

    @field_validator('south', 'north')
    @classmethod
    def validate_latitude(cls, v: float) -> float:
        if not (-90.0 <= v <= 90.0):
            msg = 'Latitude must be within [-90, 90]'
            raise ValueError(msg)
        return v

    @model_validator(mode='after')
    def validate_extent(self) -> 'GeoBoundingBox':
        if self.west >= self.east:
            msg = f'Degenerate bounding box: west ({self.west}) >= east ({self.east})'
            raise ValueError(msg)
        if self.south >= self.north:
            msg = f'Degenerate bounding box: south ({self.south}) >= north ({self.north})'
            raise ValueError(msg)
        return self

    @property
    def width_deg(self) -> float:
        return self.east - self.west

    @property
    def height_deg(self) -> float:
        return self.north - self.south

    def describe(self) -> str:
        return f'{self.west},{self.south} to {self.east},{self.north}'


class TerrainSettings(BaseModel):
    """
    Settings of one terrain generation run.

    Flat model; profiles store it in TOML sections (see toml_sections).
    """

    model_config = {
        'extra': 'ignore',  # ignore unknown keys from older profiles
    }

    # Human-readable region name (used in loader commentary)
    name: str = 'Terrain'

    bbox: GeoBoundingBox

    # Real-world metres per block level
    scale: float = DEFAULT_SCALE_M
    # Block level assigned to the lowest elevation of the region
    base_level: int = DEFAULT_BASE_LEVEL
    # Multiplier of the native 1 arc-second step
    downsample: int = DEFAULT_DOWNSAMPLE

    # Columns/rows per chunk function
    chunk_size: int = DEFAULT_CHUNK_SIZE
    # Function folder and scoreboard names for the loaders
    namespace: str = DEFAULT_NAMESPACE
    objective: str = DEFAULT_LOADER_OBJECTIVE
    counter_holder: str = DEFAULT_COUNTER_HOLDER

    # Folder with .hgt tiles and the behavior pack output folder
    data_dir: str = DEFAULT_DATA_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR

    # Optional extras
    export_structure: bool = False
    preview_image: bool = False

    @field_validator('scale')
    @classmethod
    def validate_scale(cls, v: float | str) -> float:
        fv = float(v)
        if fv <= 0:
            msg = 'Scale (metres per level) must be positive'
            raise ValueError(msg)
        return fv

    @field_validator('downsample')
    @classmethod
    def validate_downsample(cls, v: int) -> int:
        if v < 1:
            msg = 'Downsample factor must be a positive integer'
            raise ValueError(msg)
        return v

    @field_validator('chunk_size')
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        if v < 1:
            msg = 'Chunk size must be a positive integer'
            raise ValueError(msg)
        # Worst case: every column of the chunk is its own run
        if COMMANDS_PER_RUN * v * v > MAX_FUNCTION_COMMANDS:
            msg = (
                f'Chunk size {v} may exceed {MAX_FUNCTION_COMMANDS} commands '
                'per function'
            )
            raise ValueError(msg)
        return v

    @field_validator('namespace', 'objective', 'counter_holder')
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            msg = 'Identifiers must be non-empty and contain no whitespace'
            raise ValueError(msg)
        return v

    @property
    def effective_scale(self) -> float:
        """Horizontal metres per block (native step is ~30 m)."""
        return self.scale * self.downsample

# Height field construction
from heightfield.builder import HeightField, build_height_field, elevation_to_level

__all__ = [
    'HeightField',
    'build_height_field',
    'elevation_to_level',
]

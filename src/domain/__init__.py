"""Domain layer - run settings and profiles."""
from domain.models import GeoBoundingBox, TerrainSettings
from domain.profiles import (
    default_settings,
    delete_profile,
    ensure_profiles_dir,
    list_profiles,
    load_profile,
    save_profile,
)

__all__ = [
    'GeoBoundingBox',
    'TerrainSettings',
    'default_settings',
    'delete_profile',
    'ensure_profiles_dir',
    'list_profiles',
    'load_profile',
    'save_profile',
]

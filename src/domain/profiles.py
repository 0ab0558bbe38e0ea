import logging
import os
from pathlib import Path

import tomlkit

from domain.models import GeoBoundingBox, TerrainSettings
from domain.toml_sections import flat_to_sectioned, sectioned_to_flat
from shared.constants import (
    APP_DIR_NAME,
    DEFAULT_BBOX_EAST,
    DEFAULT_BBOX_NORTH,
    DEFAULT_BBOX_SOUTH,
    DEFAULT_BBOX_WEST,
    DEFAULT_PROFILE_NAME,
)

logger = logging.getLogger(__name__)


def _user_profiles_dir() -> Path:
    """
    Determine profiles directory.

    1) If <project_root>/configs/profiles exists, use it (run-from-repo setups).
    2) Otherwise, fall back to %APPDATA%/SRTMTerrain/configs/profiles
       or ~/AppData/Roaming/SRTMTerrain/configs/profiles when APPDATA is not set.
    """
    project_root = Path(__file__).resolve().parent.parent.parent
    local_profiles = project_root / 'configs' / 'profiles'
    if local_profiles.exists():
        return local_profiles

    return (
        Path(os.getenv('APPDATA') or (Path.home() / 'AppData' / 'Roaming'))
        / APP_DIR_NAME
        / 'configs'
        / 'profiles'
    )


def ensure_profiles_dir() -> Path:
    profiles_dir = _user_profiles_dir()
    profiles_dir.mkdir(parents=True, exist_ok=True)
    return profiles_dir


def list_profiles() -> list[str]:
    """Profile names without extension."""
    folder = ensure_profiles_dir()
    return sorted(p.stem for p in folder.glob('*.toml') if p.is_file())


def profile_path(name: str) -> Path:
    """Path of the profile file for a profile name."""
    return ensure_profiles_dir() / f'{name}.toml'


def default_settings() -> TerrainSettings:
    """Settings baked into the program, used when no profile is given."""
    return TerrainSettings(
        name='Moldova',
        bbox=GeoBoundingBox(
            west=DEFAULT_BBOX_WEST,
            east=DEFAULT_BBOX_EAST,
            south=DEFAULT_BBOX_SOUTH,
            north=DEFAULT_BBOX_NORTH,
        ),
    )


def load_profile(name_or_path: str) -> TerrainSettings:
    """
    Load and validate a TOML profile into TerrainSettings.

    Accepts either a profile name (without .toml) from the profiles folder
    or a path to a TOML file.
    """
    p = Path(name_or_path)
    path = (
        p if p.suffix.lower() == '.toml' and p.exists() else profile_path(name_or_path)
    )
    if not path.exists():
        if name_or_path == DEFAULT_PROFILE_NAME:
            logger.info('Default profile file missing, using built-in settings')
            return default_settings()
        msg = f'Profile not found: {path}'
        raise FileNotFoundError(msg)
    text = path.read_text(encoding='utf-8')
    data = tomlkit.parse(text).unwrap()
    settings = TerrainSettings.model_validate(sectioned_to_flat(data))
    logger.info('Loaded profile %s (%s)', path, settings.bbox.describe())
    return settings


def save_profile(name: str, settings: TerrainSettings) -> Path:
    """Save a profile as sectioned TOML (no atomic replace, no backups)."""
    path = profile_path(name)
    data = flat_to_sectioned(settings.model_dump(mode='json'))
    text = tomlkit.dumps(data)
    path.write_text(text, encoding='utf-8')
    return path


def delete_profile(name: str) -> None:
    """Delete a profile file if it exists."""
    path = profile_path(name)
    if path.exists():
        path.unlink()

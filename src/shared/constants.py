from enum import Enum

# --- SRTM tiles
# Samples per side of an SRTM1 (1 arc-second) tile
SRTM1_SAMPLES = 3601

# Sample value marking a void (no data)
SRTM_NODATA = -32768

# Elevation reported for voids and for cells outside tile coverage (metres)
FALLBACK_ELEVATION_M = 0

# Native angular step of SRTM1 data (degrees)
ARC_SECOND_DEG = 1.0 / 3600.0

# Tile file extension
TILE_EXTENSION = '.hgt'

# Default folder with .hgt tiles (relative to the working directory)
DEFAULT_DATA_DIR = 'data/srtm'

# Default output folder (the behavior pack root)
DEFAULT_OUTPUT_DIR = 'behavior_packs/discovery'

# --- Baked-in region (Moldova, Chisinau surroundings)
DEFAULT_PROFILE_NAME = 'moldova'
DEFAULT_BBOX_WEST = 28.546326
DEFAULT_BBOX_EAST = 29.068520
DEFAULT_BBOX_SOUTH = 46.923556
DEFAULT_BBOX_NORTH = 47.086272

# --- Height mapping
# Real-world metres per block level
DEFAULT_SCALE_M = 30.0
# Block Y level for the lowest elevation of the region
DEFAULT_BASE_LEVEL = 64
# Extra downsampling factor applied to the native angular step
DEFAULT_DOWNSAMPLE = 4

# --- Bedrock command host limits
# Maximum commands a single .mcfunction file may contain
MAX_FUNCTION_COMMANDS = 10000
# Maximum number of blocks a single /fill may touch
MAX_FILL_VOLUME = 32768
# Commands emitted per run of equal-level columns (stone, dirt, surface)
COMMANDS_PER_RUN = 3

# --- Chunk loaders
# Columns/rows per chunk function
DEFAULT_CHUNK_SIZE = 16
# Function namespace (sub-folder under functions/)
DEFAULT_NAMESPACE = 'terrain'
# Scoreboard objective and fake player driving the incremental loader
DEFAULT_LOADER_OBJECTIVE = 'loader'
DEFAULT_COUNTER_HOLDER = 'terrain_row'

# Function file extension
FUNCTION_EXTENSION = '.mcfunction'
# Folder for functions inside the behavior pack
FUNCTIONS_DIR = 'functions'

# --- Column layering
# Dirt layers under the surface block
DIRT_DEPTH = 3
# Depth below the surface where stone starts
STONE_OFFSET = DIRT_DEPTH + 1


class Block(str, Enum):
    """Block identifiers used by the emitters."""

    STONE = 'stone'
    DIRT = 'dirt'
    GRASS = 'grass_block'
    COARSE_DIRT = 'coarse_dirt'

    def namespaced(self) -> str:
        return f'minecraft:{self.value}'


# --- Structure export
# format_version written into structure JSON
STRUCTURE_FORMAT_VERSION = '1.20.0'
# Surface material thresholds by real elevation (metres)
SURFACE_GRASS_MAX_M = 150
SURFACE_COARSE_DIRT_MAX_M = 250

# --- Preview image
# Colour ramp for level preview (position 0..1 -> RGB)
ELEVATION_COLOR_RAMP = [
    (0.00, (0, 0, 130)),  # deep blue
    (0.15, (0, 100, 200)),  # blue
    (0.30, (0, 160, 100)),  # green
    (0.45, (180, 200, 0)),  # yellowish
    (0.60, (200, 140, 0)),  # orange
    (0.75, (160, 80, 30)),  # brown
    (0.90, (220, 220, 220)),  # light gray
    (1.00, (255, 255, 255)),  # white
]
# LUT resolution for the colour ramp
PREVIEW_LUT_SIZE = 2048
# Preview file name inside the output folder
PREVIEW_FILE_NAME = 'terrain_preview.png'
# Structure file name inside the output folder
STRUCTURE_FILE_NAME = 'terrain_structure.json'

# --- Logging
# Application folder name under LOCALAPPDATA
APP_DIR_NAME = 'SRTMTerrain'
LOG_FILE_NAME = 'terrain_loader.log'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Availability flags for optional libs
PSUTIL_AVAILABLE = True

"""
Diagnostic utilities.

Reports process memory while large elevation tiles are held in memory and
estimates the footprint of a run before it starts.
"""

import logging
from typing import Any

import psutil

from shared.constants import PSUTIL_AVAILABLE as _PSUTIL_AVAILABLE

logger = logging.getLogger(__name__)

_MB = 1024 * 1024
# int16 tile samples
_BYTES_PER_TILE_SAMPLE = 2
# int32 elevations + int32 levels + bool mask per grid cell
_BYTES_PER_GRID_CELL = 4 + 4 + 1


def get_memory_info() -> dict[str, Any]:
    """Get memory usage of the process and the system."""
    if not _PSUTIL_AVAILABLE:
        return {'error': 'psutil not available'}

    try:
        process = psutil.Process()
        memory_info = process.memory_info()
        system_memory = psutil.virtual_memory()

        return {
            'process_rss_mb': round(memory_info.rss / _MB, 2),
            'process_vms_mb': round(memory_info.vms / _MB, 2),
            'system_total_mb': round(system_memory.total / _MB, 2),
            'system_available_mb': round(system_memory.available / _MB, 2),
            'system_used_percent': system_memory.percent,
            'process_memory_percent': round(process.memory_percent(), 2),
        }
    except psutil.Error as e:
        return {'error': f'Failed to get memory info: {e}'}


def log_memory_usage(context: str = '') -> None:
    """Quick memory usage logging."""
    memory_info = get_memory_info()
    context_label = f' ({context})' if context else ''
    logger.info(
        'Memory usage%s: RSS=%sMB, Available=%sMB',
        context_label,
        memory_info.get('process_rss_mb', 'N/A'),
        memory_info.get('system_available_mb', 'N/A'),
    )


def estimate_run_memory_mb(
    tiles_count: int,
    tile_samples: int,
    width: int,
    height: int,
) -> dict[str, float]:
    """
    Estimate peak memory of one run.

    Tiles stay cached for the whole run, so their arrays dominate; the grid
    arrays (elevations, mask, levels) come on top.
    """
    tiles_mb = tiles_count * tile_samples * tile_samples * _BYTES_PER_TILE_SAMPLE / _MB
    grid_mb = width * height * _BYTES_PER_GRID_CELL / _MB
    return {
        'tiles_mb': round(tiles_mb, 2),
        'grid_mb': round(grid_mb, 2),
        'peak_mb': round(tiles_mb + grid_mb, 2),
    }


def warn_if_low_memory(estimate: dict[str, float]) -> bool:
    """Log a warning when the estimate exceeds available memory.

    Returns:
        True if the estimate fits into available memory (or it is unknown).
    """
    available = get_memory_info().get('system_available_mb')
    if available is None:
        return True
    if estimate['peak_mb'] > available:
        logger.warning(
            'Estimated peak memory %.1fMB exceeds available %.1fMB',
            estimate['peak_mb'],
            available,
        )
        return False
    return True

"""Terrain generation job: SRTM tiles -> height field -> .mcfunction loaders."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from domain.models import TerrainSettings
from elevation.store import ElevationTileStore, grid_dimensions
from emitter.loader import LoaderCounter, LoaderReport, generate_loader_functions
from emitter.structure import export_structure_json
from emitter.writer import FunctionWriter
from heightfield.builder import build_height_field
from render.preview import save_height_preview
from shared.constants import (
    ARC_SECOND_DEG,
    PREVIEW_FILE_NAME,
    SRTM1_SAMPLES,
    STRUCTURE_FILE_NAME,
)
from shared.diagnostics import (
    estimate_run_memory_mb,
    log_memory_usage,
    warn_if_low_memory,
)

logger = logging.getLogger(__name__)


@dataclass
class TerrainReport:
    """Summary statistics of one run."""

    width: int
    length: int
    min_elevation: int
    max_elevation: int
    min_level: int
    max_level: int
    missing_samples: int
    nodata_samples: int
    loader: LoaderReport
    extra_files: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return self.missing_samples > 0


def preload_required_tiles(store: ElevationTileStore, settings: TerrainSettings) -> int:
    """Load every tile the region needs; a missing tile raises and halts."""
    keys = store.required_tiles(settings.bbox)
    logger.info('Loading %d SRTM tiles...', len(keys))
    for key in keys:
        store.load_tile(key.name)
    return len(keys)


def generate_terrain(
    settings: TerrainSettings,
    *,
    strict_tiles: bool = True,
) -> TerrainReport:
    """
    Run the whole pipeline for one region.

    Args:
        settings: Region, mapping and output settings.
        strict_tiles: Require every intersecting tile up front. When False,
            missing tiles are warned about and their cells fall back to 0 m.

    Returns:
        TerrainReport with dimensions, ranges and file counts.
    """
    logger.info('=== Terrain Loader Generator ===')
    logger.info('Region: %s (%s)', settings.name, settings.bbox.describe())
    logger.info(
        'Scale: 1:%g effective, downsample %dx',
        settings.effective_scale,
        settings.downsample,
    )

    step = ARC_SECOND_DEG * settings.downsample
    width, length = grid_dimensions(settings.bbox, step)
    store = ElevationTileStore(settings.data_dir)
    estimate = estimate_run_memory_mb(
        len(store.required_tiles(settings.bbox)), SRTM1_SAMPLES, width, length
    )
    warn_if_low_memory(estimate)

    if strict_tiles:
        preload_required_tiles(store, settings)
        log_memory_usage('tiles loaded')

    elevation = store.region_elevation(settings.bbox, settings.downsample)
    height_field = build_height_field(elevation, settings.scale, settings.base_level)

    output_dir = Path(settings.output_dir)
    counter = LoaderCounter(objective=settings.objective, holder=settings.counter_holder)
    with FunctionWriter(output_dir) as writer:
        loader = generate_loader_functions(
            height_field,
            writer,
            chunk_size=settings.chunk_size,
            title=settings.name,
            namespace=settings.namespace,
            counter=counter,
        )

    extras: list[str] = []
    if settings.export_structure:
        path = output_dir / STRUCTURE_FILE_NAME
        export_structure_json(height_field, path)
        extras.append(str(path))
    if settings.preview_image:
        path = output_dir / PREVIEW_FILE_NAME
        save_height_preview(height_field, path)
        extras.append(str(path))

    report = TerrainReport(
        width=height_field.width,
        length=height_field.length,
        min_elevation=elevation.min_elevation,
        max_elevation=elevation.max_elevation,
        min_level=height_field.min_level,
        max_level=height_field.max_level,
        missing_samples=elevation.missing_samples,
        nodata_samples=elevation.nodata_samples,
        loader=loader,
        extra_files=extras,
    )
    log_summary(report)
    return report


def log_summary(report: TerrainReport) -> None:
    logger.info('=== Summary ===')
    logger.info('  Terrain size: %d x %d blocks', report.width, report.length)
    logger.info(
        '  Elevation: %dm to %dm', report.min_elevation, report.max_elevation
    )
    logger.info('  Height range: Y%d to Y%d', report.min_level, report.max_level)
    logger.info(
        '  Chunks: %d (%d x %d), fill commands: %d, files: %d',
        report.loader.chunk_count,
        report.loader.chunks_x,
        report.loader.chunks_z,
        report.loader.fill_commands,
        len(report.loader.files) + len(report.extra_files),
    )
    if report.degraded:
        logger.warning(
            '  Degraded coverage: %d samples without tile data', report.missing_samples
        )
    if report.nodata_samples:
        logger.info('  Void samples: %d', report.nodata_samples)

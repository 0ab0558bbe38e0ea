"""Chunk functions and loading protocols for the Bedrock command host.

The host runs a function as one program, with a cap on commands per file and
a per-run command budget. The terrain is therefore written as independently
callable chunk functions plus three ways to call them:

- all-at-once: one function calling every chunk (only for small regions);
- row batch: one function per chunk row;
- incremental: a dispatcher that runs exactly one row per invocation,
  selected by a scoreboard counter that persists in the world between
  invocations.

Counter contract (read-modify-write, single writer): invocation N reads the
value N-1, runs row N-1, then increments. When the value reaches the row
count the dispatcher announces completion and resets it to 0. Only one
player or command block may drive the dispatcher at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from emitter.chunks import chunk_grid_size, partition
from emitter.commands import function_call
from emitter.runs import chunk_fills
from shared.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_COUNTER_HOLDER,
    DEFAULT_LOADER_OBJECTIVE,
    DEFAULT_NAMESPACE,
)
from shared.progress import ConsoleProgress

if TYPE_CHECKING:
    from emitter.chunks import ChunkSpec
    from emitter.writer import FunctionWriter
    from heightfield.builder import HeightField

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoaderCounter:
    """Scoreboard value persisted by the host (objective + fake player)."""

    objective: str = DEFAULT_LOADER_OBJECTIVE
    holder: str = DEFAULT_COUNTER_HOLDER

    def create(self) -> str:
        # Fails harmlessly when the objective exists, so it is never duplicated
        return f'scoreboard objectives add {self.objective} dummy'

    def reset(self) -> str:
        return f'scoreboard players set {self.holder} {self.objective} 0'

    def increment(self) -> str:
        return f'scoreboard players add {self.holder} {self.objective} 1'

    def when(self, matches: str, command: str) -> str:
        return f'execute if score {self.holder} {self.objective} matches {matches} run {command}'


@dataclass
class LoaderReport:
    """Counts of what generate_loader_functions wrote."""

    chunks_x: int
    chunks_z: int
    fill_commands: int = 0
    blocks: int = 0
    files: list[str] = field(default_factory=list)

    @property
    def chunk_count(self) -> int:
        return self.chunks_x * self.chunks_z


def loader_names(namespace: str) -> dict[str, str]:
    """Function names of the loader entry points."""
    return {
        'all': f'load_{namespace}',
        'incremental': f'load_{namespace}_row',
        'setup': f'setup_{namespace}',
    }


def all_at_once_loader(
    title: str,
    width: int,
    length: int,
    chunk_names: list[str],
    namespace: str = DEFAULT_NAMESPACE,
) -> list[str]:
    lines = [
        f'# {title} Terrain Loader',
        '# Generated from SRTM elevation data',
        f'# Size: {width} x {length} blocks',
        '# Run this function from where you want the terrain origin',
        '',
        f'say Loading {title} terrain ({len(chunk_names)} chunks)...',
        '',
    ]
    lines.extend(function_call(namespace, name) for name in chunk_names)
    lines.extend(['', 'say Terrain generation complete!'])
    return lines


def row_loader(
    cz: int,
    rows: int,
    chunk_names: list[str],
    namespace: str = DEFAULT_NAMESPACE,
) -> list[str]:
    lines = [f'# Row {cz + 1} of {rows}']
    lines.extend(function_call(namespace, name) for name in chunk_names)
    return lines


def incremental_loader(
    rows: int,
    counter: LoaderCounter,
    namespace: str = DEFAULT_NAMESPACE,
) -> list[str]:
    lines = [
        '# Progressive row loader - run multiple times',
        '# Each run loads one row of the terrain',
        '',
    ]
    lines.extend(
        counter.when(str(i), function_call(namespace, f'row_{i}')) for i in range(rows)
    )
    lines.extend(
        [
            '',
            counter.increment(),
            counter.when(f'{rows}..', 'say Terrain complete!'),
            counter.when(f'{rows}..', counter.reset()),
        ]
    )
    return lines


def setup_loader(counter: LoaderCounter, namespace: str = DEFAULT_NAMESPACE) -> list[str]:
    incremental = loader_names(namespace)['incremental']
    return [
        f'# Run this once before using {incremental}',
        counter.create(),
        counter.reset(),
        f'say Terrain loader initialized. Run /function {incremental} repeatedly.',
    ]


def generate_loader_functions(
    height_field: HeightField,
    writer: FunctionWriter,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    title: str = 'Terrain',
    namespace: str = DEFAULT_NAMESPACE,
    counter: LoaderCounter | None = None,
) -> LoaderReport:
    """Write chunk functions and all loader entry points.

    Args:
        height_field: Levels to emit.
        writer: Destination pack.
        chunk_size: Columns/rows per chunk function.
        title: Region name for commentary lines.
        namespace: Sub-folder of functions/ for chunk and row functions.
        counter: Scoreboard counter of the incremental loader.

    Returns:
        LoaderReport with chunk, command and file counts.
    """
    counter = counter or LoaderCounter()
    width, length = height_field.width, height_field.length
    chunks_x, chunks_z = chunk_grid_size(width, length, chunk_size)
    if height_field.is_empty:
        chunks_x = chunks_z = 0
    report = LoaderReport(chunks_x=chunks_x, chunks_z=chunks_z)
    logger.info(
        'Generating %d chunk loaders (%d x %d)', report.chunk_count, chunks_x, chunks_z
    )

    chunks: list[ChunkSpec] = []
    progress = ConsoleProgress(report.chunk_count, label='Chunks')
    for chunk in partition(width, length, chunk_size):
        fills = chunk_fills(height_field, chunk)
        path = writer.write(f'{namespace}/{chunk.name}', [f.render() for f in fills])
        report.fill_commands += len(fills)
        report.blocks += sum(f.volume for f in fills)
        report.files.append(str(path))
        chunks.append(chunk)
        progress.step()
    progress.close()

    names = loader_names(namespace)
    path = writer.write(
        names['all'],
        all_at_once_loader(title, width, length, [c.name for c in chunks], namespace),
    )
    report.files.append(str(path))

    for cz in range(chunks_z):
        row_chunks = [c.name for c in chunks if c.cz == cz]
        path = writer.write(
            f'{namespace}/row_{cz}', row_loader(cz, chunks_z, row_chunks, namespace)
        )
        report.files.append(str(path))

    path = writer.write(names['incremental'], incremental_loader(chunks_z, counter, namespace))
    report.files.append(str(path))
    path = writer.write(names['setup'], setup_loader(counter, namespace))
    report.files.append(str(path))

    logger.info(
        'Wrote %d fill commands (%d blocks) in %d files',
        report.fill_commands,
        report.blocks,
        len(report.files),
    )
    return report

"""Run-length compression of height field rows into /fill commands.

Each row (fixed z) is scanned left to right; consecutive columns with the
same level form a run, and every run becomes three fills: a stone base, a
dirt layer and a surface layer. The number of commands therefore grows with
the number of runs, not with the number of columns.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from emitter.commands import FillCommand
from shared.constants import DIRT_DEPTH, MAX_FILL_VOLUME, STONE_OFFSET, Block

if TYPE_CHECKING:
    from emitter.chunks import ChunkSpec
    from heightfield.builder import HeightField


@dataclass(frozen=True)
class Run:
    """Columns start..end (inclusive) of one row sharing a level."""

    start: int
    end: int
    level: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


def iter_runs(row: Sequence[int], start: int, end: int) -> Iterator[Run]:
    """Greedy scan of row[start:end] into maximal equal-level runs."""
    if start >= end:
        return
    run_start = start
    run_level = int(row[start])
    for x in range(start + 1, end + 1):
        # x == end closes the last run
        level = int(row[x]) if x < end else None
        if x == end or level != run_level:
            yield Run(run_start, x - 1, run_level)
            run_start = x
            run_level = level


def split_fill(fill: FillCommand, max_volume: int = MAX_FILL_VOLUME) -> list[FillCommand]:
    """Split a fill into horizontal slabs that each fit max_volume."""
    if fill.volume <= max_volume:
        return [fill]
    footprint = (abs(fill.x2 - fill.x1) + 1) * (abs(fill.z2 - fill.z1) + 1)
    slab = max(1, max_volume // footprint)
    y_lo, y_hi = min(fill.y1, fill.y2), max(fill.y1, fill.y2)
    parts: list[FillCommand] = []
    for y in range(y_lo, y_hi + 1, slab):
        parts.append(
            FillCommand(
                fill.x1, y, fill.z1,
                fill.x2, min(y + slab - 1, y_hi), fill.z2,
                fill.block,
            )
        )
    return parts


def run_fills(run: Run, z: int, min_level: int) -> list[FillCommand]:
    """Stone base, dirt layer and surface for one run."""
    level = run.level
    fills = [
        FillCommand(
            run.start, min_level - STONE_OFFSET, z,
            run.end, level - STONE_OFFSET, z,
            Block.STONE.value,
        ),
        FillCommand(
            run.start, level - DIRT_DEPTH, z,
            run.end, level - 1, z,
            Block.DIRT.value,
        ),
        FillCommand(run.start, level, z, run.end, level, z, Block.GRASS.value),
    ]
    result: list[FillCommand] = []
    for fill in fills:
        result.extend(split_fill(fill))
    return result


def chunk_fills(height_field: HeightField, chunk: ChunkSpec) -> list[FillCommand]:
    """Compressed fills for every row of a chunk."""
    fills: list[FillCommand] = []
    for z in range(chunk.z0, chunk.z1):
        row = height_field.levels[z]
        for run in iter_runs(row, chunk.x0, chunk.x1):
            fills.extend(run_fills(run, z, height_field.min_level))
    return fills


def expand_fills(fills: Iterable[FillCommand]) -> dict[tuple[int, int, int], str]:
    """Per-block assignments produced by executing fills in order."""
    blocks: dict[tuple[int, int, int], str] = {}
    for fill in fills:
        for cell in fill.cells():
            blocks[cell] = fill.block
    return blocks


def surface_levels(fills: Iterable[FillCommand]) -> dict[tuple[int, int], int]:
    """Top surface level of every (x, z) column touched by fills."""
    tops: dict[tuple[int, int], int] = {}
    for fill in fills:
        if fill.block != Block.GRASS.value:
            continue
        for x, y, z in fill.cells():
            tops[(x, z)] = max(y, tops.get((x, z), y))
    return tops

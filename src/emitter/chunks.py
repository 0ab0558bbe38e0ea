from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkSpec:
    """Square partition of the height field: columns x0..x1, rows z0..z1 (exclusive)."""

    cx: int
    cz: int
    x0: int
    x1: int
    z0: int
    z1: int

    @property
    def name(self) -> str:
        return f'chunk_{self.cx}_{self.cz}'

    @property
    def columns(self) -> int:
        return (self.x1 - self.x0) * (self.z1 - self.z0)


def chunk_grid_size(width: int, length: int, chunk_size: int) -> tuple[int, int]:
    """Number of chunks along x and z."""
    if chunk_size < 1:
        msg = 'chunk_size must be a positive integer'
        raise ValueError(msg)
    return -(-width // chunk_size), -(-length // chunk_size)


def partition(width: int, length: int, chunk_size: int) -> Iterator[ChunkSpec]:
    """Chunks covering [0, width) x [0, length) once, in row-major order."""
    chunks_x, chunks_z = chunk_grid_size(width, length, chunk_size)
    for cz in range(chunks_z):
        for cx in range(chunks_x):
            x0 = cx * chunk_size
            z0 = cz * chunk_size
            yield ChunkSpec(
                cx=cx,
                cz=cz,
                x0=x0,
                x1=min(x0 + chunk_size, width),
                z0=z0,
                z1=min(z0 + chunk_size, length),
            )

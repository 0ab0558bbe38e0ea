from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

_FILL_RE = re.compile(
    r'^fill ~(-?\d+) ~(-?\d+) ~(-?\d+) ~(-?\d+) ~(-?\d+) ~(-?\d+) (\S+)$'
)


@dataclass(frozen=True)
class FillCommand:
    """A /fill over a cuboid in execution-relative coordinates."""

    x1: int
    y1: int
    z1: int
    x2: int
    y2: int
    z2: int
    block: str

    @property
    def volume(self) -> int:
        return (
            (abs(self.x2 - self.x1) + 1)
            * (abs(self.y2 - self.y1) + 1)
            * (abs(self.z2 - self.z1) + 1)
        )

    def render(self) -> str:
        return (
            f'fill ~{self.x1} ~{self.y1} ~{self.z1} '
            f'~{self.x2} ~{self.y2} ~{self.z2} {self.block}'
        )

    def cells(self) -> Iterator[tuple[int, int, int]]:
        """Every (x, y, z) covered by the fill."""
        for x in range(min(self.x1, self.x2), max(self.x1, self.x2) + 1):
            for y in range(min(self.y1, self.y2), max(self.y1, self.y2) + 1):
                for z in range(min(self.z1, self.z2), max(self.z1, self.z2) + 1):
                    yield x, y, z

    @classmethod
    def parse(cls, line: str) -> FillCommand:
        match = _FILL_RE.match(line.strip())
        if match is None:
            msg = f'Not a relative fill command: {line!r}'
            raise ValueError(msg)
        *coords, block = match.groups()
        x1, y1, z1, x2, y2, z2 = (int(c) for c in coords)
        return cls(x1, y1, z1, x2, y2, z2, block)


def function_call(namespace: str, name: str) -> str:
    return f'function {namespace}/{name}'

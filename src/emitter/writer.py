"""Writer for .mcfunction files of a behavior pack.

Writes are synchronous and not transactional: a crash leaves the files
written so far, and the run is repeated from scratch.
"""

from __future__ import annotations

import logging
from pathlib import Path

from shared.constants import (
    FUNCTION_EXTENSION,
    FUNCTIONS_DIR,
    MAX_FUNCTION_COMMANDS,
)

logger = logging.getLogger(__name__)


class FunctionWriter:
    """Writes command lists as functions under ``<pack>/functions``.

    Usage:
        with FunctionWriter('behavior_packs/discovery') as writer:
            writer.write('terrain/chunk_0_0', commands)
    """

    def __init__(self, pack_dir: str | Path) -> None:
        """Initialize the writer.

        Args:
            pack_dir: Behavior pack root; functions go to its functions/ folder.
        """
        self.pack_dir = Path(pack_dir)
        self.functions_dir = self.pack_dir / FUNCTIONS_DIR
        self._stats_files = 0
        self._stats_commands = 0
        self._stats_oversized = 0
        self._written: list[Path] = []

    def function_path(self, name: str) -> Path:
        """Path of function ``name`` (may contain '/' sub-folders)."""
        return self.functions_dir / f'{name}{FUNCTION_EXTENSION}'

    def write(self, name: str, lines: list[str]) -> Path:
        """Write one function file, newline-joined.

        Args:
            name: Function name relative to functions/, e.g. 'terrain/row_0'.
            lines: Commands and '#' comment lines.

        Returns:
            Path of the written file.
        """
        path = self.function_path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text('\n'.join(lines), encoding='utf-8')

        commands = sum(1 for line in lines if line and not line.startswith('#'))
        if commands > MAX_FUNCTION_COMMANDS:
            self._stats_oversized += 1
            logger.warning(
                'Function %s has %d commands, host limit is %d',
                name,
                commands,
                MAX_FUNCTION_COMMANDS,
            )
        self._stats_files += 1
        self._stats_commands += commands
        self._written.append(path)
        return path

    @property
    def written(self) -> list[Path]:
        return list(self._written)

    @property
    def stats(self) -> dict:
        """Get writer statistics."""
        return {
            'files': self._stats_files,
            'commands': self._stats_commands,
            'oversized': self._stats_oversized,
        }

    def __enter__(self) -> FunctionWriter:
        self.functions_dir.mkdir(parents=True, exist_ok=True)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            logger.info(
                'FunctionWriter finished: %d files, %d commands in %s',
                self._stats_files,
                self._stats_commands,
                self.functions_dir,
            )
        else:
            logger.error(
                'FunctionWriter aborted after %d files in %s',
                self._stats_files,
                self.functions_dir,
            )

"""Emitters for Bedrock .mcfunction terrain loaders.

This module provides:
- FillCommand: relative /fill command model
- iter_runs / chunk_fills: run-length compression of height field rows
- partition: chunk tiling of the height field
- generate_loader_functions: chunk functions plus loader entry points
- FunctionWriter: .mcfunction file writer
- export_structure_json: block-list structure export
"""

from emitter.chunks import ChunkSpec, chunk_grid_size, partition
from emitter.commands import FillCommand
from emitter.loader import LoaderCounter, LoaderReport, generate_loader_functions
from emitter.runs import Run, chunk_fills, iter_runs
from emitter.structure import export_structure_json
from emitter.writer import FunctionWriter

__all__ = [
    'ChunkSpec',
    'FillCommand',
    'FunctionWriter',
    'LoaderCounter',
    'LoaderReport',
    'Run',
    'chunk_fills',
    'chunk_grid_size',
    'export_structure_json',
    'generate_loader_functions',
    'iter_runs',
    'partition',
]

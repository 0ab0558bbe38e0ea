"""Shared utilities and helpers."""
from shared.diagnostics import (
    estimate_run_memory_mb,
    log_memory_usage,
    warn_if_low_memory,
)
from shared.progress import ConsoleProgress

__all__ = [
    'ConsoleProgress',
    'estimate_run_memory_mb',
    'log_memory_usage',
    'warn_if_low_memory',
]

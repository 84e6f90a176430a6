"""Timing utilities for sync stages."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Dict


@contextmanager
def timed(stage: str, metrics: Dict[str, int]):
    """Record the wall time of the wrapped block as ``<stage>_ms`` in milliseconds."""
    start = time.monotonic()
    try:
        yield
    finally:
        metrics[f"{stage}_ms"] = int((time.monotonic() - start) * 1000)

# -*- coding: utf-8 -*-
"""Error types raised by the extraction pipeline."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ConfigError",
    "DatasetWriteError",
    "ExtractionError",
    "MalformedRecordError",
    "NoItemsFoundError",
]


class ExtractionError(RuntimeError):
    """Fatal pipeline error: the run produces no output."""


class ConfigError(ExtractionError):
    pass


class NoItemsFoundError(ExtractionError):
    pass


class DatasetWriteError(ExtractionError):
    pass


class MalformedRecordError(ValueError):
    """A single record failed numeric parsing or structural checks.

    Raised inside parsers and caught at file granularity; it never aborts a run.
    """

    def __init__(self, message: str, *, source: Optional[str] = None, field: Optional[str] = None):
        self.source = source
        self.field = field
        prefix = f"{source}: " if source else ""
        super().__init__(prefix + message)

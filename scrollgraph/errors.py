from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when series input cannot be turned into points."""


class GraphStateError(RuntimeError):
    """Raised when an operation needs a graph configuration that is not enabled."""


class SeriesIndexError(IndexError):
    """Raised when a series index is outside the attached series range."""


class SeriesAttachError(ValueError):
    """Raised when a series is already owned by another graph."""

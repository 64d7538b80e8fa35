"""Service module exports."""

from . import aggregation, export_csv, overview, store

__all__ = [
    "aggregation",
    "export_csv",
    "overview",
    "store",
]

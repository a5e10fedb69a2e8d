"""Offline loading and exporting of provider snapshots and reconciliation results."""
from __future__ import annotations

from .exporters import export_enriched_calls, results_to_dataframe
from .loaders import UnsupportedFileTypeError, load_calls, load_contacts, load_conversations

__all__ = [
    "UnsupportedFileTypeError",
    "export_enriched_calls",
    "load_calls",
    "load_contacts",
    "load_conversations",
    "results_to_dataframe",
]

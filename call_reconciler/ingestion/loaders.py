"""Utilities for loading exported provider snapshots from disk."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

import pandas as pd

from ..models import CallRecord, ContactEntry, ConversationRecord

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]
T = TypeVar("T")

_JSON_SUFFIXES = {".json"}
_TABULAR_SUFFIXES = {".csv", ".tsv", ".xls", ".xlsx", ".xlsm", ".xlsb"}

_CALL_SYNONYMS: Mapping[str, Sequence[str]] = {
    "id": ("id", "sid", "call_sid", "twilio_call_sid"),
    "started_at": ("started_at", "start_time", "date_created"),
    "caller_phone": ("caller_phone", "from", "from_number", "caller"),
    "duration_seconds": ("duration_seconds", "duration"),
    "direction": ("direction",),
    "status": ("status",),
    "to": ("to", "to_number"),
}

_CONVERSATION_SYNONYMS: Mapping[str, Sequence[str]] = {
    "id": ("conversation_id", "id"),
    "started_at": ("started_at", "start_time"),
    "start_time_unix_secs": ("start_time_unix_secs",),
    "status": ("status",),
    "message_count": ("message_count", "messages"),
    "summary": ("summary", "transcript_summary"),
    "duration_seconds": ("duration_seconds", "call_duration_secs"),
    "call_successful": ("call_successful",),
}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


def load_calls(path: PathLike, *, loader_kwargs: Optional[Dict[str, Any]] = None) -> List[CallRecord]:
    """Load telephony call records from JSON, CSV/TSV, or Excel."""

    rows = _read_rows(path, "calls", _CALL_SYNONYMS, loader_kwargs)
    return _convert(rows, CallRecord.from_mapping, "call")


def load_conversations(
    path: PathLike, *, loader_kwargs: Optional[Dict[str, Any]] = None
) -> List[ConversationRecord]:
    """Load conversation records from JSON, CSV/TSV, or Excel."""

    rows = _read_rows(path, "conversations", _CONVERSATION_SYNONYMS, loader_kwargs)
    return _convert(rows, ConversationRecord.from_mapping, "conversation")


def load_contacts(path: PathLike) -> List[ContactEntry]:
    """Load directory entries from a JSON export.

    The directory shape is nested (several names and phone numbers per
    entry), so only JSON is accepted.
    """

    path_obj = Path(path)
    if path_obj.suffix.lower() not in _JSON_SUFFIXES:
        raise UnsupportedFileTypeError(f"Contacts must be a JSON export, got {path_obj.suffix!r}")
    rows = _read_json_rows(path_obj, ("contacts", "connections"))
    return _convert(rows, ContactEntry.from_mapping, "contact")


def _read_rows(
    path: PathLike,
    key: str,
    synonyms: Mapping[str, Sequence[str]],
    loader_kwargs: Optional[Dict[str, Any]],
) -> List[Any]:
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()
    if suffix in _JSON_SUFFIXES:
        return _read_json_rows(path_obj, (key,))
    if suffix in _TABULAR_SUFFIXES:
        dataframe = _read_dataframe(path_obj, loader_kwargs=loader_kwargs)
        return [_row_to_mapping(row, dataframe.columns, synonyms) for _, row in dataframe.iterrows() if not _row_is_empty(row)]
    raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")


def _read_json_rows(path: Path, keys: Iterable[str]) -> List[Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        for key in keys:
            if key in data:
                data = data[key]
                break
        else:
            LOGGER.warning("No %s list found in %s", "/".join(keys), path)
            return []
    if data is None:
        return []
    if not isinstance(data, list):
        LOGGER.warning("Expected a list of records in %s, got %s", path, type(data).__name__)
        return []
    return data


def _read_dataframe(path: Path, *, loader_kwargs: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    suffix = path.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            loader_kwargs.setdefault("sep", "\t")
        loader_kwargs.setdefault("dtype", str)
        return pd.read_csv(path, **loader_kwargs)

    engine = loader_kwargs.pop("engine", None) or "openpyxl"
    loader_kwargs.setdefault("dtype", str)
    return pd.read_excel(path, engine=engine, **loader_kwargs)


def _row_is_empty(row: pd.Series) -> bool:
    return all(pd.isna(value) or (isinstance(value, str) and not value.strip()) for value in row.values)


def _row_to_mapping(row: pd.Series, columns: Iterable[str], synonyms: Mapping[str, Sequence[str]]) -> Dict[str, Any]:
    lowered = {str(column).strip().lower(): column for column in columns}
    record: Dict[str, Any] = {}
    for field_name, names in synonyms.items():
        for name in names:
            column = lowered.get(name)
            if column is None:
                continue
            value = _clean_cell(row[column])
            if value is not None:
                record[field_name] = value
                break
    return record


def _clean_cell(value: Any) -> Optional[str]:
    if pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _convert(rows: Iterable[Any], factory: Callable[[Mapping[str, Any]], T], label: str) -> List[T]:
    records: List[T] = []
    for position, row in enumerate(rows):
        if not isinstance(row, Mapping):
            LOGGER.warning("Skipping %s record %s: expected an object, got %s", label, position, type(row).__name__)
            continue
        records.append(factory(row))
    return records


__all__ = ["load_calls", "load_contacts", "load_conversations", "UnsupportedFileTypeError"]

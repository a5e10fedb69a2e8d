"""Export utilities for reconciled conversation data."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, MutableMapping, Optional, Union

import pandas as pd

from ..models import EnrichedCall
from ..phone import format_phone_display

PathLike = Union[str, Path]

_COLUMNS = ["conversation_id", "display_name", "caller_phone", "contact_name", "has_contact_name"]


def export_enriched_calls(
    results: Union[Mapping[str, EnrichedCall], Iterable[EnrichedCall]],
    path: PathLike,
    *,
    format_phones: bool = False,
    sheet_name: str = "Calls",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write enriched calls to a CSV or Excel file."""

    dataframe = results_to_dataframe(results, format_phones=format_phones)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _write_dataframe(dataframe, output_path, sheet_name=sheet_name, exporter_kwargs=exporter_kwargs)
    return output_path


def results_to_dataframe(
    results: Union[Mapping[str, EnrichedCall], Iterable[EnrichedCall]],
    *,
    format_phones: bool = False,
) -> pd.DataFrame:
    """Convert enriched calls into a :class:`pandas.DataFrame`, one row per conversation."""

    items = results.values() if isinstance(results, Mapping) else results
    rows = []
    for item in items:
        row = item.as_row()
        if format_phones and item.caller_phone:
            row["caller_phone"] = format_phone_display(item.caller_phone)
            if not item.contact_name:
                row["display_name"] = row["caller_phone"]
        rows.append(row)
    return pd.DataFrame(rows, columns=_COLUMNS)


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    sheet_name: str,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xls", ".xlsx", ".xlsm", ".xlsb"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    raise ValueError(f"Unsupported export file extension: {suffix}")


__all__ = ["export_enriched_calls", "results_to_dataframe"]

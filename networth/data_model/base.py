from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, List, Mapping

import pandas as pd


def generate_id() -> str:
    return uuid.uuid4().hex[:13]


def _first(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return default


def as_float(row: Mapping[str, Any], *keys: str, default: float = 0.0) -> float:
    return float(_first(row, *keys, default=default) or 0.0)


def as_int(row: Mapping[str, Any], *keys: str, default: int = 0) -> int:
    return int(_first(row, *keys, default=default) or 0)


def as_bool(row: Mapping[str, Any], *keys: str, default: bool = False) -> bool:
    value = _first(row, *keys, default=default)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def as_str(row: Mapping[str, Any], *keys: str, default: str = "") -> str:
    return str(_first(row, *keys, default=default)).strip()


@dataclass
class ColumnDefinition:
    """Lightweight schema descriptor used by the plan editor tables."""

    field: str
    label: str
    kind: str = "text"  # text | number | select | year | bool
    default: Any = ""
    options: List[str] | None = None
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    format: str | None = None
    help: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "label": self.label,
            "kind": self.kind,
            "default": self.default,
            "options": self.options or [],
            "min": self.min_value,
            "max": self.max_value,
            "step": self.step,
            "format": self.format,
            "help": self.help,
        }


@dataclass
class TableModel:
    """Container for a table schema plus default rows."""

    name: str
    columns: List[ColumnDefinition]
    default_rows: List[dict[str, Any]] = field(default_factory=list)

    def create_default_df(self) -> pd.DataFrame:
        if self.default_rows:
            return pd.DataFrame(self.default_rows)
        seed = {col.field: col.default for col in self.columns}
        return pd.DataFrame([seed])

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "columns": [col.to_payload() for col in self.columns],
            "defaults": self.create_default_df().to_dict("records"),
        }

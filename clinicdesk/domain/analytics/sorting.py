"""Sortable tables: toggling sort config and a locale-aware string key"""

import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional, Sequence, TypeVar

Direction = Literal["asc", "desc"]
RowT = TypeVar("RowT")


@dataclass(frozen=True)
class SortConfig:
    key: Optional[str] = None
    direction: Direction = "asc"

    def request(self, key: str) -> "SortConfig":
        """Clicking the active ascending column flips it, any other click sorts ascending"""
        if self.key == key and self.direction == "asc":
            return SortConfig(key, "desc")
        return SortConfig(key, "asc")


def text_key(value: str) -> str:
    """Accent- and case-insensitive key, so "Álvaro" sorts next to "alvaro" """
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def _value_key(value: Any) -> Any:
    if isinstance(value, str):
        return (text_key(value), value)
    return value


def sort_rows(
    rows: Sequence[RowT],
    config: SortConfig,
    getters: Optional[dict[str, Callable[[RowT], Any]]] = None,
) -> list[RowT]:
    """
    Stable sort of `rows` by `config.key`.

    Values are read with `getters[key]` when given, else as an attribute.
    Rows whose value is None go last in both directions.

    Raises:
        ValueError: If the key is neither a getter nor an attribute of the rows
    """
    if config.key is None:
        return list(rows)

    getter = (getters or {}).get(config.key)
    if getter is None:
        key = config.key

        def getter(row):
            if not hasattr(row, key):
                raise ValueError(f"Cannot sort by '{key}'")
            return getattr(row, key)

    present = [row for row in rows if getter(row) is not None]
    missing = [row for row in rows if getter(row) is None]
    ordered = sorted(present, key=lambda row: _value_key(getter(row)), reverse=config.direction == "desc")
    return ordered + missing

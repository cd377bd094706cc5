from __future__ import annotations

from collections.abc import Mapping, Sequence
import math
from typing import Any, Iterator, Protocol

from .geometry import Point


class DocumentNode(Protocol):
    """Read-only view over one mapping of an already-parsed document tree.

    Getters return None when the key is absent or holds a value of the wrong
    shape; callers decide whether that is an error.
    """

    def get_float(self, key: str) -> float | None:
        ...

    def get_int(self, key: str) -> int | None:
        ...

    def get_string(self, key: str) -> str | None:
        ...

    def get_bool(self, key: str) -> bool | None:
        ...

    def get_array(self, key: str) -> list[Any] | None:
        ...

    def get_mapping(self, key: str) -> "DocumentNode | None":
        ...

    def entry(self, key: str) -> Any:
        ...

    def keys(self) -> list[Any]:
        ...

    def __len__(self) -> int:
        ...


class MappingDocument:
    """DocumentNode over the plain dict/list/scalar tree a YAML loader yields."""

    __slots__ = ("_data",)

    def __init__(self, data: Any) -> None:
        # Non-mapping nodes read as empty so missing fields surface as Required.
        self._data: Mapping[Any, Any] = data if isinstance(data, Mapping) else {}

    @property
    def raw(self) -> Mapping[Any, Any]:
        return self._data

    def get_float(self, key: str) -> float | None:
        return _as_float(self._data.get(key))

    def get_int(self, key: str) -> int | None:
        value = self._data.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def get_string(self, key: str) -> str | None:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def get_bool(self, key: str) -> bool | None:
        value = self._data.get(key)
        return value if isinstance(value, bool) else None

    def get_array(self, key: str) -> list[Any] | None:
        value = self._data.get(key)
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            return list(value)
        return None

    def get_mapping(self, key: str) -> MappingDocument | None:
        value = self._data.get(key)
        if isinstance(value, Mapping):
            return MappingDocument(value)
        return None

    def entry(self, key: Any) -> Any:
        return self._data.get(key)

    def keys(self) -> list[Any]:
        return list(self._data.keys())

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __repr__(self) -> str:
        return f"MappingDocument({dict(self._data)!r})"


def as_point(value: Any) -> Point | None:
    """Read `[x, y]` as a Point; any other shape or length yields None."""

    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return None
    if len(value) != 2:
        return None
    x = _as_float(value[0])
    y = _as_float(value[1])
    if x is None or y is None:
        return None
    return Point(x=x, y=y)


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        return None
    try:
        result = float(value)
    except OverflowError:
        return None
    # NaN and infinities read as missing.
    return result if math.isfinite(result) else None

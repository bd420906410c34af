"""Typed access to the loosely-structured ``arguments`` of a tool call."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class ToolArguments(Mapping[str, Any]):
    """Read-only view over a decoded ``arguments`` value.

    Anything that is not a JSON object is treated as an empty bag. The
    typed accessors return ``None`` both when a key is absent and when its
    value has the wrong type; callers pick the default.
    """

    def __init__(self, raw: Any = None) -> None:
        self._values: dict[str, Any] = dict(raw) if isinstance(raw, dict) else {}

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ToolArguments({self._values!r})"

    def get_str(self, key: str) -> str | None:
        value = self._values.get(key)
        return value if isinstance(value, str) else None

    def get_int(self, key: str) -> int | None:
        """Return a non-negative integer, rejecting booleans and floats."""
        value = self._values.get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value

    def get_typed(self, key: str, type_name: str) -> Any:
        """Dispatch to the accessor for a JSON Schema type name."""
        if type_name == "integer":
            return self.get_int(key)
        if type_name == "string":
            return self.get_str(key)
        msg = f"Unsupported argument type: {type_name}"
        raise ValueError(msg)

"""ToolRegistry — the fixed, ordered catalog of tools a server exposes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from gitmcp.protocol.arguments import ToolArguments
from gitmcp.protocol.models import ToolDescriptor


class ToolRegistry:
    """Immutable name-to-descriptor catalog.

    Registration order is the order reported to clients and never changes
    after construction.

    Usage::

        registry = ToolRegistry([tags_tool, readme_tool])
        registry.is_known("get_tags")        # True
        registry.list_tools()                # [tags_tool, readme_tool]
    """

    def __init__(self, tools: Iterable[ToolDescriptor]) -> None:
        self._tools: tuple[ToolDescriptor, ...] = tuple(tools)
        self._by_name: dict[str, ToolDescriptor] = {}
        for tool in self._tools:
            if tool.name in self._by_name:
                msg = f"Duplicate tool name: {tool.name}"
                raise ValueError(msg)
            self._by_name[tool.name] = tool

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def list_tools(self) -> list[ToolDescriptor]:
        return list(self._tools)

    def names(self) -> list[str]:
        return [tool.name for tool in self._tools]

    def describe(self, name: str) -> ToolDescriptor | None:
        return self._by_name.get(name)

    def is_known(self, name: str) -> bool:
        return name in self._by_name

    def extract_arguments(self, name: str, raw: Any) -> dict[str, Any]:
        """Read every declared property of *name* from *raw*.

        Absent or mistyped values resolve to the property's default, even
        for required properties. Undeclared keys are dropped.
        """
        tool = self._by_name.get(name)
        if tool is None:
            raise KeyError(name)
        arguments = ToolArguments(raw)
        extracted: dict[str, Any] = {}
        for prop in tool.properties:
            value = arguments.get_typed(prop.name, prop.type)
            extracted[prop.name] = prop.default if value is None else value
        return extracted

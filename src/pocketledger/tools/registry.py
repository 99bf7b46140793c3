from __future__ import annotations

from pocketledger.tools.base import Tool, ToolSpec


class ToolRegistry:
    """Name → tool lookup. Names are dotted, ``<namespace>.<action>``."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        existing = self._tools.get(tool.name)
        if existing is not None and type(existing) is not type(tool):
            raise ValueError(
                f"Tool name {tool.name!r} already registered by {type(existing).__name__}"
            )
        self._tools[tool.name] = tool

    def get_tool(self, name: str) -> Tool:
        if name not in self._tools:
            raise KeyError(f"Tool not registered: {name}")
        return self._tools[name]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def names(self, namespace: str | None = None) -> list[str]:
        prefix = f"{namespace}." if namespace else ""
        return sorted(name for name in self._tools if name.startswith(prefix))

    def list_specs(self, namespace: str | None = None) -> list[ToolSpec]:
        return [self._tools[name].spec() for name in self.names(namespace)]

    def clear(self) -> None:
        self._tools.clear()


registry = ToolRegistry()


def register_tool(tool_cls: type[Tool]) -> type[Tool]:
    registry.register(tool_cls())
    return tool_cls

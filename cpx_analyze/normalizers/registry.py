from __future__ import annotations
from dataclasses import dataclass
from .base import ToolNormalizer

@dataclass
class NormalizerRegistry:
    normalizers: list[ToolNormalizer]

    def names(self) -> list[str]:
        return [n.tool_name() for n in self.normalizers]

    def by_tool(self, tool: str) -> ToolNormalizer | None:
        # captures may say "cppcheck" or "Cppcheck"
        wanted = (tool or "").lower()
        for n in self.normalizers:
            if n.tool_name().lower() == wanted:
                return n
        return None

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..schemas.tool import ToolDescriptor


def _passthrough(args: Dict[str, str], stdout: str) -> str:
    return stdout


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    args_schema: Dict[str, Any]  # JSON-schema, advisory only
    build_source: Callable[[Dict[str, str], str], str]  # (args, project_dir) -> julia source
    error_prefix: str
    format_output: Callable[[Dict[str, str], str], str] = _passthrough

    @property
    def required(self) -> List[str]:
        return list(self.args_schema.get("required", []))

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(name=self.name, description=self.description, input_schema=self.args_schema)


class ToolRegistry:
    def __init__(self):
        self._tools: Dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        # declaration order
        return list(self._tools.keys())

    def list_tools(self) -> List[ToolDescriptor]:
        return [t.descriptor() for t in self._tools.values()]

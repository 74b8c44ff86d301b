from __future__ import annotations

from typing import Any, Dict, Optional

from ..errors import ErrorKind, ToolCallError
from .registry import ToolSpec


def _missing_message(arg: str) -> str:
    # "package_name" -> "Package name is required"
    return f"{arg.replace('_', ' ').capitalize()} is required"


def require_args(spec: ToolSpec, args: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """
    Pull the tool's required args out of the call and coerce them to str.
    A value that is absent, None or empty after coercion raises InvalidParams.
    Schema types are not enforced: numbers and booleans are stringified.
    """
    args = args or {}
    out: Dict[str, str] = {}
    for k in spec.required:
        v = args.get(k)
        text = "" if v is None else str(v)
        if not text:
            raise ToolCallError(ErrorKind.INVALID_PARAMS, _missing_message(k))
        out[k] = text
    return out

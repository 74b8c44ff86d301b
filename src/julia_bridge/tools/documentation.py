import re
import unicodedata
from typing import Dict

from ..errors import ErrorKind, ToolCallError
from .environment import activate

NAME = "get_julia_documentation"
DESCRIPTION = "Get documentation for a Julia function"
ARGS_SCHEMA = {
    "type": "object",
    "properties": {
        "function_name": {"type": "string", "description": "Name of the Julia function"},
    },
    "required": ["function_name"],
}
ERROR_PREFIX = "Error getting Julia documentation"

# Base.sort!, LinearAlgebra.norm, π, @time, Base.@time
_IDENT = r"[^\W\d][\w!]*"
_NAME_RE = re.compile(rf"(?:{_IDENT}\.)*@?{_IDENT}")
# Base.:+
_QUALIFIED_OP_RE = re.compile(rf"(?:{_IDENT}\.)+:(.+)")
_ASCII_OPS = set("+-*/\\^%<>=!&|~")


def _is_operator(text: str) -> bool:
    # +, ==, .*, ÷, √, ≈, ∈; unicode math symbols are category Sm
    if text.startswith("."):
        text = text[1:]
    return 1 <= len(text) <= 3 and all(
        ch in _ASCII_OPS or unicodedata.category(ch) == "Sm" for ch in text
    )


def check_function_name(name: str) -> str:
    qualified_op = _QUALIFIED_OP_RE.fullmatch(name)
    ok = (
        _NAME_RE.fullmatch(name) is not None
        or _is_operator(name)
        or (qualified_op is not None and _is_operator(qualified_op.group(1)))
    )
    if not ok:
        raise ToolCallError(ErrorKind.INVALID_PARAMS, f"Invalid function name: {name!r}")
    return name


def build_source(args: Dict[str, str], project_dir: str) -> str:
    name = check_function_name(args["function_name"])
    return f"{activate(project_dir)} println(@doc {name})"

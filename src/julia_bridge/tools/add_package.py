import re
from typing import Dict

from ..errors import ErrorKind, ToolCallError
from .environment import activate

NAME = "add_julia_package"
DESCRIPTION = "Add a Julia package to the project"
ARGS_SCHEMA = {
    "type": "object",
    "properties": {
        "package_name": {"type": "string", "description": "Name of the Julia package to add"},
    },
    "required": ["package_name"],
}
ERROR_PREFIX = "Error adding Julia package"

_PACKAGE_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.jl)?")


def check_package_name(name: str) -> str:
    if not _PACKAGE_RE.fullmatch(name):
        raise ToolCallError(ErrorKind.INVALID_PARAMS, f"Invalid package name: {name!r}")
    return name


def build_source(args: Dict[str, str], project_dir: str) -> str:
    name = check_package_name(args["package_name"])
    return f'{activate(project_dir)} Pkg.add("{name}")'


def format_output(args: Dict[str, str], stdout: str) -> str:
    return f"Package {args['package_name']} added successfully:\n{stdout}"

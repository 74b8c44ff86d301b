from typing import Dict

from .environment import activate

NAME = "get_installed_julia_packages"
DESCRIPTION = "Get the list of installed Julia packages"
ARGS_SCHEMA = {
    "type": "object",
    "properties": {},
    "required": [],
}
ERROR_PREFIX = "Error getting installed Julia packages"


def build_source(args: Dict[str, str], project_dir: str) -> str:
    return f"{activate(project_dir)} Pkg.status()"

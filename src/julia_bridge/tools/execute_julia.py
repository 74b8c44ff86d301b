from typing import Dict

from .environment import activate

NAME = "execute_julia"
DESCRIPTION = "Execute Julia code"
ARGS_SCHEMA = {
    "type": "object",
    "properties": {
        "code": {"type": "string", "description": "Julia code to execute"},
    },
    "required": ["code"],
}
ERROR_PREFIX = "Error executing Julia code"


def build_source(args: Dict[str, str], project_dir: str) -> str:
    """
    Run the caller's code verbatim inside the project environment.
    The code is trusted: executing arbitrary Julia is what this tool is for.
    """
    return f"{activate(project_dir)} {args['code']}"

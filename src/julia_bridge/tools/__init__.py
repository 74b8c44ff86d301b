from typing import List

from . import add_package, documentation, execute_julia, installed_packages
from .registry import ToolRegistry, ToolSpec


TOOLS: List[ToolSpec] = [
    ToolSpec(
        name=execute_julia.NAME,
        description=execute_julia.DESCRIPTION,
        args_schema=execute_julia.ARGS_SCHEMA,
        build_source=execute_julia.build_source,
        error_prefix=execute_julia.ERROR_PREFIX,
    ),
    ToolSpec(
        name=add_package.NAME,
        description=add_package.DESCRIPTION,
        args_schema=add_package.ARGS_SCHEMA,
        build_source=add_package.build_source,
        error_prefix=add_package.ERROR_PREFIX,
        format_output=add_package.format_output,
    ),
    ToolSpec(
        name=installed_packages.NAME,
        description=installed_packages.DESCRIPTION,
        args_schema=installed_packages.ARGS_SCHEMA,
        build_source=installed_packages.build_source,
        error_prefix=installed_packages.ERROR_PREFIX,
    ),
    ToolSpec(
        name=documentation.NAME,
        description=documentation.DESCRIPTION,
        args_schema=documentation.ARGS_SCHEMA,
        build_source=documentation.build_source,
        error_prefix=documentation.ERROR_PREFIX,
    ),
]


def default_registry() -> ToolRegistry:
    reg = ToolRegistry()
    for spec in TOOLS:
        reg.register(spec)
    return reg

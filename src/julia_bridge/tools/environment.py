from __future__ import annotations


def julia_string(text: str) -> str:
    """Render text as a double-quoted Julia string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


def activate(project_dir: str) -> str:
    """Preamble that activates the project environment before anything else runs."""
    return f"using Pkg; Pkg.activate({julia_string(project_dir)});"

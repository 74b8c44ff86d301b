from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[2]  # src/julia_bridge/settings.py -> repo root
load_dotenv(dotenv_path=REPO_ROOT / ".env")


@dataclass(frozen=True)
class Settings:
    julia_bin: str
    project_dir: str
    timeout_s: Optional[float]
    max_concurrency: int
    log_level: str


def _positive_int(raw: str, name: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


def _timeout(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"JULIA_TIMEOUT_S must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"JULIA_TIMEOUT_S must be >= 0, got {value}")
    # 0 disables the deadline
    return value or None


def _project_dir(env: Mapping[str, str], root: Path) -> str:
    explicit = env.get("JULIA_PROJECT_DIR")
    if explicit:
        return explicit
    # only a source checkout has a usable root; an installed copy lands in site-packages
    if not (root / "pyproject.toml").is_file():
        raise ValueError(f"JULIA_PROJECT_DIR must be set: {root} is not a julia-bridge checkout")
    return str(root)


def load_settings(env: Optional[Mapping[str, str]] = None, root: Path = REPO_ROOT) -> Settings:
    """
    Read settings from env (os.environ by default).

    JULIA_PROJECT_DIR defaults to the checkout root, which holds pyproject.toml.
    When the package is installed rather than run from a checkout there is no
    such root and JULIA_PROJECT_DIR is required.
    """
    env = os.environ if env is None else env
    return Settings(
        julia_bin=env.get("JULIA_BIN") or "julia",
        project_dir=_project_dir(env, root),
        timeout_s=_timeout(env.get("JULIA_TIMEOUT_S", "0")),
        max_concurrency=_positive_int(env.get("JULIA_MAX_CONCURRENCY", "4"), "JULIA_MAX_CONCURRENCY"),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )

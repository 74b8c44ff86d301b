from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class FailureKind(str, Enum):
    SPAWN_ERROR = "SpawnError"
    NON_ZERO_EXIT = "NonZeroExit"
    TIMEOUT = "Timeout"


@dataclass(frozen=True)
class Success:
    stdout: str


@dataclass(frozen=True)
class Failure:
    """
    Terminal failure of one interpreter run.

    - exit_code: None when the process never started or was killed on timeout
    - stderr: captured error stream, or the OS error text for SpawnError
    - timeout_s: the deadline that expired (Timeout only)
    """
    exit_code: Optional[int]
    stderr: str
    kind: FailureKind
    timeout_s: Optional[float] = None

    @property
    def message(self) -> str:
        if self.kind is FailureKind.SPAWN_ERROR:
            return f"Failed to start Julia process: {self.stderr}"
        if self.kind is FailureKind.TIMEOUT:
            return f"Julia process timed out after {self.timeout_s:g} seconds: {self.stderr}"
        return f"Julia process exited with code {self.exit_code}: {self.stderr}"


ExecutionOutcome = Union[Success, Failure]

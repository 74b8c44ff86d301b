# src/julia_bridge/runtime/executor.py
from __future__ import annotations

import asyncio
import codecs
import logging
from asyncio.subprocess import DEVNULL, PIPE
from typing import List, Optional

from ..schemas.outcome import ExecutionOutcome, Failure, FailureKind, Success

log = logging.getLogger(__name__)

_CHUNK = 4096


async def _drain(stream: asyncio.StreamReader, sink: List[str]) -> None:
    # incremental decoder keeps multi-byte characters split across chunks intact
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        chunk = await stream.read(_CHUNK)
        if not chunk:
            break
        sink.append(decoder.decode(chunk))
    sink.append(decoder.decode(b"", final=True))


async def _reap(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


class ProcessExecutor:
    """
    Runs one piece of interpreter source per call as `<binary> <eval_flag> <code>`.

    Each call owns its output buffers and settles exactly once, after the child
    has exited and both streams hit EOF. At most `max_concurrency` children run
    at a time; further calls wait for a free slot.
    """

    def __init__(
        self,
        binary: str = "julia",
        eval_flag: str = "-e",
        timeout_s: Optional[float] = None,
        max_concurrency: int = 4,
    ):
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self.binary = binary
        self.eval_flag = eval_flag
        self.timeout_s = timeout_s
        self.max_concurrency = max_concurrency
        self._slots = asyncio.Semaphore(max_concurrency)

    async def run(self, code: str, cwd: str) -> ExecutionOutcome:
        async with self._slots:
            return await self._run(code, cwd)

    async def _run(self, code: str, cwd: str) -> ExecutionOutcome:
        log.debug("Spawning %s in %s", self.binary, cwd)
        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary,
                self.eval_flag,
                code,
                cwd=cwd,
                stdin=DEVNULL,
                stdout=PIPE,
                stderr=PIPE,
            )
        # ValueError: argv containing a NUL byte
        except (OSError, ValueError) as e:
            log.debug("Failed to start %s: %s", self.binary, e)
            return Failure(exit_code=None, stderr=str(e), kind=FailureKind.SPAWN_ERROR)

        output: List[str] = []
        error_output: List[str] = []

        async def collect() -> int:
            await asyncio.gather(_drain(proc.stdout, output), _drain(proc.stderr, error_output))
            return await proc.wait()

        try:
            returncode = await asyncio.wait_for(collect(), timeout=self.timeout_s)
        except asyncio.TimeoutError:
            log.warning("%s (pid %s) exceeded %ss; killing", self.binary, proc.pid, self.timeout_s)
            await _reap(proc)
            return Failure(
                exit_code=None,
                stderr="".join(error_output),
                kind=FailureKind.TIMEOUT,
                timeout_s=self.timeout_s,
            )
        except asyncio.CancelledError:
            log.debug("Call cancelled; killing %s (pid %s)", self.binary, proc.pid)
            await _reap(proc)
            raise

        if returncode == 0:
            return Success(stdout="".join(output))
        log.debug("%s (pid %s) exited with code %s", self.binary, proc.pid, returncode)
        return Failure(exit_code=returncode, stderr="".join(error_output), kind=FailureKind.NON_ZERO_EXIT)

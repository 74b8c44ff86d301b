import asyncio
import logging
import sys
from typing import List, Tuple

import pytest

from julia_bridge.dispatcher import BridgeContext, RequestDispatcher
from julia_bridge.errors import ErrorKind, ToolCallError
from julia_bridge.runtime.executor import ProcessExecutor
from julia_bridge.schemas.outcome import ExecutionOutcome, Failure, FailureKind, Success
from julia_bridge.schemas.tool import ToolCall
from julia_bridge.tools import default_registry

PROJECT = "/opt/julia-bridge"


class FakeExecutor:
    def __init__(self, outcome: ExecutionOutcome):
        self.outcome = outcome
        self.calls: List[Tuple[str, str]] = []

    async def run(self, code: str, cwd: str) -> ExecutionOutcome:
        self.calls.append((code, cwd))
        return self.outcome


def _dispatcher(executor) -> RequestDispatcher:
    return RequestDispatcher(BridgeContext(registry=default_registry(), executor=executor, project_dir=PROJECT))


def _handle(d: RequestDispatcher, name: str, **arguments):
    return asyncio.run(d.handle(ToolCall(name=name, arguments=arguments)))


@pytest.mark.parametrize(
    "name, arguments",
    [
        ("execute_julia", {}),
        ("execute_julia", {"code": ""}),
        ("add_julia_package", {}),
        ("add_julia_package", {"package_name": ""}),
        ("get_julia_documentation", {"function_name": ""}),
    ],
)
def test_missing_args_rejected_before_spawn(name, arguments):
    ex = FakeExecutor(Success(stdout=""))
    with pytest.raises(ToolCallError) as ei:
        _handle(_dispatcher(ex), name, **arguments)
    assert ei.value.kind is ErrorKind.INVALID_PARAMS
    assert ex.calls == []


def test_disallowed_package_name_rejected_before_spawn():
    ex = FakeExecutor(Success(stdout=""))
    with pytest.raises(ToolCallError) as ei:
        _handle(_dispatcher(ex), "add_julia_package", package_name='x"); rm("/")')
    assert ei.value.kind is ErrorKind.INVALID_PARAMS
    assert ex.calls == []


@pytest.mark.parametrize("name", ["execute_python", "", "EXECUTE_JULIA"])
def test_unknown_tool_is_method_not_found(name):
    ex = FakeExecutor(Success(stdout=""))
    with pytest.raises(ToolCallError) as ei:
        _handle(_dispatcher(ex), name, code="1")
    assert ei.value.kind is ErrorKind.METHOD_NOT_FOUND
    assert name in ei.value.message
    assert ex.calls == []


def test_execute_success():
    ex = FakeExecutor(Success(stdout="42"))
    resp = _handle(_dispatcher(ex), "execute_julia", code="println(6 * 7)")
    assert resp.model_dump(by_alias=True) == {"content": [{"type": "text", "text": "42"}], "isError": False}
    code, cwd = ex.calls[0]
    assert code == 'using Pkg; Pkg.activate("/opt/julia-bridge"); println(6 * 7)'
    assert cwd == PROJECT


def test_execute_nonzero_exit():
    ex = FakeExecutor(Failure(exit_code=1, stderr="ERROR: UndefVarError: `y` not defined", kind=FailureKind.NON_ZERO_EXIT))
    resp = _handle(_dispatcher(ex), "execute_julia", code="y")
    assert resp.is_error
    text = resp.content[0].text
    assert text.startswith("Error executing Julia code: ")
    assert "code 1" in text
    assert "UndefVarError" in text


def test_add_package_success_is_confirmed():
    ex = FakeExecutor(Success(stdout="  Resolving package versions...\n"))
    resp = _handle(_dispatcher(ex), "add_julia_package", package_name="Plots")
    assert 'Pkg.add("Plots")' in ex.calls[0][0]
    assert not resp.is_error
    assert resp.content[0].text == "Package Plots added successfully:\n  Resolving package versions...\n"


def test_add_package_failure_prefix():
    ex = FakeExecutor(Failure(exit_code=1, stderr="package not found", kind=FailureKind.NON_ZERO_EXIT))
    resp = _handle(_dispatcher(ex), "add_julia_package", package_name="NoSuchPkg")
    assert resp.is_error
    assert resp.content[0].text.startswith("Error adding Julia package: Julia process exited with code 1")


def test_documentation_failure_prefix():
    ex = FakeExecutor(Failure(exit_code=None, stderr="", kind=FailureKind.TIMEOUT, timeout_s=5))
    resp = _handle(_dispatcher(ex), "get_julia_documentation", function_name="sort")
    assert resp.is_error
    assert resp.content[0].text.startswith("Error getting Julia documentation: Julia process timed out after 5 seconds")


def test_installed_packages_without_julia_on_path():
    ex = ProcessExecutor(binary="julia-binary-that-does-not-exist")
    resp = asyncio.run(
        asyncio.wait_for(
            _dispatcher(ex).handle(ToolCall(name="get_installed_julia_packages")),
            timeout=10,
        )
    )
    assert resp.is_error
    assert resp.content[0].text.startswith(
        "Error getting installed Julia packages: Failed to start Julia process:"
    )


def test_list_tools_passthrough():
    d = _dispatcher(FakeExecutor(Success(stdout="")))
    assert [t.name for t in d.list_tools()] == default_registry().names()


def test_nul_byte_in_code_is_error_response(tmp_path):
    ex = ProcessExecutor(binary=sys.executable, eval_flag="-c")
    ctx = BridgeContext(registry=default_registry(), executor=ex, project_dir=str(tmp_path))
    resp = asyncio.run(RequestDispatcher(ctx).handle(ToolCall(name="execute_julia", arguments={"code": "print(1)\x00"})))
    assert resp.is_error
    assert resp.content[0].text.startswith("Error executing Julia code: Failed to start Julia process:")


def test_spawn_failure_logged_once_at_error(caplog):
    ex = ProcessExecutor(binary="julia-binary-that-does-not-exist")
    with caplog.at_level(logging.DEBUG, logger="julia_bridge"):
        asyncio.run(_dispatcher(ex).handle(ToolCall(name="get_installed_julia_packages")))
    errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
    assert [r.name for r in errors] == ["julia_bridge.dispatcher"]

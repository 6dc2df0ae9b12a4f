import sys
import time

import pytest

from agentmcp.errors import ExecutableNotFoundError, ProcessExecutionError, ProcessTimeoutError
from agentmcp.transport.process import run_process


def test_hanging_process_times_out_and_does_not_block(tmp_path):
    marker = tmp_path / "finished.txt"
    code = f"import time, pathlib; time.sleep(5); pathlib.Path({str(marker)!r}).write_text('done')"

    started = time.monotonic()
    with pytest.raises(ProcessTimeoutError) as exc:
        run_process([sys.executable, "-c", code], cwd=tmp_path, timeout=1.0)
    elapsed = time.monotonic() - started

    assert elapsed < 4.0
    assert exc.value.duration == 1.0

    # The child was killed, so it never gets to write its marker.
    time.sleep(4.5)
    assert not marker.exists()


@pytest.mark.skipif(sys.platform == "win32", reason="process groups are POSIX only")
def test_timeout_kills_grandchildren_of_a_wrapper_script(tmp_path):
    marker = tmp_path / "grandchild.txt"
    script = f"sleep 5 && echo done > '{marker}'"

    started = time.monotonic()
    with pytest.raises(ProcessTimeoutError):
        run_process(["sh", "-c", script], cwd=tmp_path, timeout=1.0)
    elapsed = time.monotonic() - started

    # The shell's `sleep` holds stdout open; only a group kill releases it promptly.
    assert elapsed < 3.0
    time.sleep(4.5)
    assert not marker.exists()


def test_non_zero_exit_carries_code_and_output(tmp_path):
    code = "import sys; print('partial'); print('Error: bad', file=sys.stderr); sys.exit(7)"
    with pytest.raises(ProcessExecutionError) as exc:
        run_process([sys.executable, "-c", code], cwd=tmp_path, timeout=30.0)

    assert exc.value.exit_code == 7
    assert "partial" in exc.value.stdout
    assert "Error: bad" in exc.value.stderr


def test_missing_executable(tmp_path):
    with pytest.raises(ExecutableNotFoundError):
        run_process(["agentmcp-no-such-binary-xyz", "--version"], cwd=tmp_path, timeout=5.0)
    with pytest.raises(ExecutableNotFoundError):
        run_process([str(tmp_path / "missing" / "cli")], cwd=tmp_path, timeout=5.0)


def test_success_runs_in_working_directory_with_env(tmp_path):
    code = "import os, pathlib; print(pathlib.Path.cwd().name, os.environ['AGENTMCP_TEST_VALUE'])"
    result = run_process(
        [sys.executable, "-c", code],
        cwd=tmp_path,
        timeout=30.0,
        env={"AGENTMCP_TEST_VALUE": "hello"},
    )
    assert result.exit_code == 0
    assert result.stdout.strip() == f"{tmp_path.name} hello"
    assert result.duration >= 0


def test_check_false_returns_failed_result(tmp_path):
    result = run_process([sys.executable, "-c", "import sys; sys.exit(2)"], cwd=tmp_path, timeout=30.0, check=False)
    assert result.exit_code == 2

"""
Blocking subprocess execution with a wall-clock timeout.

One attempt per call: a timed-out child is killed and reaped before the error
is raised, and nothing is retried. On POSIX the child leads its own process
group and the whole group is killed, so helpers started by a wrapper script
(npm shims, `sh -c`) do not keep the pipes open.
"""

from __future__ import annotations

import os
import shutil
import signal
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from loguru import logger

from agentmcp.errors import ExecutableNotFoundError, ProcessExecutionError, ProcessTimeoutError

# Upper bound on draining pipes after a kill.
REAP_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class ProcessResult:
    exit_code: int
    stdout: str
    stderr: str
    duration: float

    @property
    def output(self) -> str:
        """stdout followed by stderr."""
        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr


def find_executable(name: str) -> Optional[str]:
    """Return an absolute path for *name* (or *name* itself if it is already a path)."""
    if not name:
        return None
    if os.sep in name or (os.altsep and os.altsep in name):
        p = Path(name)
        return str(p) if p.exists() else None
    return shutil.which(name)


def _decode(data: Optional[Union[bytes, str]]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def run_process(
    command: Sequence[str],
    *,
    cwd: Optional[Union[str, Path]] = None,
    timeout: float = 600.0,
    env: Optional[Dict[str, str]] = None,
    check: bool = True,
) -> ProcessResult:
    """
    Run *command* and wait for it.

    Args:
        command: Argument vector; the first element is the executable
        cwd: Working directory for the child
        timeout: Seconds before the child is killed
        env: Extra environment variables layered over the current environment
        check: Raise ProcessExecutionError on a non-zero exit code

    Raises:
        ExecutableNotFoundError: the executable cannot be found or started
        ProcessTimeoutError: the child ran longer than *timeout*
        ProcessExecutionError: non-zero exit code (when *check* is set)
    """
    argv: List[str] = [str(a) for a in command]
    if not argv:
        raise ValueError("command must not be empty")

    executable = find_executable(argv[0])
    if executable is None:
        raise ExecutableNotFoundError(argv[0], "not found on PATH")

    child_env = None
    if env:
        child_env = dict(os.environ)
        child_env.update({str(k): str(v) for k, v in env.items()})

    logger.debug(f"Running {argv[0]} with {len(argv) - 1} argument(s) in {cwd or os.getcwd()}")
    started = time.monotonic()
    try:
        proc = subprocess.Popen(
            [executable, *argv[1:]],
            cwd=str(cwd) if cwd else None,
            env=child_env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            start_new_session=os.name == "posix",
        )
    except (FileNotFoundError, PermissionError) as e:
        raise ExecutableNotFoundError(argv[0], str(e)) from e

    try:
        stdout, stderr = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired as e:
        _kill(proc)
        _reap(proc)
        logger.warning(f"{argv[0]} timed out after {timeout}s; process killed")
        raise ProcessTimeoutError(f"{argv[0]} timed out after {timeout}s", duration=timeout) from e
    except BaseException:
        # KeyboardInterrupt and friends must not leave the child running.
        _kill(proc)
        _reap(proc)
        raise

    elapsed = time.monotonic() - started
    result = ProcessResult(
        exit_code=int(proc.returncode),
        stdout=_decode(stdout),
        stderr=_decode(stderr),
        duration=elapsed,
    )
    logger.debug(f"{argv[0]} exited with {result.exit_code} after {elapsed:.2f}s")

    if check and result.exit_code != 0:
        raise ProcessExecutionError(
            f"{argv[0]} execution failed",
            exit_code=result.exit_code,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return result


def _kill(proc: subprocess.Popen) -> None:
    """Kill the child and, on POSIX, every process in its group."""
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGKILL)
            return
        except OSError as e:
            logger.debug(f"killpg({proc.pid}) failed: {e}; killing the child only")
    proc.kill()


def _reap(proc: subprocess.Popen) -> None:
    """Wait for a killed child without blocking on pipes held by escaped descendants."""
    try:
        proc.communicate(timeout=REAP_TIMEOUT_SECONDS)
    except subprocess.TimeoutExpired:
        logger.warning(f"Output pipes of pid {proc.pid} still open after kill; closing them")
        for stream in (proc.stdout, proc.stderr):
            if stream is not None:
                stream.close()
        proc.wait()

import stat
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure `src/` is on sys.path so `import agentmcp` works without an editable install.
    root = Path(__file__).resolve().parent.parent
    src = root / "src"
    if src.exists():
        p = str(src)
        if p not in sys.path:
            sys.path.insert(0, p)


@pytest.fixture
def fake_cli(tmp_path):
    """Executable wrapper around tests/fixtures/fake_agent_cli.py."""
    if sys.platform == "win32":
        pytest.skip("fake CLI wrapper is a POSIX shell script")
    script = Path(__file__).resolve().parent / "fixtures" / "fake_agent_cli.py"
    wrapper = tmp_path / "bin" / "fake-agent"
    wrapper.parent.mkdir(parents=True, exist_ok=True)
    wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n', encoding="utf-8")
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(wrapper)


@pytest.fixture
def workspace(tmp_path):
    ws = tmp_path / "workspace"
    ws.mkdir()
    return ws

# tests/conftest.py
import os
import stat
import sys

import pytest


@pytest.fixture
def fake_ping(tmp_path):
    """
    Build a throwaway executable that stands in for ping. It records its argv to
    args.txt and runs `body` (shell) afterwards. Returns (path, args_file).
    """
    if sys.platform == "win32":
        pytest.skip("shell-script stand-ins need a POSIX shell")

    def make(body: str):
        args_file = tmp_path / "args.txt"
        script = tmp_path / "ping"
        script.write_text(f'#!/bin/sh\necho "$@" > "{args_file}"\n{body}\n')
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script), args_file

    return make


@pytest.fixture
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("PINGPROBE_") or name == "LOG_LEVEL":
            monkeypatch.delenv(name, raising=False)

"""Tests for the emulator command. The emulator binary is never started."""

import subprocess
from unittest.mock import patch

import pytest

from bargo.builder import build_project
from bargo.emulator import run_emulator
from bargo.errors import ProjectError


@pytest.fixture
def emu_dir(tmp_path):
    folder = tmp_path / "emu"
    (folder / "sdcard").mkdir(parents=True)
    return folder


class TestRunEmulator:
    def test_installs_and_runs(self, make_project, emu_dir):
        root = make_project(emu_path=str(emu_dir))
        build_project(root)
        with patch("bargo.emulator.subprocess.run") as run:
            run.return_value = subprocess.CompletedProcess([], 0)
            run_emulator(root)

        assert (emu_dir / "sdcard" / "demo.bas").read_bytes() == (root / "demo.bas").read_bytes()
        assert (emu_dir / "sdcard" / "autoexec.txt").read_bytes() == b"bbcbasic /demo.bas\r\n"
        args, kwargs = run.call_args
        assert args[0] == [str(emu_dir / "fab-agon-emulator"), "-f", "--sdcard", "./sdcard"]
        assert kwargs["cwd"] == emu_dir

    def test_missing_emulator_folder(self, make_project, tmp_path):
        root = make_project(emu_path=str(tmp_path / "nowhere"))
        with pytest.raises(ProjectError, match="Could not find the emulator"):
            run_emulator(root)

    def test_not_built(self, make_project, emu_dir):
        root = make_project(emu_path=str(emu_dir))
        with pytest.raises(ProjectError, match="build first"):
            run_emulator(root)

    def test_emulator_cannot_start(self, make_project, emu_dir):
        root = make_project(emu_path=str(emu_dir))
        build_project(root)
        with patch("bargo.emulator.subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(ProjectError, match="Could not run emulator"):
                run_emulator(root)

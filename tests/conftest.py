"""Shared test fixtures for the bargo test suite.

WHY: Most tests need a small on-disk project (manifest, src/main.bas and
a couple of dependency files). Building it in one place keeps the tests
focused on behavior rather than setup.

HOW: ``make_project`` is a factory fixture writing a project into
tmp_path; ``sample_project`` is a ready-made two-dependency project.

RULES:
- All file I/O happens under tmp_path
- Manifests are written as literal TOML, not through bargo.manifest,
  so manifest parsing is exercised by every build test
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest


SAMPLE_MAIN: List[str] = [
    "PRINT 1",
    "LABEL skip",
    "PRINT 2",
    "GOTO skip",
]


def _toml_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return '"{}"'.format(value)


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a project into tmp_path and returning its root."""

    def _make(
        main: Optional[List[str]] = None,
        deps: Optional[Dict[str, Optional[List[str]]]] = None,
        urls: Optional[Dict[str, str]] = None,
        name: str = "demo",
        **package,
    ) -> Path:
        root = tmp_path / name
        src = root / "src"
        src.mkdir(parents=True)

        lines = ["[package]", 'name = "{}"'.format(name)]
        for key, value in package.items():
            lines.append("{} = {}".format(key, _toml_value(value)))
        lines.append("")
        lines.append("[dependencies]")
        for dep in sorted(deps or {}):
            lines.append('{} = "{}"'.format(dep, (urls or {}).get(dep, "")))
        for dep in sorted(urls or {}):
            if dep not in (deps or {}):
                lines.append('{} = "{}"'.format(dep, urls[dep]))
        (root / "Bargo.toml").write_text("\n".join(lines) + "\n", encoding="utf-8")

        (src / "main.bas").write_text(
            "\n".join(SAMPLE_MAIN if main is None else main) + "\n",
            encoding="utf-8",
        )
        for dep, body in (deps or {}).items():
            if body is not None:
                (src / "{}.bas".format(dep)).write_text(
                    "\n".join(body) + "\n", encoding="utf-8",
                )
        return root

    return _make


@pytest.fixture
def sample_project(make_project) -> Path:
    """Main file jumping into two dependencies declared out of order."""
    return make_project(
        main=["GOSUB greet", "GOSUB farewell", "END"],
        deps={
            "zeta": ["LABEL farewell", 'PRINT "Bye"', "RETURN"],
            "alpha": ["LABEL greet", 'PRINT "Hi"', "RETURN"],
        },
        carriage_return=False,
    )

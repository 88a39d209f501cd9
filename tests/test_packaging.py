"""
Tests for the project metadata in pyproject.toml.
"""

import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


class TestPyproject:
    def _project(self) -> dict:
        return tomllib.loads(PYPROJECT.read_text())["project"]

    def test_python_floor(self):
        # tarfile extraction filters arrived in 3.11.4
        assert self._project()["requires-python"] == ">=3.11.4"

    def test_console_script(self):
        assert self._project()["scripts"] == {"create-chico-app": "chico.main:cli"}

    def test_runtime_dependencies(self):
        names = {dep.split(">=")[0] for dep in self._project()["dependencies"]}
        assert names == {"click", "pydantic", "PyYAML"}

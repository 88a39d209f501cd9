"""
Shared test fixtures and configuration.

No test touches the network or a real package manager: the shell
adapter is replaced by a MockAdapter whose ``probe:<pm>`` responses
decide which managers look installed, and template fetches go through
a fake adapter that writes a minimal package.json.
"""

from __future__ import annotations

import io
import json
import tarfile
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from chico.adapters.base import Adapter, ExecutionContext
from chico.adapters.mock import MockAdapter
from chico.adapters.registry import AdapterRegistry
from chico.core.config.loader import Settings
from chico.core.models.action import Receipt
from chico.core.models.package_manager import ChoiceEntry, PackageManagerId
from chico.core.prompts import PromptProvider
from chico.core.services.prober import probe_action_id

ALL_MANAGERS = ("bun", "pnpm", "yarn", "npm")


class FakeTemplateAdapter(Adapter):
    """Writes a package.json into the destination instead of downloading."""

    def __init__(self, manifest: dict | None = None, error: str | None = None):
        self.manifest = manifest if manifest is not None else {"name": "nextjs-template", "private": True}
        self.error = error
        self.calls: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return "template"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self.calls.append(context)
        if self.error:
            return Receipt.failure(adapter=self.name, action_id=context.action.id, error=self.error)
        dest = Path(context.action.params["destination"])
        dest.mkdir(parents=True, exist_ok=True)
        (dest / "package.json").write_text(json.dumps(self.manifest, indent=2))
        return Receipt.success(adapter=self.name, action_id=context.action.id)


class ScriptedPrompts(PromptProvider):
    """Answers prompts from a script and records what was asked."""

    def __init__(
        self,
        project_name: str = "my-app",
        branch: str | None = None,
        manager: str | None = None,
        install: bool = True,
    ):
        self.project_name = project_name
        self.branch = branch
        self.manager = manager
        self.install = install
        self.asked: list[str] = []
        self.choices: list[ChoiceEntry] | None = None
        self.default_manager: PackageManagerId | None = None

    def ask_project_name(self) -> str:
        self.asked.append("project_name")
        return self.project_name

    def ask_branch(self, default: str) -> str:
        self.asked.append("branch")
        return self.branch or default

    def ask_package_manager(
        self,
        choices: list[ChoiceEntry],
        default: PackageManagerId,
    ) -> PackageManagerId:
        self.asked.append("package_manager")
        self.choices = choices
        self.default_manager = default
        return PackageManagerId(self.manager) if self.manager else default

    def ask_confirm_install(self) -> bool:
        self.asked.append("confirm_install")
        return self.install


@pytest.fixture
def shell_mock() -> MockAdapter:
    """Mock registered under the 'shell' name: every command succeeds by default."""
    return MockAdapter(adapter_name="shell")


@pytest.fixture
def template_adapter() -> FakeTemplateAdapter:
    return FakeTemplateAdapter()


@pytest.fixture
def registry(shell_mock: MockAdapter, template_adapter: FakeTemplateAdapter) -> AdapterRegistry:
    reg = AdapterRegistry()
    reg.register(shell_mock)
    reg.register(template_adapter)
    return reg


@pytest.fixture
def host(shell_mock: MockAdapter) -> Callable[[Iterable[str]], MockAdapter]:
    """Make only the given managers answer their ``--version`` probe."""

    def _host(available: Iterable[str]) -> MockAdapter:
        available = set(available)
        for pm in ALL_MANAGERS:
            if pm not in available:
                shell_mock.set_failure(probe_action_id(pm), error=f"Executable not found: {pm}")
        return shell_mock

    return _host


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def scripted_prompts() -> type[ScriptedPrompts]:
    return ScriptedPrompts


@pytest.fixture
def make_tarball(tmp_path: Path) -> Callable[..., Path]:
    """Build a GitHub-style archive: everything under one top-level dir."""

    def _make(
        files: dict[str, str],
        top: str = "nextjs-template-blank",
        links: dict[str, str] | None = None,
    ) -> Path:
        archive = tmp_path / "archive.tar.gz"
        with tarfile.open(archive, "w:gz") as tar:
            root = tarfile.TarInfo(top)
            root.type = tarfile.DIRTYPE
            tar.addfile(root)
            for rel, content in files.items():
                data = content.encode("utf-8")
                info = tarfile.TarInfo(f"{top}/{rel}")
                info.size = len(data)
                tar.addfile(info, io.BytesIO(data))
            for rel, target in (links or {}).items():
                link = tarfile.TarInfo(f"{top}/{rel}")
                link.type = tarfile.SYMTYPE
                link.linkname = target
                tar.addfile(link)
        return archive

    return _make

"""
Create use case: scaffold one project from the template.

Ties together intent gathering, package manager resolution, template
fetch, manifest patch, and the optional install / dev-server steps.
Every failure raises a ``ChicoError`` except a failed install or dev
server, which is recorded on the result: by then the project exists
and the user can finish by hand.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from chico.adapters.registry import AdapterRegistry
from chico.core.config.loader import Settings
from chico.core.errors import DevServerError, InstallCommandError, InvalidProjectNameError
from chico.core.models.package_manager import PackageManagerId, ResolvedChoice
from chico.core.prompts import PromptProvider
from chico.core.services.dispatch import manual_steps
from chico.core.services.install import run_dev, run_install
from chico.core.services.manifest import patch_manifest, validate_project_name
from chico.core.services.prober import is_available, probe_all
from chico.core.services.resolver import build_choices, default_manager, resolve
from chico.core.services.template import fetch_template, template_ref

logger = logging.getLogger(__name__)


@dataclass
class CreateRequest:
    """What the user asked for on the command line.

    ``None`` means "not given": ask for it when interactive, otherwise
    fall back to settings / automatic resolution.
    """

    project_name: str | None = None
    explicit_manager: PackageManagerId | None = None
    branch: str | None = None
    template: str | None = None
    interactive: bool = True
    install: bool | None = None
    start_dev: bool = False


@dataclass
class CreateResult:
    """Result of the create use case."""

    project_name: str = ""
    project_dir: Path | None = None
    choice: ResolvedChoice | None = None
    template: str = ""
    availability: dict[PackageManagerId, bool] = field(default_factory=dict)
    installed: bool = False
    install_error: str | None = None
    dev_started: bool = False
    dev_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.install_error is None and self.dev_error is None

    @property
    def next_steps(self) -> list[str]:
        if self.choice is None:
            return []
        return manual_steps(self.project_name, self.choice)

    def to_dict(self) -> dict:
        return {
            "project_name": self.project_name,
            "project_dir": str(self.project_dir) if self.project_dir else None,
            "package_manager": self.choice.manager.value if self.choice else None,
            "branch": self.choice.branch if self.choice else None,
            "template": self.template,
            "availability": {pm.value: ok for pm, ok in self.availability.items()},
            "installed": self.installed,
            "install_error": self.install_error,
            "dev_started": self.dev_started,
            "dev_error": self.dev_error,
            "next_steps": self.next_steps,
        }


def _silent(_message: str) -> None:
    pass


def run_create(
    request: CreateRequest,
    prompts: PromptProvider,
    registry: AdapterRegistry,
    settings: Settings,
    parent_dir: Path,
    progress: Callable[[str], None] = _silent,
) -> CreateResult:
    """Scaffold a project under ``parent_dir``.

    Args:
        request: Command-line intent.
        prompts: Asked only for what ``request`` leaves open, and only
            when ``request.interactive`` is set.
        registry: Adapter registry used for probes, fetch and install.
        settings: Effective settings (template, branch, timeouts).
        parent_dir: Directory the project directory is created in.
        progress: Called with short status lines for the user.

    Returns:
        CreateResult describing what was done.

    Raises:
        UnavailableManagerError: Flagged or picked manager is not installed.
        InvalidProjectNameError: Missing or unsafe project name.
        TemplateFetchError: Template download failed.
        ManifestError: The template has no usable package.json.
    """
    result = CreateResult()
    probe = functools.partial(is_available, registry=registry, timeout=settings.probe_timeout)

    # An explicit flag is checked before any question or download
    explicit: PackageManagerId | None = None
    if request.explicit_manager is not None:
        explicit = resolve(request.explicit_manager, None, probe)

    if request.project_name:
        name = request.project_name
    elif request.interactive:
        name = prompts.ask_project_name()
    else:
        raise InvalidProjectNameError("A project name is required with --yes")
    result.project_name = validate_project_name(name)

    branch = request.branch
    if not branch:
        branch = prompts.ask_branch(settings.branch) if request.interactive else settings.branch

    if explicit is not None:
        manager = explicit
    else:
        result.availability = probe_all(registry, timeout=settings.probe_timeout)
        if request.interactive:
            picked = prompts.ask_package_manager(
                build_choices(result.availability),
                default_manager(result.availability),
            )
            # re-probed: a disabled pick must fail, not fall back
            manager = resolve(None, picked, probe)
        else:
            manager = resolve(None, None, result.availability)

    choice = ResolvedChoice(manager=manager, branch=branch)
    result.choice = choice
    logger.info("Using %s with template branch %s", manager.value, branch)

    slug = request.template or settings.template
    result.template = template_ref(slug, branch)
    project_dir = parent_dir / result.project_name
    result.project_dir = project_dir

    progress(f"Creating {result.project_name} from {result.template}...")
    fetch_template(
        registry,
        slug,
        branch,
        project_dir,
        force=settings.force,
        timeout=settings.fetch_timeout,
    )
    patch_manifest(project_dir, result.project_name)

    install = request.install
    if install is None:
        install = prompts.ask_confirm_install() if request.interactive else True
    if not install:
        return result

    progress(f"Installing dependencies with {manager.value}...")
    try:
        run_install(registry, project_dir, choice, timeout=settings.install_timeout)
        result.installed = True
    except InstallCommandError as e:
        logger.warning("Install failed in %s: %s", project_dir, e)
        result.install_error = str(e)
        return result

    if request.start_dev:
        progress("Starting the development server...")
        try:
            run_dev(registry, project_dir, choice)
        except DevServerError as e:
            logger.warning("Dev server failed in %s: %s", project_dir, e)
            result.dev_error = str(e)
            return result
        result.dev_started = True

    return result

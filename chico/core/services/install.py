"""
Install and dev-server commands, run inside the new project.

Both inherit the terminal so the package manager's own progress output
reaches the user. The project directory is passed to the shell adapter
as the working directory; the process cwd is never changed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from chico.adapters.registry import AdapterRegistry
from chico.core.errors import CommandError, DevServerError, InstallCommandError
from chico.core.models.action import Action, Receipt
from chico.core.models.package_manager import ResolvedChoice
from chico.core.services.dispatch import dev_command, install_command

logger = logging.getLogger(__name__)


def _run(
    registry: AdapterRegistry,
    action_id: str,
    command: str,
    project_dir: Path,
    timeout: int | None,
    error_cls: type[CommandError],
) -> Receipt:
    logger.info("Running '%s' in %s", command, project_dir)
    receipt = registry.execute_action(
        Action(
            id=action_id,
            name=command,
            adapter="shell",
            params={"command": command, "output": "inherit", "timeout": timeout},
        ),
        working_dir=str(project_dir),
    )
    if not receipt.ok:
        # with an exit code the package manager has already explained itself
        detail = "" if receipt.return_code is not None else (receipt.error or "")
        raise error_cls(command, receipt.return_code, detail)
    return receipt


def run_install(
    registry: AdapterRegistry,
    project_dir: Path,
    choice: ResolvedChoice,
    timeout: int | None = None,
) -> Receipt:
    """Install the project's dependencies.

    Raises:
        InstallCommandError: If the install command fails.
    """
    return _run(registry, "install", install_command(choice), project_dir, timeout, InstallCommandError)


def run_dev(registry: AdapterRegistry, project_dir: Path, choice: ResolvedChoice) -> Receipt:
    """Start the dev server and block until it exits.

    Ctrl-C is how a dev server is normally stopped, so an interrupt
    ends the run as a success.

    Raises:
        DevServerError: If the dev command is missing or exits non-zero.
    """
    command = dev_command(choice)
    try:
        return _run(registry, "dev", command, project_dir, None, DevServerError)
    except KeyboardInterrupt:
        logger.info("Dev server stopped by user")
        return Receipt.success(
            adapter="shell",
            action_id="dev",
            output="Stopped by user",
            metadata={"command": command, "interrupted": True},
        )

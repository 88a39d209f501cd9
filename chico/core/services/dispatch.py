"""
Command dispatch: resolved choice → literal install/dev commands.

The strings come straight from the package manager table; nothing is
templated, quoted or rewritten.
"""

from __future__ import annotations

from chico.core.data.package_managers import get_descriptor
from chico.core.models.package_manager import PackageManagerId, ResolvedChoice


def _manager(choice: ResolvedChoice | PackageManagerId | str) -> PackageManagerId:
    if isinstance(choice, ResolvedChoice):
        return choice.manager
    return PackageManagerId(choice)


def install_command(choice: ResolvedChoice | PackageManagerId | str) -> str:
    return get_descriptor(_manager(choice)).install_command


def dev_command(choice: ResolvedChoice | PackageManagerId | str) -> str:
    return get_descriptor(_manager(choice)).dev_command


def manual_steps(project_name: str, choice: ResolvedChoice | PackageManagerId | str) -> list[str]:
    """Commands the user runs by hand to get going.

    The project name is inserted as-is; names are validated before a
    project directory is ever created.
    """
    return [
        f"cd {project_name}",
        install_command(choice),
        dev_command(choice),
    ]

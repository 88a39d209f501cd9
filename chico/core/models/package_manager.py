"""
Package manager models: ids, descriptors and the per-run choice.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class PackageManagerId(StrEnum):
    """The closed set of supported package managers."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"


class PackageManagerDescriptor(BaseModel):
    """Static description of one package manager.

    Attributes:
        id:              Manager identifier.
        display_name:    Label shown in the interactive list.
        probe_command:   Executable queried with ``--version``.
        install_command: Literal shell command that installs dependencies.
        dev_command:     Literal shell command that starts the dev server.
        install_hint:    How to get the manager when it is missing.
    """

    model_config = ConfigDict(frozen=True)

    id: PackageManagerId
    display_name: str
    probe_command: str
    install_command: str
    dev_command: str
    install_hint: str


class ChoiceEntry(BaseModel):
    """One row of the interactive package manager list."""

    model_config = ConfigDict(frozen=True)

    label: str
    id: PackageManagerId
    disabled: bool = False


class ResolvedChoice(BaseModel):
    """The package manager and template branch chosen for this run."""

    model_config = ConfigDict(frozen=True)

    manager: PackageManagerId
    branch: str = "blank"

"""
Prompt provider contract: what the create flow needs to ask the user.

The core decides *what* to ask and which entries are disabled; how the
questions look on screen belongs to the implementation
(see ``chico.ui.cli.prompts.ClickPromptProvider``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from chico.core.models.package_manager import ChoiceEntry, PackageManagerId


class PromptProvider(ABC):
    """Interactive questions asked during ``create``."""

    @abstractmethod
    def ask_project_name(self) -> str:
        """Ask for the project name (non-empty)."""

    @abstractmethod
    def ask_branch(self, default: str) -> str:
        """Ask which template branch to use."""

    @abstractmethod
    def ask_package_manager(
        self,
        choices: list[ChoiceEntry],
        default: PackageManagerId,
    ) -> PackageManagerId:
        """Ask the user to pick one of ``choices``."""

    @abstractmethod
    def ask_confirm_install(self) -> bool:
        """Ask whether dependencies should be installed now."""

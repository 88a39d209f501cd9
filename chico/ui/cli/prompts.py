"""
Click-backed prompts for the interactive create flow.
"""

from __future__ import annotations

import click

from chico.core.errors import InvalidProjectNameError
from chico.core.models.package_manager import ChoiceEntry, PackageManagerId
from chico.core.prompts import PromptProvider
from chico.core.services.manifest import validate_project_name


def _project_name(value: str) -> str:
    try:
        return validate_project_name(value)
    except InvalidProjectNameError as e:
        raise click.BadParameter(str(e)) from e


class ClickPromptProvider(PromptProvider):
    """Ask questions on the terminal with ``click.prompt`` / ``click.confirm``.

    The package manager list is numbered; the answer may be the number
    or the manager's name. Disabled entries are shown, greyed out and
    marked "(not installed)".
    """

    def ask_project_name(self) -> str:
        return click.prompt("What is your project name?", value_proc=_project_name)

    def ask_branch(self, default: str) -> str:
        return click.prompt("Which template branch?", default=default).strip()

    def ask_package_manager(
        self,
        choices: list[ChoiceEntry],
        default: PackageManagerId,
    ) -> PackageManagerId:
        click.secho("Which package manager do you want to use?", bold=True)
        for number, entry in enumerate(choices, start=1):
            if entry.disabled:
                click.secho(f"  {number}) {entry.label} (not installed)", dim=True)
            else:
                click.echo(f"  {number}) {entry.label}")

        def pick(value: str) -> PackageManagerId:
            value = value.strip().lower()
            if value.isdigit() and 1 <= int(value) <= len(choices):
                return choices[int(value) - 1].id
            for entry in choices:
                if entry.id.value == value:
                    return entry.id
            raise click.BadParameter(f"choose 1-{len(choices)} or a manager name")

        return click.prompt("Package manager", default=default.value, value_proc=pick)

    def ask_confirm_install(self) -> bool:
        return click.confirm("Install dependencies now?", default=True)

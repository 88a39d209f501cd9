"""
Error taxonomy.

Every failure the CLI reports derives from :class:`ChicoError`. The
CLI turns any of them into a red message and exit code 1.
"""

from __future__ import annotations


class ChicoError(Exception):
    """Base class for all user-facing scaffolder errors."""


class UnavailableManagerError(ChicoError):
    """The requested or chosen package manager is not installed."""

    def __init__(self, manager: str, remedy: str):
        self.manager = str(manager)
        self.remedy = remedy
        super().__init__(f"{self.manager} is not installed. To install it: {remedy}")


class TemplateFetchError(ChicoError):
    """Downloading or unpacking the template failed."""


class ManifestError(ChicoError):
    """The project's package.json is missing or unreadable."""


class CommandError(ChicoError):
    """A package manager command run in the project failed."""

    def __init__(self, command: str, return_code: int | None, detail: str = ""):
        self.command = command
        self.return_code = return_code
        msg = f"'{command}' failed"
        if return_code is not None:
            msg += f" (exit code {return_code})"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class InstallCommandError(CommandError):
    """The install command exited with a non-zero status."""


class DevServerError(CommandError):
    """The dev server could not be started or exited with an error."""


class InvalidProjectNameError(ChicoError):
    """The project name is empty or unsafe to use as a directory name."""


class ConfigError(ChicoError):
    """Raised when the configuration file or environment is invalid."""

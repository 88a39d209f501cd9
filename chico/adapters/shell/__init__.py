"""Shell adapters."""

from chico.adapters.shell.command import ShellCommandAdapter

__all__ = ["ShellCommandAdapter"]

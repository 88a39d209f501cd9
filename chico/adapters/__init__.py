"""Adapters: tool bindings for external side effects.

Public re-exports for convenient access.
"""

from chico.adapters.base import Adapter, ExecutionContext
from chico.adapters.mock import MockAdapter
from chico.adapters.registry import AdapterRegistry


def default_registry() -> AdapterRegistry:
    """Registry wired with the real shell and template adapters."""
    from chico.adapters.shell.command import ShellCommandAdapter
    from chico.adapters.template.tarball import TemplateAdapter

    registry = AdapterRegistry()
    registry.register(ShellCommandAdapter())
    registry.register(TemplateAdapter())
    return registry


__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]

"""
Adapter base: the protocol contract between services and the outside world.

Services never spawn processes or open sockets themselves. They build
an Action, hand it to the AdapterRegistry, and read the Receipt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from chico.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action.

    ``working_dir`` is always explicit: adapters run commands there
    instead of relying on the process's current directory.
    """

    action: Action
    working_dir: str = "."
    dry_run: bool = False
    params: dict[str, Any] = Field(default_factory=dict)


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return receipts.
    They NEVER raise exceptions; failures are captured in the Receipt.

    To create a new adapter:
        1. Subclass Adapter
        2. Implement name, validate, execute
        3. Register it in the AdapterRegistry
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'template')."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"

"""
Adapter registry: the single dispatch point between services and adapters.

Services hand an Action to :meth:`AdapterRegistry.execute_action` and get
a Receipt back; they never hold an adapter themselves. In mock mode every
action is routed to one stand-in adapter (or answered with a canned
success) so nothing touches the host.
"""

from __future__ import annotations

import logging
import time

from chico.adapters.base import Adapter, ExecutionContext
from chico.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters by name, plus the validate → execute pipeline."""

    def __init__(self, mock_mode: bool = False):
        self._adapters: dict[str, Adapter] = {}
        self._mock_mode = mock_mode
        self._mock_adapter: Adapter | None = None

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def set_mock_mode(self, enabled: bool, mock_adapter: Adapter | None = None) -> None:
        """Route every action to ``mock_adapter`` (or a canned success)."""
        self._mock_mode = enabled
        self._mock_adapter = mock_adapter

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter '%s'", adapter.name)
        self._adapters[adapter.name] = adapter
        logger.debug("Registered adapter '%s'", adapter.name)

    def unregister(self, name: str) -> None:
        self._adapters.pop(name, None)

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def list_adapters(self) -> list[str]:
        return list(self._adapters)

    def execute_action(
        self,
        action: Action,
        working_dir: str = ".",
        dry_run: bool = False,
    ) -> Receipt:
        """Run ``action`` through its adapter and return the receipt.

        Never raises: a missing adapter, a failed validation and an
        adapter that blows up all come back as failed receipts.

        Args:
            action: The action to execute.
            working_dir: Directory the adapter operates in.
            dry_run: Validate only; the receipt is 'skipped'.
        """
        start = time.monotonic()
        context = ExecutionContext(
            action=action,
            working_dir=working_dir,
            dry_run=dry_run,
            params=action.params,
        )

        if self._mock_mode and self._mock_adapter is None:
            return Receipt.success(
                adapter=action.adapter,
                action_id=action.id,
                output=f"[mock] {action.adapter}:{action.id} executed",
                return_code=0,
                metadata={"mock": True, "dry_run": dry_run},
            )

        adapter = self._mock_adapter if self._mock_mode else self._adapters.get(action.adapter)
        receipt = self._dispatch(adapter, context) if adapter else Receipt.failure(
            adapter=action.adapter,
            action_id=action.id,
            error=f"No adapter registered for '{action.adapter}'",
        )

        receipt.duration_ms = int((time.monotonic() - start) * 1000)
        logger.debug("%s:%s -> %s (%d ms)", action.adapter, action.id, receipt.status, receipt.duration_ms)
        return receipt

    @staticmethod
    def _dispatch(adapter: Adapter, context: ExecutionContext) -> Receipt:
        action = context.action
        try:
            valid, reason = adapter.validate(context)
        except Exception as e:
            valid, reason = False, f"error: {e}"
        if not valid:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation failed: {reason}",
            )

        if context.dry_run:
            return Receipt.skip(
                adapter=action.adapter,
                action_id=action.id,
                reason=f"[dry-run] Would execute {action.adapter}:{action.id}",
                metadata={"dry_run": True},
            )

        try:
            return adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised on %s: %s", action.adapter, action.id, e)
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )

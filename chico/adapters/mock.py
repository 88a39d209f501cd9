"""
Mock adapter: test double for shell and template operations.

Returns success for everything by default. Individual action ids can
be configured to fail (``set_failure("probe:bun")``) or to return a
custom receipt.
"""

from __future__ import annotations

from chico.adapters.base import Adapter, ExecutionContext
from chico.core.models.action import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing."""

    def __init__(
        self,
        adapter_name: str = "mock",
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    def called_ids(self) -> list[str]:
        """Action ids in call order."""
        return [ctx.action.id for ctx in self._call_log]

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific action ID."""
        self._responses[action_id] = receipt

    def set_failure(
        self,
        action_id: str,
        error: str = "Mock failure",
        return_code: int | None = 1,
    ) -> None:
        """Configure a specific action to fail."""
        self._responses[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
            return_code=return_code,
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        if context.action.id in self._responses:
            return self._responses[context.action.id]

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            return_code=0,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()

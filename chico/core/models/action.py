"""
Action and Receipt models: the adapter I/O contract.

The services build Actions, adapters return Receipts. Adapters never
raise: a missing executable, a non-zero exit or a broken download all
come back as a failed Receipt, and the calling service decides which
typed error (if any) that becomes.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Action(BaseModel):
    """A side effect requested from an adapter.

    ``id`` doubles as the lookup key for canned responses in the
    MockAdapter, so services use stable ids such as ``probe:bun``.
    """

    id: str                         # e.g. "probe:pnpm", "install", "fetch"
    name: str = ""                  # human-readable name
    adapter: str                    # which adapter handles this
    params: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    """Outcome of one adapter execution."""

    adapter: str
    action_id: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    return_code: int | None = None  # only set by process-backed adapters

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the action succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the action failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        action_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        action_id: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="failed",
            error=error,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        adapter: str,
        action_id: str,
        reason: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a skip receipt (dry-run)."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="skipped",
            output=reason,
            **kwargs,
        )

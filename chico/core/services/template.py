"""
Template fetch: turn the template adapter's receipt into a result or an error.
"""

from __future__ import annotations

import logging
from pathlib import Path

from chico.adapters.registry import AdapterRegistry
from chico.core.errors import TemplateFetchError
from chico.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


def template_ref(slug: str, branch: str) -> str:
    """Human-readable template reference, ``owner/repo#branch``."""
    return f"{slug}#{branch}"


def fetch_template(
    registry: AdapterRegistry,
    slug: str,
    branch: str,
    destination: Path,
    force: bool = True,
    timeout: int = 30,
) -> Receipt:
    """Download ``slug`` at ``branch`` into ``destination``.

    Raises:
        TemplateFetchError: If the download or the unpacking failed.
    """
    ref = template_ref(slug, branch)
    logger.info("Fetching template %s into %s", ref, destination)

    receipt = registry.execute_action(
        Action(
            id="fetch",
            name=f"Fetch {ref}",
            adapter="template",
            params={
                "slug": slug,
                "ref": branch,
                "destination": str(destination),
                "force": force,
                "timeout": timeout,
            },
        ),
        working_dir=str(destination.parent),
    )
    if not receipt.ok:
        raise TemplateFetchError(f"Could not fetch template {ref}: {receipt.error}")
    return receipt

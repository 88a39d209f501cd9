"""
Environment prober: which package managers can run on this host.

A manager is available when ``<probe_command> --version`` exits 0 within
the probe timeout. The shell adapter resolves the executable on PATH and
reports a missing one as a failed receipt, so "not installed", "broken"
and "hung" all read as unavailable. Results are never cached.
"""

from __future__ import annotations

import logging

from chico.adapters.registry import AdapterRegistry
from chico.core.data.package_managers import SCAN_ORDER, get_descriptor
from chico.core.models.action import Action
from chico.core.models.package_manager import PackageManagerId

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT = 5

Availability = dict[PackageManagerId, bool]


def probe_action_id(manager: PackageManagerId | str) -> str:
    """Action id used for the probe of ``manager`` (e.g. ``probe:bun``)."""
    return f"probe:{PackageManagerId(manager).value}"


def is_available(
    manager: PackageManagerId | str,
    registry: AdapterRegistry,
    timeout: int = DEFAULT_PROBE_TIMEOUT,
) -> bool:
    """Return True if ``manager`` is installed and answers ``--version``.

    Never raises; an id outside the table is simply unavailable.
    """
    try:
        descriptor = get_descriptor(manager)
    except ValueError:
        logger.debug("Unknown package manager: %s", manager)
        return False
    receipt = registry.execute_action(
        Action(
            id=probe_action_id(descriptor.id),
            name=f"Probe {descriptor.probe_command}",
            adapter="shell",
            params={
                "argv": [descriptor.probe_command, "--version"],
                "output": "silent",
                "timeout": timeout,
            },
        )
    )
    if not receipt.ok:
        logger.debug("%s unavailable: %s", descriptor.probe_command, receipt.error)
    return receipt.ok


def probe_all(
    registry: AdapterRegistry,
    timeout: int = DEFAULT_PROBE_TIMEOUT,
) -> Availability:
    """Probe every known manager, one after the other, in scan order."""
    availability = {pm: is_available(pm, registry, timeout=timeout) for pm in SCAN_ORDER}
    logger.info(
        "Package managers available: %s",
        ", ".join(pm.value for pm, ok in availability.items() if ok) or "none",
    )
    return availability

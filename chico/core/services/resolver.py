"""
Package manager resolution: flags vs. interactive choice vs. default.

Precedence, highest first:

1. An explicit ``--use-<pm>`` flag. It is validated on its own, before
   anything else is probed, and the interactive list is never shown.
2. The manager the user picked from the interactive list.
3. The automatic default: first available manager in ``SCAN_ORDER``,
   or npm when none of them answer.

Whatever wins in (1) or (2) is re-validated; an unavailable pick raises
``UnavailableManagerError``. There is no fallback to another manager.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from chico.core.data.package_managers import (
    FALLBACK_MANAGER,
    PACKAGE_MANAGERS,
    SCAN_ORDER,
)
from chico.core.errors import UnavailableManagerError
from chico.core.models.package_manager import ChoiceEntry, PackageManagerId

logger = logging.getLogger(__name__)

Probe = Callable[[PackageManagerId], bool]

# CLI flag order; the first flag set wins when several are passed
_FLAG_ORDER = (
    PackageManagerId.NPM,
    PackageManagerId.YARN,
    PackageManagerId.PNPM,
    PackageManagerId.BUN,
)


def _as_probe(availability: Probe | Mapping[PackageManagerId, bool]) -> Probe:
    if isinstance(availability, Mapping):
        return lambda pm: bool(availability.get(pm, False))
    return availability


def manager_from_flags(
    use_npm: bool = False,
    use_yarn: bool = False,
    use_pnpm: bool = False,
    use_bun: bool = False,
) -> PackageManagerId | None:
    """Map the ``--use-*`` booleans to an explicit manager, or None."""
    flags = (use_npm, use_yarn, use_pnpm, use_bun)
    return next((pm for pm, on in zip(_FLAG_ORDER, flags) if on), None)


def default_manager(availability: Probe | Mapping[PackageManagerId, bool]) -> PackageManagerId:
    """First available manager in scan order, else npm."""
    probe = _as_probe(availability)
    for pm in SCAN_ORDER:
        if probe(pm):
            return pm
    logger.info("No package manager answered; assuming %s", FALLBACK_MANAGER.value)
    return FALLBACK_MANAGER


def build_choices(availability: Mapping[PackageManagerId, bool]) -> list[ChoiceEntry]:
    """The interactive list: every manager, in scan order.

    Unavailable managers stay in the list with ``disabled=True``.
    """
    return [
        ChoiceEntry(
            label=PACKAGE_MANAGERS[pm].display_name,
            id=pm,
            disabled=not availability.get(pm, False),
        )
        for pm in SCAN_ORDER
    ]


def ensure_available(manager: PackageManagerId | str, probe: Probe) -> PackageManagerId:
    """Return ``manager`` if it probes as available.

    Raises:
        UnavailableManagerError: Naming the manager and how to install it.
    """
    pm = PackageManagerId(manager)
    if not probe(pm):
        raise UnavailableManagerError(pm.value, PACKAGE_MANAGERS[pm].install_hint)
    return pm


def resolve(
    explicit_flag: PackageManagerId | str | None,
    interactive_choice: PackageManagerId | str | None,
    availability: Probe | Mapping[PackageManagerId, bool],
) -> PackageManagerId:
    """Pick exactly one package manager for this run.

    Args:
        explicit_flag: Manager requested on the command line.
        interactive_choice: Manager picked from the list, if one was shown.
        availability: Either a probe function or an already-computed
            availability mapping.

    Raises:
        UnavailableManagerError: If the flagged or picked manager is not available.
    """
    probe = _as_probe(availability)

    if explicit_flag is not None:
        pm = ensure_available(explicit_flag, probe)
        logger.debug("Resolved %s from command-line flag", pm.value)
        return pm

    if interactive_choice is not None:
        pm = ensure_available(interactive_choice, probe)
        logger.debug("Resolved %s from interactive choice", pm.value)
        return pm

    pm = default_manager(probe)
    logger.debug("Resolved %s automatically", pm.value)
    return pm

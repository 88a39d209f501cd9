"""
Package manager table: id → install/dev commands.

Read-only for the lifetime of the process. ``SCAN_ORDER`` is both the
order of the interactive list and the order used to pick a default
when nothing was requested: fastest installer first, npm last since
it ships with Node itself.
"""

from __future__ import annotations

from types import MappingProxyType

from chico.core.models.package_manager import PackageManagerDescriptor, PackageManagerId

_PM = PackageManagerId

SCAN_ORDER: tuple[PackageManagerId, ...] = (_PM.BUN, _PM.PNPM, _PM.YARN, _PM.NPM)

# Fallback when no manager probes as available.
FALLBACK_MANAGER = _PM.NPM


PACKAGE_MANAGERS: MappingProxyType[PackageManagerId, PackageManagerDescriptor] = MappingProxyType({
    _PM.NPM: PackageManagerDescriptor(
        id=_PM.NPM,
        display_name="npm",
        probe_command="npm",
        install_command="npm install",
        dev_command="npm run dev",
        install_hint="Install Node.js from https://nodejs.org (npm ships with it)",
    ),
    _PM.YARN: PackageManagerDescriptor(
        id=_PM.YARN,
        display_name="yarn",
        probe_command="yarn",
        install_command="yarn",
        dev_command="yarn dev",
        install_hint="npm install -g yarn",
    ),
    _PM.PNPM: PackageManagerDescriptor(
        id=_PM.PNPM,
        display_name="pnpm",
        probe_command="pnpm",
        install_command="pnpm install",
        dev_command="pnpm dev",
        install_hint="npm install -g pnpm",
    ),
    _PM.BUN: PackageManagerDescriptor(
        id=_PM.BUN,
        display_name="bun (recommended)",
        probe_command="bun",
        install_command="bun install",
        dev_command="bun dev",
        install_hint="curl -fsSL https://bun.sh/install | bash",
    ),
})


def get_descriptor(manager: PackageManagerId | str) -> PackageManagerDescriptor:
    """Look up the descriptor for a manager id.

    Raises:
        ValueError: If ``manager`` is not one of the known ids.
    """
    return PACKAGE_MANAGERS[PackageManagerId(manager)]

"""
Static catalogs.

The package manager table lives in :mod:`chico.core.data.package_managers`.
"""

from chico.core.data.package_managers import PACKAGE_MANAGERS, SCAN_ORDER, get_descriptor

__all__ = ["PACKAGE_MANAGERS", "SCAN_ORDER", "get_descriptor"]

"""
Domain models: Pydantic types for the scaffolder.

All models are re-exported here for convenient access:

    from chico.core.models import Action, Receipt, PackageManagerId, ResolvedChoice
"""

from chico.core.models.action import Action, Receipt
from chico.core.models.package_manager import (
    ChoiceEntry,
    PackageManagerDescriptor,
    PackageManagerId,
    ResolvedChoice,
)

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # package_manager.py
    "ChoiceEntry",
    "PackageManagerDescriptor",
    "PackageManagerId",
    "ResolvedChoice",
]

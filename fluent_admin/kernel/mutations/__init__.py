"""
Transactional multi-table mutations.
"""

from fluent_admin.kernel.mutations.cascade import (
    CASCADE_PLANS,
    CascadeCoordinator,
    CascadeResult,
    CascadeState,
    CascadeStep,
    ResourceType,
    normalize_ids,
)

__all__ = [
    "CASCADE_PLANS",
    "CascadeCoordinator",
    "CascadeResult",
    "CascadeState",
    "CascadeStep",
    "ResourceType",
    "normalize_ids",
]

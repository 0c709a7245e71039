"""
Operation audit trail.

Provides append-only, best-effort logging of administrative mutations.
"""

from fluent_admin.kernel.audit.recorder import AuditActor, AuditEntry, AuditRecorder, join_resource_ids

__all__ = [
    "AuditActor",
    "AuditEntry",
    "AuditRecorder",
    "join_resource_ids",
]

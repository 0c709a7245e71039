"""
Audited batch deletes.

Pairs the cascade coordinator with the audit recorder: one operation-log
row per call, carrying every requested id, whether the cascade committed or
rolled back.
"""

import uuid
from typing import Dict, Optional, Sequence, Tuple

from fluent_admin.kernel.audit import AuditActor, AuditRecorder
from fluent_admin.kernel.mutations import CascadeCoordinator, CascadeResult, ResourceType, normalize_ids

# resource type -> (audit action, audit resource)
AUDIT_NAMES: Dict[ResourceType, Tuple[str, str]] = {
    ResourceType.POST: ("DeletePost", "Post"),
    ResourceType.ROOM: ("DeleteRoom", "PracticeRoom"),
    ResourceType.COMMENT: ("DeleteComment", "Comment"),
    ResourceType.TRAINING_RECORD: ("DeleteTrainingRecord", "TrainingRecord"),
    ResourceType.POST_LIKE: ("DeletePostLike", "PostLike"),
    ResourceType.POST_COLLECTION: ("DeletePostCollection", "PostCollection"),
    ResourceType.TONGUE_TWISTER: ("DeleteTongueTwister", "TongueTwister"),
}


async def delete_batch(
    recorder: AuditRecorder,
    coordinator: CascadeCoordinator,
    actor: AuditActor,
    resource_type: ResourceType,
    ids: Sequence[uuid.UUID],
    ip_address: Optional[str] = None,
) -> CascadeResult:
    """
    Cascade-delete ``ids`` and record the outcome.

    Id validation happens before anything is opened or recorded, so a
    rejected request leaves no audit row.

    Raises:
        ValidationError: empty or malformed ids
        TransactionError: the cascade rolled back
    """
    id_list = normalize_ids(ids)
    action, resource = AUDIT_NAMES[resource_type]

    async with recorder.audited(actor, action, resource, id_list, ip_address=ip_address) as entry:
        result = await coordinator.delete_with_dependents(resource_type, id_list)
        entry.detail = f"{action} succeeded: {len(id_list)} requested, {result.total_rows} rows removed"
    return result

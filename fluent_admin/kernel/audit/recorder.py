"""
Audit recorder for administrative mutations.

Every mutating admin call leaves exactly one operation-log row, whether the
mutation succeeded or not. Rows are written in their own short transaction so
that a rolled-back business transaction still leaves its failure record, and
a failed audit write never turns a successful mutation into an error.
"""

import asyncio
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator, Iterable, List, Optional, Protocol, Union

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fluent_admin.kernel.errors import NotFound
from fluent_admin.kernel.models.operation_log import OperationLog, OperationOutcome
from fluent_admin.kernel.models.user import UserRole
from fluent_admin.logging_config import get_logger, get_request_id

logger = get_logger(__name__)

ResourceIds = Union[str, uuid.UUID, Iterable[Union[str, uuid.UUID]]]


class AuditActor(Protocol):
    """Who performed the action; a validated token subject fits."""

    identity_id: uuid.UUID
    username: str
    role: UserRole


@dataclass
class AuditEntry:
    """Mutable slot a handler fills in while its mutation runs."""

    resource_id: str
    detail: str = ""


def join_resource_ids(resource_ids: ResourceIds) -> str:
    """Render one id or a batch of ids as a single comma-joined string."""
    if resource_ids is None:
        return ""
    if isinstance(resource_ids, (str, uuid.UUID)):
        return str(resource_ids)
    return ",".join(str(rid) for rid in resource_ids)


class AuditRecorder:
    """
    Append-only writer and reader for the operation log.

    Usage:
        async with recorder.audited(actor, "DeletePost", "Post", ids) as entry:
            result = await coordinator.delete_with_dependents(ResourceType.POST, ids)
            entry.detail = f"deleted {result.total_rows} rows"
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def record(
        self,
        actor: AuditActor,
        action: str,
        resource_type: str,
        resource_id: ResourceIds,
        detail: str,
        outcome: OperationOutcome,
        ip_address: Optional[str] = None,
    ) -> None:
        """
        Append one audit row. Best-effort: persistence errors are logged and
        absorbed, never raised to the caller.
        """
        entry = OperationLog(
            user_id=actor.identity_id,
            username=actor.username,
            user_role=UserRole(actor.role).value,
            action=action,
            resource=resource_type,
            resource_id=join_resource_ids(resource_id),
            details=detail,
            status=OperationOutcome(outcome).value,
            ip_address=ip_address,
            request_id=get_request_id(),
        )
        try:
            async with self.session_maker() as session:
                async with session.begin():
                    session.add(entry)
        except Exception:
            # Audit is outside the business transaction's guarantee
            logger.exception(
                "Failed to write operation log",
                extra={"action": action, "resource": resource_type, "outcome": entry.status},
            )

    @asynccontextmanager
    async def audited(
        self,
        actor: AuditActor,
        action: str,
        resource_type: str,
        resource_ids: ResourceIds = "",
        ip_address: Optional[str] = None,
    ) -> AsyncIterator[AuditEntry]:
        """
        Record the outcome of the wrapped block.

        Success is recorded on normal exit; on an exception a failure row
        carrying the error message is recorded and the exception re-raised.
        A cancelled block is recorded as a failure too; that write is
        shielded so the cancellation cannot drop it.
        """
        entry = AuditEntry(resource_id=join_resource_ids(resource_ids))
        try:
            yield entry
        except asyncio.CancelledError:
            await asyncio.shield(
                self.record(
                    actor,
                    action,
                    resource_type,
                    entry.resource_id,
                    f"{action} failed: cancelled",
                    OperationOutcome.FAILURE,
                    ip_address=ip_address,
                )
            )
            raise
        except Exception as exc:
            await self.record(
                actor,
                action,
                resource_type,
                entry.resource_id,
                f"{action} failed: {exc}",
                OperationOutcome.FAILURE,
                ip_address=ip_address,
            )
            raise
        await self.record(
            actor,
            action,
            resource_type,
            entry.resource_id,
            entry.detail or f"{action} succeeded",
            OperationOutcome.SUCCESS,
            ip_address=ip_address,
        )

    async def list_records(
        self,
        action: Optional[str] = None,
        resource: Optional[str] = None,
        status: Optional[str] = None,
        username: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[List[OperationLog], int]:
        """
        Page through the operation log, newest first.

        ``action`` and ``username`` match as substrings; the other filters
        match exactly.

        Returns:
            Tuple of (records on this page, total matching records)
        """
        query = select(OperationLog)
        if action:
            query = query.where(OperationLog.action.like(f"%{action}%"))
        if resource:
            query = query.where(OperationLog.resource == resource)
        if status:
            query = query.where(OperationLog.status == status)
        if username:
            query = query.where(OperationLog.username.like(f"%{username}%"))
        if start:
            query = query.where(OperationLog.created_at >= start)
        if end:
            query = query.where(OperationLog.created_at <= end)

        async with self.session_maker() as session:
            total = await session.scalar(
                select(func.count()).select_from(query.subquery())
            )
            result = await session.execute(
                query.order_by(desc(OperationLog.created_at), desc(OperationLog.id))
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            return list(result.scalars().all()), total or 0

    async def get_record(self, record_id: uuid.UUID) -> OperationLog:
        """
        Raises:
            NotFound: no record with that id
        """
        async with self.session_maker() as session:
            record = await session.get(OperationLog, record_id)
        if record is None:
            raise NotFound("Operation log not found")
        return record

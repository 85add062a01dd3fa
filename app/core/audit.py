"""Audit trail for administrative decisions."""

from typing import Any

from app.core.logging import get_logger
from app.models.audit_log import AuditLog

log = get_logger(__name__)


async def log_event(
    actor_id: str | None,
    event_type: str,
    entity_type: str,
    entity_id: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> None:
    """Append to audit_logs collection and mirror the event to the structured log."""
    await AuditLog(
        actor_id=actor_id,
        event_type=event_type,
        entity_type=entity_type,
        entity_id=entity_id,
        metadata=metadata or {},
    ).insert()
    log.info("audit_event", event_type=event_type, entity_type=entity_type, entity_id=entity_id)

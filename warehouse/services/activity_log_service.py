import logging
from typing import Iterable, List, Optional, Tuple

from warehouse.core.config import ACTIVITY_LOG_LIMIT
from warehouse.models.activity_log import ActivityLog
from warehouse.schemas.actor import Actor

log = logging.getLogger(__name__)


async def record_activity(item_name: str, action: str, actor: Actor, details: str = "") -> Optional[ActivityLog]:
    """
    Appends one activity entry. The audit trail is informational: a failed write
    is logged and swallowed so it can never fail (or roll back) the caller.
    """
    try:
        return await ActivityLog.create(
            item_name=item_name,
            action=action,
            user_id=actor.id,
            user_name=actor.name,
            user_role=actor.role,
            details=details,
        )
    except Exception as e:
        log.error(f"Failed to write activity log '{action}' for '{item_name}': {e}")
        return None


async def record_activities(entries: Iterable[Tuple[str, str]], action: str, actor: Actor) -> None:
    """Writes (item_name, details) pairs under one action label; a failed entry does not stop the rest."""
    for item_name, details in entries:
        await record_activity(item_name, action, actor, details)


async def list_activity(limit: int = ACTIVITY_LOG_LIMIT) -> List[ActivityLog]:
    """Newest first."""
    return await ActivityLog.all().order_by("-timestamp", "-id").limit(limit)

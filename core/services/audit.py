from typing import Optional, Any, Dict
from core.models import AuditEvent, User


def log_action(*, user: Optional[User], action: str, object_type: Optional[str]=None, object_id: Optional[int]=None, detail: Optional[Dict[str, Any]]=None) -> AuditEvent:
    """Record a business action.  Call inside the transaction that performs it."""
    return AuditEvent.objects.create(
        user=user if getattr(user, 'pk', None) else None,
        action=action,
        object_type=object_type,
        object_id=object_id,
        detail=detail or {},
    )

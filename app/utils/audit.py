"""
Audit trail for writes made through the API.
"""
import logging
from datetime import date

from app.extensions import db
from app.models import AuditLog
from app.models.audit_log import AUDITED_ENTITIES

logger = logging.getLogger(__name__)


def _plain(value):
    if isinstance(value, date):
        return value.isoformat()
    return value


def log_audit(action, entity, actor, **changes):
    """
    Record ``action`` on a persisted model instance by ``actor``.

    Keyword arguments become the ``changes`` payload; dates are stored as
    ISO strings. A failed write is logged and rolled back, never raised.
    """
    entity_type = AUDITED_ENTITIES.get(entity.__tablename__)
    if entity_type is None:
        raise ValueError(f"{type(entity).__name__} is not audited")

    try:
        entry = AuditLog(
            entity_type=entity_type,
            entity_id=entity.id,
            action=action,
            actor_id=actor.id if actor else None,
            actor_role=actor.role if actor else None,
            status=getattr(entity, 'status', None),
            changes={k: _plain(v) for k, v in changes.items()} or None,
        )
        db.session.add(entry)
        db.session.commit()
    except Exception as e:
        logger.warning("Audit log failed for %s %s: %s", entity_type, entity.id, e)
        db.session.rollback()

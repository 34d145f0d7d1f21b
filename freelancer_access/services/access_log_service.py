"""
Denied-access log.

Written by the host when a direct open of a content item is refused; list
filtering never writes here. Only the most recent entries are kept.
"""

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.config import settings
from freelancer_access.models.access_log import AccessLogEntry
from freelancer_access.models.content import Content
from freelancer_access.schemas.access import AccessSubject

logger = logging.getLogger(__name__)


async def record_denied_access(
    db: AsyncSession,
    subject: AccessSubject,
    content_id: int,
    content: Content | None = None,
    ip: str | None = None,
    limit: int | None = None,
) -> AccessLogEntry:
    limit = limit or settings.access_log_limit
    content_title = content.title if content is not None and content.title else "Unknown"
    ip = ip or "Unknown"

    logger.warning(
        "Access denied. User: %s (ID: %d). Content: %s (ID: %d). IP: %s",
        subject.login,
        subject.id,
        content_title,
        content_id,
        ip,
    )

    entry = AccessLogEntry(
        time=datetime.utcnow(),
        user_id=subject.id,
        user_login=subject.login,
        content_id=content_id,
        content_title=content_title,
        ip=ip,
    )
    db.add(entry)
    await db.flush()

    # Trim everything past the newest `limit` entries
    keep = select(AccessLogEntry.id).order_by(AccessLogEntry.time.desc(), AccessLogEntry.id.desc()).limit(limit)
    await db.execute(
        delete(AccessLogEntry)
        .where(AccessLogEntry.id.not_in(keep))
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return entry


async def list_entries(db: AsyncSession, limit: int | None = None) -> list[AccessLogEntry]:
    """Newest first."""
    stmt = select(AccessLogEntry).order_by(AccessLogEntry.time.desc(), AccessLogEntry.id.desc())
    if limit is not None:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def clear(db: AsyncSession) -> None:
    await db.execute(delete(AccessLogEntry))
    await db.commit()
    logger.info("Access log cleared")

"""
Grant storage.

A grant is the set of content IDs a user may access for one content key.
Stored IDs are always positive integers: every write goes through
``sanitize_ids`` because the store can be written from several places
(admin API, templates, copies) and must never hold junk.
"""

import logging
from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.exceptions import InvalidOperationError
from freelancer_access.models.access_grant import AccessGrant
from freelancer_access.models.access_schedule import AccessSchedule

logger = logging.getLogger(__name__)


def _to_positive_int(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value > 0 else None
    if isinstance(value, str):
        value = value.strip()
        if value.isascii() and value.isdigit():
            number = int(value)
            return number if number > 0 else None
    return None


def sanitize_ids(values: Iterable | None) -> frozenset[int]:
    """Keep positive integers (or digit strings); drop everything else."""
    if not values or isinstance(values, (str, bytes)):
        return frozenset()
    result = set()
    for value in values:
        number = _to_positive_int(value)
        if number is not None:
            result.add(number)
    return frozenset(result)


class GrantStore(Protocol):
    async def get_grant(self, user_id: int, content_key: str) -> frozenset[int]: ...

    async def set_grant(self, user_id: int, content_key: str, ids: Iterable) -> frozenset[int]: ...

    async def get_all_grants(self, user_id: int) -> dict[str, frozenset[int]]: ...


class DatabaseGrantStore:
    """GrantStore backed by the ``access_grants`` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_grant(self, user_id: int, content_key: str) -> frozenset[int]:
        row = await self._find(user_id, content_key)
        # Rows may have been written by other tools; never trust the payload
        return sanitize_ids(row.ids) if row else frozenset()

    async def set_grant(self, user_id: int, content_key: str, ids: Iterable) -> frozenset[int]:
        """Replace the user's grant for *content_key*. Empty removes it."""
        clean = sanitize_ids(ids)
        row = await self._find(user_id, content_key)

        if not clean:
            if row is not None:
                await self.db.delete(row)
                await self.db.commit()
            logger.info("Grant cleared: user=%s key=%s", user_id, content_key)
            return clean

        if row is None:
            row = AccessGrant(user_id=user_id, content_key=content_key)
            self.db.add(row)
        row.ids = sorted(clean)
        await self.db.commit()
        logger.info("Grant set: user=%s key=%s count=%s", user_id, content_key, len(clean))
        return clean

    async def add_to_grant(self, user_id: int, content_key: str, ids: Iterable) -> frozenset[int]:
        existing = await self.get_grant(user_id, content_key)
        return await self.set_grant(user_id, content_key, existing | sanitize_ids(ids))

    async def remove_from_grant(
        self, user_id: int, content_key: str, ids: Iterable | None = None
    ) -> frozenset[int]:
        """Remove *ids* from the grant, or the whole grant when *ids* is None."""
        if ids is None:
            return await self.set_grant(user_id, content_key, ())
        existing = await self.get_grant(user_id, content_key)
        return await self.set_grant(user_id, content_key, existing - sanitize_ids(ids))

    async def get_all_grants(self, user_id: int) -> dict[str, frozenset[int]]:
        result = await self.db.execute(select(AccessGrant).where(AccessGrant.user_id == user_id))
        grants = {}
        for row in result.scalars().all():
            ids = sanitize_ids(row.ids)
            if ids:
                grants[row.content_key] = ids
        return grants

    async def clear_user_access(self, user_id: int) -> None:
        await self.db.execute(delete(AccessGrant).where(AccessGrant.user_id == user_id))
        await self.db.commit()
        logger.info("All grants cleared: user=%s", user_id)

    async def copy_user_access(self, source_id: int, target_id: int, include_schedule: bool = False) -> None:
        """Replace the target's grants with a copy of the source's."""
        if source_id == target_id:
            raise InvalidOperationError("Source and target users are the same.")

        grants = await self.get_all_grants(source_id)
        await self.db.execute(delete(AccessGrant).where(AccessGrant.user_id == target_id))
        for content_key, ids in grants.items():
            self.db.add(AccessGrant(user_id=target_id, content_key=content_key, ids=sorted(ids)))

        if include_schedule:
            source = await self.db.get(AccessSchedule, source_id)
            target = await self.db.get(AccessSchedule, target_id)
            if source is None:
                if target is not None:
                    await self.db.delete(target)
            else:
                if target is None:
                    target = AccessSchedule(user_id=target_id)
                    self.db.add(target)
                target.start_date = source.start_date
                target.end_date = source.end_date

        await self.db.commit()
        logger.info(
            "Access copied: source=%s target=%s keys=%s schedule=%s",
            source_id,
            target_id,
            sorted(grants),
            include_schedule,
        )

    async def _find(self, user_id: int, content_key: str) -> AccessGrant | None:
        result = await self.db.execute(
            select(AccessGrant).where(
                AccessGrant.user_id == user_id,
                AccessGrant.content_key == content_key,
            )
        )
        return result.scalar_one_or_none()

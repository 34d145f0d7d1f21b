"""
Read-only lookups over the host's content tables.

These are the taxonomy-membership and attachment queries the decision
engine needs. All of them ignore content status: drafts and pending items
count just like published ones.
"""

from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.constants import ATTACHMENT_TYPE
from freelancer_access.models.content import Content
from freelancer_access.models.content_terms import content_terms
from freelancer_access.models.term import TaxonomyObjectType, Term


class ContentIndex(Protocol):
    async def content_ids_with_terms(
        self, content_type: str, taxonomy: str, term_ids: Iterable[int]
    ) -> set[int]: ...

    async def taxonomy_applies_to(self, taxonomy: str, content_type: str) -> bool: ...

    async def attachment_ids_by_author(self, user_id: int) -> set[int]: ...

    async def attachment_ids_by_parent(self, parent_ids: Iterable[int]) -> set[int]: ...

    async def featured_image_ids(self, content_ids: Iterable[int]) -> set[int]: ...

    async def content_bodies(self, content_ids: Iterable[int]) -> dict[int, str]: ...


class DatabaseContentIndex:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def content_ids_with_terms(
        self, content_type: str, taxonomy: str, term_ids: Iterable[int]
    ) -> set[int]:
        term_ids = list(term_ids)
        if not term_ids:
            return set()
        result = await self.db.execute(
            select(Content.id)
            .join(content_terms, content_terms.c.content_id == Content.id)
            .join(Term, Term.id == content_terms.c.term_id)
            .where(
                Content.content_type == content_type,
                Term.taxonomy == taxonomy,
                Term.id.in_(term_ids),
            )
            .distinct()
        )
        return set(result.scalars().all())

    async def taxonomy_applies_to(self, taxonomy: str, content_type: str) -> bool:
        result = await self.db.execute(
            select(TaxonomyObjectType).where(
                TaxonomyObjectType.taxonomy == taxonomy,
                TaxonomyObjectType.content_type == content_type,
            )
        )
        return result.scalar_one_or_none() is not None

    async def attachment_ids_by_author(self, user_id: int) -> set[int]:
        result = await self.db.execute(
            select(Content.id).where(
                Content.content_type == ATTACHMENT_TYPE,
                Content.author_id == user_id,
            )
        )
        return set(result.scalars().all())

    async def attachment_ids_by_parent(self, parent_ids: Iterable[int]) -> set[int]:
        parent_ids = list(parent_ids)
        if not parent_ids:
            return set()
        result = await self.db.execute(
            select(Content.id).where(
                Content.content_type == ATTACHMENT_TYPE,
                Content.parent_id.in_(parent_ids),
            )
        )
        return set(result.scalars().all())

    async def featured_image_ids(self, content_ids: Iterable[int]) -> set[int]:
        content_ids = list(content_ids)
        if not content_ids:
            return set()
        result = await self.db.execute(
            select(Content.featured_image_id).where(
                Content.id.in_(content_ids),
                Content.featured_image_id.is_not(None),
            )
        )
        return set(result.scalars().all())

    async def content_bodies(self, content_ids: Iterable[int]) -> dict[int, str]:
        content_ids = list(content_ids)
        if not content_ids:
            return {}
        result = await self.db.execute(select(Content.id, Content.body).where(Content.id.in_(content_ids)))
        return {row.id: row.body or "" for row in result.all()}

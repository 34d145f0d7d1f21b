"""
Listing filter.

Content listings are described by a ``ListingQuery`` and passed through a
``QueryPipeline`` of interceptors before being turned into SQL. Each
interceptor asks the decision engine for the allowed IDs and narrows the
query's inclusion filter.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from sqlalchemy import Select, select

from freelancer_access.constants import ATTACHMENT_TYPE, EMPTY_FILTER_ID
from freelancer_access.models.content import Content, ContentStatus
from freelancer_access.schemas.access import AccessSubject
from freelancer_access.services.access_engine import UNRESTRICTED, AccessDecisionEngine, AllowedIds
from freelancer_access.services.media_resolver import MediaResolver

logger = logging.getLogger(__name__)


@dataclass
class ListingQuery:
    content_type: str = "post"
    # None means no inclusion filter; {0} matches nothing
    include_ids: set[int] | None = None
    author_id: int | None = None
    status: ContentStatus | None = None
    offset: int = 0
    limit: int | None = None


Interceptor = Callable[[ListingQuery, AccessSubject], Awaitable[ListingQuery]]


def apply_allowed_ids(query: ListingQuery, allowed: AllowedIds) -> ListingQuery:
    """Intersect the query's inclusion filter with *allowed*."""
    if allowed is UNRESTRICTED:
        return query

    include = set(allowed)
    if query.include_ids is not None:
        include &= query.include_ids

    # An empty filter would mean "everything"; pin it to an ID that never exists
    query.include_ids = include or {EMPTY_FILTER_ID}
    return query


class QueryPipeline:
    """Ordered interceptors applied to every listing query."""

    def __init__(self, interceptors: list[Interceptor] | None = None) -> None:
        self._interceptors: list[Interceptor] = list(interceptors or [])

    def register(self, interceptor: Interceptor) -> None:
        self._interceptors.append(interceptor)

    async def run(self, query: ListingQuery, subject: AccessSubject) -> ListingQuery:
        for interceptor in self._interceptors:
            query = await interceptor(query, subject)
        return query


def content_listing_interceptor(engine: AccessDecisionEngine) -> Interceptor:
    async def intercept(query: ListingQuery, subject: AccessSubject) -> ListingQuery:
        if query.content_type == ATTACHMENT_TYPE:
            return query
        allowed = await engine.allowed_ids(subject, query.content_type)
        return apply_allowed_ids(query, allowed)

    return intercept


def media_listing_interceptor(resolver: MediaResolver) -> Interceptor:
    async def intercept(query: ListingQuery, subject: AccessSubject) -> ListingQuery:
        if query.content_type != ATTACHMENT_TYPE:
            return query
        allowed = await resolver.allowed_media_ids(subject)
        return apply_allowed_ids(query, allowed)

    return intercept


def build_pipeline(engine: AccessDecisionEngine, resolver: MediaResolver) -> QueryPipeline:
    return QueryPipeline([content_listing_interceptor(engine), media_listing_interceptor(resolver)])


def to_select(query: ListingQuery) -> Select:
    """Translate a listing query into a SELECT over ``Content``."""
    stmt = select(Content).where(Content.content_type == query.content_type)
    if query.include_ids is not None:
        stmt = stmt.where(Content.id.in_(sorted(query.include_ids)))
    if query.author_id is not None:
        stmt = stmt.where(Content.author_id == query.author_id)
    if query.status is not None:
        stmt = stmt.where(Content.status == query.status)
    stmt = stmt.order_by(Content.id).offset(query.offset)
    if query.limit is not None:
        stmt = stmt.limit(query.limit)
    return stmt

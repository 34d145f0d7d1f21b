"""
Content routes.

Listings pass through the query pipeline so restricted users only see
what they were granted. Opening a single item runs the item-level check;
a refusal is written to the access log and answered with 403.
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.auth import get_current_subject
from freelancer_access.constants import ATTACHMENT_TYPE
from freelancer_access.database import get_db
from freelancer_access.dependencies import get_engine, get_pipeline
from freelancer_access.exceptions import AccessDeniedError, ContentNotFoundError
from freelancer_access.models.content import Content, ContentStatus
from freelancer_access.schemas.access import AccessSubject, ContentResponse
from freelancer_access.services import access_log_service
from freelancer_access.services.access_engine import AccessDecisionEngine
from freelancer_access.services.listing_filter import ListingQuery, QueryPipeline, to_select

router = APIRouter(tags=["Content"])


async def _run_listing(db: AsyncSession, pipeline: QueryPipeline, query: ListingQuery, subject: AccessSubject):
    query = await pipeline.run(query, subject)
    result = await db.execute(to_select(query))
    return list(result.scalars().all())


@router.get("/content", response_model=list[ContentResponse])
async def list_content(
    content_type: str = Query("post"),
    status: ContentStatus | None = Query(None),
    author_id: int | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    pipeline: QueryPipeline = Depends(get_pipeline),
    subject: AccessSubject = Depends(get_current_subject),
):
    query = ListingQuery(
        content_type=content_type,
        status=status,
        author_id=author_id,
        offset=skip,
        limit=limit,
    )
    return await _run_listing(db, pipeline, query, subject)


@router.get("/media", response_model=list[ContentResponse])
async def list_media(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    pipeline: QueryPipeline = Depends(get_pipeline),
    subject: AccessSubject = Depends(get_current_subject),
):
    query = ListingQuery(content_type=ATTACHMENT_TYPE, offset=skip, limit=limit)
    return await _run_listing(db, pipeline, query, subject)


@router.get("/content/{content_id}", response_model=ContentResponse)
async def open_content(
    content_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
    engine: AccessDecisionEngine = Depends(get_engine),
    subject: AccessSubject = Depends(get_current_subject),
):
    content = await db.get(Content, content_id)
    if content is None:
        raise ContentNotFoundError(content_id)

    if not await engine.can_access(subject, content.content_type, content_id):
        ip = request.client.host if request.client else None
        await access_log_service.record_denied_access(db, subject, content_id, content, ip=ip)
        raise AccessDeniedError(content_id, content.content_type)

    return content

"""Request-scoped wiring of the stores and the decision engine."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.config import settings
from freelancer_access.database import get_db
from freelancer_access.services.access_engine import AccessDecisionEngine
from freelancer_access.services.content_index import DatabaseContentIndex
from freelancer_access.services.grant_store import DatabaseGrantStore
from freelancer_access.services.listing_filter import QueryPipeline, build_pipeline
from freelancer_access.services.media_resolver import MediaResolver
from freelancer_access.services.schedule_service import DatabaseScheduleStore
from freelancer_access.services.settings_service import DatabaseSettingsStore
from freelancer_access.services.taxonomy_expander import TaxonomyExpander


def build_engine(db: AsyncSession) -> tuple[AccessDecisionEngine, MediaResolver]:
    grant_store = DatabaseGrantStore(db)
    content_index = DatabaseContentIndex(db)
    engine = AccessDecisionEngine(
        settings_store=DatabaseSettingsStore(db),
        grant_store=grant_store,
        schedule_store=DatabaseScheduleStore(db),
        taxonomy_expander=TaxonomyExpander(grant_store, content_index),
        admin_roles=settings.admin_roles,
    )
    resolver = MediaResolver(engine, content_index)
    return engine, resolver


async def get_engine(db: AsyncSession = Depends(get_db)) -> AccessDecisionEngine:
    engine, _resolver = build_engine(db)
    return engine


async def get_pipeline(db: AsyncSession = Depends(get_db)) -> QueryPipeline:
    engine, resolver = build_engine(db)
    return build_pipeline(engine, resolver)


async def get_grant_store(db: AsyncSession = Depends(get_db)) -> DatabaseGrantStore:
    return DatabaseGrantStore(db)


async def get_schedule_store(db: AsyncSession = Depends(get_db)) -> DatabaseScheduleStore:
    return DatabaseScheduleStore(db)


async def get_settings_store(db: AsyncSession = Depends(get_db)) -> DatabaseSettingsStore:
    return DatabaseSettingsStore(db)

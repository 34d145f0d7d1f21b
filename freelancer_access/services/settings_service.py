"""Persistence of the restriction settings (single row)."""

import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.models.restriction_settings import SETTINGS_ROW_ID, RestrictionSettings
from freelancer_access.schemas.settings import EnabledSettings, SettingsUpdate

logger = logging.getLogger(__name__)


class SettingsStore(Protocol):
    async def get_settings(self) -> EnabledSettings: ...


class DatabaseSettingsStore:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_settings(self) -> EnabledSettings:
        row = await self.db.get(RestrictionSettings, SETTINGS_ROW_ID)
        if row is None or not row.data:
            return EnabledSettings()
        return EnabledSettings.model_validate(row.data)

    async def save_settings(self, update: SettingsUpdate) -> EnabledSettings:
        """Persist *update*; missing lists fall back to their defaults."""
        data = update.model_dump(exclude_none=True)
        settings = EnabledSettings.model_validate(data)

        row = await self.db.get(RestrictionSettings, SETTINGS_ROW_ID)
        if row is None:
            row = RestrictionSettings(id=SETTINGS_ROW_ID)
            self.db.add(row)
        row.data = settings.model_dump()
        await self.db.commit()
        logger.info(
            "Settings saved: roles=%s types=%s taxonomies=%s media=%s",
            settings.restricted_roles,
            settings.all_enabled_content_types(),
            settings.enabled_taxonomies,
            settings.media_restriction,
        )
        return settings

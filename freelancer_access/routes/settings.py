from fastapi import APIRouter, Depends

from freelancer_access.auth import require_admin
from freelancer_access.dependencies import get_settings_store
from freelancer_access.schemas.settings import EnabledSettings, SettingsUpdate
from freelancer_access.services.settings_service import DatabaseSettingsStore

router = APIRouter(prefix="/settings", tags=["Settings"], dependencies=[Depends(require_admin)])


@router.get("", response_model=EnabledSettings)
async def get_settings(store: DatabaseSettingsStore = Depends(get_settings_store)):
    return await store.get_settings()


@router.put("", response_model=EnabledSettings)
async def save_settings(data: SettingsUpdate, store: DatabaseSettingsStore = Depends(get_settings_store)):
    return await store.save_settings(data)

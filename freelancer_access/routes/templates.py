"""Access template routes (admin only)."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.auth import require_admin
from freelancer_access.database import get_db
from freelancer_access.dependencies import get_grant_store, get_settings_store
from freelancer_access.exceptions import UserNotFoundError
from freelancer_access.models.access_template import AccessTemplate
from freelancer_access.models.user import User
from freelancer_access.schemas.access import (
    GrantResponse,
    TemplateApply,
    TemplateCreate,
    TemplateFromUser,
    TemplateResponse,
    TemplateUpdate,
)
from freelancer_access.services import template_service
from freelancer_access.services.grant_store import DatabaseGrantStore
from freelancer_access.services.settings_service import DatabaseSettingsStore

router = APIRouter(prefix="/templates", tags=["Access Templates"], dependencies=[Depends(require_admin)])


def _to_response(template: AccessTemplate) -> TemplateResponse:
    return TemplateResponse(
        id=template.id,
        name=template.name,
        description=template.description or "",
        content=template.content or {},
        created_at=template.created_at,
        modified_at=template.modified_at,
        summary=template_service.template_summary(template),
    )


@router.get("", response_model=list[TemplateResponse])
async def list_templates(db: AsyncSession = Depends(get_db)):
    return [_to_response(t) for t in await template_service.get_templates(db)]


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(data: TemplateCreate, db: AsyncSession = Depends(get_db)):
    template = await template_service.create_template(db, data.name, data.description, data.content)
    return _to_response(template)


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(template_id: str, db: AsyncSession = Depends(get_db)):
    return _to_response(await template_service.require_template(db, template_id))


@router.put("/{template_id}", response_model=TemplateResponse)
async def update_template(template_id: str, data: TemplateUpdate, db: AsyncSession = Depends(get_db)):
    template = await template_service.update_template(
        db, template_id, name=data.name, description=data.description, content=data.content
    )
    return _to_response(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(template_id: str, db: AsyncSession = Depends(get_db)) -> None:
    await template_service.delete_template(db, template_id)


@router.post("/{template_id}/apply", response_model=list[GrantResponse])
async def apply_template(
    template_id: str,
    data: TemplateApply,
    db: AsyncSession = Depends(get_db),
    grants: DatabaseGrantStore = Depends(get_grant_store),
):
    if await db.get(User, data.user_id) is None:
        raise UserNotFoundError(data.user_id)
    written = await template_service.apply_template(db, grants, template_id, data.user_id, merge=data.merge)
    return [
        GrantResponse(user_id=data.user_id, content_key=key, ids=sorted(ids))
        for key, ids in sorted(written.items())
    ]


@router.post("/from-user/{user_id}", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template_from_user(
    user_id: int,
    data: TemplateFromUser,
    db: AsyncSession = Depends(get_db),
    grants: DatabaseGrantStore = Depends(get_grant_store),
    settings_store: DatabaseSettingsStore = Depends(get_settings_store),
):
    if await db.get(User, user_id) is None:
        raise UserNotFoundError(user_id)
    settings = await settings_store.get_settings()
    template = await template_service.create_from_user(
        db, grants, settings, user_id, data.name, data.description
    )
    return _to_response(template)

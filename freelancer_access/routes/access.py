"""
Per-user access management (admin only).

Route table (under /api/v1/access):
  GET    /users/{user_id}/grants                 - all grants
  GET    /users/{user_id}/grants/{key}           - one grant
  PUT    /users/{user_id}/grants/{key}           - replace
  POST   /users/{user_id}/grants/{key}           - add IDs
  DELETE /users/{user_id}/grants/{key}           - revoke IDs (all when none given)
  GET    /users/{user_id}/schedule               - schedule + status
  PUT    /users/{user_id}/schedule               - set schedule
  DELETE /users/{user_id}/schedule               - clear schedule
  GET    /users/{user_id}/allowed/{content_type} - computed allowed set
  POST   /users/{user_id}/copy                   - copy access to another user
  DELETE /users/{user_id}                        - clear every grant
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.auth import require_admin
from freelancer_access.database import get_db
from freelancer_access.dependencies import get_engine, get_grant_store, get_schedule_store
from freelancer_access.exceptions import UserNotFoundError, ValidationError
from freelancer_access.models.user import User
from freelancer_access.schemas.access import (
    AccessSubject,
    CopyAccessRequest,
    GrantResponse,
    GrantUpdate,
    ScheduleData,
    ScheduleResponse,
)
from freelancer_access.schemas.settings import sanitize_key
from freelancer_access.services.access_engine import UNRESTRICTED, AccessDecisionEngine
from freelancer_access.services.grant_store import DatabaseGrantStore
from freelancer_access.services.schedule_service import DatabaseScheduleStore, schedule_status

router = APIRouter(tags=["Access"], dependencies=[Depends(require_admin)])


async def _get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def grant_key(content_key: str) -> str:
    """Path key normalised the same way as template and settings keys."""
    key = sanitize_key(content_key)
    if not key:
        raise ValidationError("Invalid content key", field="content_key")
    return key


def _grant_response(user_id: int, content_key: str, ids) -> GrantResponse:
    return GrantResponse(user_id=user_id, content_key=content_key, ids=sorted(ids))


# ── Grants ────────────────────────────────────────────────────────────────────


@router.get("/users/{user_id}/grants", response_model=list[GrantResponse])
async def list_grants(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    grants: DatabaseGrantStore = Depends(get_grant_store),
):
    await _get_user(db, user_id)
    all_grants = await grants.get_all_grants(user_id)
    return [_grant_response(user_id, key, ids) for key, ids in sorted(all_grants.items())]


@router.get("/users/{user_id}/grants/{content_key}", response_model=GrantResponse)
async def get_grant(
    user_id: int,
    content_key: str = Depends(grant_key),
    db: AsyncSession = Depends(get_db),
    grants: DatabaseGrantStore = Depends(get_grant_store),
):
    await _get_user(db, user_id)
    return _grant_response(user_id, content_key, await grants.get_grant(user_id, content_key))


@router.put("/users/{user_id}/grants/{content_key}", response_model=GrantResponse)
async def replace_grant(
    user_id: int,
    data: GrantUpdate,
    content_key: str = Depends(grant_key),
    db: AsyncSession = Depends(get_db),
    grants: DatabaseGrantStore = Depends(get_grant_store),
):
    await _get_user(db, user_id)
    ids = await grants.set_grant(user_id, content_key, data.ids)
    return _grant_response(user_id, content_key, ids)


@router.post("/users/{user_id}/grants/{content_key}", response_model=GrantResponse)
async def add_to_grant(
    user_id: int,
    data: GrantUpdate,
    content_key: str = Depends(grant_key),
    db: AsyncSession = Depends(get_db),
    grants: DatabaseGrantStore = Depends(get_grant_store),
):
    await _get_user(db, user_id)
    ids = await grants.add_to_grant(user_id, content_key, data.ids)
    return _grant_response(user_id, content_key, ids)


@router.delete("/users/{user_id}/grants/{content_key}", response_model=GrantResponse)
async def revoke_grant(
    user_id: int,
    content_key: str = Depends(grant_key),
    ids: list[int] | None = Query(None, description="IDs to revoke; omit to revoke all"),
    db: AsyncSession = Depends(get_db),
    grants: DatabaseGrantStore = Depends(get_grant_store),
):
    await _get_user(db, user_id)
    remaining = await grants.remove_from_grant(user_id, content_key, ids)
    return _grant_response(user_id, content_key, remaining)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_user_access(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    grants: DatabaseGrantStore = Depends(get_grant_store),
) -> None:
    await _get_user(db, user_id)
    await grants.clear_user_access(user_id)


@router.post("/users/{user_id}/copy", status_code=status.HTTP_204_NO_CONTENT)
async def copy_user_access(
    user_id: int,
    data: CopyAccessRequest,
    db: AsyncSession = Depends(get_db),
    grants: DatabaseGrantStore = Depends(get_grant_store),
) -> None:
    await _get_user(db, user_id)
    await _get_user(db, data.target_user_id)
    await grants.copy_user_access(user_id, data.target_user_id, include_schedule=data.include_schedule)


# ── Schedule ──────────────────────────────────────────────────────────────────


@router.get("/users/{user_id}/schedule", response_model=ScheduleResponse | None)
async def get_schedule(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    schedules: DatabaseScheduleStore = Depends(get_schedule_store),
):
    await _get_user(db, user_id)
    schedule = await schedules.get_schedule(user_id)
    if schedule is None:
        return None
    return ScheduleResponse(
        user_id=user_id,
        start_date=schedule.start_date,
        end_date=schedule.end_date,
        status=schedule_status(schedule, date.today()).value,
    )


@router.put("/users/{user_id}/schedule", response_model=ScheduleResponse | None)
async def set_schedule(
    user_id: int,
    data: ScheduleData,
    db: AsyncSession = Depends(get_db),
    schedules: DatabaseScheduleStore = Depends(get_schedule_store),
):
    await _get_user(db, user_id)
    schedule = await schedules.set_schedule(user_id, data.start_date, data.end_date)
    if schedule is None:
        return None
    return ScheduleResponse(
        user_id=user_id,
        start_date=schedule.start_date,
        end_date=schedule.end_date,
        status=schedule_status(schedule, date.today()).value,
    )


@router.delete("/users/{user_id}/schedule", status_code=status.HTTP_204_NO_CONTENT)
async def clear_schedule(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    schedules: DatabaseScheduleStore = Depends(get_schedule_store),
) -> None:
    await _get_user(db, user_id)
    await schedules.clear_schedule(user_id)


# ── Introspection ─────────────────────────────────────────────────────────────


@router.get("/users/{user_id}/allowed/{content_type}")
async def get_allowed_ids(
    user_id: int,
    content_type: str,
    db: AsyncSession = Depends(get_db),
    engine: AccessDecisionEngine = Depends(get_engine),
) -> dict:
    """The allowed set the engine computes for *user_id* right now."""
    user = await _get_user(db, user_id)
    allowed = await engine.allowed_ids(AccessSubject.from_user(user), content_type)
    if allowed is UNRESTRICTED:
        return {"user_id": user_id, "content_type": content_type, "unrestricted": True, "ids": []}
    return {"user_id": user_id, "content_type": content_type, "unrestricted": False, "ids": sorted(allowed)}

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.auth import require_admin
from freelancer_access.database import get_db
from freelancer_access.schemas.access import AccessLogResponse
from freelancer_access.services import access_log_service

router = APIRouter(prefix="/access-logs", tags=["Access Log"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[AccessLogResponse])
async def list_access_logs(
    limit: int | None = Query(None, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
):
    return await access_log_service.list_entries(db, limit)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_access_logs(db: AsyncSession = Depends(get_db)) -> None:
    await access_log_service.clear(db)

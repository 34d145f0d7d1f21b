"""
Tests for access schedules

Status evaluation is pure; the store tests use the SQLite test database.
"""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from freelancer_access.exceptions import ValidationError
from freelancer_access.models.access_schedule import AccessSchedule
from freelancer_access.schemas.access import ScheduleData
from freelancer_access.services.schedule_service import (
    DatabaseScheduleStore,
    ScheduleStatus,
    is_active,
    schedule_status,
)

TODAY = date(2026, 10, 18)


class TestScheduleStatus:
    def test_no_schedule_is_active(self):
        assert is_active(None, TODAY)
        assert is_active(None, date(1970, 1, 1))

    @pytest.mark.parametrize(
        "start, end",
        [
            (None, None),
            (TODAY, None),
            (None, TODAY),
            (TODAY - timedelta(days=1), TODAY + timedelta(days=1)),
            (TODAY, TODAY),
        ],
    )
    def test_inside_window_is_active(self, start, end):
        assert schedule_status(ScheduleData(start_date=start, end_date=end), TODAY) is ScheduleStatus.ACTIVE

    def test_before_start_is_not_yet_started(self):
        schedule = ScheduleData(start_date=TODAY + timedelta(days=1))

        assert schedule_status(schedule, TODAY) is ScheduleStatus.NOT_YET_STARTED
        assert not is_active(schedule, TODAY)

    def test_after_end_is_expired(self):
        schedule = ScheduleData(end_date=TODAY - timedelta(days=1))

        assert schedule_status(schedule, TODAY) is ScheduleStatus.EXPIRED
        assert not is_active(schedule, TODAY)

    def test_status_values(self):
        assert ScheduleStatus.ACTIVE.value == "active"
        assert ScheduleStatus.EXPIRED.value == "expired"
        assert ScheduleStatus.NOT_YET_STARTED.value == "not_yet_started"

    def test_schema_rejects_inverted_window(self):
        with pytest.raises(PydanticValidationError):
            ScheduleData(start_date=TODAY, end_date=TODAY - timedelta(days=1))


class TestDatabaseScheduleStore:
    async def test_missing_schedule_is_none(self, test_db, editor_user):
        store = DatabaseScheduleStore(test_db)

        assert await store.get_schedule(editor_user.id) is None

    async def test_set_and_get(self, test_db, editor_user):
        store = DatabaseScheduleStore(test_db)
        await store.set_schedule(editor_user.id, TODAY, TODAY + timedelta(days=7))

        schedule = await store.get_schedule(editor_user.id)
        assert schedule == ScheduleData(start_date=TODAY, end_date=TODAY + timedelta(days=7))

    async def test_set_overwrites(self, test_db, editor_user):
        store = DatabaseScheduleStore(test_db)
        await store.set_schedule(editor_user.id, TODAY, None)
        await store.set_schedule(editor_user.id, None, TODAY)

        schedule = await store.get_schedule(editor_user.id)
        assert schedule.start_date is None
        assert schedule.end_date == TODAY

    async def test_both_bounds_empty_clears_record(self, test_db, editor_user):
        store = DatabaseScheduleStore(test_db)
        await store.set_schedule(editor_user.id, TODAY, None)

        assert await store.set_schedule(editor_user.id, None, None) is None
        assert await test_db.get(AccessSchedule, editor_user.id) is None

    async def test_null_row_reads_as_no_schedule(self, test_db, editor_user):
        test_db.add(AccessSchedule(user_id=editor_user.id, start_date=None, end_date=None))
        await test_db.commit()

        assert await DatabaseScheduleStore(test_db).get_schedule(editor_user.id) is None

    async def test_inverted_window_rejected(self, test_db, editor_user):
        store = DatabaseScheduleStore(test_db)

        with pytest.raises(ValidationError) as exc_info:
            await store.set_schedule(editor_user.id, TODAY, TODAY - timedelta(days=1))
        assert exc_info.value.status_code == 400

    async def test_clear(self, test_db, editor_user):
        store = DatabaseScheduleStore(test_db)
        await store.set_schedule(editor_user.id, TODAY, None)
        await store.clear_schedule(editor_user.id)

        assert await store.get_schedule(editor_user.id) is None

    async def test_clear_missing_is_noop(self, test_db, editor_user):
        await DatabaseScheduleStore(test_db).clear_schedule(editor_user.id)

"""
Access decision engine.

Answers two questions for a user:

* ``allowed_ids(subject, content_type)`` - the complete set of IDs the user
  may see for a content type, or ``UNRESTRICTED`` when no filter applies.
* ``can_access(subject, content_type, content_id)`` - the same decision for
  a single item.

Gating order, evaluated on every call with a fresh settings snapshot:

1. Exempt (administrator) roles are unrestricted.
2. Users with no restricted role are unrestricted.
3. An inactive schedule denies everything, whatever the content type.
4. Content types not enabled for restriction are unrestricted.
5. Otherwise the per-type handler computes the allowed set.

Per-type computation is a lookup table of handlers keyed by content type,
falling back to the generic handler (direct grant plus taxonomy expansion).
"""

import enum
import logging
from collections.abc import Callable, Iterable
from datetime import date
from typing import Protocol

from freelancer_access.constants import ATTACHMENT_TYPE
from freelancer_access.schemas.access import AccessSubject
from freelancer_access.schemas.settings import EnabledSettings
from freelancer_access.services import schedule_service
from freelancer_access.services.grant_store import GrantStore
from freelancer_access.services.schedule_service import ScheduleStore
from freelancer_access.services.settings_service import SettingsStore
from freelancer_access.services.taxonomy_expander import TaxonomyExpander

logger = logging.getLogger(__name__)


class Unrestricted(enum.Enum):
    UNRESTRICTED = "unrestricted"


# "Apply no filter"; distinct from an empty set, which means "match nothing"
UNRESTRICTED = Unrestricted.UNRESTRICTED

AllowedIds = Unrestricted | frozenset[int]

DEFAULT_ADMIN_ROLES = ("administrator",)


class ContentTypeHandler(Protocol):
    def is_enabled(self, content_type: str, settings: EnabledSettings) -> bool: ...

    async def collect(self, subject: AccessSubject, content_type: str, settings: EnabledSettings) -> frozenset[int]: ...


class GenericHandler:
    """Direct grant for the type, plus items tagged with granted terms."""

    def __init__(self, grant_store: GrantStore, taxonomy_expander: TaxonomyExpander) -> None:
        self.grant_store = grant_store
        self.taxonomy_expander = taxonomy_expander

    def is_enabled(self, content_type: str, settings: EnabledSettings) -> bool:
        return settings.is_content_type_enabled(content_type)

    async def collect(self, subject: AccessSubject, content_type: str, settings: EnabledSettings) -> frozenset[int]:
        direct = await self.grant_store.get_grant(subject.id, content_type)
        expanded = await self.taxonomy_expander.expand(subject.id, content_type, settings)
        return direct | expanded


class AccessDecisionEngine:
    def __init__(
        self,
        settings_store: SettingsStore,
        grant_store: GrantStore,
        schedule_store: ScheduleStore,
        taxonomy_expander: TaxonomyExpander,
        admin_roles: Iterable[str] = DEFAULT_ADMIN_ROLES,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.settings_store = settings_store
        self.grant_store = grant_store
        self.schedule_store = schedule_store
        self.admin_roles = frozenset(admin_roles)
        self.clock = clock
        self.default_handler: ContentTypeHandler = GenericHandler(grant_store, taxonomy_expander)
        self._handlers: dict[str, ContentTypeHandler] = {}

    # ── Handler table ─────────────────────────────────────────────────────────

    def register_handler(self, content_type: str, handler: ContentTypeHandler) -> None:
        self._handlers[content_type] = handler

    def handler_for(self, content_type: str) -> ContentTypeHandler:
        return self._handlers.get(content_type, self.default_handler)

    # ── Gating ───────────────────────────────────────────────────────────────

    def is_exempt(self, subject: AccessSubject) -> bool:
        return any(role in self.admin_roles for role in subject.roles)

    def is_restricted(self, subject: AccessSubject, settings: EnabledSettings) -> bool:
        """True when the engine applies to *subject* at all."""
        if self.is_exempt(subject):
            return False
        return any(settings.is_role_restricted(role) for role in subject.roles)

    async def is_schedule_active(self, user_id: int) -> bool:
        schedule = await self.schedule_store.get_schedule(user_id)
        return schedule_service.is_active(schedule, self.clock())

    async def gate(self, subject: AccessSubject, settings: EnabledSettings) -> AllowedIds | None:
        """
        Steps 1-3 of the decision.

        Returns UNRESTRICTED or an empty set when the outcome is already
        decided, or None when the per-type computation must run.
        """
        if not self.is_restricted(subject, settings):
            return UNRESTRICTED
        if not await self.is_schedule_active(subject.id):
            logger.debug("Schedule inactive for user %s; denying all", subject.id)
            return frozenset()
        return None

    # ── Decisions ────────────────────────────────────────────────────────────

    async def allowed_ids(self, subject: AccessSubject, content_type: str) -> AllowedIds:
        settings = await self.settings_store.get_settings()
        decided = await self.gate(subject, settings)
        if decided is not None:
            return decided

        handler = self.handler_for(content_type)
        if not handler.is_enabled(content_type, settings):
            return UNRESTRICTED
        return await handler.collect(subject, content_type, settings)

    async def can_access(self, subject: AccessSubject, content_type: str, content_id: int) -> bool:
        allowed = await self.allowed_ids(subject, content_type)
        if allowed is UNRESTRICTED:
            return True
        return content_id in allowed

    async def allowed_ids_by_type(self, subject: AccessSubject, settings: EnabledSettings) -> dict[str, frozenset[int]]:
        """Allowed set for every enabled content type, without gating."""
        result = {}
        for content_type in settings.all_enabled_content_types():
            if content_type == ATTACHMENT_TYPE:
                continue
            handler = self.handler_for(content_type)
            result[content_type] = await handler.collect(subject, content_type, settings)
        return result

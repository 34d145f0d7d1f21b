"""Access templates: named bundles of grants applied to users in one step."""

import logging
import uuid
from collections.abc import Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.constants import BUILTIN_CONTENT_TYPES, MEDIA_KEY, TEMPLATE_ID_PREFIX, taxonomy_key
from freelancer_access.exceptions import TemplateNotFoundError
from freelancer_access.models.access_template import AccessTemplate
from freelancer_access.schemas.settings import EnabledSettings, sanitize_key
from freelancer_access.services.grant_store import GrantStore, sanitize_ids

logger = logging.getLogger(__name__)


def generate_template_id() -> str:
    return f"{TEMPLATE_ID_PREFIX}{uuid.uuid4()}"


def sanitize_template_content(content: Mapping | None) -> dict[str, list[int]]:
    """Sanitize keys and IDs; keys left with no valid IDs are dropped."""
    if not isinstance(content, Mapping):
        return {}
    sanitized = {}
    for key, ids in content.items():
        key = sanitize_key(key)
        clean = sanitize_ids(ids)
        if key and clean:
            sanitized[key] = sorted(clean)
    return sanitized


def template_summary(template: AccessTemplate) -> dict[str, int]:
    return {key: len(ids) for key, ids in (template.content or {}).items()}


# ── Applicator ───────────────────────────────────────────────────────────────


async def apply_content(
    grant_store: GrantStore,
    content: Mapping[str, list[int]],
    user_id: int,
    merge: bool = False,
) -> dict[str, frozenset[int]]:
    """
    Write each content key of *content* as the user's grant.

    In merge mode the template's IDs are added to the existing grant,
    otherwise they replace it. Each key is written on its own; keys not in
    the template are left untouched.
    """
    written = {}
    for content_key, ids in content.items():
        new_ids = sanitize_ids(ids)
        if merge:
            new_ids = await grant_store.get_grant(user_id, content_key) | new_ids
        written[content_key] = await grant_store.set_grant(user_id, content_key, new_ids)
    return written


async def snapshot_user_grants(
    grant_store: GrantStore, user_id: int, settings: EnabledSettings
) -> dict[str, list[int]]:
    """The user's current grants for every enabled type, taxonomy and media."""
    keys = list(BUILTIN_CONTENT_TYPES)
    keys.extend(t for t in settings.all_enabled_content_types() if t not in keys)
    keys.extend(taxonomy_key(taxonomy) for taxonomy in settings.enabled_taxonomies)
    keys.append(MEDIA_KEY)

    content = {}
    for key in keys:
        ids = await grant_store.get_grant(user_id, key)
        if ids:
            content[key] = sorted(ids)
    return content


# ── CRUD ─────────────────────────────────────────────────────────────────────


async def create_template(
    db: AsyncSession,
    name: str,
    description: str = "",
    content: Mapping | None = None,
) -> AccessTemplate:
    template = AccessTemplate(
        id=generate_template_id(),
        name=name.strip(),
        description=description.strip(),
        content=sanitize_template_content(content),
    )
    db.add(template)
    await db.commit()
    await db.refresh(template)
    logger.info("Template created: id=%s name=%r", template.id, template.name)
    return template


async def get_template(db: AsyncSession, template_id: str) -> AccessTemplate | None:
    return await db.get(AccessTemplate, template_id)


async def get_templates(db: AsyncSession) -> list[AccessTemplate]:
    result = await db.execute(select(AccessTemplate).order_by(AccessTemplate.name))
    return list(result.scalars().all())


async def require_template(db: AsyncSession, template_id: str) -> AccessTemplate:
    template = await get_template(db, template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    return template


async def update_template(
    db: AsyncSession,
    template_id: str,
    name: str | None = None,
    description: str | None = None,
    content: Mapping | None = None,
) -> AccessTemplate:
    template = await require_template(db, template_id)
    if name is not None:
        template.name = name.strip()
    if description is not None:
        template.description = description.strip()
    if content is not None:
        template.content = sanitize_template_content(content)
    await db.commit()
    await db.refresh(template)
    return template


async def delete_template(db: AsyncSession, template_id: str) -> bool:
    template = await require_template(db, template_id)
    await db.delete(template)
    await db.commit()
    logger.info("Template deleted: id=%s", template_id)
    return True


async def apply_template(
    db: AsyncSession,
    grant_store: GrantStore,
    template_id: str,
    user_id: int,
    merge: bool = False,
) -> dict[str, frozenset[int]]:
    template = await require_template(db, template_id)
    written = await apply_content(grant_store, template.content or {}, user_id, merge=merge)
    logger.info(
        "Template applied: id=%s user=%s mode=%s keys=%s",
        template_id,
        user_id,
        "merge" if merge else "replace",
        sorted(written),
    )
    return written


async def create_from_user(
    db: AsyncSession,
    grant_store: GrantStore,
    settings: EnabledSettings,
    user_id: int,
    name: str,
    description: str = "",
) -> AccessTemplate:
    content = await snapshot_user_grants(grant_store, user_id, settings)
    return await create_template(db, name, description, content)

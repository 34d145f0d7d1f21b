"""
Media (attachment) access.

A restricted user may see:

1. attachments they uploaded themselves,
2. attachments belonging to content they may access: attached to it,
   set as its featured image, or embedded in its body,
3. attachments explicitly granted under the "media" key.

Body scanning is best effort. A missed embed only hides an image; a
false match would leak one, so only well-formed references are accepted.
"""

import logging
import re

from freelancer_access.constants import ATTACHMENT_TYPE, MEDIA_KEY
from freelancer_access.schemas.access import AccessSubject
from freelancer_access.schemas.settings import EnabledSettings
from freelancer_access.services.access_engine import AccessDecisionEngine, AllowedIds
from freelancer_access.services.content_index import ContentIndex
from freelancer_access.services.grant_store import sanitize_ids

logger = logging.getLogger(__name__)

_ID_LIST = r"(\d+(?:\s*,\s*\d+)*)"

# <!-- wp:image {"id":123,...} -->
_IMAGE_BLOCK = re.compile(r'wp:image\s+\{"id":(\d+)', re.IGNORECASE)
# <!-- wp:gallery {"ids":[1,2,3],...} -->
_GALLERY_BLOCK = re.compile(r'wp:gallery\s+\{[^}]*?"ids":\[' + _ID_LIST + r"\]", re.IGNORECASE)
# [gallery ids="1,2,3"]
_GALLERY_SHORTCODE = re.compile(r"\[gallery\b[^\]]*?\bids=([\"']?)" + _ID_LIST + r"\1", re.IGNORECASE)
# <img class="alignnone wp-image-123">
_IMAGE_CLASS = re.compile(r'class="[^"]*\bwp-image-(\d+)\b[^"]*"', re.IGNORECASE)


def _split_ids(ids_string: str) -> list[str]:
    return [part.strip() for part in ids_string.split(",")]


def extract_attachment_ids(body: str | None) -> frozenset[int]:
    """Attachment IDs referenced from post body markup."""
    if not body:
        return frozenset()

    found: list[str] = []
    found.extend(_IMAGE_BLOCK.findall(body))
    for ids_string in _GALLERY_BLOCK.findall(body):
        found.extend(_split_ids(ids_string))
    for _quote, ids_string in _GALLERY_SHORTCODE.findall(body):
        found.extend(_split_ids(ids_string))
    found.extend(_IMAGE_CLASS.findall(body))
    return sanitize_ids(found)


class MediaResolver:
    """Content-type handler for attachments; registers itself with the engine."""

    def __init__(self, engine: AccessDecisionEngine, content_index: ContentIndex) -> None:
        self.engine = engine
        self.content_index = content_index
        engine.register_handler(ATTACHMENT_TYPE, self)

    def is_enabled(self, content_type: str, settings: EnabledSettings) -> bool:
        return settings.media_restriction

    async def collect(self, subject: AccessSubject, content_type: str, settings: EnabledSettings) -> frozenset[int]:
        allowed: set[int] = set()

        # 1. Own uploads
        allowed |= await self.content_index.attachment_ids_by_author(subject.id)

        # 2. Media belonging to accessible content
        by_type = await self.engine.allowed_ids_by_type(subject, settings)
        content_ids = set().union(*by_type.values()) if by_type else set()
        if content_ids:
            allowed |= await self.content_index.attachment_ids_by_parent(content_ids)
            allowed |= await self.content_index.featured_image_ids(content_ids)
            bodies = await self.content_index.content_bodies(content_ids)
            for body in bodies.values():
                allowed |= extract_attachment_ids(body)

        # 3. Explicit media grant
        allowed |= await self.engine.grant_store.get_grant(subject.id, MEDIA_KEY)

        logger.debug("Allowed media for user %s: %s items", subject.id, len(allowed))
        return sanitize_ids(allowed)

    async def allowed_media_ids(self, subject: AccessSubject) -> AllowedIds:
        return await self.engine.allowed_ids(subject, ATTACHMENT_TYPE)

"""
Expands taxonomy-term grants into content IDs.

Granting "everything in category X" stays in sync as items are added to or
removed from X, so the expansion is recomputed on every call and never
stored.
"""

import logging

from freelancer_access.constants import taxonomy_key
from freelancer_access.schemas.settings import EnabledSettings
from freelancer_access.services.content_index import ContentIndex
from freelancer_access.services.grant_store import GrantStore

logger = logging.getLogger(__name__)


class TaxonomyExpander:
    def __init__(self, grant_store: GrantStore, content_index: ContentIndex) -> None:
        self.grant_store = grant_store
        self.content_index = content_index

    async def expand(self, user_id: int, content_type: str, settings: EnabledSettings) -> frozenset[int]:
        """IDs of *content_type* items tagged with any term the user is granted."""
        ids: set[int] = set()
        for taxonomy in settings.enabled_taxonomies:
            if not await self.content_index.taxonomy_applies_to(taxonomy, content_type):
                continue

            term_ids = await self.grant_store.get_grant(user_id, taxonomy_key(taxonomy))
            if not term_ids:
                continue

            tagged = await self.content_index.content_ids_with_terms(content_type, taxonomy, term_ids)
            logger.debug(
                "Taxonomy expansion: user=%s type=%s taxonomy=%s terms=%s -> %s items",
                user_id,
                content_type,
                taxonomy,
                sorted(term_ids),
                len(tagged),
            )
            ids.update(tagged)
        return frozenset(ids)

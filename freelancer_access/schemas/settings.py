"""
Restriction Settings Schemas

The process-wide configuration that decides who is restricted and which
content types, taxonomies and media are covered.
"""

import re

from pydantic import BaseModel, ConfigDict, field_validator

from freelancer_access.constants import INTEGRATION_CONTENT_TYPES

_KEY_INVALID_CHARS = re.compile(r"[^a-z0-9_\-]")


def sanitize_key(value: str) -> str:
    """Lowercase a slug and strip everything but ``[a-z0-9_-]``."""
    return _KEY_INVALID_CHARS.sub("", str(value).lower())


def _sanitize_keys(values: list[str]) -> list[str]:
    keys: list[str] = []
    for value in values:
        key = sanitize_key(value)
        if key and key not in keys:
            keys.append(key)
    return keys


class EnabledSettings(BaseModel):
    """Which roles, content types, taxonomies and media are restricted."""

    model_config = ConfigDict(frozen=True)

    restricted_roles: list[str] = ["editor"]
    enabled_post_types: list[str] = ["page", "post"]
    enabled_taxonomies: list[str] = []
    media_restriction: bool = True

    # Integrations
    woocommerce_products: bool = False
    woocommerce_orders: bool = False
    woocommerce_coupons: bool = False
    elementor_templates: bool = False
    elementor_theme_builder: bool = False

    @field_validator("restricted_roles", "enabled_post_types", "enabled_taxonomies", mode="before")
    @classmethod
    def validate_keys(cls, v):
        if v is None:
            return []
        if not isinstance(v, (list, tuple, set)):
            raise ValueError("must be a list of slugs")
        return _sanitize_keys(list(v))

    def all_enabled_content_types(self) -> list[str]:
        """Enabled post types plus the types switched on by integration flags."""
        enabled = list(self.enabled_post_types)
        for flag, content_types in INTEGRATION_CONTENT_TYPES.items():
            if getattr(self, flag):
                enabled.extend(t for t in content_types if t not in enabled)
        return enabled

    def is_content_type_enabled(self, content_type: str) -> bool:
        return content_type in self.all_enabled_content_types()

    def is_role_restricted(self, role: str) -> bool:
        return role in self.restricted_roles


class SettingsUpdate(BaseModel):
    """Partial update; omitted lists fall back to the defaults on save."""

    restricted_roles: list[str] | None = None
    enabled_post_types: list[str] | None = None
    enabled_taxonomies: list[str] | None = None
    media_restriction: bool = False
    woocommerce_products: bool = False
    woocommerce_orders: bool = False
    woocommerce_coupons: bool = False
    elementor_templates: bool = False
    elementor_theme_builder: bool = False

"""
Tests for restriction settings
"""

import pytest
from pydantic import ValidationError

from freelancer_access.schemas.settings import EnabledSettings, SettingsUpdate, sanitize_key
from freelancer_access.services.settings_service import DatabaseSettingsStore


class TestSanitizeKey:
    @pytest.mark.parametrize(
        "value, expected",
        [("Page", "page"), ("my_type", "my_type"), ("elementor-hf", "elementor-hf"), ("bad key!", "badkey"), ("<b>", "b")],
    )
    def test_sanitize(self, value, expected):
        assert sanitize_key(value) == expected


class TestEnabledSettings:
    def test_defaults(self):
        settings = EnabledSettings()

        assert settings.restricted_roles == ["editor"]
        assert settings.enabled_post_types == ["page", "post"]
        assert settings.enabled_taxonomies == []
        assert settings.media_restriction is True

    def test_lists_are_sanitized_and_deduplicated(self):
        settings = EnabledSettings(enabled_post_types=["Page", "page", "", "Post!"])
        assert settings.enabled_post_types == ["page", "post"]

    def test_none_list_is_empty(self):
        assert EnabledSettings(enabled_taxonomies=None).enabled_taxonomies == []

    def test_scalar_list_rejected(self):
        with pytest.raises(ValidationError):
            EnabledSettings(restricted_roles="editor")

    def test_frozen(self):
        with pytest.raises(ValidationError):
            EnabledSettings().media_restriction = False

    def test_integration_types(self):
        settings = EnabledSettings(
            enabled_post_types=["page"],
            woocommerce_products=True,
            woocommerce_orders=True,
            woocommerce_coupons=True,
            elementor_templates=True,
            elementor_theme_builder=True,
        )

        assert settings.all_enabled_content_types() == [
            "page",
            "product",
            "shop_order",
            "shop_coupon",
            "elementor_library",
            "elementor-hf",
            "elementor-thhf",
        ]

    def test_integration_type_not_duplicated(self):
        settings = EnabledSettings(enabled_post_types=["product"], woocommerce_products=True)
        assert settings.all_enabled_content_types() == ["product"]

    def test_role_check(self):
        settings = EnabledSettings(restricted_roles=["editor", "author"])
        assert settings.is_role_restricted("author")
        assert not settings.is_role_restricted("subscriber")


class TestDatabaseSettingsStore:
    async def test_defaults_without_row(self, test_db):
        assert await DatabaseSettingsStore(test_db).get_settings() == EnabledSettings()

    async def test_save_and_reload(self, test_db):
        store = DatabaseSettingsStore(test_db)
        await store.save_settings(
            SettingsUpdate(
                restricted_roles=["author"],
                enabled_post_types=["page"],
                enabled_taxonomies=["category"],
                media_restriction=True,
                woocommerce_products=True,
            )
        )

        settings = await DatabaseSettingsStore(test_db).get_settings()
        assert settings.restricted_roles == ["author"]
        assert settings.enabled_post_types == ["page"]
        assert settings.enabled_taxonomies == ["category"]
        assert settings.woocommerce_products is True

    async def test_omitted_lists_use_defaults(self, test_db):
        settings = await DatabaseSettingsStore(test_db).save_settings(SettingsUpdate())

        assert settings.restricted_roles == ["editor"]
        assert settings.enabled_post_types == ["page", "post"]
        assert settings.media_restriction is False

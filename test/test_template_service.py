"""
Tests for access templates

The applicator is exercised against the in-memory grant store; CRUD and
snapshots run on the SQLite test database.
"""

import pytest

from freelancer_access.exceptions import TemplateNotFoundError
from freelancer_access.schemas.settings import EnabledSettings
from freelancer_access.services import template_service
from freelancer_access.services.grant_store import DatabaseGrantStore
from utils.fakes import InMemoryGrantStore


class TestHelpers:
    def test_template_id_format(self):
        template_id = template_service.generate_template_id()

        assert template_id.startswith("tpl_")
        assert len(template_id) == 40
        assert template_id != template_service.generate_template_id()

    def test_sanitize_content(self):
        content = {"Page": [1, "2", 0, "x"], "post": [], "tax_category": [7], "bad key!": [3], "": [4]}

        assert template_service.sanitize_template_content(content) == {
            "page": [1, 2],
            "tax_category": [7],
            "badkey": [3],
        }

    def test_sanitize_content_drops_non_ascii_digits(self):
        assert template_service.sanitize_template_content({"page": ["1", "³"], "post": ["²"]}) == {"page": [1]}

    def test_sanitize_non_mapping(self):
        assert template_service.sanitize_template_content(None) == {}
        assert template_service.sanitize_template_content([1, 2]) == {}


class TestApplyContent:
    async def test_replace_overwrites(self):
        grants = InMemoryGrantStore({2: {"page": [9]}})

        await template_service.apply_content(grants, {"page": [1, 2]}, 2)

        assert await grants.get_grant(2, "page") == {1, 2}

    async def test_replace_leaves_other_keys(self):
        grants = InMemoryGrantStore({2: {"post": [9]}})

        await template_service.apply_content(grants, {"page": [1]}, 2)

        assert await grants.get_grant(2, "post") == {9}

    async def test_replace_is_idempotent(self):
        grants = InMemoryGrantStore({2: {"page": [9]}})
        template = {"page": [1, 2], "post": [5]}

        await template_service.apply_content(grants, template, 2)
        once = await grants.get_all_grants(2)
        await template_service.apply_content(grants, template, 2)

        assert await grants.get_all_grants(2) == once

    async def test_merge_unions(self):
        grants = InMemoryGrantStore({2: {"page": [1, 2]}})

        await template_service.apply_content(grants, {"page": [2, 3]}, 2, merge=True)

        assert await grants.get_grant(2, "page") == {1, 2, 3}

    async def test_replace_then_merge(self):
        grants = InMemoryGrantStore()

        await template_service.apply_content(grants, {"page": [1, 2], "post": [5]}, 3)
        await template_service.apply_content(grants, {"page": [3]}, 3, merge=True)

        assert await grants.get_grant(3, "page") == {1, 2, 3}
        assert await grants.get_grant(3, "post") == {5}

    async def test_each_key_is_written(self):
        grants = InMemoryGrantStore()

        written = await template_service.apply_content(grants, {"page": [1], "media": [40]}, 2)

        assert written == {"page": {1}, "media": {40}}
        assert grants.writes == 2


class TestSnapshot:
    async def test_snapshot_covers_types_taxonomies_and_media(self):
        grants = InMemoryGrantStore(
            {
                2: {
                    "page": [1],
                    "product": [11],
                    "tax_category": [7],
                    "media": [40],
                    "unrelated": [99],
                }
            }
        )
        settings = EnabledSettings(enabled_taxonomies=["category"], woocommerce_products=True)

        snapshot = await template_service.snapshot_user_grants(grants, 2, settings)

        assert snapshot == {"page": [1], "product": [11], "tax_category": [7], "media": [40]}

    async def test_builtin_types_always_included(self):
        grants = InMemoryGrantStore({2: {"post": [5]}})
        settings = EnabledSettings(enabled_post_types=["page"])

        assert await template_service.snapshot_user_grants(grants, 2, settings) == {"post": [5]}


class TestTemplateCrud:
    async def test_create_and_get(self, test_db):
        template = await template_service.create_template(
            test_db, "  Writers ", "Blog writers", {"post": [5, "6"], "page": []}
        )

        fetched = await template_service.get_template(test_db, template.id)
        assert fetched.name == "Writers"
        assert fetched.content == {"post": [5, 6]}
        assert template_service.template_summary(fetched) == {"post": 2}

    async def test_list_sorted_by_name(self, test_db):
        await template_service.create_template(test_db, "Zeta")
        await template_service.create_template(test_db, "Alpha")

        names = [t.name for t in await template_service.get_templates(test_db)]
        assert names == ["Alpha", "Zeta"]

    async def test_update(self, test_db):
        template = await template_service.create_template(test_db, "Old", content={"page": [1]})

        updated = await template_service.update_template(test_db, template.id, name="New", content={"post": [2]})

        assert updated.name == "New"
        assert updated.content == {"post": [2]}

    async def test_update_keeps_unspecified_fields(self, test_db):
        template = await template_service.create_template(test_db, "Name", "Desc", {"page": [1]})

        updated = await template_service.update_template(test_db, template.id, description="Other")

        assert updated.name == "Name"
        assert updated.content == {"page": [1]}

    async def test_delete(self, test_db):
        template = await template_service.create_template(test_db, "Temp")

        assert await template_service.delete_template(test_db, template.id)
        assert await template_service.get_template(test_db, template.id) is None

    async def test_missing_template(self, test_db):
        with pytest.raises(TemplateNotFoundError):
            await template_service.require_template(test_db, "tpl_missing")
        with pytest.raises(TemplateNotFoundError):
            await template_service.delete_template(test_db, "tpl_missing")

    async def test_apply_missing_template(self, test_db, editor_user):
        with pytest.raises(TemplateNotFoundError):
            await template_service.apply_template(test_db, DatabaseGrantStore(test_db), "tpl_missing", editor_user.id)


class TestTemplateScenarios:
    async def test_replace_then_merge_with_stored_templates(self, test_db, editor_user):
        grants = DatabaseGrantStore(test_db)
        base = await template_service.create_template(test_db, "Base", content={"page": [1, 2], "post": [5]})
        extra = await template_service.create_template(test_db, "Extra", content={"page": [3]})

        await template_service.apply_template(test_db, grants, base.id, editor_user.id)
        await template_service.apply_template(test_db, grants, extra.id, editor_user.id, merge=True)

        assert await grants.get_grant(editor_user.id, "page") == {1, 2, 3}
        assert await grants.get_grant(editor_user.id, "post") == {5}

    async def test_create_from_user_round_trip(self, test_db, make_user):
        source = await make_user("source", "editor")
        target = await make_user("target", "editor")
        grants = DatabaseGrantStore(test_db)
        await grants.set_grant(source.id, "page", [1, 2])
        await grants.set_grant(source.id, "media", [40])

        template = await template_service.create_from_user(
            test_db, grants, EnabledSettings(), source.id, "From source"
        )
        await template_service.apply_template(test_db, grants, template.id, target.id)

        assert template.content == {"page": [1, 2], "media": [40]}
        assert await grants.get_all_grants(target.id) == {"page": {1, 2}, "media": {40}}

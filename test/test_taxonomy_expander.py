"""
Tests for taxonomy expansion

Term grants turn into content IDs at decision time, so adding or removing
a tag changes what the user can see without touching the grant.
"""

from freelancer_access.models.content import ContentStatus
from freelancer_access.schemas.settings import EnabledSettings
from freelancer_access.services.content_index import DatabaseContentIndex
from freelancer_access.services.grant_store import DatabaseGrantStore
from freelancer_access.services.taxonomy_expander import TaxonomyExpander
from utils.fakes import FakeItem, InMemoryContentIndex, InMemoryGrantStore

CATEGORIES = EnabledSettings(enabled_taxonomies=["category"])


class TestTaxonomyExpander:
    async def test_expands_granted_term(self):
        grants = InMemoryGrantStore({2: {"tax_category": [7]}})
        index = InMemoryContentIndex(
            [
                FakeItem(id=1, terms={("category", 7)}),
                FakeItem(id=2, terms={("category", 8)}),
                FakeItem(id=3, terms={("category", 7), ("category", 8)}),
            ]
        )

        assert await TaxonomyExpander(grants, index).expand(2, "post", CATEGORIES) == {1, 3}

    async def test_ignores_taxonomy_not_enabled(self):
        grants = InMemoryGrantStore({2: {"tax_category": [7]}})
        index = InMemoryContentIndex([FakeItem(id=1, terms={("category", 7)})])

        assert await TaxonomyExpander(grants, index).expand(2, "post", EnabledSettings()) == frozenset()

    async def test_ignores_taxonomy_not_registered_for_type(self):
        grants = InMemoryGrantStore({2: {"tax_category": [7]}})
        index = InMemoryContentIndex([FakeItem(id=1, content_type="page", terms={("category", 7)})])

        assert await TaxonomyExpander(grants, index).expand(2, "page", CATEGORIES) == frozenset()

    async def test_only_items_of_requested_type(self):
        grants = InMemoryGrantStore({2: {"tax_genre": [3]}})
        index = InMemoryContentIndex(
            [
                FakeItem(id=1, content_type="book", terms={("genre", 3)}),
                FakeItem(id=2, content_type="post", terms={("genre", 3)}),
            ],
            taxonomy_types={"genre": {"book", "post"}},
        )
        settings = EnabledSettings(enabled_taxonomies=["genre"])

        assert await TaxonomyExpander(grants, index).expand(2, "book", settings) == {1}

    async def test_unions_several_taxonomies(self):
        grants = InMemoryGrantStore({2: {"tax_category": [7], "tax_post_tag": [30]}})
        index = InMemoryContentIndex(
            [
                FakeItem(id=1, terms={("category", 7)}),
                FakeItem(id=2, terms={("post_tag", 30)}),
                FakeItem(id=3, terms={("post_tag", 31)}),
            ]
        )
        settings = EnabledSettings(enabled_taxonomies=["category", "post_tag"])

        assert await TaxonomyExpander(grants, index).expand(2, "post", settings) == {1, 2}

    async def test_tag_change_is_reflected_immediately(self):
        grants = InMemoryGrantStore({2: {"tax_category": [7]}})
        index = InMemoryContentIndex([FakeItem(id=1, terms={("category", 7)})])
        expander = TaxonomyExpander(grants, index)
        assert await expander.expand(2, "post", CATEGORIES) == {1}

        index.add(FakeItem(id=2, terms={("category", 7)}))
        index.items[1].terms.clear()

        assert await expander.expand(2, "post", CATEGORIES) == {2}


class TestTaxonomyExpanderDatabase:
    async def test_expands_from_tables(self, test_db, editor_user, make_term, make_content):
        news = await make_term("category", "News")
        other = await make_term("category", "Other")
        tagged = await make_content(title="Tagged", terms=[news])
        await make_content(title="Untagged", terms=[other])
        draft = await make_content(title="Draft", terms=[news], status=ContentStatus.DRAFT)

        grants = DatabaseGrantStore(test_db)
        await grants.set_grant(editor_user.id, "tax_category", [news.id])
        expander = TaxonomyExpander(grants, DatabaseContentIndex(test_db))

        assert await expander.expand(editor_user.id, "post", CATEGORIES) == {tagged.id, draft.id}

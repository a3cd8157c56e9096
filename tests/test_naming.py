# ============================================================================
# NAMING UTILITY TESTS
# ============================================================================
# STATUS: Tests - snake_case, pluralization, reserved words
# PURPOSE: Verify the pure naming functions behind table/column/type names
# CREATED: 19 OCT 2026
# ============================================================================
"""
Naming Utility Tests

Run with:
    pytest tests/test_naming.py -v
"""

import pytest

from oas2pg.core.schema.naming import (
    enum_type_name,
    foreign_key_column,
    is_reserved_word,
    pluralize,
    singularize,
    table_name_for,
    to_snake_case,
)


class TestSnakeCase:

    @pytest.mark.parametrize("name,expected", [
        ("User", "user"),
        ("PetOwner", "pet_owner"),
        ("HTTPRequest", "http_request"),
        ("pet-owner", "pet_owner"),
        ("order_item", "order_item"),
        ("Line Item", "line_item"),
    ])
    def test_to_snake_case(self, name, expected):
        assert to_snake_case(name) == expected


class TestPluralization:

    @pytest.mark.parametrize("word,expected", [
        ("user", "users"),
        ("category", "categories"),
        ("address", "addresses"),
        ("person", "people"),
        ("status", "statuses"),
        ("tags", "tags"),
    ])
    def test_pluralize(self, word, expected):
        assert pluralize(word) == expected

    @pytest.mark.parametrize("word,expected", [
        ("users", "user"),
        ("categories", "category"),
        ("orders", "order"),
        ("people", "person"),
    ])
    def test_singularize(self, word, expected):
        assert singularize(word) == expected


class TestDerivedNames:

    @pytest.mark.parametrize("entity,expected", [
        ("User", "users"),
        ("Category", "categories"),
        ("OrderItem", "order_items"),
        ("Person", "people"),
    ])
    def test_table_name_for(self, entity, expected):
        assert table_name_for(entity) == expected

    def test_enum_type_uses_singular_table(self):
        assert enum_type_name("orders", "status") == "order_status"
        assert enum_type_name("categories", "kind") == "category_kind"

    def test_foreign_key_column(self):
        assert foreign_key_column("tags") == "tag_id"
        assert foreign_key_column("owner") == "owner_id"
        assert foreign_key_column("address") == "address_id"


class TestReservedWords:

    @pytest.mark.parametrize("name", ["order", "ORDER", "User", "table", "check"])
    def test_reserved(self, name):
        assert is_reserved_word(name)

    @pytest.mark.parametrize("name", ["orders", "users", "pets", "status"])
    def test_not_reserved(self, name):
        assert not is_reserved_word(name)

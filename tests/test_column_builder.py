# ============================================================================
# COLUMN BUILDER TESTS
# ============================================================================
# STATUS: Tests - Field to column transformation
# PURPOSE: Verify type mapping, overrides, constraints, defaults and references
# CREATED: 19 OCT 2026
# ============================================================================
"""
Column Builder Tests

Covers:
1. (type, format) mapping and unknown/missing types
2. id / created_at / updated_at overrides
3. CHECK clause assembly (bounds, lengths, pattern, legacy enum)
4. Enum types, defaults, uniqueness
5. Reference columns

Run with:
    pytest tests/test_column_builder.py -v
"""

import pytest

from oas2pg.core.contracts import EnumMode, ReferenceKind
from oas2pg.core.exceptions import (
    ColumnBuildError,
    EmptyEnumError,
    MissingDataTypeError,
    UnknownDataTypeError,
)
from oas2pg.core.models import ColumnSpec, FieldSchema
from oas2pg.core.schema import ColumnBuilder, SchemaUtils, get_postgres_type


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def builder():
    return ColumnBuilder()


@pytest.fixture
def check_builder():
    return ColumnBuilder(enum_mode=EnumMode.CHECK)


@pytest.fixture
def render():
    """Build a column and render its definition text."""
    def _render(builder, field, table="items", required=()):
        column = builder.build(table, field, required)
        return SchemaUtils.as_text(ColumnBuilder.render(column))
    return _render


# ============================================================================
# TYPE RESOLUTION
# ============================================================================

class TestTypeResolution:

    @pytest.mark.parametrize("data_type,data_format,expected", [
        ("integer", "", "INTEGER"),
        ("integer", "int32", "INTEGER"),
        ("integer", "int64", "BIGINT"),
        ("number", "", "NUMERIC"),
        ("number", "double", "DOUBLE PRECISION"),
        ("string", "", "TEXT"),
        ("string", "date-time", "TIMESTAMP"),
        ("string", "binary", "BYTEA"),
        ("string", "uuid", "UUID"),
        ("boolean", "", "BOOLEAN"),
        ("array", "", "JSON"),
        ("object", "", "JSON"),
        ("file", "", "BYTEA"),
    ])
    def test_type_map(self, data_type, data_format, expected):
        assert get_postgres_type(data_type, data_format) == expected

    def test_unmapped_pair(self):
        assert get_postgres_type("string", "geometry") is None

    def test_plain_column(self, builder, render, make_field):
        assert render(builder, make_field("username")) == "username TEXT"

    def test_unknown_type_raises(self, builder, make_field):
        with pytest.raises(UnknownDataTypeError) as exc_info:
            builder.build("items", make_field("blob", data_format="geometry"))

        err = exc_info.value
        assert isinstance(err, ColumnBuildError)
        assert err.field_name == "blob"
        assert "unknown data type: `string`" in str(err)
        assert "geometry" in str(err)

    def test_unknown_type_tag(self, builder, make_field):
        with pytest.raises(UnknownDataTypeError, match="unknown data type: `decimal`"):
            builder.build("items", make_field("amount", data_type="decimal"))

    def test_missing_type_raises(self, builder):
        with pytest.raises(MissingDataTypeError):
            builder.build("items", FieldSchema(name="mystery"))


# ============================================================================
# OVERRIDES
# ============================================================================

class TestOverrides:

    def test_integer_id_is_serial_primary_key(self, builder, render, make_field):
        field = make_field("id", data_type="integer")
        assert render(builder, field) == "id BIGSERIAL NOT NULL PRIMARY KEY"

    def test_int64_id_is_serial_primary_key(self, builder, render, make_field):
        field = make_field("id", data_type="integer", data_format="int64")
        assert render(builder, field) == "id BIGSERIAL NOT NULL PRIMARY KEY"

    def test_string_id_keeps_type(self, builder, make_field):
        column = builder.build("items", make_field("id", data_format="uuid"))
        assert column.sql_type == "UUID"
        assert column.primary_key is True
        assert column.not_null is False

    @pytest.mark.parametrize("name", ["created_at", "updated_at"])
    def test_timestamps(self, builder, render, make_field, name):
        field = make_field(name, data_format="date-time", default="yesterday")
        assert render(builder, field) == f"{name} TIMESTAMP NOT NULL DEFAULT NOW()"


# ============================================================================
# NULLABILITY
# ============================================================================

class TestNullability:

    def test_required_field(self, builder, render, make_field):
        assert render(builder, make_field("name"), required={"name"}) == "name TEXT NOT NULL"

    def test_explicit_not_nullable(self, builder, render, make_field):
        assert render(builder, make_field("name", nullable=False)) == "name TEXT NOT NULL"

    def test_required_beats_nullable(self, builder, make_field):
        column = builder.build("items", make_field("name", nullable=True), {"name"})
        assert column.not_null is True

    def test_nullable_by_default(self, builder, make_field):
        assert builder.build("items", make_field("name")).not_null is False


# ============================================================================
# CHECK CONSTRAINTS
# ============================================================================

class TestCheckClauses:

    def test_min_and_max(self, builder, render, make_field):
        field = make_field("price", data_type="number", minimum=0, maximum=100000)
        assert render(builder, field) == (
            "price NUMERIC CHECK (price >= 0.000000 AND price <= 100000.000000)"
        )

    def test_min_only(self, builder, render, make_field):
        field = make_field("age", data_type="integer", minimum=18)
        assert render(builder, field) == "age INTEGER CHECK (age >= 18.000000)"

    def test_char_length(self, builder, render, make_field):
        field = make_field("username", min_length=3, max_length=32)
        assert render(builder, field) == (
            "username TEXT CHECK (char_length(username) >= 3 AND char_length(username) <= 32)"
        )

    def test_pattern_quotes_are_doubled(self, builder, render, make_field):
        field = make_field("word", pattern="^it's$")
        assert render(builder, field) == "word TEXT CHECK (word ~ '^it''s$')"

    def test_clause_order(self, builder, make_field):
        field = make_field("code", min_length=2, max_length=4, pattern="^[A-Z]+$")
        column = builder.build("items", field)
        assert column.checks == [
            "char_length(code) >= 2",
            "char_length(code) <= 4",
            "code ~ '^[A-Z]+$'",
        ]

    def test_reserved_column_is_quoted(self, builder, render, make_field):
        field = make_field("order", data_type="integer", minimum=1)
        assert render(builder, field) == '"order" INTEGER CHECK ("order" >= 1.000000)'

    def test_non_plain_column_is_quoted(self, builder, render, make_field):
        field = make_field("first-name", max_length=20)
        assert render(builder, field) == (
            '"first-name" TEXT CHECK (char_length("first-name") <= 20)'
        )

    def test_camel_case_column_stays_bare(self, builder, render, make_field):
        assert render(builder, make_field("firstName")) == "firstName TEXT"

    def test_no_checks(self, builder, make_field):
        column = builder.build("items", make_field("name"))
        assert column.checks == []
        assert column.check_clause == ""


# ============================================================================
# ENUMS
# ============================================================================

class TestEnums:

    def test_enum_type(self, builder, render, make_field):
        field = make_field("status", enum=["pending", "approved", "shipped", "cancelled"])
        column = builder.build("orders", field)

        assert column.sql_type == "order_status"
        assert column.enum_type == "order_status"
        assert column.enum_values == ["pending", "approved", "shipped", "cancelled"]
        assert render(builder, field, table="orders") == "status order_status"

    def test_enum_default_is_quoted(self, builder, render, make_field):
        field = make_field("status", enum=["pending", "shipped"], default="pending")
        assert render(builder, field, table="orders") == "status order_status DEFAULT 'pending'"

    def test_legacy_check_enum(self, check_builder, render, make_field):
        field = make_field("status", enum=["available", "pending", "sold"])
        assert render(check_builder, field, table="products") == (
            "status TEXT CHECK (status IN ('available', 'pending', 'sold'))"
        )

    def test_legacy_check_enum_comes_last(self, check_builder, make_field):
        field = make_field("size", enum=["s", "m"], pattern="^[a-z]$")
        column = check_builder.build("shirts", field)
        assert column.checks == ["size ~ '^[a-z]$'", "size IN ('s', 'm')"]
        assert column.enum_type is None

    def test_legacy_check_empty_enum(self, check_builder, make_field):
        with pytest.raises(EmptyEnumError):
            check_builder.build("items", make_field("status", enum=[]))


# ============================================================================
# DEFAULTS & UNIQUENESS
# ============================================================================

class TestDefaults:

    def test_text_default_is_quoted(self, builder, render, make_field):
        assert render(builder, make_field("label", default="none")) == "label TEXT DEFAULT 'none'"

    def test_text_default_with_backslash_and_quote(self, builder, render, make_field):
        field = make_field("path", default="C:\\tmp\\it's")
        assert render(builder, field) == "path TEXT DEFAULT 'C:\\tmp\\it''s'"

    def test_numeric_default_is_raw(self, builder, render, make_field):
        field = make_field("retries", data_type="integer", default="5")
        assert render(builder, field) == "retries INTEGER DEFAULT 5"

    def test_boolean_default_is_raw(self, builder, render, make_field):
        field = make_field("complete", data_type="boolean", default="false")
        assert render(builder, field) == "complete BOOLEAN DEFAULT false"

    def test_unique(self, builder, render, make_field):
        field = make_field("labels", data_type="array", unique=True)
        assert render(builder, field) == "labels JSON UNIQUE"

    def test_full_layout(self, builder, render, make_field):
        field = make_field("code", max_length=8, default="abc", unique=True)
        assert render(builder, field, required={"code"}) == (
            "code TEXT NOT NULL CHECK (char_length(code) <= 8) DEFAULT 'abc' UNIQUE"
        )


# ============================================================================
# REFERENCES
# ============================================================================

class TestReferences:

    def test_direct_reference(self, builder, render):
        field = FieldSchema(
            name="tag",
            data_type="object",
            reference="Tag",
            reference_kind=ReferenceKind.DIRECT,
        )
        assert render(builder, field, table="pets") == "tag_id INTEGER REFERENCES tags(id)"

    def test_collection_reference(self, builder, render):
        field = FieldSchema(
            name="tags",
            data_type="array",
            reference="Tag",
            reference_kind=ReferenceKind.COLLECTION,
        )
        assert render(builder, field, table="pets") == "tag_id INTEGER REFERENCES tags(id)"

    def test_inline_collection_targets_field_name(self, builder, render):
        field = FieldSchema(
            name="line_item",
            data_type="array",
            reference_kind=ReferenceKind.COLLECTION,
        )
        assert render(builder, field, table="orders") == (
            "line_item_id INTEGER REFERENCES line_items(id)"
        )

    def test_required_uses_original_field_name(self, builder, render):
        field = FieldSchema(
            name="owner",
            data_type="object",
            reference="User",
            reference_kind=ReferenceKind.DIRECT,
        )
        assert render(builder, field, table="pets", required={"owner"}) == (
            "owner_id INTEGER NOT NULL REFERENCES users(id)"
        )

    def test_reference_drops_scalar_details(self, builder):
        field = FieldSchema(
            name="category",
            data_type="object",
            default="x",
            reference="Category",
            reference_kind=ReferenceKind.DIRECT,
        )
        column = builder.build("products", field)

        assert column.name == "category_id"
        assert column.sql_type == "INTEGER"
        assert column.foreign_key == "categories"
        assert column.default is None
        assert column.checks == []
        assert column.enum_type is None

    def test_column_cannot_be_reference_and_enum(self):
        with pytest.raises(ValueError, match="cannot be both"):
            ColumnSpec(
                name="status_id",
                sql_type="INTEGER",
                foreign_key="statuses",
                enum_type="order_status",
            )

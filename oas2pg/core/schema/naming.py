# ============================================================================
# NAMING UTILITIES
# ============================================================================
# STATUS: Core - Pure string transformations for SQL names
# PURPOSE: snake_case conversion, English pluralization, reserved-word checks
# CREATED: 19 OCT 2026
# EXPORTS: to_snake_case, pluralize, singularize, table_name_for,
#          enum_type_name, foreign_key_column, is_reserved_word
# DEPENDENCIES: inflection
# ============================================================================
"""
Naming Utilities

All table, column and type names flow through here so the rules live in one
place:

    "OrderItem"   -> table "order_items"
    "Category"    -> table "categories"
    field "tags"  -> column "tag_id"
    orders.status -> type "order_status"

Pluralization uses the inflection package (Rails inflector rules), which
handles irregular forms ("person" -> "people", "status" -> "statuses").
"""

import re

import inflection


# PostgreSQL reserved key words (SQL Key Words appendix, "reserved" column)
POSTGRES_RESERVED_WORDS = frozenset({
    "ALL", "ANALYSE", "ANALYZE", "AND", "ANY", "ARRAY", "AS", "ASC", "ASYMMETRIC",
    "AUTHORIZATION", "BINARY", "BOTH", "CASE", "CAST", "CHECK", "COLLATE", "COLLATION",
    "COLUMN", "CONCURRENTLY", "CONSTRAINT", "CREATE", "CROSS", "CURRENT_CATALOG",
    "CURRENT_DATE", "CURRENT_ROLE", "CURRENT_SCHEMA", "CURRENT_TIME", "CURRENT_TIMESTAMP",
    "CURRENT_USER", "DEFAULT", "DEFERRABLE", "DESC", "DISTINCT", "DO", "ELSE", "END",
    "EXCEPT", "FALSE", "FETCH", "FOR", "FOREIGN", "FREEZE", "FROM", "FULL", "GRANT", "GROUP",
    "HAVING", "ILIKE", "IN", "INITIALLY", "INNER", "INTERSECT", "INTO", "IS", "ISNULL", "JOIN",
    "LATERAL", "LEADING", "LEFT", "LIKE", "LIMIT", "LOCALTIME", "LOCALTIMESTAMP", "NATURAL",
    "NOT", "NOTNULL", "NULL", "OFFSET", "ON", "ONLY", "OR", "ORDER", "OUTER", "OVERLAPS",
    "PLACING", "PRIMARY", "REFERENCES", "RETURNING", "RIGHT", "SELECT", "SESSION_USER",
    "SIMILAR", "SOME", "SYMMETRIC", "SYSTEM_USER", "TABLE", "TABLESAMPLE", "THEN", "TO",
    "TRAILING", "TRUE", "UNION", "UNIQUE", "USER", "USING", "VARIADIC", "VERBOSE", "WHEN",
    "WHERE", "WINDOW", "WITH",
})

_NON_WORD = re.compile(r"[^0-9a-zA-Z_]+")


def to_snake_case(name: str) -> str:
    """
    Lower-case, underscore-delimited form of an entity name.

    "PetOwner" -> "pet_owner", "HTTPRequest" -> "http_request",
    "pet-owner" -> "pet_owner".
    """
    underscored = inflection.underscore(name)
    return _NON_WORD.sub("_", underscored).strip("_")


def pluralize(word: str) -> str:
    return inflection.pluralize(word)


def singularize(word: str) -> str:
    return inflection.singularize(word)


def table_name_for(entity_name: str) -> str:
    """Entity name -> plural snake_case table name ("Category" -> "categories")."""
    return pluralize(to_snake_case(entity_name))


def enum_type_name(table_name: str, column_name: str) -> str:
    """Enum type for a column: <singular table>_<column> ("orders", "status" -> "order_status")."""
    return f"{singularize(table_name)}_{column_name}"


def foreign_key_column(field_name: str) -> str:
    """Column holding a reference: <singular field>_id ("tags" -> "tag_id")."""
    return f"{singularize(field_name)}_id"


def is_reserved_word(name: str) -> bool:
    """Case-insensitive match against the PostgreSQL reserved key words."""
    return name.upper() in POSTGRES_RESERVED_WORDS


__all__ = [
    "POSTGRES_RESERVED_WORDS",
    "to_snake_case",
    "pluralize",
    "singularize",
    "table_name_for",
    "enum_type_name",
    "foreign_key_column",
    "is_reserved_word",
]

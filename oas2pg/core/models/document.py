# ============================================================================
# SPEC DOCUMENT MODELS
# ============================================================================
# STATUS: Core model - Parsed OpenAPI input
# PURPOSE: Immutable field/entity/operation models produced by the loader
# CREATED: 19 OCT 2026
# EXPORTS: FieldSchema, EntitySchema, OperationSchema, SpecDocument
# DEPENDENCIES: pydantic
# ============================================================================
"""
Spec Document Models

The loader turns an OpenAPI document into these models; the builders only
ever see these, never raw YAML. Everything is frozen: a document is parsed
once and read many times.

    SpecDocument
    ├── entities: [EntitySchema]      (components.schemas, document order)
    │   ├── properties: [FieldSchema] (property order preserved)
    │   └── all_of: [EntitySchema]    (composition bases)
    └── operations: [OperationSchema] (paths, document order)
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from oas2pg.core.contracts import ReferenceKind


class FieldSchema(BaseModel):
    """
    One property of an entity.

    Defaults, enum members and bounds are already normalized to the raw text
    the builders emit (see OpenAPILoader._raw_text).
    """
    name: str
    data_type: Optional[str] = None           # None = schema declared no type
    data_format: str = ""
    nullable: Optional[bool] = None           # None = not stated
    default: Optional[str] = None

    # Numeric / string constraints
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    unique: bool = False

    # None = no enum keyword, [] = enum declared without members
    enum: Optional[List[str]] = None

    # Relations
    reference: Optional[str] = None           # referenced entity name
    reference_kind: ReferenceKind = ReferenceKind.NONE

    model_config = {"frozen": True}

    def is_reference(self) -> bool:
        """Property is a direct $ref to another schema."""
        return self.reference_kind == ReferenceKind.DIRECT

    def is_embedded_collection(self) -> bool:
        """Property is an array of object schemas with properties."""
        return self.reference_kind == ReferenceKind.COLLECTION

    def is_foreign_key(self) -> bool:
        return self.reference_kind.is_foreign_key()


class EntitySchema(BaseModel):
    """
    A named schema under components.schemas (or an allOf base block).

    properties is None when the schema has no properties keyword at all,
    which is how reference-only schemas are told apart from empty objects.
    """
    name: str
    properties: Optional[List[FieldSchema]] = None
    required: List[str] = Field(default_factory=list)
    all_of: Optional[List["EntitySchema"]] = None
    extensions: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def has_composition(self) -> bool:
        return self.all_of is not None

    def field(self, name: str) -> Optional[FieldSchema]:
        """Look up one of this schema's own properties by name."""
        for prop in self.properties or []:
            if prop.name == name:
                return prop
        return None


EntitySchema.model_rebuild()


class OperationSchema(BaseModel):
    """A single HTTP operation under paths, reduced to what queries need."""
    path: str
    method: str                                # lower-case HTTP verb
    operation_id: Optional[str] = None
    request_properties: List[str] = Field(default_factory=list)
    returns_many: bool = False

    model_config = {"frozen": True}


class SpecDocument(BaseModel):
    """Parsed OpenAPI document."""
    title: str = "untitled"
    version: str = ""
    openapi: str = "3.0.0"
    entities: List[EntitySchema] = Field(default_factory=list)
    operations: List[OperationSchema] = Field(default_factory=list)

    model_config = {"frozen": True}

    def entity(self, name: str) -> Optional[EntitySchema]:
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None

    @property
    def entity_names(self) -> List[str]:
        return [e.name for e in self.entities]


__all__ = ["FieldSchema", "EntitySchema", "OperationSchema", "SpecDocument"]

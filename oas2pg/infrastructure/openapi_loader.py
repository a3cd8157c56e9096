# ============================================================================
# OPENAPI LOADER
# ============================================================================
# STATUS: Infrastructure - OpenAPI document parsing
# PURPOSE: Load OpenAPI 3.x YAML/JSON into SpecDocument models
# CREATED: 19 OCT 2026
# EXPORTS: OpenAPILoader, load_spec
# DEPENDENCIES: pyyaml, pydantic
# ============================================================================
"""
OpenAPI Loader

Reads an OpenAPI 3.x document (YAML or JSON - JSON is parsed by the same
YAML loader) and produces an immutable SpecDocument:

- components.schemas -> EntitySchema, document order
- properties         -> FieldSchema, property order
- allOf              -> EntitySchema.all_of (bases resolved recursively)
- paths              -> OperationSchema per get/post/put/patch/delete

Reference policy:
- A property whose $ref (or single-item allOf wrapper around a $ref) points
  at an object schema with properties/allOf is a DIRECT reference.
- An array whose items are such a schema, or an inline object with
  properties, is a COLLECTION reference.
- A $ref to anything else (string enum, plain object) is inlined as the
  property's own schema.
- allOf chains that come back to a schema already being composed raise
  CircularReferenceError. Property-level cycles are legal: references
  become foreign keys and are never expanded.
"""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import yaml

from oas2pg.core.contracts import ReferenceKind
from oas2pg.core.exceptions import CircularReferenceError, SpecParseError
from oas2pg.core.logging import ComponentType, get_logger, log_context
from oas2pg.core.models import EntitySchema, FieldSchema, OperationSchema, SpecDocument

logger = get_logger(__name__, ComponentType.LOADER)

HTTP_METHODS = ("get", "post", "put", "patch", "delete")
JSON_CONTENT = "application/json"


def _raw_text(value: Any) -> str:
    """
    Text form of a YAML scalar as it should appear in SQL.

    true/false for booleans, compact JSON for mappings and lists.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), sort_keys=True)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class OpenAPILoader:
    """
    Parse OpenAPI documents into SpecDocument models.

    Stateless: every load call works on its own raw document.
    """

    SCHEMA_PREFIX = "#/components/schemas/"

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    def load_file(self, path: Union[str, Path]) -> SpecDocument:
        """
        Load a document from disk.

        Raises:
            SpecParseError: unreadable file, invalid YAML, or invalid document
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SpecParseError(f"Cannot read OpenAPI spec {path}: {e}") from e
        return self.load_text(text, source=path.name)

    def load_text(self, text: str, source: str = "<string>") -> SpecDocument:
        """Load a document from YAML or JSON text."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SpecParseError(f"Cannot parse OpenAPI spec {source}: {e}") from e
        return self.load_dict(data, source=source)

    def load_dict(self, data: Any, source: str = "<dict>") -> SpecDocument:
        """
        Build a SpecDocument from an already-parsed mapping.

        Raises:
            SpecParseError: not an OpenAPI 3.x document or unresolvable $ref
            CircularReferenceError: allOf composition loops back on itself
        """
        if not isinstance(data, dict):
            raise SpecParseError(f"OpenAPI spec {source} is not a mapping")

        version = str(data.get("openapi", ""))
        if not version.startswith("3."):
            raise SpecParseError(
                f"Unsupported OpenAPI version in {source}: {version or data.get('swagger', 'missing')}"
            )

        info = data.get("info") or {}
        schemas = (data.get("components") or {}).get("schemas") or {}

        with log_context(document=source):
            entities = []
            for name, schema in schemas.items():
                with log_context(entity=name):
                    entities.append(self._entity(data, name, schema, chain=[name]))

            operations = self._operations(data)

            logger.info(
                f"Loaded {len(entities)} schemas and {len(operations)} operations from {source}"
            )

        return SpecDocument(
            title=str(info.get("title", "untitled")),
            version=str(info.get("version", "")),
            openapi=version,
            entities=entities,
            operations=operations,
        )

    # =========================================================================
    # REFERENCES
    # =========================================================================

    def _pointer(self, doc: Dict[str, Any], ref: str) -> Any:
        """Walk a local JSON pointer (#/a/b) through the raw document."""
        if not isinstance(ref, str) or not ref.startswith("#/"):
            raise SpecParseError(f"Only local references are supported: {ref}")

        node: Any = doc
        for segment in ref[2:].split("/"):
            key = segment.replace("~1", "/").replace("~0", "~")
            if isinstance(node, dict) and key in node:
                node = node[key]
            else:
                raise SpecParseError(f"Unresolvable reference: {ref}")
        return node

    def _resolve(self, doc: Dict[str, Any], ref: str) -> Tuple[str, Dict[str, Any]]:
        """
        Resolve a $ref, following alias chains ($ref -> $ref).

        Returns:
            (referenced schema name, schema mapping)
        """
        seen: List[str] = []
        while True:
            if ref in seen:
                raise CircularReferenceError(seen + [ref])
            seen.append(ref)
            node = self._pointer(doc, ref)
            if not isinstance(node, dict):
                raise SpecParseError(f"Reference {ref} does not point at a schema")
            if "$ref" in node and len(node) == 1:
                ref = node["$ref"]
                continue
            name = ref.rsplit("/", 1)[-1].replace("~1", "/").replace("~0", "~")
            return name, node

    @staticmethod
    def _is_entity(schema: Dict[str, Any]) -> bool:
        """Object schemas with their own structure are persisted as tables."""
        return "properties" in schema or "allOf" in schema

    # =========================================================================
    # ENTITIES
    # =========================================================================

    def _entity(
        self,
        doc: Dict[str, Any],
        name: str,
        schema: Any,
        chain: List[str],
    ) -> EntitySchema:
        """Build an EntitySchema (or an allOf base block) from a raw schema."""
        if not isinstance(schema, dict):
            raise SpecParseError(f"Schema {name} is not a mapping")

        if "$ref" in schema:
            target, schema = self._resolve(doc, schema["$ref"])
            if target != name and target in chain:
                raise CircularReferenceError(chain + [target])

        properties = schema.get("properties")
        fields: Optional[List[FieldSchema]] = None
        if properties is not None:
            if not isinstance(properties, dict):
                raise SpecParseError(f"properties of {name} is not a mapping")
            fields = [self._field(doc, prop_name, prop) for prop_name, prop in properties.items()]

        all_of: Optional[List[EntitySchema]] = None
        if "allOf" in schema:
            all_of = []
            for index, item in enumerate(schema.get("allOf") or []):
                all_of.append(self._base(doc, name, index, item, chain))

        extensions = {k: v for k, v in schema.items() if isinstance(k, str) and k.startswith("x-")}

        return EntitySchema(
            name=name,
            properties=fields,
            required=list(schema.get("required") or []),
            all_of=all_of,
            extensions=extensions,
        )

    def _base(
        self,
        doc: Dict[str, Any],
        owner: str,
        index: int,
        item: Any,
        chain: List[str],
    ) -> EntitySchema:
        """One allOf entry: a $ref to another schema or an inline block."""
        if isinstance(item, dict) and "$ref" in item:
            target, resolved = self._resolve(doc, item["$ref"])
            if target in chain:
                raise CircularReferenceError(chain + [target])
            return self._entity(doc, target, resolved, chain + [target])
        return self._entity(doc, f"{owner}.allOf[{index}]", item, chain)

    # =========================================================================
    # FIELDS
    # =========================================================================

    @staticmethod
    def _type_of(schema: Dict[str, Any]) -> Tuple[Optional[str], Optional[bool]]:
        """
        (type tag, nullable) of a schema.

        type may be a list in OpenAPI 3.1; a "null" member marks the field
        nullable and the first other member is the type.
        """
        nullable = schema.get("nullable")
        declared = schema.get("type")
        if isinstance(declared, list):
            if "null" in declared:
                nullable = True
            declared = next((t for t in declared if t != "null"), None)
        return declared, nullable

    def _reference_target(self, doc: Dict[str, Any], prop: Dict[str, Any]) -> Optional[str]:
        """
        $ref (bare, or wrapped in a single-item allOf) that names an entity.
        """
        ref = prop.get("$ref")
        if ref is None:
            all_of = prop.get("allOf")
            if isinstance(all_of, list) and len(all_of) == 1 and isinstance(all_of[0], dict):
                ref = all_of[0].get("$ref")
        if ref is None:
            return None
        target, resolved = self._resolve(doc, ref)
        return target if self._is_entity(resolved) else None

    def _field(self, doc: Dict[str, Any], name: str, prop: Any) -> FieldSchema:
        """Build a FieldSchema from one property."""
        if not isinstance(prop, dict):
            raise SpecParseError(f"Property {name} is not a mapping")

        # Direct reference to another entity
        target = self._reference_target(doc, prop)
        if target is not None:
            _, nullable = self._type_of(prop)
            return FieldSchema(
                name=name,
                data_type="object",
                nullable=nullable,
                reference=target,
                reference_kind=ReferenceKind.DIRECT,
            )

        # $ref to a non-entity schema (enum, scalar alias): inline it
        if "$ref" in prop:
            _, resolved = self._resolve(doc, prop["$ref"])
            prop = {**resolved, **{k: v for k, v in prop.items() if k != "$ref"}}

        data_type, nullable = self._type_of(prop)

        # Array of embedded objects
        if data_type == "array" and isinstance(prop.get("items"), dict):
            items = prop["items"]
            item_target = self._reference_target(doc, items)
            if item_target is not None or self._is_entity(items):
                return FieldSchema(
                    name=name,
                    data_type="array",
                    nullable=nullable,
                    reference=item_target,
                    reference_kind=ReferenceKind.COLLECTION,
                )

        enum = None
        if "enum" in prop:
            enum = [_raw_text(v) for v in (prop.get("enum") or []) if v is not None]

        return FieldSchema(
            name=name,
            data_type=data_type,
            data_format=str(prop.get("format") or ""),
            nullable=nullable,
            default=_raw_text(prop["default"]) if prop.get("default") is not None else None,
            minimum=self._number(prop, "minimum"),
            maximum=self._number(prop, "maximum"),
            min_length=self._integer(prop, "minLength"),
            max_length=self._integer(prop, "maxLength"),
            pattern=prop.get("pattern"),
            unique=prop.get("uniqueItems") is True,
            enum=enum,
        )

    @staticmethod
    def _number(prop: Dict[str, Any], key: str) -> Optional[float]:
        value = prop.get(key)
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise SpecParseError(f"{key} must be numeric, got {value!r}") from e

    @staticmethod
    def _integer(prop: Dict[str, Any], key: str) -> Optional[int]:
        value = prop.get(key)
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise SpecParseError(f"{key} must be an integer, got {value!r}") from e

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def _operations(self, doc: Dict[str, Any]) -> List[OperationSchema]:
        """Every supported operation under paths, in document order."""
        operations = []
        for path, item in (doc.get("paths") or {}).items():
            if not isinstance(item, dict):
                continue
            for method in HTTP_METHODS:
                operation = item.get(method)
                if not isinstance(operation, dict):
                    continue
                operations.append(OperationSchema(
                    path=str(path),
                    method=method,
                    operation_id=operation.get("operationId"),
                    request_properties=self._request_properties(doc, operation),
                    returns_many=self._returns_many(doc, operation),
                ))
        return operations

    def _json_schema(self, doc: Dict[str, Any], container: Any) -> Optional[Dict[str, Any]]:
        """Schema under content/application/json of a request body or response."""
        if not isinstance(container, dict):
            return None
        if "$ref" in container:
            container = self._pointer(doc, container["$ref"])
        media = (container.get("content") or {}).get(JSON_CONTENT) or {}
        schema = media.get("schema")
        if not isinstance(schema, dict):
            return None
        if "$ref" in schema:
            _, schema = self._resolve(doc, schema["$ref"])
        return schema

    def _property_names(self, doc: Dict[str, Any], schema: Dict[str, Any], seen: Sequence[str] = ()) -> List[str]:
        """Property names of a schema, allOf bases first."""
        names: List[str] = []
        for item in schema.get("allOf") or []:
            if isinstance(item, dict) and "$ref" in item:
                target, item = self._resolve(doc, item["$ref"])
                if target in seen:
                    raise CircularReferenceError(list(seen) + [target])
                seen = list(seen) + [target]
            if isinstance(item, dict):
                names.extend(self._property_names(doc, item, seen))
        names.extend((schema.get("properties") or {}).keys())
        return list(dict.fromkeys(names))

    def _request_properties(self, doc: Dict[str, Any], operation: Dict[str, Any]) -> List[str]:
        schema = self._json_schema(doc, operation.get("requestBody"))
        if schema is None:
            return []
        return self._property_names(doc, schema)

    def _returns_many(self, doc: Dict[str, Any], operation: Dict[str, Any]) -> bool:
        responses = operation.get("responses") or {}
        ok = responses.get("200", responses.get(200))
        schema = self._json_schema(doc, ok)
        if schema is None:
            return False
        declared, _ = self._type_of(schema)
        return declared == "array"


def load_spec(path: Union[str, Path]) -> SpecDocument:
    """Convenience wrapper: load an OpenAPI document from disk."""
    return OpenAPILoader().load_file(path)


__all__ = ["OpenAPILoader", "load_spec"]

"""Procedural checks shared by the built-in provider rule sets.

Each check takes (node, path, is_root) and returns the issues it finds at
that node only; the engine takes care of visiting every node.
"""

from typing import Any, List, Mapping, Sequence

from schemafit.errors import ValidationIssue
from schemafit.types import JSONSchema, SchemaFeature

ADDITIONAL_PROPERTIES_NOT_FALSE = "additionalPropertiesNotFalse"


def _is_object_schema(schema: JSONSchema) -> bool:
    declared = schema.get("type")
    if isinstance(declared, (list, tuple)):
        is_object = "object" in declared
    else:
        is_object = declared == "object"
    return is_object or schema.get("properties") is not None


def _is_complex(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def check_primitive_enum(schema: JSONSchema, path: List[str], is_root: bool) -> List[ValidationIssue]:
    """Flag enums containing objects or arrays."""
    values = schema.get("enum")
    if not isinstance(values, Sequence) or isinstance(values, str):
        return []
    if not any(_is_complex(value) for value in values):
        return []
    return [
        ValidationIssue(
            path=list(path),
            feature=SchemaFeature.ENUM,
            message="Enum values must be strings, numbers, booleans, or null - complex types are not supported",
        )
    ]


def check_all_properties_required(schema: JSONSchema, path: List[str], is_root: bool) -> List[ValidationIssue]:
    """Flag declared properties that are missing from `required`.

    One issue per node, listing the optional names in declaration order.
    """
    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        return []
    required = set(schema.get("required") or [])
    optional = [name for name in properties if name not in required]
    if not optional:
        return []
    return [
        ValidationIssue(
            path=list(path),
            feature=SchemaFeature.OPTIONAL_PROPERTIES,
            message=f"All properties must be required. Optional properties found: {', '.join(optional)}",
        )
    ]


def check_additional_properties_false(schema: JSONSchema, path: List[str], is_root: bool) -> List[ValidationIssue]:
    """Flag object schemas whose additionalProperties is not literally false."""
    if not _is_object_schema(schema):
        return []
    if schema.get("additionalProperties") is False:
        return []
    return [
        ValidationIssue(
            path=list(path),
            feature=ADDITIONAL_PROPERTIES_NOT_FALSE,
            message="additionalProperties must be explicitly set to false",
        )
    ]


__all__ = [
    "ADDITIONAL_PROPERTIES_NOT_FALSE",
    "check_primitive_enum",
    "check_all_properties_required",
    "check_additional_properties_false",
]

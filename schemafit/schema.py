"""Schema input normalization.

Turns the schema inputs callers pass into a single JSON Schema document:
- Model classes exposing `model_json_schema(mode=...)` (pydantic-style) are
  converted, honoring the requested IO mode
- Raw JSON Schema mappings are passed through unchanged (same object)

Optionally checks the resulting document against the target dialect's
meta-schema using jsonschema.
"""

from typing import Any, Dict, Mapping, Optional, Type, Union

from jsonschema import Draft4Validator, Draft7Validator, Draft202012Validator
from jsonschema.exceptions import SchemaError

from schemafit.errors import SchemaInputError
from schemafit.types import JSONSchema, JSONSchemaIO, JSONSchemaTarget

# Default target matches what most AI SDK integrations generate
DEFAULT_JSON_SCHEMA_TARGET = JSONSchemaTarget.DRAFT_07

# "output" describes the parsed value, which is what a model must produce
DEFAULT_JSON_SCHEMA_IO = JSONSchemaIO.OUTPUT

JSON_SCHEMA_INDICATORS = (
    "type",
    "properties",
    "items",
    "allOf",
    "anyOf",
    "oneOf",
    "$ref",
    "$schema",
    "$defs",
    "definitions",
    "enum",
    "const",
)

# OpenAPI 3.0 schema objects are an extended subset of draft 4
META_SCHEMA_VALIDATORS: Dict[JSONSchemaTarget, Type[Any]] = {
    JSONSchemaTarget.DRAFT_07: Draft7Validator,
    JSONSchemaTarget.DRAFT_2020_12: Draft202012Validator,
    JSONSchemaTarget.OPENAPI_3_0: Draft4Validator,
}

_IO_MODES = {
    JSONSchemaIO.OUTPUT: "serialization",
    JSONSchemaIO.INPUT: "validation",
}


def is_json_schema(schema: Any) -> bool:
    """Whether the input looks like a raw JSON Schema document."""
    if not isinstance(schema, Mapping):
        return False
    return any(key in schema for key in JSON_SCHEMA_INDICATORS)


def has_json_schema_support(schema: Any) -> bool:
    """Whether the input can produce its own JSON Schema."""
    return callable(getattr(schema, "model_json_schema", None))


def extract_json_schema(
    schema: Any,
    target: Optional[Union[JSONSchemaTarget, str]] = None,
    io: Optional[Union[JSONSchemaIO, str]] = None,
    check: bool = False,
) -> JSONSchema:
    """Extract a JSON Schema document from a schema input.

    Args:
        schema: Model class with `model_json_schema`, or a raw JSON Schema
        target: JSON Schema dialect (default: draft-07)
        io: Conversion mode for model classes (default: output)
        check: Validate the document against the target's meta-schema

    Returns:
        The JSON Schema document

    Raises:
        SchemaInputError: If the input is not a recognized schema, or fails
            the meta-schema check

    Examples:
        >>> document = {"type": "object", "properties": {"name": {"type": "string"}}}
        >>> extract_json_schema(document) is document
        True
    """
    target = JSONSchemaTarget(target) if target is not None else DEFAULT_JSON_SCHEMA_TARGET
    io = JSONSchemaIO(io) if io is not None else DEFAULT_JSON_SCHEMA_IO

    if has_json_schema_support(schema):
        document = schema.model_json_schema(mode=_IO_MODES[io])
    elif is_json_schema(schema):
        document = schema
    else:
        raise SchemaInputError(
            "Invalid schema input. Expected a model class with model_json_schema() "
            "or a raw JSON Schema object."
        )

    if check:
        check_json_schema(document, target)
    return document


def check_json_schema(document: JSONSchema, target: JSONSchemaTarget = DEFAULT_JSON_SCHEMA_TARGET) -> None:
    """Check a document against the meta-schema of its target dialect.

    Raises:
        SchemaInputError: If the document is not a valid schema for the target
    """
    validator_class = META_SCHEMA_VALIDATORS[JSONSchemaTarget(target)]
    try:
        validator_class.check_schema(document)
    except SchemaError as e:
        raise SchemaInputError(f"Invalid {JSONSchemaTarget(target).value} schema: {e.message}") from e


__all__ = [
    "DEFAULT_JSON_SCHEMA_TARGET",
    "DEFAULT_JSON_SCHEMA_IO",
    "is_json_schema",
    "has_json_schema_support",
    "extract_json_schema",
    "check_json_schema",
]

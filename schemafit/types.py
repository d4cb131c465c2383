"""Core type definitions for SchemaFit.

This module defines the fundamental types shared by the registry and the
traversal engine:
- SchemaFeature: Every JSON Schema construct a provider rule can forbid
- FeatureContext: Where in the schema tree a rule applies
- JSONSchemaTarget: JSON Schema dialects a schema can be generated for
- JSONSchemaIO: Input/output mode for converting schema objects
- ParsedModel: Normalized provider/model identifier

These types form the contract between provider rule sets and the engine
that evaluates them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

JSONSchema = Dict[str, Any]


class SchemaFeature(str, Enum):
    """JSON Schema features that provider rules can flag.

    Most members name a single keyword. ROOT_ANY_OF, ROOT_ONE_OF, RECURSIVE
    and OPTIONAL_PROPERTIES name derived conditions instead: a composition
    keyword on the outermost document, a node reached twice during one
    traversal, and declared properties missing from ``required``.
    """
    # Composition keywords
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    NOT = "not"
    # Root-specific composition
    ROOT_ANY_OF = "rootAnyOf"
    ROOT_ONE_OF = "rootOneOf"
    # Conditional keywords
    IF = "if"
    THEN = "then"
    ELSE = "else"
    # Object keywords
    DEPENDENT_REQUIRED = "dependentRequired"
    DEPENDENT_SCHEMAS = "dependentSchemas"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    PATTERN_PROPERTIES = "patternProperties"
    PROPERTY_NAMES = "propertyNames"
    # Array keywords
    PREFIX_ITEMS = "prefixItems"
    ADDITIONAL_ITEMS = "additionalItems"
    CONTAINS = "contains"
    UNIQUE_ITEMS = "uniqueItems"
    # Validation keywords
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    FORMAT = "format"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"
    MULTIPLE_OF = "multipleOf"
    # Special
    REF = "$ref"
    RECURSIVE = "recursive"
    OPTIONAL_PROPERTIES = "optionalProperties"
    ENUM = "enum"


class FeatureContext(str, Enum):
    """Position in the schema tree where a rule applies.

    ROOT is the document passed to the engine, NESTED is every sub-schema
    below it, ANY matches both.
    """
    ROOT = "root"
    NESTED = "nested"
    ANY = "any"


class JSONSchemaTarget(str, Enum):
    """JSON Schema dialects a schema object can be converted to."""
    DRAFT_2020_12 = "draft-2020-12"
    DRAFT_07 = "draft-07"
    OPENAPI_3_0 = "openapi-3.0"


class JSONSchemaIO(str, Enum):
    """Conversion mode for schema objects.

    OUTPUT describes the parsed value a model produces, INPUT describes what
    the schema object accepts before parsing.
    """
    INPUT = "input"
    OUTPUT = "output"


@dataclass(frozen=True)
class ParsedModel:
    """Normalized model identifier.

    Attributes:
        provider: Provider name, lowercased (e.g., "openai.chat")
        model_id: Model identifier within the provider, passed through as given
        original: The identifier as the caller supplied it

    Examples:
        >>> model = ParsedModel(provider="openai", model_id="gpt-4o", original="openai/gpt-4o")
        >>> model.identifier
        'openai/gpt-4o'
    """
    provider: str
    model_id: str
    original: Any = None

    @property
    def identifier(self) -> str:
        """Canonical "{provider}/{model_id}" string used for registry matching."""
        return f"{self.provider}/{self.model_id}"


__all__ = [
    "JSONSchema",
    "SchemaFeature",
    "FeatureContext",
    "JSONSchemaTarget",
    "JSONSchemaIO",
    "ParsedModel",
]

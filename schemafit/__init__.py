"""SchemaFit: check JSON Schemas against AI provider structured-output limits.

Each AI provider's structured-output feature accepts its own subset of JSON
Schema. SchemaFit predicts whether a schema will be accepted:
- Provider registry resolving "provider/model-id" identifiers to rule sets
- Traversal engine visiting every sub-schema once, reporting every
  unsupported feature with its exact path
- Built-in rule sets for OpenAI, Anthropic and Google Gemini

Basic usage:
    >>> from schemafit import validate_schema
    >>> schema = {"oneOf": [{"type": "string"}, {"type": "number"}]}
    >>> result = validate_schema(schema, "openai/gpt-4o")
    >>> result.success
    False
    >>> result.issues[0].feature.value
    'oneOf'
"""

__version__ = "0.1.0"
__author__ = "SchemaFit Team"

# Version info
VERSION = (0, 1, 0)

# Core exports
from schemafit.assertion import ValidationResult, assert_schema, validate_schema
from schemafit.errors import (
    InvalidModelError,
    SchemaAssertionError,
    SchemaFitError,
    SchemaInputError,
    UnknownProviderError,
    ValidationIssue,
)
from schemafit.model import parse_model
from schemafit.registry import ProviderRegistry, provider_registry
from schemafit.rules import (
    CustomRule,
    CustomValidator,
    ProviderConstraints,
    ProviderRegistryEntry,
    ResolvedConstraints,
    SimpleRule,
)
from schemafit.types import FeatureContext, JSONSchemaIO, JSONSchemaTarget, ParsedModel, SchemaFeature
from schemafit.validation import ConstraintEngine, validate_schema_constraints

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "validate_schema",
    "assert_schema",
    "ValidationResult",
    "ValidationIssue",
    "SchemaFitError",
    "InvalidModelError",
    "SchemaInputError",
    "SchemaAssertionError",
    "UnknownProviderError",
    "parse_model",
    "ProviderRegistry",
    "provider_registry",
    "SimpleRule",
    "CustomRule",
    "CustomValidator",
    "ProviderConstraints",
    "ProviderRegistryEntry",
    "ResolvedConstraints",
    "SchemaFeature",
    "FeatureContext",
    "JSONSchemaTarget",
    "JSONSchemaIO",
    "ParsedModel",
    "ConstraintEngine",
    "validate_schema_constraints",
]

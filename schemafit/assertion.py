"""Public entry points: validate_schema and assert_schema.

This module coordinates identifier parsing, constraint resolution, schema
normalization and traversal:

    model ──parse_model──▶ ParsedModel ──registry.resolve──▶ ResolvedConstraints
    schema ──extract_json_schema──▶ JSON Schema ──ConstraintEngine──▶ issues

Usage:
    >>> schema = {
    ...     "type": "object",
    ...     "properties": {"name": {"type": "string"}},
    ...     "required": ["name"],
    ...     "additionalProperties": False,
    ... }
    >>> validate_schema(schema, "openai/gpt-4o").success
    True
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from schemafit.errors import SchemaAssertionError, ValidationIssue
from schemafit.model import ModelIdentifier, parse_model
from schemafit.registry import ProviderRegistry, provider_registry
from schemafit.rules import ProviderConstraints, ResolvedConstraints
from schemafit.schema import extract_json_schema
from schemafit.types import JSONSchema, JSONSchemaIO, JSONSchemaTarget
from schemafit.validation import ConstraintEngine


@dataclass
class ValidationResult:
    """Result of checking a schema against a model's constraints.

    Attributes:
        success: True when no issues were found
        provider: Provider the constraints were resolved for ("unknown" if none matched)
        model_id: Model identifier, as given
        json_schema: The JSON Schema document that was checked
        issues: Issues found, in traversal order (empty on success)
    """
    success: bool
    provider: str
    model_id: str
    json_schema: JSONSchema
    issues: List[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "success": self.success,
            "provider": self.provider,
            "modelId": self.model_id,
            "jsonSchema": self.json_schema,
        }
        if not self.success:
            result["issues"] = [issue.to_dict() for issue in self.issues]
        return result


def validate_schema(
    schema: Any,
    model: ModelIdentifier,
    target: Optional[Union[JSONSchemaTarget, str]] = None,
    io: Optional[Union[JSONSchemaIO, str]] = None,
    constraints: Optional[ProviderConstraints] = None,
    registry: Optional[ProviderRegistry] = None,
    check_schema: bool = False,
) -> ValidationResult:
    """Check a schema against a model's constraints without raising on issues.

    Args:
        schema: Model class with `model_json_schema`, or a raw JSON Schema
        model: "provider/model-id" string, mapping, or model-like object
        target: JSON Schema dialect; overrides the rule set's preferred target
        io: Conversion mode for model classes (default: output)
        constraints: Rule set to use instead of looking the model up
        registry: Registry to resolve against (default: provider_registry)
        check_schema: Also check the document against the target meta-schema

    Returns:
        ValidationResult with success flag and issues

    Raises:
        InvalidModelError: If the model identifier is malformed
        SchemaInputError: If the schema input is not recognized or invalid
    """
    parsed = parse_model(model)

    if constraints is not None:
        resolved = ResolvedConstraints.bind(constraints, parsed.model_id)
    else:
        resolved = (registry or provider_registry).resolve(parsed)

    json_schema_target = target if target is not None else resolved.json_schema_target
    json_schema = extract_json_schema(schema, json_schema_target, io, check=check_schema)

    issues = ConstraintEngine(resolved).traverse(json_schema)

    return ValidationResult(
        success=not issues,
        provider=resolved.provider,
        model_id=resolved.model_id,
        json_schema=json_schema,
        issues=issues,
    )


def assert_schema(
    schema: Any,
    model: ModelIdentifier,
    target: Optional[Union[JSONSchemaTarget, str]] = None,
    io: Optional[Union[JSONSchemaIO, str]] = None,
    constraints: Optional[ProviderConstraints] = None,
    registry: Optional[ProviderRegistry] = None,
    check_schema: bool = False,
) -> Any:
    """Assert a schema is usable with a model, returning the schema unchanged.

    Takes the same arguments as validate_schema; returns the `schema` input
    itself so it can be used inline.

    Raises:
        SchemaAssertionError: If the schema uses unsupported features
    """
    result = validate_schema(
        schema,
        model,
        target=target,
        io=io,
        constraints=constraints,
        registry=registry,
        check_schema=check_schema,
    )

    if not result.success:
        raise SchemaAssertionError(
            issues=result.issues,
            provider=result.provider,
            model_id=result.model_id,
            json_schema=result.json_schema,
        )

    return schema


__all__ = [
    "ValidationResult",
    "validate_schema",
    "assert_schema",
]

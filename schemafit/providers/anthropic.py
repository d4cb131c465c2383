"""Anthropic structured outputs rule set.

Based on: https://platform.claude.com/docs/en/build-with-claude/structured-outputs#json-schema-limitations

Anthropic supports a subset of JSON Schema:
- Supported: string, number, integer, boolean, object, array, null, enum, const, anyOf, allOf
- NOT supported: recursive schemas
- NOT supported: numerical constraints (minimum, maximum, multipleOf, ...)
- NOT supported: string length constraints (minLength, maxLength)
- NOT supported: maxItems, uniqueItems, contains; minItems only 0 or 1
- Required: `additionalProperties: false` on every object
- Enum: only primitive values
"""

from schemafit.providers.checks import (
    ADDITIONAL_PROPERTIES_NOT_FALSE,
    check_additional_properties_false,
    check_primitive_enum,
)
from schemafit.rules import CustomRule, CustomValidator, ProviderConstraints, SimpleRule
from schemafit.types import SchemaFeature

ANTHROPIC_CONSTRAINTS = ProviderConstraints(
    provider="anthropic",
    unsupported=[
        SimpleRule(feature=SchemaFeature.RECURSIVE, message="Recursive schemas are not supported"),
        # Numerical constraints
        SimpleRule(feature=SchemaFeature.MINIMUM, message="minimum constraint is not supported"),
        SimpleRule(feature=SchemaFeature.MAXIMUM, message="maximum constraint is not supported"),
        SimpleRule(feature=SchemaFeature.EXCLUSIVE_MINIMUM, message="exclusiveMinimum is not supported"),
        SimpleRule(feature=SchemaFeature.EXCLUSIVE_MAXIMUM, message="exclusiveMaximum is not supported"),
        SimpleRule(feature=SchemaFeature.MULTIPLE_OF, message="multipleOf is not supported"),
        # String constraints
        SimpleRule(feature=SchemaFeature.MIN_LENGTH, message="minLength constraint is not supported"),
        SimpleRule(feature=SchemaFeature.MAX_LENGTH, message="maxLength constraint is not supported"),
        # Array constraints
        SimpleRule(feature=SchemaFeature.MAX_ITEMS, message="maxItems constraint is not supported"),
        SimpleRule(feature=SchemaFeature.UNIQUE_ITEMS, message="uniqueItems is not supported"),
        SimpleRule(feature=SchemaFeature.CONTAINS, message="contains is not supported"),
        SimpleRule(
            feature=SchemaFeature.MIN_ITEMS,
            allowed_values=(0, 1),
            message="minItems only supports values 0 and 1",
        ),
        CustomRule(feature=SchemaFeature.ENUM, validate=check_primitive_enum),
    ],
    custom_validators=[
        CustomValidator(
            name=ADDITIONAL_PROPERTIES_NOT_FALSE,
            validate=check_additional_properties_false,
        ),
    ],
)

"""Google Gemini structured output rule set.

Based on: https://ai.google.dev/gemini-api/docs/structured-output#json_schema_support

Gemini (2.0+) supports a subset of JSON Schema:
- Supported: anyOf, enum, format, properties, required, additionalProperties
- Supported: items, prefixItems, minItems, maxItems, minimum, maximum
- NOT supported: oneOf, allOf, not, if/then/else
- NOT supported: pattern, minLength, maxLength
- NOT supported: exclusiveMinimum, exclusiveMaximum, multipleOf
- NOT supported: recursive schemas
- NOT supported: dependentRequired, dependentSchemas, patternProperties, propertyNames
- NOT supported: uniqueItems, contains, additionalItems
- Enum: only primitive values
"""

from schemafit.providers.checks import check_primitive_enum
from schemafit.rules import CustomRule, ProviderConstraints, SimpleRule
from schemafit.types import SchemaFeature

GOOGLE_CONSTRAINTS = ProviderConstraints(
    provider="google",
    unsupported=[
        # Composition keywords
        SimpleRule(feature=SchemaFeature.ONE_OF, message="oneOf is not supported (use anyOf instead)"),
        SimpleRule(feature=SchemaFeature.ALL_OF, message="allOf is not supported"),
        SimpleRule(feature=SchemaFeature.NOT, message="not is not supported"),
        SimpleRule(feature=SchemaFeature.IF, message="if/then/else conditionals are not supported"),
        SimpleRule(feature=SchemaFeature.RECURSIVE, message="Recursive schemas are not supported"),
        # String constraints
        SimpleRule(feature=SchemaFeature.PATTERN, message="pattern constraint is not supported"),
        SimpleRule(feature=SchemaFeature.MIN_LENGTH, message="minLength constraint is not supported"),
        SimpleRule(feature=SchemaFeature.MAX_LENGTH, message="maxLength constraint is not supported"),
        # Numerical constraints
        SimpleRule(
            feature=SchemaFeature.EXCLUSIVE_MINIMUM,
            message="exclusiveMinimum is not supported (use minimum instead)",
        ),
        SimpleRule(
            feature=SchemaFeature.EXCLUSIVE_MAXIMUM,
            message="exclusiveMaximum is not supported (use maximum instead)",
        ),
        SimpleRule(feature=SchemaFeature.MULTIPLE_OF, message="multipleOf is not supported"),
        # Object constraints
        SimpleRule(feature=SchemaFeature.DEPENDENT_REQUIRED, message="dependentRequired is not supported"),
        SimpleRule(feature=SchemaFeature.DEPENDENT_SCHEMAS, message="dependentSchemas is not supported"),
        SimpleRule(feature=SchemaFeature.PATTERN_PROPERTIES, message="patternProperties is not supported"),
        SimpleRule(feature=SchemaFeature.PROPERTY_NAMES, message="propertyNames is not supported"),
        # Array constraints
        SimpleRule(feature=SchemaFeature.UNIQUE_ITEMS, message="uniqueItems is not supported"),
        SimpleRule(feature=SchemaFeature.CONTAINS, message="contains is not supported"),
        SimpleRule(feature=SchemaFeature.ADDITIONAL_ITEMS, message="additionalItems is not supported"),
        CustomRule(feature=SchemaFeature.ENUM, validate=check_primitive_enum),
    ],
)

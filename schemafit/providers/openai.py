"""OpenAI structured outputs rule set.

Based on: https://platform.openai.com/docs/guides/structured-outputs#supported-schemas

OpenAI supports a subset of JSON Schema:
- Supported: string, number, integer, boolean, object, array, enum, anyOf (within properties)
- NOT supported at root level: anyOf
- NOT supported anywhere: oneOf, allOf, not, if/then/else, dependentRequired,
  dependentSchemas, patternProperties
- Required: every property listed in `required`
- Required: `additionalProperties: false` on every object
- Enum: only primitive values
"""

from schemafit.providers.checks import (
    ADDITIONAL_PROPERTIES_NOT_FALSE,
    check_additional_properties_false,
    check_all_properties_required,
    check_primitive_enum,
)
from schemafit.rules import CustomRule, CustomValidator, ProviderConstraints, SimpleRule
from schemafit.types import FeatureContext, SchemaFeature

OPENAI_CONSTRAINTS = ProviderConstraints(
    provider="openai",
    unsupported=[
        SimpleRule(
            feature=SchemaFeature.ROOT_ANY_OF,
            context=FeatureContext.ROOT,
            message="anyOf is not supported at root level",
        ),
        SimpleRule(
            feature=SchemaFeature.ONE_OF,
            message="oneOf is not supported (use anyOf within properties instead)",
        ),
        SimpleRule(feature=SchemaFeature.ALL_OF, message="allOf is not supported"),
        SimpleRule(feature=SchemaFeature.NOT, message="not is not supported"),
        SimpleRule(
            feature=SchemaFeature.DEPENDENT_REQUIRED,
            message="dependentRequired is not supported",
        ),
        SimpleRule(
            feature=SchemaFeature.DEPENDENT_SCHEMAS,
            message="dependentSchemas is not supported",
        ),
        SimpleRule(feature=SchemaFeature.IF, message="if/then/else conditionals are not supported"),
        SimpleRule(
            feature=SchemaFeature.PATTERN_PROPERTIES,
            message="patternProperties is not supported",
        ),
        CustomRule(feature=SchemaFeature.OPTIONAL_PROPERTIES, validate=check_all_properties_required),
        CustomRule(feature=SchemaFeature.ENUM, validate=check_primitive_enum),
    ],
    custom_validators=[
        CustomValidator(
            name=ADDITIONAL_PROPERTIES_NOT_FALSE,
            validate=check_additional_properties_false,
        ),
    ],
)

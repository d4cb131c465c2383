"""Unit tests for rule records and issue types.

Tests cover:
- SimpleRule context matching and allow-lists
- ProviderConstraints / ResolvedConstraints construction
- ValidationIssue serialization
- Exception messages and hierarchy
"""

from collections.abc import Hashable
from dataclasses import FrozenInstanceError

import pytest

from schemafit.errors import (
    InvalidModelError,
    SchemaAssertionError,
    SchemaFitError,
    SchemaInputError,
    UnknownProviderError,
    ValidationIssue,
)
from schemafit.rules import (
    MISSING,
    CustomRule,
    CustomValidator,
    ProviderConstraints,
    ResolvedConstraints,
    SimpleRule,
)
from schemafit.types import FeatureContext, JSONSchemaTarget, SchemaFeature


class TestSimpleRule:
    """Test SimpleRule matching."""

    def test_unrestricted_rule_applies_everywhere(self):
        """Should apply at root, nested and context-free checks."""
        rule = SimpleRule(feature=SchemaFeature.ONE_OF)
        assert rule.applies_in(FeatureContext.ROOT)
        assert rule.applies_in(FeatureContext.NESTED)
        assert rule.applies_in(None)

    def test_any_context_applies_everywhere(self):
        """Should treat ANY like an unrestricted rule."""
        rule = SimpleRule(feature=SchemaFeature.ONE_OF, context=FeatureContext.ANY)
        assert rule.applies_in(FeatureContext.ROOT)
        assert rule.applies_in(FeatureContext.NESTED)

    def test_root_rule(self):
        """Should apply a root rule only at the root."""
        rule = SimpleRule(feature=SchemaFeature.ALL_OF, context=FeatureContext.ROOT)
        assert rule.applies_in(FeatureContext.ROOT)
        assert not rule.applies_in(FeatureContext.NESTED)

    def test_context_free_check_matches_restricted_rule(self):
        """Should match a context-bound rule when the check carries no context."""
        rule = SimpleRule(feature=SchemaFeature.IF, context=FeatureContext.NESTED)
        assert rule.applies_in(None)

    def test_without_allow_list_nothing_is_permitted(self):
        """Should never exempt a value when no allow-list is set."""
        rule = SimpleRule(feature=SchemaFeature.MINIMUM)
        assert not rule.permits(0)
        assert not rule.permits(MISSING)

    def test_allow_list(self):
        """Should exempt only listed values."""
        rule = SimpleRule(feature=SchemaFeature.MIN_ITEMS, allowed_values=[0, 1])
        assert rule.allowed_values == (0, 1)
        assert rule.permits(0)
        assert rule.permits(1)
        assert not rule.permits(2)
        assert not rule.permits(MISSING)

    def test_allow_list_keeps_booleans_distinct(self):
        """Should not treat True/False as 1/0."""
        numeric = SimpleRule(feature=SchemaFeature.MIN_ITEMS, allowed_values=(0, 1))
        assert not numeric.permits(True)
        assert not numeric.permits(False)

        boolean = SimpleRule(feature=SchemaFeature.UNIQUE_ITEMS, allowed_values=(False,))
        assert boolean.permits(False)
        assert not boolean.permits(0)

    def test_float_equal_to_int(self):
        """Should compare numbers by value."""
        rule = SimpleRule(feature=SchemaFeature.MIN_ITEMS, allowed_values=(1,))
        assert rule.permits(1.0)

    def test_rules_are_immutable(self):
        """Should reject attribute assignment."""
        rule = SimpleRule(feature=SchemaFeature.ONE_OF)
        with pytest.raises(FrozenInstanceError):
            rule.message = "changed"


class TestCustomRule:
    """Test CustomRule context matching."""

    def test_nested_rule(self):
        """Should apply a nested rule only below the root."""
        rule = CustomRule(feature="x", validate=lambda schema, path, is_root: [], context=FeatureContext.NESTED)
        assert rule.applies_in(FeatureContext.NESTED)
        assert not rule.applies_in(FeatureContext.ROOT)

    def test_unrestricted_rule(self):
        """Should apply an unrestricted rule everywhere."""
        rule = CustomRule(feature="x", validate=lambda schema, path, is_root: [])
        assert rule.applies_in(FeatureContext.ROOT)
        assert rule.applies_in(FeatureContext.NESTED)


class TestProviderConstraints:
    """Test rule set construction and binding."""

    def test_lists_become_tuples(self):
        """Should store rules and validators as tuples."""
        validator = CustomValidator(name="noop", validate=lambda schema, path, is_root: [])
        constraints = ProviderConstraints(
            provider="acme",
            unsupported=[SimpleRule(feature=SchemaFeature.ONE_OF)],
            custom_validators=[validator],
        )
        assert isinstance(constraints.unsupported, tuple)
        assert constraints.custom_validators == (validator,)

    def test_defaults(self):
        """Should default to an empty rule set with no target."""
        constraints = ProviderConstraints(provider="acme")
        assert constraints.unsupported == ()
        assert constraints.custom_validators == ()
        assert constraints.json_schema_target is None

    def test_bind(self):
        """Should carry the rule set's provider and the given model id."""
        constraints = ProviderConstraints(
            provider="acme",
            unsupported=[SimpleRule(feature=SchemaFeature.ONE_OF)],
            json_schema_target=JSONSchemaTarget.DRAFT_2020_12,
        )
        resolved = ResolvedConstraints.bind(constraints, "model-1")

        assert resolved.provider == "acme"
        assert resolved.model_id == "model-1"
        assert resolved.unsupported == constraints.unsupported
        assert resolved.json_schema_target == JSONSchemaTarget.DRAFT_2020_12

    def test_permissive(self):
        """Should flag nothing."""
        resolved = ResolvedConstraints.permissive("unknown", "m")
        assert resolved.unsupported == ()
        assert resolved.custom_validators == ()


class TestValidationIssue:
    """Test ValidationIssue helpers."""

    def test_dotted_path(self):
        """Should join segments with dots, empty at the root."""
        assert ValidationIssue(path=["properties", "a"], feature="oneOf", message="m").dotted_path == "properties.a"
        assert ValidationIssue(path=[], feature="oneOf", message="m").dotted_path == ""

    def test_to_dict_uses_feature_value(self):
        """Should serialize features as plain strings."""
        issue = ValidationIssue(path=["items"], feature=SchemaFeature.MIN_ITEMS, message="no")
        assert issue.to_dict() == {"path": ["items"], "feature": "minItems", "message": "no"}

    def test_from_dict_restores_known_feature(self):
        """Should map known feature names back to SchemaFeature."""
        issue = ValidationIssue.from_dict({"path": [], "feature": "oneOf", "message": "no"})
        assert issue.feature is SchemaFeature.ONE_OF

    def test_from_dict_keeps_custom_feature(self):
        """Should keep provider-specific feature names as strings."""
        issue = ValidationIssue.from_dict(
            {"path": ["properties", "a"], "feature": "additionalPropertiesNotFalse", "message": "no"}
        )
        assert issue.feature == "additionalPropertiesNotFalse"
        assert not isinstance(issue.feature, SchemaFeature)

    def test_compares_by_value_and_is_unhashable(self):
        """Should compare by value and declare itself unhashable like its list path."""
        first = ValidationIssue(path=["properties", "a"], feature=SchemaFeature.ONE_OF, message="m")
        second = ValidationIssue(path=["properties", "a"], feature="oneOf", message="m")

        assert first == second
        assert first in [second]
        assert not isinstance(first, Hashable)
        with pytest.raises(TypeError):
            {first}


class TestErrors:
    """Test exception types."""

    def test_hierarchy(self):
        """Should derive every error from SchemaFitError."""
        for error_class in (UnknownProviderError, InvalidModelError, SchemaInputError, SchemaAssertionError):
            assert issubclass(error_class, SchemaFitError)
        assert issubclass(InvalidModelError, ValueError)

    def test_unknown_provider_message(self):
        """Should name the bad alias and the valid ones."""
        error = UnknownProviderError("mistral", ["anthropic", "google", "openai"])
        assert error.provider == "mistral"
        assert str(error) == 'Unknown provider "mistral". Valid providers: anthropic, google, openai'

    def test_assertion_error_message(self):
        """Should list each feature with its dotted path."""
        issues = [
            ValidationIssue(path=[], feature=SchemaFeature.ROOT_ANY_OF, message="m"),
            ValidationIssue(path=["properties", "animal"], feature=SchemaFeature.ONE_OF, message="m"),
            ValidationIssue(path=["properties", "animal"], feature="additionalPropertiesNotFalse", message="m"),
        ]
        error = SchemaAssertionError(issues=issues, provider="openai", model_id="gpt-4o", json_schema={})

        assert str(error) == (
            "The schema contains unsupported components for openai/gpt-4o: "
            'rootAnyOf, oneOf at "properties.animal", '
            'additionalPropertiesNotFalse at "properties.animal"'
        )
        assert error.issues == issues

"""Integration tests for validate_schema and assert_schema.

These tests drive the full pipeline: identifier parsing, registry
resolution, schema normalization and traversal.
"""

import re
import subprocess
import sys

import pytest
from structlog.testing import capture_logs

from schemafit import (
    InvalidModelError,
    ProviderConstraints,
    ProviderRegistry,
    SchemaAssertionError,
    SchemaFeature,
    SchemaInputError,
    SimpleRule,
    assert_schema,
    validate_schema,
)
from schemafit.providers import GOOGLE_CONSTRAINTS

PERSON_SCHEMA = {
    "type": "object",
    "properties": {"name": {"type": "string"}, "age": {"type": "number"}},
    "required": ["name", "age"],
    "additionalProperties": False,
}

ANIMAL_SCHEMA = {
    "type": "object",
    "properties": {
        "animal": {
            "oneOf": [
                {
                    "type": "object",
                    "properties": {"bark": {"type": "boolean"}},
                    "required": ["bark"],
                    "additionalProperties": False,
                },
                {
                    "type": "object",
                    "properties": {"meow": {"type": "boolean"}},
                    "required": ["meow"],
                    "additionalProperties": False,
                },
            ]
        }
    },
    "required": ["animal"],
    "additionalProperties": False,
}


class TestValidateSchema:
    """Test validate_schema end to end."""

    def test_compliant_schema(self):
        """Should succeed with no issues."""
        result = validate_schema(PERSON_SCHEMA, "openai/gpt-4o")

        assert result.success is True
        assert result.provider == "openai"
        assert result.model_id == "gpt-4o"
        assert result.json_schema is PERSON_SCHEMA
        assert result.issues == []

    def test_root_one_of(self):
        """Should report a root oneOf at the empty path."""
        result = validate_schema({"oneOf": [{"type": "string"}, {"type": "number"}]}, "openai/gpt-4o")

        assert result.success is False
        assert len(result.issues) == 1
        assert result.issues[0].path == []
        assert result.issues[0].feature == SchemaFeature.ONE_OF

    def test_nested_one_of(self):
        """Should report a nested oneOf at its property path."""
        result = validate_schema(ANIMAL_SCHEMA, "openai/gpt-4o")

        assert result.success is False
        assert [(issue.path, issue.feature) for issue in result.issues] == [
            (["properties", "animal"], SchemaFeature.ONE_OF)
        ]

    def test_same_schema_differs_by_provider(self):
        """Should judge the same schema by each provider's rules."""
        schema = {"anyOf": [{"type": "string"}, {"type": "number"}]}

        assert validate_schema(schema, "openai/gpt-4o").success is False
        assert validate_schema(schema, "anthropic/claude-sonnet-4-5").success is True
        assert validate_schema(schema, "google/gemini-2.0-flash").success is True

    def test_model_object(self):
        """Should accept a mapping identifier."""
        result = validate_schema(PERSON_SCHEMA, {"provider": "Anthropic", "modelId": "claude-opus-4-1"})
        assert result.provider == "anthropic"
        assert result.model_id == "claude-opus-4-1"

    def test_unknown_model_passes_with_warning(self):
        """Should accept any schema for unknown models and warn."""
        with capture_logs() as logs:
            result = validate_schema({"oneOf": [{"type": "string"}]}, "mistral/mistral-large")

        assert result.success is True
        assert result.provider == "unknown"
        assert result.model_id == "mistral-large"
        assert "unknown_model" in [log["event"] for log in logs]

    def test_explicit_constraints_bypass_registry(self):
        """Should use given constraints and report their provider."""
        result = validate_schema({"type": "string", "pattern": "^a"}, "custom/model-x", constraints=GOOGLE_CONSTRAINTS)

        assert result.provider == "google"
        assert result.model_id == "model-x"
        assert [issue.feature for issue in result.issues] == [SchemaFeature.PATTERN]

    def test_custom_registry(self):
        """Should resolve against the given registry."""
        registry = ProviderRegistry()
        registry.register(
            re.compile(r"^acme/"),
            ProviderConstraints(provider="acme", unsupported=[SimpleRule(feature=SchemaFeature.FORMAT)]),
        )

        result = validate_schema({"type": "string", "format": "email"}, "acme/m1", registry=registry)

        assert result.provider == "acme"
        assert [issue.feature for issue in result.issues] == [SchemaFeature.FORMAT]
        # The default registry does not know acme
        assert validate_schema({"type": "string", "format": "email"}, "acme/m1").provider == "unknown"

    def test_invalid_model(self):
        """Should raise InvalidModelError before checking anything."""
        with pytest.raises(InvalidModelError):
            validate_schema(PERSON_SCHEMA, "gpt-4o")

    def test_invalid_schema_input(self):
        """Should raise SchemaInputError for non-schema input."""
        with pytest.raises(SchemaInputError):
            validate_schema("not a schema", "openai/gpt-4o")

    def test_check_schema(self):
        """Should run the meta-schema check when asked."""
        with pytest.raises(SchemaInputError):
            validate_schema({"type": 12}, "openai/gpt-4o", check_schema=True)

    def test_model_class_output_mode(self):
        """Should convert model classes in output mode by default."""

        class Event:
            @classmethod
            def model_json_schema(cls, mode="validation"):
                required = ["title", "tags"] if mode == "serialization" else ["title"]
                return {
                    "type": "object",
                    "properties": {"title": {"type": "string"}, "tags": {"type": "array", "items": {"type": "string"}}},
                    "required": required,
                    "additionalProperties": False,
                }

        assert validate_schema(Event, "openai/gpt-4o").success is True

        result = validate_schema(Event, "openai/gpt-4o", io="input")
        assert [issue.feature for issue in result.issues] == [SchemaFeature.OPTIONAL_PROPERTIES]

    def test_to_dict(self):
        """Should serialize with camelCase keys, issues only on failure."""
        success = validate_schema(PERSON_SCHEMA, "openai/gpt-4o").to_dict()
        assert success == {
            "success": True,
            "provider": "openai",
            "modelId": "gpt-4o",
            "jsonSchema": PERSON_SCHEMA,
        }

        failure = validate_schema(ANIMAL_SCHEMA, "openai/gpt-4o").to_dict()
        assert failure["issues"] == [
            {
                "path": ["properties", "animal"],
                "feature": "oneOf",
                "message": "oneOf is not supported (use anyOf within properties instead)",
            }
        ]


class TestAssertSchema:
    """Test assert_schema end to end."""

    def test_returns_input(self):
        """Should return the schema input itself on success."""
        assert assert_schema(PERSON_SCHEMA, "openai/gpt-4o") is PERSON_SCHEMA

    def test_raises_with_issues(self):
        """Should raise SchemaAssertionError carrying every issue."""
        with pytest.raises(SchemaAssertionError) as exc_info:
            assert_schema(ANIMAL_SCHEMA, "openai/gpt-4o")

        error = exc_info.value
        assert error.provider == "openai"
        assert error.model_id == "gpt-4o"
        assert error.json_schema is ANIMAL_SCHEMA
        assert len(error.issues) == 1
        assert str(error) == (
            'The schema contains unsupported components for openai/gpt-4o: oneOf at "properties.animal"'
        )

    def test_root_issue_message(self):
        """Should omit the location for root-level issues."""
        with pytest.raises(SchemaAssertionError) as exc_info:
            assert_schema({"anyOf": [{"type": "string"}]}, "openai.responses/gpt-4.1")

        assert str(exc_info.value) == (
            "The schema contains unsupported components for openai/gpt-4.1: rootAnyOf"
        )

    def test_lists_every_issue(self):
        """Should report all issues, not just the first."""
        schema = {
            "type": "object",
            "properties": {
                "count": {"type": "integer", "minimum": 1},
                "label": {"type": "string", "maxLength": 20},
            },
            "additionalProperties": False,
        }
        with pytest.raises(SchemaAssertionError) as exc_info:
            assert_schema(schema, "anthropic/claude-sonnet-4-5")

        assert [issue.feature for issue in exc_info.value.issues] == [
            SchemaFeature.MINIMUM,
            SchemaFeature.MAX_LENGTH,
        ]

    def test_constraints_override(self):
        """Should accept explicit constraints."""
        schema = {"type": "integer", "minimum": 1}
        assert assert_schema(schema, "anthropic/claude-sonnet-4-5", constraints=GOOGLE_CONSTRAINTS) is schema


class TestOutputStreams:
    """Test that the library writes nothing to stdout on its own."""

    def test_import_is_silent(self):
        """Should not print anything when the package is imported."""
        completed = subprocess.run(
            [sys.executable, "-c", "import schemafit"],
            capture_output=True,
            text=True,
            check=True,
        )
        assert completed.stdout == ""

    def test_validation_of_known_model_is_silent(self, capsys):
        """Should not print anything while validating for a known model."""
        validate_schema(PERSON_SCHEMA, "openai/gpt-4o")
        validate_schema(ANIMAL_SCHEMA, "anthropic/claude-sonnet-4-5")

        assert capsys.readouterr().out == ""

    def test_builtin_registry_is_silent(self, capsys):
        """Should not print anything while loading the built-in patterns."""
        with capture_logs() as logs:
            ProviderRegistry.with_builtins()

        assert logs == []
        assert capsys.readouterr().out == ""

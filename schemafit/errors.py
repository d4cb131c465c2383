"""Issue records and exception types for SchemaFit.

Every rule mismatch found while walking a schema becomes a ValidationIssue;
issues are findings, not faults, and travel back to the caller in a list.
Exceptions are reserved for configuration mistakes (an unknown provider
alias), malformed input (a bad model identifier or schema object) and the
fail-fast wrapper `assert_schema`.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Union

from schemafit.types import JSONSchema, SchemaFeature


@dataclass
class ValidationIssue:
    """A single unsupported feature found in a schema.

    Attributes:
        path: Path segments from the document root to the offending node
        feature: The flagged feature; built-in checks use SchemaFeature,
            provider-specific validators may use any string
        message: Human-readable description

    Examples:
        >>> issue = ValidationIssue(
        ...     path=["properties", "animal"],
        ...     feature=SchemaFeature.ONE_OF,
        ...     message="oneOf is not supported",
        ... )
        >>> issue.feature == "oneOf"
        True
        >>> issue.dotted_path
        'properties.animal'
    """
    path: List[str]
    feature: Union[SchemaFeature, str]
    message: str

    @property
    def dotted_path(self) -> str:
        """Path joined with dots; empty string for the root."""
        return ".".join(self.path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "path": list(self.path),
            "feature": self.feature.value if isinstance(self.feature, SchemaFeature) else self.feature,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationIssue":
        """Create ValidationIssue from dict."""
        feature = data["feature"]
        try:
            feature = SchemaFeature(feature)
        except ValueError:
            # Provider-specific feature name
            pass
        return cls(
            path=list(data["path"]),
            feature=feature,
            message=data["message"],
        )


class SchemaFitError(Exception):
    """Base class for all SchemaFit exceptions."""


class UnknownProviderError(SchemaFitError, ValueError):
    """Raised when registering an alias that names no built-in provider.

    Attributes:
        provider: The alias that was not recognized
        valid_providers: Names of the built-in providers
    """

    def __init__(self, provider: str, valid_providers: Sequence[str]):
        self.provider = provider
        self.valid_providers = list(valid_providers)
        super().__init__(
            f'Unknown provider "{provider}". '
            f"Valid providers: {', '.join(self.valid_providers)}"
        )


class InvalidModelError(SchemaFitError, ValueError):
    """Raised when a model identifier cannot be parsed."""


class SchemaInputError(SchemaFitError, ValueError):
    """Raised when a schema input cannot be turned into a JSON Schema document."""


class SchemaAssertionError(SchemaFitError):
    """Raised by assert_schema when a schema uses unsupported features.

    Attributes:
        issues: Every issue found, in traversal order
        provider: Provider the constraints were resolved for
        model_id: Model the constraints were resolved for
        json_schema: The JSON Schema document that was checked
    """

    def __init__(
        self,
        issues: List[ValidationIssue],
        provider: str,
        model_id: str,
        json_schema: JSONSchema,
    ):
        self.issues = issues
        self.provider = provider
        self.model_id = model_id
        self.json_schema = json_schema

        components = []
        for issue in issues:
            feature = issue.feature.value if isinstance(issue.feature, SchemaFeature) else issue.feature
            location = f' at "{issue.dotted_path}"' if issue.path else ""
            components.append(f"{feature}{location}")

        super().__init__(
            f"The schema contains unsupported components for {provider}/{model_id}: "
            f"{', '.join(components)}"
        )


__all__ = [
    "ValidationIssue",
    "SchemaFitError",
    "UnknownProviderError",
    "InvalidModelError",
    "SchemaInputError",
    "SchemaAssertionError",
]

"""Constraint rule taxonomy for provider rule sets.

A provider's accepted JSON Schema subset is expressed as data:
- SimpleRule: a feature is unsupported everywhere, only at the root, only
  below the root, or unless its value is in an allow-list
- CustomRule: an arbitrary structural predicate evaluated per node
- CustomValidator: a named check run on every node regardless of rules

ProviderConstraints groups these into a rule set; ResolvedConstraints binds a
rule set to the provider/model pair it was resolved for.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Union

from schemafit.errors import ValidationIssue
from schemafit.types import FeatureContext, JSONSchema, JSONSchemaTarget, SchemaFeature

# (node, path, is_root) -> issues
NodeCheck = Callable[[JSONSchema, List[str], bool], List[ValidationIssue]]

AllowedValue = Union[str, int, float, bool, None]

ProviderPattern = Union[str, re.Pattern]


class _Missing:
    """Marker for a check that has no concrete value to compare."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def _same_literal(allowed: AllowedValue, value: Any) -> bool:
    # True == 1 in Python; an allow-list of [0, 1] must not accept booleans
    if isinstance(allowed, bool) or isinstance(value, bool):
        return allowed is value
    return allowed == value


@dataclass(frozen=True)
class SimpleRule:
    """Marks a feature as unsupported, optionally restricted by context or value.

    Attributes:
        feature: The feature this rule forbids
        context: Where the rule applies; None or ANY means everywhere
        message: Optional message used for issues raised by this rule
        allowed_values: If set, the feature is only a violation when its
            concrete value is not in this list

    Examples:
        >>> rule = SimpleRule(feature=SchemaFeature.MIN_ITEMS, allowed_values=(0, 1))
        >>> rule.permits(1)
        True
        >>> rule.permits(2)
        False
        >>> SimpleRule(feature=SchemaFeature.ONE_OF).permits(MISSING)
        False
    """
    feature: Union[SchemaFeature, str]
    context: Optional[FeatureContext] = None
    message: Optional[str] = None
    allowed_values: Optional[Tuple[AllowedValue, ...]] = None

    def __post_init__(self) -> None:
        if self.allowed_values is not None:
            object.__setattr__(self, "allowed_values", tuple(self.allowed_values))

    def applies_in(self, context: Optional[FeatureContext]) -> bool:
        """Whether this rule applies at the given position.

        A check made without a context (context-insensitive) matches every
        rule for the feature.
        """
        if self.context is None or self.context == FeatureContext.ANY:
            return True
        if context is None:
            return True
        return self.context == context

    def permits(self, value: Any = MISSING) -> bool:
        """Whether a concrete value is exempted by the allow-list."""
        if not self.allowed_values or value is MISSING:
            return False
        return any(_same_literal(allowed, value) for allowed in self.allowed_values)


@dataclass(frozen=True)
class CustomRule:
    """Unsupported feature detected by a procedural check.

    Used where the constraint is not "keyword present", e.g. "every declared
    property is listed in required".

    Attributes:
        feature: The feature this rule reports on
        validate: Check called with (node, path, is_root)
        context: Where the rule applies; None or ANY means everywhere
    """
    feature: Union[SchemaFeature, str]
    validate: NodeCheck
    context: Optional[FeatureContext] = None

    def applies_in(self, context: Optional[FeatureContext]) -> bool:
        """Whether this rule applies at the given position."""
        if self.context is None or self.context == FeatureContext.ANY:
            return True
        return self.context == context


ConstraintRule = Union[SimpleRule, CustomRule]


@dataclass(frozen=True)
class CustomValidator:
    """Named check run on every visited node, independent of the rule list."""
    name: str
    validate: NodeCheck


@dataclass(frozen=True)
class ProviderConstraints:
    """A provider's rule set.

    Attributes:
        provider: Provider name reported on resolved constraints
        unsupported: Rules describing unsupported features, in order
        custom_validators: Checks run on every node, in order
        json_schema_target: Preferred dialect when converting schema objects

    Examples:
        >>> constraints = ProviderConstraints(
        ...     provider="acme",
        ...     unsupported=[SimpleRule(feature=SchemaFeature.ONE_OF)],
        ... )
        >>> len(constraints.unsupported)
        1
    """
    provider: str
    unsupported: Tuple[ConstraintRule, ...] = ()
    custom_validators: Tuple[CustomValidator, ...] = ()
    json_schema_target: Optional[JSONSchemaTarget] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "unsupported", tuple(self.unsupported))
        object.__setattr__(self, "custom_validators", tuple(self.custom_validators))


@dataclass(frozen=True)
class ResolvedConstraints:
    """A rule set bound to the provider/model pair it was resolved for."""
    provider: str
    model_id: str
    unsupported: Tuple[ConstraintRule, ...] = ()
    custom_validators: Tuple[CustomValidator, ...] = ()
    json_schema_target: Optional[JSONSchemaTarget] = None

    @classmethod
    def bind(cls, constraints: ProviderConstraints, model_id: str) -> "ResolvedConstraints":
        """Bind a rule set to a model; the provider name comes from the rule set."""
        return cls(
            provider=constraints.provider,
            model_id=model_id,
            unsupported=constraints.unsupported,
            custom_validators=constraints.custom_validators,
            json_schema_target=constraints.json_schema_target,
        )

    @classmethod
    def permissive(cls, provider: str, model_id: str) -> "ResolvedConstraints":
        """Constraints that flag nothing."""
        return cls(provider=provider, model_id=model_id)


@dataclass(frozen=True)
class ProviderRegistryEntry:
    """Registry entry mapping a pattern to a rule set.

    A str pattern matches the canonical identifier exactly; a compiled
    regular expression is searched against it.
    """
    pattern: ProviderPattern
    constraints: ProviderConstraints


__all__ = [
    "MISSING",
    "NodeCheck",
    "AllowedValue",
    "ProviderPattern",
    "SimpleRule",
    "CustomRule",
    "ConstraintRule",
    "CustomValidator",
    "ProviderConstraints",
    "ResolvedConstraints",
    "ProviderRegistryEntry",
]

"""Schema traversal engine for SchemaFit.

This module provides a ConstraintEngine that walks a JSON Schema document
depth-first and evaluates a provider's resolved constraints against every
reachable sub-schema, producing an ordered list of ValidationIssue records.

Each node is visited at most once per traversal (node identity, not
structural equality), so self-referencing documents terminate. Root
detection is structural: only the document handed to `traverse` is the
root; every descent, including into a top-level `allOf`, is nested.

The engine does not resolve `$ref`, does not validate data against the
schema, and never stops early: the full issue list is always returned.
"""

from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional, Set, Tuple

from typing_extensions import assert_never

from schemafit.errors import ValidationIssue
from schemafit.rules import MISSING, CustomRule, ResolvedConstraints, SimpleRule
from schemafit.types import FeatureContext, JSONSchema, SchemaFeature

NUMERIC_KEYWORDS: Tuple[SchemaFeature, ...] = (
    SchemaFeature.MINIMUM,
    SchemaFeature.MAXIMUM,
    SchemaFeature.EXCLUSIVE_MINIMUM,
    SchemaFeature.EXCLUSIVE_MAXIMUM,
    SchemaFeature.MULTIPLE_OF,
)

STRING_KEYWORDS: Tuple[SchemaFeature, ...] = (
    SchemaFeature.MIN_LENGTH,
    SchemaFeature.MAX_LENGTH,
    SchemaFeature.PATTERN,
    SchemaFeature.FORMAT,
)

COMPOSITION_KEYWORDS: Tuple[str, ...] = ("allOf", "anyOf", "oneOf")

CONDITIONAL_KEYWORDS: Tuple[str, ...] = ("if", "then", "else")

DEFAULT_MESSAGES = {
    SchemaFeature.ROOT_ANY_OF: "anyOf is not supported at root level",
    SchemaFeature.ROOT_ONE_OF: "oneOf is not supported at root level",
    SchemaFeature.IF: "if/then/else conditionals are not supported",
    SchemaFeature.RECURSIVE: "Recursive schemas are not supported",
}


@dataclass(frozen=True)
class TraversalContext:
    """Per-node traversal state.

    `path` and `is_root` are copied for every descent; `issues` and `visited`
    are shared by the whole traversal.
    """
    path: Tuple[str, ...]
    is_root: bool
    issues: List[ValidationIssue]
    visited: Set[int]

    @property
    def feature_context(self) -> FeatureContext:
        return FeatureContext.ROOT if self.is_root else FeatureContext.NESTED

    def descend(self, *segments: str) -> "TraversalContext":
        return replace(self, path=self.path + segments, is_root=False)


def _is_node(value: Any) -> bool:
    return isinstance(value, Mapping)


def _has_type(schema: JSONSchema, type_name: str) -> bool:
    declared = schema.get("type")
    if isinstance(declared, (list, tuple)):
        return type_name in declared
    return declared == type_name


class ConstraintEngine:
    """Evaluates resolved provider constraints against JSON Schema documents.

    Attributes:
        constraints: The resolved rule set applied to every traversal

    Examples:
        >>> from schemafit.rules import ProviderConstraints
        >>> constraints = ResolvedConstraints.bind(
        ...     ProviderConstraints(provider="acme", unsupported=[SimpleRule(feature=SchemaFeature.ONE_OF)]),
        ...     model_id="m1",
        ... )
        >>> engine = ConstraintEngine(constraints)
        >>> issues = engine.traverse({"oneOf": [{"type": "string"}, {"type": "number"}]})
        >>> [(issue.path, issue.feature.value) for issue in issues]
        [([], 'oneOf')]
    """

    def __init__(self, constraints: ResolvedConstraints) -> None:
        self.constraints = constraints
        self._simple_rules, self._custom_rules = self._split_rules(constraints)

    @staticmethod
    def _split_rules(
        constraints: ResolvedConstraints,
    ) -> Tuple[List[SimpleRule], List[CustomRule]]:
        """Partition the rule list by variant, preserving order."""
        simple_rules: List[SimpleRule] = []
        custom_rules: List[CustomRule] = []
        for rule in constraints.unsupported:
            if isinstance(rule, SimpleRule):
                simple_rules.append(rule)
            elif isinstance(rule, CustomRule):
                custom_rules.append(rule)
            else:
                assert_never(rule)
        return simple_rules, custom_rules

    def traverse(self, schema: JSONSchema) -> List[ValidationIssue]:
        """Walk the schema and return every issue found, in traversal order.

        Args:
            schema: A JSON Schema document; it is never modified

        Returns:
            List of ValidationIssue (empty if the schema is compliant)
        """
        ctx = TraversalContext(path=(), is_root=True, issues=[], visited=set())
        self._visit(schema, ctx)
        return ctx.issues

    # ── Rule lookup ──

    def _find_violation(
        self,
        feature: SchemaFeature,
        context: Optional[FeatureContext] = None,
        value: Any = MISSING,
    ) -> Optional[SimpleRule]:
        """Return the first rule that makes this use of a feature a violation."""
        for rule in self._simple_rules:
            if rule.feature != feature:
                continue
            if not rule.applies_in(context):
                continue
            if rule.permits(value):
                continue
            return rule
        return None

    def _check(
        self,
        ctx: TraversalContext,
        feature: SchemaFeature,
        context: Optional[FeatureContext] = None,
        value: Any = MISSING,
    ) -> bool:
        """Record an issue if the feature is unsupported here; return whether one was."""
        rule = self._find_violation(feature, context, value)
        if rule is None:
            return False
        message = rule.message or DEFAULT_MESSAGES.get(feature, f"{feature.value} is not supported")
        ctx.issues.append(ValidationIssue(path=list(ctx.path), feature=feature, message=message))
        return True

    # ── Traversal ──

    def _visit(self, schema: Any, ctx: TraversalContext) -> None:
        if not _is_node(schema):
            return

        if id(schema) in ctx.visited:
            self._check(ctx, SchemaFeature.RECURSIVE)
            return
        ctx.visited.add(id(schema))

        self._check_composition(schema, ctx)
        self._check_conditionals(schema, ctx)
        self._check_validation_keywords(schema, ctx)

        if _has_type(schema, "object") or schema.get("properties") is not None:
            self._check_object(schema, ctx)
            properties = schema.get("properties")
            if _is_node(properties):
                for key, prop_schema in properties.items():
                    self._visit(prop_schema, ctx.descend("properties", key))
            # Boolean additionalProperties is not a sub-schema
            if _is_node(schema.get("additionalProperties")):
                self._visit(schema["additionalProperties"], ctx.descend("additionalProperties"))

        if _has_type(schema, "array") or schema.get("items") is not None:
            self._check_array(schema, ctx)
            items = schema.get("items")
            if isinstance(items, (list, tuple)):
                for index, item in enumerate(items):
                    self._visit(item, ctx.descend("items", str(index)))
            elif _is_node(items):
                self._visit(items, ctx.descend("items"))
            prefix_items = schema.get("prefixItems")
            if isinstance(prefix_items, (list, tuple)):
                for index, item in enumerate(prefix_items):
                    self._visit(item, ctx.descend("prefixItems", str(index)))

        for keyword in COMPOSITION_KEYWORDS:
            sub_schemas = schema.get(keyword)
            if isinstance(sub_schemas, (list, tuple)):
                for index, sub_schema in enumerate(sub_schemas):
                    self._visit(sub_schema, ctx.descend(keyword, str(index)))

        for keyword in CONDITIONAL_KEYWORDS:
            self._visit(schema.get(keyword), ctx.descend(keyword))

        defs_keyword = "$defs" if schema.get("$defs") is not None else "definitions"
        definitions = schema.get(defs_keyword)
        if _is_node(definitions):
            for key, def_schema in definitions.items():
                self._visit(def_schema, ctx.descend(defs_keyword, key))

        self._run_custom_checks(schema, ctx)

    # ── Per-node checks ──

    def _check_composition(self, schema: JSONSchema, ctx: TraversalContext) -> None:
        context = ctx.feature_context

        if schema.get("allOf") is not None:
            self._check(ctx, SchemaFeature.ALL_OF, context)

        if schema.get("anyOf") is not None:
            # Root anyOf is governed by rootAnyOf alone
            if ctx.is_root:
                self._check(ctx, SchemaFeature.ROOT_ANY_OF, FeatureContext.ROOT)
            else:
                self._check(ctx, SchemaFeature.ANY_OF, context)

        if schema.get("oneOf") is not None:
            # Unlike anyOf, oneOf falls through to the plain rule at the root too
            flagged = ctx.is_root and self._check(ctx, SchemaFeature.ROOT_ONE_OF, FeatureContext.ROOT)
            if not flagged:
                self._check(ctx, SchemaFeature.ONE_OF, context)

        if schema.get("not") is not None:
            self._check(ctx, SchemaFeature.NOT, context)

    def _check_conditionals(self, schema: JSONSchema, ctx: TraversalContext) -> None:
        # then/else are only descended into, never flagged on their own
        for feature in (
            SchemaFeature.IF,
            SchemaFeature.DEPENDENT_REQUIRED,
            SchemaFeature.DEPENDENT_SCHEMAS,
        ):
            if schema.get(feature.value) is not None:
                self._check(ctx, feature)

    def _check_validation_keywords(self, schema: JSONSchema, ctx: TraversalContext) -> None:
        context = ctx.feature_context
        for feature in NUMERIC_KEYWORDS + STRING_KEYWORDS:
            if feature.value in schema:
                self._check(ctx, feature, context, schema[feature.value])

    def _check_object(self, schema: JSONSchema, ctx: TraversalContext) -> None:
        context = ctx.feature_context
        for feature in (SchemaFeature.PATTERN_PROPERTIES, SchemaFeature.PROPERTY_NAMES):
            if schema.get(feature.value) is not None:
                self._check(ctx, feature, context)

    def _check_array(self, schema: JSONSchema, ctx: TraversalContext) -> None:
        context = ctx.feature_context
        if schema.get("prefixItems") is not None:
            self._check(ctx, SchemaFeature.PREFIX_ITEMS, context)
        if schema.get("contains") is not None:
            self._check(ctx, SchemaFeature.CONTAINS, context)
        if schema.get("uniqueItems"):
            self._check(ctx, SchemaFeature.UNIQUE_ITEMS, context, schema["uniqueItems"])
        for feature in (SchemaFeature.MIN_ITEMS, SchemaFeature.MAX_ITEMS):
            if feature.value in schema:
                self._check(ctx, feature, context, schema[feature.value])

    def _run_custom_checks(self, schema: JSONSchema, ctx: TraversalContext) -> None:
        path = list(ctx.path)
        for rule in self._custom_rules:
            if rule.applies_in(ctx.feature_context):
                ctx.issues.extend(rule.validate(schema, list(path), ctx.is_root))
        for validator in self.constraints.custom_validators:
            ctx.issues.extend(validator.validate(schema, list(path), ctx.is_root))


def validate_schema_constraints(
    schema: JSONSchema,
    constraints: ResolvedConstraints,
) -> List[ValidationIssue]:
    """Check a JSON Schema document against resolved constraints.

    Convenience wrapper around ConstraintEngine(constraints).traverse(schema).
    """
    return ConstraintEngine(constraints).traverse(schema)


__all__ = [
    "ConstraintEngine",
    "TraversalContext",
    "validate_schema_constraints",
]

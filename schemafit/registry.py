"""Provider registry: maps model identifiers to provider rule sets.

Patterns are matched against the canonical identifier "{provider}/{model_id}":
- String patterns match exactly and always win, regardless of registration order
- Regex patterns are tried from the most recently registered to the oldest;
  the first match wins, so register specific patterns after general ones

Models matched by no pattern are not blocked: they resolve to an empty rule
set and an `unknown_model` warning is logged.

Usage:
    >>> import re
    >>> from schemafit.types import ParsedModel
    >>> registry = ProviderRegistry()
    >>> registry.register(re.compile(r"^acme/.+$"), "openai")
    >>> registry.resolve(ParsedModel(provider="acme", model_id="m1")).provider
    'openai'
"""

import re
from typing import Dict, List, Tuple, Union

import structlog

from schemafit.errors import UnknownProviderError
from schemafit.providers import BUILTIN_PROVIDERS
from schemafit.rules import ProviderConstraints, ProviderPattern, ProviderRegistryEntry, ResolvedConstraints
from schemafit.types import ParsedModel

logger = structlog.get_logger()

UNKNOWN_PROVIDER = "unknown"

# Regex entries are keyed by pattern object identity, string entries by value
_PatternKey = Union[str, Tuple[str, int]]


def _pattern_key(pattern: ProviderPattern) -> _PatternKey:
    if isinstance(pattern, str):
        return pattern
    return ("regex", id(pattern))


class ProviderRegistry:
    """Insertion-ordered store of pattern → rule set bindings.

    The registry takes no locks: register patterns at startup, before
    resolution begins, or serialize registration and resolution externally.
    """

    def __init__(self) -> None:
        self._entries: Dict[_PatternKey, ProviderRegistryEntry] = {}

    @classmethod
    def with_builtins(cls) -> "ProviderRegistry":
        """Create a registry preloaded with the built-in provider patterns."""
        registry = cls()
        register_builtin_patterns(registry)
        return registry

    def register(
        self,
        pattern: ProviderPattern,
        constraints: Union[ProviderConstraints, str],
    ) -> None:
        """Register a rule set for a pattern.

        Re-registering the same pattern replaces its rule set and keeps the
        entry at its original position. Regex entries are keyed by pattern
        object, and `re.compile` caches compiled patterns: compiling the same
        source again usually returns the same object, so it replaces the old
        entry instead of becoming the most recently registered one.

        Args:
            pattern: Exact identifier string, or compiled regular expression
            constraints: A rule set, or the name of a built-in provider

        Raises:
            UnknownProviderError: If constraints names no built-in provider
        """
        if isinstance(constraints, str):
            alias = constraints.lower()
            if alias not in BUILTIN_PROVIDERS:
                raise UnknownProviderError(constraints, sorted(BUILTIN_PROVIDERS))
            constraints = BUILTIN_PROVIDERS[alias]

        self._entries[_pattern_key(pattern)] = ProviderRegistryEntry(pattern=pattern, constraints=constraints)

    def resolve(self, model: ParsedModel) -> ResolvedConstraints:
        """Resolve the constraints for a parsed model.

        Matching order:
        1. Exact string match (always wins)
        2. Regex patterns (last registered match wins)
        3. Permissive empty rule set, with a logged warning

        Args:
            model: Parsed model, provider already lowercased

        Returns:
            ResolvedConstraints bound to model.model_id
        """
        identifier = model.identifier

        exact = self._entries.get(identifier)
        if exact is not None:
            return ResolvedConstraints.bind(exact.constraints, model.model_id)

        for entry in reversed(list(self._entries.values())):
            if isinstance(entry.pattern, re.Pattern) and entry.pattern.search(identifier):
                return ResolvedConstraints.bind(entry.constraints, model.model_id)

        logger.warning(
            "unknown_model",
            model=identifier,
            detail="no constraints registered for this model; schema will not be checked",
        )
        return ResolvedConstraints.permissive(UNKNOWN_PROVIDER, model.model_id)

    def get_all(self) -> List[ProviderRegistryEntry]:
        """Return every registered entry in insertion order."""
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


def register_builtin_patterns(registry: ProviderRegistry) -> None:
    """Register the patterns for the built-in providers."""
    # openai/*, openai.chat/*, openai.responses/*
    registry.register(re.compile(r"^(openai|openai\.chat|openai\.responses)/.+$"), "openai")
    # Azure deployments with "openai" in the deployment name
    registry.register(re.compile(r"^(azure|azure\.chat|azure\.responses)/.*openai.*$"), "openai")
    registry.register(re.compile(r"^(anthropic|anthropic\.messages)/.+$"), "anthropic")
    registry.register(
        re.compile(r"^(google|google\.generative-ai|google\.vertex|google\.vertex\.chat)/.+$"),
        "google",
    )


# Process-wide default registry
provider_registry = ProviderRegistry.with_builtins()


__all__ = [
    "UNKNOWN_PROVIDER",
    "ProviderRegistry",
    "provider_registry",
    "register_builtin_patterns",
]

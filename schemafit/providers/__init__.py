"""Built-in provider rule sets.

BUILTIN_PROVIDERS maps the alias accepted by ProviderRegistry.register to
each rule set.
"""

from typing import Dict

from schemafit.providers.anthropic import ANTHROPIC_CONSTRAINTS
from schemafit.providers.google import GOOGLE_CONSTRAINTS
from schemafit.providers.openai import OPENAI_CONSTRAINTS
from schemafit.rules import ProviderConstraints

BUILTIN_PROVIDERS: Dict[str, ProviderConstraints] = {
    "openai": OPENAI_CONSTRAINTS,
    "anthropic": ANTHROPIC_CONSTRAINTS,
    "google": GOOGLE_CONSTRAINTS,
}

__all__ = [
    "BUILTIN_PROVIDERS",
    "OPENAI_CONSTRAINTS",
    "ANTHROPIC_CONSTRAINTS",
    "GOOGLE_CONSTRAINTS",
]

"""Model identifier parsing.

Accepts the identifier forms callers pass around and normalizes them to a
ParsedModel:
- "provider/model-id" strings, split on the first "/" (the model id may
  itself contain slashes, e.g. "huggingface/meta-llama/Llama-2-7b")
- Mappings with "provider" and "modelId" (or "model_id") keys
- Objects exposing `provider` and `model_id` (or `modelId`) attributes

Usage:
    >>> parse_model("OpenAI/gpt-4o")
    ParsedModel(provider='openai', model_id='gpt-4o', original='OpenAI/gpt-4o')
"""

from typing import Any, Mapping, Optional, Tuple

from schemafit.errors import InvalidModelError
from schemafit.types import ParsedModel

ModelIdentifier = Any


def parse_model(model: ModelIdentifier) -> ParsedModel:
    """Parse a model identifier into normalized form.

    Args:
        model: Identifier string, mapping, or model-like object

    Returns:
        ParsedModel with a lowercased provider

    Raises:
        InvalidModelError: If the identifier is malformed or of an unknown form
    """
    if isinstance(model, str):
        return _parse_model_string(model)

    fields = _model_fields(model)
    if fields is None:
        raise InvalidModelError(
            'Invalid model identifier. Expected "provider/model-id" string or '
            "an object with provider and modelId"
        )

    provider, model_id = fields
    if not provider or not model_id:
        raise InvalidModelError("Invalid model identifier object. Both provider and modelId are required.")

    return ParsedModel(provider=provider.lower(), model_id=model_id, original=model)


def _parse_model_string(model: str) -> ParsedModel:
    provider, separator, model_id = model.partition("/")

    if not separator:
        raise InvalidModelError(
            f'Invalid model identifier: "{model}". Expected format: "provider/model-id" (e.g., "openai/gpt-4o")'
        )

    if not provider or not model_id:
        raise InvalidModelError(
            f'Invalid model identifier: "{model}". Both provider and model-id are required.'
        )

    return ParsedModel(provider=provider.lower(), model_id=model_id, original=model)


def _model_fields(model: Any) -> Optional[Tuple[str, str]]:
    """Extract (provider, model_id) from a mapping or model-like object."""
    if isinstance(model, Mapping):
        provider = model.get("provider")
        model_id = model.get("modelId", model.get("model_id"))
    else:
        provider = getattr(model, "provider", None)
        model_id = getattr(model, "model_id", getattr(model, "modelId", None))

    if not isinstance(provider, str) or not isinstance(model_id, str):
        return None
    return provider, model_id


__all__ = [
    "ModelIdentifier",
    "parse_model",
]

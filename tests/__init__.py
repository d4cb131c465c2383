"""Test suite for SchemaFit.

This package contains tests for:
- Traversal engine (composition, context sensitivity, cycles, custom checks)
- Provider registry (exact vs regex precedence, aliases, unknown models)
- Built-in provider rule sets (OpenAI, Anthropic, Google)
- Model identifier parsing and schema input normalization
- Integration through validate_schema / assert_schema
"""

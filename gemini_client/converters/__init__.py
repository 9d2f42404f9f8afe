"""Converters module."""

from gemini_client.converters.json_schema_to_gemini import value_to_function_parameters

__all__ = ["value_to_function_parameters"]

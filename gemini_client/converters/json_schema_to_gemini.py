"""Convert JSON Schema shaped values to Gemini function parameters."""

from typing import Any

from gemini_client.models.tools import FunctionParameters, PropertyDetails


def value_to_function_parameters(value: Any) -> FunctionParameters:
    """Convert a JSON Schema object (``type``/``required``/``properties``).

    Anything that is not a mapping yields an empty OBJECT schema.
    """
    if not isinstance(value, dict):
        return FunctionParameters.object()

    param_type = value.get("type")
    if not isinstance(param_type, str):
        param_type = "object"

    required = [name for name in _as_list(value.get("required")) if isinstance(name, str)]

    properties: dict[str, PropertyDetails] = {}
    raw_properties = value.get("properties")
    if isinstance(raw_properties, dict):
        for name, raw in raw_properties.items():
            details = _extract_property_details(raw)
            if details is not None:
                properties[name] = details

    return FunctionParameters(
        type=param_type.upper(),
        properties=properties,
        required=required,
    )


def _extract_property_details(value: Any) -> PropertyDetails | None:
    if not isinstance(value, dict):
        return None

    property_type = value.get("type")
    if not isinstance(property_type, str):
        property_type = "string"

    description = value.get("description")
    if not isinstance(description, str):
        description = ""

    enum_values = None
    if isinstance(value.get("enum"), list):
        enum_values = [v for v in value["enum"] if isinstance(v, str)]

    return PropertyDetails(
        type=property_type.upper(),
        description=description,
        enum=enum_values,
        items=_extract_property_details(value.get("items")),
    )


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []

import pytest

from gemini_client import (
    ArgumentTypeError,
    FunctionCall,
    FunctionCallError,
    FunctionDeclaration,
    FunctionParameters,
    FunctionResponse,
    JsonError,
    MissingArgumentError,
    PropertyDetails,
    Tool,
)
from gemini_client.models import FunctionTool, GoogleSearchTool


def test_object_schema_starts_empty():
    params = FunctionParameters.object()
    assert params.type == "OBJECT"
    assert params.properties == {}
    assert params.required == []


def test_with_property_required():
    params = FunctionParameters.object().with_property(
        "a", PropertyDetails.number("first operand"), True
    )
    assert params.required == ["a"]
    assert params.properties["a"].type == "NUMBER"
    assert params.properties["a"].description == "first operand"


def test_with_property_optional_not_required():
    params = FunctionParameters.object().with_property(
        "unit", PropertyDetails.string("unit"), False
    )
    assert "unit" in params.properties
    assert params.required == []


def test_with_property_twice_overwrites_and_keeps_required_unique():
    params = (
        FunctionParameters.object()
        .with_property("a", PropertyDetails.string("old"), True)
        .with_property("a", PropertyDetails.integer("new"), True)
    )
    assert params.required == ["a"]
    assert params.properties["a"].type == "INTEGER"
    assert params.properties["a"].description == "new"


@pytest.mark.parametrize(
    "factory, expected",
    [
        (PropertyDetails.string, "STRING"),
        (PropertyDetails.number, "NUMBER"),
        (PropertyDetails.integer, "INTEGER"),
        (PropertyDetails.boolean, "BOOLEAN"),
    ],
)
def test_primitive_properties(factory, expected):
    details = factory("desc")
    assert details.type == expected
    assert details.enum is None
    assert details.items is None


def test_array_property_nests_items():
    details = PropertyDetails.array("tags", PropertyDetails.string("tag"))
    assert details.type == "ARRAY"
    assert details.items.type == "STRING"
    assert details.model_dump(exclude_none=True) == {
        "type": "ARRAY",
        "description": "tags",
        "items": {"type": "STRING", "description": "tag"},
    }


def test_enum_property_keeps_order():
    details = PropertyDetails.enum_type("unit", ["celsius", "fahrenheit", "kelvin"])
    assert details.type == "STRING"
    assert details.enum == ["celsius", "fahrenheit", "kelvin"]


def test_function_declaration_wire_form():
    declaration = FunctionDeclaration(
        name="get_weather",
        description="Get the weather",
        parameters=FunctionParameters.object().with_property(
            "location", PropertyDetails.string("City"), True
        ),
    )
    tool = Tool.new(declaration)
    assert tool.model_dump(mode="json", exclude_none=True) == {
        "functionDeclarations": [
            {
                "name": "get_weather",
                "description": "Get the weather",
                "parameters": {
                    "type": "OBJECT",
                    "properties": {
                        "location": {"type": "STRING", "description": "City"}
                    },
                    "required": ["location"],
                },
            }
        ]
    }


def test_tool_constructors():
    declaration = FunctionDeclaration(
        name="f", description="d", parameters=FunctionParameters.object()
    )
    assert isinstance(Tool.with_functions([declaration, declaration]), FunctionTool)
    assert len(Tool.with_functions([declaration, declaration]).functionDeclarations) == 2
    search = Tool.google_search()
    assert isinstance(search, GoogleSearchTool)
    assert search.model_dump(mode="json") == {"googleSearch": {}}


def test_function_call_get_typed_values():
    call = FunctionCall(name="calc", args={"a": 1, "op": "add", "xs": [1, 2]})
    assert call.get("a", float) == 1.0
    assert call.get("a", int) == 1
    assert call.get("op", str) == "add"
    assert call.get("xs", list[int]) == [1, 2]
    assert call.get("op") == "add"


def test_function_call_get_missing_parameter():
    call = FunctionCall(name="calc", args={"a": 1})
    with pytest.raises(MissingArgumentError, match="Missing parameter: b"):
        call.get("b", float)


def test_function_call_get_wrong_type():
    call = FunctionCall(name="calc", args={"a": 1})
    with pytest.raises(ArgumentTypeError, match="Error deserializing parameter a"):
        call.get("a", str)


def test_function_call_get_args_not_object():
    call = FunctionCall(name="calc", args=[1, 2])
    with pytest.raises(FunctionCallError, match="not an object"):
        call.get("a", int)


def test_function_call_args_default_to_empty_object():
    call = FunctionCall.model_validate({"name": "ping"})
    assert call.args == {}


def test_function_response_from_str():
    response = FunctionResponse.from_str("get_weather", '{"temperature": 21}')
    assert response.response == {"temperature": 21}


def test_function_response_from_malformed_str():
    with pytest.raises(JsonError):
        FunctionResponse.from_str("get_weather", "{not json")


@pytest.mark.parametrize(
    "value, type_",
    [
        ("1", int),
        ("2.5", float),
        (1, bool),
        ("yes", bool),
    ],
)
def test_function_call_get_does_not_coerce(value, type_):
    call = FunctionCall(name="f", args={"a": value})
    with pytest.raises(ArgumentTypeError):
        call.get("a", type_)


def test_function_call_get_reads_nested_structures():
    call = FunctionCall(name="f", args={"point": {"x": 1, "y": 2}, "flag": True})
    assert call.get("point", dict[str, float]) == {"x": 1.0, "y": 2.0}
    assert call.get("flag", bool) is True

"""Gemini tool and function-calling models."""

import json
from functools import lru_cache
from typing import Annotated, Any, TypeVar, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from gemini_client.errors import (
    ArgumentTypeError,
    FunctionCallError,
    JsonError,
    MissingArgumentError,
)

T = TypeVar("T")


# ============ Schema Models ============


class PropertyDetails(BaseModel):
    """Schema of a single function parameter."""

    type: str
    description: str
    enum: list[str] | None = None
    items: "PropertyDetails | None" = None

    @classmethod
    def string(cls, description: str) -> "PropertyDetails":
        return cls(type="STRING", description=description)

    @classmethod
    def number(cls, description: str) -> "PropertyDetails":
        return cls(type="NUMBER", description=description)

    @classmethod
    def integer(cls, description: str) -> "PropertyDetails":
        return cls(type="INTEGER", description=description)

    @classmethod
    def boolean(cls, description: str) -> "PropertyDetails":
        return cls(type="BOOLEAN", description=description)

    @classmethod
    def array(cls, description: str, items: "PropertyDetails") -> "PropertyDetails":
        """Array property whose elements follow the ``items`` schema."""
        return cls(type="ARRAY", description=description, items=items)

    @classmethod
    def enum_type(cls, description: str, values: list[str]) -> "PropertyDetails":
        """String property restricted to ``values`` (order kept)."""
        return cls(type="STRING", description=description, enum=[str(v) for v in values])


class FunctionParameters(BaseModel):
    """Parameters schema of a function declaration."""

    type: str
    properties: dict[str, PropertyDetails] | None = None
    required: list[str] | None = None

    @classmethod
    def object(cls) -> "FunctionParameters":
        """Empty OBJECT schema."""
        return cls(type="OBJECT", properties={}, required=[])

    def with_property(
        self, name: str, details: PropertyDetails, required: bool = False
    ) -> "FunctionParameters":
        """Add a property, marking it required if asked. Returns self."""
        if self.properties is None:
            self.properties = {}
        self.properties[name] = details
        if required:
            if self.required is None:
                self.required = []
            if name not in self.required:
                self.required.append(name)
        return self


class FunctionDeclaration(BaseModel):
    """Function declaration."""

    name: str
    description: str
    parameters: FunctionParameters


# ============ Tool Models ============


class GoogleSearchConfig(BaseModel):
    """Google Search configuration (no options)."""


class FunctionTool(BaseModel):
    """Tool exposing function declarations."""

    functionDeclarations: list[FunctionDeclaration]


class GoogleSearchTool(BaseModel):
    """Tool enabling Google Search grounding."""

    googleSearch: GoogleSearchConfig


class Tool:
    """Constructors for the tool variants."""

    @staticmethod
    def new(declaration: FunctionDeclaration) -> FunctionTool:
        return FunctionTool(functionDeclarations=[declaration])

    @staticmethod
    def with_functions(declarations: list[FunctionDeclaration]) -> FunctionTool:
        return FunctionTool(functionDeclarations=list(declarations))

    @staticmethod
    def google_search() -> GoogleSearchTool:
        return GoogleSearchTool(googleSearch=GoogleSearchConfig())


# Variants are tried in declaration order.
AnyTool = Annotated[
    Union[FunctionTool, GoogleSearchTool], Field(union_mode="left_to_right")
]


# ============ Call Models ============


@lru_cache(maxsize=None)
def _adapter_for(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


class FunctionCall(BaseModel):
    """Function call issued by the model."""

    name: str
    args: Any = Field(default_factory=dict)

    def get(self, key: str, type_: type[T] = Any) -> T:
        """Return argument ``key`` validated as ``type_``.

        Raises MissingArgumentError when the key is absent and
        ArgumentTypeError when the value cannot be read as ``type_``.
        """
        if not isinstance(self.args, dict):
            raise FunctionCallError("Arguments are not an object")
        if key not in self.args:
            raise MissingArgumentError(f"Missing parameter: {key}")
        # Strict JSON mode: no "1" -> 1 or 1 -> True coercion.
        try:
            return _adapter_for(type_).validate_json(
                json.dumps(self.args[key]), strict=True
            )
        except ValidationError as exc:
            raise ArgumentTypeError(
                f"Error deserializing parameter {key}: {exc}"
            ) from exc


class FunctionResponse(BaseModel):
    """Result of a function call fed back to the model."""

    name: str
    response: Any | None = None

    @classmethod
    def new(cls, name: str, response: Any) -> "FunctionResponse":
        return cls(name=name, response=response)

    @classmethod
    def from_str(cls, name: str, response: str) -> "FunctionResponse":
        """Build a response from a JSON string."""
        try:
            data = json.loads(response)
        except json.JSONDecodeError as exc:
            raise JsonError(f"Invalid function response JSON: {exc}") from exc
        return cls(name=name, response=data)

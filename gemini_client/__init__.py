"""Async client for the Gemini generateContent API."""

from gemini_client.client import ContentBuilder, Gemini
from gemini_client.converters import value_to_function_parameters
from gemini_client.errors import (
    ApiError,
    ArgumentTypeError,
    FunctionCallError,
    GeminiError,
    HttpError,
    JsonError,
    MissingApiKeyError,
    MissingArgumentError,
    RequestError,
)
from gemini_client.models import (
    Candidate,
    CitationMetadata,
    Content,
    FunctionCall,
    FunctionCallingMode,
    FunctionDeclaration,
    FunctionParameters,
    FunctionResponse,
    GenerateContentRequest,
    GenerationConfig,
    GenerationResponse,
    HarmBlockThreshold,
    HarmCategory,
    Message,
    Part,
    PropertyDetails,
    Role,
    SafetyRating,
    SafetySetting,
    Tool,
)
from gemini_client.utils.stream_decoder import ResponseStream, StreamDecoder, decode_stream

__all__ = [
    "ApiError",
    "ArgumentTypeError",
    "Candidate",
    "CitationMetadata",
    "Content",
    "ContentBuilder",
    "FunctionCall",
    "FunctionCallError",
    "FunctionCallingMode",
    "FunctionDeclaration",
    "FunctionParameters",
    "FunctionResponse",
    "Gemini",
    "GeminiError",
    "GenerateContentRequest",
    "GenerationConfig",
    "GenerationResponse",
    "HarmBlockThreshold",
    "HarmCategory",
    "HttpError",
    "JsonError",
    "Message",
    "MissingApiKeyError",
    "MissingArgumentError",
    "Part",
    "PropertyDetails",
    "RequestError",
    "ResponseStream",
    "Role",
    "SafetyRating",
    "SafetySetting",
    "StreamDecoder",
    "Tool",
    "decode_stream",
    "value_to_function_parameters",
]

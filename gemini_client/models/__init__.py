"""Models module."""

from gemini_client.models.gemini import (
    Blob,
    Candidate,
    CitationMetadata,
    CitationSource,
    Content,
    FunctionCallingConfig,
    FunctionCallingMode,
    FunctionCallPart,
    FunctionResponsePart,
    GenerateContentRequest,
    GenerationConfig,
    GenerationResponse,
    HarmBlockThreshold,
    HarmCategory,
    InlineDataPart,
    Message,
    Part,
    PromptFeedback,
    Role,
    SafetyRating,
    SafetySetting,
    TextPart,
    ToolConfig,
    UsageMetadata,
)
from gemini_client.models.tools import (
    AnyTool,
    FunctionCall,
    FunctionDeclaration,
    FunctionParameters,
    FunctionResponse,
    FunctionTool,
    GoogleSearchConfig,
    GoogleSearchTool,
    PropertyDetails,
    Tool,
)

__all__ = [
    "AnyTool",
    "Blob",
    "Candidate",
    "CitationMetadata",
    "CitationSource",
    "Content",
    "FunctionCall",
    "FunctionCallingConfig",
    "FunctionCallingMode",
    "FunctionCallPart",
    "FunctionDeclaration",
    "FunctionParameters",
    "FunctionResponse",
    "FunctionResponsePart",
    "FunctionTool",
    "GenerateContentRequest",
    "GenerationConfig",
    "GenerationResponse",
    "GoogleSearchConfig",
    "GoogleSearchTool",
    "HarmBlockThreshold",
    "HarmCategory",
    "InlineDataPart",
    "Message",
    "Part",
    "PromptFeedback",
    "PropertyDetails",
    "Role",
    "SafetyRating",
    "SafetySetting",
    "TextPart",
    "Tool",
    "ToolConfig",
    "UsageMetadata",
]

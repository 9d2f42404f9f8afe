"""Gemini API models."""

import json
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import BaseModel, Field

from gemini_client.errors import JsonError
from gemini_client.models.tools import AnyTool, FunctionCall, FunctionResponse


class Role(str, Enum):
    """Role of a conversation turn."""

    USER = "user"
    MODEL = "model"
    FUNCTION = "function"
    SYSTEM = "system"


# ============ Content Models ============


class TextPart(BaseModel):
    """Text part."""

    text: str


class FunctionCallPart(BaseModel):
    """Function call part (in model response)."""

    functionCall: FunctionCall


class FunctionResponsePart(BaseModel):
    """Function response part (in function turn)."""

    functionResponse: FunctionResponse


class Blob(BaseModel):
    """Inline binary data, base64 encoded."""

    mimeType: str
    data: str


class InlineDataPart(BaseModel):
    """Inline data part (images and other media)."""

    inlineData: Blob


# Parts carry no tag on the wire, so shapes are tried in this order.
Part = Annotated[
    Union[TextPart, FunctionCallPart, FunctionResponsePart, InlineDataPart],
    Field(union_mode="left_to_right"),
]


class Content(BaseModel):
    """Content with parts."""

    parts: list[Part] = Field(default_factory=list)
    role: Role | None = None

    @classmethod
    def text(cls, text: str) -> "Content":
        return cls(parts=[TextPart(text=text)])

    @classmethod
    def function_call(cls, function_call: FunctionCall) -> "Content":
        return cls(parts=[FunctionCallPart(functionCall=function_call)])

    @classmethod
    def function_response(cls, function_response: FunctionResponse) -> "Content":
        return cls(parts=[FunctionResponsePart(functionResponse=function_response)])

    @classmethod
    def function_response_json(cls, name: str, response: Any) -> "Content":
        return cls.function_response(FunctionResponse.new(name, response))

    @classmethod
    def inline_data(cls, mime_type: str, data: str) -> "Content":
        return cls(parts=[InlineDataPart(inlineData=Blob(mimeType=mime_type, data=data))])

    def with_role(self, role: Role) -> "Content":
        """Return a copy of this content with ``role`` set."""
        return self.model_copy(update={"role": role})


class Message(BaseModel):
    """Conversation turn: content plus the role that produced it."""

    content: Content
    role: Role

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(content=Content.text(text), role=Role.USER)

    @classmethod
    def model(cls, text: str) -> "Message":
        return cls(content=Content.text(text), role=Role.MODEL)

    @classmethod
    def function(cls, name: str, response: Any) -> "Message":
        return cls(
            content=Content.function_response_json(name, response),
            role=Role.FUNCTION,
        )

    @classmethod
    def function_str(cls, name: str, response: str) -> "Message":
        """Function turn from a JSON string; raises JsonError if malformed."""
        try:
            data = json.loads(response)
        except json.JSONDecodeError as exc:
            raise JsonError(f"Invalid function response JSON: {exc}") from exc
        return cls.function(name, data)


# ============ Request Models ============


class GenerationConfig(BaseModel):
    """Generation configuration."""

    temperature: float | None = None
    topP: float | None = None
    topK: int | None = None
    maxOutputTokens: int | None = None
    candidateCount: int | None = None
    stopSequences: list[str] | None = None
    responseMimeType: str | None = None
    responseSchema: Any | None = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class HarmCategory(str, Enum):
    """Category of harmful content."""

    HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"


class HarmBlockThreshold(str, Enum):
    """Threshold at which content gets blocked."""

    BLOCK_LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    BLOCK_ONLY_HIGH = "BLOCK_ONLY_HIGH"
    BLOCK_NONE = "BLOCK_NONE"


class SafetySetting(BaseModel):
    """Safety filter setting."""

    category: HarmCategory
    threshold: HarmBlockThreshold


class FunctionCallingMode(str, Enum):
    """Whether the model may, must or must not call functions."""

    AUTO = "AUTO"
    ANY = "ANY"
    NONE = "NONE"


class FunctionCallingConfig(BaseModel):
    """Function calling configuration."""

    mode: FunctionCallingMode


class ToolConfig(BaseModel):
    """Tool configuration."""

    functionCallingConfig: FunctionCallingConfig | None = None


class GenerateContentRequest(BaseModel):
    """Gemini generate content request."""

    contents: list[Content]
    generationConfig: GenerationConfig | None = None
    safetySettings: list[SafetySetting] | None = None
    tools: list[AnyTool] | None = None
    toolConfig: ToolConfig | None = None
    systemInstruction: Content | None = None

    def to_payload(self) -> dict[str, Any]:
        """Request body as sent on the wire."""
        return self.model_dump(mode="json", exclude_none=True)


# ============ Response Models ============


class SafetyRating(BaseModel):
    """Safety rating of a prompt or candidate."""

    category: str
    probability: str


class CitationSource(BaseModel):
    """Citation source."""

    uri: str | None = None
    title: str | None = None
    startIndex: int | None = None
    endIndex: int | None = None
    license: str | None = None
    publicationDate: str | None = None


class CitationMetadata(BaseModel):
    """Citation metadata."""

    citationSources: list[CitationSource] = Field(default_factory=list)


class UsageMetadata(BaseModel):
    """Usage metadata."""

    promptTokenCount: int | None = None
    candidatesTokenCount: int | None = None
    totalTokenCount: int | None = None


class Candidate(BaseModel):
    """Response candidate."""

    content: Content = Field(default_factory=Content)
    safetyRatings: list[SafetyRating] | None = None
    citationMetadata: CitationMetadata | None = None
    finishReason: str | None = None
    usageMetadata: UsageMetadata | None = None
    index: int | None = None


class PromptFeedback(BaseModel):
    """Feedback about the prompt."""

    safetyRatings: list[SafetyRating] = Field(default_factory=list)
    blockReason: str | None = None


class GenerationResponse(BaseModel):
    """Gemini generate content response."""

    candidates: list[Candidate] = Field(default_factory=list)
    promptFeedback: PromptFeedback | None = None
    usageMetadata: UsageMetadata | None = None

    def text(self) -> str:
        """Text of the first part of the first candidate, or ""."""
        if not self.candidates or not self.candidates[0].content.parts:
            return ""
        part = self.candidates[0].content.parts[0]
        return part.text if isinstance(part, TextPart) else ""

    def function_calls(self) -> list[FunctionCall]:
        """Function calls across all candidates, in order."""
        return [
            part.functionCall
            for candidate in self.candidates
            for part in candidate.content.parts
            if isinstance(part, FunctionCallPart)
        ]

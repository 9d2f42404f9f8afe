"""Gemini client and request builder."""

import json
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from gemini_client.adapters.gemini_adapter import GeminiAdapter
from gemini_client.config import settings
from gemini_client.errors import JsonError, MissingApiKeyError, RequestError
from gemini_client.models.gemini import (
    Content,
    FunctionCallingConfig,
    FunctionCallingMode,
    GenerateContentRequest,
    GenerationConfig,
    GenerationResponse,
    Message,
    Role,
    SafetySetting,
    ToolConfig,
)
from gemini_client.models.tools import AnyTool, FunctionDeclaration, Tool
from gemini_client.utils.stream_decoder import ResponseStream


class ContentBuilder:
    """Accumulates one generate content request.

    Every ``with_*`` method mutates the builder and returns it so calls can
    be chained. Contents keep the order in which they were added.
    """

    def __init__(self, adapter: GeminiAdapter):
        self._adapter = adapter
        self.contents: list[Content] = []
        self.generation_config = GenerationConfig()
        self.safety_settings: list[SafetySetting] = []
        self.tools: list[AnyTool] = []
        self.tool_config: ToolConfig | None = None
        self.system_instruction: Content | None = None

    # ============ Conversation ============

    def with_system_prompt(self, text: str) -> "ContentBuilder":
        """Set the system instruction (not a system turn in contents)."""
        self.system_instruction = Content.text(text)
        return self

    def with_user_message(self, text: str) -> "ContentBuilder":
        """Append a user turn."""
        self.contents.append(Content.text(text).with_role(Role.USER))
        return self

    def with_model_message(self, text: str) -> "ContentBuilder":
        """Append a model turn."""
        self.contents.append(Content.text(text).with_role(Role.MODEL))
        return self

    def with_function_response(self, name: str, response: Any) -> "ContentBuilder":
        """Append a function turn carrying a call result."""
        self.contents.append(
            Content.function_response_json(name, response).with_role(Role.FUNCTION)
        )
        return self

    def with_function_response_str(self, name: str, response: str) -> "ContentBuilder":
        """Like ``with_function_response`` but takes a JSON string."""
        try:
            data = json.loads(response)
        except json.JSONDecodeError as exc:
            raise JsonError(f"Invalid function response JSON: {exc}") from exc
        return self.with_function_response(name, data)

    def with_message(self, message: Message) -> "ContentBuilder":
        """Append a message."""
        # The content's own role wins over the message role.
        content = message.content
        if content.role is None:
            content = content.with_role(message.role)
        self.contents.append(content)
        return self

    def with_messages(self, messages: Iterable[Message]) -> "ContentBuilder":
        """Append messages in order."""
        for message in messages:
            self.with_message(message)
        return self

    # ============ Generation Config ============

    def with_generation_config(self, config: GenerationConfig) -> "ContentBuilder":
        """Replace the generation config."""
        self.generation_config = config.model_copy(deep=True)
        return self

    def _update_config(self, **fields: Any) -> "ContentBuilder":
        try:
            self.generation_config = GenerationConfig.model_validate(
                {**self.generation_config.model_dump(exclude_none=True), **fields}
            )
        except ValidationError as exc:
            raise RequestError(f"Invalid generation config: {exc}") from exc
        return self

    def with_temperature(self, temperature: float) -> "ContentBuilder":
        """Set the sampling temperature."""
        return self._update_config(temperature=temperature)

    def with_top_p(self, top_p: float) -> "ContentBuilder":
        """Set nucleus sampling probability mass."""
        return self._update_config(topP=top_p)

    def with_top_k(self, top_k: int) -> "ContentBuilder":
        """Set the number of candidate tokens considered."""
        return self._update_config(topK=top_k)

    def with_max_output_tokens(self, max_output_tokens: int) -> "ContentBuilder":
        """Set the output token limit."""
        return self._update_config(maxOutputTokens=max_output_tokens)

    def with_candidate_count(self, candidate_count: int) -> "ContentBuilder":
        """Set how many candidates to generate."""
        return self._update_config(candidateCount=candidate_count)

    def with_stop_sequences(self, stop_sequences: Iterable[str]) -> "ContentBuilder":
        """Set sequences that stop generation."""
        return self._update_config(stopSequences=list(stop_sequences))

    def with_response_mime_type(self, mime_type: str) -> "ContentBuilder":
        """Set the response MIME type."""
        return self._update_config(responseMimeType=mime_type)

    def with_response_schema(self, schema: Any) -> "ContentBuilder":
        """Schema the model's JSON output must follow."""
        return self._update_config(responseSchema=schema)

    # ============ Safety & Tools ============

    def with_safety_setting(self, setting: SafetySetting) -> "ContentBuilder":
        """Add a safety filter setting."""
        self.safety_settings.append(setting)
        return self

    def with_tool(self, tool: AnyTool) -> "ContentBuilder":
        """Add a tool."""
        self.tools.append(tool)
        return self

    def with_function(self, declaration: FunctionDeclaration) -> "ContentBuilder":
        """Add a tool with a single function declaration."""
        return self.with_tool(Tool.new(declaration))

    def with_function_calling_mode(self, mode: FunctionCallingMode) -> "ContentBuilder":
        """Set the function calling mode."""
        self.tool_config = ToolConfig(functionCallingConfig=FunctionCallingConfig(mode=mode))
        return self

    # ============ Execution ============

    def build_request(self) -> GenerateContentRequest:
        """Snapshot the accumulated state as a request."""
        return GenerateContentRequest(
            contents=list(self.contents),
            generationConfig=None
            if self.generation_config.is_empty()
            else self.generation_config,
            safetySettings=list(self.safety_settings) or None,
            tools=list(self.tools) or None,
            toolConfig=self.tool_config,
            systemInstruction=self.system_instruction,
        )

    async def execute(self) -> GenerationResponse:
        """Send the request and return the parsed response."""
        return await self._adapter.generate_content(self.build_request())

    async def execute_stream(self) -> ResponseStream:
        """Send the request in streaming mode.

        Returns an async iterator of GenerationResponse items; a line that
        fails to parse shows up as a JsonError item and a broken connection
        as a final HttpError item. The connection is released when the
        stream is exhausted, closed with ``aclose()`` (or ``async with``),
        or dropped.
        """
        return await self._adapter.generate_content_stream(self.build_request())


class Gemini:
    """Client for the Gemini API.

    A handle is never mutated after construction, so one instance can be
    shared by any number of concurrent callers.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise MissingApiKeyError()
        self._adapter = GeminiAdapter(
            api_key,
            model or settings.default_model,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def pro(cls, api_key: str | None, **kwargs: Any) -> "Gemini":
        return cls(api_key, settings.pro_model, **kwargs)

    @classmethod
    def with_model(cls, api_key: str | None, model: str, **kwargs: Any) -> "Gemini":
        return cls(api_key, model, **kwargs)

    @classmethod
    def from_env(cls, model: str | None = None, **kwargs: Any) -> "Gemini":
        """Client using the GEMINI_API_KEY setting."""
        return cls(settings.api_key, model, **kwargs)

    @property
    def model(self) -> str:
        return self._adapter.model

    def generate_content(self) -> ContentBuilder:
        """Start building a content generation request."""
        return ContentBuilder(self._adapter)

"""Gemini adapter."""

import logging
from contextlib import AsyncExitStack

import httpx
from pydantic import ValidationError

from gemini_client.config import settings
from gemini_client.errors import ApiError, HttpError, JsonError, RequestError
from gemini_client.models.gemini import GenerateContentRequest, GenerationResponse
from gemini_client.utils.http_client import post_request, stream_request
from gemini_client.utils.stream_decoder import ResponseStream

logger = logging.getLogger(__name__)


class GeminiAdapter:
    """Adapter for Google Gemini API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model if model.startswith("models/") else f"models/{model}"
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.transport = transport

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
        }

    def _get_url(self, stream: bool = False) -> httpx.URL:
        action = "streamGenerateContent" if stream else "generateContent"
        params = {"key": self.api_key}
        if stream:
            params["alt"] = "sse"
        try:
            url = httpx.URL(f"{self.base_url}/{self.model}:{action}", params=params)
        except httpx.InvalidURL as exc:
            raise RequestError(str(exc)) from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise RequestError(f"Invalid base URL: {self.base_url}")
        return url

    async def generate_content(self, request: GenerateContentRequest) -> GenerationResponse:
        """Send generate content request."""
        url = self._get_url(stream=False)
        logger.debug("POST %s:generateContent", self.model)
        try:
            response = await post_request(
                url,
                self._get_headers(),
                request.to_payload(),
                timeout=self.timeout,
                transport=self.transport,
            )
        except httpx.HTTPError as exc:
            raise HttpError(str(exc)) from exc

        if not response.is_success:
            logger.warning("Gemini API returned %s", response.status_code)
            raise ApiError(response.status_code, response.text)

        try:
            return GenerationResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise JsonError(str(exc)) from exc

    async def generate_content_stream(
        self, request: GenerateContentRequest
    ) -> ResponseStream:
        """Send streaming generate content request.

        The status is checked before returning; the returned stream owns
        the open connection.
        """
        url = self._get_url(stream=True)
        logger.debug("POST %s:streamGenerateContent", self.model)
        stack = AsyncExitStack()
        try:
            response = await stack.enter_async_context(
                stream_request(
                    "POST",
                    url,
                    self._get_headers(),
                    request.to_payload(),
                    timeout=self.timeout,
                    transport=self.transport,
                )
            )
        except httpx.HTTPError as exc:
            await stack.aclose()
            raise HttpError(str(exc)) from exc

        if not response.is_success:
            try:
                body = await response.aread()
            except httpx.HTTPError as exc:
                raise HttpError(str(exc)) from exc
            finally:
                await stack.aclose()
            logger.warning("Gemini API returned %s", response.status_code)
            raise ApiError(response.status_code, body.decode("utf-8", errors="replace"))

        return ResponseStream(response, stack)

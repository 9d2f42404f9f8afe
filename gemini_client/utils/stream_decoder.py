"""Decode streamed ``data: `` lines into generation responses."""

import asyncio
import codecs
import logging
import weakref
from contextlib import AsyncExitStack
from typing import AsyncIterable, AsyncIterator

import httpx
from pydantic import ValidationError

from gemini_client.errors import GeminiError, HttpError, JsonError
from gemini_client.models.gemini import GenerationResponse

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

StreamItem = GenerationResponse | GeminiError


class StreamDecoder:
    """Incremental decoder for a chunked response body.

    Chunks may split lines (and UTF-8 sequences) anywhere; partial lines
    are held until their newline arrives or ``finish`` is called.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> list[StreamItem]:
        """Consume one chunk and return the messages it completes."""
        self._buffer += self._decoder.decode(chunk)
        *lines, self._buffer = self._buffer.split("\n")
        return self._parse_lines(lines)

    def finish(self) -> list[StreamItem]:
        """Flush whatever is left once the body has ended."""
        self._buffer += self._decoder.decode(b"", final=True)
        rest, self._buffer = self._buffer, ""
        return self._parse_lines([rest]) if rest else []

    def _parse_lines(self, lines: list[str]) -> list[StreamItem]:
        items: list[StreamItem] = []
        for line in lines:
            item = self._parse_line(line.rstrip("\r"))
            if item is not None:
                items.append(item)
        return items

    @staticmethod
    def _parse_line(line: str) -> StreamItem | None:
        if not line.startswith(DATA_PREFIX):
            return None
        payload = line[len(DATA_PREFIX):]
        if payload == DONE_SENTINEL:
            return None
        try:
            return GenerationResponse.model_validate_json(payload)
        except ValidationError as exc:
            logger.warning("Skipping undecodable stream line: %s", exc)
            error = JsonError(f"Invalid stream message: {exc}")
            error.__cause__ = exc
            return error


async def decode_stream(chunks: AsyncIterable[bytes]) -> AsyncIterator[StreamItem]:
    """Yield parsed responses (or per-line JsonError) in arrival order.

    A transport failure is yielded as a final HttpError.
    """
    decoder = StreamDecoder()
    try:
        async for chunk in chunks:
            for item in decoder.feed(chunk):
                yield item
    except httpx.HTTPError as exc:
        logger.warning("Stream interrupted: %s", exc)
        error = HttpError(str(exc))
        error.__cause__ = exc
        yield error
        return
    for item in decoder.finish():
        yield item


_pending_closes: set[asyncio.Task] = set()


def _release_dropped(stack: AsyncExitStack) -> None:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.warning("Stream dropped outside an event loop; connection left open")
        return
    task = loop.create_task(stack.aclose())
    _pending_closes.add(task)
    task.add_done_callback(_pending_closes.discard)


class ResponseStream:
    """Async iterator over a streamed response that owns its connection.

    The connection is released once the stream is exhausted, on ``aclose()``,
    on leaving ``async with``, or when the stream is garbage collected.
    """

    def __init__(self, response: httpx.Response, stack: AsyncExitStack) -> None:
        self._items = decode_stream(response.aiter_bytes())
        self._stack = stack
        self._finalizer = weakref.finalize(self, _release_dropped, stack)

    def __aiter__(self) -> "ResponseStream":
        return self

    async def __anext__(self) -> StreamItem:
        try:
            return await self._items.__anext__()
        except StopAsyncIteration:
            await self.aclose()
            raise

    async def aclose(self) -> None:
        """Release the connection; safe to call more than once."""
        if self._finalizer.detach() is None:
            return
        try:
            await self._items.aclose()
        finally:
            await self._stack.aclose()

    async def __aenter__(self) -> "ResponseStream":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

"""
Ollama client handle.
One LLMClient is bound to one endpoint; build a new one when the endpoint changes.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

import httpx
from ollama import Client, ResponseError

logger = logging.getLogger(__name__)

_REMOTE_ERRORS = (ResponseError, httpx.HTTPError, ConnectionError)


class RemoteCallError(Exception):
    """The Ollama server could not be reached or answered with an error."""


def _field(obj: Any, name: str) -> Any:
    # ollama >= 0.4 returns pydantic objects, older releases return dicts
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _chunk_content(chunk: Any) -> str:
    message = _field(chunk, 'message')
    if message is None:
        return ''
    return _field(message, 'content') or ''


class ChatStream:
    """
    Iterable over the content tokens of one streamed chat reply.

    cancel() stops the stream; tokens already yielded stay with the caller.
    """

    def __init__(self, chunks: Iterable[Any]):
        self._chunks = iter(chunks)
        self.cancelled = False

    def __iter__(self) -> Iterator[str]:
        try:
            for chunk in self._chunks:
                if self.cancelled:
                    break
                content = _chunk_content(chunk)
                if content:
                    yield content
        except _REMOTE_ERRORS as e:
            logger.error(f"Streaming error: {str(e)}")
            raise RemoteCallError(str(e)) from e

    def cancel(self) -> None:
        self.cancelled = True
        close = getattr(self._chunks, 'close', None)
        if close is not None:
            close()
        logger.info("Chat stream cancelled")


class LLMClient:
    """Ollama client bound to a single endpoint."""

    def __init__(self, host: str, timeout: Optional[float] = None):
        """
        Args:
            host: Server address, e.g. http://localhost:11434
            timeout: Optional request timeout in seconds (no timeout when None)

        Raises:
            RemoteCallError: the host cannot be parsed (e.g. bad port)
        """
        self.host = host.strip().rstrip('/')
        kwargs: Dict[str, Any] = {}
        if timeout is not None:
            kwargs['timeout'] = timeout
        try:
            self.client = Client(host=self.host, **kwargs)
        except (ValueError, httpx.InvalidURL) as e:
            logger.error(f"Unusable host {self.host!r}: {str(e)}")
            raise RemoteCallError(str(e)) from e
        logger.info(f"Ollama client initialized: {self.host}")

    def list_models(self) -> List[str]:
        """Return the names of the models installed on the server, in server order."""
        try:
            response = self.client.list()
        except _REMOTE_ERRORS as e:
            logger.error(f"Model listing error: {str(e)}")
            raise RemoteCallError(str(e)) from e

        names = []
        for entry in _field(response, 'models') or []:
            name = _field(entry, 'model') or _field(entry, 'name')
            if name:
                names.append(name)
        logger.debug(f"Models on {self.host}: {names}")
        return names

    def stream_chat(self, model: str, messages: List[Dict[str, str]]) -> ChatStream:
        """
        Start a streamed chat completion.

        Args:
            model: Model name
            messages: Full message list, system entry first

        Returns:
            ChatStream yielding content chunks as they arrive
        """
        logger.debug(f"Streaming request to {model} with {len(messages)} messages")
        try:
            chunks = self.client.chat(model=model, messages=messages, stream=True)
        except _REMOTE_ERRORS as e:
            logger.error(f"Chat error: {str(e)}")
            raise RemoteCallError(str(e)) from e
        return ChatStream(chunks)

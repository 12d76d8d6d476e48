"""LLM client for OpenAI-compatible chat completion endpoints.

One call to `complete` is one outbound request for exactly one completion.
Failures are reported as:
1. CompletionServiceError - transport, HTTP status or undecodable body
2. NoOutput - the service answered without usable text
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from journai.config import settings
from journai.errors import CompletionServiceError, NoOutput

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


@dataclass
class LLMResponse:
    """Structured LLM response."""
    content: str
    usage: Optional[dict] = None      # Token usage
    finish_reason: Optional[str] = None


class LLMClient:
    """Async-wrapped client for OpenAI-compatible LLM APIs using requests."""

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        temperature: float | None = None,
        max_concurrent: int | None = None,
        max_retries: int | None = None,
    ) -> None:
        self.base_url = (base_url or settings.llm_base_url).rstrip("/")
        self.model = model or settings.llm_model
        self.api_key = api_key or settings.llm_api_key
        self.timeout = timeout or settings.llm_timeout
        self.temperature = settings.llm_temperature if temperature is None else temperature
        self.max_concurrent = max_concurrent or settings.llm_max_concurrent
        self.max_retries = settings.llm_max_retries if max_retries is None else max_retries

        self._semaphore = asyncio.Semaphore(self.max_concurrent)
        self._session: requests.Session | None = None
        self._session_lock = threading.Lock()

    def _get_session(self) -> requests.Session:
        """Get or create requests session with connection pooling."""
        with self._session_lock:
            if self._session is None:
                self._session = requests.Session()
                self._session.headers.update({
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                })
                adapter = HTTPAdapter(
                    pool_connections=self.max_concurrent,
                    pool_maxsize=self.max_concurrent * 2,
                    max_retries=Retry(
                        total=self.max_retries,
                        backoff_factor=0.5,
                        status_forcelist=RETRY_STATUS_CODES,
                        allowed_methods=frozenset({"POST"}),
                        raise_on_status=False,
                    ),
                )
                self._session.mount("http://", adapter)
                self._session.mount("https://", adapter)
            return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        with self._session_lock:
            if self._session is not None:
                self._session.close()
                self._session = None

    def _sync_chat(
        self,
        messages: list[dict[str, str]],
        **kwargs: Any,
    ) -> LLMResponse:
        """Synchronous chat request (runs in thread)."""
        session = self._get_session()

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "n": 1,
            **kwargs,
        }

        try:
            response = session.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            body = e.response.text[:500] if e.response is not None else ""
            raise CompletionServiceError(
                f"completion service returned {status_code}: {body}",
                status_code=status_code,
            ) from e
        except (requests.RequestException, ValueError) as e:
            raise CompletionServiceError(f"completion request failed: {e}") from e

        if not isinstance(data, dict):
            raise CompletionServiceError(f"unexpected completion payload: {data!r}")

        choices = data.get("choices") or []
        if not isinstance(choices, list) or not choices:
            logger.error(f"LLM returned empty choices: {data}")
            raise NoOutput("completion service returned no choices")

        choice = choices[0]
        if not isinstance(choice, dict):
            raise NoOutput(f"unexpected completion choice: {choice!r}")
        message = choice.get("message")
        content = message.get("content") if isinstance(message, dict) else None

        # Some APIs use "text" instead of "content"
        if content is None:
            content = choice.get("text")

        if not isinstance(content, str) or not content.strip():
            logger.error(f"LLM returned no content. Full response: {data}")
            raise NoOutput("completion service returned an empty message")

        return LLMResponse(
            content=content,
            usage=data.get("usage"),
            finish_reason=choice.get("finish_reason"),
        )

    async def chat(
        self,
        messages: list[dict[str, str]],
        **kwargs: Any,
    ) -> LLMResponse:
        """Send chat messages and get the first completion."""
        async with self._semaphore:
            try:
                # Run sync request in thread pool to not block event loop
                return await asyncio.to_thread(self._sync_chat, messages, **kwargs)
            except CompletionServiceError as e:
                logger.error(f"LLM API error: {e}")
                raise
            except NoOutput as e:
                logger.warning(f"LLM produced no output: {e}")
                raise

    async def complete(self, messages: list[dict[str, str]], **kwargs: Any) -> str:
        """Return the text of the first completion for the given messages."""
        response = await self.chat(messages, **kwargs)
        if isinstance(response.usage, dict):
            logger.debug(
                f"Completion used {response.usage.get('prompt_tokens')} prompt "
                f"and {response.usage.get('completion_tokens')} completion tokens"
            )
        if response.finish_reason and response.finish_reason != "stop":
            logger.warning(f"Completion finished with reason: {response.finish_reason}")
        return response.content


# Global client instance
_llm_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


async def close_llm_client() -> None:
    """Close the global LLM client."""
    global _llm_client
    if _llm_client is not None:
        await _llm_client.close()
        _llm_client = None

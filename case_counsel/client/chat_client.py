"""Async client for the assistant proxy.

Sends conversations to the ``analyze-case`` endpoint, decodes streamed chat
replies fragment by fragment, and parses structured case analyses.
"""

import json
import logging
import re
from collections.abc import Callable, Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from case_counsel.client.config import ClientConfig, get_client_config
from case_counsel.client.session import UserSession
from case_counsel.models.schemas import AnalysisData, CaseAnalysis, ChatMessage, RequestType
from case_counsel.streaming.decoder import DeltaCallback, decode_stream

logger = logging.getLogger(__name__)

EXPLAIN_IN_DETAIL = "Explain in Detail"

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


class ChatTransportError(Exception):
    """Raised when a chat request fails before streaming starts."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AnalysisError(Exception):
    """Raised when a case analysis cannot be produced."""


def build_case_prompt(description: str, category: str = "", offence: str = "") -> str:
    """Compose the analysis prompt; empty category or offence lines are left out."""
    prompt = f"Case Description: {description}"
    if category:
        prompt += f"\nCase Category: {category}"
    if offence:
        prompt += f"\nOffence Type: {offence}"
    return prompt


def case_title(category: str = "", offence: str = "") -> str:
    return f"{category or 'Case'} - {offence or 'Analysis'}"


def strip_code_fences(content: str) -> str:
    """Remove markdown code fences the model sometimes wraps JSON in."""
    return _FENCE.sub("", _JSON_FENCE.sub("", content)).strip()


def completion_content(data: Any) -> str:
    """Return ``choices[0].message.content`` of a completion, or ``""``."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


def parse_analysis(content: str) -> AnalysisData:
    """Parse model output into ``AnalysisData``.

    Raises:
        AnalysisError: If the content is not a JSON object of the expected shape.
    """
    try:
        return AnalysisData.model_validate(json.loads(strip_code_fences(content)))
    except json.JSONDecodeError as e:
        raise AnalysisError(f"Analysis response is not valid JSON: {e}") from e
    except ValidationError as e:
        raise AnalysisError(f"Analysis response has unexpected shape: {e}") from e


class AssistantClient:
    """Client for the assistant proxy.

    When a ``UserSession`` is attached, every call first checks that the
    session is open and the profile allows access. Nothing is sent otherwise.

    Concurrent calls are independent: each streamed reply gets its own
    decoder.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: UserSession | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or get_client_config()
        self._session = session
        self._http = http_client or httpx.AsyncClient(timeout=self._config.timeout)

    async def __aenter__(self) -> "AssistantClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def session(self) -> UserSession | None:
        return self._session

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.publishable_key}",
        }

    def _body(self, request_type: RequestType, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        return {
            "type": request_type,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }

    def _check_access(self) -> None:
        if self._session is not None:
            self._session.check_access()

    async def stream_chat(
        self,
        messages: Sequence[ChatMessage],
        on_delta: DeltaCallback | None = None,
        is_active: Callable[[], bool] | None = None,
    ) -> str:
        """Send a chat conversation and stream the reply.

        Args:
            messages: Conversation so far, oldest first.
            on_delta: Called with the whole reply so far after each fragment.
            is_active: Liveness check; once it returns False the callback is
                no longer invoked, though decoding runs to the end.

        Returns:
            The complete assistant reply.

        Raises:
            ChatTransportError: If the proxy is unreachable or answers with a
                non-success status. No callback has been invoked in that case.
        """
        self._check_access()

        def deliver(text: str) -> None:
            if on_delta is None:
                return
            if is_active is not None and not is_active():
                return
            on_delta(text)

        try:
            async with self._http.stream(
                "POST",
                self._config.function_url,
                json=self._body("chat", messages),
                headers={**self._headers(), "Accept": "text/event-stream"},
            ) as response:
                if not response.is_success:
                    logger.warning(f"Chat request rejected: HTTP {response.status_code}")
                    raise ChatTransportError("Chat failed", status_code=response.status_code)
                return await decode_stream(response.aiter_bytes(), deliver)
        except httpx.RequestError as e:
            raise ChatTransportError(f"Connection failed: {e}") from e

    async def explain_in_detail(
        self,
        history: Sequence[ChatMessage],
        index: int,
        on_delta: DeltaCallback | None = None,
        is_active: Callable[[], bool] | None = None,
    ) -> str:
        """Ask for an expanded version of the answer at ``history[index]``.

        The conversation is cut after that answer and an "Explain in Detail"
        user turn is appended before streaming.

        Raises:
            ValueError: If ``index`` does not point at a non-empty message.
        """
        if not 0 <= index < len(history) or not history[index].content:
            raise ValueError(f"No answer at index {index} to explain")
        messages = [*history[: index + 1], ChatMessage(role="user", content=EXPLAIN_IN_DETAIL)]
        return await self.stream_chat(messages, on_delta, is_active)

    async def analyze_case(
        self,
        description: str,
        category: str = "",
        offence: str = "",
    ) -> CaseAnalysis:
        """Request a structured legal analysis of a new case.

        Args:
            description: Free-text description of the case.
            category: Optional case category.
            offence: Optional offence type.

        Returns:
            The parsed analysis with its derived title and prompt.

        Raises:
            AnalysisError: If the request fails or the reply cannot be parsed.
        """
        self._check_access()
        prompt = build_case_prompt(description, category, offence)

        try:
            response = await self._http.post(
                self._config.function_url,
                json=self._body("analyze", [ChatMessage(role="user", content=prompt)]),
                headers=self._headers(),
            )
        except httpx.RequestError as e:
            raise AnalysisError(f"Connection failed: {e}") from e

        if not response.is_success:
            try:
                message = response.json().get("error") or "Analysis failed"
            except (ValueError, AttributeError):
                message = "Analysis failed"
            logger.warning(f"Analysis rejected: HTTP {response.status_code} {message}")
            raise AnalysisError(message)

        try:
            data = response.json()
        except ValueError as e:
            raise AnalysisError("Analysis response is not valid JSON") from e

        analysis = parse_analysis(completion_content(data))
        return CaseAnalysis(title=case_title(category, offence), prompt=prompt, analysis=analysis)

    async def aclose(self) -> None:
        await self._http.aclose()

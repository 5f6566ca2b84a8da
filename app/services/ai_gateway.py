"""
Client for the hosted chat-completion gateway.

One call, one attempt: ``chat_completion`` POSTs a message list to
``{AI_GATEWAY_URL}/chat/completions`` and returns the first choice's content.
Upstream failures are classified into the error taxonomy in ``app.errors``;
nothing is retried here.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.errors import GatewayNotConfigured, PaymentRequired, RateLimited, UpstreamFailure

logger = logging.getLogger(__name__)

Message = Dict[str, str]


def system_message(content: str) -> Message:
    return {"role": "system", "content": content}


def user_message(content: str) -> Message:
    return {"role": "user", "content": content}


def _extract_error_message(resp: httpx.Response) -> Optional[str]:
    """Best-effort pull of a message out of an upstream error body."""
    try:
        body = resp.json()
    except ValueError:
        text = resp.text.strip()
        return text[:500] or None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if body.get("message"):
            return str(body["message"])
    return None


class AIGatewayClient:
    """
    Thin async wrapper around the gateway's OpenAI-compatible endpoint.

    A fresh ``httpx.AsyncClient`` is opened per call so concurrent requests
    share nothing.  *transport* exists so tests can plug in
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise GatewayNotConfigured()
        self.api_key = api_key
        self.base_url = (base_url or settings.AI_GATEWAY_URL).rstrip("/")
        self.model = model or settings.AI_MODEL
        self.timeout = httpx.Timeout(
            timeout if timeout is not None else settings.AI_GATEWAY_TIMEOUT,
            connect=10.0,
        )
        self._transport = transport

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def chat_completion(
        self,
        messages: List[Message],
        temperature: float,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Send *messages* and return the assistant's reply text.

        Raises:
            RateLimited: upstream answered 429.
            PaymentRequired: upstream answered 402.
            UpstreamFailure: any other non-2xx, a transport error, or a body
                without ``choices[0].message.content``.
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    self.completions_url, headers=self._headers(), json=payload
                )
        except httpx.HTTPError as exc:
            logger.error("AI gateway request failed: %s", exc)
            raise UpstreamFailure(f"AI gateway unreachable: {exc}") from exc

        if resp.status_code == 429:
            logger.warning("AI gateway rate limited the request")
            raise RateLimited()
        if resp.status_code == 402:
            logger.warning("AI gateway reported payment required")
            raise PaymentRequired()
        if not resp.is_success:
            logger.error("AI gateway error: %d %s", resp.status_code, resp.text[:500])
            detail = _extract_error_message(resp)
            raise UpstreamFailure(
                f"AI gateway error ({resp.status_code}): {detail}" if detail else None,
                upstream_status=resp.status_code,
            )

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("AI gateway returned a malformed completion: %s", exc)
            raise UpstreamFailure(
                "AI gateway returned a malformed response",
                upstream_status=resp.status_code,
            ) from exc

        if not isinstance(content, str):
            raise UpstreamFailure(
                "AI gateway returned a malformed response",
                upstream_status=resp.status_code,
            )
        return content


def check_gateway_config() -> Dict[str, Any]:
    """Configuration summary for the health endpoint.  Makes no network call."""
    return {
        "configured": settings.gateway_configured,
        "base_url": settings.AI_GATEWAY_URL,
        "model": settings.AI_MODEL,
    }


def get_gateway_client() -> AIGatewayClient:
    """
    FastAPI dependency / factory building a client from settings.

    Raises ``GatewayNotConfigured`` when no API key is set.
    """
    return AIGatewayClient(api_key=settings.AI_GATEWAY_API_KEY or "")

"""
Generation request handling: documentation generation and the help chatbot.

Both services follow the same shape:

    validate → build prompt → one gateway call → text

``generate`` / ``reply`` raise ``DocGenError`` subclasses; ``handle``
wraps them and returns a result object instead, so callers get either the
full text or an error with a status hint, never a partial result.

Validation and prompt composition happen before the gateway client is
created, so a bad request never touches the network (or even needs an API
key).
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Optional

from app.config import settings
from app.errors import DocGenError, MissingField
from app.models.schemas import ChatContext, GenerationRequest
from app.services.ai_gateway import AIGatewayClient, get_gateway_client, system_message, user_message
from app.services.prompt_composer import DEFAULT_LANGUAGE, compose

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], AIGatewayClient]


# ---------------------------------------------------------------------------
# Result dataclasses
# ---------------------------------------------------------------------------

@dataclasses.dataclass
class GenerationResult:
    """Either ``documentation`` is set, or ``error`` (plus a status hint) is."""

    documentation: Optional[str] = None
    error: Optional[str] = None
    status_hint: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_error(cls, exc: DocGenError) -> "GenerationResult":
        return cls(error=exc.message, status_hint=exc.status_code)


@dataclasses.dataclass
class ChatResult:
    message: Optional[str] = None
    session_id: Optional[str] = None
    error: Optional[str] = None
    status_hint: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Documentation generation
# ---------------------------------------------------------------------------

def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class DocumentationGenerator:
    """Turns a ``GenerationRequest`` into generated documentation."""

    def __init__(self, client_factory: ClientFactory = get_gateway_client) -> None:
        self._client_factory = client_factory

    def build_prompt(self, request: GenerationRequest) -> str:
        """
        Validate *request* and compose its system prompt.

        Raises ``MissingField`` / ``UnknownTemplate``.
        """
        if _is_blank(request.template) or _is_blank(request.input):
            raise MissingField()

        return compose(
            request.template,
            request.input.strip(),
            audience=request.audience,
            detail_level=request.detail_level,
            output_format=request.format,
            language=request.language or DEFAULT_LANGUAGE,
        )

    async def generate(self, request: GenerationRequest) -> str:
        """Generate documentation text; raises ``DocGenError`` on any failure."""
        logger.info(
            "Generating documentation: template=%s audience=%s detail=%s format=%s language=%s",
            request.template,
            request.audience,
            request.detail_level,
            request.format,
            request.language,
        )
        prompt = self.build_prompt(request)

        client = self._client_factory()
        documentation = await client.chat_completion(
            [system_message(prompt)],
            temperature=settings.GENERATION_TEMPERATURE,
        )

        logger.info("Documentation generated successfully (%d chars)", len(documentation))
        return documentation

    async def handle(self, request: GenerationRequest) -> GenerationResult:
        try:
            return GenerationResult(documentation=await self.generate(request))
        except DocGenError as exc:
            logger.warning(
                "generate-documentation failed: %s (%d)", exc.message, exc.status_code
            )
            return GenerationResult.from_error(exc)


# ---------------------------------------------------------------------------
# Chat assistant
# ---------------------------------------------------------------------------

_CHAT_PERSONA_PROMPT = """\
You are Elon, a friendly AI assistant for TechDocGen, a technical documentation generator. Your role is to:
1. Help users choose the right documentation template
2. Provide suggestions for improving their documentation
3. Guide them through the document creation process
4. Answer questions about technical writing best practices

Be conversational, helpful, and concise. If a user mentions a specific topic, suggest which template \
would work best (API Guide, Code Comments, Setup Instructions, Troubleshooting Guide, or User Manual).\
"""

_CHAT_TEMPLATE_CONTEXT = '\n\nThe user is currently working with the "{template}" template.'
_CHAT_INPUT_CONTEXT = '\n\nTheir current input is: "{input}"'


def build_chat_system_prompt(context: Optional[ChatContext]) -> str:
    """Persona preamble plus whatever the user is currently working on."""
    prompt = _CHAT_PERSONA_PROMPT
    if context is None:
        return prompt
    if context.current_template:
        prompt += _CHAT_TEMPLATE_CONTEXT.format(template=context.current_template)
    if context.current_input:
        prompt += _CHAT_INPUT_CONTEXT.format(input=context.current_input)
    return prompt


class ChatAssistant:
    """Help chatbot: answers one user message per call, keeps no history."""

    def __init__(self, client_factory: ClientFactory = get_gateway_client) -> None:
        self._client_factory = client_factory

    async def reply(
        self,
        message: Optional[str],
        context: Optional[ChatContext] = None,
    ) -> str:
        if _is_blank(message):
            raise MissingField("Message is required")

        system_prompt = build_chat_system_prompt(context)

        client = self._client_factory()
        return await client.chat_completion(
            [system_message(system_prompt), user_message(message)],
            temperature=settings.CHAT_TEMPERATURE,
            max_tokens=settings.CHAT_MAX_TOKENS,
        )

    async def handle(
        self,
        message: Optional[str],
        context: Optional[ChatContext] = None,
        session_id: Optional[str] = None,
    ) -> ChatResult:
        try:
            answer = await self.reply(message, context)
            return ChatResult(message=answer, session_id=session_id)
        except DocGenError as exc:
            logger.warning("chat-assistant failed: %s (%d)", exc.message, exc.status_code)
            return ChatResult(
                session_id=session_id,
                error=exc.message,
                status_hint=exc.status_code,
            )

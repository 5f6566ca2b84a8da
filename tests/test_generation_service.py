"""Tests for the generation request handler and chat assistant services."""
import pytest

from app.config import settings
from app.errors import GatewayNotConfigured, MissingField, UnknownTemplate
from app.models.schemas import ChatContext, GenerationRequest
from app.services.ai_gateway import AIGatewayClient
from app.services.generation import (
    ChatAssistant,
    DocumentationGenerator,
    build_chat_system_prompt,
)
from app.services.prompt_composer import MARKDOWN_INSTRUCTION
from tests.conftest import completion_body


def _request(**overrides) -> GenerationRequest:
    fields = {
        "template": "setup-instructions",
        "input": "Docker",
        "audience": "beginners",
        "detailLevel": "brief",
        "format": "markdown",
        "language": "english",
    }
    fields.update(overrides)
    return GenerationRequest(**fields)


def _exploding_factory() -> AIGatewayClient:
    raise AssertionError("gateway client must not be created")


@pytest.mark.asyncio
async def test_empty_request_is_missing_field_without_network():
    generator = DocumentationGenerator(_exploding_factory)
    result = await generator.handle(GenerationRequest())
    assert not result.ok
    assert result.error == MissingField.default_message
    assert result.status_hint == 400
    assert result.documentation is None


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"input": "   "},
    {"template": ""},
    {"input": None},
])
async def test_blank_fields_are_missing_field(overrides):
    generator = DocumentationGenerator(_exploding_factory)
    with pytest.raises(MissingField):
        await generator.generate(_request(**overrides))


@pytest.mark.asyncio
async def test_unknown_template_without_network():
    generator = DocumentationGenerator(_exploding_factory)
    result = await generator.handle(_request(template="not-a-template", input="x"))
    assert result.error == UnknownTemplate.default_message
    assert result.status_hint == 400


@pytest.mark.asyncio
async def test_successful_generation_sends_single_system_message(gateway):
    gateway.respond_with(200, completion_body("## Installing Docker"))
    generator = DocumentationGenerator(gateway.make_client)

    result = await generator.handle(_request())

    assert result.ok
    assert result.documentation == "## Installing Docker"
    assert gateway.call_count == 1
    payload = gateway.last_payload()
    assert payload["temperature"] == settings.GENERATION_TEMPERATURE
    assert "max_tokens" not in payload
    assert len(payload["messages"]) == 1
    message = payload["messages"][0]
    assert message["role"] == "system"
    assert "Assume no prior knowledge" in message["content"]
    assert "essential steps only" in message["content"]
    assert message["content"].endswith(MARKDOWN_INSTRUCTION)


@pytest.mark.asyncio
async def test_input_is_trimmed(gateway):
    generator = DocumentationGenerator(gateway.make_client)
    await generator.handle(_request(input="  Docker \n"))
    assert "setup instructions for Docker." in gateway.last_payload()["messages"][0]["content"]


@pytest.mark.asyncio
async def test_rate_limited_result_without_retry(gateway):
    gateway.respond_with(429, {"error": "rate limited"})
    generator = DocumentationGenerator(gateway.make_client)

    result = await generator.handle(_request())

    assert result.status_hint == 429
    assert "Rate limit exceeded" in result.error
    assert result.documentation is None
    assert gateway.call_count == 1


@pytest.mark.asyncio
async def test_payment_required_result(gateway):
    gateway.respond_with(402, {})
    result = await DocumentationGenerator(gateway.make_client).handle(_request())
    assert result.status_hint == 402
    assert "Payment required" in result.error


@pytest.mark.asyncio
async def test_upstream_failure_result(gateway):
    gateway.respond_with(500, {"error": "internal"})
    result = await DocumentationGenerator(gateway.make_client).handle(_request())
    assert result.status_hint == 502
    assert result.documentation is None


@pytest.mark.asyncio
async def test_missing_api_key_is_reported_after_validation():
    def _unconfigured() -> AIGatewayClient:
        return AIGatewayClient(api_key="")

    generator = DocumentationGenerator(_unconfigured)

    bad = await generator.handle(GenerationRequest())
    assert bad.status_hint == 400

    result = await generator.handle(_request())
    assert result.status_hint == 500
    assert result.error == GatewayNotConfigured.default_message


# ---------------------------------------------------------------------------
# Chat assistant
# ---------------------------------------------------------------------------

def test_chat_system_prompt_without_context():
    prompt = build_chat_system_prompt(None)
    assert prompt.startswith("You are Elon, a friendly AI assistant for TechDocGen")
    assert "currently working with" not in prompt


def test_chat_system_prompt_with_context():
    prompt = build_chat_system_prompt(
        ChatContext(currentTemplate="api-guide", currentInput="Payments API")
    )
    assert prompt.endswith(
        '\n\nThe user is currently working with the "api-guide" template.'
        '\n\nTheir current input is: "Payments API"'
    )


@pytest.mark.asyncio
async def test_chat_reply_sends_system_and_user_messages(gateway):
    gateway.respond_with(200, completion_body("Try the API Guide template."))
    assistant = ChatAssistant(gateway.make_client)

    result = await assistant.handle(
        "Which template for my REST API?",
        ChatContext(currentTemplate="api-guide"),
        session_id="session-1",
    )

    assert result.ok
    assert result.message == "Try the API Guide template."
    assert result.session_id == "session-1"
    payload = gateway.last_payload()
    assert payload["max_tokens"] == settings.CHAT_MAX_TOKENS
    assert payload["temperature"] == settings.CHAT_TEMPERATURE
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    assert payload["messages"][1]["content"] == "Which template for my REST API?"
    assert '"api-guide" template' in payload["messages"][0]["content"]


@pytest.mark.asyncio
async def test_chat_blank_message_without_network():
    result = await ChatAssistant(_exploding_factory).handle("  ", None, "s")
    assert result.status_hint == 400
    assert result.session_id == "s"


@pytest.mark.asyncio
async def test_chat_rate_limited(gateway):
    gateway.respond_with(429, {})
    result = await ChatAssistant(gateway.make_client).handle("hello")
    assert result.status_hint == 429
    assert gateway.call_count == 1

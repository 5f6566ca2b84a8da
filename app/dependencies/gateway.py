"""
Gateway dependencies for FastAPI routes.

Routes receive a *factory* rather than a ready client so that request
validation runs first: a malformed request is rejected without needing an
API key or touching the network.  Tests override ``get_client_factory``
to plug in a mock transport.
"""
from __future__ import annotations

from fastapi import Depends

from app.services.ai_gateway import get_gateway_client
from app.services.generation import ChatAssistant, ClientFactory, DocumentationGenerator


def get_client_factory() -> ClientFactory:
    """Return the callable that builds a configured ``AIGatewayClient``."""
    return get_gateway_client


def get_documentation_generator(
    client_factory: ClientFactory = Depends(get_client_factory),
) -> DocumentationGenerator:
    return DocumentationGenerator(client_factory)


def get_chat_assistant(
    client_factory: ClientFactory = Depends(get_client_factory),
) -> ChatAssistant:
    return ChatAssistant(client_factory)

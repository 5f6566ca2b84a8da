"""Request and response schemas for TechDocGen."""
from app.models.schemas import (
    GenerationRequest,
    GenerationResponse,
    ErrorResponse,
    ChatContext,
    ChatRequest,
    ChatResponse,
    TemplateInfoResponse,
    GenerationOptionsResponse,
    HealthCheckResponse,
)

__all__ = [
    "GenerationRequest",
    "GenerationResponse",
    "ErrorResponse",
    "ChatContext",
    "ChatRequest",
    "ChatResponse",
    "TemplateInfoResponse",
    "GenerationOptionsResponse",
    "HealthCheckResponse",
]

"""
Error taxonomy for documentation generation.

Every error carries a human-readable message and the HTTP status it maps to.
Services raise these; ``handle()`` entry points turn them into result
objects and the routers turn results into JSON responses.
"""
from __future__ import annotations

from typing import Optional


class DocGenError(Exception):
    """Base class for all generation errors."""

    default_message: str = "Unknown error occurred"
    status_code: int = 500

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingField(DocGenError):
    """The client omitted a required field or sent it blank."""

    default_message = "Template and input are required"
    status_code = 400


class UnknownTemplate(DocGenError):
    """The template id is not one of the supported templates."""

    default_message = "Invalid template"
    status_code = 400

    def __init__(self, template_id: object = None, message: Optional[str] = None) -> None:
        self.template_id = template_id
        super().__init__(message)


class RateLimited(DocGenError):
    """Upstream returned 429. The caller may retry later."""

    default_message = "Rate limit exceeded. Please try again in a moment."
    status_code = 429


class PaymentRequired(DocGenError):
    """Upstream returned 402. Not retryable."""

    default_message = "Payment required. Please add credits to your workspace."
    status_code = 402


class UpstreamFailure(DocGenError):
    """Any other upstream error, including malformed completion bodies."""

    default_message = "Failed to generate documentation"
    status_code = 502

    def __init__(
        self,
        message: Optional[str] = None,
        upstream_status: Optional[int] = None,
    ) -> None:
        self.upstream_status = upstream_status
        super().__init__(message)


class GatewayNotConfigured(DocGenError):
    """No API key is available for the AI gateway."""

    default_message = "AI_GATEWAY_API_KEY is not configured"
    status_code = 500

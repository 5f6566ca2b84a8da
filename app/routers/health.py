"""
Health check endpoint.
"""
from fastapi import APIRouter
from datetime import datetime, timezone
import logging

from app.models.schemas import HealthCheckResponse
from app.services.ai_gateway import check_gateway_config

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=HealthCheckResponse)
async def health_check():
    """
    Health check endpoint to verify system status.

    Only inspects configuration; the gateway is never called, so polling this
    endpoint costs nothing upstream.

    Returns:
        HealthCheckResponse with status of the AI gateway configuration
    """
    gateway = check_gateway_config()
    gateway_status = "ok" if gateway["configured"] else "not_configured"
    if gateway_status != "ok":
        logger.warning("Health check: AI gateway API key is not configured")

    return HealthCheckResponse(
        status="healthy" if gateway_status == "ok" else "degraded",
        gateway=gateway_status,
        model=gateway["model"],
        timestamp=datetime.now(timezone.utc),
    )

"""
Template catalog endpoints.

Routes
------
GET /api/templates          — all templates in picker order → [TemplateInfoResponse]
GET /api/templates/{id}     — one template                  → TemplateInfoResponse
GET /api/options            — allowed parameter values      → GenerationOptionsResponse
"""
import logging
from typing import List

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.errors import UnknownTemplate
from app.models.schemas import ErrorResponse, GenerationOptionsResponse, TemplateInfoResponse
from app.services.template_catalog import (
    TemplateInfo,
    generation_options,
    get_template,
    list_templates,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(info: TemplateInfo) -> TemplateInfoResponse:
    return TemplateInfoResponse(id=info.id.value, name=info.name, placeholder=info.placeholder)


@router.get("/templates", response_model=List[TemplateInfoResponse])
async def get_templates():
    """List every supported documentation template."""
    return [_to_response(info) for info in list_templates()]


@router.get(
    "/templates/{template_id}",
    response_model=TemplateInfoResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_template_info(template_id: str):
    """Return a single template, or 404 if the id is unknown."""
    try:
        return _to_response(get_template(template_id))
    except UnknownTemplate:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": f"Template '{template_id}' not found."},
        )


@router.get("/options", response_model=GenerationOptionsResponse)
async def get_options():
    """Allowed audiences, detail levels, formats and languages, plus defaults."""
    return GenerationOptionsResponse(**generation_options())

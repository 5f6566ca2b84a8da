"""
Generation endpoints.

Routes
------
POST    /generate-documentation  — compose prompt + one gateway call → {"documentation", "filename"}
POST    /chat-assistant          — help chatbot reply                → {"message", "sessionId"}
OPTIONS on both                  — empty 200 with permissive CORS headers

Failures come back as ``{"error": "..."}`` with the status the error maps to
(400 missing field / unknown template, 402, 429, 502 upstream, 500 config).
"""
import logging
import time

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from app.dependencies.gateway import get_chat_assistant, get_documentation_generator
from app.models.schemas import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    GenerationRequest,
    GenerationResponse,
)
from app.services.generation import ChatAssistant, DocumentationGenerator
from app.services.template_catalog import download_filename

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    402: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=CORS_HEADERS,
    )


# ---------------------------------------------------------------------------
# POST /generate-documentation
# ---------------------------------------------------------------------------

@router.post(
    "/generate-documentation",
    response_model=GenerationResponse,
    responses=_ERROR_RESPONSES,
    status_code=status.HTTP_200_OK,
)
async def generate_documentation(
    request: GenerationRequest,
    generator: DocumentationGenerator = Depends(get_documentation_generator),
):
    """
    Build the template prompt for *request* and return the model's
    documentation along with a suggested download file name.  Exactly one
    upstream call on a valid request, none on an invalid one.  Nothing is
    persisted.
    """
    result = await generator.handle(request)
    if not result.ok:
        return _error_response(
            result.error, result.status_hint or status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return JSONResponse(
        content=GenerationResponse(
            documentation=result.documentation,
            filename=download_filename(
                request.template, request.format, int(time.time() * 1000)
            ),
        ).model_dump(),
        headers=CORS_HEADERS,
    )


@router.options("/generate-documentation", include_in_schema=False)
async def generate_documentation_preflight():
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


# ---------------------------------------------------------------------------
# POST /chat-assistant
# ---------------------------------------------------------------------------

@router.post(
    "/chat-assistant",
    response_model=ChatResponse,
    responses=_ERROR_RESPONSES,
    status_code=status.HTTP_200_OK,
)
async def chat_assistant(
    request: ChatRequest,
    assistant: ChatAssistant = Depends(get_chat_assistant),
):
    """
    Answer a help question, optionally aware of the template and input the
    user is currently working on.  The session id is echoed back untouched.
    """
    result = await assistant.handle(request.message, request.context, request.session_id)
    if not result.ok:
        return _error_response(
            result.error, result.status_hint or status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return JSONResponse(
        content=ChatResponse(message=result.message, session_id=result.session_id).model_dump(
            by_alias=True
        ),
        headers=CORS_HEADERS,
    )


@router.options("/chat-assistant", include_in_schema=False)
async def chat_assistant_preflight():
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)

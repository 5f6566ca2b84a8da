"""
Pydantic schemas for request/response validation.

Request fields are optional at the schema level on purpose: a missing or
blank template/input must surface as a 400 ``{"error": ...}`` from the
service layer, not as a framework validation error.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Any
from datetime import datetime

from app.services.prompt_composer import DEFAULT_LANGUAGE, Audience, DetailLevel, OutputFormat


# Generation Schemas
class GenerationRequest(BaseModel):
    """Body of POST /generate-documentation."""

    template: Optional[str] = None
    input: Optional[str] = None
    audience: Optional[str] = Audience.DEVELOPERS.value
    detail_level: Optional[str] = Field(DetailLevel.MODERATE.value, alias="detailLevel")
    format: Optional[str] = OutputFormat.MARKDOWN.value
    language: Optional[str] = DEFAULT_LANGUAGE

    model_config = ConfigDict(populate_by_name=True)


class GenerationResponse(BaseModel):
    """Successful generation, with a suggested file name for saving it."""

    documentation: str
    filename: str


class ErrorResponse(BaseModel):
    """Every failure is returned in this shape."""

    error: str


# Chat Assistant Schemas
class ChatContext(BaseModel):
    """What the user is currently working on, if anything."""

    current_template: Optional[str] = Field(None, alias="currentTemplate")
    current_input: Optional[str] = Field(None, alias="currentInput")

    model_config = ConfigDict(populate_by_name=True)


class ChatRequest(BaseModel):
    """Body of POST /chat-assistant."""

    message: Optional[str] = None
    context: Optional[ChatContext] = None
    session_id: Optional[str] = Field(None, alias="sessionId")

    model_config = ConfigDict(populate_by_name=True)


class ChatResponse(BaseModel):
    """Assistant reply, echoing the caller's session id."""

    message: str
    session_id: Optional[str] = Field(None, alias="sessionId")

    model_config = ConfigDict(populate_by_name=True)


# Catalog Schemas
class TemplateInfoResponse(BaseModel):
    """One entry of the template picker."""

    id: str
    name: str
    placeholder: str

    model_config = ConfigDict(from_attributes=True)


class GenerationOptionsResponse(BaseModel):
    """Allowed values and defaults for the generation parameters."""

    audiences: List[str]
    detail_levels: List[str]
    formats: List[str]
    languages: List[str]
    defaults: Dict[str, Any]


# Health Schemas
class HealthCheckResponse(BaseModel):
    """Schema for health check response."""

    status: str
    gateway: str
    model: str
    timestamp: datetime

"""
Static catalog of documentation templates and generation options.

Serves the metadata a client needs to render its template picker and
option selectors without hard-coding them.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Optional, Union

from app.services.prompt_composer import (
    DEFAULT_LANGUAGE,
    Audience,
    DetailLevel,
    OutputFormat,
    TemplateId,
    parse_template_id,
)


@dataclasses.dataclass(frozen=True)
class TemplateInfo:
    id: TemplateId
    name: str
    placeholder: str


_TEMPLATES: Dict[TemplateId, TemplateInfo] = {
    TemplateId.API_GUIDE: TemplateInfo(
        TemplateId.API_GUIDE,
        "API Guide",
        "Enter API name or feature (e.g., REST API, GraphQL)",
    ),
    TemplateId.CODE_COMMENTS: TemplateInfo(
        TemplateId.CODE_COMMENTS,
        "Code Comments",
        "Paste your code snippet here",
    ),
    TemplateId.SETUP_INSTRUCTIONS: TemplateInfo(
        TemplateId.SETUP_INSTRUCTIONS,
        "Setup Instructions",
        "Enter software/tool name (e.g., Docker, Node.js)",
    ),
    TemplateId.TROUBLESHOOTING: TemplateInfo(
        TemplateId.TROUBLESHOOTING,
        "Troubleshooting Guide",
        "Describe the issue (e.g., Connection timeout error)",
    ),
    TemplateId.USER_MANUAL: TemplateInfo(
        TemplateId.USER_MANUAL,
        "User Manual Intro",
        "Enter tool/product name",
    ),
}

# Offered in the language picker.  The composer itself accepts any label.
SUPPORTED_LANGUAGES: List[str] = [
    "english",
    "spanish",
    "french",
    "german",
    "chinese",
    "japanese",
    "portuguese",
    "russian",
    "arabic",
    "hindi",
]


def list_templates() -> List[TemplateInfo]:
    """All templates in picker order."""
    return [_TEMPLATES[t] for t in TemplateId]


def get_template(template_id: Union[str, TemplateId, None]) -> TemplateInfo:
    """Look up a template; raises ``UnknownTemplate`` for unknown ids."""
    return _TEMPLATES[parse_template_id(template_id)]


def generation_options() -> Dict[str, Any]:
    """Allowed values and defaults for every generation parameter."""
    return {
        "audiences": [a.value for a in Audience],
        "detail_levels": [d.value for d in DetailLevel],
        "formats": [f.value for f in OutputFormat],
        "languages": list(SUPPORTED_LANGUAGES),
        "defaults": {
            "audience": Audience.DEVELOPERS.value,
            "detail_level": DetailLevel.MODERATE.value,
            "format": OutputFormat.MARKDOWN.value,
            "language": DEFAULT_LANGUAGE,
        },
    }


def download_filename(
    template_id: Union[str, TemplateId],
    output_format: Optional[str],
    timestamp_ms: int,
) -> str:
    """
    File name for saving generated documentation:
    ``<template>-<timestamp_ms>.md`` for Markdown, ``.txt`` otherwise.
    """
    template = parse_template_id(template_id)
    extension = "md" if output_format == OutputFormat.MARKDOWN else "txt"
    return f"{template.value}-{timestamp_ms}.{extension}"


"""
Prompt composition for documentation generation.

Each template owns a fixed instruction body plus two modifier tables, one
keyed by audience and one keyed by detail level.  The composed prompt is

    <template body with input + modifiers><format suffix><language suffix>

All prompt text lives in module-level constants so it can be tuned without
touching the dispatch logic.

Public API
----------
compose(template_id, raw_input, audience, detail_level, output_format, language) -> str
parse_template_id(value)                                                        -> TemplateId
format_suffix(output_format)                                                    -> str
language_suffix(language)                                                       -> str
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Union

from app.errors import UnknownTemplate


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TemplateId(str, Enum):
    """The documentation templates the composer knows how to build."""

    API_GUIDE = "api-guide"
    CODE_COMMENTS = "code-comments"
    SETUP_INSTRUCTIONS = "setup-instructions"
    TROUBLESHOOTING = "troubleshooting"
    USER_MANUAL = "user-manual"


class Audience(str, Enum):
    BEGINNERS = "beginners"
    DEVELOPERS = "developers"
    ADVANCED = "advanced"


class DetailLevel(str, Enum):
    BRIEF = "brief"
    MODERATE = "moderate"
    COMPREHENSIVE = "comprehensive"


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    PLAIN = "plain"


DEFAULT_LANGUAGE = "english"


# ---------------------------------------------------------------------------
# Suffixes
# ---------------------------------------------------------------------------

MARKDOWN_INSTRUCTION = (
    "\n\nFormat the output using proper Markdown syntax with headers, lists, "
    "code blocks, etc."
)
PLAIN_TEXT_INSTRUCTION = "\n\nFormat the output as plain text without special formatting."
_LANGUAGE_INSTRUCTION = "\n\nIMPORTANT: Write the entire documentation in {language}."


# ---------------------------------------------------------------------------
# Template bodies and modifiers
# ---------------------------------------------------------------------------

_API_GUIDE_PROMPT = """\
You are a technical documentation expert. Write a clear and professional API guide for {subject}.{modifiers}

Include:
1. Overview and purpose
2. Authentication (if applicable)
3. Key endpoints/methods
4. Request/response examples
5. Common use cases
6. Error handling

Format the output as clean, readable documentation.\
"""

_API_GUIDE_AUDIENCE: Dict[str, str] = {
    Audience.BEGINNERS: "with simple explanations and examples",
    Audience.DEVELOPERS: "with practical code examples",
    Audience.ADVANCED: "with advanced implementation details and edge cases",
}

_API_GUIDE_DETAIL: Dict[str, str] = {
    DetailLevel.BRIEF: "Keep it concise and focused on essentials.",
    DetailLevel.MODERATE: "Provide a balanced overview with key details.",
    DetailLevel.COMPREHENSIVE: "Be comprehensive with thorough explanations and multiple examples.",
}

_CODE_COMMENTS_PROMPT = """\
You are a code documentation expert. Add clear, helpful comments to the following code.{modifiers}

Code:
{subject}

Return the code with well-structured comments that explain:
- What the code does
- Why certain approaches are used
- Any important considerations or edge cases\
"""

_CODE_COMMENTS_AUDIENCE: Dict[str, str] = {
    Audience.BEGINNERS: "Explain concepts clearly for those learning.",
    Audience.DEVELOPERS: "Write professional, maintainable comments.",
    Audience.ADVANCED: "Include architectural insights and design patterns.",
}

_CODE_COMMENTS_DETAIL: Dict[str, str] = {
    DetailLevel.BRIEF: "Add essential inline comments only.",
    DetailLevel.MODERATE: "Add inline and block comments where helpful.",
    DetailLevel.COMPREHENSIVE: "Add comprehensive documentation with examples.",
}

_SETUP_INSTRUCTIONS_PROMPT = """\
You are a technical writer. Create clear setup instructions for {subject}.{modifiers}

Include:
1. Prerequisites
2. Installation steps
3. Configuration
4. Verification
5. Next steps\
"""

_SETUP_INSTRUCTIONS_AUDIENCE: Dict[str, str] = {
    Audience.BEGINNERS: "Assume no prior knowledge and explain every step.",
    Audience.DEVELOPERS: "Assume basic technical knowledge.",
    Audience.ADVANCED: "Focus on advanced configuration and optimization.",
}

_SETUP_INSTRUCTIONS_DETAIL: Dict[str, str] = {
    DetailLevel.BRIEF: "List the essential steps only.",
    DetailLevel.MODERATE: "Include setup steps with explanations.",
    DetailLevel.COMPREHENSIVE: "Provide detailed steps with troubleshooting tips and alternatives.",
}

_TROUBLESHOOTING_PROMPT = """\
You are a troubleshooting expert. Create a troubleshooting guide for: {subject}.{modifiers}

Include:
1. Problem description
2. Common causes
3. Diagnostic steps
4. Solutions
5. Prevention tips\
"""

_TROUBLESHOOTING_AUDIENCE: Dict[str, str] = {
    Audience.BEGINNERS: "Use simple language and provide step-by-step guidance.",
    Audience.DEVELOPERS: "Focus on diagnostic steps and solutions.",
    Audience.ADVANCED: "Include root cause analysis and preventive measures.",
}

_TROUBLESHOOTING_DETAIL: Dict[str, str] = {
    DetailLevel.BRIEF: "Provide quick fixes only.",
    DetailLevel.MODERATE: "Include common solutions and workarounds.",
    DetailLevel.COMPREHENSIVE: "Provide in-depth analysis with multiple solution approaches.",
}

_USER_MANUAL_PROMPT = """\
You are a technical documentation writer. Write an introduction for a user manual about {subject}.{modifiers}

Include:
1. What the tool is
2. Key features and benefits
3. Who should use it
4. Quick start overview
5. How to get help\
"""

_USER_MANUAL_AUDIENCE: Dict[str, str] = {
    Audience.BEGINNERS: "Write for first-time users with clear explanations.",
    Audience.DEVELOPERS: "Focus on functionality and integration.",
    Audience.ADVANCED: "Include advanced features and customization options.",
}

_USER_MANUAL_DETAIL: Dict[str, str] = {
    DetailLevel.BRIEF: "Provide a concise introduction.",
    DetailLevel.MODERATE: "Include overview and key features.",
    DetailLevel.COMPREHENSIVE: "Write a comprehensive introduction covering all aspects.",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _joined(*parts: str) -> str:
    """Join the non-empty parts with single spaces."""
    return " ".join(p for p in parts if p)


def _leading(text: str) -> str:
    """Prefix *text* with a space, or return '' when there is nothing to add."""
    return f" {text}" if text else ""


def _phrase(table: Dict[str, str], value: Optional[str]) -> str:
    # Unrecognized values contribute nothing rather than failing.
    if value is None:
        return ""
    return table.get(value, "")


# ---------------------------------------------------------------------------
# Per-template builders
# ---------------------------------------------------------------------------

def _build_api_guide(raw_input: str, audience: Optional[str], detail: Optional[str]) -> str:
    # The audience phrase continues the sentence ("... for X with ..."),
    # the detail phrase is its own sentence.
    return _API_GUIDE_PROMPT.format(
        subject=_joined(raw_input, _phrase(_API_GUIDE_AUDIENCE, audience)),
        modifiers=_leading(_phrase(_API_GUIDE_DETAIL, detail)),
    )


def _build_code_comments(raw_input: str, audience: Optional[str], detail: Optional[str]) -> str:
    return _CODE_COMMENTS_PROMPT.format(
        subject=raw_input,
        modifiers=_leading(_joined(
            _phrase(_CODE_COMMENTS_AUDIENCE, audience),
            _phrase(_CODE_COMMENTS_DETAIL, detail),
        )),
    )


def _build_setup_instructions(raw_input: str, audience: Optional[str], detail: Optional[str]) -> str:
    return _SETUP_INSTRUCTIONS_PROMPT.format(
        subject=raw_input,
        modifiers=_leading(_joined(
            _phrase(_SETUP_INSTRUCTIONS_AUDIENCE, audience),
            _phrase(_SETUP_INSTRUCTIONS_DETAIL, detail),
        )),
    )


def _build_troubleshooting(raw_input: str, audience: Optional[str], detail: Optional[str]) -> str:
    return _TROUBLESHOOTING_PROMPT.format(
        subject=raw_input,
        modifiers=_leading(_joined(
            _phrase(_TROUBLESHOOTING_AUDIENCE, audience),
            _phrase(_TROUBLESHOOTING_DETAIL, detail),
        )),
    )


def _build_user_manual(raw_input: str, audience: Optional[str], detail: Optional[str]) -> str:
    return _USER_MANUAL_PROMPT.format(
        subject=raw_input,
        modifiers=_leading(_joined(
            _phrase(_USER_MANUAL_AUDIENCE, audience),
            _phrase(_USER_MANUAL_DETAIL, detail),
        )),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_template_id(value: Union[str, TemplateId, None]) -> TemplateId:
    """Return the matching ``TemplateId`` or raise ``UnknownTemplate``."""
    try:
        return TemplateId(value)
    except ValueError:
        raise UnknownTemplate(value) from None


def format_suffix(output_format: Optional[str]) -> str:
    """Markdown instruction for ``"markdown"``, plain-text instruction otherwise."""
    if output_format == OutputFormat.MARKDOWN:
        return MARKDOWN_INSTRUCTION
    return PLAIN_TEXT_INSTRUCTION


def language_suffix(language: Optional[str]) -> str:
    """
    Empty for English or a blank label.  For any other label, instruct the
    model to write in that language with its first letter upper-cased (the
    rest is kept as-is).
    """
    if not language or not language.strip() or language == DEFAULT_LANGUAGE:
        return ""
    return _LANGUAGE_INSTRUCTION.format(language=language[0].upper() + language[1:])


def compose(
    template_id: Union[str, TemplateId],
    raw_input: str,
    audience: Optional[str] = Audience.DEVELOPERS,
    detail_level: Optional[str] = DetailLevel.MODERATE,
    output_format: Optional[str] = OutputFormat.MARKDOWN,
    language: Optional[str] = DEFAULT_LANGUAGE,
) -> str:
    """
    Build the system instruction for one generation request.

    Args:
        template_id: One of the ``TemplateId`` values.
        raw_input: Topic, product name, problem description or code.  Passed
            through verbatim; no trimming or length cap is applied here.
        audience: ``beginners`` / ``developers`` / ``advanced``.
        detail_level: ``brief`` / ``moderate`` / ``comprehensive``.
        output_format: ``markdown`` selects the Markdown suffix; anything else
            selects the plain-text suffix.
        language: Free-form language label; ``english`` adds no suffix.

    Raises:
        UnknownTemplate: *template_id* is not a supported template.
    """
    template = parse_template_id(template_id)

    match template:
        case TemplateId.API_GUIDE:
            body = _build_api_guide(raw_input, audience, detail_level)
        case TemplateId.CODE_COMMENTS:
            body = _build_code_comments(raw_input, audience, detail_level)
        case TemplateId.SETUP_INSTRUCTIONS:
            body = _build_setup_instructions(raw_input, audience, detail_level)
        case TemplateId.TROUBLESHOOTING:
            body = _build_troubleshooting(raw_input, audience, detail_level)
        case TemplateId.USER_MANUAL:
            body = _build_user_manual(raw_input, audience, detail_level)
        case _:  # pragma: no cover
            raise UnknownTemplate(template_id)

    return body + format_suffix(output_format) + language_suffix(language)

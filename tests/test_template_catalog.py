"""Tests for the template catalog service."""
import pytest

from app.errors import UnknownTemplate
from app.services.prompt_composer import TemplateId
from app.services.template_catalog import (
    SUPPORTED_LANGUAGES,
    download_filename,
    generation_options,
    get_template,
    list_templates,
)


def test_list_templates_covers_every_template_in_order():
    ids = [t.id for t in list_templates()]
    assert ids == list(TemplateId)


def test_get_template():
    info = get_template("troubleshooting")
    assert info.name == "Troubleshooting Guide"
    assert "Connection timeout" in info.placeholder


def test_get_unknown_template():
    with pytest.raises(UnknownTemplate):
        get_template("release-notes")


def test_generation_options_defaults():
    options = generation_options()
    assert options["audiences"] == ["beginners", "developers", "advanced"]
    assert options["detail_levels"] == ["brief", "moderate", "comprehensive"]
    assert options["formats"] == ["markdown", "plain"]
    assert options["languages"][0] == "english"
    assert options["defaults"] == {
        "audience": "developers",
        "detail_level": "moderate",
        "format": "markdown",
        "language": "english",
    }
    assert len(SUPPORTED_LANGUAGES) == 10


def test_download_filename():
    assert download_filename("api-guide", "markdown", 1700000000000) == "api-guide-1700000000000.md"
    assert download_filename("user-manual", "plain", 42) == "user-manual-42.txt"

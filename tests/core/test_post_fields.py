"""Post Field Rules — required checks and replacement sets."""

import pytest

from pressroom.core.errors import ValidationError
from pressroom.core.post_fields import (
    blank_to_none, content_fields, missing_required, require_fields,
)


def test_missing_required_detects_none_and_blank():
    assert missing_required(title="T", content="  ", slug=None) == ["content", "slug"]


def test_require_fields_raises_validation_error():
    with pytest.raises(ValidationError) as exc:
        require_fields(title="", content="body")
    assert exc.value.fields == ["title"]
    assert exc.value.http_status == 400


def test_require_fields_passes():
    require_fields(title="T", content="C", slug="s")


def test_blank_to_none():
    assert blank_to_none("") is None
    assert blank_to_none("   ") is None
    assert blank_to_none("x") == "x"


def test_content_fields_replace_every_field():
    fields = content_fields("T", "C", None, "")
    assert fields == {"title": "T", "content": "C", "excerpt": None, "cover_image": None}
    assert "slug" not in fields

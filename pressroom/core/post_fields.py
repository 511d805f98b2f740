"""Post Field Rules — required-field checks and replace-not-merge semantics.

Invariants:
    - title, content (and slug on create) must be non-blank
    - Optional fields normalize "" → None
    - Update replaces every content field; omitted optionals become None
"""

from pressroom.core.errors import ValidationError


def missing_required(**fields: str | None) -> list[str]:
    """Names of required fields that are None or whitespace-only."""
    return [name for name, value in fields.items() if not (value and value.strip())]


def require_fields(**fields: str | None) -> None:
    missing = missing_required(**fields)
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            fields=missing,
        )


def blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def content_fields(
    title: str, content: str, excerpt: str | None, cover_image: str | None,
) -> dict:
    """Full replacement set of content fields (slug is never part of it)."""
    return {
        "title": title,
        "content": content,
        "excerpt": blank_to_none(excerpt),
        "cover_image": blank_to_none(cover_image),
    }

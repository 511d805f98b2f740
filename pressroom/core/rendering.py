"""Rendering utilities for post bodies."""

from markdown_it import MarkdownIt

# --- Markdown Renderer ---
_md = MarkdownIt("commonmark", {"html": False}).enable("table").enable("strikethrough")


def render_html(content: str | None) -> str:
    """Render markdown content to HTML.

    Returns an empty string if content is None or empty.
    """
    if content:
        return _md.render(content).strip()
    return ""

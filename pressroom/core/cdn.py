"""CDN URL Normalization — relative paths in the store, absolute URLs at render.

Invariants:
    - strip(): known base prefix removed; unknown absolute URLs returned unchanged
    - resolve(): "thumbnail/..." → thumbnail base; other relative paths → image base
    - Absolute (http/https) and blob: URLs pass through resolve() unchanged
    - Empty input → None for both directions
"""

from dataclasses import dataclass

THUMBNAIL_PREFIX = "thumbnail/"


def is_relative_path(url: str | None) -> bool:
    if not url:
        return False
    return not url.startswith(("http://", "https://"))


@dataclass(frozen=True)
class CdnUrls:
    """The two public CDN bases (both must end with "/")."""
    image_base: str
    thumbnail_base: str

    @property
    def bases(self) -> tuple[str, ...]:
        return (self.image_base, self.thumbnail_base)

    def strip(self, url: str | None) -> str | None:
        """Remove the CDN base from an absolute URL before persisting."""
        if not url:
            return None
        for base in self.bases:
            if url.startswith(base):
                return url[len(base):]
        return url

    def resolve(self, url: str | None) -> str | None:
        """Re-prepend the matching CDN base to a stored relative path."""
        if not url:
            return None
        if url.startswith("blob:") or not is_relative_path(url):
            return url
        if url.startswith(THUMBNAIL_PREFIX):
            return f"{self.thumbnail_base}{url}"
        return f"{self.image_base}{url}"

"""CDN Uploader — posts images to the CDN upload API and returns relative paths.

Invariants:
    - Only JPEG, PNG, GIF, WEBP accepted; payload <= max_bytes (ValidationError otherwise)
    - Transient failures (connection errors, 5xx): retried with exponential backoff
    - Client errors (4xx) and exhausted retries → UpstreamFailureError
    - Returned URLs have the CDN base stripped (relative paths for DB storage)
    - A body that is not a JSON object of string URLs → UpstreamFailureError

Design Decisions:
    - httpx.AsyncClient injected: tests pass an httpx.MockTransport-backed client
"""

import asyncio
import logging
from dataclasses import dataclass

import httpx

from pressroom.core.cdn import CdnUrls
from pressroom.core.errors import UpstreamFailureError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({
    "image/jpeg", "image/png", "image/gif", "image/webp",
})


@dataclass(frozen=True)
class UploadResult:
    image_url: str | None
    thumb_url: str | None
    deletion_url: str | None

    def to_response(self) -> dict:
        return {
            "image_url": self.image_url,
            "thumb_url": self.thumb_url,
            "deletion_url": self.deletion_url,
        }


class CdnUploader:
    """Uploads binary payloads to the CDN."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        upload_url: str,
        api_key: str,
        cdn_urls: CdnUrls,
        max_bytes: int = 5 * 1024 * 1024,
        max_retries: int = 2,
        base_delay_ms: int = 250,
    ):
        self.client = client
        self.upload_url = upload_url
        self.api_key = api_key
        self.cdn_urls = cdn_urls
        self.max_bytes = max_bytes
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms

    def check_payload(self, content_type: str | None, size: int) -> None:
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError("Invalid file type", fields=["file"])
        if size > self.max_bytes:
            raise ValidationError(
                f"File exceeds {self.max_bytes // (1024 * 1024)}MB limit",
                fields=["file"],
            )

    async def upload(
        self, filename: str, content_type: str, payload: bytes,
    ) -> UploadResult:
        self.check_payload(content_type, len(payload))
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.post(
                    self.upload_url,
                    data={"key": self.api_key},
                    files={"file": (filename, payload, content_type)},
                )
            except httpx.TransportError as e:
                await self._backoff_or_fail(f"CDN unreachable: {e}", attempt)
                continue

            if response.status_code >= 500:
                await self._backoff_or_fail(
                    f"CDN returned {response.status_code}", attempt,
                )
                continue
            if response.is_error:
                logger.error(f"CDN rejected upload: {response.status_code}")
                raise UpstreamFailureError("CDN upload failed", "cdn")
            return self._parse(response)

        raise UpstreamFailureError("CDN upload failed", "cdn")  # pragma: no cover

    def _parse(self, response: httpx.Response) -> UploadResult:
        try:
            body = response.json()
        except ValueError:
            raise UpstreamFailureError("CDN returned malformed response", "cdn")
        if not isinstance(body, dict):
            raise UpstreamFailureError("CDN returned malformed response", "cdn")
        result = UploadResult(
            image_url=self._url(body, "url"),
            thumb_url=self._url(body, "thumb_url"),
            deletion_url=self._url(body, "deletion_url"),
        )
        logger.info(f"Uploaded image to CDN: {result.image_url}")
        return result

    def _url(self, body: dict, field: str) -> str | None:
        value = body.get(field)
        if value is not None and not isinstance(value, str):
            raise UpstreamFailureError("CDN returned malformed response", "cdn")
        return self.cdn_urls.strip(value)

    async def _backoff_or_fail(self, reason: str, attempt: int) -> None:
        if attempt >= self.max_retries:
            logger.error(f"CDN upload failed after {attempt + 1} attempts: {reason}")
            raise UpstreamFailureError("CDN upload failed", "cdn")
        delay = (self.base_delay_ms * (2 ** attempt)) / 1000
        logger.warning(
            f"CDN upload attempt {attempt + 1} failed ({reason}), retrying in {delay:.2f}s",
        )
        await asyncio.sleep(delay)

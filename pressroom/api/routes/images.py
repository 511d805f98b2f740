"""Image Upload Route — forwards an image to the CDN, returns relative paths."""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from pressroom.api.dependencies import get_container, get_current_session
from pressroom.container import AppContainer
from pressroom.core.errors import UnauthenticatedError
from pressroom.core.repository_protocols import AssetUploader
from pressroom.infrastructure.identity import SessionInfo

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/images", tags=["images"])


@router.post("")
async def upload_image(
    file: UploadFile = File(...),
    session: SessionInfo | None = Depends(get_current_session),
    container: AppContainer = Depends(get_container),
):
    if session is None:
        raise UnauthenticatedError()
    uploader: AssetUploader = container.uploader
    # limit + 1 bytes is enough to detect an oversize file
    payload = await file.read(uploader.max_bytes + 1)
    result = await uploader.upload(
        file.filename or "upload", file.content_type or "", payload,
    )
    return {"success": True, **result.to_response()}

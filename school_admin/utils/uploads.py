# school_admin/utils/uploads.py
"""Validation of incoming files and storage helpers used by the services."""
from dataclasses import dataclass
from typing import List, Optional
import logging

from starlette.datastructures import UploadFile

from ..core.exceptions import UpstreamGatewayError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class IncomingFile:
    content: bytes
    file_name: str
    content_type: str


def _allowed(content_type: str) -> bool:
    return content_type.startswith("image/") or content_type == "application/pdf"


async def read_upload(upload: Optional[UploadFile], max_bytes: int) -> Optional[IncomingFile]:
    """Read a multipart file into memory, enforcing type and size limits"""
    if upload is None:
        return None
    content_type = upload.content_type or ""
    if not _allowed(content_type):
        raise ValidationError("Only images and PDF files are allowed")

    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ValidationError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB")
    return IncomingFile(content=content, file_name=upload.filename or "upload", content_type=content_type)


async def store_file(storage, incoming: IncomingFile, folder: str, error_message: str = "Error uploading file"):
    """Upload or raise UpstreamGatewayError(error_message)"""
    if storage is None:
        logger.error(f"File storage not configured, cannot upload {incoming.file_name}")
        raise UpstreamGatewayError(error_message)
    try:
        return await storage.upload(incoming.content, folder, incoming.file_name, incoming.content_type)
    except UpstreamGatewayError:
        raise UpstreamGatewayError(error_message)


async def discard_file(storage, public_id: Optional[str]) -> bool:
    """Best-effort delete; failures are only logged"""
    if storage is None or not public_id:
        return False
    try:
        return await storage.delete(public_id)
    except UpstreamGatewayError as e:
        logger.warning(f"Could not delete stored file {public_id}: {e.message}")
        return False


async def collect_uploads(files, field: str, max_bytes: int) -> List[IncomingFile]:
    """Every file sent under `field` in a multipart body, validated"""
    return [await read_upload(upload, max_bytes) for upload in files.get(field, [])]


async def first_upload(files, field: str, max_bytes: int) -> Optional[IncomingFile]:
    uploads = files.get(field) or [None]
    return await read_upload(uploads[0], max_bytes)

# school_admin/gateways/storage.py
"""Cloudinary object storage client (signed REST uploads over httpx)."""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging
import time

import cloudinary.utils
import httpx

from ..core.exceptions import UpstreamGatewayError

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    url: str
    public_id: str
    file_name: Optional[str] = None


class CloudinaryStorage:
    """Upload and delete files in a Cloudinary account"""

    BASE_URL = "https://api.cloudinary.com/v1_1"
    ALLOWED_FORMATS = "jpg,jpeg,png,gif,pdf"
    TRANSFORMATION = "c_limit,h_1000,w_1000/q_auto"

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings) -> Optional["CloudinaryStorage"]:
        """None when any credential is missing"""
        if not (settings.cloudinary_cloud_name and settings.cloudinary_api_key and settings.cloudinary_api_secret):
            return None
        return cls(
            settings.cloudinary_cloud_name,
            settings.cloudinary_api_key,
            settings.cloudinary_api_secret,
            timeout=settings.gateway_timeout_seconds,
        )

    def sign(self, params: Dict[str, Any]) -> str:
        return cloudinary.utils.api_sign_request(params, self.api_secret)

    def _signed(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params = dict(params, timestamp=int(time.time()))
        params["signature"] = self.sign(params)
        params["api_key"] = self.api_key
        return params

    async def upload(self, content: bytes, folder: str, file_name: Optional[str] = None,
                     content_type: Optional[str] = None) -> StoredFile:
        data = self._signed({
            "folder": folder,
            "allowed_formats": self.ALLOWED_FORMATS,
            "transformation": self.TRANSFORMATION,
        })
        url = f"{self.BASE_URL}/{self.cloud_name}/auto/upload"
        files = {"file": (file_name or "upload", content, content_type or "application/octet-stream")}

        try:
            response = await self._client.post(url, data=data, files=files)
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Cloudinary upload rejected ({e.response.status_code}): {e.response.text[:200]}")
            raise UpstreamGatewayError("File upload failed")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise UpstreamGatewayError("File upload failed")

        logger.info(f"Uploaded {file_name or 'file'} to {folder} as {result.get('public_id')}")
        return StoredFile(url=result["secure_url"], public_id=result["public_id"], file_name=file_name)

    async def delete(self, public_id: str) -> bool:
        data = self._signed({"public_id": public_id})
        url = f"{self.BASE_URL}/{self.cloud_name}/image/destroy"
        try:
            response = await self._client.post(url, data=data)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Cloudinary delete of {public_id} failed: {e}")
            raise UpstreamGatewayError("File delete failed")
        return response.json().get("result") == "ok"

    async def aclose(self):
        await self._client.aclose()

"""
Cloudinary Service for storing profile pictures.
Talks to the Cloudinary REST upload API with signed requests.
"""

import hashlib
import time
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from app.core.config import settings
from app.core.exceptions import ImageDeleteError, ImageUploadError
from app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    """Result of a successful upload."""

    secure_url: str
    public_id: str


class CloudinaryService:
    """Service for Cloudinary image operations."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize Cloudinary service.

        Args:
            transport: Optional httpx transport (used to stub the API)
        """
        self.upload_url = settings.get_cloudinary_upload_url()
        self.destroy_url = settings.get_cloudinary_destroy_url()
        self.api_key = settings.CLOUDINARY_API_KEY
        self.api_secret = settings.CLOUDINARY_API_SECRET
        self.folder = settings.CLOUDINARY_AVATAR_FOLDER
        self.timeout = settings.CLOUDINARY_TIMEOUT
        self._transport = transport

    def _sign(self, params: Dict[str, str]) -> str:
        """
        Compute the request signature.

        Parameters are sorted by name, joined as key=value pairs with "&",
        and hashed with SHA-1 together with the API secret.
        """
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    def _signed_params(self, params: Dict[str, str]) -> Dict[str, str]:
        """Add timestamp, API key and signature to request parameters."""
        signed = {**params, "timestamp": str(int(time.time()))}
        signed["signature"] = self._sign(signed)
        signed["api_key"] = self.api_key or ""
        return signed

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def upload_image(
        self,
        content: bytes,
        filename: str = "avatar",
        content_type: str = "application/octet-stream",
    ) -> UploadedImage:
        """
        Upload an image.

        Args:
            content: Raw image bytes
            filename: Original file name
            content_type: MIME type of the file

        Returns:
            UploadedImage with the secure URL and public ID

        Raises:
            ImageUploadError: If the request fails or the response is incomplete
        """
        data = self._signed_params({"folder": self.folder})
        files = {"file": (filename, content, content_type)}

        logger.info(f"Uploading image to Cloudinary: {self.upload_url}")

        try:
            async with self._client() as client:
                response = await client.post(self.upload_url, data=data, files=files)
        except httpx.HTTPError as e:
            logger.error(f"Error uploading image to Cloudinary: {e}")
            raise ImageUploadError(details={"reason": str(e)}) from e

        if response.status_code != 200:
            logger.error(
                f"Failed to upload image: {response.status_code} - {response.text}"
            )
            raise ImageUploadError(details={"status_code": response.status_code})

        try:
            result = response.json()
            secure_url = result.get("secure_url")
            public_id = result.get("public_id")
        except (ValueError, AttributeError) as e:
            logger.error(f"Unreadable upload response from Cloudinary: {response.text}")
            raise ImageUploadError(details={"reason": "malformed upload response"}) from e
        if not secure_url or not public_id:
            raise ImageUploadError(details={"reason": "incomplete upload response"})

        logger.info(f"Uploaded image to Cloudinary: {public_id}")
        return UploadedImage(secure_url=secure_url, public_id=public_id)

    async def delete_image(self, public_id: str) -> None:
        """
        Delete an uploaded image.

        An image that is already gone counts as deleted.

        Args:
            public_id: Cloudinary public ID of the image

        Raises:
            ImageDeleteError: If the request fails or Cloudinary refuses it
        """
        data = self._signed_params({"public_id": public_id})

        try:
            async with self._client() as client:
                response = await client.post(self.destroy_url, data=data)
        except httpx.HTTPError as e:
            logger.error(f"Error deleting image {public_id}: {e}")
            raise ImageDeleteError(public_id, details={"reason": str(e)}) from e

        try:
            result = response.json() if response.status_code == 200 else {}
            outcome = result.get("result")
        except (ValueError, AttributeError) as e:
            logger.error(f"Unreadable delete response for image {public_id}: {response.text}")
            raise ImageDeleteError(
                public_id, details={"reason": "malformed delete response"}
            ) from e

        if outcome not in ("ok", "not found"):
            logger.error(
                f"Failed to delete image {public_id}: {response.status_code} - {response.text}"
            )
            raise ImageDeleteError(public_id, details={"status_code": response.status_code})

        logger.info(f"Deleted image from Cloudinary: {public_id}")


# Global Cloudinary service instance
cloudinary_service = CloudinaryService()

"""
Object Storage (Cloudinary)

Narrow interface over the media service: ``store(file_bytes, folder)``
returns a public URL. Any failure is reported as FileUnavailableError so a
storage outage reaches the caller as "file not available", never as a raw
SDK exception.
"""

import asyncio
import io
import logging

import cloudinary
import cloudinary.uploader

from ictreg.core.config import settings
from ictreg.modules.shared.errors import CollaboratorError

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = ["jpg", "jpeg", "png", "pdf"]

# Uploads are downscaled to fit this box
MAX_DIMENSION = 600


class FileUnavailableError(CollaboratorError):
    """Raised when an uploaded file could not be stored."""

    def __init__(self, message: str = "Uploaded file URL not available."):
        super().__init__(message=message, error_code="FILE_NOT_AVAILABLE")


class ObjectStorage:
    """Cloudinary-backed file store."""

    def __init__(self, cloud_name: str | None, api_key: str | None, api_secret: str | None):
        self.configured = bool(cloud_name and api_key and api_secret)
        if self.configured:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,
            )

    def _upload(self, file_bytes: bytes, folder: str) -> dict:
        return cloudinary.uploader.upload(
            io.BytesIO(file_bytes),
            folder=folder,
            resource_type="auto",
            allowed_formats=ALLOWED_FORMATS,
            transformation=[{"width": MAX_DIMENSION, "height": MAX_DIMENSION, "crop": "limit"}],
        )

    async def store(self, file_bytes: bytes, folder: str) -> str:
        """
        Upload a file and return its secure URL.

        Raises:
            FileUnavailableError: If the file is empty, storage is not
                configured, the upload fails, or no URL comes back
        """
        if not file_bytes:
            raise FileUnavailableError("Uploaded file is empty.")

        if not self.configured:
            logger.error("Cloudinary credentials are not configured")
            raise FileUnavailableError()

        try:
            # The Cloudinary SDK is synchronous
            result = await asyncio.to_thread(self._upload, file_bytes, folder)
        except Exception as e:
            logger.error(f"Upload to folder {folder} failed: {e}")
            raise FileUnavailableError() from e

        url = result.get("secure_url") or result.get("url")
        if not url:
            logger.error(f"Upload to folder {folder} returned no URL")
            raise FileUnavailableError()

        return url


_storage: ObjectStorage | None = None


def init_storage() -> ObjectStorage:
    """Configure the process-wide storage client. Called from the lifespan."""
    global _storage
    _storage = ObjectStorage(
        settings.cloudinary_cloud_name,
        settings.cloudinary_api_key,
        settings.cloudinary_api_secret,
    )
    return _storage


def get_storage() -> ObjectStorage:
    """FastAPI dependency returning the shared storage client."""
    if _storage is None:
        return init_storage()
    return _storage

"""Object storage backends for uploaded media."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import shutil
import time
from abc import ABC, abstractmethod
from pathlib import Path

import httpx

from linkup.core.config import settings

logger = logging.getLogger(__name__)


class ObjectStorage(ABC):
    """Interface for storage backends."""

    @abstractmethod
    async def upload(self, local_path: str) -> dict:
        """Store the file at ``local_path`` and return at least ``{"secure_url": ...}``."""


class LocalStorage(ObjectStorage):
    """Copy files under the media directory and serve them from MEDIA_BASE_URL."""

    def __init__(self, media_dir: str | None = None, base_url: str | None = None):
        self.base_directory = Path(media_dir or settings.MEDIA_DIR)
        self.base_url = (base_url or settings.MEDIA_BASE_URL).rstrip("/")
        os.makedirs(self.base_directory, exist_ok=True)

    async def upload(self, local_path: str) -> dict:
        name = Path(local_path).name
        await asyncio.to_thread(shutil.copyfile, local_path, self.base_directory / name)
        return {"secure_url": f"{self.base_url}/{name}", "public_id": name}


class CloudinaryStorage(ObjectStorage):
    """Signed upload to the Cloudinary REST API."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, folder: str = "profile_pictures"):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder

    def _signature(self, params: dict) -> str:
        to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode()).hexdigest()

    async def upload(self, local_path: str) -> dict:
        params = {"folder": self.folder, "timestamp": int(time.time())}
        data = {**params, "api_key": self.api_key, "signature": self._signature(params)}
        url = f"https://api.cloudinary.com/v1_1/{self.cloud_name}/image/upload"
        async with httpx.AsyncClient(timeout=30) as c:
            with open(local_path, "rb") as fh:
                r = await c.post(url, data=data, files={"file": (Path(local_path).name, fh)})
            r.raise_for_status()
            body = r.json()
        logger.info("Uploaded %s to cloudinary as %s", Path(local_path).name, body.get("public_id"))
        return body


def get_storage() -> ObjectStorage:
    if settings.STORAGE_BACKEND == "cloudinary":
        return CloudinaryStorage(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME or "",
            api_key=settings.CLOUDINARY_API_KEY or "",
            api_secret=settings.CLOUDINARY_API_SECRET or "",
        )
    return LocalStorage()

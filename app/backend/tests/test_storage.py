from __future__ import annotations

import asyncio
import hashlib
import shutil

from linkup.core.config import settings
from linkup.services import storage as storage_module
from linkup.services.storage import CloudinaryStorage, LocalStorage, get_storage


async def test_local_storage_copies_and_returns_url(tmp_path):
    src = tmp_path / "123-456.png"
    src.write_bytes(b"png-bytes")
    storage = LocalStorage(str(tmp_path / "media"), "http://cdn.test/media/")

    result = await storage.upload(str(src))

    assert result["secure_url"] == "http://cdn.test/media/123-456.png"
    assert (tmp_path / "media" / "123-456.png").read_bytes() == b"png-bytes"


def test_cloudinary_signature_sorts_params():
    storage = CloudinaryStorage("demo", "key", "s3cr3t")

    sig = storage._signature({"timestamp": 1700000000, "folder": "profile_pictures"})

    expected = hashlib.sha1(b"folder=profile_pictures&timestamp=1700000000s3cr3t").hexdigest()
    assert sig == expected


def test_get_storage_picks_backend(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "MEDIA_DIR", str(tmp_path / "media"))
    assert isinstance(get_storage(), LocalStorage)

    monkeypatch.setattr(settings, "STORAGE_BACKEND", "cloudinary")
    monkeypatch.setattr(settings, "CLOUDINARY_CLOUD_NAME", "demo")
    backend = get_storage()
    assert isinstance(backend, CloudinaryStorage)
    assert backend.cloud_name == "demo"


async def test_local_storage_copies_off_the_event_loop(tmp_path, monkeypatch):
    src = tmp_path / "1-2.jpg"
    src.write_bytes(b"jpeg")
    offloaded = []
    real_to_thread = asyncio.to_thread

    async def recording_to_thread(func, *args, **kwargs):
        offloaded.append(func)
        return await real_to_thread(func, *args, **kwargs)

    monkeypatch.setattr(storage_module.asyncio, "to_thread", recording_to_thread)

    await LocalStorage(str(tmp_path / "media"), "http://cdn.test/media").upload(str(src))

    assert offloaded == [shutil.copyfile]

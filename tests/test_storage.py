"""Tests for the local object storage."""

import uuid

import pytest

from bizpass.core.errors import StorageError, ValidationError
from bizpass.core.storage import LocalObjectStorage, logo_object_path


class TestLocalObjectStorage:
    """Upload and public URL behaviour."""

    @pytest.mark.asyncio
    async def test_upload_and_public_url(self, tmp_path):
        storage = LocalObjectStorage(tmp_path, "/media/")

        await storage.upload("logos/a.png", b"data")

        assert (tmp_path / "logos" / "a.png").read_bytes() == b"data"
        assert storage.get_public_url("logos/a.png") == "/media/logos/a.png"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["../escape.png", "/etc/passwd"])
    async def test_rejects_paths_outside_bucket(self, tmp_path, path):
        storage = LocalObjectStorage(tmp_path, "/media")

        with pytest.raises(StorageError):
            await storage.upload(path, b"data")

    @pytest.mark.asyncio
    async def test_existing_object_is_not_overwritten(self, tmp_path):
        storage = LocalObjectStorage(tmp_path, "/media")
        await storage.upload("logos/a.png", b"first")

        with pytest.raises(StorageError):
            await storage.upload("logos/a.png", b"second")

        assert (tmp_path / "logos" / "a.png").read_bytes() == b"first"


class TestLogoObjectPath:
    """Logo naming convention."""

    def test_path_format(self):
        user_id = uuid.uuid4()

        path = logo_object_path(user_id, "Brand.JPG")

        assert path.startswith(f"logos/{user_id}-")
        assert path.endswith(".jpg")

    @pytest.mark.parametrize("filename", ["logo", "logo.exe", ""])
    def test_rejects_non_images(self, filename):
        with pytest.raises(ValidationError):
            logo_object_path(uuid.uuid4(), filename)

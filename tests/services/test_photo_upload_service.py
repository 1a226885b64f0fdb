# -*- coding: utf-8 -*-
"""
Tests for the profile photo upload pipeline.

Tests cover:
- MIME normalisation and image validation
- Phase ordering (confirm only after a 2xx transfer)
- Temporary copy removal on every exit path
"""

import pytest
from unittest.mock import MagicMock

from models.subject import LocalImageRef
from services.exceptions import ApiException, NetworkException, PhotoUploadError, ValidationException
from services.photo_upload_service import (
    MediaUploadPipeline, normalize_mime_type, temporary_upload_copy, validate_image
)


@pytest.fixture
def source_image(tmp_path):
    path = tmp_path / "source" / "picked.jpg"
    path.parent.mkdir()
    path.write_bytes(b"\xff\xd8\xff fake jpeg bytes")
    return path


@pytest.fixture
def scratch_dir(tmp_path):
    return tmp_path / "scratch"


@pytest.fixture
def api():
    client = MagicMock()
    client.get_presigned_upload_url.return_value = {
        "uploadUrl": "https://storage.test/put", "photoKey": "photos/abc.jpg", "expiresIn": 300
    }
    client.upload_to_presigned_url.return_value = 200
    client.confirm_profile_photo_upload.return_value = {
        "profilePhotoUrl": "https://cdn.test/abc.jpg", "profilePhotoKey": "photos/abc.jpg",
        "updatedAt": "2026-01-01T00:00:00Z",
    }
    return client


@pytest.fixture
def pipeline(api, scratch_dir):
    return MediaUploadPipeline(api_client=api, temp_dir=scratch_dir)


def _leftovers(scratch_dir):
    if not scratch_dir.exists():
        return []
    return list(scratch_dir.iterdir())


class TestMimeAndValidation:

    @pytest.mark.parametrize("given, expected", [
        ("image/jpg", "image/jpeg"),
        ("IMAGE/JPG", "image/jpeg"),
        ("image/png", "image/png"),
    ])
    def test_normalize(self, given, expected):
        assert normalize_mime_type(given) == expected

    def test_accepts_supported_image(self, source_image):
        validate_image(LocalImageRef(str(source_image), "image/jpeg"))

    def test_rejects_unsupported_type(self, source_image):
        with pytest.raises(ValidationException):
            validate_image(LocalImageRef(str(source_image), "image/tiff"))

    def test_rejects_large_file(self, source_image):
        with pytest.raises(ValidationException):
            validate_image(LocalImageRef(str(source_image), "image/png"), file_size=6 * 1024 * 1024)

    def test_rejects_missing_image(self):
        with pytest.raises(ValidationException):
            validate_image(None)


class TestTemporaryCopy:

    def test_copy_named_and_removed(self, source_image, scratch_dir):
        with temporary_upload_copy(source_image, "image/png", scratch_dir) as copy_path:
            assert copy_path.exists()
            assert copy_path.name.startswith("temp_upload_")
            assert copy_path.suffix == ".png"
            assert copy_path.read_bytes() == source_image.read_bytes()
        assert not copy_path.exists()

    def test_removed_when_block_raises(self, source_image, scratch_dir):
        with pytest.raises(RuntimeError):
            with temporary_upload_copy(source_image, "image/jpeg", scratch_dir):
                raise RuntimeError("boom")
        assert _leftovers(scratch_dir) == []

    def test_tolerates_copy_already_gone(self, source_image, scratch_dir):
        with temporary_upload_copy(source_image, "image/jpeg", scratch_dir) as copy_path:
            copy_path.unlink()
        assert _leftovers(scratch_dir) == []


class TestPipeline:

    def test_success(self, pipeline, api, source_image, scratch_dir):
        confirmation = pipeline.upload("xyz", LocalImageRef(f"file://{source_image}", "image/jpg"))

        assert confirmation.profile_photo_url == "https://cdn.test/abc.jpg"
        api.get_presigned_upload_url.assert_called_once_with("xyz", "image/jpeg")
        upload_url, _, content_type = api.upload_to_presigned_url.call_args.args
        assert (upload_url, content_type) == ("https://storage.test/put", "image/jpeg")
        api.confirm_profile_photo_upload.assert_called_once_with("xyz", "photos/abc.jpg")
        assert _leftovers(scratch_dir) == []

    def test_ticket_failure(self, pipeline, api, source_image, scratch_dir):
        api.get_presigned_upload_url.side_effect = ApiException("nope", status_code=500)

        with pytest.raises(PhotoUploadError) as exc_info:
            pipeline.upload("xyz", LocalImageRef(str(source_image), "image/jpeg"))

        assert exc_info.value.phase == PhotoUploadError.PHASE_TICKET
        api.upload_to_presigned_url.assert_not_called()
        api.confirm_profile_photo_upload.assert_not_called()
        assert _leftovers(scratch_dir) == []

    @pytest.mark.parametrize("status", [403, 500, 301])
    def test_non_2xx_transfer_never_confirms(self, pipeline, api, source_image, scratch_dir, status):
        api.upload_to_presigned_url.return_value = status

        with pytest.raises(PhotoUploadError) as exc_info:
            pipeline.upload("xyz", LocalImageRef(str(source_image), "image/jpeg"))

        assert exc_info.value.phase == PhotoUploadError.PHASE_TRANSFER
        api.confirm_profile_photo_upload.assert_not_called()
        assert _leftovers(scratch_dir) == []

    def test_transfer_network_error(self, pipeline, api, source_image, scratch_dir):
        api.upload_to_presigned_url.side_effect = NetworkException("reset")

        with pytest.raises(PhotoUploadError):
            pipeline.upload("xyz", LocalImageRef(str(source_image), "image/jpeg"))

        api.confirm_profile_photo_upload.assert_not_called()
        assert _leftovers(scratch_dir) == []

    def test_empty_copy_is_not_sent(self, pipeline, api, source_image, scratch_dir):
        source_image.write_bytes(b"")

        with pytest.raises(PhotoUploadError) as exc_info:
            pipeline.upload("xyz", LocalImageRef(str(source_image), "image/jpeg"))

        assert "empty" in str(exc_info.value)
        api.upload_to_presigned_url.assert_not_called()
        assert _leftovers(scratch_dir) == []

    def test_missing_source_file(self, pipeline, api, tmp_path, scratch_dir):
        with pytest.raises(PhotoUploadError) as exc_info:
            pipeline.upload("xyz", LocalImageRef(str(tmp_path / "gone.jpg"), "image/jpeg"))

        assert exc_info.value.phase == PhotoUploadError.PHASE_TRANSFER
        api.upload_to_presigned_url.assert_not_called()
        assert _leftovers(scratch_dir) == []

    def test_confirm_failure(self, pipeline, api, source_image, scratch_dir):
        api.confirm_profile_photo_upload.side_effect = ApiException("bad key", status_code=400)

        with pytest.raises(PhotoUploadError) as exc_info:
            pipeline.upload("xyz", LocalImageRef(str(source_image), "image/jpeg"))

        assert exc_info.value.phase == PhotoUploadError.PHASE_CONFIRM
        api.upload_to_presigned_url.assert_called_once()
        assert _leftovers(scratch_dir) == []

    def test_each_attempt_requests_a_new_ticket(self, pipeline, api, source_image):
        image = LocalImageRef(str(source_image), "image/jpeg")
        pipeline.upload("xyz", image)
        pipeline.upload("xyz", image)
        assert api.get_presigned_upload_url.call_count == 2

    def test_remove_photo(self, pipeline, api):
        pipeline.remove_photo("xyz")
        api.delete_profile_photo.assert_called_once_with("xyz")

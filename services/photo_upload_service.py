# -*- coding: utf-8 -*-
"""
Profile photo upload pipeline.

Three phases, each of which may fail on its own:
    1. ticket   - presigned storage URL for (subject, content type)
    2. transfer - PUT the bytes of a private copy of the local image
    3. confirm  - tell the backend the object is in place

Confirm only runs after a 2xx transfer. The private copy is removed on
every exit path.
"""

import os
import shutil
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from app.config import Config
from models.subject import LocalImageRef
from models.submission import PhotoConfirmation, UploadTicket
from services.api_client import StelliumApiClient, get_api_client
from services.exceptions import (
    ApiException, NetworkException, PhotoUploadError, ValidationException
)
from services.translation_manager import tr
from utils.logger import get_logger

logger = get_logger(__name__)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


def normalize_mime_type(mime_type: str) -> str:
    """Lower-case the type and map the non-standard image/jpg to image/jpeg."""
    normalized = (mime_type or "").strip().lower()
    if normalized == "image/jpg":
        return "image/jpeg"
    return normalized


def validate_image(image_ref: Optional[LocalImageRef], file_size: Optional[int] = None) -> None:
    """
    Check a picked image before the draft accepts it.

    Args:
        image_ref: the picked image
        file_size: size in bytes; read from disk when omitted

    Raises:
        ValidationException: missing image, unsupported type or too large
    """
    if image_ref is None or not image_ref.uri:
        raise ValidationException(tr("validation.photo_missing"), field="local_image")

    if (image_ref.mime_type or "").lower() not in Config.ACCEPTED_PHOTO_TYPES:
        raise ValidationException(tr("validation.photo_type"), field="local_image")

    if file_size is None and os.path.exists(image_ref.path):
        file_size = os.path.getsize(image_ref.path)
    if file_size is not None and file_size > Config.MAX_PHOTO_BYTES:
        raise ValidationException(tr("validation.photo_size"), field="local_image")


@contextmanager
def temporary_upload_copy(source_path: Union[str, Path], content_type: str,
                          temp_dir: Optional[Union[str, Path]] = None) -> Iterator[Path]:
    """
    Private copy of `source_path` that is deleted when the block exits.

    The source may be removed by its owner at any time, so the transfer
    reads from this copy. Removal tolerates the copy already being gone.
    """
    directory = Path(temp_dir or Config.UPLOAD_TEMP_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    extension = _EXTENSIONS.get(content_type, "jpg")
    copy_path = directory / f"temp_upload_{int(time.time() * 1000)}.{extension}"

    try:
        shutil.copy2(str(source_path), str(copy_path))
        logger.debug(f"File copied to: {copy_path}")
        yield copy_path
    finally:
        try:
            copy_path.unlink()
            logger.debug(f"Temporary upload file removed: {copy_path}")
        except FileNotFoundError:
            pass


class MediaUploadPipeline:
    """Ticket, transfer and confirm for one subject's profile photo."""

    def __init__(self, api_client: Optional[StelliumApiClient] = None,
                 temp_dir: Optional[Union[str, Path]] = None):
        self.api = api_client or get_api_client()
        self.temp_dir = temp_dir

    def request_ticket(self, subject_id: str, content_type: str) -> UploadTicket:
        """Phase 1. A fresh ticket is requested for every attempt."""
        try:
            response = self.api.get_presigned_upload_url(subject_id, content_type)
        except (ApiException, NetworkException) as e:
            raise PhotoUploadError(f"Upload URL request failed: {e}", PhotoUploadError.PHASE_TICKET, e)

        if not response.get("uploadUrl") or not response.get("photoKey"):
            raise PhotoUploadError("Upload URL response is incomplete", PhotoUploadError.PHASE_TICKET)

        return UploadTicket(
            subject_id=subject_id,
            object_key=response["photoKey"],
            upload_url=response["uploadUrl"],
            content_type=content_type,
            expires_in=response.get("expiresIn"),
        )

    def transfer(self, ticket: UploadTicket, source_path: Union[str, Path]) -> int:
        """
        Phase 2. PUT a private copy of the image to the ticket URL.

        Returns:
            The 2xx storage status
        """
        try:
            with temporary_upload_copy(source_path, ticket.content_type, self.temp_dir) as copy_path:
                size = copy_path.stat().st_size
                logger.debug(f"Upload file size: {size} bytes")
                if size == 0:
                    raise PhotoUploadError("Copied file is empty", PhotoUploadError.PHASE_TRANSFER)

                status = self.api.upload_to_presigned_url(
                    ticket.upload_url, str(copy_path), ticket.content_type
                )
        except OSError as e:
            raise PhotoUploadError(f"Could not read the image: {e}", PhotoUploadError.PHASE_TRANSFER, e)
        except NetworkException as e:
            raise PhotoUploadError(f"Upload to storage failed: {e}", PhotoUploadError.PHASE_TRANSFER, e)

        if not 200 <= status < 300:
            raise PhotoUploadError(f"Failed to upload to storage: {status}", PhotoUploadError.PHASE_TRANSFER)
        return status

    def confirm(self, ticket: UploadTicket) -> PhotoConfirmation:
        """Phase 3. Only reached after a successful transfer."""
        try:
            response = self.api.confirm_profile_photo_upload(ticket.subject_id, ticket.object_key)
        except (ApiException, NetworkException) as e:
            raise PhotoUploadError(f"Upload confirmation failed: {e}", PhotoUploadError.PHASE_CONFIRM, e)

        return PhotoConfirmation(
            profile_photo_url=response.get("profilePhotoUrl"),
            profile_photo_key=response.get("profilePhotoKey"),
            updated_at=response.get("updatedAt"),
        )

    def upload(self, subject_id: str, image_ref: LocalImageRef) -> PhotoConfirmation:
        """
        Run all three phases for `image_ref`.

        Raises:
            PhotoUploadError: tagged with the phase that failed
        """
        if not subject_id:
            raise PhotoUploadError("Subject ID is required for photo upload", PhotoUploadError.PHASE_TICKET)

        content_type = normalize_mime_type(image_ref.mime_type)
        logger.info(f"Profile photo upload started for {subject_id} ({content_type})")

        ticket = self.request_ticket(subject_id, content_type)
        self.transfer(ticket, image_ref.path)
        confirmation = self.confirm(ticket)

        logger.info(f"Upload confirmed: {confirmation.profile_photo_url}")
        return confirmation

    def remove_photo(self, subject_id: str) -> None:
        """
        Delete the subject's current profile photo.

        Raises:
            ApiException / NetworkException: from the backend call
        """
        logger.info(f"Removing profile photo for {subject_id}")
        self.api.delete_profile_photo(subject_id)

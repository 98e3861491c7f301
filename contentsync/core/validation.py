import logging
from typing import Any, Mapping, Optional, Sequence

from .config import Config
from .errors import ValidationError
from .models import ImageReference, MediaFile


logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MB
ALLOWED_MIME_PREFIX = "image/"


def validate_image_reference(candidate: Any) -> bool:
    if isinstance(candidate, ImageReference):
        src, alt = candidate.src, candidate.alt
    elif isinstance(candidate, Mapping):
        src, alt = candidate.get("src"), candidate.get("alt")
    else:
        return False
    return isinstance(src, str) and bool(src) and isinstance(alt, str) and bool(alt)


def validate_image_list(images: Any) -> None:
    if isinstance(images, (str, bytes, Mapping)) or not isinstance(images, Sequence) or not images:
        raise ValidationError("Invalid images array")
    if not all(validate_image_reference(image) for image in images):
        raise ValidationError("One or more images are invalid")


def validate_doc_id(doc_id: Optional[str]) -> None:
    if not isinstance(doc_id, str) or not doc_id.strip():
        raise ValidationError("A non-empty document id is required")


def validate_upload(file: Optional[MediaFile]) -> None:
    """Check upload preconditions in order, failing on the first one missed."""
    if file is None:
        raise ValidationError("No file provided")

    Config.validate_media_host()

    if not (file.content_type or "").startswith(ALLOWED_MIME_PREFIX):
        logger.error(f"Upload rejected: invalid content type {file.content_type!r} for {file.filename}")
        raise ValidationError("Only image files are allowed")

    if file.size > MAX_UPLOAD_BYTES:
        logger.error(f"Upload rejected: {file.filename} is {file.size} bytes > {MAX_UPLOAD_BYTES} bytes")
        raise ValidationError(f"Image is too large (max {MAX_UPLOAD_BYTES // (1024 * 1024)}MB)")

import asyncio
import logging
from typing import Any, List, Optional, Sequence

from ..core.config import Config
from ..core.errors import PersistenceError, UploadError
from ..core.http import post_multipart
from ..core.models import ImageReference, MediaFile
from ..core.validation import (
    validate_image_list,
    validate_image_reference,
    validate_upload,
)
from .document_store import DocumentStore, get_document_store


logger = logging.getLogger(__name__)

IMAGES_COLLECTION = "images"
IMAGE_DOC_ID = Config.IMAGE_DOC_ID
DEFAULT_IMAGES: List[ImageReference] = []

UPLOAD_URL_TEMPLATE = "https://api.cloudinary.com/v1_1/{cloud_name}/auto/upload"
UPLOAD_MARKER = "/upload/"
TRANSFORMATION = "c_fill,w_800,h_600,g_auto"


def transform_image_url(url: str) -> str:
    """Insert the 800x600 fill-crop segment right after ``/upload/``."""
    return url.replace(UPLOAD_MARKER, f"{UPLOAD_MARKER}{TRANSFORMATION}/", 1)


def _upload_blocking(file: MediaFile, session: Optional[Any]) -> str:
    url = UPLOAD_URL_TEMPLATE.format(cloud_name=Config.CLOUDINARY_CLOUD_NAME)
    resp = post_multipart(
        url,
        fields={
            "upload_preset": Config.CLOUDINARY_UPLOAD_PRESET,
            "folder": Config.CLOUDINARY_FOLDER,
        },
        files={"file": (file.filename, file.data, file.content_type)},
        session=session,
    )

    if resp.status_code // 100 != 2:
        body = resp.text or ""
        logger.error(f"Cloudinary upload failed ({resp.status_code}): {body}")
        raise UploadError(resp.status_code, body)

    try:
        payload = resp.json()
    except ValueError as e:
        raise UploadError(resp.status_code, resp.text or "", f"Invalid JSON from media host: {e}") from e

    if not isinstance(payload, dict):
        raise UploadError(resp.status_code, resp.text or "", "Media host response is not a JSON object")

    base_url = payload.get("secure_url") or payload.get("url")
    if not base_url or not isinstance(base_url, str):
        raise UploadError(resp.status_code, resp.text or "", "Media host response has no asset URL")
    return base_url


async def upload_image(file: Optional[MediaFile], *, session: Optional[Any] = None) -> str:
    """Upload an image to Cloudinary and return its normalized URL.

    - Checks, in order: a file was given, Cloudinary is configured, the
      content type is ``image/*``, and the size is at most 10 MB
    - Sends a single unsigned upload into the configured folder, no retry
    - Rewrites the returned URL to the fixed 800x600 fill-crop rendition
    """
    validate_upload(file)

    logger.info(f"Uploading {file.filename} ({file.content_type}, {file.size} bytes) to Cloudinary")
    base_url = await asyncio.to_thread(_upload_blocking, file, session)
    transformed_url = transform_image_url(base_url)
    logger.info(f"Uploaded {file.filename}: {transformed_url}")
    return transformed_url


async def save_image_list(
    images: Sequence[Any],
    *,
    store: Optional[DocumentStore] = None,
    doc_id: str = IMAGE_DOC_ID,
) -> None:
    """Replace the stored image list with ``images``.

    Every element is validated before anything is written. Raises
    ValidationError or PersistenceError.
    """
    validate_image_list(images)
    payload = {
        "images": [
            image.to_dict() if isinstance(image, ImageReference) else {"src": image["src"], "alt": image["alt"]}
            for image in images
        ]
    }
    store = store or get_document_store()

    try:
        await asyncio.to_thread(store.set, IMAGES_COLLECTION, doc_id, payload)
    except Exception as e:
        logger.error(f"Error saving images: {e}")
        raise PersistenceError("Failed to save images to database", e) from e

    logger.info(f"Saved {len(payload['images'])} images")


async def load_image_list(
    *,
    store: Optional[DocumentStore] = None,
    doc_id: str = IMAGE_DOC_ID,
) -> List[ImageReference]:
    """Return the stored image list, or the empty default.

    Never raises: a missing document, an invalid one, or a failed read all
    yield ``DEFAULT_IMAGES``.
    """
    try:
        store = store or get_document_store()
        data = await asyncio.to_thread(store.get, IMAGES_COLLECTION, doc_id)
        loaded = data.get("images") if isinstance(data, dict) else None
        if isinstance(loaded, list) and loaded and all(validate_image_reference(i) for i in loaded):
            return [ImageReference.from_dict(i) for i in loaded]
    except Exception as e:
        logger.error(f"Error loading images: {e}")
        return list(DEFAULT_IMAGES)

    logger.info("No valid images found, using defaults")
    return list(DEFAULT_IMAGES)

import logging
from typing import Any, Mapping, Optional, Tuple

import requests

from .errors import UploadError


logger = logging.getLogger(__name__)


def post_multipart(
    url: str,
    *,
    fields: Mapping[str, str],
    files: Mapping[str, Tuple[str, bytes, str]],
    session: Optional[Any] = None,
    timeout_seconds: int = 60,
) -> requests.Response:
    """POST a multipart form once. Transport failures become ``UploadError(None, ...)``."""
    poster = session if session is not None else requests
    try:
        return poster.post(url, data=dict(fields), files=dict(files), timeout=timeout_seconds)
    except requests.RequestException as e:
        logger.error(f"Multipart POST to {url} failed: {str(e)}")
        raise UploadError(None, str(e)) from e

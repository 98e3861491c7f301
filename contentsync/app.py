import asyncio
import logging
import time
from datetime import datetime
from typing import Any, List, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .core.config import Config
from .core.errors import ConfigurationError, PersistenceError, UploadError, ValidationError
from .core.middleware import (
    configuration_error_handler,
    global_exception_handler,
    log_requests,
    persistence_error_handler,
    upload_error_handler,
    validation_error_handler,
)
from .core.models import MediaFile
from .services.document_store import get_document_store
from .services.image_service import load_image_list, save_image_list, upload_image
from .services.table_service import load_table, persist_table

logger = logging.getLogger(__name__)


class TablePayload(BaseModel):
    headerRow: List[Any]
    tableData: List[List[Any]]


class ImageListPayload(BaseModel):
    images: List[Any]


# Initialize FastAPI
app = FastAPI(title="Content Sync API")

# CORS setup
ALLOWED_ORIGINS = Config.allowed_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)

@app.middleware("http")
async def _log_requests(request, call_next):
    return await log_requests(request, call_next)

app.add_exception_handler(ValidationError, validation_error_handler)
app.add_exception_handler(ConfigurationError, configuration_error_handler)
app.add_exception_handler(UploadError, upload_error_handler)
app.add_exception_handler(PersistenceError, persistence_error_handler)
app.add_exception_handler(Exception, global_exception_handler)


@app.get("/tables/{doc_id}")
async def get_table(doc_id: str):
    """Return the stored table, 404 when nothing was saved under ``doc_id``."""
    table = await load_table(doc_id)
    if table is None:
        raise HTTPException(status_code=404, detail=f"No table found: {doc_id}")
    return table.to_dict()


@app.put("/tables/{doc_id}")
async def put_table(doc_id: str, payload: TablePayload):
    await persist_table(doc_id, payload.headerRow, payload.tableData)
    return {"status": "saved", "docId": doc_id}


@app.get("/images")
async def get_images():
    images = await load_image_list()
    return {"images": [image.to_dict() for image in images]}


@app.put("/images")
async def put_images(payload: ImageListPayload):
    await save_image_list(payload.images)
    return {"status": "saved", "count": len(payload.images)}


@app.post("/images/upload")
async def post_image_upload(file: Optional[UploadFile] = File(None)):
    """Upload one image to the media host.

    - Validates presence, configuration, MIME type and size
    - Returns the 800x600 fill-crop URL of the stored asset
    """
    media_file = None
    if file is not None:
        media_file = MediaFile(
            filename=file.filename or "upload",
            content_type=file.content_type or "",
            data=await file.read(),
        )
    url = await upload_image(media_file)
    return {"url": url}


@app.get("/health")
async def health_check():
    """Basic health and dependency checks for the API."""
    health_start_time = time.time()

    try:
        store = get_document_store()
        await asyncio.to_thread(store.get, "health", "ping")

        health_duration = time.time() - health_start_time

        return {
            "status": "healthy",
            "service": "content-sync-api",
            "media_host_configured": Config.media_host_configured(),
            "timestamp": datetime.now().isoformat(),
            "response_time_ms": round(health_duration * 1000, 2)
        }
    except Exception as e:
        health_duration = time.time() - health_start_time
        logger.error(f"Health check failed: {str(e)} - Duration: {health_duration:.1f}s")

        return {
            "status": "unhealthy",
            "service": "content-sync-api",
            "timestamp": datetime.now().isoformat(),
            "error": str(e),
            "response_time_ms": round(health_duration * 1000, 2)
        }


@app.get("/")
async def root():
    """Return basic API information."""

    return {
        "service": "Content Sync API",
        "version": "1.0",
        "endpoints": {
            "tables": "/tables/{doc_id}",
            "images": "/images",
            "upload": "/images/upload",
            "health": "/health"
        },
        "timestamp": datetime.now().isoformat(),
        "description": "Persists table and image-list content and uploads images to the media host"
    }

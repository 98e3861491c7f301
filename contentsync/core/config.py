import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

from .errors import ConfigurationError


load_dotenv()


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables.

    Provides validated access to the document store (Supabase) and the
    media host (Cloudinary unsigned uploads).
    """

    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SERVICE_KEY: str = os.getenv("SUPABASE_SERVICE_KEY", "")
    DOCUMENTS_TABLE: str = os.getenv("DOCUMENTS_TABLE", "documents")
    IMAGE_DOC_ID: str = os.getenv("IMAGE_DOC_ID", "image-list")

    CLOUDINARY_CLOUD_NAME: str = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_UPLOAD_PRESET: str = os.getenv("CLOUDINARY_UPLOAD_PRESET", "")
    CLOUDINARY_FOLDER: str = os.getenv("CLOUDINARY_FOLDER", "cv-images")

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    CORS_ALLOWED_ORIGINS_ENV: str = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173")

    @staticmethod
    def allowed_origins(extra_origins: List[str] | None = None) -> List[str]:
        merged = [o.strip() for o in Config.CORS_ALLOWED_ORIGINS_ENV.split(",") if o.strip()]
        if extra_origins:
            merged.extend(extra_origins)
        # Deduplicate while preserving order
        seen = set()
        result: List[str] = []
        for origin in merged:
            if origin not in seen:
                seen.add(origin)
                result.append(origin)
        return result

    @classmethod
    def supabase_configured(cls) -> bool:
        return bool(cls.SUPABASE_URL and cls.SUPABASE_SERVICE_KEY)

    @classmethod
    def media_host_configured(cls) -> bool:
        return bool(cls.CLOUDINARY_CLOUD_NAME and cls.CLOUDINARY_UPLOAD_PRESET)

    @classmethod
    def validate(cls) -> None:
        if not cls.SUPABASE_URL:
            raise ConfigurationError("SUPABASE_URL environment variable is required")
        if not cls.SUPABASE_SERVICE_KEY:
            raise ConfigurationError("SUPABASE_SERVICE_KEY environment variable is required")

    @classmethod
    def validate_media_host(cls) -> None:
        if not cls.media_host_configured():
            raise ConfigurationError(
                "Cloudinary is not configured. Set CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET"
            )

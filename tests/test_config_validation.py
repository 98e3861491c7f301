import pytest

from contentsync.core.config import Config
from contentsync.core.errors import ConfigurationError, ValidationError
from contentsync.core.models import MediaFile
from contentsync.core.validation import (
    MAX_UPLOAD_BYTES,
    validate_doc_id,
    validate_image_list,
    validate_upload,
)


def test_max_upload_is_ten_mebibytes():
    assert MAX_UPLOAD_BYTES == 10_485_760


def test_allowed_origins_deduplicates(monkeypatch):
    monkeypatch.setattr(Config, "CORS_ALLOWED_ORIGINS_ENV", "http://a, http://b,http://a,")
    assert Config.allowed_origins(["http://c", "http://b"]) == ["http://a", "http://b", "http://c"]


def test_validate_requires_supabase_settings(monkeypatch):
    monkeypatch.setattr(Config, "SUPABASE_URL", "")
    with pytest.raises(ConfigurationError, match="SUPABASE_URL"):
        Config.validate()


def test_configuration_error_is_a_value_error(no_media_host_config):
    with pytest.raises(ValueError):
        Config.validate_media_host()


def test_media_host_needs_both_settings(monkeypatch):
    monkeypatch.setattr(Config, "CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setattr(Config, "CLOUDINARY_UPLOAD_PRESET", "")
    assert not Config.media_host_configured()
    monkeypatch.setattr(Config, "CLOUDINARY_UPLOAD_PRESET", "preset")
    assert Config.media_host_configured()


def test_upload_preconditions_are_distinct(media_host_config):
    with pytest.raises(ValidationError) as missing:
        validate_upload(None)
    with pytest.raises(ValidationError) as wrong_type:
        validate_upload(MediaFile("a.txt", "text/plain", b"hi"))
    with pytest.raises(ValidationError) as too_big:
        validate_upload(MediaFile("a.png", "image/png", b"0" * (MAX_UPLOAD_BYTES + 1)))

    messages = {str(missing.value), str(wrong_type.value), str(too_big.value)}
    assert len(messages) == 3


def test_upload_with_empty_content_type(media_host_config):
    with pytest.raises(ValidationError):
        validate_upload(MediaFile("a.png", "", b"0"))


@pytest.mark.parametrize("doc_id", ["", "   ", None])
def test_validate_doc_id(doc_id):
    with pytest.raises(ValidationError):
        validate_doc_id(doc_id)


def test_validate_image_list_accepts_tuples():
    validate_image_list(({"src": "a", "alt": "b"},))


def test_validate_image_list_rejects_mapping():
    with pytest.raises(ValidationError):
        validate_image_list({"src": "a", "alt": "b"})

"""Shared fixtures: in-memory and failing document stores, a fake HTTP session."""

from __future__ import annotations

import json
from typing import Any

import pytest

from contentsync.core.config import Config
from contentsync.services.document_store import InMemoryDocumentStore


class RecordingStore(InMemoryDocumentStore):
    """In-memory store that remembers every call made to it."""

    def __init__(self):
        super().__init__()
        self.calls: list[tuple] = []

    def get(self, collection, doc_id):
        self.calls.append(("get", collection, doc_id))
        return super().get(collection, doc_id)

    def set(self, collection, doc_id, document):
        self.calls.append(("set", collection, doc_id))
        super().set(collection, doc_id, document)


class FailingStore:
    def __init__(self, exc: Exception | None = None):
        self.exc = exc or ConnectionError("store unreachable")

    def get(self, collection, doc_id):
        raise self.exc

    def set(self, collection, doc_id, document):
        raise self.exc


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, exc: Exception | None = None):
        self.response = response
        self.exc = exc
        self.posts: list[dict] = []

    def post(self, url, data=None, files=None, timeout=None):
        self.posts.append({"url": url, "data": data, "files": files, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def media_host_config(monkeypatch):
    monkeypatch.setattr(Config, "CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setattr(Config, "CLOUDINARY_UPLOAD_PRESET", "unsigned-preset")
    monkeypatch.setattr(Config, "CLOUDINARY_FOLDER", "cv-images")


@pytest.fixture
def no_media_host_config(monkeypatch):
    monkeypatch.setattr(Config, "CLOUDINARY_CLOUD_NAME", "")
    monkeypatch.setattr(Config, "CLOUDINARY_UPLOAD_PRESET", "")

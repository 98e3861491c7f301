import copy
import logging
import threading
from functools import lru_cache
from typing import Any, Dict, Optional, Protocol, Tuple

from supabase import create_client, Client

from ..core.config import Config
from ..core.errors import ConfigurationError


logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class DocumentStore(Protocol):
    """A remote schemaless store addressed by ``(collection, id)``."""

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    def set(self, collection: str, doc_id: str, document: Document) -> None:
        ...


def get_client() -> Client:
    return create_client(Config.SUPABASE_URL, Config.SUPABASE_SERVICE_KEY)


class SupabaseDocumentStore:
    """Documents kept as ``{collection, id, data}`` rows of a single table.

    The table needs a composite primary key on ``(collection, id)`` and a
    ``jsonb`` ``data`` column. ``set`` upserts the row, replacing ``data``
    wholesale.
    """

    def __init__(self, client: Optional[Client] = None, table: Optional[str] = None):
        self._client = client
        self._table = table or Config.DOCUMENTS_TABLE

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client()
        return self._client

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        result = (
            self.client
            .table(self._table)
            .select('data')
            .eq('collection', collection)
            .eq('id', doc_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return result.data[0].get('data')

    def set(self, collection: str, doc_id: str, document: Document) -> None:
        self.client.table(self._table).upsert(
            {'collection': collection, 'id': doc_id, 'data': document},
            on_conflict='collection,id',
        ).execute()


class InMemoryDocumentStore:
    """Process-local store with the same overwrite semantics as the remote one."""

    def __init__(self):
        self._documents: Dict[Tuple[str, str], Document] = {}
        self._lock = threading.Lock()

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            document = self._documents.get((collection, doc_id))
            return copy.deepcopy(document) if document is not None else None

    def set(self, collection: str, doc_id: str, document: Document) -> None:
        with self._lock:
            self._documents[(collection, doc_id)] = copy.deepcopy(document)


@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    if Config.supabase_configured():
        return SupabaseDocumentStore()
    if Config.ENVIRONMENT == "development":
        logger.warning("Supabase is not configured, using an in-memory document store")
        return InMemoryDocumentStore()
    raise ConfigurationError("Document store is not configured. Set SUPABASE_URL and SUPABASE_SERVICE_KEY")

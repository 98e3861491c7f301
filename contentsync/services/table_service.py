import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.errors import PersistenceError
from ..core.indexed import from_indexed_map, to_indexed_map
from ..core.models import TableDocument
from ..core.validation import validate_doc_id
from .document_store import DocumentStore, get_document_store


logger = logging.getLogger(__name__)

TABLES_COLLECTION = "tables"


def _timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def encode_table(header_row: Sequence[Any], rows: Sequence[Sequence[Any]]) -> Dict[str, Any]:
    """Turn a header and row matrix into the store-safe document.

    The header and every row become index-keyed maps; ``tableData`` stays a
    list because the store holds lists of maps natively. Row lengths are not
    checked.
    """
    return {
        "headerRow": to_indexed_map(list(header_row)),
        "tableData": [to_indexed_map(list(row)) for row in rows],
        "updatedAt": _timestamp(),
    }


def decode_table(data: Mapping[str, Any]) -> TableDocument:
    """Rebuild a TableDocument from its stored form without reshaping it."""
    rows: List[List[Any]] = [from_indexed_map(row) for row in data.get("tableData") or []]
    return TableDocument(
        header_row=from_indexed_map(data.get("headerRow") or {}),
        rows=rows,
        updated_at=data.get("updatedAt"),
    )


async def persist_table(
    doc_id: str,
    header_row: Sequence[Any],
    rows: Sequence[Sequence[Any]],
    *,
    store: Optional[DocumentStore] = None,
) -> None:
    """Overwrite the table stored under ``doc_id``.

    Raises PersistenceError when the store write fails. The write replaces
    the whole document, so no rows from an earlier save survive.
    """
    validate_doc_id(doc_id)
    encoded = encode_table(header_row, rows)
    store = store or get_document_store()

    try:
        await asyncio.to_thread(store.set, TABLES_COLLECTION, doc_id, encoded)
    except Exception as e:
        logger.error(f"Failed to save table {doc_id}: {e}")
        raise PersistenceError(f"Failed to save table {doc_id}", e) from e

    logger.info(f"Saved table {doc_id} ({len(encoded['tableData'])} rows)")


async def load_table(doc_id: str, *, store: Optional[DocumentStore] = None) -> Optional[TableDocument]:
    """Load the table stored under ``doc_id``.

    Returns None when nothing has been saved there yet. Read failures and
    undecodable documents raise PersistenceError.
    """
    validate_doc_id(doc_id)
    store = store or get_document_store()

    try:
        data = await asyncio.to_thread(store.get, TABLES_COLLECTION, doc_id)
    except Exception as e:
        logger.error(f"Failed to load table {doc_id}: {e}")
        raise PersistenceError(f"Failed to load table {doc_id}", e) from e

    if data is None:
        logger.info(f"No table found for {doc_id}")
        return None

    try:
        return decode_table(data)
    except (AttributeError, TypeError) as e:
        logger.error(f"Stored table {doc_id} could not be decoded: {e}")
        raise PersistenceError(f"Stored table {doc_id} could not be decoded", e) from e

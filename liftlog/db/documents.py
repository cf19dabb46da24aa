"""JSON text codec for opaque document columns.

Plan, template and session documents are stored as serialized text and are
never interpreted at the storage layer.
"""

import json
from typing import Any

from loguru import logger

from liftlog.errors import CorruptDocumentError


def dump_document(value: Any) -> str:
    """Serialize a document for storage."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def load_document(raw: str | None, *, default: Any = None) -> Any:
    """Deserialize a stored document.

    Args:
        raw: Stored text (NULL/empty means no document)
        default: Value returned for NULL/empty text

    Raises:
        CorruptDocumentError: If the stored text is not valid JSON
    """
    if raw is None or raw == "":
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to decode stored document ({len(raw)} chars): {e}")
        raise CorruptDocumentError() from e

"""File-backed persistence for the shopping list document."""

import asyncio
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from src.domain.document import Document


logger = logging.getLogger(__name__)


def load_document(path: Path) -> Document:
    """Load the document from disk.

    Never raises: a missing, unreadable or malformed file yields an empty
    document so startup cannot fail on bad state.

    Args:
        path: JSON file to read

    Returns:
        The stored document, or an empty one
    """
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.warning("Data file missing, starting with an empty document", extra={"path": str(path)})
        return Document()
    except OSError as e:
        logger.warning("Data file unreadable, starting with an empty document: %s", e, extra={"path": str(path)})
        return Document()

    try:
        document = Document.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(
            "Data file damaged, starting with an empty document: %s",
            e.error_count(),
            extra={"path": str(path)},
        )
        return Document()

    logger.info(
        "Loaded document",
        extra={"path": str(path), "items": len(document.items), "recipes": len(document.recipes)},
    )
    return document


def _write_atomic(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(content, encoding="utf-8")
    os.replace(tmp, path)


async def save_document(document: Document, path: Path) -> bool:
    """Write the whole document, replacing the previous file atomically.

    Failures are logged and reported through the return value only.

    Args:
        document: Document to persist
        path: Target JSON file

    Returns:
        True if the file was written, False otherwise
    """
    content = document.model_dump_json(indent=2)
    try:
        await asyncio.to_thread(_write_atomic, path, content)
    except OSError as e:
        logger.error("Failed to store document: %s", e, extra={"path": str(path)})
        return False

    logger.debug("Stored document", extra={"path": str(path)})
    return True

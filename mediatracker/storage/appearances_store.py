"""Flat-file storage for the appearances collection.

The JSON document is read wholesale and rewritten wholesale. Writes go to a
temporary file next to the target and are moved into place with os.replace,
so readers see either the old or the new document.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Set, Union

from mediatracker.contracts.appearances import find_duplicate_urls, validate_collection, validate_tour
from mediatracker.records.appearance_types import AppearanceCollection

logger = logging.getLogger(__name__)


class TrackerError(Exception):
    """Base exception for media tracker failures"""
    pass


class CollectionFormatError(TrackerError):
    """The data file is unreadable or does not match the expected layout"""
    pass


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise CollectionFormatError(f"Cannot read {path}: {e}") from e


def known_urls(collection: AppearanceCollection) -> Set[str]:
    """Seed set for deduplication: every non-empty record URL."""
    return {a.url for a in collection.appearances if a.url}


class AppearanceStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> AppearanceCollection:
        payload = _read_json(self.path)
        errors = validate_collection(payload)
        if errors:
            raise CollectionFormatError(f"{self.path} failed validation:\n" + "\n".join(errors))
        for url in find_duplicate_urls(payload):
            logger.warning(f"Duplicate url in {self.path}: {url}")
        collection = AppearanceCollection.from_dict(payload)
        logger.debug(f"Loaded {len(collection.appearances)} appearances from {self.path}")
        return collection

    def save(self, collection: AppearanceCollection) -> None:
        payload = collection.to_dict()
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise


def load_tour(path: Union[str, Path]) -> Dict[str, Any]:
    """Load and validate the listening tour file."""
    payload = _read_json(Path(path))
    errors = validate_tour(payload)
    if errors:
        raise CollectionFormatError(f"{path} failed validation:\n" + "\n".join(errors))
    return payload

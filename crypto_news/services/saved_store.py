"""
Persistence for the user's saved article ids.

This module provides two stores behind a common interface: a local JSON file
keyed like browser local storage, and a Google Firestore document for
deployments that want the bookmarks to outlive the host.
"""

import json
import logging
import os
import tempfile
from typing import Any, Iterable, List, Optional, Protocol

from google.cloud import firestore  # type: ignore

from crypto_news.config import DEFAULT_SAVED_IDS_KEY, Settings

logger = logging.getLogger(__name__)


def coerce_ids(value: Any) -> List[int]:
    """Keeps only integer entries of a list; anything else becomes empty."""
    if not isinstance(value, list):
        return []
    ids: List[int] = []
    for item in value:
        if isinstance(item, int) and not isinstance(item, bool) and item not in ids:
            ids.append(item)
    return ids


class SavedIdsStore(Protocol):
    """Loads and rewrites the full saved-id list."""

    def load(self) -> List[int]:
        """Returns the persisted ids, or [] when absent or corrupt."""

    def save(self, ids: Iterable[int]) -> None:
        """Rewrites the persisted ids in full."""


class LocalSavedStore(SavedIdsStore):
    """Stores saved ids in a JSON object file under a fixed key."""

    def __init__(self, path: str, key: str = DEFAULT_SAVED_IDS_KEY):
        self.path = path
        self.key = key

    def _read_all(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Saved ids file %s unreadable: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> List[int]:
        return coerce_ids(self._read_all().get(self.key))

    def save(self, ids: Iterable[int]) -> None:
        data = self._read_all()
        data[self.key] = list(ids)
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        # Write aside, then swap in atomically
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except Exception:
            os.unlink(tmp_path)
            raise
        logger.debug("Saved %d ids to %s.", len(data[self.key]), self.path)


class FirestoreSavedStore(SavedIdsStore):
    """Stores saved ids in a single Firestore document."""

    def __init__(self, project_id: Optional[str], key: str = DEFAULT_SAVED_IDS_KEY):
        self.key = key
        if not project_id:
            logger.warning("GCP_PROJECT_ID not set. Saved ids will not persist.")
            self.db = None
            return

        try:
            self.db = firestore.Client(project=project_id)
            self.collection = self.db.collection("saved_ids")
            logger.info("Connected to Firestore for saved ids.")
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Firestore connection failed: %s", e)
            self.db = None

    def load(self) -> List[int]:
        if not self.db:
            return []
        snap = self.collection.document(self.key).get()
        if not snap.exists:
            return []
        return coerce_ids((snap.to_dict() or {}).get("ids"))

    def save(self, ids: Iterable[int]) -> None:
        if not self.db:
            return
        ids = list(ids)
        self.collection.document(self.key).set({"ids": ids})
        logger.info("Saved %d ids to Firestore.", len(ids))


def make_saved_store(settings: Settings) -> SavedIdsStore:
    """Uses Firestore when a project is configured, else the local file."""
    if settings["gcp_project_id"]:
        return FirestoreSavedStore(settings["gcp_project_id"], settings["saved_ids_key"])
    return LocalSavedStore(settings["saved_ids_path"], settings["saved_ids_key"])

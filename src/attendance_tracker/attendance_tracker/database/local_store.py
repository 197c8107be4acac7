"""JSON-file document store used for offline/demo mode.

Plays the role browser local storage plays for the web client: every
collection is a list of plain dict documents keyed by ``id``. The whole file
is rewritten on each mutation, which is fine for demo-sized data.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..core.exceptions import StoreError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class LocalDocumentStore:
    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, List[Document]]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            raise StoreError(f"cannot read local store {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"local store {self._path} is not a JSON object")
        return data

    def _save(self, data: Dict[str, List[Document]]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
            tmp.replace(self._path)
        except OSError as e:
            raise StoreError(f"cannot write local store {self._path}: {e}") from e

    def list(self, collection: str) -> List[Document]:
        with self._lock:
            docs = self._load().get(collection, [])
            return [copy.deepcopy(d) for d in docs if isinstance(d, dict)]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        for doc in self.list(collection):
            if str(doc.get("id")) == str(doc_id):
                return doc
        return None

    def insert(self, collection: str, doc: Document) -> str:
        with self._lock:
            data = self._load()
            doc = dict(doc)
            doc_id = str(doc.get("id") or uuid.uuid4().hex)
            doc["id"] = doc_id
            data.setdefault(collection, []).insert(0, doc)
            self._save(data)
            logger.debug("local store: inserted %s/%s", collection, doc_id)
            return doc_id

    def update(self, collection: str, doc_id: str, changes: Document) -> bool:
        return self.modify(collection, doc_id, lambda doc: doc.update(changes))

    def modify(self, collection: str, doc_id: str, fn: Callable[[Document], None]) -> bool:
        """Apply ``fn`` to the stored document in place under the store lock."""

        with self._lock:
            data = self._load()
            for doc in data.get(collection, []):
                if isinstance(doc, dict) and str(doc.get("id")) == str(doc_id):
                    fn(doc)
                    self._save(data)
                    return True
            return False

    def upsert(self, collection: str, doc: Document) -> str:
        doc_id = doc.get("id")
        if doc_id and self.update(collection, str(doc_id), {k: v for k, v in doc.items() if k != "id"}):
            return str(doc_id)
        return self.insert(collection, doc)

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            data = self._load()
            docs = data.get(collection, [])
            kept = [d for d in docs if not (isinstance(d, dict) and str(d.get("id")) == str(doc_id))]
            if len(kept) == len(docs):
                return False
            data[collection] = kept
            self._save(data)
            return True

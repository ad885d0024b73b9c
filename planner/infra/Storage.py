"""Key-value blob storage used to persist planner snapshots.

Each namespace holds one serialized document. `JsonFileStorage` keeps one
file per namespace in a data directory; `MemoryStorage` keeps blobs in a dict
and is what the tests use.
"""
import os
import shutil
import tempfile
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from planner.infra.paths import namespace_file

logger = logging.getLogger(__name__)


class Storage(ABC):
    @abstractmethod
    def load(self, namespace: str) -> Optional[str]:
        """Return the stored blob, or None if the namespace was never saved."""

    @abstractmethod
    def save(self, namespace: str, blob: str) -> None:
        """Replace the namespace's blob."""


class MemoryStorage(Storage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.blobs: Dict[str, str] = dict(initial or {})

    def load(self, namespace: str) -> Optional[str]:
        return self.blobs.get(namespace)

    def save(self, namespace: str, blob: str) -> None:
        self.blobs[namespace] = blob


class JsonFileStorage(Storage):
    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path_for(self, namespace: str) -> Path:
        return namespace_file(self.data_dir, namespace)

    def load(self, namespace: str) -> Optional[str]:
        path = self.path_for(namespace)
        if not path.exists():
            logger.debug("No stored data for %s at %s", namespace, path)
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def save(self, namespace: str, blob: str) -> None:
        path = self.path_for(namespace)
        os.makedirs(path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{namespace}_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(blob)
            shutil.move(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

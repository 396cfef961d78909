# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-09
# Description: FolioEntityStore
# -----------------------------------------------------------------------------
import json
import threading
from pathlib import Path
from typing import Protocol, Dict, Any, Iterable, List, Optional, runtime_checkable

from entities.ProjectEntity import ProjectEntity
from utility.logging_utils import get_class_logger


@runtime_checkable
class FolioEntityStore(Protocol):
    def get_display_metadata(self, ref_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        ...

    def get(self, entity_id: str) -> Optional[ProjectEntity]:
        ...

    def list_published(self) -> List[ProjectEntity]:
        ...


class InMemoryEntityStore(FolioEntityStore):
    """Read-mostly project lookup; the real system keeps projects in its own DB."""

    def __init__(self, projects: Iterable[ProjectEntity] = (), logger=None):
        self.logger = logger or get_class_logger(self.__class__)
        self._lock = threading.Lock()
        self._by_id: Dict[str, ProjectEntity] = {}
        for p in projects:
            self._by_id[p.id] = p

    @classmethod
    def from_json_file(cls, path: str | Path, logger=None) -> "InMemoryEntityStore":
        """Load a JSON list of project dicts (Mongo-style keys accepted)."""
        path = Path(path)
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise TypeError(f"{path} must contain a JSON list of projects")
        store = cls((ProjectEntity.from_dict(item) for item in raw), logger=logger)
        store.logger.info("Loaded %d projects from %s", len(store), path)
        return store

    def add(self, project: ProjectEntity) -> None:
        with self._lock:
            self._by_id[project.id] = project

    def get(self, entity_id: str) -> Optional[ProjectEntity]:
        with self._lock:
            return self._by_id.get(str(entity_id))

    def get_display_metadata(self, ref_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        wanted = {str(r) for r in ref_ids}
        with self._lock:
            return {
                pid: p.display_metadata()
                for pid, p in self._by_id.items()
                if pid in wanted
            }

    def list_published(self) -> List[ProjectEntity]:
        with self._lock:
            return [p for p in self._by_id.values() if p.is_published]

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)

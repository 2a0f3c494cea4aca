"""
Analysis History Store
Ordered, append-only list of past analyses persisted as a JSON file
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from phishguard.services.analysis_record import Analysis

logger = logging.getLogger(__name__)


class HistoryStore:
    """JSON-backed analysis history"""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        self._lock = threading.Lock()
        self._entries: List[Analysis] = self._load()

    def _load(self) -> List[Analysis]:
        if self.path is None or not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            entries = [Analysis.from_dict(item) for item in raw]
            logger.info(f"Loaded {len(entries)} history entries from {self.path}")
            return entries
        except (json.JSONDecodeError, IOError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Failed to parse history from {self.path}, starting empty: {e}")
            self._quarantine()
            return []

    def _quarantine(self):
        """Move an unreadable history file aside so the next save cannot overwrite it"""
        target = self.path.with_name(f"{self.path.name}.corrupt-{datetime.now():%Y%m%d%H%M%S}")
        try:
            self.path.replace(target)
            logger.warning(f"Moved unreadable history file to {target}")
        except OSError as e:
            logger.error(f"Could not move {self.path} aside, history will not be saved: {e}")
            self.path = None

    def _save(self):
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Temp file in the same directory, then os.replace: the file on disk is always complete
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([entry.to_dict() for entry in self._entries], f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            os.unlink(tmp_name)
            raise

    def append(self, entry: Analysis):
        with self._lock:
            self._entries.append(entry)
            self._save()

    def all(self) -> List[Analysis]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> int:
        """Remove every entry, returning how many were removed"""
        with self._lock:
            count = len(self._entries)
            self._entries = []
            self._save()
        logger.info(f"Cleared {count} history entries")
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


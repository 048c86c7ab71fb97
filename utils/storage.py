"""
Key-value storage slots backing the notebook
"""
import json
import os
import tempfile
import threading
from typing import Dict, Optional
from loguru import logger


class MemoryStorage:
    """In-process key-value storage"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """Key-value storage persisted as a single JSON object on disk.

    Every slot holds a string. The whole file is rewritten on each
    ``set_item`` through a temporary file so a crash never leaves a
    half-written file behind. Read-modify-write cycles are serialized
    by a lock shared by the instance.
    """

    def __init__(self, storage_file: str):
        self.storage_file = storage_file
        self._lock = threading.Lock()
        directory = os.path.dirname(os.path.abspath(storage_file))
        os.makedirs(directory, exist_ok=True)
        logger.info(f"JsonFileStorage using {self.storage_file}")

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.storage_file):
            return {}
        try:
            with open(self.storage_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            logger.error(f"Error reading storage file {self.storage_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Storage file {self.storage_file} does not hold an object, ignoring it")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)

    def _write_all(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.storage_file))
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".storage-", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.storage_file)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

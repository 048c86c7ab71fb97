"""
Notebook of saved words, mirrored to a key-value storage slot
"""
import copy
import json
import threading
from typing import List, Optional
from loguru import logger
from models import SavedWord


DEFAULT_NOTEBOOK_KEY = "lingovibe_notebook"


class NotebookStore:
    """Owns the deduplicated, newest-first collection of saved words.

    The collection is loaded once on construction. Every successful
    mutation rewrites the whole collection into the storage slot.
    Terms and ids are unique; terms compare exactly, case-sensitive.

    Records handed out are copies, so changes only reach the notebook
    through ``save`` and ``delete``. Mutations hold a lock across the
    update and the write so concurrent requests cannot drop entries.
    """

    def __init__(self, storage, key: str = DEFAULT_NOTEBOOK_KEY):
        self.storage = storage
        self.key = key
        self._lock = threading.RLock()
        self._words: List[SavedWord] = []
        self.load()
        logger.info(f"NotebookStore initialized with {len(self._words)} saved words")

    @property
    def words(self) -> List[SavedWord]:
        with self._lock:
            return [copy.deepcopy(word) for word in self._words]

    def __len__(self) -> int:
        return len(self._words)

    def load(self) -> List[SavedWord]:
        """Read the persisted notebook; absent or corrupt data yields an empty one"""
        with self._lock:
            self._words = self._read()
            return self.words

    def _read(self) -> List[SavedWord]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [SavedWord.from_dict(item) for item in data]
        except (ValueError, TypeError, KeyError, AttributeError, RecursionError) as e:
            logger.error(f"Failed to parse notebook, starting empty: {e}")
            return []

    def _persist(self) -> None:
        payload = json.dumps([word.to_dict() for word in self._words], ensure_ascii=False)
        try:
            self.storage.set_item(self.key, payload)
        except OSError as e:
            logger.error(f"Error saving notebook: {e}")

    def is_saved(self, term: str) -> bool:
        return any(word.term == term for word in self._words)

    def get(self, word_id: str) -> Optional[SavedWord]:
        with self._lock:
            for word in self._words:
                if word.id == word_id:
                    return copy.deepcopy(word)
        return None

    def terms(self) -> List[str]:
        return [word.term for word in self._words]

    def save(self, candidate: SavedWord) -> List[SavedWord]:
        """Prepend a new word; a term or id already in the notebook is left untouched"""
        with self._lock:
            if self.is_saved(candidate.term):
                logger.debug(f"Term '{candidate.term}' already saved, skipping")
                return self.words
            if any(word.id == candidate.id for word in self._words):
                logger.warning(f"Id {candidate.id} already in the notebook, not saving '{candidate.term}'")
                return self.words

            self._words = [copy.deepcopy(candidate)] + self._words
            self._persist()
            logger.info(f"Saved '{candidate.term}' ({candidate.id}), notebook size {len(self._words)}")
            return self.words

    def delete(self, word_id: str) -> List[SavedWord]:
        """Remove the word with this id; unknown ids are ignored"""
        with self._lock:
            remaining = [word for word in self._words if word.id != word_id]
            if len(remaining) == len(self._words):
                logger.debug(f"No saved word with id {word_id}")
                return self.words

            self._words = remaining
            self._persist()
            logger.info(f"Deleted word {word_id}, notebook size {len(self._words)}")
            return self.words

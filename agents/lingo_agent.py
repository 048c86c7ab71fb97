"""
LingoVibe application controller: lookups, notebook, chat, stories and study mode
"""
import time
import uuid
from typing import Callable, List, Optional
from loguru import logger
from config import config
from models import DictionaryResult, Language, SavedWord
from tools import LookupFailedError
from utils.conversation_memory import ChatSession, ConversationMemory
from utils.notebook_store import NotebookStore
from utils.storage import JsonFileStorage
from utils.study_session import StudySequencer
from .tool_manager import ToolManager


SEARCH_FAILED_MESSAGE = "Oops! The AI got tongue-tied. Try again."
NOT_ENOUGH_WORDS_MESSAGE = "Save at least 2 words to make a story!"
MIN_STORY_WORDS = 2


class SearchFailedError(Exception):
    """Raised when a lookup fails; the message is safe to show the user"""

    def __init__(self, message: str = SEARCH_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


class NotEnoughWordsError(Exception):
    """Raised when a story is requested with too few saved words"""

    def __init__(self, message: str = NOT_ENOUGH_WORDS_MESSAGE):
        super().__init__(message)
        self.message = message


def _new_id() -> str:
    return uuid.uuid4().hex


def _now_ms() -> int:
    return int(time.time() * 1000)


class LingoAgent:
    """Wires the Gemini tools to the notebook.

    One instance lives for the whole application. It owns the notebook
    store, and every save or delete goes through it.
    """

    def __init__(self, tool_manager: Optional[ToolManager] = None, notebook: Optional[NotebookStore] = None,
                 conversation_memory: Optional[ConversationMemory] = None,
                 id_factory: Callable[[], str] = _new_id, clock: Callable[[], int] = _now_ms):
        self.tool_manager = tool_manager if tool_manager is not None else ToolManager()
        if notebook is None:
            notebook = NotebookStore(JsonFileStorage(config.NOTEBOOK_FILE), key=config.NOTEBOOK_STORAGE_KEY)
        self.notebook = notebook
        if conversation_memory is None:
            conversation_memory = ConversationMemory(config.MAX_CHAT_SESSIONS)
        self.conversation_memory = conversation_memory
        self.id_factory = id_factory
        self.clock = clock

        self.source_lang = Language.parse(config.DEFAULT_SOURCE_LANG)
        self.target_lang = Language.parse(config.DEFAULT_TARGET_LANG)
        self.current_result: Optional[DictionaryResult] = None
        self.chat_session: Optional[ChatSession] = None
        self.study_session: Optional[StudySequencer] = None

        logger.info(f"Initialized LingoAgent ({self.source_lang} -> {self.target_lang}) "
                    f"with {len(self.notebook)} saved words")

    # Languages

    def set_languages(self, source_lang, target_lang) -> None:
        source = Language.parse(source_lang)
        target = Language.parse(target_lang)
        if source == target:
            raise ValueError("Source and target languages must differ")
        self.source_lang = source
        self.target_lang = target
        logger.info(f"Language pair set to {source} -> {target}")

    # Lookup

    async def search(self, query: str) -> DictionaryResult:
        """Look up a word or phrase and open a chat session about it"""
        query = (query or "").strip()
        if not query:
            raise ValueError("Search query cannot be empty")

        self.current_result = None
        self._close_chat()

        try:
            result = await self.tool_manager.dictionary.lookup(query, self.source_lang, self.target_lang)
        except LookupFailedError as e:
            logger.error(f"Search for '{query}' failed: {e}")
            raise SearchFailedError() from e

        self.current_result = result
        self.chat_session = self.conversation_memory.open(
            self.tool_manager.chat.create_session(result.term, self.source_lang, self.target_lang)
        )
        return result

    async def load_image(self) -> Optional[str]:
        """Fetch the illustration for the current result once"""
        result = self.current_result
        if result is None:
            return None
        if result.image_url is None:
            result.image_url = await self.tool_manager.image.image_for(result.term, self.target_lang)
        return result.image_url

    def is_current_saved(self) -> bool:
        return self.current_result is not None and self.notebook.is_saved(self.current_result.term)

    # Notebook

    def save_current(self) -> List[SavedWord]:
        """Save the current result to the notebook; already saved terms are ignored"""
        if self.current_result is None:
            raise ValueError("Nothing to save: look up a word first")
        if self.is_current_saved():
            return self.notebook.words

        word = SavedWord.from_result(
            self.current_result,
            id=self.id_factory(),
            timestamp=self.clock(),
            source_lang=self.source_lang,
            target_lang=self.target_lang,
        )
        return self.notebook.save(word)

    def delete_word(self, word_id: str) -> List[SavedWord]:
        words = self.notebook.delete(word_id)
        if not words and self.study_session is not None:
            logger.info("Notebook emptied during study, closing study mode")
            self.study_session = None
        return words

    # Speech, chat and stories

    async def speak(self, text: str) -> Optional[bytes]:
        return await self.tool_manager.speech.speak(text, self.target_lang)

    async def chat(self, message: str) -> Optional[str]:
        if self.chat_session is None:
            return None
        return await self.chat_session.send_message(message)

    def _close_chat(self) -> None:
        if self.chat_session is not None:
            self.conversation_memory.close(self.chat_session.session_id)
            self.chat_session = None

    async def make_story(self) -> str:
        terms = self.notebook.terms()
        if len(terms) < MIN_STORY_WORDS:
            raise NotEnoughWordsError()
        return await self.tool_manager.story.compose(terms, self.target_lang, self.source_lang)

    # Study mode

    def start_study(self) -> StudySequencer:
        self.study_session = StudySequencer(self.notebook.words)
        return self.study_session

    def _require_study(self) -> StudySequencer:
        if self.study_session is None:
            raise RuntimeError("Study mode is not active")
        return self.study_session

    def advance_study(self) -> StudySequencer:
        session = self._require_study()
        session.advance()
        return session

    def flip_study(self) -> StudySequencer:
        session = self._require_study()
        session.flip()
        return session

    def stop_study(self) -> None:
        self.study_session = None

"""
Utilities package for LingoVibe
"""

from .logger_setup import setup_logger
from .storage import JsonFileStorage, MemoryStorage
from .notebook_store import NotebookStore
from .study_session import StudySequencer
from .conversation_memory import ChatSession, ConversationMemory

__all__ = [
    "setup_logger",
    "JsonFileStorage",
    "MemoryStorage",
    "NotebookStore",
    "StudySequencer",
    "ChatSession",
    "ConversationMemory"
]

"""
Agents package for LingoVibe
"""

from .lingo_agent import LingoAgent, SearchFailedError, NotEnoughWordsError
from .tool_manager import ToolManager

__all__ = [
    "LingoAgent",
    "SearchFailedError",
    "NotEnoughWordsError",
    "ToolManager"
]

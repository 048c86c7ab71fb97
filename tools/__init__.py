"""
Tools package for LingoVibe
"""

from .dictionary_tool import DictionaryTool, LookupFailedError
from .media_tool import ImageTool, SpeechTool
from .story_tool import StoryTool, StoryFailedError
from .chat_tool import ChatTool
from .base_tool import BaseTool

__all__ = [
    "DictionaryTool",
    "LookupFailedError",
    "ImageTool",
    "SpeechTool",
    "StoryTool",
    "StoryFailedError",
    "ChatTool",
    "BaseTool"
]

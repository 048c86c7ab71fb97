"""
Tool Manager holding the Gemini-backed services
"""
from typing import Dict, List, Optional
from loguru import logger
from tools import DictionaryTool, ImageTool, SpeechTool, StoryTool, ChatTool, BaseTool


class ToolManager:
    """Owns one instance of each tool; any of them can be swapped in for tests"""

    def __init__(self, dictionary: Optional[DictionaryTool] = None, image: Optional[ImageTool] = None,
                 speech: Optional[SpeechTool] = None, story: Optional[StoryTool] = None,
                 chat: Optional[ChatTool] = None):
        self.dictionary = dictionary if dictionary is not None else DictionaryTool()
        self.image = image if image is not None else ImageTool()
        self.speech = speech if speech is not None else SpeechTool()
        self.story = story if story is not None else StoryTool()
        self.chat = chat if chat is not None else ChatTool()
        logger.info(f"Initialized ToolManager with {len(self.tools)} tools")

    @property
    def tools(self) -> List[BaseTool]:
        return [self.dictionary, self.image, self.speech, self.story, self.chat]

    def get_available_tools(self) -> Dict[str, str]:
        """Get list of available tools and their descriptions"""
        return {tool.name: tool.get_description() for tool in self.tools}

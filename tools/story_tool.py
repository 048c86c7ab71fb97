"""
Story tool: weaves saved words into a short bilingual story
"""
from typing import Sequence
import google.generativeai as genai
from loguru import logger
from .base_tool import BaseTool
from config import config
from models import Language


STORY_FALLBACK = "Could not generate story."


class StoryFailedError(Exception):
    """Raised when the story request itself fails"""


class StoryTool(BaseTool):
    """Composes a short story that uses the given terms"""

    def __init__(self):
        super().__init__(name="Story", model_name=config.GEMINI_MODEL)
        genai.configure(api_key=config.GEMINI_API_KEY)
        self.model = genai.GenerativeModel(self.model_name)
        logger.info(f"StoryTool initialized with model {self.model_name}")

    def get_description(self) -> str:
        return "Story: short, funny stories that reuse the words in your notebook"

    def _build_prompt(self, terms: Sequence[str], target_lang: Language, source_lang: Language) -> str:
        return (
            f"Create a short, funny, and coherent story in {target_lang} "
            f"(with {source_lang} translation in parentheses after each sentence) "
            f"using the following words: {', '.join(terms)}. Keep it under 200 words."
        )

    async def compose(self, terms: Sequence[str], target_lang: Language, source_lang: Language) -> str:
        """Return story text; callers make sure at least two terms are passed"""
        logger.info(f"Story tool: composing a {target_lang} story from {len(terms)} words")
        try:
            response = await self._run_blocking(
                self.model.generate_content,
                self._build_prompt(terms, target_lang, source_lang),
            )
        except Exception as e:
            logger.error(f"Story tool: Gemini request failed: {e}")
            raise StoryFailedError("Failed to weave a story") from e

        text = response.text if response else None
        return text or STORY_FALLBACK

"""
Chat tool: opens follow-up conversations about a looked-up word
"""
import uuid
import google.generativeai as genai
from loguru import logger
from .base_tool import BaseTool
from config import config
from models import Language
from utils.conversation_memory import ChatSession


class ChatTool(BaseTool):
    """Creates Gemini chat sessions primed with the word being studied"""

    def __init__(self):
        super().__init__(name="Chat", model_name=config.GEMINI_MODEL)
        genai.configure(api_key=config.GEMINI_API_KEY)
        logger.info(f"ChatTool initialized with model {self.model_name}")

    def get_description(self) -> str:
        return "Chat: ask follow-up questions about the current word"

    def create_session(self, term: str, source_lang: Language, target_lang: Language) -> ChatSession:
        system_instruction = (
            f'You are a helpful language assistant. The user is asking about the word "{term}". '
            f"The user speaks {source_lang} and is learning {target_lang}. "
            "Keep answers concise, helpful, and friendly."
        )
        model = genai.GenerativeModel(self.model_name, system_instruction=system_instruction)
        session = ChatSession(session_id=uuid.uuid4().hex, term=term, chat=model.start_chat(history=[]))
        logger.info(f"Chat tool: opened session {session.session_id} for '{term}'")
        return session

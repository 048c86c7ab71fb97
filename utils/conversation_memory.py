"""
Follow-up chat sessions about a looked-up word
"""
import asyncio
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from loguru import logger


GREETING = "Hey! Got any questions about this word?"
EMPTY_REPLY = "Sorry, I couldn't quite get that."
CONNECTION_ERROR_REPLY = "Oops, something went wrong with the connection."


@dataclass
class ChatMessage:
    """Represents a single message in a chat session"""
    role: str  # 'user' or 'model'
    text: str
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "text": self.text}


class ChatSession:
    """A chat about one term, wrapping a Gemini chat object.

    ``chat`` is anything with a ``send_message(text)`` method returning a
    response with a ``text`` attribute.
    """

    def __init__(self, session_id: str, term: str, chat: Any):
        self.session_id = session_id
        self.term = term
        self.chat = chat
        self.messages: List[ChatMessage] = [ChatMessage(role="model", text=GREETING)]
        self.created_at = time.time()
        self.last_updated = self.created_at

    async def send_message(self, text: str) -> str:
        """Send a user message and return the reply; failures become an apology"""
        self.messages.append(ChatMessage(role="user", text=text))
        try:
            response = await asyncio.to_thread(self.chat.send_message, text)
            reply = getattr(response, "text", None) or EMPTY_REPLY
        except Exception as e:
            logger.error(f"Chat session {self.session_id}: error sending message: {e}")
            reply = CONNECTION_ERROR_REPLY

        self.messages.append(ChatMessage(role="model", text=reply))
        self.last_updated = time.time()
        return reply

    def history(self) -> List[Dict[str, Any]]:
        return [message.to_dict() for message in self.messages]


class ConversationMemory:
    """Registry of open chat sessions, evicting the least recently used"""

    def __init__(self, max_sessions: int = 100):
        self.max_sessions = max_sessions
        self.sessions: "OrderedDict[str, ChatSession]" = OrderedDict()
        logger.info("ConversationMemory initialized")

    def open(self, session: ChatSession) -> ChatSession:
        self.sessions[session.session_id] = session
        self.sessions.move_to_end(session.session_id)
        while len(self.sessions) > self.max_sessions:
            evicted_id, _ = self.sessions.popitem(last=False)
            logger.info(f"Evicted chat session {evicted_id}")
        return session

    def get(self, session_id: str) -> Optional[ChatSession]:
        session = self.sessions.get(session_id)
        if session is not None:
            self.sessions.move_to_end(session_id)
        return session

    def close(self, session_id: str) -> bool:
        if self.sessions.pop(session_id, None) is not None:
            logger.info(f"Closed chat session {session_id}")
            return True
        return False

    def __len__(self) -> int:
        return len(self.sessions)

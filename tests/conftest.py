"""
Shared fixtures: in-memory notebook storage and fake Gemini tools
"""
import itertools
from types import SimpleNamespace

import pytest
import google.generativeai as genai

from agents.lingo_agent import LingoAgent
from agents.tool_manager import ToolManager
from models import DictionaryResult, ExampleSentence, Language, SavedWord, UsageContext
from tools import LookupFailedError, StoryFailedError
from utils.conversation_memory import ChatSession, ConversationMemory
from utils.notebook_store import NotebookStore
from utils.storage import MemoryStorage


def make_result(term, definition=None):
    return DictionaryResult(
        term=term,
        definition=definition or f"definition of {term}",
        examples=[ExampleSentence(target=f"{term} example", native=f"{term} translation")],
        usage_context=UsageContext(tone="casual", culture="everyday", synonyms=["x", "y"], nuance="none"),
        pronunciation=f"/{term}/",
    )


def make_word(term, word_id, timestamp=0):
    return SavedWord.from_result(
        make_result(term),
        id=word_id,
        timestamp=timestamp,
        source_lang=Language.ENGLISH,
        target_lang=Language.SPANISH,
    )


class FakeResponse:
    def __init__(self, text=None):
        self.text = text


class FakeGenerativeModel:
    """Stands in for google.generativeai.GenerativeModel"""

    instances = []
    reply = None
    error = None

    def __init__(self, model_name, system_instruction=None, **kwargs):
        self.model_name = model_name
        self.system_instruction = system_instruction
        self.calls = []
        FakeGenerativeModel.instances.append(self)

    def generate_content(self, contents, **kwargs):
        self.calls.append((contents, kwargs))
        if FakeGenerativeModel.error is not None:
            raise FakeGenerativeModel.error
        return FakeResponse(FakeGenerativeModel.reply)

    def start_chat(self, history=None):
        return FakeChat()


class FakeChat:
    def __init__(self, replies=None, error=None):
        self.replies = list(replies or ["Sure!"])
        self.error = error
        self.sent = []

    def send_message(self, text):
        self.sent.append(text)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.replies.pop(0) if self.replies else None)


@pytest.fixture(autouse=True)
def fake_genai(monkeypatch):
    """Keep every google.generativeai call offline"""
    FakeGenerativeModel.instances = []
    FakeGenerativeModel.reply = None
    FakeGenerativeModel.error = None
    monkeypatch.setattr(genai, "configure", lambda **kwargs: None)
    monkeypatch.setattr(genai, "GenerativeModel", FakeGenerativeModel)
    monkeypatch.setattr(genai, "GenerationConfig", lambda **kwargs: kwargs)
    return FakeGenerativeModel


def inline_response(data, mime_type="application/octet-stream"):
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


class FakeGenAIClient:
    """Stands in for google.genai.Client"""

    def __init__(self, response=None, error=None):
        self.calls = []
        self.response = response
        self.error = error
        self.models = SimpleNamespace(generate_content=self.generate_content)

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeDictionaryTool:
    name = "Dictionary"

    def __init__(self):
        self.fail = False
        self.calls = []

    def get_description(self):
        return "fake dictionary"

    async def lookup(self, term, source_lang, target_lang):
        self.calls.append((term, source_lang, target_lang))
        if self.fail:
            raise LookupFailedError("backend down")
        return make_result(term)


class FakeImageTool:
    name = "Image"

    def __init__(self):
        self.calls = 0

    def get_description(self):
        return "fake image"

    async def image_for(self, term, target_lang):
        self.calls += 1
        return f"https://images.test/{term}.png"


class FakeSpeechTool:
    name = "Speech"

    def __init__(self, audio=b"RIFFfake"):
        self.audio = audio
        self.calls = []

    def get_description(self):
        return "fake speech"

    async def speak(self, text, lang):
        self.calls.append((text, lang))
        return self.audio


class FakeStoryTool:
    name = "Story"

    def __init__(self):
        self.fail = False
        self.calls = []

    def get_description(self):
        return "fake story"

    async def compose(self, terms, target_lang, source_lang):
        self.calls.append(list(terms))
        if self.fail:
            raise StoryFailedError("backend down")
        return "Once upon a time: " + ", ".join(terms)


class FakeChatTool:
    name = "Chat"

    def __init__(self):
        self.counter = itertools.count(1)

    def get_description(self):
        return "fake chat"

    def create_session(self, term, source_lang, target_lang):
        return ChatSession(session_id=f"chat-{next(self.counter)}", term=term, chat=FakeChat(["Great question!"]))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def notebook(storage):
    return NotebookStore(storage)


@pytest.fixture
def tool_manager():
    return ToolManager(
        dictionary=FakeDictionaryTool(),
        image=FakeImageTool(),
        speech=FakeSpeechTool(),
        story=FakeStoryTool(),
        chat=FakeChatTool(),
    )


@pytest.fixture
def agent(tool_manager, notebook):
    ids = (f"id-{n}" for n in itertools.count(1))
    clock = itertools.count(1000)
    return LingoAgent(
        tool_manager=tool_manager,
        notebook=notebook,
        conversation_memory=ConversationMemory(max_sessions=5),
        id_factory=lambda: next(ids),
        clock=lambda: next(clock),
    )

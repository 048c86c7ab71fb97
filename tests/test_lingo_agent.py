"""Tests for the application controller."""

import asyncio

import pytest

from agents.lingo_agent import NOT_ENOUGH_WORDS_MESSAGE, NotEnoughWordsError, SearchFailedError
from models import Language


def search(agent, query):
    return asyncio.run(agent.search(query))


def test_search_sets_result_and_opens_chat(agent):
    result = search(agent, "libro")

    assert agent.current_result is result
    assert agent.chat_session is not None
    assert agent.chat_session.term == "libro"
    assert agent.tool_manager.dictionary.calls == [("libro", Language.ENGLISH, Language.SPANISH)]


def test_new_search_closes_previous_chat(agent):
    search(agent, "libro")
    first = agent.chat_session.session_id
    search(agent, "mesa")

    assert agent.conversation_memory.get(first) is None
    assert len(agent.conversation_memory) == 1


def test_failed_search_returns_to_safe_state(agent):
    search(agent, "libro")
    agent.tool_manager.dictionary.fail = True

    with pytest.raises(SearchFailedError) as exc_info:
        search(agent, "mesa")

    assert exc_info.value.message == "Oops! The AI got tongue-tied. Try again."
    assert agent.current_result is None
    assert agent.chat_session is None


def test_blank_search_is_rejected(agent):
    with pytest.raises(ValueError):
        search(agent, "  ")


def test_identical_languages_are_rejected(agent):
    with pytest.raises(ValueError):
        agent.set_languages("French", "french")
    agent.set_languages("French", "German")
    assert (agent.source_lang, agent.target_lang) == (Language.FRENCH, Language.GERMAN)


def test_save_current_materializes_saved_word(agent):
    search(agent, "libro")
    asyncio.run(agent.load_image())

    words = agent.save_current()

    assert len(words) == 1
    word = words[0]
    assert (word.id, word.timestamp) == ("id-1", 1000)
    assert word.image_url == "https://images.test/libro.png"
    assert (word.source_lang, word.target_lang) == (Language.ENGLISH, Language.SPANISH)
    assert agent.is_current_saved()


def test_saving_twice_does_not_consume_ids(agent):
    search(agent, "libro")
    agent.save_current()
    agent.save_current()
    search(agent, "mesa")
    words = agent.save_current()

    assert [w.id for w in words] == ["id-2", "id-1"]


def test_editing_current_result_after_save_leaves_notebook_alone(agent):
    search(agent, "libro")
    agent.save_current()

    agent.current_result.definition = "changed"
    agent.current_result.examples[0].target = "changed"
    agent.current_result.usage_context.synonyms.clear()

    saved = agent.notebook.get("id-1")
    assert saved.definition == "definition of libro"
    assert saved.examples[0].target == "libro example"
    assert saved.usage_context.synonyms == ["x", "y"]


def test_save_without_result_fails(agent):
    with pytest.raises(ValueError):
        agent.save_current()


def test_image_is_fetched_once(agent):
    search(agent, "libro")
    asyncio.run(agent.load_image())
    asyncio.run(agent.load_image())
    assert agent.tool_manager.image.calls == 1


def test_speak_uses_target_language(agent):
    audio = asyncio.run(agent.speak("hola"))
    assert audio == b"RIFFfake"
    assert agent.tool_manager.speech.calls == [("hola", Language.SPANISH)]


def test_chat_without_session_returns_none(agent):
    assert asyncio.run(agent.chat("hi")) is None


def test_chat_replies(agent):
    search(agent, "libro")
    assert asyncio.run(agent.chat("What does it mean?")) == "Great question!"


def test_story_needs_two_words(agent):
    search(agent, "libro")
    agent.save_current()

    with pytest.raises(NotEnoughWordsError) as exc_info:
        asyncio.run(agent.make_story())
    assert exc_info.value.message == NOT_ENOUGH_WORDS_MESSAGE
    assert agent.tool_manager.story.calls == []


def test_story_uses_every_saved_term(agent):
    for term in ["libro", "mesa"]:
        search(agent, term)
        agent.save_current()

    story = asyncio.run(agent.make_story())

    assert agent.tool_manager.story.calls == [["mesa", "libro"]]
    assert "mesa" in story


def test_study_requires_words(agent):
    with pytest.raises(ValueError):
        agent.start_study()


def test_study_cycles_over_snapshot(agent):
    for term in ["libro", "mesa"]:
        search(agent, term)
        agent.save_current()

    session = agent.start_study()
    agent.delete_word("id-1")

    assert session.length == 2
    assert agent.advance_study().current.term == "libro"
    assert agent.flip_study().revealed


def test_emptying_notebook_closes_study(agent):
    search(agent, "libro")
    agent.save_current()
    agent.start_study()

    agent.delete_word("id-1")

    assert agent.study_session is None
    with pytest.raises(RuntimeError):
        agent.advance_study()

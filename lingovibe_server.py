#!/usr/bin/env python3
"""
LingoVibe HTTP server: dictionary lookups, notebook, chat, stories and study mode
"""
import os
import asyncio
from flask import Flask, Response, request, jsonify
from flask_cors import CORS
import logging
from datetime import datetime
from werkzeug.exceptions import HTTPException

from agents.lingo_agent import LingoAgent, SearchFailedError, NotEnoughWordsError
from models import Language
from tools import StoryFailedError
from utils.logger_setup import setup_logger

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # Enable CORS for cross-origin requests

# Global agent instance
agent = None


def initialize_agent():
    """Initialize the LingoVibe agent"""
    global agent
    try:
        agent = LingoAgent()
        logger.info(f"LingoVibe agent initialized successfully with ID: {id(agent)}")
        return True
    except Exception as e:
        logger.error(f"Failed to initialize agent: {e}")
        agent = None
        return False


def _run(coro):
    """Run a coroutine to completion on a fresh event loop"""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _ok(**payload):
    return jsonify({'success': True, 'timestamp': datetime.now().isoformat(), **payload})


def _error(message, status):
    return jsonify({'success': False, 'error': message, 'timestamp': datetime.now().isoformat()}), status


def _require_agent():
    if not agent and not initialize_agent():
        return _error('Failed to initialize LingoVibe agent', 500)
    return None


def _study_view():
    return agent.study_session.to_dict() if agent.study_session else None


@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'agent_initialized': agent is not None,
        'service': 'lingovibe-server'
    })


@app.route('/api/languages', methods=['GET'])
def get_languages():
    failure = _require_agent()
    if failure:
        return failure
    return _ok(
        languages=[lang.value for lang in Language],
        sourceLang=agent.source_lang.value,
        targetLang=agent.target_lang.value,
    )


@app.route('/api/languages', methods=['POST'])
def set_languages():
    failure = _require_agent()
    if failure:
        return failure
    data = request.get_json(silent=True) or {}
    try:
        agent.set_languages(data.get('sourceLang'), data.get('targetLang'))
    except ValueError as e:
        return _error(str(e), 400)
    return _ok(sourceLang=agent.source_lang.value, targetLang=agent.target_lang.value)


@app.route('/api/lookup', methods=['POST'])
def lookup():
    """Look up a word or phrase"""
    failure = _require_agent()
    if failure:
        return failure

    data = request.get_json(silent=True) or {}
    query = str(data.get('query', '')).strip()
    if not query:
        return _error('Query cannot be empty', 400)

    logger.info(f"Looking up '{query}'")
    try:
        result = _run(agent.search(query))
    except SearchFailedError as e:
        return _error(e.message, 502)

    return _ok(
        result=result.to_dict(),
        isSaved=agent.is_current_saved(),
        chatSessionId=agent.chat_session.session_id if agent.chat_session else None,
    )


@app.route('/api/image', methods=['POST'])
def image():
    failure = _require_agent()
    if failure:
        return failure
    if agent.current_result is None:
        return _error('No current lookup result', 409)
    return _ok(imageUrl=_run(agent.load_image()))


@app.route('/api/speak', methods=['POST'])
def speak():
    """Synthesize speech for a piece of text in the target language"""
    failure = _require_agent()
    if failure:
        return failure
    data = request.get_json(silent=True) or {}
    text = str(data.get('text', '')).strip()
    if not text:
        return _error('Text cannot be empty', 400)

    audio = _run(agent.speak(text))
    if not audio:
        return Response(status=204)
    return Response(audio, mimetype='audio/wav')


@app.route('/api/chat', methods=['POST'])
def chat():
    """Ask a follow-up question about the current word"""
    failure = _require_agent()
    if failure:
        return failure
    data = request.get_json(silent=True) or {}
    message = str(data.get('message', '')).strip()
    if not message:
        return _error('Message cannot be empty', 400)
    if agent.chat_session is None:
        return _error('No chat session: look up a word first', 409)

    reply = _run(agent.chat(message))
    return _ok(response=reply, history=agent.chat_session.history())


@app.route('/api/notebook', methods=['GET'])
def get_notebook():
    failure = _require_agent()
    if failure:
        return failure
    return _ok(words=[word.to_dict() for word in agent.notebook.words])


@app.route('/api/notebook', methods=['POST'])
def save_word():
    """Save the current lookup result"""
    failure = _require_agent()
    if failure:
        return failure
    try:
        words = agent.save_current()
    except ValueError as e:
        return _error(str(e), 409)
    return _ok(words=[word.to_dict() for word in words], isSaved=agent.is_current_saved())


@app.route('/api/notebook/<word_id>', methods=['DELETE'])
def delete_word(word_id):
    failure = _require_agent()
    if failure:
        return failure
    words = agent.delete_word(word_id)
    return _ok(words=[word.to_dict() for word in words], study=_study_view())


@app.route('/api/story', methods=['POST'])
def story():
    """Weave a story from every saved word"""
    failure = _require_agent()
    if failure:
        return failure
    try:
        text = _run(agent.make_story())
    except NotEnoughWordsError as e:
        return _error(e.message, 400)
    except StoryFailedError as e:
        logger.error(f"Error making story: {e}")
        return _error('Failed to weave a story. Try again!', 502)
    return _ok(story=text)


@app.route('/api/study', methods=['POST'])
def start_study():
    failure = _require_agent()
    if failure:
        return failure
    try:
        agent.start_study()
    except ValueError as e:
        return _error(str(e), 409)
    return _ok(study=_study_view())


@app.route('/api/study/next', methods=['POST'])
def next_card():
    failure = _require_agent()
    if failure:
        return failure
    try:
        agent.advance_study()
    except RuntimeError as e:
        return _error(str(e), 409)
    return _ok(study=_study_view())


@app.route('/api/study/flip', methods=['POST'])
def flip_card():
    failure = _require_agent()
    if failure:
        return failure
    try:
        agent.flip_study()
    except RuntimeError as e:
        return _error(str(e), 409)
    return _ok(study=_study_view())


@app.route('/api/study', methods=['DELETE'])
def stop_study():
    failure = _require_agent()
    if failure:
        return failure
    agent.stop_study()
    return _ok(study=None)


@app.route('/api/tools', methods=['GET'])
def get_available_tools():
    """Get list of available tools"""
    failure = _require_agent()
    if failure:
        return failure
    return _ok(tools=agent.tool_manager.get_available_tools())


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    if isinstance(e, HTTPException):
        return e
    logger.error(f"Unhandled error: {e}")
    return _error(str(e), 500)


if __name__ == '__main__':
    setup_logger()
    logger.info("Starting LingoVibe server...")

    if initialize_agent():
        logger.info("Agent initialized successfully")
    else:
        logger.warning("Agent initialization failed, will initialize on first request")

    port = int(os.getenv('LINGOVIBE_PORT', 5001))
    host = os.getenv('LINGOVIBE_HOST', '127.0.0.1')

    logger.info(f"Starting server on {host}:{port}")
    # One agent holds the current lookup, chat and study state for every request
    app.run(host=host, port=port, debug=False, threaded=False)

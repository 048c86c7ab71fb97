"""
Dictionary tool: structured word lookups generated by Gemini
"""
import json
from typing import Any, Dict
import google.generativeai as genai
from loguru import logger
from .base_tool import BaseTool
from config import config
from models import DictionaryResult, Language


class LookupFailedError(Exception):
    """Raised when Gemini cannot produce a dictionary entry"""


def build_response_schema(source_lang: Language, target_lang: Language) -> Dict[str, Any]:
    """JSON schema the model's answer must follow"""
    return {
        "type": "object",
        "properties": {
            "term": {"type": "string", "description": f"The word or phrase in {target_lang}"},
            "definition": {"type": "string"},
            "pronunciation": {"type": "string"},
            "examples": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "target": {"type": "string", "description": f"Sentence in {target_lang}"},
                        "native": {"type": "string", "description": f"Translation in {source_lang}"},
                    },
                },
            },
            "usageContext": {
                "type": "object",
                "properties": {
                    "tone": {"type": "string"},
                    "culture": {"type": "string"},
                    "synonyms": {"type": "array", "items": {"type": "string"}},
                    "nuance": {"type": "string"},
                },
            },
        },
        "required": ["term", "definition", "examples", "usageContext"],
    }


def build_system_instruction(term: str, source_lang: Language, target_lang: Language) -> str:
    return f"""You are a fun, witty, and culturally savvy language tutor.
The user speaks {source_lang} and is learning {target_lang}.

The user has entered: "{term}".

TASK:
1. Detect if "{term}" is in {source_lang} or {target_lang}.
2. If it is in {source_lang}, translate it to the most natural/common word or phrase in {target_lang}. Use that translation as the main "term".
3. If it is already in {target_lang}, use it as the main "term".
4. Generate a dictionary entry for this {target_lang} term.

Rules:
1. Definition: Natural language explanation in {source_lang}.
2. Examples: Provide 2 distinct example sentences in {target_lang} with {source_lang} translations.
3. Usage Context: This is the "Vibe Check". Be conversational, like a friend. Explain cultural context, when to use it (and when not to), the tone (casual/formal), and list 2-3 synonyms or easily confused words with brief distinctions. AVOID textbook jargon. Be concise.

Return strict JSON."""


class DictionaryTool(BaseTool):
    """Looks up a word or phrase and returns a structured dictionary entry"""

    def __init__(self):
        super().__init__(name="Dictionary", model_name=config.GEMINI_MODEL)
        genai.configure(api_key=config.GEMINI_API_KEY)
        logger.info(f"DictionaryTool initialized with model {self.model_name}")

    def get_description(self) -> str:
        return "Dictionary: definitions, example sentences and cultural vibe checks for any word or phrase"

    async def lookup(self, term: str, source_lang: Language, target_lang: Language) -> DictionaryResult:
        """Generate a dictionary entry for ``term``; raises LookupFailedError on any backend failure"""
        term = (term or "").strip()
        if not term:
            raise ValueError("Search term cannot be empty")

        logger.info(f"Dictionary tool: looking up '{term}' ({source_lang} -> {target_lang})")
        model = genai.GenerativeModel(
            self.model_name,
            system_instruction=build_system_instruction(term, source_lang, target_lang),
        )
        generation_config = genai.GenerationConfig(
            response_mime_type="application/json",
            response_schema=build_response_schema(source_lang, target_lang),
        )

        try:
            response = await self._run_blocking(
                model.generate_content,
                "Explain the concept.",
                generation_config=generation_config,
            )
            text = response.text if response else None
        except Exception as e:
            logger.error(f"Dictionary tool: Gemini request failed for '{term}': {e}")
            raise LookupFailedError(f"Lookup failed for '{term}'") from e

        if not text:
            logger.error(f"Dictionary tool: empty response for '{term}'")
            raise LookupFailedError("No response from Gemini")

        return self._parse_result(text, term)

    def _parse_result(self, text: str, term: str) -> DictionaryResult:
        try:
            data = json.loads(text)
            result = DictionaryResult.from_dict(data)
        except (ValueError, TypeError, AttributeError) as e:
            logger.error(f"Dictionary tool: could not parse entry for '{term}': {e}")
            raise LookupFailedError(f"Malformed dictionary entry for '{term}'") from e

        logger.info(f"Dictionary tool: '{term}' resolved to '{result.term}' with {len(result.examples)} examples")
        return result

"""
Media tools: concept illustrations and text-to-speech via Gemini.

Image and audio output need response modalities that only the google-genai
client exposes, so these tools use it instead of google.generativeai.
"""
import base64
from typing import Any, Optional
from google import genai
from google.genai import types
from loguru import logger
from .base_tool import BaseTool
from config import config
from models import Language
from utils.audio import decode_base64, duration_seconds, pcm_to_wav


class GenAIClientMixin:
    """Lazily built google-genai client shared by the media tools"""

    _client: Any = None

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=config.GEMINI_API_KEY)
        return self._client


def _first_inline_data(response: Any) -> Optional[Any]:
    """Return the first inline-data part of a generate_content response"""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and getattr(inline_data, "data", None):
            return inline_data
    return None


class ImageTool(GenAIClientMixin, BaseTool):
    """Generates a flat-design illustration for a term"""

    def __init__(self, client: Any = None):
        super().__init__(name="Image", model_name=config.GEMINI_IMAGE_MODEL)
        self._client = client
        self.placeholder_url = config.PLACEHOLDER_IMAGE_URL
        logger.info(f"ImageTool initialized with model {self.model_name}")

    def get_description(self) -> str:
        return "Image: simple vector illustrations that act as visual memory aids"

    def _build_prompt(self, term: str, target_lang: Language) -> str:
        return (
            f'A simple, vibrant, fun, flat-design style vector illustration representing the concept of "{term}" '
            f"in the context of the {target_lang} language/culture. Bright colors, white background. Minimalist."
        )

    async def image_for(self, term: str, target_lang: Language) -> str:
        """Return a data URL for the illustration, or the placeholder URL on any failure"""
        try:
            client = self._get_client()
            response = await self._run_blocking(
                client.models.generate_content,
                model=self.model_name,
                contents=self._build_prompt(term, target_lang),
            )
            inline_data = _first_inline_data(response)
            if inline_data is None:
                logger.warning(f"Image tool: no image returned for '{term}', using placeholder")
                return self.placeholder_url

            data = inline_data.data
            if isinstance(data, bytes):
                data = base64.b64encode(data).decode("ascii")
            mime_type = getattr(inline_data, "mime_type", None) or "image/png"
            logger.info(f"Image tool: generated {mime_type} illustration for '{term}'")
            return f"data:{mime_type};base64,{data}"
        except Exception as e:
            logger.error(f"Image tool: error generating image for '{term}': {e}")
            return self.placeholder_url


class SpeechTool(GenAIClientMixin, BaseTool):
    """Synthesizes speech and returns it as a playable WAV payload"""

    def __init__(self, client: Any = None):
        super().__init__(name="Speech", model_name=config.GEMINI_TTS_MODEL)
        self._client = client
        self.voice_name = config.TTS_VOICE
        self.sample_rate = config.TTS_SAMPLE_RATE
        logger.info(f"SpeechTool initialized with model {self.model_name} and voice {self.voice_name}")

    def get_description(self) -> str:
        return "Speech: native-sounding pronunciation of terms and example sentences"

    def _speech_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=self.voice_name),
                ),
            ),
        )

    async def speak(self, text: str, lang: Language) -> Optional[bytes]:
        """Return WAV audio for ``text``, or None when synthesis fails"""
        if not text or not text.strip():
            return None

        try:
            client = self._get_client()
            response = await self._run_blocking(
                client.models.generate_content,
                model=self.model_name,
                contents=text,
                config=self._speech_config(),
            )
            inline_data = _first_inline_data(response)
            if inline_data is None:
                logger.warning(f"Speech tool: no audio returned for '{text[:40]}'")
                return None

            pcm = inline_data.data
            if isinstance(pcm, str):
                pcm = decode_base64(pcm)

            logger.info(
                f"Speech tool: synthesized {duration_seconds(pcm, sample_rate=self.sample_rate):.2f}s "
                f"of {lang} audio"
            )
            return pcm_to_wav(pcm, sample_rate=self.sample_rate)
        except Exception as e:
            logger.error(f"Speech tool: TTS error: {e}")
            return None

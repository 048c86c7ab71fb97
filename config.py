"""
Configuration settings for the LingoVibe dictionary service
"""
import os
from dotenv import load_dotenv
import logging

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Load environment variables (try multiple locations for cloud compatibility)
def load_environment():
    """Load environment variables from .env files if present"""
    env_loaded = load_dotenv()
    if env_loaded:
        logger.info("Loaded environment variables from .env file")
    else:
        logger.info("No .env file found, using system environment variables")

    for env_file in ['.env.local', '.env.production']:
        if os.path.exists(env_file):
            load_dotenv(env_file, override=True)
            logger.info(f"Loaded additional environment from {env_file}")

load_environment()

class Config:
    """Configuration class for the service"""

    # Gemini API Configuration
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_IMAGE_MODEL: str = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image")
    GEMINI_TTS_MODEL: str = os.getenv("GEMINI_TTS_MODEL", "gemini-2.5-flash-preview-tts")

    # Media Configuration
    TTS_VOICE: str = os.getenv("TTS_VOICE", "Kore")
    TTS_SAMPLE_RATE: int = int(os.getenv("TTS_SAMPLE_RATE", "24000"))
    PLACEHOLDER_IMAGE_URL: str = os.getenv("PLACEHOLDER_IMAGE_URL", "https://picsum.photos/400/400")

    # Notebook Configuration
    NOTEBOOK_FILE: str = os.getenv("NOTEBOOK_FILE", os.path.join("data", "lingovibe_storage.json"))
    NOTEBOOK_STORAGE_KEY: str = os.getenv("NOTEBOOK_STORAGE_KEY", "lingovibe_notebook")

    # Lookup defaults
    DEFAULT_SOURCE_LANG: str = os.getenv("DEFAULT_SOURCE_LANG", "English")
    DEFAULT_TARGET_LANG: str = os.getenv("DEFAULT_TARGET_LANG", "Spanish")

    # Chat Configuration
    MAX_CHAT_SESSIONS: int = int(os.getenv("MAX_CHAT_SESSIONS", "100"))

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "lingovibe.log")

    # Tool Configuration
    TOOL_TIMEOUT: int = int(os.getenv("TOOL_TIMEOUT", "30"))  # seconds

    @classmethod
    def validate(cls) -> bool:
        """Validate required configuration"""
        logger.info("Validating environment variables...")

        all_env_vars = {
            "GEMINI_API_KEY": cls.GEMINI_API_KEY,
            "GEMINI_MODEL": cls.GEMINI_MODEL,
            "NOTEBOOK_FILE": cls.NOTEBOOK_FILE,
        }

        # Log what we found (without exposing sensitive values)
        for var_name, var_value in all_env_vars.items():
            if var_value:
                masked_value = var_value[:8] + "..." if len(var_value) > 8 else "SET"
                logger.info(f"{var_name}: {masked_value}")
            else:
                logger.warning(f"{var_name}: NOT SET")

        required_vars = [
            ("GEMINI_API_KEY", cls.GEMINI_API_KEY),
        ]

        missing_vars = [name for name, value in required_vars if not value]

        if missing_vars:
            logger.error(f"Missing required environment variables: {', '.join(missing_vars)}")
            raise ValueError(f"Missing required environment variables: {', '.join(missing_vars)}")

        logger.info("All required environment variables are set")
        return True

# Global config instance
config = Config()

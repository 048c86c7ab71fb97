"""
Base tool class for Gemini-backed services
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable
from loguru import logger
from config import config


class BaseTool(ABC):
    """Base class for all Gemini tools"""

    def __init__(self, name: str, model_name: str):
        self.name = name
        self.model_name = model_name
        self.timeout = config.TOOL_TIMEOUT

    async def _run_blocking(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        """Run a blocking SDK call on a worker thread, bounded by the tool timeout"""
        logger.debug(f"{self.name}: calling {getattr(func, '__name__', func)} on {self.model_name}")
        return await asyncio.wait_for(asyncio.to_thread(func, *args, **kwargs), timeout=self.timeout)

    @abstractmethod
    def get_description(self) -> str:
        """Get tool description"""
        pass

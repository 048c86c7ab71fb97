"""
Logger setup for LingoVibe
"""
import sys
from loguru import logger
from config import config


def setup_logger(level: str = None, log_file: str = None) -> None:
    """Configure loguru with a console sink and a rotating file sink"""
    level = (level or config.LOG_LEVEL).upper()
    log_file = log_file if log_file is not None else config.LOG_FILE

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )
    if log_file:
        logger.add(log_file, level=level, rotation="10 MB", retention="7 days", encoding="utf-8")
    logger.info(f"Logger configured (level={level}, file={log_file or 'none'})")

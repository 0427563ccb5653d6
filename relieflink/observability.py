"""
Logging setup and LangSmith tracing for the Gemini extraction calls.
Uses LANGCHAIN_API_KEY / LANGCHAIN_PROJECT from config; LangChain picks up the exported env vars on its own.
"""
import logging
import os

from relieflink.config import settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Apply settings.log_level to the root logger (uvicorn keeps its own handlers)."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("relieflink").setLevel(level)


def setup_langsmith_tracing() -> None:
    """
    If LangSmith is configured, export the env vars LangChain reads so every
    ChatGoogleGenerativeAI call made by the extractor shows up in LangSmith.
    """
    if not settings.langchain_tracing_v2 or not settings.langchain_api_key:
        logger.debug("LangSmith tracing disabled or no API key; skipping")
        return

    os.environ["LANGCHAIN_TRACING_V2"] = "true"
    os.environ["LANGCHAIN_API_KEY"] = settings.langchain_api_key
    os.environ["LANGCHAIN_PROJECT"] = settings.langchain_project or "relieflink"
    logger.info("LangSmith tracing enabled; project=%s", os.environ["LANGCHAIN_PROJECT"])

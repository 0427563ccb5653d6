"""
Message extraction: free text → need / quantity / location / urgency via Gemini.
One attempt per message. Any failure (API error, timeout, non-JSON, missing fields) yields FALLBACK_EXTRACTION.
"""
import json
import logging
import re
from typing import Any, Optional, Protocol

from relieflink.config import Settings, settings as default_settings
from relieflink.schemas.triage import ExtractionResult

logger = logging.getLogger(__name__)

FALLBACK_EXTRACTION = ExtractionResult(
    need="General",
    quantity=None,
    location="Unknown",
    urgency_level="medium",
    urgency_reason="AI analysis failed, defaulted to medium.",
)

EXTRACTION_PROMPT = """
Extract emergency details from the message.
Return ONLY valid JSON with:
- need (e.g. Ambulance, Shelter, Food, Police, Fire, General)
- quantity (string or null)
- location (text)
- urgency_level (low / medium / high)
- urgency_reason (one sentence explanation)

Message: "{message}"
"""

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class Extractor(Protocol):
    def extract(self, message: str) -> ExtractionResult:
        ...


class FallbackExtractor:
    """No model: every message gets the fixed fallback. Used without an API key and in tests."""

    def extract(self, message: str) -> ExtractionResult:
        return FALLBACK_EXTRACTION


def build_prompt(message: str) -> str:
    return EXTRACTION_PROMPT.format(message=message)


def _content_text(content: Any) -> str:
    """Chat model content is a str, or a list of parts on newer Gemini models."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(part.get("text") or "")
        return "".join(parts)
    return ""


def parse_extraction(raw: str) -> ExtractionResult:
    """Strict parse of the model reply. Raises ValueError / ValidationError on anything off-contract."""
    text = _FENCE_RE.sub("", (raw or "").strip())
    data = json.loads(text or "{}")
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    unexpected = set(data) - set(ExtractionResult.model_fields)
    if unexpected:
        raise ValueError(f"Unexpected fields in extraction: {sorted(unexpected)}")
    return ExtractionResult.model_validate(data)


class GeminiExtractor:
    """Gemini-backed extraction via LangChain. JSON-only response requested."""

    def __init__(self, api_key: Optional[str] = None, model: str = "gemini-2.5-flash", timeout: float = 30.0, llm=None):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._llm = llm

    def _get_llm(self):
        if self._llm is None:
            from langchain_google_genai import ChatGoogleGenerativeAI
            self._llm = ChatGoogleGenerativeAI(
                model=self.model,
                google_api_key=self.api_key,
                timeout=self.timeout,
                max_retries=1,  # single attempt; fallback handles failure
                response_mime_type="application/json",
            )
        return self._llm

    def extract(self, message: str) -> ExtractionResult:
        try:
            from langchain_core.messages import HumanMessage
            resp = self._get_llm().invoke([HumanMessage(content=build_prompt(message))])
            return parse_extraction(_content_text(resp.content))
        except Exception as e:
            logger.warning("Gemini extraction failed, using fallback: %s", e)
            return FALLBACK_EXTRACTION


def get_extractor(config: Optional[Settings] = None) -> Extractor:
    """Pick the extractor from configuration (extractor_backend, google_api_key)."""
    config = config or default_settings
    backend = config.extractor_backend
    if backend == "fallback":
        return FallbackExtractor()
    if backend == "auto" and not config.google_api_key:
        logger.info("GOOGLE_API_KEY not set; extraction will use the fixed fallback")
        return FallbackExtractor()
    return GeminiExtractor(
        api_key=config.google_api_key,
        model=config.gemini_model,
        timeout=config.llm_timeout_seconds,
    )

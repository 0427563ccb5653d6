"""
Triage API: bulk message analysis, resource listing, results log.
"""
import logging
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from relieflink.config import settings
from relieflink.core.pipeline import TriagePipeline, split_message_lines
from relieflink.db.storage import Storage, get_storage
from relieflink.schemas.triage import (
    AnalyzedMessage,
    BulkAnalyzeRequest,
    BulkAnalyzeResponse,
    Resource,
    TextAnalyzeRequest,
)
from relieflink.services.extraction import get_extractor
from relieflink.services.maps import LocationResolver

router = APIRouter()
logger = logging.getLogger(__name__)


@lru_cache
def get_pipeline() -> TriagePipeline:
    """Process-wide pipeline wired from settings."""
    return TriagePipeline(
        extractor=get_extractor(settings),
        resolver=LocationResolver(jitter=settings.geocode_jitter),
        storage=get_storage(),
    )


def _run_batch(pipeline: TriagePipeline, messages: List[str]) -> BulkAnalyzeResponse:
    try:
        results = pipeline.analyze_batch(messages)
    except Exception:
        logger.exception("Batch analysis failed")
        raise HTTPException(
            status_code=500,
            detail={
                "error": "analysis_failed",
                "message": "Internal Server Error",
            },
        )
    return BulkAnalyzeResponse(results=results)


@router.post("/analyze", response_model=BulkAnalyzeResponse)
def analyze_messages(request: BulkAnalyzeRequest, pipeline: TriagePipeline = Depends(get_pipeline)):
    """Extract, score, geocode and match each message. Results sorted by urgency_score, highest first."""
    return _run_batch(pipeline, request.messages)


@router.post("/analyze/text", response_model=BulkAnalyzeResponse)
def analyze_text(request: TextAnalyzeRequest, pipeline: TriagePipeline = Depends(get_pipeline)):
    """Same as /analyze for a pasted block of text, one message per line."""
    return _run_batch(pipeline, split_message_lines(request.text))


@router.get("/resources", response_model=List[Resource])
async def list_resources(storage: Storage = Depends(get_storage)):
    return storage.list_resources()


@router.get("/results", response_model=List[AnalyzedMessage])
async def list_results(storage: Storage = Depends(get_storage)):
    """Every result recorded since process start, in recording order."""
    return storage.list_results()

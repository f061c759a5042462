"""
Search API Router
Deterministic smart search, classifier-filter application and the source catalog
"""
from fastapi import APIRouter, HTTPException, status
from typing import List
import uuid
import time
import logging

from smart_search.models.requests import SmartSearchRequest, FilterSearchRequest, AddSourceRequest
from smart_search.models.responses import SmartSearchResponse, FilterSearchResponse, SourceListResponse
from smart_search.models.sources import CategoryConfig, Source
from smart_search.services import (
    parse_smart_search,
    execute_smart_search,
    apply_classifier_response,
    get_registry,
)
from smart_search.services.sources import SOURCE_CATEGORIES
from smart_search.utils.validators import ClassifierResponseError, parse_classifier_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["search"])


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)


@router.post("/search/smart", response_model=SmartSearchResponse)
async def smart_search(request: SmartSearchRequest):
    """
    Deterministic natural-language search

    1. Parse the query into intents (orgs derived from records unless given)
    2. Score every record against the intents and leftover free text
    3. Return matches ranked by score with explanations
    """
    start_time = time.time()

    if not request.query.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Query is required")

    query_id = str(uuid.uuid4())
    logger.info(f"[{query_id}] Smart search over {len(request.records)} records: {request.query}")

    known_orgs = request.known_orgs
    if known_orgs is None:
        known_orgs = list(dict.fromkeys(r.org for r in request.records if r.org))

    parsed = parse_smart_search(request.query, known_orgs, get_registry().get_all_sources())
    results = execute_smart_search(parsed, request.records)

    return SmartSearchResponse(
        query_id=query_id,
        parsed=parsed,
        results=results,
        latency_ms=_elapsed_ms(start_time),
    )


@router.post("/search/filters", response_model=FilterSearchResponse)
async def filter_search(request: FilterSearchRequest):
    """Apply an external classifier's filters to the supplied records (AND semantics)"""
    start_time = time.time()
    query_id = str(uuid.uuid4())

    try:
        classifier = parse_classifier_response(request.classifier)
    except ClassifierResponseError as e:
        logger.error(f"[{query_id}] Rejected classifier response: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    results = apply_classifier_response(classifier, request.records)
    logger.info(f"[{query_id}] Classifier filters matched {len(results)} records")

    return FilterSearchResponse(
        query_id=query_id,
        explanation=classifier.explanation,
        results=results,
        latency_ms=_elapsed_ms(start_time),
    )


@router.get("/sources", response_model=SourceListResponse)
async def list_sources():
    """Default sources followed by custom sources"""
    return SourceListResponse(sources=get_registry().get_all_sources())


@router.post("/sources", response_model=SourceListResponse)
async def add_source(request: AddSourceRequest):
    """Register a custom source; duplicate names (any case) are ignored"""
    registry = get_registry()
    source = Source(name=request.name, category=request.category, description=request.description)
    added = registry.add_custom_source(source)
    return SourceListResponse(added=added, sources=registry.get_all_sources())


@router.get("/sources/categories", response_model=List[CategoryConfig])
async def list_categories():
    """Category display metadata"""
    return SOURCE_CATEGORIES

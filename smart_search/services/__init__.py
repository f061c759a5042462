"""
Core service modules for Smart Search
"""
from .sources import (
    resolve_source,
    get_all_sources,
    get_custom_sources,
    add_custom_source,
    get_category_config,
    get_registry,
    reset_registry
)
from .intent_extraction import parse_smart_search
from .intent_matching import match_intent, score_free_text
from .smart_search import execute_smart_search
from .filter_application import apply_external_filters, apply_classifier_response
from .deal_context import (
    build_org_sector_map,
    match_deals,
    collect_person_ids,
    deals_to_expand
)
from .classifier_prompt import build_system_prompt

__all__ = [
    "resolve_source",
    "get_all_sources",
    "get_custom_sources",
    "add_custom_source",
    "get_category_config",
    "get_registry",
    "reset_registry",
    "parse_smart_search",
    "match_intent",
    "score_free_text",
    "execute_smart_search",
    "apply_external_filters",
    "apply_classifier_response",
    "build_org_sector_map",
    "match_deals",
    "collect_person_ids",
    "deals_to_expand",
    "build_system_prompt",
]

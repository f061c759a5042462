"""
Source Registry
Catalog of acquisition channels, case-insensitive resolution of free-text
source values, and user-defined sources kept in a key-value store
"""
from typing import List, Optional
import json
import logging
import threading

from smart_search.models.sources import Source, SourceCategory, CategoryConfig
from smart_search.utils.storage import KeyValueStore, JsonFileStore
from smart_search.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# CATALOG
# =============================================================================

SOURCE_CATEGORIES: List[CategoryConfig] = [
    CategoryConfig(
        value=SourceCategory.RELATIONSHIP,
        label="Relationship",
        color="bg-violet-500",
        badge_style="bg-violet-50 text-violet-700",
    ),
    CategoryConfig(
        value=SourceCategory.EVENT,
        label="Event",
        color="bg-amber-500",
        badge_style="bg-amber-50 text-amber-700",
    ),
    CategoryConfig(
        value=SourceCategory.DIGITAL,
        label="Digital",
        color="bg-sky-500",
        badge_style="bg-sky-50 text-sky-700",
    ),
    CategoryConfig(
        value=SourceCategory.OUTBOUND,
        label="Outbound",
        color="bg-emerald-500",
        badge_style="bg-emerald-50 text-emerald-700",
    ),
    CategoryConfig(
        value=SourceCategory.INBOUND,
        label="Inbound",
        color="bg-blue-500",
        badge_style="bg-blue-50 text-blue-700",
    ),
    CategoryConfig(
        value=SourceCategory.OTHER,
        label="Other",
        color="bg-muted-foreground",
        badge_style="bg-muted text-muted-foreground",
    ),
]

DEFAULT_SOURCES: List[Source] = [
    # Relationship
    Source(name="Referral", category=SourceCategory.RELATIONSHIP,
           description="Introduced by existing contact"),
    Source(name="Warm Intro", category=SourceCategory.RELATIONSHIP,
           description="Warm introduction via mutual connection"),
    Source(name="Existing Relationship", category=SourceCategory.RELATIONSHIP,
           description="Pre-existing professional relationship"),
    Source(name="Co-Investor", category=SourceCategory.RELATIONSHIP,
           description="Met through co-investment"),

    # Event
    Source(name="Conference", category=SourceCategory.EVENT,
           description="Met at a conference or summit"),
    Source(name="Dinner / Event", category=SourceCategory.EVENT,
           description="Met at a dinner or private event"),
    Source(name="Roadshow", category=SourceCategory.EVENT,
           description="Met during a roadshow"),

    # Digital
    Source(name="LinkedIn", category=SourceCategory.DIGITAL,
           description="Connected via LinkedIn"),
    Source(name="Email Campaign", category=SourceCategory.DIGITAL,
           description="Responded to email campaign"),
    Source(name="Website", category=SourceCategory.DIGITAL,
           description="Inbound from website"),

    # Outbound
    Source(name="Cold Outreach", category=SourceCategory.OUTBOUND,
           description="Proactive cold outreach"),
    Source(name="Cold Call", category=SourceCategory.OUTBOUND,
           description="Proactive cold call"),
    Source(name="Research", category=SourceCategory.OUTBOUND,
           description="Identified through research"),

    # Inbound
    Source(name="Inbound", category=SourceCategory.INBOUND,
           description="Reached out to us directly"),
    Source(name="RFP", category=SourceCategory.INBOUND,
           description="Responded to or sent RFP"),

    # Other
    Source(name="Other", category=SourceCategory.OTHER),
]


def get_category_config(category) -> CategoryConfig:
    """Display metadata for a category, falling back to 'other'"""
    for config in SOURCE_CATEGORIES:
        if config.value == category:
            return config
    return SOURCE_CATEGORIES[-1]


def resolve_source(source_name: Optional[str]) -> Optional[Source]:
    """
    Resolve a free-text source value to a catalog Source

    Args:
        source_name: Source text as stored on a record (may be a legacy
            snake_case value such as "cold_outreach")

    Returns:
        Matching catalog entry, a synthetic 'other' Source for unknown
        values, or None for empty input
    """
    if not source_name:
        return None

    lower = source_name.lower().strip()

    for source in DEFAULT_SOURCES:
        if source.name.lower() == lower:
            return source

    # Legacy enum values: "cold_outreach" -> "cold outreach"
    normalized = lower.replace("_", " ")
    for source in DEFAULT_SOURCES:
        if source.name.lower() == normalized:
            return source

    return Source(name=source_name, category=SourceCategory.OTHER)


def get_source_badge_style(source_name: Optional[str]) -> str:
    """Badge style for a free-text source, empty for no source"""
    source = resolve_source(source_name)
    if not source:
        return ""
    return get_category_config(source.category).badge_style


# =============================================================================
# REGISTRY (defaults + custom sources)
# =============================================================================

class SourceRegistry:
    """
    Default catalog plus user-added sources persisted under a fixed key.
    Names are unique case-insensitively across both lists.
    """

    def __init__(self, store: KeyValueStore, storage_key: Optional[str] = None):
        self.store = store
        self.storage_key = storage_key or settings.custom_sources_key
        self._lock = threading.Lock()

    def get_custom_sources(self) -> List[Source]:
        """User-added sources in insertion order"""
        stored = self.store.get(self.storage_key)
        if not stored:
            return []

        try:
            items = json.loads(stored)
            return [Source.model_validate(item) for item in items]
        except (ValueError, TypeError) as e:
            logger.warning(f"Ignoring unreadable custom sources under {self.storage_key!r}: {e}")
            return []

    def get_all_sources(self) -> List[Source]:
        """Default catalog (in order) followed by custom sources"""
        return [*DEFAULT_SOURCES, *self.get_custom_sources()]

    def add_custom_source(self, source: Source) -> bool:
        """
        Persist a custom source

        Args:
            source: Source to add

        Returns:
            True if added, False if the name already exists (any case)
        """
        name_lower = source.name.lower()

        with self._lock:
            existing = self.get_custom_sources()

            if any(s.name.lower() == name_lower for s in existing):
                logger.debug(f"Custom source {source.name!r} already exists")
                return False
            if any(s.name.lower() == name_lower for s in DEFAULT_SOURCES):
                logger.debug(f"Custom source {source.name!r} collides with a default source")
                return False

            payload = [s.model_dump(mode="json", exclude_none=True) for s in [*existing, source]]
            self.store.set(self.storage_key, json.dumps(payload))

        logger.info(f"Added custom source {source.name!r} ({source.category.value})")
        return True


# Singleton instance
_registry_instance: Optional[SourceRegistry] = None


def get_registry() -> SourceRegistry:
    """Get or create the process-wide registry"""
    global _registry_instance
    if _registry_instance is None:
        _registry_instance = SourceRegistry(JsonFileStore(settings.custom_sources_path))
    return _registry_instance


def reset_registry(registry: Optional[SourceRegistry] = None):
    """Replace or clear the singleton (useful for testing)"""
    global _registry_instance
    _registry_instance = registry


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def get_all_sources() -> List[Source]:
    return get_registry().get_all_sources()


def get_custom_sources() -> List[Source]:
    return get_registry().get_custom_sources()


def add_custom_source(source: Source) -> bool:
    return get_registry().add_custom_source(source)

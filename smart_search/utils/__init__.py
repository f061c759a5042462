"""
Utility modules for Smart Search
"""
from .storage import KeyValueStore, MemoryStore, JsonFileStore
from .validators import ClassifierResponseError, parse_classifier_response

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "ClassifierResponseError",
    "parse_classifier_response",
]

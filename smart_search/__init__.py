"""
Smart Search
Deterministic natural-language search over CRM contact records
"""
__version__ = "1.0.0"

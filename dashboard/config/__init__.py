"""
Billing Dashboard
Configuration Module
"""
from .settings import Settings, QuerySettings, get_settings

__all__ = ["Settings", "QuerySettings", "get_settings"]

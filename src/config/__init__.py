# src/config/__init__.py
"""
Configuration module for the sales monitor.
"""

from .settings import Settings, get_settings

__all__ = ['Settings', 'get_settings']

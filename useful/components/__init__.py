"""
System components for useful.

This module provides the configuration layer.
"""

from useful.components.config import Config, ConfigManager

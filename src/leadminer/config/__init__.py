"""
Configuration management for LeadMiner.
"""

from .config import Config, FetchConfig, MonitoringConfig, find_config_file, settings

__all__ = ["Config", "FetchConfig", "MonitoringConfig", "find_config_file", "settings"]

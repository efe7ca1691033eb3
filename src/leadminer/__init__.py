"""
LeadMiner - Deterministic business-signal extraction from web pages.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor import ExtractionResult, PageDataExtractor

__all__ = ["__version__", "Config", "ExtractionResult", "PageDataExtractor"]

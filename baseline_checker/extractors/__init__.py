"""
Feature extractors for stylesheets and scripts.
"""

from .css_extractor import CSSExtractor
from .script_extractor import ScriptExtractor

__all__ = [
    'CSSExtractor',
    'ScriptExtractor',
]

"""
Baseline compatibility checker: finds web-platform features in CSS and script
sources and classifies them by Baseline tier.
"""

__version__ = "0.1.0"

from .errors import BaselineCheckerError, ConfigError, RegistryError
from .usage import (
    AnalysisResult,
    BaselineTier,
    FeatureCheck,
    FeatureUsage,
    ModernizationOpportunity,
    ProgressiveEnhancement,
    Severity,
    determine_severity,
)
from .registry import FeatureRecord, FeatureRegistry, check_feature, load_registry
from .config import BaselineConfig, load_config
from .main_checker import BaselineChecker

__all__ = [
    'AnalysisResult',
    'BaselineChecker',
    'BaselineCheckerError',
    'BaselineConfig',
    'BaselineTier',
    'ConfigError',
    'FeatureCheck',
    'FeatureRecord',
    'FeatureRegistry',
    'FeatureUsage',
    'ModernizationOpportunity',
    'ProgressiveEnhancement',
    'RegistryError',
    'Severity',
    'check_feature',
    'determine_severity',
    'load_config',
    'load_registry',
]

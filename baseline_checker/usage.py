"""
Data models for baseline compatibility results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class BaselineTier(Enum):
    """Compatibility tiers, ordered from broadest to narrowest support."""
    WIDELY_AVAILABLE = "widely-available"
    NEWLY_AVAILABLE = "newly-available"
    LIMITED = "limited"


class Severity(Enum):
    """Usage severity levels."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Impact(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def determine_severity(baseline: Optional[BaselineTier], meets_criteria: bool) -> Severity:
    """Severity shared by every extractor: info when the target is met,
    error for limited features, warning otherwise."""
    if meets_criteria:
        return Severity.INFO
    if baseline == BaselineTier.LIMITED:
        return Severity.ERROR
    return Severity.WARNING


def _tier_value(tier: Optional[BaselineTier]) -> Optional[str]:
    return tier.value if tier is not None else None


@dataclass(frozen=True)
class FeatureCheck:
    """Answer to a point query for a single token."""
    token: str
    feature_id: Optional[str]
    baseline: Optional[BaselineTier]
    browsers: Dict[str, str]
    meets_criteria: bool
    suggestion: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.feature_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token": self.token,
            "featureId": self.feature_id,
            "baseline": _tier_value(self.baseline),
            "browsers": dict(self.browsers),
            "meetsCriteria": self.meets_criteria,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class FeatureUsage:
    """One detected occurrence of a web feature in a source file."""
    token: str
    feature_id: str
    file: str
    line: int
    column: int
    context: str
    baseline: Optional[BaselineTier]
    # Left out of the hash; compared as usual.
    browsers: Dict[str, str] = field(hash=False)
    severity: Severity
    suggestion: Optional[str] = None
    polyfill: Optional[str] = None
    alternative: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feature": self.token,
            "featureId": self.feature_id,
            "location": {
                "file": self.file,
                "line": self.line,
                "column": self.column,
            },
            "context": self.context,
            "baseline": _tier_value(self.baseline),
            "severity": self.severity.value,
            "browsers": dict(self.browsers),
            "suggestion": self.suggestion,
            "polyfill": self.polyfill,
            "alternative": self.alternative,
        }


@dataclass
class ModernizationOpportunity:
    """Rule-triggered suggestion to replace a legacy technique."""
    category: str
    old_feature: str
    new_feature: str
    baseline_status: BaselineTier
    impact: Impact
    effort: Impact
    description: str
    example: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "oldFeature": self.old_feature,
            "newFeature": self.new_feature,
            "baselineStatus": self.baseline_status.value,
            "impact": self.impact.value,
            "effort": self.effort.value,
            "description": self.description,
            "example": self.example,
        }


@dataclass
class ProgressiveEnhancement:
    feature: str
    fallback: str
    enhancement: str
    example: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feature": self.feature,
            "fallback": self.fallback,
            "enhancement": self.enhancement,
            "example": self.example,
        }


@dataclass
class AnalysisResult:
    """Aggregate of every usage found during one run."""
    files_scanned: int = 0
    total_files: int = 0
    total_features: int = 0
    compatibility_score: int = 100
    violations: List[FeatureUsage] = field(default_factory=list)
    warnings: List[FeatureUsage] = field(default_factory=list)
    suggestions: List[FeatureUsage] = field(default_factory=list)
    exempted: List[FeatureUsage] = field(default_factory=list)
    modernization_opportunities: List[ModernizationOpportunity] = field(default_factory=list)
    progressive_enhancements: List[ProgressiveEnhancement] = field(default_factory=list)

    @property
    def all_usages(self) -> List[FeatureUsage]:
        return self.violations + self.warnings + self.suggestions + self.exempted

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "errors": len(self.violations),
            "warnings": len(self.warnings),
            "suggestions": len(self.suggestions),
            "compatibilityScore": self.compatibility_score,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "filesScanned": self.files_scanned,
            "totalFeatures": self.total_features,
            "summary": self.summary,
            "violations": [u.to_dict() for u in self.violations],
            "warnings": [u.to_dict() for u in self.warnings],
            "suggestions": [u.to_dict() for u in self.suggestions],
            "exempted": [u.to_dict() for u in self.exempted],
            "modernizationOpportunities": [m.to_dict() for m in self.modernization_opportunities],
            "progressiveEnhancements": [p.to_dict() for p in self.progressive_enhancements],
        }

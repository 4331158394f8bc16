"""
Reduction of per-file usages into a single scored analysis result.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .usage import (
    AnalysisResult,
    BaselineTier,
    FeatureUsage,
    Impact,
    ModernizationOpportunity,
    ProgressiveEnhancement,
    Severity,
)
from .utils import detect_file_kind

TIER_POINTS: Dict[BaselineTier, int] = {
    BaselineTier.WIDELY_AVAILABLE: 100,
    BaselineTier.NEWLY_AVAILABLE: 75,
    BaselineTier.LIMITED: 25,
}
UNKNOWN_POINTS = 50

ERROR_WEIGHT = 3
WARNING_WEIGHT = 1

MODERN_CSS_FEATURES = frozenset({
    'container-queries', 'cascade-layers', 'css-grid', 'grid', 'flexbox',
})

ENHANCEMENTS: Dict[str, Tuple[str, str, str]] = {
    'grid': (
        'Flexbox or float-based layout',
        'CSS Grid for complex layouts',
        """.grid-container {
  display: flex; /* fallback */
  flex-wrap: wrap;
}

@supports (display: grid) {
  .grid-container {
    display: grid;
    grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
    gap: 1rem;
  }
}""",
    ),
    'container-queries': (
        'Media queries',
        'Container queries for component-based responsive design',
        """/* Fallback with media queries */
@media (min-width: 400px) {
  .card { flex-direction: row; }
}

/* Enhancement with container queries */
@container (min-width: 400px) {
  .card { flex-direction: row; }
}""",
    ),
    'aspect-ratio': (
        'Padding-bottom technique',
        'Native aspect-ratio property',
        """.aspect-box {
  /* Fallback */
  position: relative;
  padding-bottom: 56.25%; /* 16:9 */
}

/* Enhancement */
@supports (aspect-ratio: 16/9) {
  .aspect-box {
    aspect-ratio: 16/9;
    padding-bottom: 0;
  }
}""",
    ),
}
ENHANCEMENTS['css-grid'] = ENHANCEMENTS['grid']


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def compatibility_score(usages: Sequence[FeatureUsage]) -> int:
    """Mean of per-usage tier points, rounded half up; 100 when empty."""
    if not usages:
        return 100
    total = sum(TIER_POINTS.get(u.baseline, UNKNOWN_POINTS) for u in usages)
    return _round_half_up(total, len(usages))


def risk_score(errors: int, warnings: int, total_features: int) -> int:
    """Weighted error/warning share of the worst case, as a 0-100 integer."""
    if total_features == 0:
        return 0
    risk = errors * ERROR_WEIGHT + warnings * WARNING_WEIGHT
    return _round_half_up(100 * risk, total_features * ERROR_WEIGHT)


def modernization_opportunities(usages: Sequence[FeatureUsage]) -> List[ModernizationOpportunity]:
    """Fixed rules over the merged usages; each rule fires at most once."""
    css = [u for u in usages if detect_file_kind(u.file) == 'css']
    scripts = [u for u in usages if detect_file_kind(u.file) == 'javascript']
    opportunities: List[ModernizationOpportunity] = []

    if any('float' in u.token for u in css):
        opportunities.append(ModernizationOpportunity(
            category='css',
            old_feature='Float-based layouts',
            new_feature='CSS Grid/Flexbox',
            baseline_status=BaselineTier.WIDELY_AVAILABLE,
            impact=Impact.HIGH,
            effort=Impact.MEDIUM,
            description='Replace float-based layouts with modern CSS Grid or Flexbox for better responsive design',
            example='display: grid; grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));',
        ))

    if any(u.token == 'xhr' for u in scripts):
        opportunities.append(ModernizationOpportunity(
            category='javascript',
            old_feature='XMLHttpRequest',
            new_feature='Fetch API',
            baseline_status=BaselineTier.WIDELY_AVAILABLE,
            impact=Impact.MEDIUM,
            effort=Impact.LOW,
            description='Replace XMLHttpRequest with modern Fetch API for cleaner async code',
            example='fetch("/api/data").then(response => response.json())',
        ))

    if any(
        u.baseline == BaselineTier.NEWLY_AVAILABLE
        and (u.token in MODERN_CSS_FEATURES or u.feature_id in MODERN_CSS_FEATURES)
        for u in usages
    ):
        opportunities.append(ModernizationOpportunity(
            category='css',
            old_feature='Legacy layout techniques',
            new_feature='Modern CSS features',
            baseline_status=BaselineTier.NEWLY_AVAILABLE,
            impact=Impact.HIGH,
            effort=Impact.MEDIUM,
            description='Adopt newly available CSS features for better layouts and maintainability',
        ))

    return opportunities


def progressive_enhancements(usages: Sequence[FeatureUsage]) -> List[ProgressiveEnhancement]:
    """Fallback/enhancement pairs for newly-available or limited layout features."""
    enhancements: List[ProgressiveEnhancement] = []
    seen = set()
    for usage in usages:
        if usage.baseline not in (BaselineTier.NEWLY_AVAILABLE, BaselineTier.LIMITED):
            continue
        key = usage.token if usage.token in ENHANCEMENTS else usage.feature_id
        if key not in ENHANCEMENTS or key in seen:
            continue
        seen.add(key)
        fallback, enhancement, example = ENHANCEMENTS[key]
        enhancements.append(ProgressiveEnhancement(key, fallback, enhancement, example))
    return enhancements


def aggregate(
    per_file: Iterable[Tuple[str, List[FeatureUsage]]],
    files_scanned: Optional[int] = None,
    exceptions: Iterable[str] = (),
    generate_fixes: bool = False,
) -> AnalysisResult:
    """Merge per-file usage lists into one result.

    ``per_file`` order is preserved, so callers wanting deterministic output
    pass files sorted by path. Usages whose token or feature id is listed in
    ``exceptions`` leave the violation/warning lists for ``exempted`` but
    still count toward totals and the score.
    """
    per_file = list(per_file)
    exempt = set(exceptions)
    result = AnalysisResult(
        files_scanned=len(per_file) if files_scanned is None else files_scanned,
    )

    usages: List[FeatureUsage] = []
    for _, file_usages in per_file:
        if file_usages:
            result.total_files += 1
            usages.extend(file_usages)

    for usage in usages:
        if usage.severity == Severity.INFO:
            result.suggestions.append(usage)
        elif usage.token in exempt or usage.feature_id in exempt:
            result.exempted.append(usage)
        elif usage.severity == Severity.ERROR:
            result.violations.append(usage)
        else:
            result.warnings.append(usage)

    result.total_features = len(usages)
    result.compatibility_score = compatibility_score(usages)
    result.modernization_opportunities = modernization_opportunities(usages)
    if generate_fixes:
        result.progressive_enhancements = progressive_enhancements(usages)
    return result

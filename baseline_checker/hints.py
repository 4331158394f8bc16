"""
Polyfill and fallback hints attached to usages of selected features.
"""

from enum import Enum
from typing import Dict, List, Optional


class HintedFeature(Enum):
    """Feature ids that carry polyfill or alternative hints."""
    GRID = "grid"
    CUSTOM_PROPERTIES = "custom-properties"
    FLEXBOX_GAP = "flexbox-gap"
    OBJECT_FIT = "object-fit"
    POSITION_STICKY = "position-sticky"
    ASPECT_RATIO = "aspect-ratio"
    MIN_MAX_CLAMP = "min-max-clamp"
    CONTAINER_QUERIES = "container-queries"
    FETCH = "fetch"
    PROMISE = "promise"
    ARRAY_INCLUDES = "array-includes"
    OBJECT_ASSIGN = "object-assign"
    SYMBOL = "symbol"
    MAP = "map"
    SET = "set"
    INTERSECTION_OBSERVER = "intersection-observer"
    RESIZE_OBSERVER = "resize-observer"
    ARROW_FUNCTIONS = "arrow-functions"
    TEMPLATE_LITERALS = "template-literals"
    DESTRUCTURING = "destructuring"
    OPTIONAL_CHAINING = "optional-chaining"
    NULLISH_COALESCING = "nullish-coalescing"


POLYFILLS: Dict[HintedFeature, Optional[str]] = {
    HintedFeature.GRID: "CSS Grid polyfill or Flexbox fallback",
    HintedFeature.CUSTOM_PROPERTIES: "PostCSS custom properties plugin",
    HintedFeature.FLEXBOX_GAP: "Use margin/padding for older browsers",
    HintedFeature.OBJECT_FIT: "object-fit-images polyfill",
    HintedFeature.POSITION_STICKY: "position: -webkit-sticky; position: sticky;",
    HintedFeature.ASPECT_RATIO: None,
    HintedFeature.MIN_MAX_CLAMP: None,
    HintedFeature.CONTAINER_QUERIES: "container-query-polyfill",
    HintedFeature.FETCH: "whatwg-fetch polyfill",
    HintedFeature.PROMISE: "es6-promise polyfill",
    HintedFeature.ARRAY_INCLUDES: "core-js polyfill",
    HintedFeature.OBJECT_ASSIGN: "object-assign polyfill",
    HintedFeature.SYMBOL: "es6-symbol polyfill",
    HintedFeature.MAP: "es6-map polyfill",
    HintedFeature.SET: "es6-set polyfill",
    HintedFeature.INTERSECTION_OBSERVER: "intersection-observer polyfill",
    HintedFeature.RESIZE_OBSERVER: "resize-observer-polyfill",
    HintedFeature.ARROW_FUNCTIONS: None,
    HintedFeature.TEMPLATE_LITERALS: None,
    HintedFeature.DESTRUCTURING: None,
    HintedFeature.OPTIONAL_CHAINING: None,
    HintedFeature.NULLISH_COALESCING: None,
}

ALTERNATIVES: Dict[HintedFeature, Optional[str]] = {
    HintedFeature.GRID: "Use Flexbox for simpler layouts",
    HintedFeature.CUSTOM_PROPERTIES: None,
    HintedFeature.FLEXBOX_GAP: "Use margin or padding properties",
    HintedFeature.OBJECT_FIT: None,
    HintedFeature.POSITION_STICKY: None,
    HintedFeature.ASPECT_RATIO: "Use padding-bottom percentage technique",
    HintedFeature.MIN_MAX_CLAMP: "Use calc() with min/max functions",
    HintedFeature.CONTAINER_QUERIES: "Use media queries as fallback",
    HintedFeature.FETCH: "Use XMLHttpRequest or axios library",
    HintedFeature.PROMISE: "Use callback patterns or async libraries",
    HintedFeature.ARRAY_INCLUDES: None,
    HintedFeature.OBJECT_ASSIGN: None,
    HintedFeature.SYMBOL: None,
    HintedFeature.MAP: None,
    HintedFeature.SET: None,
    HintedFeature.INTERSECTION_OBSERVER: None,
    HintedFeature.RESIZE_OBSERVER: None,
    HintedFeature.ARROW_FUNCTIONS: "Use regular function expressions",
    HintedFeature.TEMPLATE_LITERALS: "Use string concatenation",
    HintedFeature.DESTRUCTURING: "Use manual assignment",
    HintedFeature.OPTIONAL_CHAINING: "Use manual null checking",
    HintedFeature.NULLISH_COALESCING: "Use || operator with careful null checks",
}

def missing_hints() -> List[str]:
    """Hinted features lacking a polyfill or alternative entry."""
    return [
        member.value
        for member in HintedFeature
        if member not in POLYFILLS or member not in ALTERNATIVES
    ]


_missing = missing_hints()
if _missing:
    raise RuntimeError(f"Hint tables are missing entries for: {', '.join(_missing)}")

_BY_ID = {member.value: member for member in HintedFeature}


def polyfill_for(feature_id: Optional[str]) -> Optional[str]:
    member = _BY_ID.get(feature_id or "")
    return POLYFILLS[member] if member else None


def alternative_for(feature_id: Optional[str]) -> Optional[str]:
    member = _BY_ID.get(feature_id or "")
    return ALTERNATIVES[member] if member else None

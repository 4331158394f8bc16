"""
Feature registry: an immutable index of web-features records and the matcher
that resolves source tokens onto them.
"""

import json
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import RegistryError
from .usage import BaselineTier, FeatureCheck

logger = logging.getLogger(__name__)

DEFAULT_DATASET = Path(__file__).resolve().parent / "data" / "web_features.json"

BROWSERS = (
    "chrome",
    "chrome_android",
    "edge",
    "firefox",
    "firefox_android",
    "safari",
    "safari_ios",
)

CSS_PROPERTY_PREFIX = "css.properties."

VENDOR_PREFIX = re.compile(r"^-(?:webkit|moz|ms|o)-", re.IGNORECASE)
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

# Well-known synonyms, keyed by canonical feature id. Registered after every
# dataset-derived key, so they never shadow a real id, name or compat key.
ALIASES: Dict[str, Tuple[str, ...]] = {
    "flexbox": (
        "flex", "flexbox", "css-flexbox", "start", "end",
        "flex-start", "flex-end", "space-between", "space-around",
    ),
    "grid": ("css-grid", "grid-template-columns", "fr-unit", "repeat", "minmax"),
    "container-queries": ("@container",),
    "custom-properties": ("css-variables", "css-custom-properties", "--", "var"),
    "cascade-layers": ("@layer",),
    "media-queries": ("@media",),
    "supports": ("@supports",),
    "font-face": ("@font-face",),
    "animations-css": ("@keyframes", "keyframes"),
    "registered-custom-properties": ("@property",),
    "scope": ("@scope",),
    "starting-style": ("@starting-style",),
    "viewport-units": ("vh-unit", "vw-unit", "vmin-unit", "vmax-unit"),
    "font-relative-lengths": ("rem-unit", "ch-unit"),
    "min-max-clamp": ("min", "max", "clamp"),
    "position-sticky": ("sticky",),
    "display-contents": ("contents",),
    "fetch": ("fetch-api",),
    "promise": ("promises",),
    "async-await": ("async", "async-functions"),
    "arrow-functions": ("=>",),
    "template-literals": ("template-strings",),
    "destructuring": ("destructuring-assignment",),
    "spread": ("spread-syntax", "spread-operator", "..."),
    "optional-chaining": ("?.",),
    "nullish-coalescing": ("??",),
    "class-syntax": ("es6-class",),
    "exponentiation": ("exponentiation-operator", "**"),
    "service-workers": ("serviceworker",),
    "async-clipboard": ("clipboard-api",),
    "web-storage": ("webstorage",),
    "intersection-observer": ("intersectionobserver",),
    "resize-observer": ("resizeobserver",),
    "aborting": ("abortcontroller",),
    "proxy-reflect": ("proxy",),
    "url": ("url-api",),
    "server-sent-events": ("eventsource",),
    "array-find": ("array-findindex",),
    "string-startswith-endswith": ("string-startswith", "string-endswith"),
    "string-padstart-padend": ("string-padstart", "string-padend"),
    "string-trimstart-trimend": ("string-trimstart", "string-trimend"),
}

NOT_FOUND_SUGGESTION = 'Feature "{token}" not found in web-features database'
LIMITED_SUGGESTION = (
    "Consider using a polyfill or waiting for broader browser support. "
    "Check caniuse.com for alternatives."
)
NEWLY_AVAILABLE_SUGGESTION = (
    "Feature is newly available in Baseline. "
    "Consider progressive enhancement or polyfills for older browsers."
)


@dataclass(frozen=True)
class FeatureRecord:
    """A single web feature and its compatibility status."""
    id: str
    name: str
    baseline: BaselineTier
    browsers: Mapping[str, str]
    compat_features: Tuple[str, ...] = ()
    aliases: FrozenSet[str] = frozenset()


def tier_from_status(status: Any) -> BaselineTier:
    """Map a raw web-features ``status.baseline`` value onto a tier."""
    raw = status.get("baseline") if isinstance(status, dict) else None
    if raw == "high":
        return BaselineTier.WIDELY_AVAILABLE
    if raw == "low":
        return BaselineTier.NEWLY_AVAILABLE
    return BaselineTier.LIMITED


def meets_target(baseline: Optional[BaselineTier], target: BaselineTier) -> bool:
    if baseline is None:
        return False
    if target == BaselineTier.LIMITED:
        return True
    if target == BaselineTier.NEWLY_AVAILABLE:
        return baseline in (BaselineTier.WIDELY_AVAILABLE, BaselineTier.NEWLY_AVAILABLE)
    return baseline == BaselineTier.WIDELY_AVAILABLE


def _suggestion_for(baseline: BaselineTier, target: BaselineTier) -> Optional[str]:
    if baseline == BaselineTier.LIMITED:
        return LIMITED_SUGGESTION
    if baseline == BaselineTier.NEWLY_AVAILABLE and target == BaselineTier.WIDELY_AVAILABLE:
        return NEWLY_AVAILABLE_SUGGESTION
    return None


def css_variations(token: str) -> List[str]:
    """Candidate spellings tried when exact lookups fail, in lookup order."""
    stripped = VENDOR_PREFIX.sub("", token)
    kebab = _CAMEL_BOUNDARY.sub(r"\1-\2", stripped).lower()
    variations = [stripped, kebab, f"css-{kebab}", f"{CSS_PROPERTY_PREFIX}{kebab}"]
    seen = set()
    ordered = []
    for variation in variations:
        if variation and variation not in seen:
            seen.add(variation)
            ordered.append(variation)
    return ordered


class FeatureRegistry:
    """Read-only index from lookup keys to feature records.

    Safe to share between threads once constructed: nothing mutates the
    index after ``__init__`` returns.
    """

    def __init__(self, records: Iterable[FeatureRecord]):
        self._records: Dict[str, FeatureRecord] = {}
        self._index: Dict[str, FeatureRecord] = {}
        for record in records:
            self._records.setdefault(record.id, record)

        for record in self._records.values():
            self._register(record.id, record)
        for record in self._records.values():
            self._register(record.name.lower(), record)
        for record in self._records.values():
            for key in record.compat_features:
                self._register(key, record)
        for record in self._records.values():
            for key in record.compat_features:
                if key.startswith(CSS_PROPERTY_PREFIX):
                    self._register(key[len(CSS_PROPERTY_PREFIX):], record)
        for record in self._records.values():
            for alias in sorted(record.aliases):
                self._register(alias, record)

        # Fuzzy matching scans keys shortest-first, ties broken alphabetically.
        self._fuzzy_order: Tuple[str, ...] = tuple(sorted(self._index, key=lambda k: (len(k), k)))
        self._fuzzy_entries: Tuple[Tuple[str, str, FeatureRecord], ...] = tuple(
            (key.lower(), self._index[key].name.lower(), self._index[key])
            for key in self._fuzzy_order
        )
        logger.debug(
            "Feature registry built: %d records, %d lookup keys",
            len(self._records), len(self._index),
        )

    def _register(self, key: str, record: FeatureRecord) -> None:
        if key and key not in self._index:
            self._index[key] = record

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._records

    def get(self, feature_id: str) -> Optional[FeatureRecord]:
        """Fetch a record by canonical id only."""
        return self._records.get(feature_id)

    @property
    def keys(self) -> Tuple[str, ...]:
        return self._fuzzy_order

    def lookup(self, token: str) -> Optional[FeatureRecord]:
        """Resolve a source token to a record, or None."""
        if not token:
            return None
        record = self._index.get(token)
        if record is not None:
            return record
        lowered = token.lower()
        record = self._index.get(lowered)
        if record is not None:
            return record
        for variation in css_variations(token):
            record = self._index.get(variation)
            if record is not None:
                return record
        return self._fuzzy(lowered)

    def _fuzzy(self, lowered: str) -> Optional[FeatureRecord]:
        for key, name, record in self._fuzzy_entries:
            if lowered in key or lowered in name:
                return record
        return None

    def check_feature(
        self,
        token: str,
        target: Union[BaselineTier, str] = BaselineTier.WIDELY_AVAILABLE,
    ) -> FeatureCheck:
        """Point query: tier, browser versions and whether ``target`` is met."""
        target = BaselineTier(target)
        record = self.lookup(token)
        if record is None:
            return FeatureCheck(
                token=token,
                feature_id=None,
                baseline=None,
                browsers={},
                meets_criteria=False,
                suggestion=NOT_FOUND_SUGGESTION.format(token=token),
            )
        return FeatureCheck(
            token=token,
            feature_id=record.id,
            baseline=record.baseline,
            browsers=dict(record.browsers),
            meets_criteria=meets_target(record.baseline, target),
            suggestion=_suggestion_for(record.baseline, target),
        )


def _record_from_entry(feature_id: str, entry: Dict[str, Any]) -> FeatureRecord:
    status = entry["status"]
    support = status.get("support") or {}
    browsers = {b: str(support[b]) for b in BROWSERS if support.get(b)}
    compat = entry.get("compat_features") or []
    if not isinstance(compat, list):
        raise RegistryError(f"compat_features of {feature_id!r} must be a list")
    return FeatureRecord(
        id=feature_id,
        name=str(entry.get("name") or feature_id),
        baseline=tier_from_status(status),
        browsers=MappingProxyType(browsers),
        compat_features=tuple(str(k) for k in compat),
        aliases=frozenset(ALIASES.get(feature_id, ())),
    )


def records_from_dataset(data: Any) -> List[FeatureRecord]:
    """Convert a web-features mapping into records.

    Accepts either the bare ``{id: feature}`` mapping or the published
    ``data.json`` layout with a top-level ``features`` key. Entries without a
    ``status`` object (moved or split features) are skipped.
    """
    if isinstance(data, dict) and isinstance(data.get("features"), dict):
        data = data["features"]
    if not isinstance(data, dict):
        raise RegistryError("Feature dataset must be a JSON object keyed by feature id")

    records: List[FeatureRecord] = []
    for feature_id, entry in data.items():
        if not isinstance(entry, dict):
            raise RegistryError(f"Feature {feature_id!r} is not an object")
        if not isinstance(entry.get("status"), dict):
            logger.debug("Skipping %s: no status (kind=%s)", feature_id, entry.get("kind"))
            continue
        records.append(_record_from_entry(feature_id, entry))
    if not records:
        raise RegistryError("Feature dataset contains no usable features")
    return records


@lru_cache(maxsize=None)
def _load(path: Path) -> FeatureRegistry:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise RegistryError(f"Feature dataset not found: {path}") from e
    except OSError as e:
        raise RegistryError(f"Could not read feature dataset {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RegistryError(f"Feature dataset {path} is not valid JSON: {e}") from e
    logger.debug("Loading feature dataset from %s", path)
    return FeatureRegistry(records_from_dataset(data))


def load_registry(path: Optional[Union[str, Path]] = None) -> FeatureRegistry:
    """Load (once per path) the registry from a web-features JSON file.

    Raises:
        RegistryError: the dataset is missing, unreadable or malformed.
    """
    resolved = Path(path).expanduser().resolve() if path else DEFAULT_DATASET
    return _load(resolved)


def check_feature(
    token: str,
    target: Union[BaselineTier, str] = BaselineTier.WIDELY_AVAILABLE,
    registry: Optional[FeatureRegistry] = None,
) -> FeatureCheck:
    """Standalone point query against ``registry`` or the bundled dataset."""
    if registry is None:
        registry = load_registry()
    return registry.check_feature(token, target)

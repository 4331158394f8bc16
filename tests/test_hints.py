"""Tests for polyfill and alternative hint tables."""
from baseline_checker.hints import (
    ALTERNATIVES,
    POLYFILLS,
    HintedFeature,
    alternative_for,
    missing_hints,
    polyfill_for,
)


def test_tables_cover_every_hinted_feature():
    assert set(POLYFILLS) == set(HintedFeature)
    assert set(ALTERNATIVES) == set(HintedFeature)
    assert missing_hints() == []


def test_lookup_by_feature_id():
    assert polyfill_for("container-queries") == "container-query-polyfill"
    assert alternative_for("container-queries") == "Use media queries as fallback"


def test_hinted_feature_without_polyfill():
    assert polyfill_for("optional-chaining") is None
    assert alternative_for("optional-chaining") == "Use manual null checking"


def test_unhinted_feature():
    assert polyfill_for("padding") is None
    assert alternative_for(None) is None

"""Tests for the feature registry and token matcher."""
import json
from types import MappingProxyType

import pytest

from baseline_checker import BaselineTier, FeatureRegistry, RegistryError, check_feature, load_registry
from baseline_checker.registry import (
    LIMITED_SUGGESTION,
    NEWLY_AVAILABLE_SUGGESTION,
    FeatureRecord,
    css_variations,
    records_from_dataset,
    tier_from_status,
)


def _record(feature_id, compat=(), aliases=(), baseline=BaselineTier.WIDELY_AVAILABLE, name=None):
    return FeatureRecord(
        id=feature_id,
        name=name or feature_id,
        baseline=baseline,
        browsers=MappingProxyType({}),
        compat_features=tuple(compat),
        aliases=frozenset(aliases),
    )


class TestLookup:
    """Resolution order: exact, lowercase, variations, fuzzy."""

    def test_exact_id(self, registry):
        assert registry.lookup("flexbox").id == "flexbox"

    def test_lowercase_name(self, registry):
        assert registry.lookup("Flexbox").id == "flexbox"

    def test_vendor_prefix_resolves_like_unprefixed(self, registry):
        prefixed = registry.check_feature("-webkit-transform")
        plain = registry.check_feature("transform")
        assert prefixed.feature_id == plain.feature_id == "transforms2d"

    def test_bare_css_property_name(self, registry):
        assert registry.lookup("gap").id == "flexbox-gap"

    def test_aliases(self, registry):
        assert registry.lookup("@container").id == "container-queries"
        assert registry.lookup("sticky").id == "position-sticky"
        assert registry.lookup("rem-unit").id == "font-relative-lengths"
        assert registry.lookup("clipboard-api").id == "async-clipboard"

    def test_empty_token(self, registry):
        assert registry.lookup("") is None

    def test_first_registration_wins(self):
        reg = FeatureRegistry([
            _record("first", compat=["shared.key"]),
            _record("second", compat=["shared.key"]),
        ])
        assert reg.lookup("shared.key").id == "first"

    def test_alias_never_shadows_an_id(self):
        reg = FeatureRegistry([
            _record("alpha", aliases=["beta"]),
            _record("beta"),
        ])
        assert reg.lookup("beta").id == "beta"

    def test_duplicate_ids_keep_first_record(self):
        reg = FeatureRegistry([
            _record("dup", baseline=BaselineTier.LIMITED),
            _record("dup", baseline=BaselineTier.WIDELY_AVAILABLE),
        ])
        assert len(reg) == 1
        assert reg.get("dup").baseline == BaselineTier.LIMITED

    def test_fuzzy_prefers_shortest_key(self):
        reg = FeatureRegistry([
            _record("xb-long-name"),
            _record("yb"),
        ])
        assert reg.lookup("b").id == "yb"

    def test_fuzzy_ties_break_alphabetically(self):
        reg = FeatureRegistry([_record("zq"), _record("aq")])
        assert reg.lookup("q").id == "aq"
        assert reg.keys[:2] == ("aq", "zq")


class TestCheckFeature:

    def test_unknown_token(self, registry):
        check = registry.check_feature("definitely-not-a-feature-xyz")
        assert check.baseline is None
        assert check.feature_id is None
        assert check.meets_criteria is False
        assert not check.found
        assert check.suggestion == 'Feature "definitely-not-a-feature-xyz" not found in web-features database'

    @pytest.mark.parametrize("target", list(BaselineTier))
    def test_widely_available_meets_every_target(self, registry, target):
        check = registry.check_feature("flexbox", target)
        assert check.baseline == BaselineTier.WIDELY_AVAILABLE
        assert check.meets_criteria is True
        assert check.suggestion is None

    def test_newly_available_against_targets(self, registry):
        widely = registry.check_feature("container-queries", BaselineTier.WIDELY_AVAILABLE)
        newly = registry.check_feature("container-queries", "newly-available")
        assert widely.baseline == BaselineTier.NEWLY_AVAILABLE
        assert widely.meets_criteria is False
        assert widely.suggestion == NEWLY_AVAILABLE_SUGGESTION
        assert newly.meets_criteria is True
        assert newly.suggestion is None

    def test_limited_only_meets_limited_target(self, registry):
        assert registry.check_feature("backdrop-filter", "newly-available").meets_criteria is False
        check = registry.check_feature("backdrop-filter", "limited")
        assert check.meets_criteria is True
        assert check.suggestion == LIMITED_SUGGESTION

    def test_browsers_are_copied(self, registry):
        check = registry.check_feature("grid")
        assert check.browsers["chrome"]
        check.browsers["chrome"] = "999"
        assert registry.check_feature("grid").browsers["chrome"] != "999"

    def test_invalid_target(self, registry):
        with pytest.raises(ValueError):
            registry.check_feature("grid", "sometimes-available")

    def test_module_level_check_uses_bundled_dataset(self):
        assert check_feature("grid").feature_id == "grid"

    def test_to_dict_keys(self, registry):
        data = registry.check_feature("grid").to_dict()
        assert data["featureId"] == "grid"
        assert data["baseline"] == "widely-available"
        assert data["meetsCriteria"] is True


class TestDataset:

    def test_tier_from_status(self):
        assert tier_from_status({"baseline": "high"}) == BaselineTier.WIDELY_AVAILABLE
        assert tier_from_status({"baseline": "low"}) == BaselineTier.NEWLY_AVAILABLE
        assert tier_from_status({"baseline": False}) == BaselineTier.LIMITED

    def test_moved_entries_are_skipped(self, registry):
        assert "absolute-clip" not in registry
        assert "flexbox" in registry

    def test_features_wrapper(self):
        records = records_from_dataset({
            "features": {"demo": {"name": "Demo", "status": {"baseline": "low", "support": {"chrome": 120}}}},
        })
        assert records[0].id == "demo"
        assert records[0].baseline == BaselineTier.NEWLY_AVAILABLE
        assert dict(records[0].browsers) == {"chrome": "120"}

    def test_rejects_non_object(self):
        with pytest.raises(RegistryError):
            records_from_dataset([])

    def test_rejects_empty_dataset(self):
        with pytest.raises(RegistryError):
            records_from_dataset({"moved": {"kind": "moved", "redirect_target": "x"}})

    def test_rejects_bad_compat_features(self):
        with pytest.raises(RegistryError):
            records_from_dataset({"demo": {"status": {"baseline": "high"}, "compat_features": "css.x"}})

    def test_missing_file(self, tmp_path):
        with pytest.raises(RegistryError, match="not found"):
            load_registry(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RegistryError, match="not valid JSON"):
            load_registry(path)

    def test_custom_dataset(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({
            "only": {"name": "Only", "status": {"baseline": False}, "compat_features": ["api.Only"]},
        }), encoding="utf-8")
        reg = load_registry(path)
        assert len(reg) == 1
        assert reg.lookup("api.Only").baseline == BaselineTier.LIMITED

    def test_registry_is_loaded_once(self):
        assert load_registry() is load_registry()


def test_css_variations_order():
    assert css_variations("-webkit-boxShadow") == [
        "boxShadow", "box-shadow", "css-box-shadow", "css.properties.box-shadow",
    ]

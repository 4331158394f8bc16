from pathlib import Path

import pytest

from baseline_checker import BaselineTier, FeatureUsage, load_registry
from baseline_checker.usage import determine_severity


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep BASELINE_* and Together.ai settings from leaking into tests."""
    for name in ("BASELINE_TARGET", "BASELINE_EXCEPTIONS", "BASELINE_DATASET", "TOGETHER_API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry():
    return load_registry()


@pytest.fixture
def project(tmp_path):
    """Return a helper that writes files under a temporary project root."""
    def write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    write.root = tmp_path
    return write


def make_usage(
    token,
    feature_id=None,
    baseline=BaselineTier.WIDELY_AVAILABLE,
    meets_criteria=None,
    file="styles.css",
    line=1,
):
    if meets_criteria is None:
        meets_criteria = baseline == BaselineTier.WIDELY_AVAILABLE
    return FeatureUsage(
        token=token,
        feature_id=feature_id or token,
        file=file,
        line=line,
        column=0,
        context=token,
        baseline=baseline,
        browsers={"chrome": "1"},
        severity=determine_severity(baseline, meets_criteria),
        suggestion=None,
        polyfill=None,
        alternative=None,
    )

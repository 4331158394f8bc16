"""Tests for line-based script feature detection."""
import pytest

from baseline_checker import Severity
from baseline_checker.extractors import ScriptExtractor


@pytest.fixture
def extract(registry):
    def run(source, target="widely-available", file_path="app.js"):
        return ScriptExtractor(registry, target).extract(source, file_path)
    return run


def _ids(usages):
    return [u.feature_id for u in usages]


class TestSyntax:

    def test_arrow_function(self, extract):
        usages = extract("const double = (a) => a * 2;")
        assert _ids(usages) == ["arrow-functions"]
        assert usages[0].line == 1
        assert usages[0].column == 0
        assert usages[0].alternative == "Use regular function expressions"

    def test_modern_operators(self, extract):
        usages = extract("const name = user?.profile?.name ?? 'anon';")
        assert set(_ids(usages)) == {"optional-chaining", "nullish-coalescing"}

    def test_template_literal_and_class(self, extract):
        usages = extract("class Greeter {\n  greet(n) { return `hi ${n}`; }\n}")
        assert [(u.feature_id, u.line) for u in usages] == [
            ("class-syntax", 1),
            ("template-literals", 2),
        ]


class TestApis:

    def test_fetch_with_await(self, extract):
        usages = extract("const res = await fetch('/api/items');")
        assert set(_ids(usages)) == {"async-await", "fetch"}

    def test_one_usage_per_feature_per_line(self, extract):
        usages = extract("fetch(a); fetch(b);")
        assert _ids(usages) == ["fetch"]

    def test_limited_api_is_an_error(self, extract):
        usages = extract("navigator.share({ url: location.href });")
        assert usages[0].feature_id == "web-share"
        assert usages[0].severity == Severity.ERROR

    def test_newly_available_method(self, extract):
        usages = extract("if (Object.hasOwn(config, 'debug')) {}")
        assert usages[0].feature_id == "object-hasown"
        assert usages[0].severity == Severity.WARNING

    def test_newly_available_method_meets_newly_target(self, extract):
        usages = extract("Object.hasOwn(config, 'debug');", target="newly-available")
        assert usages[0].severity == Severity.INFO

    def test_xhr(self, extract):
        usages = extract("const req = new XMLHttpRequest();")
        assert _ids(usages) == ["xhr"]

    def test_array_method_hint(self, extract):
        usages = extract("if ([1, 2].includes(x)) {}")
        includes = [u for u in usages if u.feature_id == "array-includes"]
        assert includes[0].polyfill == "core-js polyfill"


class TestSkippedLines:

    def test_comments(self, extract):
        source = "// fetch('/x')\n/* new Map() */\n * await fetch(url)\n"
        assert extract(source) == []

    def test_blank_source(self, extract):
        assert extract("\n\n   \n") == []

    def test_context_is_truncated(self, extract):
        line = "fetch('" + "x" * 200 + "')"
        usage = extract(line)[0]
        assert usage.context.endswith("...")
        assert len(usage.context) == 103


def test_extraction_is_repeatable(registry):
    source = "const res = await fetch('/api');\n// fetch(old)\nitems.at(-1)?.name ?? navigator.share({});\n"
    extractor = ScriptExtractor(registry)
    first = extractor.extract(source, "app.js")
    second = extractor.extract(source, "app.js")
    assert first
    assert first == second
    assert first == ScriptExtractor(registry).extract(source, "app.js")

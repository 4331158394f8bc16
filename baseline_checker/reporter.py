"""
Report generation for baseline compatibility results.
"""

import json
from collections import Counter
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Sequence

from . import __version__
from .aggregator import risk_score
from .usage import AnalysisResult, FeatureUsage

TOOL_NAME = "baseline-checker"


def _sorted(usages: Sequence[FeatureUsage]) -> List[FeatureUsage]:
    return sorted(usages, key=lambda u: (u.file, u.line, u.column))


class ReportGenerator:
    """Generate reports from an analysis result."""

    @staticmethod
    def generate_text_report(
        result: AnalysisResult,
        browsers: Optional[Sequence[str]] = None,
    ) -> str:
        """Generate a console report."""
        report = [f"\n{'=' * 80}"]
        report.append("Baseline Compatibility Report")
        report.append(f"{'=' * 80}\n")
        report.append(f"Files scanned: {result.files_scanned} ({result.total_files} with web features)")
        report.append(f"Features detected: {result.total_features}")
        report.append(f"Compatibility score: {result.compatibility_score}/100\n")

        if not result.total_features:
            report.append("✓ No web features detected\n")

        sections = (
            ("ERRORS", result.violations),
            ("WARNINGS", result.warnings),
            ("INFO", result.suggestions),
            ("EXEMPTED", result.exempted),
        )
        for title, usages in sections:
            if not usages:
                continue
            report.append(f"{title} ({len(usages)}):")
            report.append("-" * 80)
            for usage in _sorted(usages):
                report.extend(ReportGenerator._format_usage(usage, browsers))

        if result.modernization_opportunities:
            report.append(f"MODERNIZATION OPPORTUNITIES ({len(result.modernization_opportunities)}):")
            report.append("-" * 80)
            for opp in result.modernization_opportunities:
                report.append(f"  [{opp.category}] {opp.old_feature} -> {opp.new_feature}")
                report.append(f"    {opp.description}")
                report.append(f"    Impact: {opp.impact.value}, effort: {opp.effort.value}")
                if opp.example:
                    report.append(f"    Example: {opp.example}")
                report.append("")

        if result.progressive_enhancements:
            report.append(f"PROGRESSIVE ENHANCEMENTS ({len(result.progressive_enhancements)}):")
            report.append("-" * 80)
            for enh in result.progressive_enhancements:
                report.append(f"  {enh.feature}: {enh.fallback} -> {enh.enhancement}")
                for line in enh.example.splitlines():
                    report.append(f"    {line}")
                report.append("")

        summary = result.summary
        report.append(
            f"\nSummary: {summary['errors']} errors, {summary['warnings']} warnings, "
            f"{summary['suggestions']} info"
        )
        report.append("=" * 80)
        return "\n".join(report)

    @staticmethod
    def _format_usage(usage: FeatureUsage, browsers: Optional[Sequence[str]]) -> List[str]:
        tier = usage.baseline.value if usage.baseline else "unknown"
        lines = [
            f"  {usage.file}:{usage.line}:{usage.column}  {usage.token} ({usage.feature_id}, {tier})",
            f"    Code: {usage.context}",
        ]
        if usage.suggestion:
            lines.append(f"    Fix: {usage.suggestion}")
        if usage.polyfill:
            lines.append(f"    Polyfill: {usage.polyfill}")
        if usage.alternative:
            lines.append(f"    Alternative: {usage.alternative}")
        shown = browsers if browsers else sorted(usage.browsers)
        versions = [f"{b} {usage.browsers[b]}" for b in shown if b in usage.browsers]
        if versions:
            lines.append(f"    Browsers: {', '.join(versions)}")
        lines.append("")
        return lines

    @staticmethod
    def generate_statistics(result: AnalysisResult) -> Dict[str, Any]:
        """File-type and tier distributions, top features and risk score."""
        usages = result.all_usages
        file_types = Counter(
            (PurePath(u.file).suffix.lstrip(".").lower() or "unknown") for u in usages
        )
        tiers = Counter((u.baseline.value if u.baseline else "unknown") for u in usages)
        frequency = Counter(u.token for u in usages)
        return {
            "fileTypeDistribution": dict(file_types),
            "baselineDistribution": dict(tiers),
            "topFeatures": [
                {"feature": feature, "count": count}
                for feature, count in frequency.most_common(10)
            ],
            "riskScore": risk_score(
                len(result.violations), len(result.warnings), result.total_features
            ),
        }

    @staticmethod
    def generate_json_report(result: AnalysisResult, timestamp: Optional[datetime] = None) -> str:
        """Generate a machine-readable JSON report."""
        timestamp = timestamp or datetime.now(timezone.utc)
        data = result.to_dict()
        report = {
            "meta": {
                "version": __version__,
                "timestamp": timestamp.isoformat(),
                "tool": TOOL_NAME,
            },
            "summary": {
                "totalFiles": result.total_files,
                "filesScanned": result.files_scanned,
                "totalFeatures": result.total_features,
                "compatibilityScore": result.compatibility_score,
                "counts": {
                    "errors": len(result.violations),
                    "warnings": len(result.warnings),
                    "suggestions": len(result.suggestions),
                },
            },
            "violations": data["violations"],
            "warnings": data["warnings"],
            "suggestions": data["suggestions"],
            "exempted": data["exempted"],
            "modernizationOpportunities": data["modernizationOpportunities"],
            "progressiveEnhancements": data["progressiveEnhancements"],
            "statistics": ReportGenerator.generate_statistics(result),
        }
        return json.dumps(report, indent=2)

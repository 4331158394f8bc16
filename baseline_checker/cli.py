"""
Baseline checker CLI

Usage:
    baseline-checker analyze src/ --target newly-available --format json -o report.json
    baseline-checker ci . --fail-on-warning
    baseline-checker check container-queries
    baseline-checker init --force
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import CONFIG_FILENAMES, BaselineConfig, load_config, write_default_config
from .errors import BaselineCheckerError
from .main_checker import BaselineChecker
from .registry import load_registry
from .reporter import ReportGenerator
from .usage import AnalysisResult, BaselineTier

logger = logging.getLogger(__name__)

TARGETS = [tier.value for tier in BaselineTier]


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", nargs="?", default=".", help="Project directory or file (default: .)")
    parser.add_argument("-c", "--config", help="Configuration file path")
    parser.add_argument("-t", "--target", choices=TARGETS, help="Minimum acceptable Baseline tier")
    parser.add_argument("-o", "--output", help="Write the report to this file")
    parser.add_argument("--ignore", nargs="*", default=[], metavar="GLOB",
                        help="Extra ignore globs, relative to the project path")
    parser.add_argument("-j", "--jobs", type=int, default=1, help="Files analyzed in parallel")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="baseline-checker",
        description="Check web features in CSS and JavaScript against Baseline",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a project and print a report")
    _add_common_options(analyze_parser)
    analyze_parser.add_argument("-f", "--format", choices=["console", "json"], help="Report format")
    analyze_parser.add_argument("--generate-fixes", action="store_true",
                                help="Include progressive enhancement suggestions")

    ci_parser = subparsers.add_parser("ci", help="Analyze and exit non-zero when the policy fails")
    _add_common_options(ci_parser)
    ci_parser.add_argument("--fail-on-warning", action="store_true", help="Fail when warnings are found")
    ci_parser.add_argument("--no-fail-on-error", action="store_true", help="Do not fail on errors")

    check_parser = subparsers.add_parser("check", help="Look up a single feature token")
    check_parser.add_argument("token", help="Feature id, CSS property, at-rule or alias")
    check_parser.add_argument("-t", "--target", choices=TARGETS, help="Minimum acceptable Baseline tier")
    check_parser.add_argument("-c", "--config", help="Configuration file path")

    init_parser = subparsers.add_parser("init", help="Write a default configuration file")
    init_parser.add_argument("-f", "--force", action="store_true", help="Overwrite an existing file")

    return parser


def _load(args: argparse.Namespace, **overrides) -> BaselineConfig:
    overrides["target"] = args.target
    config = load_config(args.config, overrides=overrides)
    if getattr(args, "ignore", None):
        config.ignore_files = config.ignore_files + list(args.ignore)
    return config


def _run_analysis(args: argparse.Namespace, config: BaselineConfig) -> AnalysisResult:
    path = Path(args.path)
    if not path.exists():
        raise FileNotFoundError(f"Path not found: {path}")
    checker = BaselineChecker(config)
    return checker.analyze_project(path, jobs=args.jobs)


def _render(result: AnalysisResult, config: BaselineConfig) -> str:
    if config.report_format == "json":
        return ReportGenerator.generate_json_report(result)
    return ReportGenerator.generate_text_report(result, config.browsers)


def _emit(report: str, output_file: Optional[str]) -> None:
    if output_file:
        Path(output_file).write_text(report + "\n", encoding="utf-8")
        print(f"Report written to {output_file}")
    else:
        print(report)


def cmd_analyze(args: argparse.Namespace) -> int:
    config = _load(
        args,
        report_format=args.format,
        output_file=args.output,
        generate_fixes=True if args.generate_fixes else None,
    )
    result = _run_analysis(args, config)
    _emit(_render(result, config), config.output_file)
    return 0


def cmd_ci(args: argparse.Namespace) -> int:
    config = _load(args, output_file=args.output)
    config.report_format = "json"
    result = _run_analysis(args, config)
    _emit(_render(result, config), config.output_file)

    failed = False
    if result.violations and not args.no_fail_on_error:
        print(f"Baseline check failed: {len(result.violations)} errors", file=sys.stderr)
        failed = True
    if result.warnings and args.fail_on_warning:
        print(f"Baseline check failed: {len(result.warnings)} warnings", file=sys.stderr)
        failed = True
    return 1 if failed else 0


def cmd_check(args: argparse.Namespace) -> int:
    config = load_config(args.config, overrides={"target": args.target})
    registry = load_registry(config.dataset)
    check = registry.check_feature(args.token, config.target)
    print(json.dumps(check.to_dict(), indent=2))
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    path = write_default_config(Path(CONFIG_FILENAMES[0]), force=args.force)
    print(f"Created {path}")
    return 0


COMMANDS = {
    "analyze": cmd_analyze,
    "ci": cmd_ci,
    "check": cmd_check,
    "init": cmd_init,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        return COMMANDS[args.command](args)
    except (BaselineCheckerError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

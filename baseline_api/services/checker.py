"""Checker service: wraps baseline_checker for use by the API."""

from pathlib import Path
from typing import List, Optional, Sequence

from baseline_checker import (
    AnalysisResult,
    BaselineChecker,
    BaselineConfig,
    BaselineTier,
    FeatureCheck,
    load_config,
    load_registry,
)
from baseline_checker.utils import discover_files


class CheckerService:
    """Builds a configured BaselineChecker per request."""

    def config_for(
        self,
        target: Optional[BaselineTier] = None,
        exceptions: Optional[List[str]] = None,
        generate_fixes: bool = False,
    ) -> BaselineConfig:
        """Server configuration with per-request overrides applied."""
        return load_config(
            overrides={
                "target": target,
                "exceptions": exceptions,
                "generate_fixes": generate_fixes or None,
            }
        )

    def check_feature(self, token: str, target: Optional[BaselineTier] = None) -> FeatureCheck:
        config = self.config_for(target)
        return load_registry(config.dataset).check_feature(token, config.target)

    def analyze_code(self, code: str, filename: str, config: BaselineConfig) -> AnalysisResult:
        """Analyze an in-memory snippet; ``filename`` only selects the extractor."""
        checker = BaselineChecker(config)
        return checker.analyze_sources([(filename, code)])

    def analyze_files(self, file_paths: Sequence[Path], config: BaselineConfig) -> AnalysisResult:
        return BaselineChecker(config).analyze(file_paths)

    def analyze_folder(self, folder_path: Path, config: BaselineConfig) -> AnalysisResult:
        """Analyze every supported source file under a folder."""
        source_files = discover_files(folder_path, config.ignore_files)
        return self.analyze_files(source_files, config)

"""
Main checker class that coordinates extractors over a set of files.
"""

import concurrent.futures
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Type, Union

from .aggregator import aggregate
from .checker_base import BaseExtractor
from .config import BaselineConfig
from .extractors import CSSExtractor, ScriptExtractor
from .registry import FeatureRegistry, load_registry
from .usage import AnalysisResult, FeatureUsage
from .utils import detect_file_kind, discover_files

logger = logging.getLogger(__name__)


class BaselineChecker:
    """Runs the matching extractor over each file and aggregates the results.

    The registry is shared read-only; each file gets a fresh extractor
    instance, so files can be analyzed on a worker pool.
    """

    def __init__(
        self,
        config: Optional[BaselineConfig] = None,
        registry: Optional[FeatureRegistry] = None,
        script_extractor_cls: Type[BaseExtractor] = ScriptExtractor,
    ):
        self.config = config or BaselineConfig()
        self.registry = registry or load_registry(self.config.dataset)
        self.extractors: Dict[str, Type[BaseExtractor]] = {
            'css': CSSExtractor,
            'javascript': script_extractor_cls,
        }

    def check_source(self, text: str, file_path: Union[str, Path]) -> List[FeatureUsage]:
        """Extract usages from in-memory source; the extension picks the extractor.

        An extractor failure is logged and the file contributes no usages.
        """
        kind = detect_file_kind(Path(file_path))
        if kind is None:
            return []
        extractor = self.extractors[kind](self.registry, self.config.target)
        try:
            return extractor.extract(text, file_path)
        except Exception as e:
            logger.warning("Could not analyze %s: %s: %s", file_path, type(e).__name__, e)
            return []

    def check_file(self, file_path: Union[str, Path]) -> List[FeatureUsage]:
        """Extract usages from a file. Unreadable files yield no usages."""
        file_path = Path(file_path)
        try:
            with open(file_path, 'r', encoding='utf-8', errors='ignore') as f:
                content = f.read()
        except OSError as e:
            logger.warning("Could not read %s: %s", file_path, e)
            return []
        return self.check_source(content, file_path)

    def check_files(
        self,
        file_paths: Sequence[Union[str, Path]],
        jobs: int = 1,
        executor_cls: Optional[Type[concurrent.futures.Executor]] = None,
    ) -> Dict[Path, List[FeatureUsage]]:
        """Check multiple files, in parallel when ``jobs > 1``.

        Args:
            file_paths: Files to analyze
            jobs: Worker count; 1 runs sequentially
            executor_cls: Executor used for parallel runs (default: threads)

        Returns:
            Dictionary mapping file path to its usages, ordered by path
        """
        paths = sorted(Path(p) for p in file_paths)
        usages_by_index: List[List[FeatureUsage]] = [[] for _ in paths]

        if jobs <= 1 or len(paths) <= 1:
            for idx, path in enumerate(paths):
                usages_by_index[idx] = self.check_file(path)
        else:
            executor_cls = executor_cls or concurrent.futures.ThreadPoolExecutor
            with executor_cls(max_workers=jobs) as executor:
                future_to_index = {
                    executor.submit(self.check_file, path): idx
                    for idx, path in enumerate(paths)
                }
                for fut in concurrent.futures.as_completed(future_to_index):
                    usages_by_index[future_to_index[fut]] = fut.result()

        return dict(zip(paths, usages_by_index))

    def analyze(
        self,
        file_paths: Sequence[Union[str, Path]],
        jobs: int = 1,
        executor_cls: Optional[Type[concurrent.futures.Executor]] = None,
    ) -> AnalysisResult:
        """Check ``file_paths`` and reduce them into one result."""
        results = self.check_files(file_paths, jobs=jobs, executor_cls=executor_cls)
        return aggregate(
            ((str(path), usages) for path, usages in results.items()),
            files_scanned=len(results),
            exceptions=self.config.exceptions,
            generate_fixes=self.config.generate_fixes,
        )

    def analyze_sources(self, sources: Sequence[Tuple[str, str]]) -> AnalysisResult:
        """Analyze in-memory ``(file_name, text)`` pairs."""
        per_file = [(name, self.check_source(text, name)) for name, text in sorted(sources)]
        return aggregate(
            per_file,
            files_scanned=len(per_file),
            exceptions=self.config.exceptions,
            generate_fixes=self.config.generate_fixes,
        )

    def analyze_project(
        self,
        root: Union[str, Path],
        jobs: int = 1,
        executor_cls: Optional[Type[concurrent.futures.Executor]] = None,
    ) -> AnalysisResult:
        """Discover source files under ``root`` and analyze them."""
        files = discover_files(Path(root), self.config.ignore_files)
        logger.info("Analyzing %d files under %s", len(files), root)
        return self.analyze(files, jobs=jobs, executor_cls=executor_cls)

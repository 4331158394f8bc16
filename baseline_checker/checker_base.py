"""
Base extractor class for web feature detection.
"""

from pathlib import Path
from typing import Hashable, List, Optional, Set, Tuple, Union

from .hints import alternative_for, polyfill_for
from .registry import FeatureRegistry
from .usage import BaselineTier, FeatureUsage, determine_severity
from .utils import truncate_context


class BaseExtractor:
    """Base class for all extractors.

    Subclasses implement ``_run_extraction`` and report candidate tokens via
    ``_add_usage``. An instance holds per-file state, so use one instance per
    file when extracting concurrently.
    """

    def __init__(
        self,
        registry: FeatureRegistry,
        target: Union[BaselineTier, str] = BaselineTier.WIDELY_AVAILABLE,
    ):
        self.registry = registry
        self.target = BaselineTier(target)
        self.usages: List[FeatureUsage] = []
        self.file_path: Optional[str] = None
        self.text: str = ""
        self.lines: List[str] = []
        self._seen: Set[Tuple[Hashable, str]] = set()

    def extract(self, text: str, file_path: Union[str, Path]) -> List[FeatureUsage]:
        """Run extraction on the given source text."""
        self.file_path = str(file_path)
        self.text = text
        self.lines = text.split("\n")
        self.usages = []
        self._seen = set()
        self._run_extraction()
        return self.usages

    def _run_extraction(self):
        """Override in subclasses to implement extraction."""
        pass

    def _add_usage(
        self,
        token: str,
        line: int,
        column: int,
        context: str,
        scope: Hashable,
    ) -> Optional[FeatureUsage]:
        """Resolve ``token`` and record a usage, once per (scope, feature).

        Tokens the registry does not know are dropped.
        """
        check = self.registry.check_feature(token, self.target)
        if check.baseline is None or check.feature_id is None:
            return None
        key = (scope, check.feature_id)
        if key in self._seen:
            return None
        self._seen.add(key)
        usage = FeatureUsage(
            token=token,
            feature_id=check.feature_id,
            file=self.file_path or "",
            line=line,
            column=column,
            context=truncate_context(context),
            baseline=check.baseline,
            browsers=check.browsers,
            severity=determine_severity(check.baseline, check.meets_criteria),
            suggestion=check.suggestion,
            polyfill=polyfill_for(check.feature_id),
            alternative=alternative_for(check.feature_id),
        )
        self.usages.append(usage)
        return usage

"""Utility functions for the API."""

from pathlib import Path
from typing import List, Optional, Tuple

from fastapi import HTTPException

from baseline_checker import AnalysisResult, BaselineConfig, BaselineTier, ConfigError, FeatureCheck
from baseline_checker.utils import detect_file_kind

from .schemas import AnalyzeRequest
from .services import CheckerService

checker_svc = CheckerService()


def _absolute(raw: str, field: str) -> Path:
    p = Path(raw)
    if not p.is_absolute():
        raise HTTPException(400, f"{field} must be absolute")
    if not p.exists():
        raise HTTPException(404, f"Path not found: {raw}")
    return p


def lookup_feature(token: str, target: Optional[BaselineTier]) -> FeatureCheck:
    """Point lookup; a bad environment target is a 400."""
    try:
        return checker_svc.check_feature(token, target)
    except ConfigError as e:
        raise HTTPException(400, str(e))


def run_analysis(req: AnalyzeRequest) -> Tuple[AnalysisResult, BaselineConfig, Optional[str]]:
    """Run the checker. Returns (result, config, code); code is set for inline snippets."""
    try:
        config = checker_svc.config_for(req.target, req.exceptions, req.generate_fixes)
    except ConfigError as e:
        raise HTTPException(400, str(e))

    if req.code is not None:
        if not req.filename:
            raise HTTPException(400, "filename is required with code")
        if detect_file_kind(Path(req.filename)) is None:
            raise HTTPException(400, f"Unsupported file type: {req.filename}")
        return checker_svc.analyze_code(req.code, req.filename, config), config, req.code
    if req.file_paths:
        paths: List[Path] = [_absolute(fp, "file_paths entries") for fp in req.file_paths]
        return checker_svc.analyze_files(paths, config), config, None
    if req.folder_path:
        folder = _absolute(req.folder_path, "folder_path")
        if not folder.is_dir():
            raise HTTPException(400, f"Not a directory: {req.folder_path}")
        return checker_svc.analyze_folder(folder, config), config, None
    raise HTTPException(
        400,
        "Provide either (code + filename), file_paths, or folder_path.",
    )

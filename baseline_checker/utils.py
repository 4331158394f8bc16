"""
Utility functions for the baseline compatibility checker.
"""

import fnmatch
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

STYLE_EXTENSIONS = {'.css', '.scss', '.sass', '.less'}
SCRIPT_EXTENSIONS = {'.js', '.jsx', '.ts', '.tsx'}
SOURCE_EXTENSIONS = STYLE_EXTENSIONS | SCRIPT_EXTENSIONS

# Directories never descended into during discovery
EXCLUDE_DIRS = {
    '.git', '.svn', '.hg', 'node_modules', 'dist', 'build', 'coverage',
    '.next', '.cache', '__pycache__', '.venv', 'venv', '.idea', '.vscode',
}

DEFAULT_IGNORE = (
    'node_modules/**',
    'dist/**',
    'build/**',
    'coverage/**',
    '**/*.min.js',
    '**/*.min.css',
)

CONTEXT_LIMIT = 100


def detect_file_kind(file_path: Path) -> Optional[str]:
    """Return 'css', 'javascript' or None from the file extension."""
    ext = Path(file_path).suffix.lower()
    if ext in STYLE_EXTENSIONS:
        return 'css'
    if ext in SCRIPT_EXTENSIONS:
        return 'javascript'
    return None


def is_comment(line: str) -> bool:
    """Check if a script line is a comment."""
    stripped = line.strip()
    return stripped.startswith(('//', '/*', '*'))


def truncate_context(text: str, limit: int = CONTEXT_LIMIT) -> str:
    text = ' '.join(text.split())
    if len(text) > limit:
        return text[:limit] + '...'
    return text


def is_ignored(relative: str, patterns: Iterable[str]) -> bool:
    """True if a POSIX-style relative path matches any ignore glob.

    A leading ``**/`` also matches files at the root.
    """
    for pattern in patterns:
        if fnmatch.fnmatch(relative, pattern):
            return True
        if pattern.startswith('**/') and fnmatch.fnmatch(relative, pattern[3:]):
            return True
    return False


def discover_files(root: Path, ignore: Sequence[str] = DEFAULT_IGNORE) -> List[Path]:
    """Find analyzable source files under ``root``, sorted by path.

    A file path is returned as-is when ``root`` is itself a supported file.
    """
    root = Path(root).resolve()
    if root.is_file():
        return [root] if detect_file_kind(root) else []

    source_files: List[Path] = []
    for file_path in root.rglob('*'):
        if not file_path.is_file():
            continue
        relative = file_path.relative_to(root)
        if any(part in EXCLUDE_DIRS for part in relative.parts[:-1]):
            continue
        if file_path.suffix.lower() not in SOURCE_EXTENSIONS:
            continue
        if is_ignored(relative.as_posix(), ignore):
            continue
        source_files.append(file_path)

    return sorted(source_files)
